"""
Server-held form state for one document.

A `DocumentEditor` is what the form screen edits: header fields, a client
snapshot and an ordered list of line items. Totals are derived on every read.
Editors bound to an existing document auto-save through an
`AutoSaveScheduler`; new ones only persist on an explicit `save()`.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional

from loguru import logger
from sqlmodel import Session

from models.client import Client
from models.document import Document, LineItem
from models.enums import DocumentStatus, DocumentType
from models.settings import CompanySettings
from schemas.document import DocumentPayload, LineItemPayload
from services.autosave import AutoSaveScheduler, PendingSave
from services.company import available_units, get_company_settings
from services.documents import create_document, get_document, update_document, validate_payload
from services.errors import NotFoundError, ValidationError
from services.numbering import preview_document_number
from services.totals import Totals, compute_totals, line_amount, to_decimal

HEADER_FIELDS = (
    "document_number",
    "document_date",
    "due_date",
    "status",
    "client_name",
    "client_email",
    "client_address",
    "client_tax_number",
    "client_pan_number",
    "currency",
    "tax_enabled",
    "tax_rate",
    "payment_terms",
    "notes",
)

LINE_FIELDS = ("description", "unit", "quantity", "rate")

# Header fields the form may clear
NULLABLE_FIELDS = (
    "due_date",
    "client_email",
    "client_address",
    "client_tax_number",
    "client_pan_number",
    "payment_terms",
    "notes",
)


@dataclass
class EditorLine:
    description: str = ""
    unit: str = "item"
    quantity: Decimal = Decimal("1")
    rate: Decimal = Decimal("0")

    @property
    def amount(self) -> Decimal:
        return line_amount(self.quantity, self.rate)


@dataclass
class EditorFields:
    document_type: DocumentType = DocumentType.INVOICE
    document_number: str = ""
    document_date: date = field(default_factory=date.today)
    due_date: Optional[date] = None
    status: DocumentStatus = DocumentStatus.DRAFT
    client_name: str = ""
    client_email: Optional[str] = None
    client_address: Optional[str] = None
    client_tax_number: Optional[str] = None
    client_pan_number: Optional[str] = None
    currency: str = "USD"
    tax_enabled: bool = True
    tax_rate: Decimal = Decimal("10")
    payment_terms: Optional[str] = None
    notes: Optional[str] = None


class DocumentEditor:
    def __init__(
        self,
        company: CompanySettings,
        session_factory: Callable[[], Session],
        document: Document | None = None,
        document_type: DocumentType = DocumentType.INVOICE,
        autosave_delay: float | None = None,
        autosave_max_attempts: int | None = None,
        autosave_retry_wait=None,
    ):
        self.id = str(uuid.uuid4())
        self.company = company
        self._session_factory = session_factory
        self._lock = threading.RLock()
        self.has_changes = False

        if document is None:
            self.document_id: Optional[str] = None
            self.fields = EditorFields(
                document_type=DocumentType(document_type),
                currency=company.currency or "USD",
                tax_enabled=company.tax_enabled,
                tax_rate=to_decimal(company.tax_rate),
                payment_terms=company.default_payment_terms,
            )
            self.fields.document_number = preview_document_number(company, self.fields.document_type)
            self.lines = [EditorLine()]
        else:
            self.document_id = document.id
            self.fields = EditorFields(
                document_type=DocumentType(document.document_type),
                document_number=document.document_number,
                document_date=document.document_date,
                due_date=document.due_date,
                status=DocumentStatus(document.status),
                client_name=document.client_name,
                client_email=document.client_email,
                client_address=document.client_address,
                client_tax_number=document.client_tax_number,
                client_pan_number=document.client_pan_number,
                currency=document.currency,
                tax_enabled=document.tax_enabled,
                tax_rate=to_decimal(document.tax_rate),
                payment_terms=document.payment_terms,
                notes=document.notes,
            )
            self.lines = [
                EditorLine(
                    description=item.description,
                    unit=item.unit or "item",
                    quantity=to_decimal(item.quantity),
                    rate=to_decimal(item.rate),
                )
                for item in sorted(document.items, key=lambda item: item.sort_order)
            ] or [EditorLine()]

        self.autosave = AutoSaveScheduler(
            build_pending=self.pending_save,
            persist=self._persist_pending,
            delay=autosave_delay,
            max_attempts=autosave_max_attempts,
            retry_wait=autosave_retry_wait,
        )

    @property
    def is_new(self) -> bool:
        return self.document_id is None

    @property
    def totals(self) -> Totals:
        with self._lock:
            return compute_totals(self.lines, self.fields.tax_enabled, self.fields.tax_rate)

    @property
    def units(self) -> list[str]:
        return available_units(self.company)

    def _changed(self) -> None:
        self.has_changes = True
        if self.document_id is not None:
            self.autosave.schedule()

    def update(self, changes: dict[str, Any]) -> None:
        """Apply header/client field changes from the form."""
        for name, value in changes.items():
            if name != "document_type" and name not in HEADER_FIELDS:
                raise ValidationError(f"Unknown field: {name}")
            if value is None and name not in NULLABLE_FIELDS:
                raise ValidationError(f"{name} cannot be empty")

        with self._lock:
            for name, value in changes.items():
                if name == "document_type":
                    self.fields.document_type = DocumentType(value)
                    # Only unsaved documents follow the counter of their type
                    if self.is_new:
                        self.fields.document_number = preview_document_number(
                            self.company, self.fields.document_type
                        )
                elif name == "tax_rate":
                    self.fields.tax_rate = to_decimal(value)
                elif name == "status":
                    self.fields.status = DocumentStatus(value)
                elif name == "currency":
                    self.fields.currency = value.strip().upper()
                else:
                    setattr(self.fields, name, value)
            self._changed()

    def select_client(self, client: Client) -> None:
        """Copy an address-book entry into the client fields."""
        with self._lock:
            self.fields.client_name = client.name
            self.fields.client_email = client.email or ""
            self.fields.client_address = client.address or ""
            self.fields.client_tax_number = client.tax_number or ""
            self.fields.client_pan_number = client.pan_number or ""
            self._changed()

    def add_line_item(self) -> int:
        with self._lock:
            self.lines.append(EditorLine())
            self._changed()
            return len(self.lines) - 1

    def update_line_item(self, index: int, changes: dict[str, Any]) -> EditorLine:
        with self._lock:
            line = self._line(index)
            cleaned = {}
            for name, value in changes.items():
                if name not in LINE_FIELDS:
                    raise ValidationError(f"Unknown line item field: {name}")
                if name == "unit":
                    value = (value or "item").lower()
                    if value not in self.units:
                        raise ValidationError(f"Unknown unit: {value}")
                elif value is None:
                    raise ValidationError(f"{name.capitalize()} cannot be empty")
                elif name in ("quantity", "rate"):
                    value = to_decimal(value)
                    if value < 0:
                        raise ValidationError(f"{name.capitalize()} cannot be negative")
                cleaned[name] = value
            for name, value in cleaned.items():
                setattr(line, name, value)
            self._changed()
            return line

    def remove_line_item(self, index: int) -> None:
        with self._lock:
            self._line(index)
            if len(self.lines) <= 1:
                raise ValidationError("At least one line item is required")
            del self.lines[index]
            self._changed()

    def _line(self, index: int) -> EditorLine:
        if index < 0 or index >= len(self.lines):
            raise NotFoundError("Line item not found")
        return self.lines[index]

    def to_payload(self) -> DocumentPayload:
        with self._lock:
            f = self.fields
            return DocumentPayload(
                document_type=f.document_type,
                document_number=f.document_number or None,
                document_date=f.document_date,
                due_date=f.due_date,
                status=f.status,
                client_name=f.client_name or "",
                client_email=f.client_email,
                client_address=f.client_address,
                client_tax_number=f.client_tax_number,
                client_pan_number=f.client_pan_number,
                currency=f.currency,
                tax_enabled=f.tax_enabled,
                tax_rate=f.tax_rate,
                payment_terms=f.payment_terms,
                notes=f.notes,
                items=[
                    LineItemPayload(
                        description=line.description,
                        unit=line.unit,
                        quantity=line.quantity,
                        rate=line.rate,
                    )
                    for line in self.lines
                ],
            )

    def pending_save(self) -> Optional[PendingSave]:
        """Snapshot for the auto-save, or None when there is nothing to write."""
        with self._lock:
            if self.document_id is None or not (self.fields.client_name or "").strip():
                return None
            return PendingSave(document_id=self.document_id, payload=self.to_payload())

    def _persist_pending(self, pending: PendingSave) -> None:
        with self._session_factory() as session:
            update_document(session, pending.document_id, pending.payload)
        with self._lock:
            self.has_changes = False

    def save(self, session: Session) -> Document:
        """Explicit save: creates on first call, updates afterwards."""
        payload = self.to_payload()
        validate_payload(payload)
        self.autosave.cancel()
        with self._lock:
            if self.document_id is None:
                document = create_document(session, payload)
                self.document_id = document.id
                self.fields.document_number = document.document_number
                # The counter moved; later previews must see it
                self.company = get_company_settings(session)
            else:
                document = update_document(session, self.document_id, payload)
            self.has_changes = False
        return document

    def preview_document(self) -> tuple[Document, list[LineItem]]:
        """Unsaved Document and LineItem objects carrying the current state."""
        with self._lock:
            f = self.fields
            totals = self.totals
            document = Document(
                document_type=f.document_type,
                document_number=f.document_number,
                document_date=f.document_date,
                due_date=f.due_date,
                status=f.status,
                client_name=f.client_name,
                client_email=f.client_email,
                client_address=f.client_address,
                client_tax_number=f.client_tax_number,
                client_pan_number=f.client_pan_number,
                currency=f.currency,
                tax_enabled=f.tax_enabled,
                tax_rate=f.tax_rate,
                subtotal=totals.subtotal,
                tax_amount=totals.tax_amount,
                total=totals.total,
                payment_terms=f.payment_terms,
                notes=f.notes,
            )
            items = [
                LineItem(
                    document_id=document.id,
                    description=line.description,
                    unit=line.unit,
                    quantity=line.quantity,
                    rate=line.rate,
                    amount=line.amount,
                    sort_order=index,
                )
                for index, line in enumerate(self.lines)
            ]
            return document, items

    def close(self) -> None:
        self.autosave.cancel()


class EditorRegistry:
    """Open editors by id. Closing one discards its state."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        autosave_delay: float | None = None,
        autosave_max_attempts: int | None = None,
        autosave_retry_wait=None,
    ):
        self._session_factory = session_factory
        self._autosave = dict(
            autosave_delay=autosave_delay,
            autosave_max_attempts=autosave_max_attempts,
            autosave_retry_wait=autosave_retry_wait,
        )
        self._editors: dict[str, DocumentEditor] = {}
        self._lock = threading.Lock()

    def open(
        self,
        session: Session,
        document_id: str | None = None,
        document_type: DocumentType = DocumentType.INVOICE,
    ) -> DocumentEditor:
        company = get_company_settings(session)
        document = get_document(session, document_id) if document_id else None
        editor = DocumentEditor(
            company,
            self._session_factory,
            document=document,
            document_type=document_type,
            **self._autosave,
        )
        with self._lock:
            self._editors[editor.id] = editor
        logger.debug(f"Opened editor {editor.id} for {document_id or 'new document'}")
        return editor

    def get(self, editor_id: str) -> DocumentEditor:
        with self._lock:
            editor = self._editors.get(editor_id)
        if editor is None:
            raise NotFoundError("Editor not found")
        return editor

    def close(self, editor_id: str) -> None:
        with self._lock:
            editor = self._editors.pop(editor_id, None)
        if editor is None:
            raise NotFoundError("Editor not found")
        editor.close()

    def close_all(self) -> None:
        with self._lock:
            editors = list(self._editors.values())
            self._editors.clear()
        for editor in editors:
            editor.close()
