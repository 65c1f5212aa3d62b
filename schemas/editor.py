"""Pydantic schemas for the document editor endpoints."""

from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal

from models.enums import DocumentType, DocumentStatus
from services.autosave import AutoSaveState


class EditorOpen(BaseModel):
    """Open an editor on an existing document, or on a new one of a given type."""
    document_id: str | None = None
    document_type: DocumentType = DocumentType.INVOICE


class EditorUpdate(BaseModel):
    """Form field changes; only the fields sent are applied."""
    document_type: DocumentType | None = None
    document_number: str | None = Field(None, max_length=50)
    document_date: date | None = None
    due_date: date | None = None
    status: DocumentStatus | None = None
    client_name: str | None = None
    client_email: str | None = None
    client_address: str | None = None
    client_tax_number: str | None = None
    client_pan_number: str | None = None
    currency: str | None = Field(None, max_length=3)
    tax_enabled: bool | None = None
    tax_rate: Decimal | None = Field(None, ge=0, le=100)
    payment_terms: str | None = None
    notes: str | None = None


class ClientSelect(BaseModel):
    client_id: str


class LineItemUpdate(BaseModel):
    description: str | None = None
    unit: str | None = None
    quantity: Decimal | None = Field(None, ge=0)
    rate: Decimal | None = Field(None, ge=0)


class EditorLineResponse(BaseModel):
    description: str
    unit: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal


class AutoSaveStatus(BaseModel):
    state: AutoSaveState
    last_error: str | None
    last_saved_at: datetime | None
    save_count: int


class EditorResponse(BaseModel):
    id: str
    document_id: str | None
    is_new: bool
    has_changes: bool

    document_type: DocumentType
    document_number: str
    document_date: date
    due_date: date | None
    status: DocumentStatus
    client_name: str
    client_email: str | None
    client_address: str | None
    client_tax_number: str | None
    client_pan_number: str | None
    currency: str
    tax_enabled: bool
    tax_rate: Decimal
    payment_terms: str | None
    notes: str | None

    items: list[EditorLineResponse]
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal

    units: list[str]
    autosave: AutoSaveStatus
