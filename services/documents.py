"""Persistence of documents and their line items."""

from datetime import date, datetime

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from models.document import Document, LineItem
from models.enums import DocumentType
from schemas.document import DocumentPayload, LineItemPayload
from services.company import get_company_settings
from services.errors import NotFoundError, StorageError, ValidationError
from services.numbering import increment_counter, preview_document_number
from services.totals import compute_totals, line_amount, to_decimal


def validate_payload(payload: DocumentPayload) -> None:
    if not payload.client_name or not payload.client_name.strip():
        raise ValidationError("Client name is required")


def _apply_header(document: Document, payload: DocumentPayload) -> None:
    """Copy header and client fields, then recompute totals from the items."""
    document.document_type = payload.document_type
    if payload.document_number:
        document.document_number = payload.document_number
    document.document_date = payload.document_date
    document.due_date = payload.due_date
    document.status = payload.status
    document.client_name = payload.client_name.strip()
    document.client_email = payload.client_email
    document.client_address = payload.client_address
    document.client_tax_number = payload.client_tax_number
    document.client_pan_number = payload.client_pan_number
    if payload.currency:
        document.currency = payload.currency.upper()
    if payload.tax_enabled is not None:
        document.tax_enabled = payload.tax_enabled
    if payload.tax_rate is not None:
        document.tax_rate = to_decimal(payload.tax_rate)
    document.payment_terms = payload.payment_terms
    document.notes = payload.notes

    totals = compute_totals(payload.items, document.tax_enabled, document.tax_rate)
    document.subtotal = totals.subtotal
    document.tax_amount = totals.tax_amount
    document.total = totals.total
    document.updated_at = datetime.utcnow()


def _build_line_items(document_id: str, items: list[LineItemPayload]) -> list[LineItem]:
    return [
        LineItem(
            document_id=document_id,
            description=item.description,
            unit=item.unit or "item",
            quantity=to_decimal(item.quantity),
            rate=to_decimal(item.rate),
            amount=line_amount(item.quantity, item.rate),
            sort_order=index,
        )
        for index, item in enumerate(items)
    ]


def _delete_line_items(session: Session, document_id: str) -> None:
    items = session.exec(select(LineItem).where(LineItem.document_id == document_id)).all()
    for item in items:
        session.delete(item)


def replace_line_items(session: Session, document: Document, items: list[LineItemPayload]) -> None:
    """
    Swap the whole line-item collection of a document.

    Runs inside the caller's transaction: the delete only becomes visible
    together with the new rows.
    """
    _delete_line_items(session, document.id)
    session.flush()
    for line_item in _build_line_items(document.id, items):
        session.add(line_item)


def create_document(session: Session, payload: DocumentPayload) -> Document:
    """Persist a new document, advance its type's counter, store its items."""
    validate_payload(payload)
    company = get_company_settings(session)
    if payload.payment_terms is None:
        payload = payload.model_copy(update={"payment_terms": company.default_payment_terms})

    document = Document(
        document_number=payload.document_number
        or preview_document_number(company, payload.document_type, date.today()),
        client_name=payload.client_name,
        currency=company.currency,
        tax_enabled=company.tax_enabled,
        tax_rate=company.tax_rate,
    )
    _apply_header(document, payload)

    try:
        session.add(document)
        session.flush()

        increment_counter(company, payload.document_type)
        company.updated_at = datetime.utcnow()
        session.add(company)
        session.flush()

        for line_item in _build_line_items(document.id, payload.items):
            session.add(line_item)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error creating {payload.document_type.value}: {e}")
        raise StorageError("Failed to save document") from e

    session.refresh(document)
    logger.info(f"Created {document.document_type.value} {document.document_number}")
    return document


def update_document(session: Session, document_id: str, payload: DocumentPayload) -> Document:
    """Write header fields and replace the line items. Counters stay untouched."""
    validate_payload(payload)
    document = get_document(session, document_id)
    _apply_header(document, payload)

    try:
        session.add(document)
        replace_line_items(session, document, payload.items)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error updating document {document_id}: {e}")
        raise StorageError("Failed to save document") from e

    session.refresh(document)
    logger.debug(f"Saved {document.document_type.value} {document.document_number}")
    return document


def get_document(session: Session, document_id: str) -> Document:
    document = session.get(Document, document_id)
    if not document:
        raise NotFoundError("Document not found")
    return document


def delete_document(session: Session, document_id: str) -> None:
    """Delete the line items first, then the document itself."""
    document = get_document(session, document_id)
    try:
        _delete_line_items(session, document.id)
        session.flush()
        session.delete(document)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error deleting document {document_id}: {e}")
        raise StorageError("Failed to delete document") from e
    logger.info(f"Deleted {document.document_type.value} {document.document_number}")


def list_documents(session: Session) -> dict[DocumentType, list[Document]]:
    """All documents, newest first, grouped by type."""
    documents = session.exec(select(Document).order_by(Document.created_at.desc())).all()
    grouped: dict[DocumentType, list[Document]] = {kind: [] for kind in DocumentType}
    for document in documents:
        grouped[DocumentType(document.document_type)].append(document)
    return grouped
