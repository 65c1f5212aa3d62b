"""Sequential document numbers: PREFIX + 4-digit counter + YYMMDD."""

from datetime import date

from models.enums import DocumentType
from models.settings import CompanySettings

PREFIXES = {
    DocumentType.INVOICE: "INV",
    DocumentType.QUOTE: "EQ",
    DocumentType.PROFORMA: "PI",
}

COUNTER_FIELDS = {
    DocumentType.INVOICE: "next_invoice_number",
    DocumentType.QUOTE: "next_quotation_number",
    DocumentType.PROFORMA: "next_proforma_number",
}


def format_document_number(document_type: DocumentType, counter: int, on_date: date) -> str:
    """Build a number such as INV0007250601 for counter 7 on 2025-06-01."""
    prefix = PREFIXES[DocumentType(document_type)]
    return f"{prefix}{str(counter).zfill(4)}{on_date.strftime('%y%m%d')}"


def current_counter(company: CompanySettings, document_type: DocumentType) -> int:
    return getattr(company, COUNTER_FIELDS[DocumentType(document_type)])


def preview_document_number(
    company: CompanySettings,
    document_type: DocumentType,
    on_date: date | None = None,
) -> str:
    """Number the next document of this type would get. Does not reserve it."""
    return format_document_number(
        document_type,
        current_counter(company, document_type),
        on_date or date.today(),
    )


def increment_counter(company: CompanySettings, document_type: DocumentType) -> int:
    """
    Advance the counter of one document type by exactly one.

    Only called when a new document is first persisted. Two creations reading
    the same counter concurrently can still produce the same number.
    """
    field = COUNTER_FIELDS[DocumentType(document_type)]
    value = getattr(company, field) + 1
    setattr(company, field, value)
    return value
