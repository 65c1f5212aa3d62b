"""Pydantic schemas for Document API endpoints."""

from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal

from models.enums import DocumentType, DocumentStatus


class LineItemPayload(BaseModel):
    """One line as entered in the form; the amount is always recomputed."""
    description: str = ""
    unit: str = Field("item", max_length=50)
    quantity: Decimal = Field(Decimal("1"), ge=0)
    rate: Decimal = Field(Decimal("0"), ge=0)


class DocumentPayload(BaseModel):
    """Full document state sent on create and on save."""
    document_type: DocumentType = DocumentType.INVOICE
    document_number: str | None = Field(None, max_length=50)
    document_date: date = Field(default_factory=date.today)
    due_date: date | None = None
    status: DocumentStatus = DocumentStatus.DRAFT

    client_name: str = ""
    client_email: str | None = None
    client_address: str | None = None
    client_tax_number: str | None = Field(None, max_length=50)
    client_pan_number: str | None = Field(None, max_length=50)

    currency: str | None = Field(None, max_length=3)
    tax_enabled: bool | None = None
    tax_rate: Decimal | None = Field(None, ge=0, le=100)
    payment_terms: str | None = None
    notes: str | None = None

    items: list[LineItemPayload] = Field(default_factory=lambda: [LineItemPayload()])


class LineItemResponse(BaseModel):
    id: str
    description: str
    unit: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal
    sort_order: int

    model_config = {"from_attributes": True}


class DocumentSummary(BaseModel):
    """Card shown in the list view."""
    id: str
    document_type: DocumentType
    document_number: str
    document_date: date
    client_name: str
    status: DocumentStatus
    currency: str
    total: Decimal

    model_config = {"from_attributes": True}


class DocumentResponse(DocumentSummary):
    due_date: date | None
    client_email: str | None
    client_address: str | None
    client_tax_number: str | None
    client_pan_number: str | None
    tax_enabled: bool
    tax_rate: Decimal
    subtotal: Decimal
    tax_amount: Decimal
    payment_terms: str | None
    notes: str | None
    items: list[LineItemResponse]
    created_at: datetime
    updated_at: datetime


class DocumentListResponse(BaseModel):
    """Stored documents partitioned by type, newest first."""
    invoices: list[DocumentSummary]
    quotes: list[DocumentSummary]
    proformas: list[DocumentSummary]
    total: int


class NextNumberResponse(BaseModel):
    document_type: DocumentType
    document_number: str
