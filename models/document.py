from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from decimal import Decimal
import uuid
from datetime import date, datetime

from models.enums import DocumentType, DocumentStatus


class Document(SQLModel, table=True):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    document_type: DocumentType = Field(default=DocumentType.INVOICE, index=True)
    document_number: str = Field(index=True)
    document_date: date = Field(default_factory=date.today)
    due_date: Optional[date] = Field(default=None)
    status: DocumentStatus = Field(default=DocumentStatus.DRAFT)

    # Client snapshot, copied at selection time
    client_name: str
    client_email: Optional[str] = Field(default=None)
    client_address: Optional[str] = Field(default=None)
    client_tax_number: Optional[str] = Field(default=None)
    client_pan_number: Optional[str] = Field(default=None)

    currency: str = Field(default="USD")
    tax_enabled: bool = Field(default=True)
    tax_rate: Decimal = Field(default=Decimal("0.00"), max_digits=5, decimal_places=2)
    subtotal: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    tax_amount: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    total: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)

    payment_terms: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    items: list["LineItem"] = Relationship(
        back_populates="document",
        sa_relationship_kwargs={"order_by": "LineItem.sort_order"},
    )


class LineItem(SQLModel, table=True):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    document_id: str = Field(foreign_key="document.id", index=True)
    description: str = Field(default="")
    unit: str = Field(default="item")
    quantity: Decimal = Field(default=Decimal("1.00"), max_digits=12, decimal_places=2)
    rate: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    amount: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    sort_order: int = Field(default=0)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    document: Optional[Document] = Relationship(back_populates="items")
