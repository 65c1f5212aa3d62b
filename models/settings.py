from sqlmodel import SQLModel, Field, Column, JSON
from typing import Optional
from decimal import Decimal
import uuid
from datetime import datetime


class CompanySettings(SQLModel, table=True):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    # Company Details
    company_name: str = Field(default="My Company")
    company_address: Optional[str] = Field(default=None)
    company_email: Optional[str] = Field(default=None)
    company_phone: Optional[str] = Field(default=None)
    tax_number: Optional[str] = Field(default=None)
    pan_number: Optional[str] = Field(default=None)
    logo_url: Optional[str] = Field(default=None)

    # Bank Details
    bank_name: Optional[str] = Field(default=None)
    account_number: Optional[str] = Field(default=None)
    ifsc_code: Optional[str] = Field(default=None)

    # Fiscal Settings
    tax_enabled: bool = Field(default=True)
    tax_rate: Decimal = Field(default=Decimal("10.00"), max_digits=5, decimal_places=2)

    # Defaults
    currency: str = Field(default="USD")
    default_payment_terms: Optional[str] = Field(default="Due within 30 days")
    custom_units: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Number sequences, one per document type
    next_invoice_number: int = Field(default=1)
    next_quotation_number: int = Field(default=1)
    next_proforma_number: int = Field(default=1)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
