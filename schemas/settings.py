from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal


class CompanySettingsUpdate(BaseModel):
    """Editable company profile. Number counters are not part of it."""

    company_name: str = Field(..., min_length=1)
    company_email: Optional[str] = None
    company_phone: Optional[str] = None
    company_address: Optional[str] = None
    tax_number: Optional[str] = None
    pan_number: Optional[str] = None

    # Bank Details
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None

    # Preferences
    currency: str = Field("USD", max_length=3)
    tax_enabled: bool = True
    tax_rate: Decimal = Field(Decimal("10"), ge=0, le=100)
    default_payment_terms: Optional[str] = None
    custom_units: list[str] = Field(default_factory=list)
    logo_url: Optional[str] = None


class CompanySettingsSchema(CompanySettingsUpdate):
    """Settings as returned to the client, counters included."""

    id: str
    next_invoice_number: int
    next_quotation_number: int
    next_proforma_number: int

    model_config = {"from_attributes": True}


class UnitCreate(BaseModel):
    label: str


class UnitsResponse(BaseModel):
    """Default units followed by the company's own."""
    default_units: list[str]
    custom_units: list[str]
