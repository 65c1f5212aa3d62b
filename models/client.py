from sqlmodel import SQLModel, Field
from typing import Optional
import uuid
from datetime import datetime


class Client(SQLModel, table=True):
    """Address book entry. Documents copy these fields in, they never link back."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str = Field(index=True)
    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    address: Optional[str] = Field(default=None)
    tax_number: Optional[str] = Field(default=None)
    pan_number: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
