
"""Pydantic schemas for Client API endpoints."""

from pydantic import BaseModel, Field
from datetime import datetime


class ClientBase(BaseModel):
    """Base schema for client data."""
    name: str = Field(..., min_length=1, max_length=100)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None)
    tax_number: str | None = Field(None, max_length=50)
    pan_number: str | None = Field(None, max_length=50)


class ClientCreate(ClientBase):
    """Schema for creating a new client."""
    # Inherits fields from ClientBase
    pass


class ClientUpdate(BaseModel):
    """Schema for updating an existing client."""
    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None)
    tax_number: str | None = Field(None, max_length=50)
    pan_number: str | None = Field(None, max_length=50)


class ClientResponse(BaseModel):
    """Schema for client API responses."""
    id: str
    name: str
    email: str | None
    phone: str | None
    address: str | None
    tax_number: str | None
    pan_number: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ClientListResponse(BaseModel):
    """Schema for client list responses."""
    clients: list[ClientResponse]
    total: int
