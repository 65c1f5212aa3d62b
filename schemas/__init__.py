"""Schemas package for API request/response models."""

from schemas.client import ClientCreate, ClientUpdate, ClientResponse, ClientListResponse
from schemas.document import (
    LineItemPayload,
    DocumentPayload,
    LineItemResponse,
    DocumentSummary,
    DocumentResponse,
    DocumentListResponse,
    NextNumberResponse,
)
from schemas.settings import CompanySettingsUpdate, CompanySettingsSchema, UnitCreate, UnitsResponse

__all__ = [
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "ClientListResponse",
    "LineItemPayload",
    "DocumentPayload",
    "LineItemResponse",
    "DocumentSummary",
    "DocumentResponse",
    "DocumentListResponse",
    "NextNumberResponse",
    "CompanySettingsUpdate",
    "CompanySettingsSchema",
    "UnitCreate",
    "UnitsResponse",
]
