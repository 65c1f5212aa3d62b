"""Models package for database entities."""

from models.enums import DocumentType, DocumentStatus, DEFAULT_UNITS
from models.client import Client
from models.document import Document, LineItem
from models.settings import CompanySettings

__all__ = [
    "DocumentType",
    "DocumentStatus",
    "DEFAULT_UNITS",
    "Client",
    "Document",
    "LineItem",
    "CompanySettings",
]
