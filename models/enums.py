from enum import Enum


class DocumentType(str, Enum):
    """Kinds of billing documents, each with its own number sequence."""
    INVOICE = "invoice"
    QUOTE = "quote"
    PROFORMA = "proforma"


class DocumentStatus(str, Enum):
    """Document lifecycle statuses."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


# Units offered on every line item; company custom units are added on top.
DEFAULT_UNITS = ("item", "shots", "sec", "minute")
