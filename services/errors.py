"""Domain errors raised by the services and translated by the routers."""


class InvoicerError(Exception):
    """Base class for every error the services raise on purpose."""


class ValidationError(InvoicerError):
    """A required field is missing or a form action is not allowed."""


class NotFoundError(InvoicerError):
    """The requested record does not exist."""


class StorageError(InvoicerError):
    """The data store or file storage failed to complete an operation."""
