"""Resource document errors."""


class DocumentError(Exception):
    """Base exception for reading or writing resource documents."""


class MissingDocumentError(DocumentError):
    """Raised when a resource document does not exist."""
