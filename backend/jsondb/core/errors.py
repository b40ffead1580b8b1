"""
Domain errors raised by the JSON database services.

Every error carries a human readable message; the tool dispatcher turns
them into the ``"Error: <message>"`` result envelope.
"""


class JsonDbError(Exception):
    """Base class for JSON database errors."""


class ArgumentValidationError(JsonDbError):
    """Raised when tool arguments do not match the declared shape."""


class DatabaseExistsError(JsonDbError):
    """Raised when creating a database whose name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Database already exists: {name}")
        self.name = name


class DocumentNotFoundError(JsonDbError):
    """Raised when no document has the requested identity."""

    def __init__(self, doc_id: str):
        super().__init__(f"Document not found: {doc_id}")
        self.doc_id = doc_id


class UnknownToolError(JsonDbError):
    """Raised when a request names a tool outside the declared set."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class StorageError(JsonDbError):
    """Raised when the underlying document store fails."""
