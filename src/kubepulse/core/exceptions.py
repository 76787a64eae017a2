"""Custom exceptions for kubepulse."""

from typing import Optional, Dict, Any


class KubePulseException(Exception):
    """Base exception for kubepulse."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class FetchException(KubePulseException):
    """Raised when a kind's table could not be retrieved."""

    def __init__(self, kind: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.kind = kind
        super().__init__(f"Fetch failed for {kind}: {message}", details)


class EmptyTableException(FetchException):
    """Raised when a kind's table came back without any rows."""

    def __init__(self, kind: str):
        super().__init__(kind, "no table rows found")


class UnexpectedResponseException(KubePulseException):
    """Raised when the table lister returns something other than a table."""

    def __init__(self, kind: str, received_type: str):
        self.kind = kind
        self.received_type = received_type
        super().__init__(f"Unexpected response for {kind}: expected Table, got {received_type}")


class SchemaDriftException(KubePulseException):
    """Raised in strict mode when a column is missing or has the wrong shape."""

    def __init__(self, kind: str, column: str, value: Any):
        self.kind = kind
        self.column = column
        self.value = value
        super().__init__(f"Column {column!r} drifted for {kind}: got {value!r}")


class PermissionDeniedException(KubePulseException):
    """Raised when the caller may not perform a verb on a resource path."""

    def __init__(self, path: str, verb: str = "delete"):
        self.path = path
        self.verb = verb
        super().__init__(f"user is not authorized to {verb} {path}")


class MissingKindException(KubePulseException):
    """Raised when no resource kind is bound to the current request."""
    pass


class ClientConnectionException(KubePulseException):
    """Raised when client connections fail."""

    def __init__(self, client_type: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.client_type = client_type
        super().__init__(f"{client_type} connection failed: {message}", details)


class ConfigurationException(KubePulseException):
    """Raised when configuration is invalid."""
    pass
