from .exceptions import *
from .base_client import BaseClient
from .utils import *

__all__ = [
    "BaseClient",
    "KubePulseException",
    "FetchException",
    "EmptyTableException",
    "UnexpectedResponseException",
    "SchemaDriftException",
    "PermissionDeniedException",
    "MissingKindException",
    "ClientConnectionException",
    "ConfigurationException",
    "is_transient",
    "retry_with_backoff",
    "setup_logging",
]
