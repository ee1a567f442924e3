"""Error hierarchy for solrbridge.

Error layers:
- SolrBridgeError: Base class for all solrbridge errors
- DomainError: Caller mistakes and bad persisted state (4xx responses)
- InfrastructureError: Solr or database failures (503 responses)

Sync failures are absorbed by IndexChangeHook after dirty bookkeeping.
Query failures propagate to the caller of the search API.
"""


class SolrBridgeError(Exception):
    """Base class for all solrbridge errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(SolrBridgeError):
    """Base class for domain errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class UnknownIndexError(NotFoundError):
    """The named index is not part of the active configuration."""

    def __init__(self, index_name: str, available: list[str] | None = None) -> None:
        self.index_name = index_name
        self.available = available or []
        super().__init__(
            f"Index '{index_name}' is not configured. Available: {self.available}",
            code="UNKNOWN_INDEX",
        )


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class MalformedDirtyRecordError(DomainError):
    """A persisted dirty ID list could not be parsed."""

    def __init__(self, class_name: str, type: str, raw: str | None) -> None:
        self.class_name = class_name
        self.type = type
        self.raw = raw
        super().__init__(f"Malformed dirty ID list for {class_name}/{type}: {raw!r}")


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(SolrBridgeError):
    """Base class for infrastructure/system errors."""


class ExternalServiceError(InfrastructureError):
    """An external service failed or is unavailable."""


class RemoteSyncError(ExternalServiceError):
    """Solr rejected or failed to process an update."""

    def __init__(self, core: str, message: str) -> None:
        self.core = core
        super().__init__(f"Update on core '{core}' failed: {message}")


class RemoteQueryError(ExternalServiceError):
    """Solr rejected or failed a select request."""

    def __init__(self, core: str, message: str) -> None:
        self.core = core
        super().__init__(f"Query on core '{core}' failed: {message}")


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
