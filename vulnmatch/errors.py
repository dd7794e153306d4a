"""Error types raised by vulnmatch."""

from typing import Optional


class VulnMatchError(Exception):
    """Base class for all vulnmatch errors."""


class ConfigurationError(VulnMatchError):
    """Raised when a client or source is configured with invalid values."""


class DecodeError(VulnMatchError):
    """Raised when a database document is not valid JSON or has the wrong shape."""


class SourceError(VulnMatchError):
    """Raised when a source fails to fetch a document.

    Carries the operation that was running and the document key, so that
    failures from concurrent fetches can be told apart.
    """

    def __init__(
        self,
        operation: str,
        key: str,
        cause: Optional[BaseException] = None
    ) -> None:
        self.operation = operation
        self.key = key
        self.cause = cause
        message = f"{operation}({key})"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class SourceNotFoundError(SourceError):
    """Raised by a source when the requested key does not exist."""


class NotFoundError(VulnMatchError):
    """Raised when a lookup finds nothing in the database."""


class AliasNotFoundError(NotFoundError):
    """Raised by ``VulnClient.by_alias`` when no entry has the alias."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"no vulnerability with alias {alias!r}")


class DataInconsistencyError(VulnMatchError):
    """Raised when an index names an entry that cannot be retrieved."""

    def __init__(self, vuln_id: str, index: str) -> None:
        self.vuln_id = vuln_id
        self.index = index
        super().__init__(
            f"vulnerability {vuln_id} was found in {index} but could not be retrieved"
        )
