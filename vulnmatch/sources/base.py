"""Source interface for vulnerability database documents."""

from abc import ABC, abstractmethod

MODULES_KEY = "index/modules.json"
VULNS_KEY = "index/vulns.json"
ID_DIR = "ID"


def entry_key(vuln_id: str) -> str:
    """Return the document key of the full entry for vuln_id."""
    return f"{ID_DIR}/{vuln_id}.json"


class Source(ABC):
    """Fetches raw database documents by key.

    Implementations raise ``SourceNotFoundError`` when a key does not
    exist and ``SourceError`` for any other failure.
    """

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """Fetch the document stored under key.

        Args:
            key: Logical document key, e.g. ``index/modules.json``

        Returns:
            Raw document bytes
        """

    async def close(self) -> None:
        """Release any resources held by the source."""

    async def __aenter__(self) -> "Source":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
