"""Create a source from a database URL."""

from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from ..errors import ConfigurationError
from .base import Source
from .offline import OfflineSource
from .online import OnlineSource


def new_source(url: str) -> Source:
    """Return the source for url.

    ``http://`` and ``https://`` URLs are read with ``OnlineSource``;
    ``file://`` URLs and plain paths with ``OfflineSource``.

    Raises:
        ConfigurationError: For unsupported schemes or missing directories
    """
    if not url:
        raise ConfigurationError("empty database URL")

    parsed = urlparse(url)
    if parsed.scheme in ("http", "https"):
        return OnlineSource(url)
    if parsed.scheme == "file":
        return OfflineSource(Path(url2pathname(parsed.path)))
    if parsed.scheme == "" or len(parsed.scheme) == 1:
        # A plain path; one-letter schemes are Windows drive letters.
        return OfflineSource(Path(url))
    raise ConfigurationError(f"unsupported database URL scheme {parsed.scheme!r}: {url}")
