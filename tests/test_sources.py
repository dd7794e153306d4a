"""Tests for database sources."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from vulnmatch.core.client import PackageRequest, VulnClient
from vulnmatch.errors import ConfigurationError, SourceError, SourceNotFoundError
from vulnmatch.sources import (
    MODULES_KEY,
    VULNS_KEY,
    InMemorySource,
    OfflineSource,
    OnlineSource,
    entry_key,
    new_source,
)


class AsyncContextManager:
    """Minimal async context manager returning a mock response."""

    def __init__(self, value):
        self.value = value

    async def __aenter__(self):
        return self.value

    async def __aexit__(self, *args):
        return False


def mock_session(status: int = 200, body: bytes = b"[]", error: Exception = None):
    response = AsyncMock()
    response.status = status
    response.read = AsyncMock(return_value=body)

    session = MagicMock()
    session.closed = False
    if error is not None:
        session.get = MagicMock(side_effect=error)
    else:
        session.get = MagicMock(return_value=AsyncContextManager(response))
    session.close = AsyncMock()
    return session


@pytest.fixture
def database(tmp_path, entries):
    """Write the documents of the shared entries to a directory."""
    for key, data in InMemorySource.from_entries(entries).documents.items():
        path = tmp_path / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    return tmp_path


class TestInMemorySource:
    """Test the in-memory source."""

    def test_documents(self, entries):
        source = InMemorySource.from_entries(entries)
        assert set(source.documents) == {
            MODULES_KEY,
            VULNS_KEY,
            "ID/GO-1999-0001.json",
            "ID/GO-1999-0002.json",
            "ID/GO-2000-0003.json",
        }

    def test_module_index(self, entries):
        source = InMemorySource.from_entries(entries)
        modules = json.loads(asyncio.run(source.get(MODULES_KEY)))
        assert modules == [
            {"path": "bad.com", "vulns": [
                {"id": "GO-1999-0001", "fixed": "v1.2.3"},
                {"id": "GO-1999-0002", "fixed": "v1.2.0"},
            ]},
            {"path": "stdlib", "vulns": [{"id": "GO-2000-0003", "fixed": "v1.19.4"}]},
            {"path": "unfixable.com", "vulns": [{"id": "GO-1999-0001"}]},
        ]

    def test_vuln_index(self, entries):
        source = InMemorySource.from_entries(entries)
        vulns = json.loads(asyncio.run(source.get(VULNS_KEY)))
        assert vulns[0] == {"id": "GO-1999-0001", "aliases": ["CVE-1999-1111"]}
        assert [vuln["id"] for vuln in vulns] == ["GO-1999-0001", "GO-1999-0002", "GO-2000-0003"]

    def test_missing_key(self):
        with pytest.raises(SourceNotFoundError):
            asyncio.run(InMemorySource({}).get("ID/GO-1.json"))


class TestOfflineSource:
    """Test the local directory source."""

    def test_get(self, database):
        source = OfflineSource(database)
        data = asyncio.run(source.get(entry_key("GO-1999-0001")))
        assert json.loads(data)["id"] == "GO-1999-0001"

    def test_missing_key(self, database):
        with pytest.raises(SourceNotFoundError):
            asyncio.run(OfflineSource(database).get(entry_key("GO-1900-0000")))

    def test_key_outside_database(self, database):
        with pytest.raises(SourceError) as exc_info:
            asyncio.run(OfflineSource(database).get("../outside.json"))
        assert not isinstance(exc_info.value, SourceNotFoundError)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ConfigurationError):
            OfflineSource(tmp_path / "missing")

    def test_client_on_directory(self, database):
        client = VulnClient(OfflineSource(database))
        got = asyncio.run(client.by_package(PackageRequest(module="bad.com", version="v1.0.0")))
        assert [entry.id for entry in got] == ["GO-1999-0001", "GO-1999-0002"]
        assert asyncio.run(client.by_alias("CVE-1999-2222")) == "GO-1999-0002"


class TestOnlineSource:
    """Test the HTTP source against a mocked aiohttp session."""

    def test_get(self):
        session = mock_session(body=b'[{"id": "GO-1"}]')
        source = OnlineSource("https://vuln.example.com/", session=session)

        assert asyncio.run(source.get(VULNS_KEY)) == b'[{"id": "GO-1"}]'
        session.get.assert_called_once_with("https://vuln.example.com/index/vulns.json")

    def test_not_found(self):
        source = OnlineSource("https://vuln.example.com", session=mock_session(status=404))
        with pytest.raises(SourceNotFoundError) as exc_info:
            asyncio.run(source.get(entry_key("GO-1")))
        assert exc_info.value.key == "ID/GO-1.json"

    def test_server_error(self):
        source = OnlineSource("https://vuln.example.com", session=mock_session(status=503))
        with pytest.raises(SourceError) as exc_info:
            asyncio.run(source.get(MODULES_KEY))
        assert not isinstance(exc_info.value, SourceNotFoundError)
        assert "503" in str(exc_info.value)

    def test_connection_error(self):
        error = aiohttp.ClientConnectionError("refused")
        source = OnlineSource("https://vuln.example.com", session=mock_session(error=error))
        with pytest.raises(SourceError) as exc_info:
            asyncio.run(source.get(MODULES_KEY))
        assert exc_info.value.cause is error

    def test_borrowed_session_is_not_closed(self):
        session = mock_session()
        source = OnlineSource("https://vuln.example.com", session=session)
        asyncio.run(source.close())
        session.close.assert_not_called()

    def test_client_over_http(self, entries):
        documents = InMemorySource.from_entries(entries).documents

        def get(url):
            key = url[len("https://vuln.example.com/"):]
            response = AsyncMock()
            response.status = 200 if key in documents else 404
            response.read = AsyncMock(return_value=documents.get(key, b""))
            return AsyncContextManager(response)

        session = mock_session()
        session.get = MagicMock(side_effect=get)
        client = VulnClient(OnlineSource("https://vuln.example.com", session=session))

        got = asyncio.run(client.by_package(PackageRequest(module="std", version="go1.19.3")))
        assert got == []
        got = asyncio.run(client.by_package(PackageRequest(module="stdlib", version="go1.19.3")))
        assert [entry.id for entry in got] == ["GO-2000-0003"]
        assert asyncio.run(client.by_id("GO-1900-0000")) is None


class TestNewSource:
    """Test choosing a source from a URL."""

    def test_http(self):
        assert isinstance(new_source("https://vuln.go.dev"), OnlineSource)

    def test_file_url(self, database):
        source = new_source(database.as_uri())
        assert isinstance(source, OfflineSource)
        assert source.database_path == database

    def test_plain_path(self, database):
        assert isinstance(new_source(str(database)), OfflineSource)

    @pytest.mark.parametrize("url", ["", "ftp://vuln.example.com"])
    def test_unsupported(self, url):
        with pytest.raises(ConfigurationError):
            new_source(url)

    def test_client_from_url(self, database):
        client = VulnClient.from_url(str(database))
        assert asyncio.run(client.ids()) == ["GO-1999-0001", "GO-1999-0002", "GO-2000-0003"]
