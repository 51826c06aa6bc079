from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import aiohttp
import pytest

from pytrains._transport import HttpTransport
from pytrains.config import TrainsConfig
from pytrains.exceptions import TrainsTransportError

URL = "https://example.invalid/trains"


@dataclass
class _FakeResponse:
    status: int
    body: str | bytes

    async def read(self) -> bytes:
        return self.body if isinstance(self.body, bytes) else self.body.encode()

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


@dataclass
class _FakeSession:
    response: _FakeResponse | None = None
    error: BaseException | None = None
    requests: list[dict[str, Any]] = field(default_factory=list)

    def get(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.requests.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def _transport(session: _FakeSession) -> HttpTransport:
    return HttpTransport(TrainsConfig(worker_url=URL), session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_fetch_json_decodes_body_and_disables_cache() -> None:
    session = _FakeSession(response=_FakeResponse(200, '{"trains": [], "meta": {}}'))

    data = await _transport(session).fetch_json()

    assert data == {"trains": [], "meta": {}}
    request = session.requests[0]
    assert request["url"] == URL
    assert request["headers"]["cache-control"] == "no-store"


@pytest.mark.asyncio
async def test_non_200_raises_with_status() -> None:
    session = _FakeSession(response=_FakeResponse(503, "upstream down"))

    with pytest.raises(TrainsTransportError) as excinfo:
        await _transport(session).fetch_json()

    assert excinfo.value.status_code == 503
    assert excinfo.value.url == URL


@pytest.mark.asyncio
async def test_invalid_json_raises() -> None:
    session = _FakeSession(response=_FakeResponse(200, "<html>oops</html>"))
    with pytest.raises(TrainsTransportError):
        await _transport(session).fetch_json()


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()])
async def test_network_errors_are_wrapped(error: BaseException) -> None:
    session = _FakeSession(error=error)
    with pytest.raises(TrainsTransportError) as excinfo:
        await _transport(session).fetch_json()
    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_undecodable_body_raises_transport_error() -> None:
    session = _FakeSession(response=_FakeResponse(200, b'[{"trainNo": "1", "to": "\xff\xfe"}]'))
    with pytest.raises(TrainsTransportError) as excinfo:
        await _transport(session).fetch_json()
    assert excinfo.value.url == URL


@pytest.mark.asyncio
async def test_error_body_is_quoted_even_when_undecodable() -> None:
    session = _FakeSession(response=_FakeResponse(502, b"\xff bad gateway"))
    with pytest.raises(TrainsTransportError) as excinfo:
        await _transport(session).fetch_json()
    assert excinfo.value.status_code == 502
    assert "bad gateway" in str(excinfo.value)
