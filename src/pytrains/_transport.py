"""HTTP transport for the live train feed."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

import aiohttp

from pytrains.config import TrainsConfig
from pytrains.exceptions import TrainsTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the client.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def fetch_json(self) -> Any:
        ...


class HttpTransport:
    """Fetch the worker payload over HTTP with caching disabled."""

    def __init__(self, config: TrainsConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def fetch_json(self) -> Any:
        """GET the worker URL and return the decoded JSON body."""
        url = self._config.worker_url
        headers = {
            "accept": "application/json",
            "cache-control": "no-store",
            "user-agent": self._config.user_agent,
        }

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                text = body.decode("utf-8", errors="replace")
                if resp.status != 200:
                    raise TrainsTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except TrainsTransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise TrainsTransportError(f"Request to {url} timed out", url=url) from exc
        except aiohttp.ClientError as exc:
            raise TrainsTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            return json.loads(body)
        except ValueError as exc:
            raise TrainsTransportError(f"Invalid JSON from {url}: {text[:200]}", url=url) from exc
