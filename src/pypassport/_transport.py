"""HTTP transport for the Passport JSON API."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import urljoin

import aiohttp

from pypassport._redact import redact_for_log
from pypassport.config import PassportConfig
from pypassport.exceptions import PassportServiceResponseError, PassportTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the session and data layers.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def execute(
        self,
        endpoint: str,
        method: str,
        *,
        query: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        ...


class HttpTransport:
    """Single seam for every request to the Passport service.

    Performs no retries and no caching. The parsed JSON object is
    returned unmodified; inspecting its ``error`` field is the
    caller's job.
    """

    def __init__(self, config: PassportConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def build_url(self, endpoint: str) -> str:
        return urljoin(self._config.base_url, endpoint.lstrip("/"))

    async def execute(
        self,
        endpoint: str,
        method: str,
        *,
        query: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON object.

        Raises
        ------
        PassportServiceResponseError
            The service answered with a status other than 200.
        PassportTransportError
            The request could not be completed, timed out, or the body
            was not a JSON object.
        """
        url = self.build_url(endpoint)
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        data: str | None = None
        if body is not None:
            headers["content-type"] = "application/json"
            data = json.dumps(body, separators=(",", ":"))

        _logger.debug(
            "%s %s query=%s body=%s",
            method,
            url,
            redact_for_log(query),
            redact_for_log(body),
        )

        try:
            async with self._http.request(
                method,
                url,
                params=dict(query) if query else None,
                data=data,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                payload = await resp.read()
                if resp.status != 200:
                    reason = resp.reason or ""
                    raise PassportServiceResponseError(
                        f"Server responded with {resp.status}: {reason}",
                        status_code=resp.status,
                        reason=reason,
                        endpoint=endpoint,
                    )
        except PassportServiceResponseError:
            raise
        except asyncio.TimeoutError as exc:
            raise PassportTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise PassportTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            result = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PassportTransportError(
                f"Invalid JSON from {endpoint}: {payload[:200]!r}",
                endpoint=endpoint,
            ) from exc

        if not isinstance(result, dict):
            raise PassportTransportError(
                f"Expected a JSON object from {endpoint}, got {type(result).__name__}",
                endpoint=endpoint,
            )

        _logger.debug("%s %s -> %s", method, url, redact_for_log(result))
        return result
