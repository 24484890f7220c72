from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response


# Statuses the provider uses to say "no such location"; treated as absence.
NOT_FOUND_STATUSES = (400, 404)


class ProviderError(RuntimeError):
    """Base provider error."""


class UpstreamError(ProviderError):
    """Raised when the provider fails or returns something we cannot use."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class QuotaExceeded(UpstreamError):
    """Raised when a provider reports a quota/usage limit issue."""


class RequestCancelled(ProviderError):
    """Raised when a request is aborted before the provider answered."""


@dataclass
class RequestConfig:
    timeout: float = 10.0


class WeatherProvider:
    """Base class that adds timeouts and status mapping for HTTP providers."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response) -> Optional[Response]:
        if response.status_code in NOT_FOUND_STATUSES:
            self._log.info("Provider returned %s for %s", response.status_code, _redact(response.url))
            return None
        if response.status_code == 429:
            self._log.warning("Quota exceeded: %s", response.text)
            raise QuotaExceeded("quota exceeded", status_code=429)
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text)
            raise UpstreamError(f"HTTP {response.status_code}", status_code=response.status_code)
        return response

    def _request(self, method: str, url: str, **kwargs) -> Optional[Response]:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise RequestCancelled("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise UpstreamError("request failed") from exc
        self._log.debug("GET %s -> %s %s", _redact(response.url), response.status_code, response.text[:500])
        return self._handle_response(response)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise UpstreamError("invalid json", status_code=response.status_code) from exc


def _redact(url: Optional[str]) -> str:
    if not url:
        return ""
    base, _, query = url.partition("?")
    if not query:
        return base
    params = [p for p in query.split("&") if not p.startswith("key=")]
    return f"{base}?{'&'.join(params)}" if params else base


__all__ = [
    "NOT_FOUND_STATUSES",
    "ProviderError",
    "QuotaExceeded",
    "RequestCancelled",
    "RequestConfig",
    "UpstreamError",
    "WeatherProvider",
]
