from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests

from ..core.constants import DEFAULT_REQUEST_TIMEOUT
from ..core.exceptions import ApplicationError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayConfig:
    base_url: str
    timeout: float = DEFAULT_REQUEST_TIMEOUT


class RemoteGateway:
    """Thin JSON wrapper around the school backend.

    Every call is a single request/response round trip. A body carrying
    ``error: true`` is an application failure even on HTTP 200.
    """

    def __init__(
        self,
        config: GatewayConfig,
        *,
        http: Optional[requests.Session] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
    ):
        if not config.base_url:
            logger.warning("Backend URL is not configured")
        self._config = config
        self._http = http or requests.Session()
        self._token_provider = token_provider

    def _url(self, endpoint: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(self, method: str, endpoint: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self._config.base_url:
            raise TransportError("Backend URL is not configured", title="Connection Error")
        if method not in ("GET", "POST"):
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = self._url(endpoint)
        logger.debug("%s %s", method, url)
        try:
            if method == "GET":
                response = self._http.get(url, headers=self._headers(), params=payload, timeout=self._config.timeout)
            else:
                response = self._http.post(url, headers=self._headers(), json=payload, timeout=self._config.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error("Request to %s failed: %s", endpoint, e)
            raise TransportError("Some error occurred") from e
        except (json.JSONDecodeError, ValueError) as e:
            logger.error("Invalid JSON response from %s: %s", endpoint, e)
            raise TransportError("Invalid response from server") from e

        if not isinstance(data, dict):
            logger.error("Unexpected response shape from %s: %r", endpoint, type(data))
            raise TransportError("Invalid response from server")

        if data.get("error"):
            message = data.get("message") or "Try again"
            logger.warning("%s reported an error: %s", endpoint, message)
            raise ApplicationError(str(message), endpoint=endpoint)

        return data

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._request("GET", endpoint, params)

    def post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", endpoint, payload)

    def close(self) -> None:
        self._http.close()
