"""A small blocking HTTP client with query-string helpers."""

from __future__ import annotations

import warnings
from collections.abc import Mapping

import requests

_TIMEOUT_SECONDS = 10


class HttpError(Exception):
    """Raised when a request cannot be completed."""


def _decode(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


class HttpClient:
    """Sends GET and POST requests and returns the response body as text."""

    def __init__(self) -> None:
        self._session = requests.Session()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        with warnings.catch_warnings():
            warnings.filterwarnings("ignore", message="Unverified HTTPS request")
            try:
                return self._session.request(
                    method, url, verify=False, timeout=_TIMEOUT_SECONDS, **kwargs
                )
            except requests.RequestException as exc:
                raise HttpError(f"{method} {url} failed: {exc}") from exc

    def get_request(self, url: str, headers: Mapping[str, str] | None = None) -> str:
        """GET ``url``, following redirects, and return the body."""
        sent = {"Accept-Encoding": "gzip"}
        sent.update(headers or {})
        response = self._send("GET", url, headers=sent, allow_redirects=True)
        return _decode(response.content)

    def post_request(
        self,
        url: str,
        post_params: str,
        headers: Mapping[str, str] | None = None,
        header: bool = False,
    ) -> str:
        """POST ``post_params`` to ``url``; with ``header`` the status line and headers lead the body."""
        sent = {"Content-Type": "application/x-www-form-urlencoded"}
        sent.update(headers or {})
        response = self._send(
            "POST", url, data=post_params.encode("utf-8"), headers=sent, allow_redirects=False
        )
        body = _decode(response.content)
        if not header:
            return body
        lines = [f"HTTP/1.1 {response.status_code} {response.reason}"]
        lines.extend(f"{name}: {value}" for name, value in response.headers.items())
        return "\r\n".join(lines) + "\r\n\r\n" + body

    @staticmethod
    def map_to_query_string(params: Mapping[str, str]) -> str:
        """Join ``key=value`` pairs with ``&`` in key order, without escaping."""
        return "&".join(f"{key}={params[key]}" for key in sorted(params))

    def query_string_to_map(self, query_string: str) -> dict[str, str]:
        """Split ``a=1&b=2`` into a dict; parts without ``=`` are skipped."""
        params: dict[str, str] = {}
        for part in query_string.split("&"):
            key, sep, value = part.partition("=")
            if sep:
                params[key] = value
        return dict(sorted(params.items()))