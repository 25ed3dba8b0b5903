"""JSON fetch wrapper returning the response envelope instead of raising."""

from __future__ import annotations

from collections.abc import Mapping
import json as jsonlib
import logging
import socket
import threading
import time
from typing import Any

import requests

from devflow.core.handlers import handle_error
from devflow.core.http_errors import generic

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

# Upstream statuses outside the error range (e.g. an unfollowed 3xx) are
# reported as a bad gateway.
FALLBACK_ERROR_STATUS = 502

_CHUNK_BYTES = 8192


def _abort(response: requests.Response) -> None:
    """Shut the response socket down so a blocked body read returns at once."""
    connection = getattr(response.raw, "connection", None)
    sock = getattr(connection, "sock", None)
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        logger.debug("Socket already closed while aborting response")


def _read_body(response: requests.Response, deadline: float, timeout: float) -> bytes:
    """Read the whole body, raising ``requests.Timeout`` once ``deadline`` passes."""
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise requests.Timeout(f"No complete response within {timeout}s")

    watchdog = threading.Timer(remaining, _abort, args=(response,))
    watchdog.daemon = True
    watchdog.start()
    body = bytearray()
    try:
        for chunk in response.iter_content(chunk_size=_CHUNK_BYTES):
            body.extend(chunk)
            if time.monotonic() >= deadline:
                raise requests.Timeout(f"No complete response within {timeout}s")
        # A shut-down socket without a declared length ends like a short body.
        if time.monotonic() >= deadline:
            raise requests.Timeout(f"No complete response within {timeout}s")
    except requests.RequestException as exc:
        if isinstance(exc, requests.Timeout) or time.monotonic() >= deadline:
            raise requests.Timeout(f"No complete response within {timeout}s") from exc
        raise
    finally:
        watchdog.cancel()
    return bytes(body)


def fetch_handler(
    url: str,
    *,
    method: str = "GET",
    json: Any = None,
    headers: Mapping[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    session: requests.Session | None = None,
) -> dict[str, Any]:
    """Issue a JSON request and return the parsed body or a failure envelope.

    Caller headers override the JSON defaults. ``timeout`` is a wall-clock
    budget for the whole exchange: connecting and each read are bounded by
    it, and a body still arriving when it runs out is abandoned and its
    connection shut down. Any failure, including a non-2xx status, comes
    back as ``{"status": ..., "success": False, "error": {...}}``.
    """
    request_headers = {**DEFAULT_HEADERS, **(headers or {})}
    http = session or requests.Session()
    deadline = time.monotonic() + timeout

    try:
        response = http.request(
            method,
            url,
            headers=request_headers,
            json=json,
            timeout=timeout,
            stream=True,
        )
        try:
            if not 200 <= response.status_code < 300:
                status_code = response.status_code
                if not 400 <= status_code <= 599:
                    status_code = FALLBACK_ERROR_STATUS
                raise generic(f"HTTP error: {response.status_code}", status_code=status_code)
            body = _read_body(response, deadline, timeout)
        finally:
            response.close()
        return jsonlib.loads(body)
    except requests.Timeout as exc:
        logger.warning("Request to %s timed out", url)
        return handle_error(exc, "server")
    except Exception as exc:
        logger.error("Error fetching %s: %s", url, exc)
        return handle_error(exc, "server")
    finally:
        if session is None:
            http.close()
