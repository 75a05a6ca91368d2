"""JSON over HTTP with urllib, the only transport the integrations use."""

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class IntegrationError(Exception):
    """An upstream service failed or returned something unusable."""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


def build_url(base: str, params: Optional[dict] = None) -> str:
    if not params:
        return base
    return f"{base}?{urllib.parse.urlencode(params)}"


def request_json(service: str, url: str, payload=None, headers: Optional[dict] = None,
                 method: Optional[str] = None, data: Optional[bytes] = None,
                 timeout: int = DEFAULT_TIMEOUT):
    """
    Send a request and decode the JSON body.

    `payload` is JSON-encoded; pass raw `data` instead for multipart bodies.
    """
    headers = dict(headers or {})
    if payload is not None:
        data = json.dumps(payload).encode("utf-8")
        headers.setdefault("Content-Type", "application/json")
    headers.setdefault("Accept", "application/json")

    req = urllib.request.Request(
        url,
        data=data,
        headers=headers,
        method=method or ("POST" if data is not None else "GET"),
    )

    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            return json.loads(response.read())
    except urllib.error.HTTPError as e:
        error_body = e.read().decode("utf-8", errors="replace")
        logger.warning("%s returned HTTP %s: %s", service, e.code, error_body[:500])
        raise IntegrationError(service, f"HTTP {e.code}: {error_body[:200]}", status_code=e.code)
    except urllib.error.URLError as e:
        logger.warning("%s unreachable: %s", service, e.reason)
        raise IntegrationError(service, f"unreachable: {e.reason}")
    except (ValueError, TimeoutError) as e:
        logger.warning("%s bad response: %s", service, e)
        raise IntegrationError(service, f"bad response: {e}")
