"""reqline executor - send the request through requests."""

from __future__ import annotations

from dataclasses import dataclass

import requests

from reqline.assembler import OutboundRequest
from reqline.errors import TransportError

HTTP_VERSIONS = {9: "HTTP/0.9", 10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}


@dataclass(frozen=True)
class InboundResponse:
    """Response of the single request. ``text`` is the decoded body."""

    status_code: int
    reason: str = ""
    http_version: str = "HTTP/1.1"
    headers: tuple[tuple[str, str], ...] = ()
    text: str = ""

    @classmethod
    def from_requests(cls, resp: requests.Response) -> InboundResponse:
        version = getattr(resp.raw, "version", None)
        return cls(
            status_code=resp.status_code,
            reason=resp.reason or "",
            http_version=HTTP_VERSIONS.get(version, "HTTP/1.1"),
            headers=tuple(resp.headers.items()),
            text=resp.text,
        )


def send_request(
    request: OutboundRequest,
    timeout: float | None = None,
) -> InboundResponse:
    """Send ``request`` exactly once and return the response.

    Redirects are followed by requests. No retries. Every requests
    failure is raised as TransportError.
    """
    try:
        prepared = requests.Request(
            method=request.method.value,
            url=request.url,
            headers=request.header_dict(),
            data=request.body,
        ).prepare()
        with requests.Session() as session:
            resp = session.send(prepared, timeout=timeout, allow_redirects=True)
            return InboundResponse.from_requests(resp)
    except requests.exceptions.Timeout:
        raise TransportError(f"Request timed out after {timeout}s") from None
    except requests.exceptions.ConnectionError as e:
        raise TransportError(f"Connection error: {e}") from e
    except requests.exceptions.RequestException as e:
        raise TransportError(f"Request failed: {e}") from e
    except Exception as e:
        raise TransportError(f"Unexpected error: {e}") from e
