"""reqline assembler - build the single outbound request from ParsedOptions."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode, urlsplit

from reqline.errors import UsageError
from reqline.options import Method, ParsedOptions

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class OutboundRequest:
    method: Method
    url: str
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes | None = None

    @property
    def host(self) -> str:
        return urlsplit(self.url).hostname or ""

    @property
    def path(self) -> str:
        return urlsplit(self.url).path or "/"

    def header_dict(self) -> dict[str, str]:
        return dict(self.headers)


def validate_url(uri: str) -> str:
    """Reject anything that is not an absolute http(s) URL with a host."""
    try:
        parts = urlsplit(uri)
    except ValueError as e:
        raise UsageError(f"Invalid URL '{uri}': {e}") from None
    if parts.scheme.lower() not in ("http", "https"):
        raise UsageError(f"Invalid URL '{uri}': scheme must be http or https")
    if not parts.hostname:
        raise UsageError(f"Invalid URL '{uri}': no host")
    return uri


def build_request(options: ParsedOptions) -> OutboundRequest:
    """Build the OutboundRequest for ``options``.

    - POST/PUT/PATCH: form fields win over data fragments; with neither
      the body is empty
    - GET/HEAD/DELETE never carry a body, -F and -d are ignored
    - parsed headers are attached for every method
    """
    url = validate_url(options.uri)
    method = options.method

    headers: dict[str, str] = {}
    body = None

    if not isinstance(method, Method):
        raise RuntimeError(f"Invalid method {method!r}")

    if method.carries_body:
        if options.form_fields:
            body = urlencode(list(options.form_fields.items())).encode("utf-8")
            headers["content-type"] = FORM_CONTENT_TYPE
        elif options.data_fragments:
            body = options.data.encode("utf-8")

    headers.update(options.headers)

    return OutboundRequest(
        method=method,
        url=url,
        headers=tuple(headers.items()),
        body=body,
    )
