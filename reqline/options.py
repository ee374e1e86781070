"""reqline options - turn raw command-line tokens into ParsedOptions."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Iterable

from reqline.errors import UsageError

# RFC 9110 token characters
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class Method(enum.Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    HEAD = "HEAD"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, name: str) -> Method:
        """Case-insensitive lookup. Raises UsageError for anything else."""
        try:
            return cls(name.strip().upper())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise UsageError(f"Invalid method '{name}'. Choose from: {choices}") from None

    @property
    def carries_body(self) -> bool:
        return self in (Method.POST, Method.PUT, Method.PATCH)


@dataclass(frozen=True)
class ParsedOptions:
    """Snapshot of the command line, built once per invocation."""

    uri: str
    method: Method = Method.GET
    headers: dict[str, str] = field(default_factory=dict)
    form_fields: dict[str, str] = field(default_factory=dict)
    data_fragments: tuple[str, ...] = ()
    out_path: str | None = None
    verbose: bool = False
    timeout: float | None = None

    @property
    def data(self) -> str:
        return join_data(self.data_fragments)


def parse_header(token: str) -> tuple[str, str]:
    """Parse a ``name:value`` header token.

    Exactly one colon is accepted. The name is lower-cased and must be a
    valid HTTP token; surrounding whitespace is removed from the value.
    """
    parts = token.split(":")
    if len(parts) != 2:
        raise UsageError(f"Unexpected header format '{token}', expected name:value")
    name, value = parts
    return check_header_name(name, token), check_header_value(value.strip(), token)


def check_header_name(name: str, source: str | None = None) -> str:
    """Lower-case ``name`` and check it is a valid HTTP token."""
    name = name.lower()
    if not _TOKEN_RE.match(name):
        raise UsageError(f"Invalid header name '{name}' in '{source or name}'")
    return name


def check_header_value(value: str, source: str | None = None) -> str:
    """Check ``value`` can be sent: Latin-1 only, no CR, LF or NUL."""
    if any(c in value for c in "\r\n\0"):
        raise UsageError(f"Invalid header value in '{source or value}': control character")
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        raise UsageError(
            f"Invalid header value in '{source or value}': not encodable as Latin-1",
        ) from None
    return value


def parse_form_field(token: str) -> tuple[str, str]:
    """Parse a ``key=value`` form token. Leading whitespace is trimmed from the value."""
    parts = token.split("=")
    if len(parts) != 2:
        raise UsageError(f"Unexpected form format '{token}', expected key=value")
    key, value = parts
    return key, value.lstrip()


def join_data(fragments: Iterable[str]) -> str:
    return "&".join(fragments)


def parse_headers(tokens: Iterable[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for token in tokens:
        name, value = parse_header(token)
        headers[name] = value
    return headers


def parse_form_fields(tokens: Iterable[str]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for token in tokens:
        key, value = parse_form_field(token)
        fields[key] = value
    return fields


def parse_options(
    uri: str | None,
    method: str | None = None,
    headers: Iterable[str] = (),
    form: Iterable[str] = (),
    data: Iterable[str] = (),
    out_path: str | None = None,
    verbose: bool = False,
    timeout: float | None = None,
    default_headers: dict[str, str] | None = None,
) -> ParsedOptions:
    """Build ParsedOptions from raw CLI values.

    The first malformed token aborts the whole parse with UsageError.
    ``default_headers`` (already parsed, e.g. from the config file) are
    applied first so ``-H`` values override them.
    """
    if not uri:
        raise UsageError("Missing required argument 'URI'")

    merged = {
        check_header_name(k): check_header_value(v, f"{k}:{v}")
        for k, v in (default_headers or {}).items()
    }
    merged.update(parse_headers(headers))

    return ParsedOptions(
        uri=uri,
        method=Method.parse(method) if method else Method.GET,
        headers=merged,
        form_fields=parse_form_fields(form),
        data_fragments=tuple(data),
        out_path=out_path,
        verbose=verbose,
        timeout=timeout,
    )
