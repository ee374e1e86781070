"""reqline presenter - verbose request/response metadata and body output."""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Protocol

import click

from reqline.assembler import OutboundRequest
from reqline.errors import FileSystemError
from reqline.executor import InboundResponse

REQUEST_PROTOCOL = "HTTP/1.1"


class StatusClass(enum.Enum):
    SUCCESS = "2xx"
    REDIRECT = "3xx"
    CLIENT_ERROR = "4xx"
    SERVER_ERROR = "5xx"
    OTHER = "other"


_STATUS_CLASSES = {
    "2": StatusClass.SUCCESS,
    "3": StatusClass.REDIRECT,
    "4": StatusClass.CLIENT_ERROR,
    "5": StatusClass.SERVER_ERROR,
}

_STATUS_STYLES = {
    StatusClass.SUCCESS: {"fg": "green"},
    StatusClass.REDIRECT: {"fg": "yellow"},
    StatusClass.CLIENT_ERROR: {"fg": "red"},
    StatusClass.SERVER_ERROR: {"fg": "red", "bold": True},
}


def classify_status(status_code: int) -> StatusClass:
    """Classify a status code by its leading digit."""
    return _STATUS_CLASSES.get(str(status_code)[:1], StatusClass.OTHER)


def highlight_status(status_code: int, reason: str = "") -> str:
    text = f"{status_code} {reason}".rstrip()
    style = _STATUS_STYLES.get(classify_status(status_code))
    if style is None:
        return text
    return click.style(text, **style)


def format_request(request: OutboundRequest) -> str:
    lines = [
        f"> {request.method.value} {REQUEST_PROTOCOL} {request.path}",
        f"> Host: {request.host}",
    ]
    for name, value in request.headers:
        lines.append(f"> {name}: {value}")
    lines.append(">")
    return "\n".join(lines)


def format_response(response: InboundResponse) -> str:
    lines = [
        f"< {response.http_version} "
        f"{highlight_status(response.status_code, response.reason)}",
    ]
    for name, value in response.headers:
        lines.append(f"< {name}: {value}")
    lines.append("<")
    return "\n".join(lines)


def print_request(request: OutboundRequest) -> None:
    click.echo(format_request(request))


def print_response(response: InboundResponse) -> None:
    click.echo(format_response(response))


# ── Sinks ────────────────────────────────────────────────────────────────


class Sink(Protocol):
    def write(self, text: str) -> None: ...


class StdoutSink:
    """Print the body with trailing whitespace removed."""

    def write(self, text: str) -> None:
        click.echo(text.rstrip())


class FileSink:
    """Write the body to ``path``, creating or truncating it.

    The write is a single plain overwrite; a crash part-way through can
    leave a truncated file.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def write(self, text: str) -> None:
        click.echo("Saving...")
        try:
            self.path.write_bytes(text.encode("utf-8"))
        except OSError as e:
            raise FileSystemError(f"Could not save the file {self.path}: {e}") from e
        click.echo(f"Saved response text in {self.path}")


def choose_sink(out_path: str | None) -> Sink:
    if out_path:
        return FileSink(out_path)
    return StdoutSink()
