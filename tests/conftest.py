"""Shared fixtures for reqline tests."""

import pytest
from click.testing import CliRunner

from reqline.executor import InboundResponse


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def make_response():
    """Factory for InboundResponse objects."""

    def _make(status_code=200, text="", headers=None, reason="OK", http_version="HTTP/1.1"):
        return InboundResponse(
            status_code=status_code,
            reason=reason,
            http_version=http_version,
            headers=tuple((headers or {}).items()),
            text=text,
        )

    return _make
