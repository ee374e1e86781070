"""Tests for building the outbound request."""

from urllib.parse import parse_qsl

import pytest

from reqline.assembler import FORM_CONTENT_TYPE, OutboundRequest, build_request
from reqline.errors import UsageError
from reqline.options import Method, parse_options

URL = "http://example.test/api/items"


def _build(method="GET", **kwargs):
    return build_request(parse_options(URL, method=method, **kwargs))


class TestMethodSelection:
    @pytest.mark.parametrize("name", ["get", "POST", "Put", "patch", "HEAD", "delete"])
    def test_exact_verb(self, name):
        assert _build(name).method is Method(name.upper())

    def test_default_is_get(self):
        req = build_request(parse_options(URL))
        assert req.method is Method.GET
        assert req.body is None


class TestBodies:
    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH"])
    def test_form_body(self, method):
        req = _build(method, form=["name=  John", "email=a@b.com"])
        assert parse_qsl(req.body.decode()) == [("name", "John"), ("email", "a@b.com")]
        assert req.header_dict()["content-type"] == FORM_CONTENT_TYPE

    def test_form_values_are_urlencoded(self):
        req = _build("POST", form=["q=a b&c"])
        assert req.body == b"q=a+b%26c"

    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH"])
    def test_data_body(self, method):
        req = _build(method, data=["a=1", "b=2"])
        assert req.body == b"a=1&b=2"
        assert "content-type" not in req.header_dict()

    def test_form_wins_over_data(self):
        req = _build("POST", form=["k=v"], data=["ignored=1"])
        assert req.body == b"k=v"

    def test_no_body_without_form_or_data(self):
        assert _build("POST").body is None

    @pytest.mark.parametrize("method", ["GET", "HEAD", "DELETE"])
    def test_bodyless_methods_ignore_form_and_data(self, method):
        req = _build(method, form=["k=v"], data=["a=1"])
        assert req.body is None
        assert "content-type" not in req.header_dict()

    def test_user_content_type_overrides_form_default(self):
        req = _build("POST", form=["k=v"], headers=["Content-Type:text/plain"])
        assert req.header_dict()["content-type"] == "text/plain"
        assert req.body == b"k=v"


class TestHeaders:
    @pytest.mark.parametrize("method", ["GET", "POST", "DELETE"])
    def test_attached_for_every_method(self, method):
        req = _build(method, headers=["X-Trace:abc", "Accept:*/*"])
        assert ("x-trace", "abc") in req.headers
        assert ("accept", "*/*") in req.headers

    def test_json_post(self):
        req = build_request(
            parse_options(
                "http://example/api",
                method="POST",
                headers=["Content-Type:application/json"],
                data=['{"a":1}'],
            ),
        )
        assert req.method is Method.POST
        assert req.header_dict() == {"content-type": "application/json"}
        assert req.body == b'{"a":1}'


class TestUrl:
    @pytest.mark.parametrize("uri", ["example.com/x", "/api", "ftp://host/file", "http://"])
    def test_invalid(self, uri):
        with pytest.raises(UsageError, match="Invalid URL"):
            build_request(parse_options(uri))

    def test_host_and_path(self):
        req = OutboundRequest(method=Method.GET, url="https://api.example.com:8443/v1/users?x=1")
        assert req.host == "api.example.com"
        assert req.path == "/v1/users"

    def test_empty_path_is_root(self):
        assert OutboundRequest(method=Method.GET, url="http://example").path == "/"


def test_request_is_immutable():
    req = _build("GET")
    with pytest.raises(AttributeError):
        req.body = b"x"
