"""Tests for the HTTP transport."""

import asyncio
from unittest.mock import Mock

import pytest
import requests

from ingest.fpl.errors import NetworkError
from ingest.fpl.transport import Transport, build_proxied_url

TARGET = "https://fantasy.premierleague.com/api/leagues-classic/314/standings/"


def make_response(status_code=200, body=None, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


class TestBuildProxiedUrl:
    """Test proxy URL rewriting."""

    def test_direct(self):
        assert build_proxied_url("", TARGET) == TARGET

    def test_path_prefix_proxy(self):
        proxy = "https://thingproxy.freeboard.io/fetch/"
        assert build_proxied_url(proxy, TARGET) == proxy + TARGET

    def test_query_parameter_proxy_encodes_target(self):
        url = build_proxied_url("/api/proxy?url=", TARGET)
        assert url == ("/api/proxy?url=https%3A%2F%2Ffantasy.premierleague.com%2Fapi"
                       "%2Fleagues-classic%2F314%2Fstandings%2F")

    def test_encoded_suffix_proxy(self):
        url = build_proxied_url("https://corsproxy.example/?", TARGET)
        assert url.startswith("https://corsproxy.example/?https%3A%2F%2F")


class TestTransport:
    """Test single-shot GET behaviour."""

    def test_returns_json_body_with_fixed_headers(self):
        session = Mock()
        session.get.return_value = make_response(body={"league": {"name": "Test"}})
        transport = Transport(session=session)

        body = asyncio.run(transport.get(TARGET))

        assert body == {"league": {"name": "Test"}}
        args, kwargs = session.get.call_args
        assert args == (TARGET,)
        assert kwargs["headers"]["Accept"] == "application/json"
        assert kwargs["headers"]["User-Agent"] == "Mozilla/5.0"
        assert kwargs["timeout"] is None

    def test_request_goes_through_proxy(self):
        session = Mock()
        session.get.return_value = make_response(body={})
        transport = Transport(session=session)

        asyncio.run(transport.get(TARGET, proxy="https://thingproxy.freeboard.io/fetch/"))

        assert session.get.call_args[0][0] == "https://thingproxy.freeboard.io/fetch/" + TARGET

    def test_non_2xx_raises_network_error(self):
        session = Mock()
        session.get.return_value = make_response(status_code=429, reason="Too Many Requests")
        transport = Transport(session=session)

        with pytest.raises(NetworkError) as exc_info:
            asyncio.run(transport.get(TARGET))

        assert exc_info.value.status == 429
        assert "Too Many Requests" in exc_info.value.message

    def test_malformed_json_raises_network_error(self):
        session = Mock()
        session.get.return_value = make_response(body=ValueError("Expecting value"))
        transport = Transport(session=session)

        with pytest.raises(NetworkError) as exc_info:
            asyncio.run(transport.get(TARGET))

        assert exc_info.value.status == 200
        assert "malformed JSON" in exc_info.value.message

    def test_connection_error_has_no_status(self):
        session = Mock()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        transport = Transport(session=session)

        with pytest.raises(NetworkError) as exc_info:
            asyncio.run(transport.get(TARGET))

        assert exc_info.value.status is None
        assert "refused" in exc_info.value.message
