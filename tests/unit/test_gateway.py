# -*- coding: utf-8 -*-

"""
Unit tests for Gateway and HttpxGateway.
"""

import json

import httpx
import pytest

from mapsmith.gateway import Gateway, HttpxGateway


def _mock_transport(handler):
    """Gateway configs routing HttpxGateway through httpx.MockTransport."""
    return {
        "HTTP": {
            "timeout": 5,
            "configure": lambda options: {**options, "transport": httpx.MockTransport(handler)},
        }
    }


class TestGatewayBase:
    """Tests for HTTP method emulation helpers."""

    @pytest.mark.parametrize("method", ["put", "patch", "delete"])
    def test_emulates_write_methods(self, make_request, method):
        """
        What it does: Verifies PUT/PATCH/DELETE become POST with an override.
        Purpose: Ensure servers without those verbs can still be reached.
        """
        request = make_request("/users/{id}", {"id": 1}, method=method)
        gateway = Gateway(request, {"emulate_http": True})

        prepared = gateway.prepare_request()

        assert gateway.should_emulate_http() is True
        assert gateway.http_method() == "post"
        assert prepared.header("x-http-method-override") == method.upper()
        assert prepared.params()["_method"] == method.upper()
        assert request.header("x-http-method-override") is None

    def test_get_is_not_emulated(self, make_request):
        gateway = Gateway(make_request(method="get"), {"emulate_http": True})

        assert gateway.should_emulate_http() is False
        assert gateway.prepare_request() is gateway.request

    def test_emulation_disabled_by_default(self, make_request):
        gateway = Gateway(make_request(method="delete"))

        assert gateway.http_method() == "delete"

    @pytest.mark.asyncio
    async def test_call_not_implemented(self, make_request):
        with pytest.raises(NotImplementedError):
            await Gateway(make_request()).call()


class TestHttpxGateway:
    """Tests for the httpx transport."""

    @pytest.mark.asyncio
    async def test_sends_request_and_decodes_json(self, make_request):
        """
        What it does: Verifies method, URL, headers and JSON decoding.
        Purpose: Ensure the default gateway maps Request to httpx and back.
        """
        seen = {}

        def handler(http_request):
            seen["method"] = http_request.method
            seen["url"] = str(http_request.url)
            seen["token"] = http_request.headers.get("token")
            return httpx.Response(200, json={"id": 1})

        request = make_request("/users/{id}", {"id": 1, "headers": {"Token": "abc"}})

        response = await HttpxGateway(request, _mock_transport(handler)).call()

        print(f"Seen: {seen}")
        assert seen == {"method": "GET", "url": "http://example.org/users/1", "token": "abc"}
        assert response.status() == 200
        assert response.data() == {"id": 1}
        assert response.request() is request
        assert response.is_content_type_json() is True

    @pytest.mark.asyncio
    async def test_sends_json_body(self, make_request):
        captured = {}

        def handler(http_request):
            captured["body"] = json.loads(http_request.content)
            return httpx.Response(201, text="created")

        request = make_request("/blogs", {"body": {"title": "x"}}, method="post")

        response = await HttpxGateway(request, _mock_transport(handler)).call()

        assert captured["body"] == {"title": "x"}
        assert response.status() == 201
        assert response.data() == "created"

    @pytest.mark.asyncio
    async def test_emulated_request_on_the_wire(self, make_request):
        seen = {}

        def handler(http_request):
            seen["method"] = http_request.method
            seen["override"] = http_request.headers.get("x-http-method-override")
            seen["query"] = dict(http_request.url.params)
            return httpx.Response(204)

        configs = {"emulate_http": True, **_mock_transport(handler)}
        request = make_request("/users/{id}", {"id": 1}, method="delete")

        response = await HttpxGateway(request, configs).call()

        assert seen == {"method": "POST", "override": "DELETE", "query": {"_method": "DELETE"}}
        assert response.status() == 204

    @pytest.mark.asyncio
    async def test_invalid_json_keeps_text(self, make_request):
        def handler(http_request):
            return httpx.Response(
                200, content=b"not json", headers={"content-type": "application/json"}
            )

        response = await HttpxGateway(make_request(request_params={"id": 1}), _mock_transport(handler)).call()

        assert response.data() == "not json"

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, make_request):
        def handler(http_request):
            raise httpx.ConnectError("refused", request=http_request)

        with pytest.raises(httpx.ConnectError):
            await HttpxGateway(make_request(request_params={"id": 1}), _mock_transport(handler)).call()

    def test_client_options_without_configure(self, make_request):
        gateway = HttpxGateway(make_request(), {"HTTP": {"timeout": 3}})

        assert gateway.client_options() == {"timeout": 3}
