# -*- coding: utf-8 -*-

"""
Unit tests for built-in middleware: EncodeJson, BasicAuth and Log.
"""

import base64
import json
from unittest.mock import AsyncMock

import pytest
from loguru import logger

from mapsmith.middleware import BasicAuth, EncodeJson, Log, MiddlewareContext
from mapsmith.response import Response


@pytest.fixture
def binding():
    return MiddlewareContext(resource_name="User", resource_method="byId")


@pytest.fixture
def log_messages():
    """Collect mapsmith log records emitted during the test."""
    messages = []
    logger.enable("mapsmith")
    sink_id = logger.add(lambda message: messages.append(message.record), level="DEBUG")
    yield messages
    logger.remove(sink_id)
    logger.disable("mapsmith")


class TestEncodeJson:
    """Tests for EncodeJson."""

    def test_encodes_dict_body(self, binding, make_request):
        """
        What it does: Verifies dict bodies are serialized with a JSON content-type.
        Purpose: Ensure structured payloads are ready for the wire.
        """
        request = make_request("/blogs", {"body": {"title": "café"}})

        result = EncodeJson(binding).request(request)

        print(f"Body: {result.body()}")
        assert json.loads(result.body()) == {"title": "café"}
        assert result.header("content-type") == "application/json;charset=utf-8"
        assert request.body() == {"title": "café"}

    def test_leaves_string_body(self, binding, make_request):
        request = make_request("/blogs", {"body": "raw"})

        assert EncodeJson(binding).request(request) is request

    def test_leaves_request_without_body(self, binding, make_request):
        request = make_request()

        assert EncodeJson(binding).request(request) is request


class TestBasicAuth:
    """Tests for BasicAuth."""

    def test_adds_authorization_header(self, binding, make_request):
        """
        What it does: Verifies the Basic credentials header is added.
        Purpose: Ensure the encoded value follows RFC 7617.
        """
        middleware = BasicAuth("bob", "secret")(binding)

        result = middleware.request(make_request())

        expected = "Basic " + base64.b64encode(b"bob:secret").decode("ascii")
        assert result.header("authorization") == expected

    def test_keeps_existing_authorization(self, binding, make_request):
        request = make_request(request_params={"headers": {"Authorization": "Bearer t"}})

        result = BasicAuth("bob", "secret")(binding).request(request)

        assert result is request

    def test_factory_name(self):
        assert BasicAuth("a", "b").__name__ == "BasicAuth"


class TestLog:
    """Tests for Log."""

    @pytest.mark.asyncio
    async def test_logs_request_and_response(self, binding, make_request, log_messages):
        """
        What it does: Verifies one line for the request and one for the response.
        Purpose: Ensure calls are traceable through loguru.
        """
        middleware = Log(binding)
        request = middleware.request(make_request(request_params={"id": 1}))
        response = await middleware.response(
            AsyncMock(return_value=Response(request, 200)), AsyncMock()
        )

        texts = [record["message"] for record in log_messages]
        print(f"Logged: {texts}")
        assert response.status() == 200
        assert "[Log] -> GET http://example.org/users/1 (User.byId)" in texts
        assert "[Log] <- 200 GET http://example.org/users/1" in texts

    @pytest.mark.asyncio
    async def test_logs_and_reraises_failures(self, binding, log_messages):
        """
        What it does: Verifies failures are logged then propagated unchanged.
        Purpose: Ensure logging never swallows errors.
        """
        error = ConnectionError("down")

        with pytest.raises(ConnectionError) as exc_info:
            await Log(binding).response(AsyncMock(side_effect=error), AsyncMock())

        assert exc_info.value is error
        assert any(record["level"].name == "ERROR" for record in log_messages)
