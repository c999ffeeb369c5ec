# -*- coding: utf-8 -*-

"""
Shared fixtures for Mapsmith tests.

Provides an isolated Configs instance, an in-memory gateway and a set of
small middleware used across unit and integration tests.
"""

from typing import Any, Dict, List, Optional

import pytest

from mapsmith import forge
from mapsmith.config import Configs
from mapsmith.gateway.base import Gateway
from mapsmith.request import MethodDescriptor, Request
from mapsmith.response import Response


class FakeGateway(Gateway):
    """
    In-memory gateway recording every call.

    Class attributes are reset by the fake_gateway fixture.
    """

    calls: List[Request] = []
    status: int = 200
    data: Any = "success"
    headers: Dict[str, Any] = {}
    error: Optional[Exception] = None

    async def call(self) -> Response:
        FakeGateway.calls.append(self.request)
        if FakeGateway.error is not None:
            raise FakeGateway.error
        return Response(self.request, FakeGateway.status, FakeGateway.data, dict(FakeGateway.headers))


@pytest.fixture
def fake_gateway():
    """Reset and return the FakeGateway class."""
    FakeGateway.calls = []
    FakeGateway.status = 200
    FakeGateway.data = "success"
    FakeGateway.headers = {}
    FakeGateway.error = None
    return FakeGateway


@pytest.fixture
def configs(fake_gateway):
    """Isolated Configs using FakeGateway."""
    return Configs(gateway=fake_gateway)


def build_manifest(middleware=None, client_id=None) -> Dict[str, Any]:
    """Manifest with a User resource (all, byId) and a Blog resource (post)."""
    manifest = {
        "host": "http://example.org",
        "resources": {
            "User": {
                "all": {"path": "/users"},
                "byId": {"path": "/users/{id}"},
            },
            "Blog": {
                "post": {"method": "post", "path": "/blogs"},
            },
        },
        "middleware": list(middleware or []),
    }
    if client_id is not None:
        manifest["clientId"] = client_id
    return manifest


@pytest.fixture
def make_client(configs):
    """Return a function forging a client from a middleware list."""

    def _make(middleware=None, client_id=None):
        return forge(build_manifest(middleware, client_id), configs)

    return _make


@pytest.fixture
def make_request():
    """Return a function building a Request for a path template."""

    def _make(path="/users/{id}", request_params=None, **descriptor):
        return Request(
            MethodDescriptor(host="http://example.org", path=path, **descriptor),
            request_params,
        )

    return _make


def header_middleware(context):
    """Marks the request and the response with an x-middleware-phase header."""

    class HeaderMiddleware:
        def request(self, request):
            return request.enhance({"headers": {"x-middleware-phase": "request"}})

        async def response(self, next, renew):
            response = await next()
            return response.enhance({"headers": {"x-middleware-phase": "response"}})

    return HeaderMiddleware()


class CountMiddleware:
    """
    Factory appending the order of response-phase execution to a shared stack.

    Every instance records its position and replaces the response data with
    the number of middleware that ran so far.
    """

    def __init__(self):
        self.stack: List[int] = []
        self.current = 0

    def __call__(self, context):
        counter = self

        class Instance:
            async def response(self, next, renew):
                position = counter.current
                counter.current += 1
                counter.stack.append(position)
                response = await next()
                return response.enhance({"data": counter.current})

        return Instance()


@pytest.fixture
def count_middleware():
    """Fresh CountMiddleware factory."""
    return CountMiddleware()


@pytest.fixture
def phase_header_middleware():
    """Factory marking both phases with an x-middleware-phase header."""
    return header_middleware
