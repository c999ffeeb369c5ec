# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
HTTP Basic authentication.

Usage:
    manifest = {"middleware": [BasicAuth("bob", "secret")], ...}

Requests that already carry an Authorization header are left untouched.
"""

import base64
from typing import Callable

from mapsmith.middleware.base import Middleware, MiddlewareContext
from mapsmith.request import Request


class _BasicAuthMiddleware(Middleware):
    def __init__(self, context: MiddlewareContext, authorization: str):
        super().__init__(context)
        self._authorization = authorization

    def request(self, request: Request) -> Request:
        if request.header("authorization"):
            return request
        return request.enhance({"headers": {"authorization": self._authorization}})


def BasicAuth(username: str, password: str) -> Callable[[MiddlewareContext], Middleware]:
    """
    Build a middleware factory adding a Basic Authorization header.

    Args:
        username: User name
        password: Password

    Returns:
        Middleware factory for the manifest or global middleware list
    """
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    authorization = f"Basic {token}"

    def factory(context: MiddlewareContext) -> Middleware:
        return _BasicAuthMiddleware(context, authorization)

    factory.__name__ = "BasicAuth"
    return factory
