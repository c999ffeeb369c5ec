# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Middleware support for Mapsmith clients.

Architecture:
    Every call of a generated method gets a fresh list of middleware
    instances, built by calling each factory with a MiddlewareContext.
    MiddlewareChain then runs the request phase left to right and the
    response phase as an onion around the gateway call.

Middleware order:
    1. Manifest middleware, in declared order
    2. Global middleware (configs.middleware), in declared order

Built-in middleware:
    - EncodeJson - Serialize dict/list bodies as JSON
    - BasicAuth  - Add a Basic Authorization header
    - Log        - Log requests and responses with loguru
"""

from mapsmith.middleware.base import Middleware, MiddlewareContext, get_hook
from mapsmith.middleware.basic_auth import BasicAuth
from mapsmith.middleware.chain import MiddlewareChain
from mapsmith.middleware.encode_json import EncodeJson
from mapsmith.middleware.log import Log

__all__ = [
    "Middleware",
    "MiddlewareContext",
    "MiddlewareChain",
    "get_hook",
    "BasicAuth",
    "EncodeJson",
    "Log",
]
