# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Encodes structured request bodies as JSON.

Bodies that are dicts or lists are serialized and the content-type header is
set to application/json. String and bytes bodies are left untouched.
"""

import json

from mapsmith.middleware.base import Middleware
from mapsmith.request import Request

CONTENT_TYPE_JSON = "application/json;charset=utf-8"


class EncodeJson(Middleware):
    """Serialize dict/list bodies to JSON in the request phase."""

    def request(self, request: Request) -> Request:
        body = request.body()
        if not isinstance(body, (dict, list)):
            return request
        return request.enhance(
            {
                "headers": {"content-type": CONTENT_TYPE_JSON},
                "body": json.dumps(body, ensure_ascii=False),
            }
        )
