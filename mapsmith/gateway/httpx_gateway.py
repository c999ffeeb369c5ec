# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Default gateway built on httpx.

A new httpx.AsyncClient is opened per call. Connection pooling, TLS and
retries are left to httpx and to the "configure" hook:

    configs.gateway_configs["HTTP"]["configure"] = lambda options: {
        **options, "transport": httpx.AsyncHTTPTransport(retries=2)
    }
"""

from typing import Any, Dict

import httpx
from loguru import logger

from mapsmith.config import HTTP_TIMEOUT
from mapsmith.gateway.base import Gateway
from mapsmith.response import Response


class HttpxGateway(Gateway):
    """Send requests with httpx.AsyncClient."""

    def client_options(self) -> Dict[str, Any]:
        """Keyword arguments for httpx.AsyncClient, after the configure hook."""
        http_configs = self.configs.get("HTTP") or {}
        options: Dict[str, Any] = {"timeout": http_configs.get("timeout", HTTP_TIMEOUT)}
        configure = http_configs.get("configure")
        if configure is not None:
            options = configure(options) or options
        return options

    async def call(self) -> Response:
        request = self.prepare_request()
        method = self.http_method().upper()
        headers = {key: str(value) for key, value in request.headers().items()}

        body = request.body()
        send_kwargs: Dict[str, Any] = {"headers": headers}
        if isinstance(body, (dict, list)):
            send_kwargs["json"] = body
        elif body is not None:
            send_kwargs["content"] = body

        async with httpx.AsyncClient(**self.client_options()) as client:
            http_response = await client.request(method, request.url(), **send_kwargs)

        logger.debug(
            "[Gateway] {} {} -> HTTP {}", method, request.url(), http_response.status_code
        )
        return self.create_response(http_response)

    def create_response(self, http_response: httpx.Response) -> Response:
        """Wrap an httpx.Response, decoding JSON payloads."""
        headers = dict(http_response.headers)
        content_type = http_response.headers.get("content-type", "")

        data: Any = http_response.text
        if "json" in content_type.lower() and http_response.content:
            try:
                data = http_response.json()
            except ValueError:
                logger.warning("[Gateway] Invalid JSON payload from {}", self.request.url())

        return Response(self.request, http_response.status_code, data, headers)
