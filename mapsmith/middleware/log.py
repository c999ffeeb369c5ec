# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Request/response logging middleware.

Writes one line per outgoing request and one per outcome through loguru.
Failures are logged and re-raised unchanged.
"""

from loguru import logger

from mapsmith.middleware.base import Middleware, Next, Renew
from mapsmith.request import Request
from mapsmith.response import Response


class Log(Middleware):
    """Log requests and responses of every call."""

    def request(self, request: Request) -> Request:
        logger.info(
            "[Log] -> {} {} ({}.{})",
            request.method().upper(),
            request.url(),
            self.context.resource_name,
            self.context.resource_method,
        )
        return request

    async def response(self, next: Next, renew: Renew) -> Response:
        try:
            response = await next()
        except Exception as e:
            logger.error(
                "[Log] <- failed {}.{}: {}",
                self.context.resource_name,
                self.context.resource_method,
                e,
            )
            raise

        if not isinstance(response, Response):
            return response

        request = response.request()
        logger.info(
            "[Log] <- {} {} {}",
            response.status(),
            request.method().upper(),
            request.url(),
        )
        return response
