# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Gateway base class.

A gateway performs the actual I/O for a finalized Request. It is built once
per stack run as ``GatewayClass(request, gateway_configs)`` and awaited
through ``call()``. Gateways never mutate the Request they were given.
"""

import re
from typing import Any, Dict, Optional

from mapsmith.request import Request
from mapsmith.response import Response

_EMULATED_METHODS = re.compile(r"^(delete|put|patch)$", re.IGNORECASE)


class Gateway:
    """
    Base class for transports.

    Args:
        request: Finalized Request
        configs: Gateway configuration (see config.default_gateway_configs)
    """

    def __init__(self, request: Request, configs: Optional[Dict[str, Any]] = None):
        self.request = request
        self.configs = configs or {}

    def should_emulate_http(self) -> bool:
        """True when PUT/PATCH/DELETE must be sent as POST."""
        return bool(self.configs.get("emulate_http")) and bool(
            _EMULATED_METHODS.match(self.request.method())
        )

    def http_method(self) -> str:
        return "post" if self.should_emulate_http() else self.request.method()

    def prepare_request(self) -> Request:
        """
        Return the Request to put on the wire.

        With HTTP emulation the original method travels in the "_method"
        param and the X-HTTP-Method-Override header.
        """
        if not self.should_emulate_http():
            return self.request
        method = self.request.method().upper()
        return self.request.enhance(
            {
                "params": {"_method": method},
                "headers": {"x-http-method-override": method},
            }
        )

    async def call(self) -> Response:
        raise NotImplementedError(f"{type(self).__name__} must implement call()")
