# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Gateways (transports) for Mapsmith clients.

    - Gateway: base class with HTTP method emulation helpers
    - HttpxGateway: default async HTTP transport
"""

from mapsmith.gateway.base import Gateway
from mapsmith.gateway.httpx_gateway import HttpxGateway

__all__ = ["Gateway", "HttpxGateway"]
