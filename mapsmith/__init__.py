# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""
Mapsmith - declarative async clients with a middleware pipeline.

A manifest describes resources and their methods; forge() turns it into a
client whose calls run through the configured middleware and gateway.

    >>> client = forge({
    ...     "host": "https://api.test",
    ...     "resources": {"User": {"byId": {"path": "/users/{id}"}}},
    ... })
    >>> response = await client.User.byId({"id": 1})

Modules:
    - config: Environment settings and the Configs object
    - errors: Mapsmith error types
    - request / response: Immutable value objects
    - manifest: Manifest parsing and middleware instantiation
    - middleware: Middleware contract, chain executor and built-ins
    - gateway: Transports (httpx by default)
    - client_builder: Client generation
"""

from typing import Any, Mapping, Optional

from loguru import logger

# Version is imported from config.py
from mapsmith.config import APP_VERSION as __version__
from mapsmith.config import Configs
from mapsmith.client_builder import Client, ClientBuilder
from mapsmith.errors import (
    GatewayNotConfiguredError,
    InfiniteLoopError,
    InvalidManifestError,
    MapsmithError,
    StaleRenewError,
)
from mapsmith.gateway import Gateway, HttpxGateway
from mapsmith.logging_setup import setup_logging
from mapsmith.middleware import Middleware, MiddlewareContext
from mapsmith.request import MethodDescriptor, Request
from mapsmith.response import Response

logger.disable("mapsmith")

# Process-wide settings used by forge() unless a Configs instance is given
configs = Configs(gateway=HttpxGateway)


def _global_configs() -> Configs:
    return configs


def set_context(context: Mapping[str, Any]) -> None:
    """Merge ``context`` into the process-wide middleware context."""
    configs.set_context(context)


def forge(manifest: Mapping[str, Any], configs: Optional[Configs] = None) -> Client:
    """
    Build a client from a manifest.

    The gateway class is looked up on every call, so changing
    ``configs.gateway`` affects clients that were already built.

    Args:
        manifest: Manifest mapping
        configs: Settings to use (default: mapsmith.configs)

    Returns:
        Generated Client
    """
    active = configs if configs is not None else _global_configs()
    return ClientBuilder(manifest, lambda: active.gateway, active).build()


__all__ = [
    "__version__",
    "forge",
    "set_context",
    "configs",
    "Configs",
    "Client",
    "ClientBuilder",
    "Gateway",
    "HttpxGateway",
    "Middleware",
    "MiddlewareContext",
    "MethodDescriptor",
    "Request",
    "Response",
    "MapsmithError",
    "InvalidManifestError",
    "GatewayNotConfiguredError",
    "InfiniteLoopError",
    "StaleRenewError",
    "setup_logging",
]
