# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Errors raised by Mapsmith itself.

Hook and gateway errors are never wrapped; they reach the caller unchanged.
Message texts are kept stable so callers can match on them.
"""

from typing import Any


class MapsmithError(Exception):
    """Base class for errors raised by Mapsmith."""


class InvalidManifestError(MapsmithError):
    """Raised when a client is forged from a missing or falsy manifest."""

    def __init__(self, manifest: Any):
        self.manifest = manifest
        super().__init__(f"[Mapsmith] invalid manifest ({manifest})")


class GatewayNotConfiguredError(MapsmithError):
    """Raised when no gateway class is available at construction time."""

    def __init__(self):
        super().__init__("[Mapsmith] gateway class not configured (configs.gateway)")


class InfiniteLoopError(MapsmithError):
    """
    Raised by the loop guard when the middleware stack ran too many times.

    Attributes:
        executions: Stack execution count reached when the guard fired
    """

    def __init__(self, executions: int):
        self.executions = executions
        super().__init__(
            f"[Mapsmith] infinite loop detected (middleware stack invoked {executions} times). "
            'Check the use of "renew" in one of the middleware.'
        )


class StaleRenewError(MapsmithError):
    """Raised when ``renew`` is called after its invocation already finished."""

    def __init__(self, resource_name: str, resource_method: str):
        self.resource_name = resource_name
        self.resource_method = resource_method
        super().__init__(
            f"[Mapsmith] renew called after {resource_name}.{resource_method} completed"
        )
