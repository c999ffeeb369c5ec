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
Mapsmith Configuration.

Environment-driven defaults plus the ``Configs`` object consumed by
ClientBuilder and the middleware chain.

Module-level constants are read once at import time. ``Configs`` takes its
defaults from them, so tests can build isolated instances without touching
the process-wide ``mapsmith.configs``.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

_TRUTHY = ("true", "1", "yes", "enabled", "on")

# ==================================================================================================
# Middleware Settings
# ==================================================================================================

# Maximum number of middleware stack executions for one call.
# In the response phase a middleware may call "renew" to run the whole stack
# again (e.g. after refreshing an expired access token). Every run counts
# toward this limit; exceeding it is treated as an infinite loop.
# Don't increase this value too much.
# Default: 2
MAX_MIDDLEWARE_STACK_EXECUTION_ALLOWED: int = int(
    os.getenv("MAX_MIDDLEWARE_STACK_EXECUTION_ALLOWED", "2")
)

# ==================================================================================================
# Gateway Settings
# ==================================================================================================

# Fake PUT, PATCH and DELETE requests with a HTTP POST.
# Adds "_method" param and "X-HTTP-Method-Override" header with the original method.
# Default: false
_EMULATE_HTTP_RAW: str = os.getenv("EMULATE_HTTP", "false").lower()
EMULATE_HTTP: bool = _EMULATE_HTTP_RAW in _TRUTHY

# Timeout for HTTP gateway calls (seconds).
# Default: 30
HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "30"))

# ==================================================================================================
# Logging Settings
# ==================================================================================================

# Log level for the library
# Available levels: TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL
# Default: INFO
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ==================================================================================================
# Application Version
# ==================================================================================================

APP_VERSION: str = "2.3"
APP_TITLE: str = "Mapsmith"


def default_gateway_configs() -> Dict[str, Any]:
    """
    Return a fresh copy of the default gateway configuration.

    Keys:
        emulate_http: Send PUT/PATCH/DELETE as POST with method override
        HTTP: Settings for HttpxGateway
            configure: Optional callable receiving the httpx.AsyncClient
                       keyword arguments and returning the ones to use
            timeout: Request timeout in seconds
    """
    return {
        "emulate_http": EMULATE_HTTP,
        "HTTP": {
            "configure": None,
            "timeout": HTTP_TIMEOUT,
        },
    }


@dataclass
class Configs:
    """
    Settings shared by every client forged from it.

    Attributes:
        context: Mapping handed to every middleware factory (read per call)
        middleware: Global middleware factories appended to each manifest's list
        max_middleware_stack_execution_allowed: Loop guard bound (stack runs per call)
        gateway: Gateway class used to perform requests
        gateway_configs: Transport settings passed to the gateway
    """

    context: Mapping[str, Any] = field(default_factory=dict)
    middleware: List[Callable[..., Any]] = field(default_factory=list)
    max_middleware_stack_execution_allowed: int = MAX_MIDDLEWARE_STACK_EXECUTION_ALLOWED
    gateway: Optional[type] = None
    gateway_configs: Dict[str, Any] = field(default_factory=default_gateway_configs)

    def set_context(self, context: Mapping[str, Any]) -> None:
        """
        Merge ``context`` into the current context.

        The mapping is replaced, not mutated, so snapshots taken by
        in-flight calls keep their values.
        """
        self.context = {**self.context, **context}
