# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Middleware contract.

A middleware factory is called once per generated-method call with a
MiddlewareContext and returns an instance. The instance may define:

    request(request) -> Request | Awaitable[Request]
    response(next, renew) -> Awaitable[Response]

Either hook is optional. Instances can be objects (subclassing Middleware
is convenient but not required), plain dicts of callables, or None.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from mapsmith.request import Request
from mapsmith.response import Response

Next = Callable[[], Awaitable[Response]]
Renew = Callable[[], Awaitable[Response]]
RequestHookResult = Union[Request, Awaitable[Request]]


@dataclass(frozen=True)
class MiddlewareContext:
    """
    Binding information handed to middleware factories.

    Attributes:
        resource_name: Resource the call belongs to (e.g. "User")
        resource_method: Method being called (e.g. "byId")
        context: Read-only snapshot of the configured context
        client_id: Manifest client id, if any
    """

    resource_name: str
    resource_method: str
    context: Mapping[str, Any] = field(default_factory=dict)
    client_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))


class Middleware:
    """
    Base class with pass-through hooks.

    Subclasses override ``request`` and/or ``response``. The class itself can
    be listed as a factory since its constructor takes the MiddlewareContext.
    """

    def __init__(self, context: MiddlewareContext):
        self.context = context

    def request(self, request: Request) -> RequestHookResult:
        return request

    async def response(self, next: Next, renew: Renew) -> Response:
        return await next()


def get_hook(instance: Any, name: str) -> Optional[Callable[..., Any]]:
    """
    Return the ``name`` hook of a middleware instance, or None when absent.

    Args:
        instance: Middleware instance (object, mapping or None)
        name: "request" or "response"
    """
    if instance is None:
        return None
    if isinstance(instance, Mapping):
        hook = instance.get(name)
    else:
        hook = getattr(instance, name, None)
    return hook if callable(hook) else None
