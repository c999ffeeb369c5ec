# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Middleware chain executor.

Runs one generated-method call through its middleware in two phases:

  1. Request phase - ``request`` hooks run left to right, each one receiving
     the Request produced by the previous hook.
  2. Response phase - ``response`` hooks are composed right to left around
     the gateway call, so the first middleware is the outermost wrapper.
     Each hook receives ``next`` (the rest of the chain) and ``renew``.

``renew()`` runs both phases again from the original Request. All runs of
one call share an execution counter; when it goes past the configured bound
the call fails with InfiniteLoopError before any hook of that run executes.
"""

import inspect
from typing import Any, Awaitable, Callable, List

from loguru import logger

from mapsmith.errors import InfiniteLoopError, StaleRenewError
from mapsmith.middleware.base import Next, Renew, get_hook
from mapsmith.request import Request
from mapsmith.response import Response


async def _resolve(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


class _ExecutionState:
    """Counter and completion flag shared by one call and all its renewals."""

    __slots__ = ("executions", "completed")

    def __init__(self):
        self.executions = 0
        self.completed = False


class MiddlewareChain:
    """
    Executor for one resource method.

    Args:
        resource_name: Resource the chain belongs to
        resource_method: Method the chain belongs to
        create_middleware: Returns a fresh ordered list of middleware
                           instances; called once per stack run
        call_gateway: Coroutine function sending a finalized Request
        max_executions: Stack runs allowed per call (loop guard bound)

    Example:
        >>> chain = MiddlewareChain("User", "byId", lambda: [], send, 2)
        >>> response = await chain.invoke(request)
    """

    def __init__(
        self,
        resource_name: str,
        resource_method: str,
        create_middleware: Callable[[], List[Any]],
        call_gateway: Callable[[Request], Awaitable[Response]],
        max_executions: int,
    ):
        self.resource_name = resource_name
        self.resource_method = resource_method
        self._create_middleware = create_middleware
        self._call_gateway = call_gateway
        self.max_executions = max_executions

    async def invoke(self, initial_request: Request) -> Response:
        """
        Run the call, including any renewals requested by middleware.

        Args:
            initial_request: Request built from the method template and call params

        Returns:
            Response produced by the outermost response hook (or the gateway)

        Raises:
            InfiniteLoopError: When renewals exceed the configured bound
            Exception: Anything raised by a hook or the gateway, unchanged
        """
        state = _ExecutionState()
        try:
            return await self._execute(initial_request, state)
        finally:
            state.completed = True

    async def _execute(self, initial_request: Request, state: _ExecutionState) -> Response:
        state.executions += 1
        if state.executions > self.max_executions:
            raise InfiniteLoopError(state.executions)

        logger.debug(
            "[Chain] {}.{}: middleware stack execution {}",
            self.resource_name,
            self.resource_method,
            state.executions,
        )

        middleware = self._create_middleware()
        final_request = await self._run_request_phase(middleware, initial_request)
        renew = self._make_renew(initial_request, state)
        execute = self._compose_response_phase(middleware, final_request, renew)
        return await execute()

    async def _run_request_phase(self, middleware: List[Any], request: Request) -> Request:
        for instance in middleware:
            hook = get_hook(instance, "request")
            if hook is None:
                continue
            result = await _resolve(hook(request))
            # A hook returning nothing keeps the current request
            if result is not None:
                request = result
        return request

    def _compose_response_phase(
        self, middleware: List[Any], final_request: Request, renew: Renew
    ) -> Next:
        call_gateway = self._call_gateway

        async def gateway_call() -> Response:
            return await call_gateway(final_request)

        execute: Next = gateway_call
        for instance in reversed(middleware):
            hook = get_hook(instance, "response")
            if hook is None:
                continue
            execute = _wrap_response_hook(hook, execute, renew)
        return execute

    def _make_renew(self, initial_request: Request, state: _ExecutionState) -> Renew:
        def renew() -> Awaitable[Response]:
            if state.completed:
                raise StaleRenewError(self.resource_name, self.resource_method)
            return self._execute(initial_request, state)

        return renew


def _wrap_response_hook(hook: Callable[..., Any], next_call: Next, renew: Renew) -> Next:
    async def wrapped() -> Response:
        return await _resolve(hook(next_call, renew))

    return wrapped
