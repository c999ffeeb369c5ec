# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Client construction.

ClientBuilder turns a Manifest into a Client object exposing one attribute
per resource and one async method per resource method:

    client = ClientBuilder(manifest, lambda: HttpxGateway, configs).build()
    response = await client.User.byId({"id": 1})
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

from mapsmith.config import Configs
from mapsmith.errors import GatewayNotConfiguredError, InvalidManifestError
from mapsmith.manifest import Manifest, ResourceMethod
from mapsmith.middleware.chain import MiddlewareChain
from mapsmith.request import Request
from mapsmith.response import Response

GatewayClassFactory = Callable[[], Optional[type]]


class Resource:
    """Namespace holding the generated methods of one resource."""

    def __init__(self, name: str, methods: Dict[str, Callable[..., Any]]):
        self._name = name
        self._methods = methods
        for method_name, method in methods.items():
            setattr(self, method_name, method)

    def __repr__(self) -> str:
        return f"Resource({self._name}: {', '.join(self._methods)})"


class Client:
    """Generated client: one attribute per resource."""

    def __init__(self, manifest: Manifest):
        self._manifest = manifest

    def __repr__(self) -> str:
        return f"Client({', '.join(self._manifest.resources)})"


class ClientBuilder:
    """
    Builds clients and runs their calls through the middleware chain.

    Args:
        manifest: Manifest mapping
        gateway_class_factory: Returns the gateway class to use; called at
                               construction (validation) and on every call
        configs: Configs instance

    Raises:
        InvalidManifestError: If manifest is missing or empty
        GatewayNotConfiguredError: If no gateway class is available
    """

    def __init__(
        self,
        manifest: Optional[Mapping[str, Any]],
        gateway_class_factory: Optional[GatewayClassFactory],
        configs: Configs,
    ):
        if not manifest:
            raise InvalidManifestError(manifest)

        if not gateway_class_factory or not gateway_class_factory():
            raise GatewayNotConfiguredError()

        self.configs = configs
        self.manifest = Manifest(dict(manifest), configs)
        self.gateway_class_factory = gateway_class_factory

    def build(self) -> Client:
        client = Client(self.manifest)

        def add_resource(name: str, methods: List[ResourceMethod]) -> None:
            setattr(client, name, self.build_resource(name, methods))

        self.manifest.each_resource(add_resource)
        return client

    def build_resource(self, resource_name: str, methods: List[ResourceMethod]) -> Resource:
        return Resource(
            resource_name,
            {method.name: self._build_method(resource_name, method) for method in methods},
        )

    def _build_method(self, resource_name: str, method: ResourceMethod) -> Callable[..., Any]:
        async def call(request_params: Optional[Mapping[str, Any]] = None) -> Response:
            request = Request(method.descriptor, request_params)
            return await self.invoke_middleware(resource_name, method.name, request)

        call.__name__ = method.name
        call.__qualname__ = f"{resource_name}.{method.name}"
        return call

    async def invoke_middleware(
        self, resource_name: str, resource_method: str, initial_request: Request
    ) -> Response:
        """
        Run one call through the middleware chain and the gateway.

        Args:
            resource_name: Resource being called
            resource_method: Method being called
            initial_request: Request built from the method template

        Returns:
            Final Response
        """
        gateway_configs = self.manifest.gateway_configs

        # Resolved per run, so a renewal sees the current gateway class
        async def call_gateway(final_request: Request) -> Response:
            gateway_class = self.gateway_class_factory()
            if not gateway_class:
                raise GatewayNotConfiguredError()
            return await gateway_class(final_request, gateway_configs).call()

        chain = MiddlewareChain(
            resource_name,
            resource_method,
            lambda: self.manifest.create_middleware(resource_name, resource_method),
            call_gateway,
            self.configs.max_middleware_stack_execution_allowed,
        )
        return await chain.invoke(initial_request)
