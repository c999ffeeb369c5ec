# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Manifest: declarative description of a client.

Example:
    >>> manifest = Manifest({
    ...     "host": "https://api.test",
    ...     "clientId": "github",
    ...     "resources": {
    ...         "User": {
    ...             "all": {"path": "/users"},
    ...             "byId": {"path": "/users/{id}"},
    ...         },
    ...     },
    ...     "middleware": [EncodeJson],
    ... }, configs)
    >>> manifest.each_resource(lambda name, methods: print(name, [m.name for m in methods]))
    User ['all', 'byId']
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from mapsmith.config import Configs
from mapsmith.middleware.base import MiddlewareContext
from mapsmith.request import MethodDescriptor


class ManifestDefinition(BaseModel):
    """Validated shape of a manifest mapping."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    host: str = ""
    client_id: Optional[str] = Field(default=None, alias="clientId")
    resources: Dict[str, Dict[str, Dict[str, Any]]] = Field(default_factory=dict)
    middleware: List[Callable[..., Any]] = Field(default_factory=list)
    gateway_configs: Dict[str, Any] = Field(default_factory=dict, alias="gatewayConfigs")


@dataclass(frozen=True)
class ResourceMethod:
    """A named method of a resource and its request template."""

    name: str
    descriptor: MethodDescriptor


def _merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two config dicts, one level deep for nested dicts."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


class Manifest:
    """
    Parsed manifest bound to a Configs instance.

    Args:
        definition: Manifest mapping (host, clientId, resources, middleware, gatewayConfigs)
        configs: Configs providing context, global middleware and gateway configs
    """

    def __init__(self, definition: Dict[str, Any], configs: Configs):
        parsed = ManifestDefinition.model_validate(definition)
        self.configs = configs
        self.host = parsed.host
        self.client_id = parsed.client_id
        self.gateway_configs = _merge_configs(configs.gateway_configs, parsed.gateway_configs)
        self.middleware = list(parsed.middleware) + list(configs.middleware)
        self.resources = self._parse_resources(parsed.resources)

    def _parse_resources(
        self, resources: Dict[str, Dict[str, Dict[str, Any]]]
    ) -> Dict[str, List[ResourceMethod]]:
        parsed = {}
        for resource_name, methods in resources.items():
            parsed[resource_name] = [
                ResourceMethod(
                    name=method_name,
                    descriptor=MethodDescriptor.model_validate({"host": self.host, **definition}),
                )
                for method_name, definition in methods.items()
            ]
        return parsed

    def each_resource(self, callback: Callable[[str, List[ResourceMethod]], Any]) -> None:
        for resource_name, methods in self.resources.items():
            callback(resource_name, methods)

    def create_middleware(self, resource_name: str, resource_method: str) -> List[Any]:
        """
        Instantiate every middleware factory for one call.

        The configured context is read now, so each call (and each renewal)
        sees the latest value set through Configs.set_context.

        Returns:
            Ordered list of middleware instances (None for factories that
            returned nothing)
        """
        binding = MiddlewareContext(
            resource_name=resource_name,
            resource_method=resource_method,
            context=self.configs.context,
            client_id=self.client_id,
        )
        return [factory(binding) for factory in self.middleware]
