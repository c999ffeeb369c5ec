# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Request value object.

A Request combines a resource method's fixed template (MethodDescriptor) with
the params given at call time. Requests are never mutated: ``enhance()``
returns a new instance, which is how middleware transforms a request.

Example:
    >>> descriptor = MethodDescriptor(host="https://api.test", path="/users/{id}")
    >>> request = Request(descriptor, {"id": 1, "active": True})
    >>> request.url()
    'https://api.test/users/1?active=True'
    >>> request.enhance({"headers": {"Token": "abc"}}).header("token")
    'abc'
"""

import re
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote, urlencode

from pydantic import BaseModel, ConfigDict, Field

_PLACEHOLDER = re.compile(r"\{([^}]+)\}")


class MethodDescriptor(BaseModel):
    """Fixed template of a resource method, as declared in the manifest."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    host: str = ""
    path: str = "/"
    method: str = "get"
    headers: Dict[str, Any] = Field(default_factory=dict)
    params: Dict[str, Any] = Field(default_factory=dict)
    body_attr: str = Field(default="body", alias="bodyAttr")
    headers_attr: str = Field(default="headers", alias="headersAttr")
    host_attr: str = Field(default="host", alias="hostAttr")


def _lower_keys(headers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return {str(key).lower(): value for key, value in (headers or {}).items()}


class Request:
    """
    Immutable description of an HTTP call.

    Args:
        method_descriptor: Template of the resource method
        request_params: Params given by the caller; the descriptor's
                        ``body_attr``/``headers_attr``/``host_attr`` keys are
                        reserved for body, headers and host
    """

    __slots__ = ("_descriptor", "_request_params")

    def __init__(
        self,
        method_descriptor: MethodDescriptor,
        request_params: Optional[Mapping[str, Any]] = None,
    ):
        self._descriptor = method_descriptor
        self._request_params: Dict[str, Any] = dict(request_params or {})
        # Header names are stored lower-cased so later writes replace earlier ones
        headers_attr = method_descriptor.headers_attr
        if self._request_params.get(headers_attr):
            self._request_params[headers_attr] = _lower_keys(self._request_params[headers_attr])

    @property
    def method_descriptor(self) -> MethodDescriptor:
        return self._descriptor

    def _special_keys(self) -> tuple:
        d = self._descriptor
        return (d.body_attr, d.headers_attr, d.host_attr)

    def params(self) -> Dict[str, Any]:
        """Descriptor params merged with call-time params (reserved keys excluded)."""
        special = self._special_keys()
        merged = dict(self._descriptor.params)
        for key, value in self._request_params.items():
            if key not in special:
                merged[key] = value
        return merged

    def method(self) -> str:
        return self._descriptor.method.lower()

    def host(self) -> str:
        host = self._request_params.get(self._descriptor.host_attr) or self._descriptor.host
        return host.rstrip("/")

    def path(self) -> str:
        """
        Build the path, filling ``{name}`` placeholders from params.

        Params not consumed by a placeholder are appended as the query string.
        Params set to None are dropped.
        """
        params = {key: value for key, value in self.params().items() if value is not None}
        used = set()

        def substitute(match: "re.Match") -> str:
            name = match.group(1)
            if name not in params:
                return match.group(0)
            used.add(name)
            return quote(str(params[name]), safe="")

        path = _PLACEHOLDER.sub(substitute, self._descriptor.path)
        if not path.startswith("/"):
            path = "/" + path

        query = {key: value for key, value in params.items() if key not in used}
        if query:
            path = f"{path}?{urlencode(query, doseq=True)}"
        return path

    def url(self) -> str:
        return f"{self.host()}{self.path()}"

    def headers(self) -> Dict[str, Any]:
        """Descriptor headers merged with call-time headers, names lower-cased."""
        merged = _lower_keys(self._descriptor.headers)
        merged.update(_lower_keys(self._request_params.get(self._descriptor.headers_attr)))
        return merged

    def header(self, name: str) -> Optional[Any]:
        """Case-insensitive header lookup."""
        return self.headers().get(name.lower())

    def body(self) -> Optional[Any]:
        return self._request_params.get(self._descriptor.body_attr)

    def enhance(self, extras: Mapping[str, Any]) -> "Request":
        """
        Return a new Request with ``extras`` merged in.

        Args:
            extras: Any of ``params``, ``headers`` (merged), ``body`` and
                    ``host`` (replaced)

        Returns:
            New Request; this instance is left untouched
        """
        d = self._descriptor
        request_params = dict(self._request_params)
        request_params[d.headers_attr] = _lower_keys(self._request_params.get(d.headers_attr))

        if extras.get("params"):
            request_params.update(extras["params"])
        if extras.get("headers"):
            request_params[d.headers_attr].update(_lower_keys(extras["headers"]))
        if extras.get("body") is not None:
            request_params[d.body_attr] = extras["body"]
        if extras.get("host"):
            request_params[d.host_attr] = extras["host"]

        return Request(d, request_params)

    def __repr__(self) -> str:
        return f"Request({self.method().upper()} {self.url()})"
