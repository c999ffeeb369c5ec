# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Response value object.

Wraps the outcome of a gateway call (or a response built by middleware)
together with the finalized Request that produced it.
"""

from typing import Any, Dict, Mapping, Optional

from mapsmith.request import Request


class Response:
    """
    Immutable outcome of a request.

    Args:
        request: Finalized Request (after all request-phase middleware)
        status: HTTP status code
        data: Decoded payload
        headers: Response headers (names are lower-cased)
    """

    __slots__ = ("_request", "_status", "_data", "_headers")

    def __init__(
        self,
        request: Request,
        status: int,
        data: Any = None,
        headers: Optional[Mapping[str, Any]] = None,
    ):
        self._request = request
        self._status = status
        self._data = data
        self._headers = {str(key).lower(): value for key, value in (headers or {}).items()}

    def request(self) -> Request:
        return self._request

    def status(self) -> int:
        return self._status

    def data(self) -> Any:
        return self._data

    def headers(self) -> Dict[str, Any]:
        return dict(self._headers)

    def header(self, name: str) -> Optional[Any]:
        return self._headers.get(name.lower())

    def success(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self._status < 300

    def is_content_type_json(self) -> bool:
        content_type = self.header("content-type") or ""
        return "json" in str(content_type).lower()

    def enhance(self, extras: Mapping[str, Any]) -> "Response":
        """
        Return a new Response with ``extras`` merged in.

        ``status`` and ``data`` are replaced, ``headers`` are merged.
        """
        headers = dict(self._headers)
        headers.update({str(key).lower(): value for key, value in (extras.get("headers") or {}).items()})
        return Response(
            self._request,
            extras.get("status", self._status),
            extras.get("data", self._data),
            headers,
        )

    def __repr__(self) -> str:
        return f"Response({self._status} for {self._request!r})"
