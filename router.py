"""Ordered path routing table for request strategies."""

from collections.abc import Callable
from dataclasses import dataclass

from request import ParsedRequest
from response import HTTPResponse

Handler = Callable[[ParsedRequest], HTTPResponse]


@dataclass(frozen=True, slots=True)
class Route:
    pattern: str
    handler: Handler
    prefix: bool

    def matches(self, path: str) -> bool:
        if self.prefix:
            return path.startswith(self.pattern)
        return path == self.pattern


class Router:
    """Routes on the path alone; the first matching rule wins."""

    def __init__(self, fallback: Handler) -> None:
        self._routes: list[Route] = []
        self._fallback = fallback

    def add_prefix_route(self, prefix: str, handler: Handler) -> None:
        self._add(Route(pattern=prefix, handler=handler, prefix=True))

    def add_exact_route(self, path: str, handler: Handler) -> None:
        self._add(Route(pattern=path, handler=handler, prefix=False))

    def _add(self, route: Route) -> None:
        if not route.pattern.startswith("/"):
            raise ValueError("path must start with '/'")
        self._routes.append(route)

    def resolve(self, path: str) -> Handler:
        for route in self._routes:
            if route.matches(path):
                return route.handler
        return self._fallback

    def dispatch(self, request: ParsedRequest) -> HTTPResponse:
        return self.resolve(request.path)(request)
