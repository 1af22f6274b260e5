"""Gateway routes and a router that finds the route for a request."""

from __future__ import annotations

from dataclasses import dataclass, field

from cloudless.gateway.matcher import Matcher


@dataclass
class Resource:
    """A callable backend resource, such as a function."""

    url: str = ""
    name: str = ""


@dataclass
class Security:
    """Security settings of a route."""

    authorizer: str = ""


@dataclass
class Route:
    """Maps an HTTP method and URI template to a resource."""

    uri: str = ""
    http_method: str = ""
    uri_params: list[str] = field(default_factory=list)
    resource: Resource | None = None
    security: Security | None = None


Routes = list[Route]
Authorizers = list[Resource]


class _RouteMatchable:
    """Exposes a route to the matcher, namespaced by its HTTP method."""

    def __init__(self, route: Route) -> None:
        self.route = route

    def uri(self) -> str:
        return self.route.uri

    def namespaces(self) -> list[str]:
        return [self.route.http_method]


class Router:
    """Finds the single route matching a method and request URI."""

    def __init__(self, routes: list[Route]) -> None:
        self._matcher = Matcher([_RouteMatchable(route) for route in routes])

    def find_route(self, method: str, request_uri: str) -> Route:
        """Return the matching route; raise LookupError when there is none."""
        try:
            matched = self._matcher.match_one(method, request_uri)
        except Exception as err:
            raise LookupError(str(err)) from err
        if matched is None:
            raise LookupError(f"couldn't match URI {request_uri}")
        return matched.route