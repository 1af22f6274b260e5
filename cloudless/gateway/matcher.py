"""Route matching by HTTP method and URI segments, with path wildcards."""

from __future__ import annotations

from typing import Protocol, Sequence


class Matchable(Protocol):
    def uri(self) -> str: ...

    def namespaces(self) -> Sequence[str]: ...


def as_relative(route: str) -> str:
    """Strip leading slashes and the query string from ``route``."""
    if not route:
        return route
    i = 0
    while i < len(route) and route[i] == "/":
        i += 1
    if i >= len(route) - 1:
        return route
    route = route[i:]
    return route.split("?", 1)[0]


def _extract_segment(uri: str) -> tuple[str, str]:
    uri = as_relative(uri)
    segment, sep, remaining = uri.partition("/")
    return (segment, remaining) if sep else (uri, "")


class Node:
    """A tree node holding the routes that end at this URI segment."""

    def __init__(self) -> None:
        self.matched: list[int] = []
        self.exact_children: list[Node] = []
        self.wildcard_matcher: Node | None = None
        self._url_index: dict[str, int] = {}
        self._positions: set[int] = set()
        self._suffix = False

    def add(self, route_index: int, uri: str) -> None:
        if uri == "":
            if route_index not in self._positions:
                self.matched.append(route_index)
                self._positions.add(route_index)
            return
        segment, remaining = _extract_segment(uri)
        if segment.startswith("*"):
            child = self._wildcard()
            child._suffix = True
        elif segment.startswith("{"):
            child = self._wildcard()
        else:
            child = self._child(segment)
        child.add(route_index, remaining)

    def _child(self, segment: str) -> "Node":
        index = self._url_index.get(segment)
        if index is not None:
            return self.exact_children[index]
        self._url_index[segment] = len(self.exact_children)
        child = Node()
        self.exact_children.append(child)
        return child

    def _wildcard(self) -> "Node":
        if self.wildcard_matcher is None:
            self.wildcard_matcher = Node()
        return self.wildcard_matcher

    def _next_matcher(self, segment: str) -> "Node | None":
        index = self._url_index.get(segment)
        if index is not None:
            return self.exact_children[index]
        return self.wildcard_matcher

    def match(self, method: str, route: str, exact: bool, dest: list["Node"] | None = None) -> list["Node"]:
        """Append the nodes matching ``route`` to ``dest`` and return it."""
        if dest is None:
            dest = []
        if route == "":
            dest.append(self)
            return dest
        segment, remaining = _extract_segment(route)
        node = self._next_matcher(segment)
        if node is not None:
            if node._suffix:
                dest.append(node)
                return dest
            return node.match(method, remaining, exact, dest)
        if self.wildcard_matcher is None and not self.exact_children and not exact:
            dest.append(self)
        return dest


class Matcher:
    """Indexes matchables by namespace and URI for lookup."""

    def __init__(self, matchables: Sequence[Matchable]) -> None:
        self.matchables: list[Matchable] = list(matchables)
        self.nodes: list[Node] = []
        self._method_index: dict[str, int] = {}
        for i, route in enumerate(self.matchables):
            uri = as_relative(route.uri())
            for namespace in route.namespaces():
                self._node_for(namespace).add(i, uri)
                self._node_for("").add(i, uri)

    def _node_for(self, method: str) -> Node:
        index = self._method_index.get(method)
        if index is not None:
            return self.nodes[index]
        node = Node()
        self._method_index[method] = len(self.nodes)
        self.nodes.append(node)
        return node

    def _match(self, method: str, route: str, exact: bool) -> list[Node]:
        index = self._method_index.get(method)
        if index is None:
            raise LookupError(f"couldn't match URI {route}")
        matched = self.nodes[index].match(method, as_relative(route), exact)
        if not matched:
            raise LookupError(f"couldn't match URI {route}")
        return matched

    def _flatten(self, nodes: list[Node]) -> list[Matchable]:
        return [self.matchables[i] for node in nodes for i in node.matched]

    def match_prefix(self, method: str, uri_path: str) -> list[Matchable]:
        """Return routes matching ``uri_path`` or one of its prefixes."""
        return self._flatten(self._match(method, uri_path, False))

    def match_one(self, namespace: str, uri: str) -> Matchable:
        """Return the single route matching ``uri`` exactly.

        Raises LookupError when nothing matches and ValueError when several do.
        """
        nodes = self._match(namespace, uri, True)
        if len(nodes) == 1 and not nodes[0].matched:
            raise LookupError(f"couldn't match URI {uri}")
        if len(nodes) > 1 or len(nodes[0].matched) > 1:
            raise ValueError(f"matched more than one route for {uri}")
        return self.matchables[nodes[0].matched[0]]

    def match_all(self, namespace: str, uri: str) -> list[Matchable]:
        try:
            return self._flatten(self._match(namespace, uri, True))
        except LookupError:
            return []