from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Set,
    Tuple,
    Union,
    runtime_checkable,
)


INFINITY = float("inf")

Weight = Union[int, float]


@runtime_checkable
class Named(Protocol):
    """Anything the graph can hold: hashable and carrying a unique name."""

    @property
    def name(self) -> str:
        ...

    def __hash__(self) -> int:
        ...


@dataclass(frozen=True, order=True)
class Node:
    name: str

    def __str__(self) -> str:
        return self.name


class UnknownNodeError(ValueError):
    """Raised when a node is referenced before it was added to the graph."""

    def __init__(self, node: Any) -> None:
        self.node = node
        super().__init__(f"Node {_name(node)!r} is not registered in the graph.")


def _name(node: Any) -> str:
    return getattr(node, "name", str(node))


def _check_weight(weight: Weight) -> Weight:
    if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
        raise ValueError(f"Edge weight must be a number, got {weight!r}.")
    if math.isnan(weight):
        raise ValueError("Edge weight must not be NaN.")
    if weight < 0:
        raise ValueError(f"Negative edge weight {weight} is not supported.")
    return weight


class Graph:
    """Directed weighted graph backed by a dense distance table.

    Every registered node owns a row in the table. A missing entry means the
    pair is unreachable, so ``weight`` answers ``INFINITY`` for it.
    """

    def __init__(
        self,
        nodes: Iterable[Named] = (),
        edges: Iterable[Tuple[Named, Named, Weight]] = (),
    ) -> None:
        self._weights: Dict[Named, Dict[Named, Weight]] = {}
        self._by_name: Dict[str, Named] = {}
        self._attributes: Dict[Named, Dict[str, Any]] = {}
        self.start: Optional[Named] = None
        self.target: Optional[Named] = None

        for node in nodes:
            self.add_node(node)
        for origin, target, cost in edges:
            self.set_weight(origin, target, cost)

    @property
    def nodes(self) -> FrozenSet[Named]:
        return frozenset(self._weights)

    def __contains__(self, node: object) -> bool:
        return node in self._weights

    def __len__(self) -> int:
        return len(self._weights)

    def add_node(self, node: Named) -> None:
        if node in self:
            return
        self._weights[node] = {node: 0}
        self._by_name[node.name] = node

    def node(self, name: str) -> Named:
        """Look up a registered node by its name."""
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownNodeError(name) from None

    def require(self, *nodes: Named) -> None:
        for node in nodes:
            if node not in self:
                raise UnknownNodeError(node)

    def set_weight(self, origin: Named, target: Named, weight: Weight) -> None:
        self.require(origin, target)
        self._weights[origin][target] = _check_weight(weight)

    def add_edge(
        self, origin: Named, target: Named, cost: Weight, bidirectional: bool = False
    ) -> None:
        self.set_weight(origin, target, cost)
        if bidirectional:
            self.set_weight(target, origin, cost)

    def weight(self, origin: Named, target: Named) -> Weight:
        self.require(origin, target)
        return self._weights[origin].get(target, INFINITY)

    def neighbors(self, node: Named) -> Set[Named]:
        """Nodes with any recorded entry from ``node``, itself and infinite ones included."""
        self.require(node)
        return set(self._weights[node])

    def edges(self) -> Iterator[Tuple[Named, Named, Weight]]:
        """Yield finite, non-self entries in name order."""
        for origin in sorted(self._weights, key=_name):
            row = self._weights[origin]
            for target in sorted(row, key=_name):
                cost = row[target]
                if target != origin and cost != INFINITY:
                    yield origin, target, cost

    def set_endpoints(self, start: Named, target: Named) -> None:
        self.require(start, target)
        self.start = start
        self.target = target

    def set_attributes(self, node: Named, **attributes: Any) -> None:
        self.require(node)
        self._attributes.setdefault(node, {}).update(attributes)

    def attributes(self, node: Named) -> Dict[str, Any]:
        self.require(node)
        return dict(self._attributes.get(node, {}))

    def path_cost(self, path: Sequence[Named]) -> Weight:
        """Return the total cost of walking along the given node sequence."""
        if len(path) < 2:
            return 0

        total_cost: Weight = 0
        for u, v in zip(path[:-1], path[1:]):
            edge_cost = self.weight(u, v)
            if edge_cost == INFINITY:
                raise ValueError(f"Edge {_name(u)}->{_name(v)} not present in graph.")
            total_cost += edge_cost
        return total_cost


def graph_from_config(graph_config: Mapping[str, Any]) -> Graph:
    """Build a graph from the ``graph`` section of a problem instance.

    Edges are ``[origin, target, cost]`` triples naming registered nodes. Unless
    ``directed`` is true each edge is recorded in both directions.
    """
    directed = bool(graph_config.get("directed", False))
    names: List[str] = [str(name) for name in graph_config["nodes"]]
    graph = Graph(Node(name) for name in names)

    for entry in graph_config.get("edges", []):
        if len(entry) != 3:
            raise ValueError(f"Edge entry {entry!r} must be [origin, target, cost].")
        origin, target, cost = entry
        graph.add_edge(
            graph.node(str(origin)),
            graph.node(str(target)),
            cost,
            bidirectional=not directed,
        )

    for name, attributes in (graph_config.get("attributes") or {}).items():
        graph.set_attributes(graph.node(str(name)), **attributes)

    return graph
