from __future__ import annotations

from typing import Dict

import pytest

from graph import Graph, Node


WORKED_EDGES = [
    ("a", "b", 2),
    ("b", "c", 3),
    ("c", "f", 1),
    ("f", "i", 2),
    ("b", "e", 2),
    ("e", "f", 1),
    ("a", "d", 1),
    ("d", "g", 2),
    ("g", "h", 1),
    ("h", "i", 2),
    ("d", "e", 1),
]


def build_graph(edges, names="abcdefghi") -> Graph:
    graph = Graph(Node(name) for name in names)
    for origin, target, cost in edges:
        graph.add_edge(graph.node(origin), graph.node(target), cost, bidirectional=True)
    return graph


@pytest.fixture
def nodes() -> Dict[str, Node]:
    return {name: Node(name) for name in "abcdefghi"}


@pytest.fixture
def worked_graph() -> Graph:
    graph = build_graph(WORKED_EDGES)
    graph.set_endpoints(Node("a"), Node("i"))
    return graph


@pytest.fixture
def instance_config() -> Dict:
    return {
        "graph": {
            "directed": False,
            "nodes": list("abcdefghi"),
            "edges": [list(edge) for edge in WORKED_EDGES],
            "attributes": {"a": {"role": "start"}},
        },
        "routing": {"start_node": "a", "end_node": "i"},
    }


@pytest.fixture
def make_graph():
    return build_graph
