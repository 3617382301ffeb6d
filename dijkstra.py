from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from heapq import heappop, heappush
from typing import Dict, List, Optional, Sequence, Set, Tuple

from graph import INFINITY, Graph, Named, Weight


logger = logging.getLogger(__name__)


class SolveStatus(enum.Enum):
    UNSOLVED = "unsolved"
    SOLVING = "solving"
    SOLVED = "solved"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class ShortestPathResult:
    start: Named
    target: Named
    distance: Weight
    path: Tuple[Named, ...]
    status: SolveStatus

    @property
    def reachable(self) -> bool:
        return self.status is SolveStatus.SOLVED

    def describe(self) -> str:
        return format_path(self.path)


def format_path(path: Sequence[Named]) -> str:
    if not path:
        return "Path: unreachable"
    return "Path: " + " -> ".join(node.name for node in path)


class DijkstraSolver:
    """Single-source shortest paths from ``graph.start`` towards ``graph.target``.

    The search stops as soon as the target is finalised, so distances of nodes
    still unvisited at that point are upper bounds only. Ties between equally
    distant candidates go to the node with the lowest name.
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self.status = SolveStatus.UNSOLVED
        self.start: Optional[Named] = None
        self.target: Optional[Named] = None
        self._reset()

    def _reset(self) -> None:
        self.tentative_distance: Dict[Named, Weight] = {}
        self.unvisited: Set[Named] = set()
        self.predecessors: Dict[Named, Named] = {}
        # (node, new distance) for every successful relaxation, in order.
        self.relaxations: List[Tuple[Named, Weight]] = []

    def compute(self) -> ShortestPathResult:
        start, target = self.graph.start, self.graph.target
        if start is None or target is None:
            raise ValueError("Start and target must be set before computing a path.")

        if self.status is not SolveStatus.UNSOLVED:
            logger.debug("Discarding previous %s run and solving again.", self.status.value)
        self._reset()
        self.start, self.target = start, target
        self.status = SolveStatus.SOLVING

        self.tentative_distance = {node: INFINITY for node in self.graph.nodes}
        self.tentative_distance[start] = 0
        self.unvisited = set(self.graph.nodes)

        queue: List[Tuple[Weight, str, Named]] = [(0, start.name, start)]

        while target in self.unvisited:
            current = self._pop_closest(queue)
            if current is None:
                break

            distance_current = self.tentative_distance[current]
            for neighbor in sorted(self.graph.neighbors(current), key=lambda node: node.name):
                if neighbor not in self.unvisited:
                    continue
                cost = self.graph.weight(current, neighbor)
                if cost == INFINITY:
                    continue

                candidate = distance_current + cost
                if candidate < self.tentative_distance[neighbor]:
                    self.tentative_distance[neighbor] = candidate
                    self.predecessors[neighbor] = current
                    self.relaxations.append((neighbor, candidate))
                    logger.debug(
                        "Relaxed %s to %s via %s.", neighbor.name, candidate, current.name
                    )
                    heappush(queue, (candidate, neighbor.name, neighbor))

            self.unvisited.discard(current)
            logger.debug("Finalised %s at distance %s.", current.name, distance_current)

        if target in self.unvisited:
            self.status = SolveStatus.UNREACHABLE
            logger.info("Target %s is unreachable from %s.", target.name, start.name)
        else:
            self.status = SolveStatus.SOLVED

        return self.result()

    def _pop_closest(self, queue: List[Tuple[Weight, str, Named]]) -> Optional[Named]:
        # Entries superseded by a later relaxation or already finalised are skipped.
        while queue:
            distance, _, node = heappop(queue)
            if node in self.unvisited and distance == self.tentative_distance[node]:
                return node
        return None

    def _require_solved(self) -> None:
        if self.status in (SolveStatus.UNSOLVED, SolveStatus.SOLVING):
            raise RuntimeError("compute() has not finished; no distances are available.")

    def result(self) -> ShortestPathResult:
        self._require_solved()
        start, target = self.start, self.target
        solved = self.status is SolveStatus.SOLVED
        return ShortestPathResult(
            start=start,
            target=target,
            distance=self.tentative_distance[target] if solved else INFINITY,
            path=tuple(self.reconstruct_path(target)) if solved else (),
            status=self.status,
        )

    def distance_to(self, node: Named) -> Weight:
        self._require_solved()
        self.graph.require(node)
        return self.tentative_distance[node]

    def predecessor_of(self, node: Named) -> Optional[Named]:
        self._require_solved()
        self.graph.require(node)
        return self.predecessors.get(node)

    def finalized(self) -> List[Tuple[Named, Weight]]:
        """Nodes whose distance is final, nearest first."""
        self._require_solved()
        done = [node for node in self.tentative_distance if node not in self.unvisited]
        done.sort(key=lambda node: (self.tentative_distance[node], node.name))
        return [(node, self.tentative_distance[node]) for node in done]

    def reconstruct_path(self, target: Optional[Named] = None) -> List[Named]:
        """Walk predecessors back from ``target``; empty when the chain misses start."""
        self._require_solved()
        start = self.start
        if target is None:
            target = self.target
        self.graph.require(target)

        path: List[Named] = [target]
        seen = {target}
        while path[-1] != start:
            previous = self.predecessors.get(path[-1])
            if previous is None or previous in seen:
                return []
            seen.add(previous)
            path.append(previous)
        path.reverse()
        return path


def shortest_path(graph: Graph, start: Named, target: Named) -> ShortestPathResult:
    """Designate endpoints on ``graph`` and solve them with a fresh solver."""
    graph.set_endpoints(start, target)
    return DijkstraSolver(graph).compute()
