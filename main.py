from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from dijkstra import DijkstraSolver, ShortestPathResult
from graph import INFINITY, Graph, graph_from_config


logger = logging.getLogger(__name__)


def load_config(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def configure_logging(verbose: bool) -> None:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=[console_handler],
    )


def format_distance(distance: float) -> str:
    return "unreachable" if distance == INFINITY else f"{distance:g}"


def print_result(result: ShortestPathResult, solver: DijkstraSolver) -> None:
    print(result.describe())
    print(f"Total distance: {format_distance(result.distance)}")
    print()

    print("=== Finalised Distances ===")
    for node, distance in solver.finalized():
        previous = solver.predecessor_of(node)
        via = f" (via {previous.name})" if previous is not None else ""
        print(f"  {node.name}: {format_distance(distance)}{via}")


def solve_instance(
    config: Dict, start: Optional[str] = None, target: Optional[str] = None
) -> Tuple[Graph, DijkstraSolver, ShortestPathResult]:
    graph = graph_from_config(config["graph"])
    routing_config = config.get("routing") or {}
    start_name = start or routing_config["start_node"]
    target_name = target or routing_config["end_node"]

    graph.set_endpoints(graph.node(str(start_name)), graph.node(str(target_name)))
    logger.info(
        "Solving %s -> %s over %d nodes.", start_name, target_name, len(graph)
    )
    solver = DijkstraSolver(graph)
    return graph, solver, solver.compute()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Find the shortest path between two nodes of a weighted graph."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("problem_instance.yaml"),
        help="Path to the YAML instance configuration.",
    )
    parser.add_argument("--start", help="Override the start node of the instance.")
    parser.add_argument("--target", help="Override the target node of the instance.")
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Display the graph with the shortest path highlighted.",
    )
    parser.add_argument(
        "--static-out",
        type=Path,
        help="Optional path to save a static PNG of the graph and path.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every step of the search."
    )
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    config = load_config(args.config)
    try:
        graph, solver, result = solve_instance(config, args.start, args.target)
    except (KeyError, ValueError) as exc:
        parser.error(f"invalid instance {args.config}: {exc}")

    print_result(result, solver)

    if args.visualize or args.static_out:
        from visualize import build_networkx_graph, compute_layout, draw_static_figure

        graph_nx = build_networkx_graph(graph)
        draw_static_figure(
            graph_nx=graph_nx,
            layout=compute_layout(graph_nx),
            graph=graph,
            result=result,
            output=args.static_out,
            show=args.visualize,
        )


if __name__ == "__main__":
    main()
