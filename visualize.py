from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib import animation
import networkx as nx

from dijkstra import ShortestPathResult
from graph import Graph, Named
from main import format_distance, load_config, solve_instance


def build_networkx_graph(graph: Graph) -> nx.DiGraph:
    g = nx.DiGraph()
    for node in sorted(graph.nodes, key=lambda node: node.name):
        g.add_node(node.name, **graph.attributes(node))
    for origin, target, cost in graph.edges():
        g.add_edge(origin.name, target.name, cost=cost)
    return g


def compute_layout(graph: nx.DiGraph) -> Dict[str, Tuple[float, float]]:
    return nx.spring_layout(graph, seed=42)


def node_labels(graph_nx: nx.DiGraph) -> Dict[str, str]:
    labels: Dict[str, str] = {}
    for node, data in graph_nx.nodes(data=True):
        label = data.get("label") or data.get("role")
        labels[node] = f"{node}\n{label}" if label else node
    return labels


def route_edges(path: Sequence[Named]) -> List[Tuple[str, str]]:
    names = [node.name for node in path]
    return list(zip(names[:-1], names[1:]))


def edge_labels(graph_nx: nx.DiGraph) -> Dict[Tuple[str, str], str]:
    # Symmetric pairs share one label.
    labels: Dict[Tuple[str, str], str] = {}
    for u, v, data in graph_nx.edges(data=True):
        if (v, u) in labels and graph_nx[v][u]["cost"] == data["cost"]:
            continue
        labels[(u, v)] = f"{data['cost']:g}"
    return labels


def draw_static_figure(
    graph_nx: nx.DiGraph,
    layout: Dict[str, Tuple[float, float]],
    graph: Graph,
    result: ShortestPathResult,
    output: Path | None,
    show: bool,
) -> None:
    fig, ax = plt.subplots(figsize=(10, 8))

    on_path = {node.name for node in result.path}
    node_colors = ["#d62728" if node in on_path else "#9ecae1" for node in graph_nx.nodes]

    nx.draw_networkx_edges(
        graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0, arrows=False
    )

    path_edges = route_edges(result.path)
    if path_edges:
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=path_edges,
            edge_color="#d62728",
            width=2.5,
            arrows=True,
            ax=ax,
        )

    nx.draw_networkx_nodes(graph_nx, layout, node_color=node_colors, node_size=600, ax=ax)
    nx.draw_networkx_labels(graph_nx, layout, labels=node_labels(graph_nx), font_size=9, ax=ax)
    nx.draw_networkx_edge_labels(
        graph_nx, layout, edge_labels=edge_labels(graph_nx), font_size=8, ax=ax
    )

    summary_lines = [
        f"Start: {result.start.name}",
        f"Target: {result.target.name}",
        f"Distance: {format_distance(result.distance)}",
        f"Nodes: {len(graph)}",
        result.describe(),
    ]
    ax.text(
        1.02,
        0.5,
        "\n".join(summary_lines),
        transform=ax.transAxes,
        va="center",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title("Shortest Path – Static Overview")

    if output:
        fig.savefig(output, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)


def animate_path(
    graph_nx: nx.DiGraph,
    layout: Dict[str, Tuple[float, float]],
    graph: Graph,
    result: ShortestPathResult,
    output: Path | None,
    show: bool,
) -> animation.FuncAnimation | None:
    path = [node.name for node in result.path]
    if not path:
        return None

    fig, ax = plt.subplots(figsize=(10, 8))

    nx.draw_networkx_edges(
        graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0, arrows=False
    )
    nx.draw_networkx_nodes(graph_nx, layout, node_color="#9ecae1", node_size=500, ax=ax)
    nx.draw_networkx_labels(graph_nx, layout, labels=node_labels(graph_nx), font_size=9, ax=ax)

    path_line, = ax.plot([], [], color="#d62728", linewidth=2.0, zorder=2)
    current_edge_line, = ax.plot([], [], color="#ff7f0e", linewidth=3.0, zorder=3)
    walker_marker = ax.scatter([], [], s=160, c="#1f77b4", zorder=4)
    status_text = ax.text(
        0.02,
        0.98,
        "",
        transform=ax.transAxes,
        va="top",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title("Shortest Path – Animated Walk")

    def update(frame: int):
        node = path[frame]
        x, y = layout[node]
        prefix = path[: frame + 1]
        path_line.set_data([layout[n][0] for n in prefix], [layout[n][1] for n in prefix])
        walker_marker.set_offsets([[x, y]])

        if frame > 0:
            x_prev, y_prev = layout[path[frame - 1]]
            current_edge_line.set_data([x_prev, x], [y_prev, y])
        else:
            current_edge_line.set_data([], [])

        travelled = graph.path_cost(result.path[: frame + 1])
        status_text.set_text(
            "\n".join(
                [
                    f"Step {frame + 1}/{len(path)}",
                    f"At node: {node}",
                    f"Distance so far: {format_distance(travelled)}",
                ]
            )
        )
        return path_line, current_edge_line, walker_marker, status_text

    anim = animation.FuncAnimation(
        fig,
        update,
        frames=len(path),
        interval=800,
        blit=False,
    )

    if output:
        # One frame per node of the path.
        anim.save(output, writer=animation.PillowWriter(fps=1))

    if show:
        plt.show()
    else:
        plt.close(fig)
    return anim


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Visualise the shortest path of a graph instance."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("problem_instance.yaml"),
        help="Path to the YAML instance configuration.",
    )
    parser.add_argument(
        "--static-out",
        type=Path,
        help="Optional path to save a static PNG of the graph and path.",
    )
    parser.add_argument(
        "--animation-out",
        type=Path,
        help="Optional path to save a GIF animation of the walk.",
    )
    parser.add_argument(
        "--no-show",
        action="store_true",
        help="Do not display figures interactively.",
    )
    args = parser.parse_args()

    config = load_config(args.config)
    graph, _, result = solve_instance(config)

    graph_nx = build_networkx_graph(graph)
    layout = compute_layout(graph_nx)
    show = not args.no_show

    draw_static_figure(
        graph_nx=graph_nx,
        layout=layout,
        graph=graph,
        result=result,
        output=args.static_out,
        show=show,
    )

    animate_path(
        graph_nx=graph_nx,
        layout=layout,
        graph=graph,
        result=result,
        output=args.animation_out,
        show=show,
    )


if __name__ == "__main__":
    main()
