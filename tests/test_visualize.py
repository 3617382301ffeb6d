import matplotlib

matplotlib.use("Agg")

from dijkstra import DijkstraSolver  # noqa: E402
from graph import Graph, Node  # noqa: E402
from visualize import (  # noqa: E402
    animate_path,
    build_networkx_graph,
    compute_layout,
    draw_static_figure,
    edge_labels,
    node_labels,
    route_edges,
)


def test_build_networkx_graph(worked_graph):
    worked_graph.set_attributes(Node("a"), role="start")
    graph_nx = build_networkx_graph(worked_graph)

    assert graph_nx.number_of_nodes() == 9
    assert graph_nx.number_of_edges() == 22
    assert graph_nx["a"]["d"]["cost"] == 1
    assert graph_nx.nodes["a"]["role"] == "start"
    assert node_labels(graph_nx)["a"] == "a\nstart"
    assert node_labels(graph_nx)["b"] == "b"


def test_symmetric_edges_share_a_label(worked_graph):
    labels = edge_labels(build_networkx_graph(worked_graph))

    assert len(labels) == 11
    assert labels[("a", "b")] == "2"


def test_route_edges():
    assert route_edges([Node("a"), Node("d"), Node("e")]) == [("a", "d"), ("d", "e")]
    assert route_edges([Node("a")]) == []


def test_draw_static_figure(tmp_path, worked_graph):
    result = DijkstraSolver(worked_graph).compute()
    graph_nx = build_networkx_graph(worked_graph)
    output = tmp_path / "path.png"

    draw_static_figure(
        graph_nx=graph_nx,
        layout=compute_layout(graph_nx),
        graph=worked_graph,
        result=result,
        output=output,
        show=False,
    )

    assert output.exists()
    assert output.stat().st_size > 0


def test_animate_path(worked_graph):
    result = DijkstraSolver(worked_graph).compute()
    graph_nx = build_networkx_graph(worked_graph)

    anim = animate_path(
        graph_nx=graph_nx,
        layout=compute_layout(graph_nx),
        graph=worked_graph,
        result=result,
        output=None,
        show=False,
    )
    assert anim is not None


def test_animate_unreachable_path_is_skipped():
    a, b = Node("a"), Node("b")
    graph = Graph([a, b])
    graph.set_endpoints(a, b)
    result = DijkstraSolver(graph).compute()
    graph_nx = build_networkx_graph(graph)

    assert (
        animate_path(
            graph_nx=graph_nx,
            layout=compute_layout(graph_nx),
            graph=graph,
            result=result,
            output=None,
            show=False,
        )
        is None
    )


def test_animation_is_saved_as_gif(tmp_path, worked_graph):
    result = DijkstraSolver(worked_graph).compute()
    graph_nx = build_networkx_graph(worked_graph)
    output = tmp_path / "walk.gif"

    animate_path(
        graph_nx=graph_nx,
        layout=compute_layout(graph_nx),
        graph=worked_graph,
        result=result,
        output=output,
        show=False,
    )

    assert output.exists()
    assert output.stat().st_size > 0
