"""CLI entry point for the graph engine."""

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from graphengine.core.exceptions import GraphError
from graphengine.core.graph import Graph, build_flow_network, build_graph, build_tree
from graphengine.core.graph.analysis import (
    bridges_and_articulation_points,
    kosaraju_scc,
    tarjan_scc,
    topological_sort_dfs,
    topological_sort_kahn,
)
from graphengine.core.graph.pathfinding import (
    bellman_ford,
    dag_shortest_path,
    dijkstra,
    floyd_warshall,
    zero_one_bfs,
)
from graphengine.core.graph.spanning import kruskal_mst, prim_mst
from graphengine.core.graph.traversal import bfs, dfs_iterative, dfs_recursive, multi_source_bfs
from graphengine.core.models import INF, ShortestPaths, SpanningTree, Weight
from graphengine.core.structures import LCA

app = typer.Typer(
    name="graphengine",
    help="Exact graph algorithms: traversal, shortest paths, ordering, spanning trees, flow.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


class ShortestMethod(str, Enum):
    DIJKSTRA = "dijkstra"
    BELLMAN_FORD = "bellman-ford"
    ZERO_ONE = "zero-one"
    DAG = "dag"


class TopoMethod(str, Enum):
    KAHN = "kahn"
    DFS = "dfs"


class SccMethod(str, Enum):
    KOSARAJU = "kosaraju"
    TARJAN = "tarjan"


class MstMethod(str, Enum):
    PRIM = "prim"
    KRUSKAL = "kruskal"


Nodes = Annotated[int, typer.Option("--nodes", "-n", help="Number of vertices (ids 0..n-1)")]
Edges = Annotated[
    list[str] | None,
    typer.Option("--edge", "-e", help="Edge as 'u,v' or 'u,v,w' (repeatable)"),
]
Directed = Annotated[
    bool, typer.Option("--directed/--undirected", "-d/-u", help="Edge direction mode")
]
OutputJson = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]


def configure_logging(verbose: bool) -> None:
    """Route library log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show algorithm debug logging")
    ] = False,
) -> None:
    """Exact graph algorithms on graphs given as edge lists."""
    configure_logging(verbose)


@contextmanager
def graph_errors() -> Iterator[None]:
    """Turn GraphError into a red message and exit code 1."""
    try:
        yield
    except GraphError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from None


def format_weight(value: Weight) -> str:
    return "INF" if value == INF else str(value)


def format_path(path: list[int]) -> str:
    return " -> ".join(str(v) for v in path) if path else "[dim]unreachable[/]"


def emit_json(payload: Any) -> None:
    print(json.dumps(payload))


def load(nodes: int, edges: list[str] | None, directed: bool) -> Graph:
    return build_graph(nodes, edges or [], directed=directed)


@app.command("bfs")
def bfs_command(
    sources: Annotated[list[int], typer.Argument(help="One or more source vertices")],
    nodes: Nodes,
    edges: Edges = None,
    directed: Directed = True,
    output_json: OutputJson = False,
) -> None:
    """Edge-count distances from one or more sources."""
    with graph_errors():
        graph = load(nodes, edges, directed)
        result = bfs(graph, sources[0]) if len(sources) == 1 else multi_source_bfs(graph, sources)

    if output_json:
        emit_json(result.to_dict())
        return

    label = ", ".join(str(s) for s in sources)
    console.print(f"[bold]BFS from [cyan]{label}[/cyan][/]")
    for v in range(graph.num_nodes):
        d = result.distances[v]
        dist = str(d) if d != -1 else "[dim]unreachable[/]"
        console.print(f"  [cyan]{v}[/]: {dist}  [dim]parent {result.parents[v]}[/]")


@app.command("dfs")
def dfs_command(
    source: Annotated[int, typer.Argument(help="Start vertex")],
    nodes: Nodes,
    edges: Edges = None,
    directed: Directed = True,
    iterative: Annotated[
        bool, typer.Option("--iterative", "-i", help="Use the explicit-stack variant")
    ] = False,
    output_json: OutputJson = False,
) -> None:
    """Depth-first visitation order."""
    with graph_errors():
        graph = load(nodes, edges, directed)
        order = dfs_iterative(graph, source) if iterative else dfs_recursive(graph, source)

    if output_json:
        emit_json({"source": source, "order": order})
    else:
        console.print(f"[bold]DFS from [cyan]{source}[/cyan]:[/] {format_path(order)}")


@app.command("shortest")
def shortest_command(
    source: Annotated[int, typer.Argument(help="Source vertex")],
    nodes: Nodes,
    edges: Edges = None,
    directed: Directed = True,
    method: Annotated[
        ShortestMethod, typer.Option("--method", "-m", help="Algorithm to run")
    ] = ShortestMethod.DIJKSTRA,
    target: Annotated[
        int | None, typer.Option("--target", "-t", help="Also print the path to this vertex")
    ] = None,
    output_json: OutputJson = False,
) -> None:
    """Single-source shortest paths."""
    with graph_errors():
        graph = load(nodes, edges, directed)
        result: ShortestPaths | None
        if method is ShortestMethod.BELLMAN_FORD:
            result = bellman_ford(graph, source)
        elif method is ShortestMethod.ZERO_ONE:
            result = zero_one_bfs(graph, source)
        elif method is ShortestMethod.DAG:
            result = dag_shortest_path(graph, source)
        else:
            result = dijkstra(graph, source)
        if target is not None:
            graph.check_vertex(target)

    if result is None:
        if output_json:
            emit_json({"error": "graph is not acyclic"})
        else:
            console.print("[red]Graph is not acyclic[/red]")
        raise typer.Exit(code=1)

    if output_json:
        payload = result.to_dict()
        if target is not None:
            payload["path"] = result.path_to(target)
        emit_json(payload)
        return

    console.print(f"[bold]{method.value} from [cyan]{source}[/cyan][/]")
    for v in range(graph.num_nodes):
        console.print(f"  [cyan]{v}[/]: {format_weight(result.distances[v])}")
    if getattr(result, "has_negative_cycle", False):
        console.print("[yellow]Negative cycle reachable from source[/]")
    if target is not None:
        console.print(f"Path to {target}: {format_path(result.path_to(target))}")


@app.command("all-pairs")
def all_pairs_command(
    nodes: Nodes,
    edges: Edges = None,
    directed: Directed = True,
    output_json: OutputJson = False,
) -> None:
    """Floyd-Warshall distance matrix."""
    with graph_errors():
        result = floyd_warshall(load(nodes, edges, directed))

    if output_json:
        emit_json(result.to_dict())
        return

    console.print("[bold]All-pairs shortest paths[/]")
    for i, row in enumerate(result.distances):
        console.print(f"  From [cyan]{i}[/]: " + " ".join(format_weight(d) for d in row))
    if result.has_negative_cycle:
        console.print("[yellow]Negative cycle present[/]")


@app.command("topo")
def topo_command(
    nodes: Nodes,
    edges: Edges = None,
    method: Annotated[TopoMethod, typer.Option("--method", "-m")] = TopoMethod.KAHN,
    output_json: OutputJson = False,
) -> None:
    """Topological order of a directed graph."""
    with graph_errors():
        graph = load(nodes, edges, True)
        if method is TopoMethod.DFS:
            order = topological_sort_dfs(graph)
        else:
            order = topological_sort_kahn(graph)

    is_dag = bool(order) or graph.num_nodes == 0
    if output_json:
        emit_json({"order": order, "is_dag": is_dag})
    elif is_dag:
        console.print(f"[bold]Topological order:[/] {format_path(order)}")
    else:
        console.print("[red]Not a DAG[/red]")


@app.command("scc")
def scc_command(
    nodes: Nodes,
    edges: Edges = None,
    method: Annotated[SccMethod, typer.Option("--method", "-m")] = SccMethod.KOSARAJU,
    output_json: OutputJson = False,
) -> None:
    """Strongly connected components of a directed graph."""
    with graph_errors():
        graph = load(nodes, edges, True)
        components = tarjan_scc(graph) if method is SccMethod.TARJAN else kosaraju_scc(graph)

    if output_json:
        emit_json({"components": components})
        return

    for i, component in enumerate(components, start=1):
        members = ", ".join(str(v) for v in sorted(component))
        console.print(f"SCC {i}: [cyan]{{{members}}}[/]")


@app.command("bridges")
def bridges_command(
    nodes: Nodes,
    edges: Edges = None,
    output_json: OutputJson = False,
) -> None:
    """Bridges and articulation points of an undirected graph."""
    with graph_errors():
        report = bridges_and_articulation_points(load(nodes, edges, False))

    if output_json:
        emit_json(report.to_dict())
        return

    if report.bridges:
        console.print("[green]Bridges:[/]")
        for u, v in report.bridges:
            console.print(f"  {u} -- {v}")
    else:
        console.print("[dim]No bridges[/]")
    points = ", ".join(str(v) for v in report.articulation_points) or "[dim]none[/]"
    console.print(f"Articulation points: {points}")


def print_tree(title: str, tree: SpanningTree) -> None:
    console.print(f"[bold]{title}[/] (total: [green]{tree.total_weight}[/])")
    for edge in tree.edges:
        console.print(f"  {edge.u} -- {edge.v} : {edge.weight}")


@app.command("mst")
def mst_command(
    nodes: Nodes,
    edges: Edges = None,
    method: Annotated[MstMethod, typer.Option("--method", "-m")] = MstMethod.KRUSKAL,
    start: Annotated[int, typer.Option("--start", "-s", help="Prim start vertex")] = 0,
    output_json: OutputJson = False,
) -> None:
    """Minimum spanning tree of a connected undirected graph."""
    with graph_errors():
        graph = load(nodes, edges, False)
        tree = prim_mst(graph, start) if method is MstMethod.PRIM else kruskal_mst(graph)

    if output_json:
        emit_json(tree.to_dict())
    else:
        print_tree(f"{method.value.capitalize()} MST", tree)


@app.command("lca")
def lca_command(
    a: Annotated[int, typer.Argument(help="First vertex")],
    b: Annotated[int, typer.Argument(help="Second vertex")],
    nodes: Nodes,
    edges: Edges = None,
    root: Annotated[int, typer.Option("--root", "-r", help="Tree root")] = 0,
    output_json: OutputJson = False,
) -> None:
    """Lowest common ancestor of two vertices in a tree given by its edges."""
    with graph_errors():
        table = LCA.build_from_tree(build_tree(nodes, edges or []), root)
        ancestor = table.query(a, b)
        distance = table.distance(a, b)

    if output_json:
        emit_json({"a": a, "b": b, "root": root, "lca": ancestor, "distance": distance})
    elif ancestor is None:
        console.print(f"[yellow]{a} and {b} are not in the same tree as root {root}[/]")
    else:
        console.print(f"LCA({a}, {b}) = [cyan]{ancestor}[/] [dim](distance {distance})[/]")


@app.command("maxflow")
def maxflow_command(
    source: Annotated[int, typer.Argument(help="Source vertex")],
    sink: Annotated[int, typer.Argument(help="Sink vertex")],
    nodes: Nodes,
    edges: Edges = None,
    output_json: OutputJson = False,
) -> None:
    """Dinic max-flow; the third edge field is the arc capacity."""
    with graph_errors():
        network = build_flow_network(nodes, edges or [])
        flow = network.maxflow(source, sink)
        cut = network.min_cut(source)

    if output_json:
        emit_json({"source": source, "sink": sink, "flow": flow, "min_cut": cut})
    else:
        console.print(f"Max flow {source} -> {sink}: [green]{flow}[/]")
        console.print(f"  [dim]Source side of min cut: {cut}[/]")


@app.command("demo")
def demo_command() -> None:
    """Run every algorithm on small example graphs."""
    from graphengine import demo

    console.print("[bold]Example 1: unweighted directed graph[/]")
    g1 = demo.unweighted_dag()
    result = bfs(g1, 0)
    console.print(f"  BFS distances from 0: {result.distances}")
    console.print(f"  BFS parents:          {result.parents}")
    console.print(f"  Topological order:    {topological_sort_kahn(g1)}")

    console.print("\n[bold]Example 2: weighted directed graph[/]")
    g2 = demo.weighted_digraph()
    paths = dijkstra(g2, 0)
    console.print(f"  Dijkstra from 0:     {paths.distances}")
    console.print(f"  Path 0 -> 3:         {format_path(paths.path_to(3))}")
    bf = bellman_ford(g2, 0)
    console.print(f"  Bellman-Ford from 0: {bf.distances}")
    console.print(f"  Negative cycle?      {'yes' if bf.has_negative_cycle else 'no'}")
    neg = bellman_ford(demo.negative_cycle_digraph(), 0)
    console.print(f"  With cycle 1->2->3->1 of weight -1: {neg.has_negative_cycle}")

    console.print("\n[bold]Example 3: Floyd-Warshall[/]")
    apsp = floyd_warshall(demo.small_digraph())
    for i, row in enumerate(apsp.distances):
        console.print(f"  From {i}: " + " ".join(format_weight(d) for d in row))

    console.print("\n[bold]Example 4: strongly connected components[/]")
    g4 = demo.scc_digraph()
    for name, components in (("Kosaraju", kosaraju_scc(g4)), ("Tarjan", tarjan_scc(g4))):
        groups = " ".join("{" + ", ".join(map(str, sorted(c))) + "}" for c in components)
        console.print(f"  {name}: {groups}")

    console.print("\n[bold]Example 5: minimum spanning tree[/]")
    g5 = demo.weighted_undirected()
    print_tree("Prim", prim_mst(g5))
    print_tree("Kruskal", kruskal_mst(g5))

    console.print("\n[bold]Example 6: bridges and articulation points[/]")
    report = bridges_and_articulation_points(demo.bridged_undirected())
    console.print(f"  Bridges: {report.bridges}")
    console.print(f"  Articulation points: {report.articulation_points}")

    console.print("\n[bold]Example 7: LCA[/]")
    table = LCA.build_from_tree(demo.sample_tree())
    console.print(f"  LCA(3, 4) = {table.query(3, 4)}, LCA(4, 6) = {table.query(4, 6)}")
    console.print(f"  2nd ancestor of 6 = {table.kth_ancestor(6, 2)}")

    console.print("\n[bold]Example 8: Dinic max-flow[/]")
    console.print(f"  Max flow 0 -> 5: {demo.sample_flow_network().maxflow(0, 5)}")


if __name__ == "__main__":
    app()
