"""MCP server implementation for the graph engine."""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

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
from graphengine.core.graph.traversal import dfs_iterative, multi_source_bfs
from graphengine.core.structures import LCA

logger = logging.getLogger(__name__)

server = Server("graphengine")

_GRAPH_PROPERTIES: dict[str, Any] = {
    "nodes": {
        "type": "integer",
        "description": "Number of vertices; ids are 0..nodes-1",
    },
    "edges": {
        "type": "array",
        "description": "Edges as [u, v] or [u, v, weight]",
        "items": {"type": "array", "items": {"type": "number"}},
    },
    "directed": {
        "type": "boolean",
        "description": "Treat edges as directed (default: true)",
        "default": True,
    },
}


def _schema(extra: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {**_GRAPH_PROPERTIES, **extra},
        "required": ["nodes", "edges", *required],
    }


def _graph_from_arguments(arguments: dict[str, Any], directed: bool | None = None) -> Graph:
    """Build a Graph from tool arguments; ``directed`` overrides the argument."""
    if directed is None:
        directed = bool(arguments.get("directed", True))
    return build_graph(int(arguments["nodes"]), arguments["edges"], directed=directed)


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="graph_traverse",
            description=(
                "Breadth-first distances from one or more sources and a depth-first "
                "visitation order from the first source."
            ),
            inputSchema=_schema(
                {
                    "sources": {
                        "type": "array",
                        "items": {"type": "integer"},
                        "description": "Source vertices",
                    },
                },
                ["sources"],
            ),
        ),
        Tool(
            name="graph_shortest_paths",
            description=(
                "Shortest paths. Single-source methods: dijkstra (non-negative weights), "
                "bellman-ford (negative weights, reports negative cycles), zero-one "
                "(weights 0/1), dag (acyclic graphs). Method all-pairs runs Floyd-Warshall."
            ),
            inputSchema=_schema(
                {
                    "source": {"type": "integer", "description": "Source vertex"},
                    "target": {
                        "type": "integer",
                        "description": "Optional target; its path is included",
                    },
                    "method": {
                        "type": "string",
                        "enum": ["dijkstra", "bellman-ford", "zero-one", "dag", "all-pairs"],
                        "default": "dijkstra",
                    },
                },
                [],
            ),
        ),
        Tool(
            name="graph_order",
            description=(
                "Topological order of a directed graph (kahn or dfs). "
                "An empty order with is_dag false means the graph has a cycle."
            ),
            inputSchema=_schema(
                {"method": {"type": "string", "enum": ["kahn", "dfs"], "default": "kahn"}},
                [],
            ),
        ),
        Tool(
            name="graph_components",
            description=(
                "Strongly connected components (kosaraju or tarjan) for directed graphs, "
                "or bridges and articulation points (method: bridges) for undirected graphs."
            ),
            inputSchema=_schema(
                {
                    "method": {
                        "type": "string",
                        "enum": ["kosaraju", "tarjan", "bridges"],
                        "default": "kosaraju",
                    }
                },
                [],
            ),
        ),
        Tool(
            name="graph_spanning_tree",
            description="Minimum spanning tree of a connected undirected graph (prim or kruskal).",
            inputSchema=_schema(
                {
                    "method": {
                        "type": "string",
                        "enum": ["prim", "kruskal"],
                        "default": "kruskal",
                    },
                    "start": {"type": "integer", "description": "Prim start vertex", "default": 0},
                },
                [],
            ),
        ),
        Tool(
            name="graph_max_flow",
            description=(
                "Dinic maximum flow. The third field of each edge is its integer capacity. "
                "Also returns the source side of a minimum cut."
            ),
            inputSchema=_schema(
                {
                    "source": {"type": "integer"},
                    "sink": {"type": "integer"},
                },
                ["source", "sink"],
            ),
        ),
        Tool(
            name="graph_lca",
            description=(
                "Lowest common ancestor and tree distance of two vertices in a tree "
                "given by its edges, plus an optional k-th ancestor of the first vertex."
            ),
            inputSchema=_schema(
                {
                    "a": {"type": "integer"},
                    "b": {"type": "integer"},
                    "root": {"type": "integer", "default": 0},
                    "k": {"type": "integer", "description": "Ancestor distance for vertex a"},
                },
                ["a", "b"],
            ),
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "graph_traverse":
            result = _handle_traverse(arguments)
        elif name == "graph_shortest_paths":
            result = _handle_shortest_paths(arguments)
        elif name == "graph_order":
            result = _handle_order(arguments)
        elif name == "graph_components":
            result = _handle_components(arguments)
        elif name == "graph_spanning_tree":
            result = _handle_spanning_tree(arguments)
        elif name == "graph_max_flow":
            result = _handle_max_flow(arguments)
        elif name == "graph_lca":
            result = _handle_lca(arguments)
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except (GraphError, KeyError, TypeError, ValueError) as e:
        logger.debug(f"Tool {name} rejected its arguments: {e}")
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


def _handle_traverse(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graph_traverse tool."""
    graph = _graph_from_arguments(arguments)
    sources = [int(s) for s in arguments["sources"]]
    if not sources:
        return {"error": "At least one source is required"}
    result = multi_source_bfs(graph, sources)
    return {
        **result.to_dict(),
        "dfs_order": dfs_iterative(graph, sources[0]),
    }


def _handle_shortest_paths(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graph_shortest_paths tool."""
    graph = _graph_from_arguments(arguments)
    method = arguments.get("method", "dijkstra")

    if method == "all-pairs":
        return floyd_warshall(graph).to_dict()

    if "source" not in arguments:
        return {"error": f"Method {method} needs a source vertex"}
    source = int(arguments["source"])
    if method == "bellman-ford":
        result = bellman_ford(graph, source)
    elif method == "zero-one":
        result = zero_one_bfs(graph, source)
    elif method == "dag":
        dag_result = dag_shortest_path(graph, source)
        if dag_result is None:
            return {"error": "Graph is not acyclic"}
        result = dag_result
    elif method == "dijkstra":
        result = dijkstra(graph, source)
    else:
        return {"error": f"Unknown method: {method}"}

    payload = result.to_dict()
    if arguments.get("target") is not None:
        target = int(arguments["target"])
        graph.check_vertex(target)
        payload["path"] = result.path_to(target)
    return payload


def _handle_order(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graph_order tool."""
    graph = _graph_from_arguments(arguments, directed=True)
    method = arguments.get("method", "kahn")
    order = topological_sort_dfs(graph) if method == "dfs" else topological_sort_kahn(graph)
    return {"order": order, "is_dag": bool(order) or graph.num_nodes == 0}


def _handle_components(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graph_components tool."""
    method = arguments.get("method", "kosaraju")
    if method == "bridges":
        graph = _graph_from_arguments(arguments, directed=False)
        return bridges_and_articulation_points(graph).to_dict()

    graph = _graph_from_arguments(arguments, directed=True)
    components = tarjan_scc(graph) if method == "tarjan" else kosaraju_scc(graph)
    return {"components": components}


def _handle_spanning_tree(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graph_spanning_tree tool."""
    graph = _graph_from_arguments(arguments, directed=False)
    if arguments.get("method", "kruskal") == "prim":
        tree = prim_mst(graph, int(arguments.get("start", 0)))
    else:
        tree = kruskal_mst(graph)
    return tree.to_dict()


def _handle_max_flow(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graph_max_flow tool."""
    network = build_flow_network(int(arguments["nodes"]), arguments["edges"])
    source, sink = int(arguments["source"]), int(arguments["sink"])
    flow = network.maxflow(source, sink)
    return {"source": source, "sink": sink, "flow": flow, "min_cut": network.min_cut(source)}


def _handle_lca(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle graph_lca tool."""
    tree = build_tree(int(arguments["nodes"]), arguments["edges"])
    table = LCA.build_from_tree(tree, int(arguments.get("root", 0)))
    a, b = int(arguments["a"]), int(arguments["b"])
    result: dict[str, Any] = {
        "lca": table.query(a, b),
        "distance": table.distance(a, b),
        "depth_a": table.depth(a),
        "depth_b": table.depth(b),
    }
    if arguments.get("k") is not None:
        result["kth_ancestor"] = table.kth_ancestor(a, int(arguments["k"]))
    return result


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
