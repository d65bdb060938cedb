from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .model import Edge, Graph, Node


class MissingHomeNode(LookupError):
    pass


@dataclass(frozen=True)
class Neighborhood:
    home: Node
    nodes: list[Node]
    edges: list[Edge]
    depth: int


def find_home(graph: Graph) -> Node:
    home = graph.home()
    if home is None:
        raise MissingHomeNode(
            f"No node is flagged as home among {len(graph.nodes)} nodes; set mainstat=\"true\" on your own node."
        )
    return home


def incident(graph: Graph, node: Node) -> Iterator[tuple[Edge, Node]]:
    """Yield (edge, peer) for each channel touching `node`, in edge order."""
    for edge in graph.edges:
        peer_id = edge.peer_of(node.id)
        if peer_id is None:
            continue
        peer = graph.node(peer_id)
        if peer is None:
            continue
        yield edge, peer


def _expand(
    graph: Graph,
    node: Node,
    depth: int,
    nodes: dict[int, Node],
    edges: dict[int, Edge],
    *,
    degree_range: tuple[int, int],
    boundary_neighbors: bool,
) -> None:
    nodes.setdefault(node.index, node)

    neighbors: list[Node] = []
    for edge, peer in incident(graph, node):
        edges.setdefault(edge.index, edge)
        neighbors.append(peer)

    if depth > 0:
        depth -= 1
        lo, hi = degree_range
        for peer in neighbors:
            if peer.degree < lo or peer.degree > hi:
                continue
            _expand(
                graph,
                peer,
                depth,
                nodes,
                edges,
                degree_range=degree_range,
                boundary_neighbors=boundary_neighbors,
            )
        # Peers outside the degree range still show up, they just are not expanded.
        for peer in neighbors:
            nodes.setdefault(peer.index, peer)
    elif boundary_neighbors:
        for peer in neighbors:
            nodes.setdefault(peer.index, peer)


def get_node_neighbors(
    graph: Graph,
    node: Node,
    depth: int = 0,
    *,
    degree_range: tuple[int, int] = (2, 30),
    boundary_neighbors: bool = False,
) -> tuple[list[Node], list[Edge]]:
    """Collect nodes and channels reachable from `node` within `depth` hops.

    Only peers whose channel count lies in `degree_range` (inclusive) are
    expanded further; `node` itself is always included. Channels of a node
    reached with no hops left are collected, but their far ends are not,
    unless `boundary_neighbors` is set. Results keep first-seen order.
    """
    nodes: dict[int, Node] = {}
    edges: dict[int, Edge] = {}
    _expand(
        graph,
        node,
        int(depth),
        nodes,
        edges,
        degree_range=(int(degree_range[0]), int(degree_range[1])),
        boundary_neighbors=bool(boundary_neighbors),
    )
    return list(nodes.values()), list(edges.values())


def extract_neighborhood(
    graph: Graph,
    *,
    depth: int = 2,
    degree_range: tuple[int, int] = (2, 30),
    boundary_neighbors: bool = False,
) -> Neighborhood:
    home = find_home(graph)
    nodes, edges = get_node_neighbors(
        graph,
        home,
        depth,
        degree_range=degree_range,
        boundary_neighbors=boundary_neighbors,
    )
    return Neighborhood(home=home, nodes=nodes, edges=edges, depth=int(depth))
