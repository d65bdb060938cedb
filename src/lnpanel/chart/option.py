"""Force-layout graph chart option for the panel.

The returned dict is handed to the charting engine unchanged, so keys follow
its naming (camelCase). Formatter callbacks cannot travel through JSON; node
and channel tooltips are rendered to strings up front.
"""

from __future__ import annotations

from typing import Any

from ..graph.build import format_number
from ..graph.model import Edge, Graph, Node


TITLE_STYLE: dict[str, Any] = {
    "backgroundColor": "#444c",
    "textStyle": {"fontSize": 12, "fontWeight": "normal"},
}

TOOLTIP_STYLE: dict[str, Any] = {
    "textStyle": {"color": "#fff"},
    "backgroundColor": "#44444444",
    "borderWidth": 0,
    "trigger": "item",
}

FORCE: dict[str, float] = {
    "edgeLength": 30,
    "repulsion": 10000,
    "gravity": 0.1,
    "friction": 0.3,
}

ZOOM = 0.3


def node_tooltip(node: Node) -> str:
    return f"{node.alias or node.id}<br>{format_number(node.value)} BTC<br>{node.degree} channels"


def node_item(node: Node) -> dict[str, Any]:
    item: dict[str, Any] = {
        "name": node.id,
        "symbolSize": node.size,
        "value": node.value,
        "alias": node.alias,
        "channels": node.degree,
        "fixed": node.is_home,
        "itemStyle": {"borderColor": node.color, "color": "#fff", "borderWidth": 3},
        "label": {"formatter": node.alias},
        "tooltip": {"formatter": node_tooltip(node)},
    }
    if node.position is not None:
        item["x"], item["y"] = node.position
    return item


def link_item(edge: Edge) -> dict[str, Any]:
    return {
        "source": edge.source,
        "target": edge.target,
        "value": edge.capacity,
        "tooltip": {"formatter": edge.tooltip},
        "lineStyle": {"width": edge.width, "color": edge.color},
    }


def title(*, shown_nodes: int, shown_edges: int, depth: int, total_nodes: int, total_edges: int) -> dict[str, Any]:
    # The home node is not counted.
    return {
        **TITLE_STYLE,
        "text": f"{shown_nodes - 1} nodes, {shown_edges} channels within {depth} hops",
        "subtext": f"{total_nodes} nodes, {total_edges} channels total",
    }


def build_option(graph: Graph, nodes: list[Node], edges: list[Edge], *, depth: int) -> dict[str, Any]:
    return {
        "title": title(
            shown_nodes=len(nodes),
            shown_edges=len(edges),
            depth=depth,
            total_nodes=len(graph.nodes),
            total_edges=len(graph.edges),
        ),
        "tooltip": dict(TOOLTIP_STYLE),
        "series": [
            {
                "type": "graph",
                "layout": "force",
                "zoom": ZOOM,
                "nodeScaleRatio": 1,
                "selectedMode": "multiple",
                "autoCurveness": True,
                "animation": False,
                "roam": True,
                "draggable": False,
                "data": [node_item(n) for n in nodes],
                "links": [link_item(e) for e in edges],
                "edgeSymbol": ["circle", "arrow"],
                "edgeSymbolSize": 6,
                "emphasis": {"focus": "adjacency", "lineStyle": {"width": 6}},
                "force": dict(FORCE),
                "labelLayout": {"hideOverlap": True},
                "label": {"show": True, "position": "bottom"},
                "lineStyle": {"curveness": 0.3},
                "select": {"lineStyle": {"color": "#fff", "width": 6}, "label": {"show": True}},
            }
        ],
    }
