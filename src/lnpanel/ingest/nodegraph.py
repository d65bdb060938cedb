from __future__ import annotations

from typing import Any


# Field schema of the node-graph payload, in column order. The panel reads
# columns by position, so the order here is part of the contract.
EDGE_FIELDS: list[dict[str, str]] = [
    {"field_name": "id", "type": "string"},
    {"field_name": "source", "type": "string"},
    {"field_name": "target", "type": "string"},
    {"field_name": "mainstat", "type": "string"},
    {"field_name": "secondarystat", "type": "number"},
]

NODE_FIELDS: list[dict[str, str]] = [
    {"field_name": "id", "type": "string"},
    {"field_name": "title", "type": "string"},
    {"field_name": "subtitle", "type": "number"},
    {"field_name": "mainstat", "type": "string"},
    {"field_name": "color", "type": "string"},
]

HOME_MARKER = "true"


def graph_fields() -> dict[str, list[dict[str, str]]]:
    return {"edges_fields": [dict(f) for f in EDGE_FIELDS], "nodes_fields": [dict(f) for f in NODE_FIELDS]}


def is_nodegraph(obj: Any) -> bool:
    return isinstance(obj, dict) and isinstance(obj.get("nodes"), list) and isinstance(obj.get("edges"), list)


def _column(rows: list[dict[str, Any]], name: str) -> list[Any]:
    return [r.get(name) if isinstance(r, dict) else None for r in rows]


def frames_from_nodegraph(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Turn a `{nodes, edges}` payload into the two column-oriented frames.

    Absent keys (the exporter omits empty values) become None.
    """
    nodes = list(payload.get("nodes") or [])
    edges = list(payload.get("edges") or [])
    node_frame = {
        "name": "nodes",
        "fields": [{"name": f["field_name"], "values": _column(nodes, f["field_name"])} for f in NODE_FIELDS],
    }
    edge_frame = {
        "name": "edges",
        "fields": [{"name": f["field_name"], "values": _column(edges, f["field_name"])} for f in EDGE_FIELDS],
    }
    return [node_frame, edge_frame]
