"""Convert a channel-graph dump into a node-graph payload.

The dump is the JSON printed by `lncli describegraph`: `nodes` carry
`pub_key`, `alias`, `color`, `last_update`; `edges` carry `channel_id`,
`node1_pub`, `node2_pub`, `capacity`. lnd encodes uint64 fields as strings.
"""

from __future__ import annotations

import logging
from typing import Any

from .nodegraph import HOME_MARKER


logger = logging.getLogger(__name__)

_UNSET_COLORS = {"", "#000000"}


def is_describegraph(obj: Any) -> bool:
    if not isinstance(obj, dict):
        return False
    nodes = obj.get("nodes")
    edges = obj.get("edges")
    if not isinstance(nodes, list) or not isinstance(edges, list):
        return False
    return any(isinstance(n, dict) and "pub_key" in n for n in nodes) or any(
        isinstance(e, dict) and "node1_pub" in e for e in edges
    )


def is_unannounced(node: dict[str, Any]) -> bool:
    # Known only from a channel announcement: no update, no alias, no color.
    last_update = int(node.get("last_update") or 0)
    alias = str(node.get("alias") or "")
    color = str(node.get("color") or "")
    return last_update <= 0 and alias == "" and color in _UNSET_COLORS


def nodegraph_from_describegraph(graph: dict[str, Any], *, identity_pubkey: str | None = None) -> dict[str, Any]:
    nodes: list[dict[str, Any]] = []
    known: set[str] = set()
    skipped_nodes = 0

    for raw in graph.get("nodes") or []:
        if is_unannounced(raw):
            skipped_nodes += 1
            continue
        pub_key = str(raw.get("pub_key") or "")
        node: dict[str, Any] = {
            "id": pub_key,
            "title": str(raw.get("alias") or ""),
            "subtitle": int(raw.get("last_update") or 0),
        }
        color = str(raw.get("color") or "")
        if color:
            node["color"] = color
        if identity_pubkey is not None and pub_key == identity_pubkey:
            node["mainstat"] = HOME_MARKER
        nodes.append(node)
        known.add(pub_key)

    edges: list[dict[str, Any]] = []
    orphaned = 0
    for raw in graph.get("edges") or []:
        src = str(raw.get("node1_pub") or "")
        dst = str(raw.get("node2_pub") or "")
        if src not in known or dst not in known:
            orphaned += 1
            continue
        edges.append(
            {
                "id": str(raw.get("channel_id") or ""),
                "source": src,
                "target": dst,
                "mainstat": int(raw.get("capacity") or 0),
            }
        )

    logger.info(
        "Converted channel graph: %d nodes (%d unannounced skipped), %d edges (%d orphaned skipped)",
        len(nodes),
        skipped_nodes,
        len(edges),
        orphaned,
    )
    return {"nodes": nodes, "edges": edges}
