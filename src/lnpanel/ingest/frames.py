"""Column-oriented input tables.

A panel receives two data frames: peers first, channels second. Columns are
read by position, not by name, so a frame may label its fields however it
likes as long as the order matches the node-graph field schema.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import describegraph
from .nodegraph import frames_from_nodegraph, is_nodegraph


logger = logging.getLogger(__name__)


class FrameError(ValueError):
    pass


@dataclass(frozen=True)
class NodeTable:
    ids: list[str | None]
    names: list[str | None]
    last_updates: list[int | None]
    highlighted: list[Any]
    colors: list[str | None]

    def __len__(self) -> int:
        return len(self.ids)


@dataclass(frozen=True)
class EdgeTable:
    ids: list[str | None]
    sources: list[str | None]
    targets: list[str | None]
    capacities: list[int]

    def __len__(self) -> int:
        return len(self.ids)


def frame_columns(frame: dict[str, Any]) -> list[list[Any]]:
    # Plain `{"fields": [{"values": [...]}]}` or the wire shape
    # `{"schema": {"fields": [...]}, "data": {"values": [[...], ...]}}`.
    if not isinstance(frame, dict):
        raise FrameError(f"Expected a data frame object, got {type(frame).__name__}")
    fields = frame.get("fields")
    if isinstance(fields, list):
        return [list(f.get("values") or []) if isinstance(f, dict) else [] for f in fields]
    data = frame.get("data")
    if isinstance(data, dict) and isinstance(data.get("values"), list):
        return [list(v or []) for v in data["values"]]
    raise FrameError("Data frame has neither `fields` nor `data.values`")


def _aligned(columns: list[list[Any]], width: int) -> list[list[Any]]:
    if not columns:
        return [[] for _ in range(width)]
    n = len(columns[0])
    out: list[list[Any]] = []
    for i in range(width):
        col = columns[i] if i < len(columns) else []
        if len(col) != n:
            logger.debug("Column %d has %d values, expected %d; aligning", i, len(col), n)
        out.append((col + [None] * n)[:n])
    return out


def _as_int(v: Any) -> int | None:
    if v is None or v == "":
        return None
    try:
        return int(v)
    except (TypeError, ValueError, OverflowError):
        pass
    try:
        # "5e6" and friends
        return int(float(v))
    except (TypeError, ValueError, OverflowError) as e:
        raise FrameError(f"Expected a number, got {v!r}") from e


def _as_str(v: Any) -> str | None:
    if v is None:
        return None
    return str(v)


def node_table_from_frame(frame: dict[str, Any]) -> NodeTable:
    ids, names, last_updates, highlighted, colors = _aligned(frame_columns(frame), 5)
    return NodeTable(
        ids=[_as_str(v) for v in ids],
        names=[_as_str(v) for v in names],
        last_updates=[_as_int(v) for v in last_updates],
        highlighted=list(highlighted),
        colors=[_as_str(v) for v in colors],
    )


def edge_table_from_frame(frame: dict[str, Any]) -> EdgeTable:
    ids, sources, targets, capacities = _aligned(frame_columns(frame), 4)
    return EdgeTable(
        ids=[_as_str(v) for v in ids],
        sources=[_as_str(v) for v in sources],
        targets=[_as_str(v) for v in targets],
        capacities=[_as_int(v) or 0 for v in capacities],
    )


def tables_from_series(series: list[dict[str, Any]]) -> tuple[NodeTable, EdgeTable]:
    if len(series) < 2:
        raise FrameError(f"Expected two data frames (nodes, edges), got {len(series)}")
    return node_table_from_frame(series[0]), edge_table_from_frame(series[1])


def series_from_json(obj: Any, *, identity_pubkey: str | None = None) -> list[dict[str, Any]]:
    """Normalize any supported input document to `[node_frame, edge_frame]`."""
    if isinstance(obj, list):
        return obj
    if describegraph.is_describegraph(obj):
        return frames_from_nodegraph(describegraph.nodegraph_from_describegraph(obj, identity_pubkey=identity_pubkey))
    if is_nodegraph(obj):
        return frames_from_nodegraph(obj)
    if isinstance(obj, dict) and isinstance(obj.get("series"), list):
        return obj["series"]
    raise FrameError("Unrecognised input: expected frames, a node-graph payload, or a describegraph dump")


def load_series(path: str | Path, *, identity_pubkey: str | None = None) -> list[dict[str, Any]]:
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8"))
    return series_from_json(obj, identity_pubkey=identity_pubkey)
