from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal

import numpy as np

from ..ingest.frames import EdgeTable, NodeTable
from .model import Edge, Graph, Node, Viewport


logger = logging.getLogger(__name__)

SATS_PER_BTC = 1e8


def truncate_number(number: float, precision: int = 4) -> float:
    """Keep `precision` significant digits: 1.23456789 -> 1.235.

    Ties round away from zero on the exact binary value (1.0625 -> 1.063).
    """
    if number == 0 or not math.isfinite(number):
        return float(number)
    d = Decimal(number)
    step = Decimal(1).scaleb(d.adjusted() - precision + 1)
    return float(d.quantize(step, rounding=ROUND_HALF_UP))


def node_size(degree: int) -> float:
    return float(np.log(degree) * 10)


def line_width(capacity: int) -> float:
    """1 + ln(ln(capacity)).

    Not finite for capacity <= 1 (-inf at 1, nan below); the value is passed
    through so the chart shows the same thing the data says.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(1 + np.log(np.log(np.float64(capacity))))


def format_sats(capacity: int) -> str:
    return f"{capacity:,}"


def format_number(number: float) -> str:
    # Shortest round-trip digits, plain notation for 1e-6 <= |x| < 1e21: 2.0 -> "2", 1e-05 -> "0.00001"
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"
    d = Decimal(repr(float(number)))
    exp = d.adjusted()
    if -7 < exp < 21:
        text = format(d, "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    sign, digits, _ = d.normalize().as_tuple()
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(x) for x in digits[1:])
    prefix = "-" if sign else ""
    exp_sign = "+" if exp > 0 else "-"
    return f"{prefix}{mantissa}e{exp_sign}{abs(exp)}"


def edge_tooltip(edge_id: str, capacity: int) -> str:
    return f"{edge_id}<br>{format_sats(capacity)} sats"


def _add_channel(node: Node, btc_value: float) -> None:
    node.degree += 1
    node.value = truncate_number(node.value + btc_value)
    node.size = node_size(node.degree)


def build_graph(nodes: NodeTable, edges: EdgeTable, *, viewport: Viewport) -> Graph:
    """Build peers and channels with per-node channel count and total BTC.

    Every node is registered before any edge is resolved, so the order of the
    node table does not matter. Edges whose endpoints are unknown are dropped
    without touching any node.
    """
    graph = Graph()

    for i in range(len(nodes)):
        is_home = bool(nodes.highlighted[i])
        node = Node(
            index=i,
            id=nodes.ids[i],
            alias=nodes.names[i] or "",
            color=nodes.colors[i],
            last_update=nodes.last_updates[i],
            is_home=is_home,
        )
        if is_home:
            node.position = viewport.center
        graph.nodes.append(node)
        # Duplicate ids: the last row wins.
        graph.lookup[node.id] = i

    home = graph.home()
    if home is not None and not home.is_home:
        # The flagged row was shadowed by a later row with the same id.
        home.is_home = True
        home.position = viewport.center

    skipped = 0
    for i in range(len(edges)):
        src = graph.node(edges.sources[i])
        dst = graph.node(edges.targets[i])
        if src is None or dst is None:
            skipped += 1
            logger.debug("Dropping channel %s: unknown endpoint", edges.ids[i])
            continue

        capacity = edges.capacities[i]
        btc_value = truncate_number(capacity / SATS_PER_BTC)
        _add_channel(src, btc_value)
        _add_channel(dst, btc_value)

        width = line_width(capacity)
        if not math.isfinite(width):
            logger.warning("Channel %s has capacity %d; line width is %s", edges.ids[i], capacity, width)

        graph.edges.append(
            Edge(
                index=i,
                id=edges.ids[i],
                source=src.id,
                target=dst.id,
                capacity=capacity,
                width=width,
                tooltip=edge_tooltip(edges.ids[i], capacity),
                color=src.color,
            )
        )

    if skipped:
        logger.info("Dropped %d of %d channels with unknown endpoints", skipped, len(edges))
    return graph
