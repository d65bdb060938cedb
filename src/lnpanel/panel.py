"""Panel entry point: two data frames in, one chart option out."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .chart.option import build_option
from .config import Settings
from .graph.build import build_graph
from .graph.model import Graph, Viewport
from .graph.neighbors import Neighborhood, extract_neighborhood
from .ingest.frames import tables_from_series


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderContext:
    # Chart area in pixels; None means "not known", fall back to settings.
    width: float | None = None
    height: float | None = None

    def viewport(self, settings: Settings) -> Viewport:
        return Viewport(
            width=float(self.width if self.width is not None else settings.viewport_width),
            height=float(self.height if self.height is not None else settings.viewport_height),
        )


@dataclass(frozen=True)
class PanelData:
    graph: Graph
    neighborhood: Neighborhood


def prepare(
    series: list[dict[str, Any]],
    context: RenderContext | None = None,
    *,
    settings: Settings | None = None,
    depth: int | None = None,
    degree_range: tuple[int, int] | None = None,
    boundary_neighbors: bool | None = None,
) -> PanelData:
    settings = settings or Settings()
    context = context or RenderContext()
    depth = settings.depth if depth is None else int(depth)
    degree_range = settings.degree_range if degree_range is None else degree_range
    boundary = settings.boundary_neighbors if boundary_neighbors is None else bool(boundary_neighbors)
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")

    node_table, edge_table = tables_from_series(series)
    graph = build_graph(node_table, edge_table, viewport=context.viewport(settings))
    hood = extract_neighborhood(graph, depth=depth, degree_range=degree_range, boundary_neighbors=boundary)
    logger.info(
        "Home %s: %d/%d nodes, %d/%d channels within %d hops",
        hood.home.id,
        len(hood.nodes),
        len(graph.nodes),
        len(hood.edges),
        len(graph.edges),
        depth,
    )
    return PanelData(graph=graph, neighborhood=hood)


def render_panel(
    series: list[dict[str, Any]],
    context: RenderContext | None = None,
    *,
    settings: Settings | None = None,
    depth: int | None = None,
    degree_range: tuple[int, int] | None = None,
    boundary_neighbors: bool | None = None,
) -> dict[str, Any]:
    """Build the graph, cut out the home node's neighborhood, and wrap it as a chart option.

    Raises MissingHomeNode when no row is flagged as home.
    """
    data = prepare(
        series,
        context,
        settings=settings,
        depth=depth,
        degree_range=degree_range,
        boundary_neighbors=boundary_neighbors,
    )
    hood = data.neighborhood
    return build_option(data.graph, hood.nodes, hood.edges, depth=hood.depth)
