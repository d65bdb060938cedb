from __future__ import annotations

from dataclasses import dataclass, field


INITIAL_SYMBOL_SIZE = 12.0


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2


@dataclass(eq=False)
class Node:
    # Row position in the node table; used as traversal identity.
    index: int
    id: str
    alias: str = ""
    color: str | None = None
    last_update: int | None = None
    is_home: bool = False
    degree: int = 0
    value: float = 0.0
    size: float = INITIAL_SYMBOL_SIZE
    position: tuple[float, float] | None = None


@dataclass(eq=False)
class Edge:
    # Row position in the edge table; ids are not unique.
    index: int
    id: str
    source: str
    target: str
    capacity: int
    width: float
    tooltip: str
    color: str | None = None

    def peer_of(self, node_id: str) -> str | None:
        if self.source == node_id:
            return self.target
        if self.target == node_id:
            return self.source
        return None


@dataclass
class Graph:
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    # node id -> position in `nodes`
    lookup: dict[str, int] = field(default_factory=dict)

    def node(self, node_id: str | None) -> Node | None:
        i = self.lookup.get(node_id)
        if i is None:
            return None
        return self.nodes[i]

    def home(self) -> Node | None:
        # First flagged row, resolved through the lookup so a shadowed
        # duplicate id maps to the node edges attach to.
        for n in self.nodes:
            if n.is_home:
                return self.node(n.id) or n
        return None
