from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    # Neighborhood extraction
    depth: int = int(os.getenv("LNPANEL_DEPTH", "2"))
    min_degree: int = int(os.getenv("LNPANEL_MIN_DEGREE", "2"))
    max_degree: int = int(os.getenv("LNPANEL_MAX_DEGREE", "30"))
    # Also show far ends of channels reached with no hops left.
    boundary_neighbors: bool = _env_bool("LNPANEL_BOUNDARY_NEIGHBORS")

    # Viewport used when the render context does not report one (CLI).
    viewport_width: float = float(os.getenv("LNPANEL_VIEWPORT_WIDTH", "1200"))
    viewport_height: float = float(os.getenv("LNPANEL_VIEWPORT_HEIGHT", "800"))

    log_level: str = os.getenv("LNPANEL_LOG_LEVEL", "WARNING")

    @property
    def degree_range(self) -> tuple[int, int]:
        return self.min_degree, self.max_degree
