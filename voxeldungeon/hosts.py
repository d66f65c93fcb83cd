"""Host collaborator interface.

The generator never inspects visual assets. Whatever engine embeds it supplies
an ``AssetHost`` that can measure an asset's footprint, instantiate it at a
grid position and optionally tag the instance with a cosmetic style.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, List, Mapping, Optional, Protocol, Tuple, runtime_checkable

Footprint = Tuple[float, float, float]


@runtime_checkable
class AssetHost(Protocol):
    def measure_footprint(self, asset: Any) -> Footprint: ...

    def place_asset(self, asset: Any, position: Tuple[int, int, int]) -> Any: ...

    def apply_visual_style(self, handle: Any, style: Any) -> None: ...


@dataclass
class Placement:
    asset: Any
    position: Tuple[int, int, int]
    style: Optional[Any] = None


@dataclass
class FootprintHost:
    """In-memory host: footprints come from a lookup table, placements are recorded.

    Unknown assets measure as (0, 0, 0), which placement treats as a fit
    failure.
    """

    footprints: Mapping[Hashable, Footprint] = field(default_factory=dict)
    placements: List[Placement] = field(default_factory=list)

    def measure_footprint(self, asset: Any) -> Footprint:
        return tuple(self.footprints.get(asset, (0, 0, 0)))  # type: ignore[return-value]

    def place_asset(self, asset: Any, position: Tuple[int, int, int]) -> Placement:
        handle = Placement(asset, tuple(position))
        self.placements.append(handle)
        return handle

    def apply_visual_style(self, handle: Placement, style: Any) -> None:
        handle.style = style

    def placed(self, asset: Any) -> List[Placement]:
        return [p for p in self.placements if p.asset == asset]


__all__ = ["AssetHost", "FootprintHost", "Footprint", "Placement"]
