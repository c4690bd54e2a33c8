from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from civsim.config import HEX_SIZE
from civsim.hexgrid import Hex, pixel_to_hex
from civsim.tiles import HexTile


class WorldMap:
    """
    Rectangular tile index: q in [0, width), r in [0, height).

    World generation lives outside the core; whoever builds the map must
    supply a terrain type for every coordinate.
    """

    def __init__(self, width: int, height: int, terrain: Mapping[Hex, object]):
        self.width = width
        self.height = height
        self.tiles: Dict[Hex, HexTile] = {}

        missing = [h for h in self.coordinates() if h not in terrain]
        if missing:
            raise ValueError(f"Terrain missing for {len(missing)} hex(es), e.g. {missing[0]}")

        for h in self.coordinates():
            self.tiles[h] = HexTile(h, terrain[h])

    @classmethod
    def generate(cls, width: int, height: int, terrain_for: Callable[[Hex], object]) -> "WorldMap":
        return cls(width, height, {h: terrain_for(h) for h in _rect(width, height)})

    def coordinates(self) -> Iterator[Hex]:
        return _rect(self.width, self.height)

    def __iter__(self) -> Iterator[HexTile]:
        return iter(self.tiles.values())

    def __len__(self) -> int:
        return len(self.tiles)

    def in_bounds(self, h: Hex) -> bool:
        return 0 <= h.q < self.width and 0 <= h.r < self.height

    def has_hex(self, h: Hex) -> bool:
        return h in self.tiles

    def tile_at(self, h: Hex) -> Optional[HexTile]:
        return self.tiles.get(h)

    def tile_at_pixel(self, x: float, y: float, size: float = HEX_SIZE) -> Optional[HexTile]:
        return self.tile_at(pixel_to_hex(x, y, size))

    def neighbors_in_bounds(self, h: Hex) -> Iterable[Hex]:
        for n in h.neighbors():
            if n in self.tiles:
                yield n

    def units_at(self, h: Hex) -> list:
        tile = self.tiles.get(h)
        return list(tile.units) if tile is not None else []

    # -----------------------------
    # Index maintenance (GameState only)
    # -----------------------------
    def place_unit(self, unit) -> None:
        tile = self.tiles.get(unit.position)
        if tile is not None:
            tile.add_unit(unit)

    def relocate_unit(self, unit, old: Hex) -> None:
        old_tile = self.tiles.get(old)
        if old_tile is not None:
            old_tile.remove_unit(unit)
        self.place_unit(unit)

    def remove_unit(self, unit) -> None:
        tile = self.tiles.get(unit.position)
        if tile is not None:
            tile.remove_unit(unit)

    def owned_tiles(self, nation) -> List[HexTile]:
        return [t for t in self.tiles.values() if t.is_owned_by(nation)]


def _rect(width: int, height: int) -> Iterator[Hex]:
    for r in range(height):
        for q in range(width):
            yield Hex(q, r)
