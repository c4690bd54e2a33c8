from __future__ import annotations

from typing import Optional

from civsim.hexgrid import Hex
from civsim.terrain import TerrainType

TERRAIN_SYMBOLS = {
    TerrainType.GRASSLAND: "..",
    TerrainType.PLAINS: ",,",
    TerrainType.DESERT: "::",
    TerrainType.TUNDRA: "--",
    TerrainType.SNOW: "**",
    TerrainType.MOUNTAIN: "^^",
    TerrainType.OCEAN: "~~",
    TerrainType.COAST: "~.",
}

LEGEND = (
    "Legend: .. grassland | ,, plains | :: desert | -- tundra | ** snow | ^^ mountain "
    "| ~~ ocean | ~. coast | C# city (nation initial) | W/S/K warrior/settler/worker "
    "(lowercase = enemy) | ++ mixed stack"
)

UNIT_LETTERS = {"WARRIOR": "W", "SETTLER": "S", "WORKER": "K"}


def render_map_ascii(game, viewer: Optional[object] = None) -> str:
    """
    Text view of the whole map, odd rows indented half a cell.
    Units are drawn from `viewer`'s point of view: own units upper case,
    everyone else's lower case.
    """
    wm = game.world_map
    if wm is None:
        return "(no map)"

    title = f"Map for {viewer.name}" if viewer is not None else "Map"
    lines = [f"{title} (Turn {game.turn_number})", LEGEND, ""]
    lines.append("      " + " ".join(f"{q:>2}" for q in range(wm.width)))

    for r in range(wm.height):
        indent = " " if (r % 2) != 0 else ""
        row = [f"r={r:>2}  {indent}"]
        for q in range(wm.width):
            row.append(render_tile(wm.tile_at(Hex(q, r)), viewer))
        lines.append(" ".join(row))

    return "\n".join(lines)


def render_tile(tile, viewer) -> str:
    if tile.city is not None:
        return "C" + tile.city.owner.name[:1].upper()
    if tile.units:
        return render_occupants(tile.units, viewer)
    return TERRAIN_SYMBOLS.get(tile.terrain, "??")


def render_occupants(occ, viewer) -> str:
    owners = {id(u.owner) for u in occ}
    if len(owners) > 1:
        return "++"

    u = occ[0]
    letter = UNIT_LETTERS.get(u.unit_type, "?")
    if viewer is not None and u.owner is not viewer:
        letter = letter.lower()
    count = str(len(occ)) if len(occ) > 1 else " "
    return letter + count
