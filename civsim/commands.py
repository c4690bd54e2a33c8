from __future__ import annotations

from typing import List, Optional

from civsim.hexgrid import Hex
from civsim.unit_types import UNIT_TYPES

MUTATING_COMMANDS = frozenset({"move", "attack", "found", "build", "queue", "end"})

HELP_LINES = [
    "Commands:",
    "  move <unit_id> <q> <r>        - move a unit one hex",
    "  attack <unit_id> <target_id>  - attack an adjacent enemy unit",
    "  found <unit_id>               - found a city with a settler",
    "  build <city#> <TYPE>          - set a city's production (WARRIOR/SETTLER/WORKER)",
    "  queue <city#> <TYPE>          - append to a city's production queue",
    "  end                           - end your turn (AI nations then play)",
    "  units                         - list your units",
    "  cities                        - list your cities",
    "  status                        - turn, phase and resources",
    "  tile <q> <r>                  - describe one hex",
]


def is_mutating(command: str) -> bool:
    parts = command.strip().split()
    return bool(parts) and parts[0].lower() in MUTATING_COMMANDS


def _parse_hex(q_s: str, r_s: str) -> Optional[Hex]:
    try:
        return Hex(int(q_s), int(r_s))
    except ValueError:
        return None


def _own_unit(game, nation, unit_id: str):
    u = game.get_unit(unit_id.upper())
    if u is None or u.owner is not nation:
        return None
    return u


def _own_city(nation, index_s: str):
    try:
        i = int(index_s)
    except ValueError:
        return None
    if 1 <= i <= len(nation.cities):
        return nation.cities[i - 1]
    return None


def apply_command(game, nation_name: str, command: str) -> List[str]:
    """
    Parse and run one text command for `nation_name`.
    Returns event lines; refusals come back as "ERROR: ..." lines.
    """
    cmd = command.strip()
    if not cmd:
        return ["(no command)"]

    nation = game.get_nation_by_name(nation_name)
    if nation is None:
        return [f"ERROR: unknown nation {nation_name!r}"]

    parts = cmd.split()
    head = parts[0].lower()

    if head == "help":
        return list(HELP_LINES)

    if head in MUTATING_COMMANDS:
        if game.is_game_over():
            return ["ERROR: game is over"]
        if game.current_nation is not nation:
            return ["ERROR: Not your turn"]

    if head == "move":
        if len(parts) != 4:
            return ["Usage: move <unit_id> <q> <r>"]
        u = _own_unit(game, nation, parts[1])
        if u is None:
            return [f"ERROR: no unit {parts[1]} of yours"]
        dest = _parse_hex(parts[2], parts[3])
        if dest is None:
            return ["ERROR: q and r must be integers"]
        if not game.move_unit(u, dest):
            return [f"ERROR: {u.unit_id} cannot move to {dest}"]
        return [f"{u.unit_id} moved to {dest} ({u.movement_points} MP left)"]

    if head == "attack":
        if len(parts) != 3:
            return ["Usage: attack <unit_id> <target_id>"]
        u = _own_unit(game, nation, parts[1])
        target = game.get_unit(parts[2].upper())
        if u is None or target is None:
            return ["ERROR: unknown attacker or target"]
        result = game.attack_unit(u, target)
        if not result.success:
            return [f"ERROR: {u.unit_id} cannot attack {target.unit_id}"]
        return [f"{u.unit_id} attacks {target.unit_id}: {result}"]

    if head == "found":
        if len(parts) != 2:
            return ["Usage: found <unit_id>"]
        u = _own_unit(game, nation, parts[1])
        if u is None:
            return [f"ERROR: no unit {parts[1]} of yours"]
        city = game.found_city(u)
        if city is None:
            return [f"ERROR: cannot found a city at {u.position}"]
        return [f"Founded {city.name} at {city.position}"]

    if head in ("build", "queue"):
        if len(parts) != 3:
            return [f"Usage: {head} <city#> <TYPE>"]
        city = _own_city(nation, parts[1])
        if city is None:
            return [f"ERROR: no city #{parts[1]}"]
        item = parts[2].upper()
        if item not in UNIT_TYPES:
            return [f"ERROR: unknown unit type {parts[2]}"]
        if head == "build":
            city.set_production(item)
            return [f"{city.name} now producing {item}"]
        city.queue_production(item)
        return [f"{city.name} queue: {', '.join(city.get_production_queue())}"]

    if head == "end":
        return game.advance()

    if head == "units":
        if not nation.units:
            return ["(no units)"]
        return [
            f"{u.unit_id} {u.name} at {u.position} HP {u.health}/{u.max_health} "
            f"MP {u.movement_points}/{u.max_movement}"
            for u in nation.units
        ]

    if head == "cities":
        if not nation.cities:
            return ["(no cities)"]
        out = []
        for i, c in enumerate(nation.cities, start=1):
            prod = c.current_production or "idle"
            out.append(f"#{i} {c.name} at {c.position} pop {c.population} "
                       f"building {prod} ({c.production_progress})")
        return out

    if head == "status":
        current = game.current_nation
        res = ", ".join(f"{r}={v}" for r, v in nation.resources.get_all().items())
        return [
            f"Turn {game.turn_number}, phase {game.phase.value}, "
            f"active {current.name if current else '-'}",
            f"{nation.name}: {len(nation.cities)} cities, {len(nation.units)} units, "
            f"{len(game.world_map.owned_tiles(nation))} tiles; {res}",
        ]

    if head == "tile":
        if len(parts) != 3:
            return ["Usage: tile <q> <r>"]
        h = _parse_hex(parts[1], parts[2])
        tile = game.world_map.tile_at(h) if h is not None else None
        if tile is None:
            return ["ERROR: no such hex"]
        owner = tile.owner.name if tile.owner is not None else "none"
        units = ", ".join(u.unit_id for u in tile.units) or "none"
        city = tile.city.name if tile.city is not None else "none"
        return [f"{tile.hex} {tile.terrain} owner={owner} city={city} units={units}"]

    return [f"Unknown command: {cmd}"]
