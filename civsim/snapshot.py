# civsim/snapshot.py
from __future__ import annotations

from typing import Any

SCHEMA_VERSION = 1


def _unit_to_dict(u) -> dict[str, Any]:
    return {
        "id": u.unit_id,
        "type": u.unit_type,
        "owner": u.owner.name if u.owner is not None else None,
        "pos": u.position.key,
        "health": u.health,
        "max_health": u.max_health,
        "movement_points": u.movement_points,
        "max_movement": u.max_movement,
        "strength": u.strength,
        "has_acted": u.has_acted,
    }


def _city_to_dict(c) -> dict[str, Any]:
    return {
        "name": c.name,
        "owner": c.owner.name,
        "pos": c.position.key,
        "population": c.population,
        "current_production": c.current_production,
        "production_progress": c.production_progress,
        "queue": c.get_production_queue(),
        "borders": [h.key for h in c.borders],
        "buildings": sorted(c.buildings),
    }


def _nation_to_dict(n) -> dict[str, Any]:
    return {
        "name": n.name,
        "color": n.color,
        "is_ai": n.is_ai,
        "age": n.current_age.value,
        "resources": {str(r): v for r, v in n.resources.get_all().items()},
        "technologies": list(n.technologies),
        "cities": [_city_to_dict(c) for c in n.cities],
        "units": [u.unit_id for u in n.units],
    }


def _tile_to_dict(t) -> dict[str, Any]:
    return {
        "terrain": str(t.terrain),
        "owner": t.owner.name if t.owner is not None else None,
        "city": t.city.name if t.city is not None else None,
        "units": [u.unit_id for u in t.units],
        "improvements": sorted(t.improvements),
    }


def game_snapshot(game) -> dict[str, Any]:
    """Read-only, JSON-serializable view of the whole game."""
    wm = game.world_map
    current = game.current_nation
    return {
        "schema": SCHEMA_VERSION,
        "turn_number": game.turn_number,
        "phase": game.phase.value,
        "current_nation": current.name if current is not None else None,
        "game_over": game.is_game_over(),
        "map": {
            "width": wm.width,
            "height": wm.height,
            "tiles": {t.key: _tile_to_dict(t) for t in wm},
        },
        "nations": [_nation_to_dict(n) for n in game.nations],
        "units": {uid: _unit_to_dict(u) for uid, u in game.units.items()},
    }
