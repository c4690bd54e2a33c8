from __future__ import annotations

from typing import List, Optional, Set

from civsim.hexgrid import Hex
from civsim.terrain import is_passable, movement_cost


class HexTile:
    """
    Game state for one map hex.

    `owner`, `units` and `city` are non-owning index entries. Only the
    GameState mutation paths should touch `units`.
    """

    def __init__(self, hex_: Hex, terrain):
        self.hex = hex_
        self.terrain = terrain
        self.owner = None
        self.improvements: Set[str] = set()
        self.units: List = []
        self.city = None

    @property
    def key(self) -> str:
        return self.hex.key

    @property
    def movement_cost(self) -> int:
        return movement_cost(self.terrain)

    @property
    def is_passable(self) -> bool:
        return is_passable(self.terrain)

    def set_owner(self, nation) -> None:
        self.owner = nation

    def is_owned_by(self, nation) -> bool:
        return nation is not None and self.owner is nation

    def add_improvement(self, improvement: str) -> None:
        self.improvements.add(improvement)

    def add_unit(self, unit) -> None:
        if unit not in self.units:
            self.units.append(unit)

    def remove_unit(self, unit) -> None:
        if unit in self.units:
            self.units.remove(unit)

    def set_city(self, city) -> None:
        self.city = city
        self.owner = city.owner

    def has_city(self) -> bool:
        return self.city is not None

    def enemy_units_of(self, nation) -> list:
        return [u for u in self.units if u.owner is not nation]

    def __repr__(self):
        return f"HexTile({self.hex}, {self.terrain})"
