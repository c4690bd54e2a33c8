# civsim/turn_engine.py

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Dict, List, Optional

from civsim.cities import City, ProductionCallback
from civsim.combat import AttackResult, FAILED_ATTACK
from civsim.config import MIN_CITY_DISTANCE
from civsim.hexgrid import Hex, are_adjacent, axial_distance
from civsim.map import WorldMap
from civsim.nations import Nation
from civsim.terrain import UNSETTLEABLE_TERRAIN
from civsim.unit_types import initialize_unit_stats
from civsim.units import Unit

logger = logging.getLogger(__name__)

# Given a freshly founded city, returns the handler for its finished production.
ProductionHandlerFactory = Callable[[City], ProductionCallback]


class GamePhase(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    ENDED = "ended"


class GameState:
    def __init__(self, nations: Optional[List[Nation]] = None,
                 world_map: Optional[WorldMap] = None,
                 rng: Optional[random.Random] = None,
                 production_handler_factory: Optional[ProductionHandlerFactory] = None):
        self.nations: List[Nation] = list(nations or [])
        self.world_map = world_map
        self.rng = rng or random.Random()
        self.turn_number: int = 1
        self.active_index: int = 0
        self.phase = GamePhase.SETUP
        self.log: List[str] = []
        self.units: Dict[str, Unit] = {}  # unit_id -> Unit, every live unit
        self.ai_controllers: Dict[str, object] = {}  # nation name -> AIController
        self.production_handler_factory = production_handler_factory or self.unit_spawning_handler
        self._next_unit_number = 1

    @classmethod
    def create_default(cls, world_map: WorldMap, rng: Optional[random.Random] = None) -> "GameState":
        """Red (human) vs Blue (AI)."""
        game = cls([Nation("Red", "#c0392b"), Nation("Blue", "#2e6fd8")], world_map, rng)
        game.enable_ai(game.nations[1])
        return game

    def _event(self, msg: str) -> None:
        self.log.append(msg)
        logger.info(msg)

    # -----------------------------
    # Queries
    # -----------------------------
    @property
    def current_nation(self) -> Optional[Nation]:
        if not self.nations:
            return None
        return self.nations[self.active_index]

    def get_nation_by_name(self, name: str) -> Optional[Nation]:
        for n in self.nations:
            if n.name == name:
                return n
        return None

    def get_unit(self, unit_id: str) -> Optional[Unit]:
        return self.units.get(unit_id)

    def is_game_over(self) -> bool:
        """
        True once at most one nation still holds a city.
        Nations start with settlers and no cities, so the check only applies
        after setup (see _setup_finished).
        """
        if self.phase == GamePhase.SETUP and not self._setup_finished():
            return False
        return sum(1 for n in self.nations if n.cities) <= 1

    def winner(self) -> Optional[Nation]:
        if not self.is_game_over():
            return None
        alive = [n for n in self.nations if n.cities]
        return alive[0] if len(alive) == 1 else None

    def _setup_finished(self) -> bool:
        # Setup ends once every nation has a city or has lost the means to found one.
        for n in self.nations:
            if not n.cities and any(u.can_found_city for u in n.units):
                return False
        return True

    def _update_phase(self) -> None:
        if self.phase != GamePhase.SETUP or not self._setup_finished():
            return
        self.phase = GamePhase.PLAYING
        self._event(f"Setup complete on turn {self.turn_number}.")

    # -----------------------------
    # Turn state machine
    # -----------------------------
    def process_current_nation_turn(self) -> None:
        nation = self.current_nation
        if nation is not None:
            nation.process_turn(self.world_map)

    def next_nation(self) -> None:
        self.active_index += 1
        if self.active_index >= len(self.nations):
            self.active_index = 0
            self.turn_number += 1
            logger.info(f"Turn {self.turn_number} begins")
        self._update_phase()

    def next_turn(self) -> None:
        self.process_current_nation_turn()
        self.next_nation()

    def enable_ai(self, nation: Nation, personality=None) -> None:
        from civsim.ai import AIController, DEFAULT_PERSONALITY

        nation.is_ai = True
        self.ai_controllers[nation.name] = AIController(
            nation, self, personality or DEFAULT_PERSONALITY, rng=self.rng)

    def run_ai_turn(self) -> bool:
        nation = self.current_nation
        controller = self.ai_controllers.get(nation.name) if nation is not None else None
        if controller is None:
            return False
        controller.execute_turn()
        return True

    def advance(self) -> List[str]:
        """
        End the active nation's turn, then play any AI nations that follow,
        stopping at the next human nation (at most one full round).
        Returns the event lines produced.
        """
        start = len(self.log)
        self.next_turn()
        for _ in range(len(self.nations)):
            if self.is_game_over() or not self.run_ai_turn():
                break
            self.next_turn()

        if self.is_game_over() and self.phase != GamePhase.ENDED:
            self.phase = GamePhase.ENDED
            w = self.winner()
            self._event(f"Game over on turn {self.turn_number}. Winner: {w.name if w else 'none'}")
        elif self.current_nation is not None:
            self.log.append(f"Turn {self.turn_number}: {self.current_nation.name} to act.")
        return self.log[start:]

    # -----------------------------
    # Units
    # -----------------------------
    def allocate_unit_id(self, nation: Nation) -> str:
        uid = f"{nation.name[:1].upper()}{self._next_unit_number}"
        self._next_unit_number += 1
        return uid

    def spawn_unit(self, nation: Nation, unit_type: str, position: Hex) -> Unit:
        if self.world_map.tile_at(position) is None:
            raise ValueError(f"Cannot place {unit_type} off the map at {position}")

        unit = Unit(self.allocate_unit_id(nation), unit_type, position, owner=nation)
        initialize_unit_stats(unit, unit_type)

        nation.add_unit(unit)
        self.units[unit.unit_id] = unit
        self.world_map.place_unit(unit)
        return unit

    def _remove_unit(self, unit: Unit) -> None:
        if unit.owner is not None:
            unit.owner.remove_unit(unit)
        self.units.pop(unit.unit_id, None)
        self.world_map.remove_unit(unit)
        self._update_phase()

    def valid_moves(self, unit: Unit) -> List[Hex]:
        out = []
        for h in self.world_map.neighbors_in_bounds(unit.position):
            tile = self.world_map.tile_at(h)
            if tile.is_passable and unit.movement_points >= tile.movement_cost:
                out.append(h)
        return out

    def move_unit(self, unit: Unit, dest: Hex) -> bool:
        if self.units.get(unit.unit_id) is not unit:
            return False
        if not unit.can_move() or not are_adjacent(unit.position, dest):
            return False

        tile = self.world_map.tile_at(dest)
        if tile is None or not tile.is_passable:
            return False

        start = unit.position
        if not unit.move(dest, tile.movement_cost):
            return False

        self.world_map.relocate_unit(unit, start)
        self.log.append(f"{unit.unit_id} moved {start} -> {dest}.")
        return True

    def attack_unit(self, attacker: Unit, target: Unit) -> AttackResult:
        if self.units.get(attacker.unit_id) is not attacker or self.units.get(target.unit_id) is not target:
            return FAILED_ATTACK
        if target.owner is attacker.owner:
            return FAILED_ATTACK
        if not are_adjacent(attacker.position, target.position) or not attacker.can_attack():
            return FAILED_ATTACK

        result = attacker.attack(target, self.rng)
        self.log.append(f"{attacker.unit_id} attacks {target.unit_id}: {result}.")
        if result.target_destroyed:
            self._remove_unit(target)
            self._event(f"{target.unit_id} ({target.name}, {target.owner.name}) destroyed at {target.position}.")
        return result

    # -----------------------------
    # Cities
    # -----------------------------
    def can_found_city_at(self, nation: Nation, h: Hex) -> bool:
        tile = self.world_map.tile_at(h)
        if tile is None or tile.terrain in UNSETTLEABLE_TERRAIN or tile.has_city():
            return False
        return all(axial_distance(h, c.position) >= MIN_CITY_DISTANCE for c in nation.cities)

    def found_city(self, settler: Unit,
                   handler_factory: Optional[ProductionHandlerFactory] = None) -> Optional[City]:
        """
        Consume a settler to found a city on its hex.

        The city claims its own hex plus the six neighbors. Neighbor tiles that
        hold another nation's city keep their owner. The completion handler
        comes from `handler_factory` (default: this game's factory).
        Returns the new City, or None if the site is illegal.
        """
        nation = settler.owner
        if not settler.can_found_city or self.units.get(settler.unit_id) is not settler:
            return None
        pos = settler.position
        if not self.can_found_city_at(nation, pos):
            return None

        city = City(f"{nation.name} City {len(nation.cities) + 1}", pos, nation)
        factory = handler_factory or self.production_handler_factory
        city.on_production_complete = factory(city)

        border = [pos] + pos.neighbors()
        city.expand_borders(border)

        self.world_map.tile_at(pos).set_city(city)
        for h in border:
            tile = self.world_map.tile_at(h)
            if tile is None or (tile.city is not None and tile.city.owner is not nation):
                continue
            tile.set_owner(nation)

        nation.add_city(city)
        self._remove_unit(settler)
        self._event(f"{city.name} founded at {pos}.")
        return city

    def unit_spawning_handler(self, city: City) -> ProductionCallback:
        def on_complete(item_type: str, completed: City) -> None:
            unit = self.spawn_unit(completed.owner, item_type, completed.position)
            self._event(f"{completed.name} produced {unit.name} {unit.unit_id}.")
        return on_complete

    # -----------------------------
    # Diagnostics
    # -----------------------------
    def index_violations(self) -> List[str]:
        problems: List[str] = []
        for tile in self.world_map:
            for u in tile.units:
                if u.position != tile.hex:
                    problems.append(f"{u.unit_id} listed at {tile.hex} but positioned at {u.position}")
                if self.units.get(u.unit_id) is not u:
                    problems.append(f"{u.unit_id} listed at {tile.hex} but not alive")
            if tile.city is not None and tile.owner is not tile.city.owner:
                problems.append(f"{tile.hex} holds {tile.city.name} but is owned by {tile.owner}")

        for u in self.units.values():
            tile = self.world_map.tile_at(u.position)
            if tile is None or u not in tile.units:
                problems.append(f"{u.unit_id} at {u.position} missing from tile index")
            if u.owner is None or u not in u.owner.units:
                problems.append(f"{u.unit_id} missing from its owner's roster")

        for n in self.nations:
            for u in n.units:
                if self.units.get(u.unit_id) is not u:
                    problems.append(f"{u.unit_id} on {n.name}'s roster but not alive")
        return problems
