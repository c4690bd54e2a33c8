import json

from civsim.commands import apply_command, is_mutating
from civsim.hexgrid import Hex
from civsim.render_ascii import render_map_ascii
from civsim.snapshot import game_snapshot
from repl.repl import run_repl


def test_move_and_found_through_commands(game):
    assert apply_command(game, "Red", "move R2 3 3") == ["R2 moved to (3,3) (1 MP left)"]
    assert apply_command(game, "Red", "found r1") == ["Founded Red City 1 at (2,2)"]
    assert game.index_violations() == []


def test_mutating_commands_need_the_turn(game):
    assert apply_command(game, "Blue", "move B3 4 3") == ["ERROR: Not your turn"]
    assert game.get_unit("B3").movement_points == 2
    # read-only commands are fine out of turn
    assert apply_command(game, "Blue", "units")[0].startswith("B3 Warrior at (4,2)")


def test_cannot_command_enemy_units(game):
    out = apply_command(game, "Red", "move B3 4 3")
    assert out[0].startswith("ERROR")


def test_bad_arguments(game):
    assert apply_command(game, "Red", "move R2 x y") == ["ERROR: q and r must be integers"]
    assert apply_command(game, "Red", "move R2") == ["Usage: move <unit_id> <q> <r>"]
    assert apply_command(game, "Red", "move R2 5 2")[0].startswith("ERROR")
    assert apply_command(game, "Red", "frobnicate") == ["Unknown command: frobnicate"]
    assert apply_command(game, "Green", "status")[0].startswith("ERROR")


def test_build_and_queue(game):
    apply_command(game, "Red", "found R1")
    assert apply_command(game, "Red", "build 1 warrior") == ["Red City 1 now producing WARRIOR"]
    assert apply_command(game, "Red", "queue 1 settler") == ["Red City 1 queue: SETTLER"]
    assert apply_command(game, "Red", "build 2 warrior") == ["ERROR: no city #2"]
    assert apply_command(game, "Red", "build 1 catapult") == ["ERROR: unknown unit type catapult"]
    assert "building WARRIOR" in apply_command(game, "Red", "cities")[0]


def test_attack_command(game):
    out = apply_command(game, "Red", "attack R2 B3")
    assert out[0].startswith("R2 attacks B3: hit for")
    assert apply_command(game, "Red", "attack R2 B3")[0].startswith("ERROR")


def test_end_hands_over_the_turn(game):
    assert apply_command(game, "Red", "end") == ["Turn 1: Blue to act."]
    assert game.current_nation.name == "Blue"


def test_status_and_tile(game):
    status = apply_command(game, "Red", "status")
    assert status[0] == "Turn 1, phase setup, active Red"
    assert status[1].startswith("Red: 0 cities, 2 units, 0 tiles;")
    apply_command(game, "Red", "found R1")
    assert apply_command(game, "Red", "status")[1].startswith("Red: 1 cities, 1 units, 7 tiles;")
    assert apply_command(game, "Red", "tile 5 2") == ["(5,2) Ocean owner=none city=none units=none"]
    assert apply_command(game, "Red", "tile 3 2")[0].endswith("units=R2")


def test_is_mutating():
    assert is_mutating("move R2 1 1")
    assert is_mutating("END")
    assert not is_mutating("status")
    assert not is_mutating("")


def test_snapshot_is_json_serializable(game):
    apply_command(game, "Red", "found R1")
    game.world_map.tile_at(Hex(3, 3)).add_improvement("Farm")
    game.world_map.tile_at(Hex(3, 3)).add_improvement("Farm")
    snap = json.loads(json.dumps(game_snapshot(game)))

    assert snap["turn_number"] == 1
    assert snap["current_nation"] == "Red"
    assert snap["map"]["tiles"]["2,2"]["city"] == "Red City 1"
    assert snap["units"]["R2"]["pos"] == "3,2"
    assert snap["nations"][0]["cities"][0]["borders"][0] == "2,2"
    assert len(snap["map"]["tiles"]) == 120
    assert snap["map"]["tiles"]["3,3"]["improvements"] == ["Farm"]


def test_ascii_map_marks_cities_and_units(game, nations):
    apply_command(game, "Red", "found R1")
    text = render_map_ascii(game, nations["Red"])
    assert "CR" in text
    assert "W " in text   # own warrior
    assert "w " in text   # enemy warrior
    assert "~~" in text


def test_repl_runs_scripted_session(game):
    script = iter(["status", "map", "move R2 3 3", "exit"])
    out = []
    run_repl(game, input_fn=lambda prompt: next(script), output_fn=out.append)

    assert "Turn 1, phase setup, active Red" in out
    assert "R2 moved to (3,3) (1 MP left)" in out
