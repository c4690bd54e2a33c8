import pytest

from civsim.cities import City
from civsim.hexgrid import Hex
from civsim.nations import Age, Nation
from civsim.resources import ResourceType

from conftest import make_map


def _city(**kwargs):
    return City("Test City", Hex(2, 2), owner=None, **kwargs)


def test_production_completes_and_fires_callback():
    done = []
    city = _city(on_production_complete=lambda item, c: done.append((item, c.production_progress)))
    city.set_production("WARRIOR")

    assert city.add_production(29) is None
    assert city.add_production(5) == "WARRIOR"

    # handler runs before progress is reset
    assert done == [("WARRIOR", 34)]
    assert city.production_progress == 0
    assert city.current_production is None


def test_queue_is_pulled_when_idle():
    done = []
    city = _city(on_production_complete=lambda item, c: done.append(item))
    city.queue_production("WARRIOR")
    city.queue_production("SETTLER")

    # first call pulls WARRIOR from the queue and accrues toward it
    assert city.add_production(10) is None
    assert city.current_production == "WARRIOR"
    assert city.get_production_queue() == ["SETTLER"]

    assert city.add_production(25) == "WARRIOR"
    assert done == ["WARRIOR"]
    # next item became current but does not get this turn's overflow
    assert city.current_production == "SETTLER"
    assert city.production_progress == 0
    assert city.get_production_queue() == []


def test_unknown_items_are_rejected_up_front():
    city = _city()
    with pytest.raises(ValueError):
        city.set_production("CATAPULT")
    with pytest.raises(ValueError):
        city.queue_production("CATAPULT")
    assert city.current_production is None
    assert city.get_production_queue() == []


def test_idle_city_without_queue_accrues_nothing():
    city = _city()
    assert city.add_production(10) is None
    assert city.production_progress == 0


def test_set_production_resets_progress():
    city = _city()
    city.set_production("SETTLER")
    city.add_production(20)
    city.set_production("WORKER")
    assert city.production_progress == 0


def test_borders_and_buildings():
    city = _city()
    city.expand_borders([Hex(2, 2), Hex(3, 2), Hex(2, 2)])
    assert city.borders == [Hex(2, 2), Hex(3, 2)]
    city.add_building("Granary")
    assert city.has_building("Granary")
    assert not city.has_building("Walls")


def test_process_turn_adds_population_and_border_yields():
    world_map = make_map()
    nation = Nation("Red", "#f00")
    city = City("Red City 1", Hex(2, 2), nation)
    city.expand_borders([Hex(2, 2), Hex(3, 2)])
    nation.add_city(city)
    for h in city.borders:
        world_map.tile_at(h).set_owner(nation)

    nation.process_turn(world_map)

    # population 1 plus two grassland tiles at 2 food each
    assert nation.resources.get(ResourceType.FOOD) == 5
    assert nation.resources.get(ResourceType.PRODUCTION) == 1
    assert nation.resources.get(ResourceType.GOLD) == 1


def test_process_turn_skips_border_tiles_owned_by_others():
    world_map = make_map()
    red, blue = Nation("Red", "#f00"), Nation("Blue", "#00f")
    city = City("Red City 1", Hex(2, 2), red)
    city.expand_borders([Hex(2, 2), Hex(3, 2)])
    red.add_city(city)
    world_map.tile_at(Hex(2, 2)).set_owner(red)
    world_map.tile_at(Hex(3, 2)).set_owner(blue)

    red.process_turn(world_map)
    assert red.resources.get(ResourceType.FOOD) == 3


def test_technology_and_age_bookkeeping():
    nation = Nation("Red", "#f00")
    nation.research_technology("Bronze Working")
    nation.research_technology("Bronze Working")
    assert nation.technologies == ["Bronze Working"]
    assert nation.has_technology("Bronze Working")
    assert not nation.advance_age()
    assert nation.current_age == Age.ANCIENT
