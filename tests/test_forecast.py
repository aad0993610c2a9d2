"""
Tests for the enemy heat-map forecast
"""
import pytest
from orebot.forecast import EnemyForecast
from orebot.models import Coordinate, Side, Unit


def enemy(unit_id, x, y):
    position = None if (x, y) == (-1, -1) else Coordinate(x, y)
    return Unit(id=unit_id, side=Side.ENEMY, position=position)


def test_heat_votes():
    """Own cell gets 3, each of the 8 neighbours gets 1"""
    forecast = EnemyForecast(30, 15)
    forecast.accumulate([enemy(5, 10, 7)])

    assert forecast.heat[7][10] == 3
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if (dx, dy) != (0, 0):
                assert forecast.heat[7 + dy][10 + dx] == 1
    assert forecast.heat[7][12] == 0


def test_hottest_cell_is_consumed():
    """Reported cell is zeroed; the next report falls to the next hottest"""
    forecast = EnemyForecast(30, 15)
    assert forecast.update([enemy(5, 10, 7)]) == Coordinate(10, 7)
    assert forecast.heat[7][10] == 0
    assert forecast.consume() == Coordinate(9, 6)


def test_heat_accumulates_across_turns():
    forecast = EnemyForecast(30, 15)
    forecast.update([enemy(5, 10, 7), enemy(6, 20, 3)])
    forecast.accumulate([enemy(6, 20, 3)])
    # (20, 3) was consumed on turn one; its fresh 3 ties (10, 7) and wins on scan order
    assert forecast.heat[3][20] == 3
    assert forecast.heat[3][21] == 2
    assert forecast.consume() == Coordinate(20, 3)


def test_edges_and_hq_column():
    """Off-board neighbours are skipped and column 0 is never reported"""
    forecast = EnemyForecast(30, 15)
    forecast.accumulate([enemy(5, 0, 0)])
    assert forecast.heat[0][0] == 3
    assert forecast.consume() == Coordinate(1, 0)


def test_dead_enemies_and_empty_map():
    forecast = EnemyForecast(30, 15)
    assert forecast.update([enemy(5, -1, -1)]) is None
