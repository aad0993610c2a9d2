"""
Tests for radar placement (waypoints and frontier search)
"""
import pytest
from orebot.coverage import CoverageTracker
from orebot.models import Board, Coordinate
from orebot.radar import Direction, FrontierResult, RadarPlanner


def radar_board(radars, width=30, height=15, ore=()):
    board = Board.empty(width, height)
    for x, y in ore:
        cell = board.cell(Coordinate(x, y))
        cell.known = True
        cell.ore = 1
    board.radars = [Coordinate(x, y) for x, y in radars]
    coverage = CoverageTracker(width, height)
    coverage.rebuild(board.radars)
    return board, coverage


def test_waypoints_in_order():
    """Waypoints come out in list order, skipping occupied sites"""
    planner = RadarPlanner(policy="waypoint")
    board, _ = radar_board([(9, 4)])

    assert planner.next_waypoint(board) == Coordinate(4, 7)
    assert planner.next_waypoint(board) == Coordinate(9, 10)
    assert planner.next_waypoint(board) == Coordinate(17, 4)


def test_waypoint_lost_radar_is_reoffered():
    """Once the queue is empty, the first unoccupied site is offered again"""
    planner = RadarPlanner(policy="waypoint", waypoints=[(4, 7), (9, 4)])
    board, _ = radar_board([])
    assert planner.next_waypoint(board) == Coordinate(4, 7)
    assert planner.next_waypoint(board) == Coordinate(9, 4)

    board, _ = radar_board([(9, 4)])  # radar at (4, 7) was destroyed
    assert planner.next_waypoint(board) == Coordinate(4, 7)


def test_waypoints_exhausted():
    planner = RadarPlanner(policy="waypoint", waypoints=[(4, 7), (9, 4)])
    board, coverage = radar_board([(4, 7), (9, 4)])
    assert planner.next_waypoint(board) is None
    assert planner.has_waypoint(board) == False
    assert planner.next_site(board, coverage) is None


def test_has_waypoint_does_not_consume():
    planner = RadarPlanner(policy="waypoint")
    board, _ = radar_board([])
    assert planner.has_waypoint(board)
    assert planner.has_waypoint(board)
    assert planner.next_waypoint(board) == Coordinate(4, 7)


def test_frontier_without_radars_uses_centre():
    planner = RadarPlanner(policy="frontier")
    board, coverage = radar_board([])
    result = planner.frontier_site(board, coverage)
    assert result == FrontierResult(site=Coordinate(15, 7), score=0, found=True)


def test_directional_ore_halves():
    """Cells on an axis count for both halves touching it"""
    planner = RadarPlanner(policy="frontier")
    board, _ = radar_board([], ore=[(7, 4), (9, 2), (11, 5)])
    counts = planner.directional_ore(board, Coordinate(9, 4))
    assert counts[Direction.LEFT] == 2
    assert counts[Direction.RIGHT] == 2
    assert counts[Direction.UP] == 2
    assert counts[Direction.DOWN] == 2


def test_frontier_barren_board_ties_go_to_first_direction():
    """Equal scores: the right-hand candidate is found first"""
    planner = RadarPlanner(policy="frontier")
    board, coverage = radar_board([(9, 4)])
    result = planner.frontier_site(board, coverage)
    assert result.found
    assert result.site == Coordinate(17, 4)
    assert result.score == -1


def test_frontier_follows_ore():
    """Ore on the left of the reference radar pulls the site left"""
    planner = RadarPlanner(policy="frontier")
    board, coverage = radar_board([(9, 4)], ore=[(7, 4), (6, 4)])
    result = planner.frontier_site(board, coverage)
    assert result.site == Coordinate(1, 4)
    assert result.score == 2 * 3 - 1


def test_frontier_skips_candidates_near_radars():
    """A candidate next to an existing radar is dropped"""
    planner = RadarPlanner(policy="frontier")
    board, coverage = radar_board([(9, 4), (17, 6)])
    result = planner.frontier_site(board, coverage)
    assert result.found
    assert result.site != Coordinate(17, 4)


def test_probe_explores_covered_candidates():
    """A covered candidate is queued for exploration, not accepted"""
    planner = RadarPlanner(policy="frontier")
    board, coverage = radar_board([(9, 4), (17, 4)])
    level = planner.probe(board, coverage, Coordinate(9, 4))
    assert Coordinate(17, 4) in level.explore
    assert level.best.site != Coordinate(17, 4)
    assert level.best.found


def test_frontier_reports_nothing_when_all_covered():
    """Every reachable candidate already covered: no site"""
    planner = RadarPlanner(policy="frontier")
    board, coverage = radar_board([(1, 0), (9, 0)], width=10, height=1)
    result = planner.frontier_site(board, coverage)
    assert result.found == False
    assert result.site is None
    assert planner.next_site(board, coverage) is None


def test_reference_radar_has_most_ore():
    planner = RadarPlanner(policy="frontier")
    board, _ = radar_board([(4, 7), (20, 7)], ore=[(20, 8), (21, 7), (4, 9)])
    assert planner.reference_radar(board) == Coordinate(20, 7)


def test_hybrid_falls_back_to_frontier():
    """Hybrid policy uses waypoints, then the frontier search"""
    planner = RadarPlanner(policy="hybrid", waypoints=[(4, 7)])
    board, coverage = radar_board([])
    assert planner.next_site(board, coverage) == Coordinate(4, 7)

    board, coverage = radar_board([(4, 7)])
    assert planner.has_site(board, coverage)
    site = planner.next_site(board, coverage)
    assert site is not None
    assert not coverage.is_covered(site)


def test_better_keeps_first_on_ties():
    a = FrontierResult(site=Coordinate(1, 1), score=5, found=True)
    b = FrontierResult(site=Coordinate(2, 2), score=5, found=True)
    c = FrontierResult(site=Coordinate(3, 3), score=6, found=True)
    assert a.better(b) is a
    assert a.better(c) is c
    assert FrontierResult().better(b) is b
    assert a.better(FrontierResult()) is a
