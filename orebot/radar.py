"""
Radar placement: fixed waypoints and frontier search

Waypoint policy:
- Ordered list of sites tiling the default 30x15 board with little overlap
- Sites that already hold a radar are skipped; a lost radar's site is reused

Frontier policy:
- Start from the radar whose diamond holds the most ore cells
- Probe the four axis directions beyond the sensing radius
- Score = ore cells on that side of the node * ORE_WEIGHT - cells the
  candidate would re-cover
- Covered candidates are explored further instead of being accepted
"""
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Dict, List, Optional, Sequence, Set, Tuple
import logging

from orebot.config import (
    ORE_WEIGHT, PROXIMITY, RADAR_POLICY, RADAR_RANGE, RADAR_WAYPOINTS, SEARCH_STEPS, HQ_COLUMN
)
from orebot.coverage import CoverageTracker
from orebot.models import Board, Coordinate

logger = logging.getLogger(__name__)


class RadarPolicy(Enum):
    WAYPOINT = "waypoint"
    FRONTIER = "frontier"
    HYBRID = "hybrid"  # waypoints first, frontier when they run out


class Direction(Enum):
    RIGHT = (1, 0)
    LEFT = (-1, 0)
    UP = (0, -1)
    DOWN = (0, 1)


@dataclass(frozen=True)
class FrontierResult:
    """Outcome of a frontier search (or of one level of it)"""
    site: Optional[Coordinate] = None
    score: int = 0
    found: bool = False

    def better(self, other: 'FrontierResult') -> 'FrontierResult':
        """Keep self unless other is found and strictly better"""
        if not other.found:
            return self
        if not self.found or other.score > self.score:
            return other
        return self


@dataclass(frozen=True)
class FrontierLevel:
    """Result of probing around a single node"""
    node: Coordinate
    best: FrontierResult = field(default_factory=FrontierResult)
    explore: Tuple[Coordinate, ...] = field(default_factory=tuple)


class RadarPlanner:
    """Proposes the next radar deployment site"""

    def __init__(self, policy: str = RADAR_POLICY,
                 waypoints: Optional[Sequence[Tuple[int, int]]] = None,
                 radius: int = RADAR_RANGE, ore_weight: int = ORE_WEIGHT,
                 proximity: int = PROXIMITY, steps: Sequence[int] = SEARCH_STEPS):
        self.policy = RadarPolicy(policy)
        sites = RADAR_WAYPOINTS if waypoints is None else waypoints
        self.waypoints: List[Coordinate] = [Coordinate(x, y) for x, y in sites]
        self.queue: Deque[Coordinate] = deque(self.waypoints)
        self.radius = radius
        self.ore_weight = ore_weight
        self.proximity = proximity
        self.steps = tuple(sorted(steps, reverse=True))

    # ------------------------------------------------------------------
    # Waypoint policy
    # ------------------------------------------------------------------

    def next_waypoint(self, board: Board) -> Optional[Coordinate]:
        """Pop the next unoccupied waypoint; re-offer lost sites once the queue is empty"""
        occupied = set(board.radars)
        while self.queue:
            site = self.queue.popleft()
            if site not in occupied and board.contains(site):
                return site
        for site in self.waypoints:
            if site not in occupied and board.contains(site):
                logger.info(f"📡 Waypoint queue empty, re-offering {site.to_tuple()}")
                return site
        return None

    def has_waypoint(self, board: Board) -> bool:
        occupied = set(board.radars)
        return any(site not in occupied and board.contains(site) for site in self.waypoints)

    # ------------------------------------------------------------------
    # Frontier policy
    # ------------------------------------------------------------------

    def directional_ore(self, board: Board, center: Coordinate) -> Dict[Direction, int]:
        """Ore cells in each half of the diamond around center"""
        counts = {direction: 0 for direction in Direction}
        for pos in board.diamond(center, self.radius):
            if not board.has_ore(pos):
                continue
            dx, dy = pos.x - center.x, pos.y - center.y
            if dx >= 0:
                counts[Direction.RIGHT] += 1
            if dx <= 0:
                counts[Direction.LEFT] += 1
            if dy <= 0:
                counts[Direction.UP] += 1
            if dy >= 0:
                counts[Direction.DOWN] += 1
        return counts

    def ore_cells(self, board: Board, center: Coordinate) -> int:
        return sum(1 for pos in board.diamond(center, self.radius) if board.has_ore(pos))

    def reference_radar(self, board: Board) -> Optional[Coordinate]:
        """Radar with the most ore cells around it (first wins ties)"""
        best = None
        best_count = -1
        for radar in board.radars:
            count = self.ore_cells(board, radar)
            if count > best_count:
                best, best_count = radar, count
        return best

    def _too_close(self, board: Board, pos: Coordinate) -> bool:
        return any(0 < radar.chebyshev(pos) < self.proximity for radar in board.radars)

    def _step(self, board: Board, node: Coordinate, direction: Direction) -> Optional[Coordinate]:
        """Farthest in-board step in this direction"""
        dx, dy = direction.value
        for step in self.steps:
            pos = node.offset(dx * step, dy * step)
            if not board.contains(pos):
                continue
            if direction is Direction.LEFT and pos.x == HQ_COLUMN:
                continue
            return pos
        return None

    def probe(self, board: Board, coverage: CoverageTracker, node: Coordinate) -> FrontierLevel:
        """Score the four axis candidates around one node"""
        ore = self.directional_ore(board, node)
        best = FrontierResult()
        explore: List[Coordinate] = []
        for direction in Direction:
            candidate = self._step(board, node, direction)
            if candidate is None or self._too_close(board, candidate):
                continue
            if coverage.is_covered(candidate):
                explore.append(candidate)
                continue
            score = ore[direction] * self.ore_weight - coverage.covered_count(candidate)
            best = best.better(FrontierResult(site=candidate, score=score, found=True))
        return FrontierLevel(node=node, best=best, explore=tuple(explore))

    def frontier_site(self, board: Board, coverage: CoverageTracker) -> FrontierResult:
        """
        Breadth-first frontier search from the reference radar.

        The horizon is bounded by the fixed step sizes and each node is
        visited once, so a better site farther away can be missed.
        """
        if not board.radars:
            center = Coordinate(board.width // 2, board.height // 2)
            return FrontierResult(site=center, score=0, found=True)

        start = self.reference_radar(board)
        visited: Set[Coordinate] = {start}
        worklist: Deque[Coordinate] = deque([start])
        best = FrontierResult()
        while worklist:
            level = self.probe(board, coverage, worklist.popleft())
            best = best.better(level.best)
            for pos in level.explore:
                if pos not in visited:
                    visited.add(pos)
                    worklist.append(pos)

        if best.found:
            logger.debug(f"🧭 Frontier site {best.site.to_tuple()} score={best.score} "
                         f"({len(visited)} nodes)")
        else:
            logger.debug(f"🧭 Frontier search found nothing ({len(visited)} nodes)")
        return best

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def next_site(self, board: Board, coverage: CoverageTracker) -> Optional[Coordinate]:
        """Next deployment site under the configured policy"""
        if self.policy in (RadarPolicy.WAYPOINT, RadarPolicy.HYBRID):
            site = self.next_waypoint(board)
            if site is not None or self.policy is RadarPolicy.WAYPOINT:
                return site
        result = self.frontier_site(board, coverage)
        return result.site if result.found else None

    def has_site(self, board: Board, coverage: CoverageTracker) -> bool:
        """Whether next_site would return something (does not consume waypoints)"""
        if self.policy in (RadarPolicy.WAYPOINT, RadarPolicy.HYBRID):
            if self.has_waypoint(board):
                return True
            if self.policy is RadarPolicy.WAYPOINT:
                return False
        return self.frontier_site(board, coverage).found
