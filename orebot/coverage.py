"""
Radar coverage grid - which cells are inside some radar's sensing diamond
"""
from typing import Iterable, List, Optional, Set, Tuple
import logging

from orebot.config import RADAR_RANGE
from orebot.models import Board, Coordinate

logger = logging.getLogger(__name__)


class CoverageTracker:
    """
    Boolean grid rebuilt from the current radar set every turn.

    Radars can be destroyed, so the grid is never updated incrementally
    across turns: rebuild() always starts from an empty grid.
    """

    def __init__(self, width: int, height: int, radius: int = RADAR_RANGE):
        self.width = width
        self.height = height
        self.radius = radius
        self.grid: List[List[bool]] = self._blank()

    def _blank(self) -> List[List[bool]]:
        return [[False] * self.width for _ in range(self.height)]

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def rebuild(self, radars: Iterable[Coordinate]):
        """Clear the grid and mark every radar's diamond"""
        self.grid = self._blank()
        count = 0
        for radar in radars:
            count += 1
            for dy in range(-self.radius, self.radius + 1):
                span = self.radius - abs(dy)
                for dx in range(-span, span + 1):
                    x, y = radar.x + dx, radar.y + dy
                    if self._inside(x, y):
                        self.grid[y][x] = True
        logger.debug(f"📡 Coverage rebuilt from {count} radars: {len(self.covered_cells())} cells")

    def is_covered(self, pos: Coordinate) -> bool:
        if not self._inside(pos.x, pos.y):
            return False
        return self.grid[pos.y][pos.x]

    def covered_count(self, center: Coordinate) -> int:
        """Covered cells inside the diamond a radar at center would sense"""
        count = 0
        for dy in range(-self.radius, self.radius + 1):
            span = self.radius - abs(dy)
            for dx in range(-span, span + 1):
                x, y = center.x + dx, center.y + dy
                if self._inside(x, y) and self.grid[y][x]:
                    count += 1
        return count

    def covered_cells(self) -> Set[Tuple[int, int]]:
        return {
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if self.grid[y][x]
        }

    def ore_under_cover(self, board: Board, own_dug: Optional[Set[Coordinate]] = None) -> int:
        """
        Total ore still diggable under coverage.

        Radar and trap cells are skipped, and so are holes not dug by own
        units (an enemy hole may hide a trap).
        """
        own_dug = own_dug or set()
        blocked = set(board.radars) | set(board.traps)
        total = 0
        for y in range(self.height):
            for x in range(self.width):
                if not self.grid[y][x]:
                    continue
                pos = Coordinate(x, y)
                if pos in blocked or not board.contains(pos):
                    continue
                cell = board.cells[y][x]
                if cell.ore <= 0:
                    continue
                if cell.hole and pos not in own_dug:
                    continue
                total += cell.ore
        return total
