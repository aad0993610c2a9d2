"""
Enemy forecast: decaying heat map of where enemy units hang around
"""
from typing import Iterable, List, Optional
import logging

from orebot.config import ENEMY_WEIGHT, HQ_COLUMN, NEIGHBOUR_WEIGHT
from orebot.models import Coordinate, Unit

logger = logging.getLogger(__name__)

NEIGHBOURS = [(-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1)]


class EnemyForecast:
    """
    Heat votes from enemy positions, persisted across turns.

    Each turn the hottest cell is reported and its heat consumed, so only
    the single best guess is acted on.
    """

    def __init__(self, width: int, height: int, weight: int = ENEMY_WEIGHT,
                 neighbour_weight: int = NEIGHBOUR_WEIGHT):
        self.width = width
        self.height = height
        self.weight = weight
        self.neighbour_weight = neighbour_weight
        self.heat: List[List[int]] = [[0] * width for _ in range(height)]

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def accumulate(self, enemies: Iterable[Unit]):
        for enemy in enemies:
            if not enemy.alive:
                continue
            pos = enemy.position
            if self._inside(pos.x, pos.y):
                self.heat[pos.y][pos.x] += self.weight
            for dx, dy in NEIGHBOURS:
                x, y = pos.x + dx, pos.y + dy
                if self._inside(x, y):
                    self.heat[y][x] += self.neighbour_weight

    def consume(self) -> Optional[Coordinate]:
        """Report the hottest cell outside the extraction column and zero it"""
        best = None
        best_heat = 0
        for y in range(self.height):
            for x in range(HQ_COLUMN + 1, self.width):
                if self.heat[y][x] > best_heat:
                    best, best_heat = Coordinate(x, y), self.heat[y][x]
        if best is not None:
            self.heat[best.y][best.x] = 0
            logger.debug(f"🔮 Enemy forecast {best.to_tuple()} (heat {best_heat})")
        return best

    def update(self, enemies: Iterable[Unit]) -> Optional[Coordinate]:
        self.accumulate(enemies)
        return self.consume()
