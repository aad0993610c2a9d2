"""
Dig target selection for idle units
"""
from typing import Iterator, Optional
import logging

from orebot.config import PROBE_COLUMN, PROBE_ROW, PROBE_SPREAD
from orebot.history import DigHistory
from orebot.models import Board, Coordinate, Unit

logger = logging.getLogger(__name__)


class TargetSelector:
    """Picks the next ore cell for a unit with nothing better to do"""

    def __init__(self, probe_column: int = PROBE_COLUMN, probe_row: int = PROBE_ROW,
                 probe_spread: int = PROBE_SPREAD):
        self.probe_column = probe_column
        self.probe_row = probe_row
        self.probe_spread = probe_spread

    def probe_band(self, unit: Unit, board: Board) -> Iterator[Coordinate]:
        """
        Blind dig spots before any radar exists.

        The unit's own row comes first (spread by id), then the other rows of
        the band, then the same band one column further right.
        """
        for dx in range(board.width):
            x = min(max(self.probe_column + dx, 0), board.width - 1)
            for k in range(self.probe_spread):
                row = self.probe_row + (unit.id + k) % self.probe_spread
                yield Coordinate(x, min(max(row, 0), board.height - 1))

    def _eligible(self, pos: Coordinate, unit: Unit, board: Board, history: DigHistory,
                  skip_delivered: bool) -> bool:
        if not board.has_ore(pos):
            return False
        if history.is_claimed(pos, unit.id):
            return False
        if pos in board.traps or pos in board.radars:
            return False
        if not history.diggable(board, pos):
            return False
        if skip_delivered and pos in history.delivered:
            return False
        return True

    def select(self, unit: Unit, board: Board, history: DigHistory) -> Optional[Coordinate]:
        """
        First eligible ore cell in column-major order.

        Fresh cells are preferred; cells we already harvested are only
        revisited when nothing fresh is left.
        """
        if board.radars:
            history.radar_seen = True

        if not history.radar_seen:
            for target in self.probe_band(unit, board):
                if history.claim(target, unit.id):
                    history.assign(unit.id, target)
                    logger.debug(f"🎲 unit {unit.id}: no radar yet, probing {target.to_tuple()}")
                    return target
            logger.debug(f"🚫 unit {unit.id}: whole probe band is claimed")
            return None

        for skip_delivered in (True, False):
            for pos in board.columns():
                if self._eligible(pos, unit, board, history, skip_delivered):
                    history.claim(pos, unit.id)
                    history.assign(unit.id, pos)
                    if not skip_delivered:
                        logger.debug(f"♻️  unit {unit.id}: revisiting {pos.to_tuple()}")
                    return pos

        logger.debug(f"🚫 unit {unit.id}: no eligible ore on the board")
        return None
