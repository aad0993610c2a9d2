"""
Trap placement: discrete 1-median over holes the enemy has dug
"""
from typing import List, Optional, Sequence, Set
import logging

from orebot.config import HQ_COLUMN
from orebot.history import DigHistory
from orebot.models import Board, Coordinate

logger = logging.getLogger(__name__)


def median(candidates: Sequence[Coordinate]) -> Optional[Coordinate]:
    """Candidate with the smallest total Manhattan distance to all others (first wins ties)"""
    best = None
    best_total = 0
    for i, pos in enumerate(candidates):
        total = sum(pos.distance(other) for j, other in enumerate(candidates) if i != j)
        if best is None or total < best_total:
            best, best_total = pos, total
    return best


class TrapPlanner:
    """
    Keeps a growing set of probable enemy dig sites.

    A candidate is a hole outside the extraction column that we did not dig
    and that holds neither our radar nor our trap. Candidates are never
    dropped: "was excavated at some point" only ever becomes true.
    """

    def __init__(self):
        self.candidates: List[Coordinate] = []
        self._seen: Set[Coordinate] = set()

    def _scan(self, board: Board, history: DigHistory) -> List[Coordinate]:
        radars = set(board.radars)
        traps = set(board.traps)
        found = []
        for pos in board.columns(start=HQ_COLUMN + 1):
            if pos in self._seen:
                continue
            if not board.cells[pos.y][pos.x].hole:
                continue
            if pos in history.own_dug or pos in radars or pos in traps:
                continue
            found.append(pos)
        return found

    def refresh(self, board: Board, history: DigHistory) -> int:
        """Fold new candidates into the working set; returns how many were added"""
        fresh = self._scan(board, history)
        self.candidates.extend(fresh)
        self._seen.update(fresh)
        if fresh:
            logger.debug(f"🕳️  {len(fresh)} new enemy dig candidates ({len(self.candidates)} total)")
        return len(fresh)

    def next_site(self, board: Board, history: DigHistory,
                  unit_id: Optional[int] = None) -> Optional[Coordinate]:
        """Best trap site among all candidates seen so far, or None"""
        self.refresh(board, history)
        traps = set(board.traps)
        live = [pos for pos in self.candidates
                if pos not in traps and not history.is_claimed(pos, unit_id)]
        site = median(live)
        if site is not None:
            logger.debug(f"🪤 Trap site {site.to_tuple()} from {len(live)} candidates")
        return site
