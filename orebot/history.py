"""
DigHistory: own excavation records and per-turn dig claims
"""
from typing import Dict, Optional, Set
import logging

from orebot.models import Board, Coordinate

logger = logging.getLogger(__name__)


class DigHistory:
    """
    Records that persist across turns plus claims that last one turn:
    - targets: unit id -> last assigned dig cell
    - own_dug: cells excavated by own units
    - delivered: cells whose ore was already brought back
    - claims: cell -> unit id, cleared at the start of every turn
    """

    def __init__(self):
        self.targets: Dict[int, Coordinate] = {}
        self.own_dug: Set[Coordinate] = set()
        self.delivered: Set[Coordinate] = set()
        self.claims: Dict[Coordinate, int] = {}
        self.radar_seen = False

    def reset_claims(self):
        """Clear per-turn claims (called at start of each turn)"""
        self.claims.clear()

    def claim(self, pos: Coordinate, unit_id: int) -> bool:
        """
        Claim a cell for this turn.
        Returns False if another unit already holds it.
        """
        owner = self.claims.get(pos)
        if owner is not None and owner != unit_id:
            logger.debug(f"⏸️  unit {unit_id}: {pos.to_tuple()} already claimed by unit {owner}")
            return False
        self.claims[pos] = unit_id
        return True

    def is_claimed(self, pos: Coordinate, unit_id: Optional[int] = None) -> bool:
        """True if claimed by a unit other than unit_id"""
        owner = self.claims.get(pos)
        if owner is None:
            return False
        return unit_id is None or owner != unit_id

    def assign(self, unit_id: int, pos: Coordinate):
        self.targets[unit_id] = pos

    def target_of(self, unit_id: int) -> Optional[Coordinate]:
        return self.targets.get(unit_id)

    def record_dig(self, pos: Coordinate):
        self.own_dug.add(pos)

    def record_delivery(self, unit_id: int):
        """Unit came back with ore: its last target was dug by us and harvested"""
        target = self.targets.get(unit_id)
        if target is None:
            return
        self.own_dug.add(target)
        self.delivered.add(target)
        logger.debug(f"⛏️  unit {unit_id}: delivered ore from {target.to_tuple()}")

    def diggable(self, board: Board, pos: Coordinate) -> bool:
        """Not a hole, or a hole dug by our own units"""
        return pos in self.own_dug or not board.cell(pos).hole
