"""
Judge line protocol: read board snapshots from stdin, write actions to stdout

Input format:
- Once: "width height"
- Each turn:
  - "myScore enemyScore"
  - height lines, each with width pairs "ore hole" (ore is "?" when unknown)
  - "entityCount radarCooldown trapCooldown"
  - entityCount lines "id type x y item"
    type: 0 own unit, 1 enemy unit, 2 radar, 3 trap
    item: -1 none, 2 radar, 3 trap, 4 ore
- Dead units report position (-1, -1)

Output: one action line per own unit, in input order.
"""
import sys
from typing import Dict, IO, List, Optional, Sequence, Tuple
import logging

from pydantic import BaseModel, Field, ValidationError

from orebot.models import Action, Board, Cell, Coordinate, ItemType, Side, Unit

logger = logging.getLogger(__name__)

OWN_UNIT = 0
ENEMY_UNIT = 1
RADAR = 2
TRAP = 3

ITEM_CODES: Dict[int, ItemType] = {
    -1: ItemType.NONE,
    2: ItemType.RADAR,
    3: ItemType.TRAP,
    4: ItemType.ORE,
}

DEAD = (-1, -1)


class ProtocolError(Exception):
    """Judge sent something we cannot read"""


class CellRecord(BaseModel):
    """One "ore hole" pair"""
    ore: Optional[int] = Field(default=None, ge=0)  # None when unknown
    hole: bool = False


class EntityRecord(BaseModel):
    """One "id type x y item" line"""
    id: int
    type: int = Field(ge=OWN_UNIT, le=TRAP)
    x: int
    y: int
    item: int = -1

    @property
    def position(self) -> Optional[Coordinate]:
        if (self.x, self.y) == DEAD:
            return None
        return Coordinate(self.x, self.y)

    @property
    def item_type(self) -> ItemType:
        return ITEM_CODES.get(self.item, ItemType.NONE)


class TurnSnapshot(BaseModel):
    """Everything the judge tells us in one turn"""
    my_score: int = 0
    enemy_score: int = 0
    grid: List[List[CellRecord]] = Field(default_factory=list)  # grid[y][x]
    radar_cooldown: int = Field(default=0, ge=0)
    trap_cooldown: int = Field(default=0, ge=0)
    entities: List[EntityRecord] = Field(default_factory=list)

    def to_board(self, width: int, height: int) -> Board:
        cells = [
            [Cell(known=rec.ore is not None, ore=rec.ore or 0, hole=rec.hole) for rec in row]
            for row in self.grid
        ]
        board = Board(
            width=width,
            height=height,
            cells=cells,
            my_score=self.my_score,
            enemy_score=self.enemy_score,
            radar_cooldown=self.radar_cooldown,
            trap_cooldown=self.trap_cooldown,
        )
        for entity in self.entities:
            if entity.type == OWN_UNIT:
                board.units.append(Unit(entity.id, Side.OWN, entity.position, entity.item_type))
            elif entity.type == ENEMY_UNIT:
                board.enemies.append(Unit(entity.id, Side.ENEMY, entity.position, entity.item_type))
            elif entity.type == RADAR and entity.position is not None:
                board.radars.append(entity.position)
            elif entity.type == TRAP and entity.position is not None:
                board.traps.append(entity.position)
        return board


class JudgeClient:
    """Blocking reader/writer for the judge's text protocol"""

    def __init__(self, stream: Optional[IO[str]] = None, out: Optional[IO[str]] = None):
        self.stream = stream or sys.stdin
        self.out = out or sys.stdout
        self.width = 0
        self.height = 0

    def _tokens(self) -> List[str]:
        line = self.stream.readline()
        if not line:
            raise EOFError("judge closed the input stream")
        return line.split()

    def _ints(self, expected: int) -> List[int]:
        tokens = self._tokens()
        if len(tokens) != expected:
            raise ProtocolError(f"expected {expected} integers, got {tokens!r}")
        try:
            return [int(token) for token in tokens]
        except ValueError as e:
            raise ProtocolError(f"not an integer line: {tokens!r}") from e

    def read_init(self) -> Tuple[int, int]:
        self.width, self.height = self._ints(2)
        logger.info(f"🗺️  Board {self.width}x{self.height}")
        return self.width, self.height

    def _read_row(self) -> List[Dict[str, object]]:
        tokens = self._tokens()
        if len(tokens) != 2 * self.width:
            raise ProtocolError(f"grid row has {len(tokens)} tokens, expected {2 * self.width}")
        row = []
        for x in range(self.width):
            ore, hole = tokens[2 * x], tokens[2 * x + 1]
            row.append({"ore": None if ore == "?" else ore, "hole": hole})
        return row

    def read_snapshot(self) -> TurnSnapshot:
        my_score, enemy_score = self._ints(2)
        grid = [self._read_row() for _ in range(self.height)]
        count, radar_cooldown, trap_cooldown = self._ints(3)
        entities = []
        for _ in range(count):
            entity_id, kind, x, y, item = self._ints(5)
            entities.append({"id": entity_id, "type": kind, "x": x, "y": y, "item": item})
        try:
            return TurnSnapshot(
                my_score=my_score,
                enemy_score=enemy_score,
                grid=grid,
                radar_cooldown=radar_cooldown,
                trap_cooldown=trap_cooldown,
                entities=entities,
            )
        except ValidationError as e:
            raise ProtocolError(f"invalid turn snapshot: {e}") from e

    def read_turn(self) -> Board:
        return self.read_snapshot().to_board(self.width, self.height)

    def send(self, actions: Sequence[Action]):
        for action in actions:
            self.out.write(f"{action}\n")
        self.out.flush()
