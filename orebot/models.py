"""
Data models for the board snapshot and unit actions
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Coordinate:
    """2D position on the board"""
    x: int
    y: int

    def to_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def distance(self, other: 'Coordinate') -> int:
        """Manhattan distance"""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def chebyshev(self, other: 'Coordinate') -> int:
        return max(abs(self.x - other.x), abs(self.y - other.y))

    def offset(self, dx: int, dy: int) -> 'Coordinate':
        return Coordinate(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"{self.x} {self.y}"


class Side(Enum):
    OWN = "OWN"
    ENEMY = "ENEMY"


class ItemType(Enum):
    """What a unit is carrying"""
    NONE = "NONE"
    RADAR = "RADAR"
    TRAP = "TRAP"
    ORE = "ORE"


@dataclass
class Cell:
    """Single grid cell"""
    known: bool = False
    ore: int = 0  # meaningful only if known
    hole: bool = False


@dataclass
class Action:
    """One output line for a unit"""
    command: str
    pos: Optional[Coordinate] = None
    item: Optional[ItemType] = None

    @classmethod
    def wait(cls) -> 'Action':
        return cls("WAIT")

    @classmethod
    def move(cls, pos: Coordinate) -> 'Action':
        return cls("MOVE", pos=pos)

    @classmethod
    def dig(cls, pos: Coordinate) -> 'Action':
        return cls("DIG", pos=pos)

    @classmethod
    def request(cls, item: ItemType) -> 'Action':
        return cls("REQUEST", item=item)

    def __str__(self) -> str:
        parts = [self.command]
        if self.pos is not None:
            parts.append(str(self.pos))
        if self.item is not None:
            parts.append(self.item.value)
        return " ".join(parts)


@dataclass
class Unit:
    """Robot of either side. position=None means dead."""
    id: int
    side: Side
    position: Optional[Coordinate]
    item: ItemType = ItemType.NONE
    action: Optional[Action] = None  # decided this turn (own units only)

    @property
    def alive(self) -> bool:
        return self.position is not None


@dataclass
class Board:
    """Per-turn board snapshot"""
    width: int
    height: int
    cells: List[List[Cell]]  # cells[y][x]
    my_score: int = 0
    enemy_score: int = 0
    radar_cooldown: int = 0
    trap_cooldown: int = 0
    units: List[Unit] = field(default_factory=list)  # own units, judge order
    enemies: List[Unit] = field(default_factory=list)
    radars: List[Coordinate] = field(default_factory=list)
    traps: List[Coordinate] = field(default_factory=list)

    @classmethod
    def empty(cls, width: int, height: int) -> 'Board':
        return cls(width=width, height=height,
                   cells=[[Cell() for _ in range(width)] for _ in range(height)])

    def contains(self, pos: Coordinate) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def cell(self, pos: Coordinate) -> Cell:
        if not self.contains(pos):
            raise IndexError(f"{pos.to_tuple()} is outside the {self.width}x{self.height} board")
        return self.cells[pos.y][pos.x]

    def has_ore(self, pos: Coordinate) -> bool:
        """Revealed and not exhausted"""
        if not self.contains(pos):
            return False
        cell = self.cells[pos.y][pos.x]
        return cell.known and cell.ore > 0

    def columns(self, start: int = 0) -> Iterator[Coordinate]:
        """Column-major scan: left to right, then top to bottom"""
        for x in range(start, self.width):
            for y in range(self.height):
                yield Coordinate(x, y)

    def diamond(self, center: Coordinate, radius: int) -> Iterator[Coordinate]:
        """In-board cells within Manhattan radius of center"""
        for dy in range(-radius, radius + 1):
            span = radius - abs(dy)
            for dx in range(-span, span + 1):
                pos = center.offset(dx, dy)
                if self.contains(pos):
                    yield pos

    def merge_knowledge(self, previous: Optional['Board']):
        """
        Carry revealed ore and holes over from the previous snapshot.

        A cell that was known stays known (keeping its last reported ore) even
        if the radar that revealed it is gone; holes never disappear.
        """
        if previous is None or (previous.width, previous.height) != (self.width, self.height):
            return
        for y in range(self.height):
            for x in range(self.width):
                cell = self.cells[y][x]
                old = previous.cells[y][x]
                if not cell.known and old.known:
                    cell.known = True
                    cell.ore = old.ore
                cell.hole = cell.hole or old.hole

    def unit_by_id(self, unit_id: int) -> Optional[Unit]:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        return None
