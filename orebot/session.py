"""
Planning session: everything that survives from one turn to the next
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import logging

from orebot.config import RADAR_POLICY
from orebot.coverage import CoverageTracker
from orebot.forecast import EnemyForecast
from orebot.history import DigHistory
from orebot.models import Board, Coordinate, ItemType
from orebot.radar import RadarPlanner
from orebot.targets import TargetSelector
from orebot.traps import TrapPlanner

logger = logging.getLogger(__name__)


class MissionState(Enum):
    PENDING = "PENDING"  # device requested, not in hand yet
    DELIVERING = "DELIVERING"  # carrying the device to its site


@dataclass
class Mission:
    unit_id: int
    item: ItemType
    state: MissionState = MissionState.PENDING
    site: Optional[Coordinate] = None


class MissionRegister:
    """Single-valued slot: at most one unit holds the mission"""

    def __init__(self, item: ItemType):
        self.item = item
        self.mission: Optional[Mission] = None

    @property
    def owner(self) -> Optional[int]:
        return self.mission.unit_id if self.mission else None

    def is_free(self) -> bool:
        return self.mission is None

    def held_by(self, unit_id: int) -> bool:
        return self.mission is not None and self.mission.unit_id == unit_id

    def assign(self, unit_id: int) -> Mission:
        if self.mission is not None and self.mission.unit_id != unit_id:
            raise RuntimeError(
                f"{self.item.value} mission already held by unit {self.mission.unit_id}"
            )
        self.mission = Mission(unit_id=unit_id, item=self.item)
        logger.info(f"🎖️  unit {unit_id}: {self.item.value} mission assigned")
        return self.mission

    def release(self, reason: str = "") -> Optional[Mission]:
        mission = self.mission
        self.mission = None
        if mission is not None:
            logger.info(f"🏁 unit {mission.unit_id}: {self.item.value} mission released {reason}".rstrip())
        return mission


@dataclass
class PlanningSession:
    """Created once at startup, mutated every turn by the orchestrator"""
    width: int
    height: int
    radar_policy: str = RADAR_POLICY
    coverage: CoverageTracker = field(init=False)
    history: DigHistory = field(init=False)
    forecast: EnemyForecast = field(init=False)
    radar_planner: RadarPlanner = field(init=False)
    trap_planner: TrapPlanner = field(init=False)
    selector: TargetSelector = field(init=False)
    radar_mission: MissionRegister = field(init=False)
    trap_mission: MissionRegister = field(init=False)
    previous_board: Optional[Board] = None
    forecast_target: Optional[Coordinate] = None
    ore_at_last_radar: int = 0  # covered diggable ore when the last radar landed
    turn: int = 0

    def __post_init__(self):
        self.coverage = CoverageTracker(self.width, self.height)
        self.history = DigHistory()
        self.forecast = EnemyForecast(self.width, self.height)
        self.radar_planner = RadarPlanner(policy=self.radar_policy)
        self.trap_planner = TrapPlanner()
        self.selector = TargetSelector()
        self.radar_mission = MissionRegister(ItemType.RADAR)
        self.trap_mission = MissionRegister(ItemType.TRAP)

    def register_for(self, item: ItemType) -> MissionRegister:
        return self.radar_mission if item is ItemType.RADAR else self.trap_mission

    def covered_ore(self, board: Board) -> int:
        return self.coverage.ore_under_cover(board, self.history.own_dug)
