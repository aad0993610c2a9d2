"""
Turn orchestration: missions, requests and dig routing for every own unit
"""
from typing import List, Optional
import logging

from orebot.config import HQ_COLUMN, RADAR_REFRESH_RATIO, TRAP_RICH_ORE
from orebot.models import Action, Board, Coordinate, ItemType, Unit
from orebot.protocol import JudgeClient
from orebot.session import Mission, MissionRegister, MissionState, PlanningSession

logger = logging.getLogger(__name__)


class Bot:
    """Main bot class"""

    def __init__(self, session: PlanningSession, client: Optional[JudgeClient] = None):
        self.session = session
        self.client = client

    def run(self):
        """Main loop: one blocking read and one decision pass per turn"""
        logger.info("Starting bot...")
        try:
            while True:
                board = self.client.read_turn()
                actions = self.play_turn(board)
                self.client.send(actions)
        except EOFError:
            logger.info("Judge closed the input, stopping")
        except Exception as e:
            logger.error(f"Fatal error: {e}", exc_info=True)
            raise

    def play_turn(self, board: Board) -> List[Action]:
        """Decide one action per own unit, in judge order"""
        session = self.session
        session.turn += 1

        board.merge_knowledge(session.previous_board)
        session.coverage.rebuild(board.radars)
        session.history.reset_claims()
        if board.radars:
            session.history.radar_seen = True
        session.forecast_target = session.forecast.update(board.enemies)
        self._record_own_digs(board)
        self._release_lost_carriers(board)
        self._hold_mission_sites(board)

        for unit in board.units:
            unit.action = self._decide(unit, board)
            logger.debug(f"🤖 unit {unit.id} [{unit.item.value:5s}] → {unit.action}")

        session.previous_board = board
        self._log_turn(board)
        return [unit.action or Action.wait() for unit in board.units]

    # ------------------------------------------------------------------
    # Missions
    # ------------------------------------------------------------------

    def _record_own_digs(self, board: Board):
        """
        A unit that stood still next to its target, which is now a hole, dug it.

        Covers dig spots that yielded no ore (so were never delivered) and
        keeps them out of the enemy dig candidates.
        """
        previous = self.session.previous_board
        if previous is None:
            return
        history = self.session.history
        for unit in board.units:
            target = history.target_of(unit.id)
            if not unit.alive or target is None or target in history.own_dug:
                continue
            before = previous.unit_by_id(unit.id)
            if before is None or before.position != unit.position:
                continue
            if board.contains(target) and board.cell(target).hole and unit.position.distance(target) <= 1:
                history.record_dig(target)
                logger.debug(f"⛏️  unit {unit.id}: dug {target.to_tuple()}")

    def _hold_mission_sites(self, board: Board):
        """Carriers keep the site they already picked: claimed before anyone routes"""
        history = self.session.history
        for register in (self.session.radar_mission, self.session.trap_mission):
            mission = register.mission
            if mission is None or mission.site is None or mission.state is not MissionState.DELIVERING:
                continue
            carrier = board.unit_by_id(mission.unit_id)
            if carrier is None or carrier.item is not mission.item or self._site_taken(mission, board):
                continue
            history.claim(mission.site, carrier.id)

    def _release_lost_carriers(self, board: Board):
        """A mission whose carrier died (or vanished) is freed at once"""
        for register in (self.session.radar_mission, self.session.trap_mission):
            if register.is_free():
                continue
            carrier = board.unit_by_id(register.owner)
            if carrier is None or not carrier.alive:
                register.release("(carrier lost)")

    def _continue_mission(self, unit: Unit, board: Board) -> Optional[Action]:
        for register in (self.session.radar_mission, self.session.trap_mission):
            if register.held_by(unit.id):
                return self._advance(register, unit, board)
        return None

    def _advance(self, register: MissionRegister, unit: Unit, board: Board) -> Optional[Action]:
        mission = register.mission
        if mission.state is MissionState.PENDING:
            if unit.item is not mission.item:
                return Action.request(mission.item)
            mission.state = MissionState.DELIVERING
            logger.info(f"📦 unit {unit.id}: picked up {mission.item.value}")

        if unit.item is not mission.item:
            self._complete(register, board)
            return None

        history = self.session.history
        if (mission.site is None or self._site_taken(mission, board)
                or history.is_claimed(mission.site, unit.id)):
            mission.site = self._pick_site(mission.item, board, unit.id)
        if mission.site is None:
            logger.debug(f"⏸️  unit {unit.id}: holding {mission.item.value}, no site yet")
            return Action.wait()
        if not history.claim(mission.site, unit.id):
            logger.debug(f"⏸️  unit {unit.id}: {mission.site.to_tuple()} is busy this turn")
            return Action.wait()
        return Action.dig(mission.site)

    def _complete(self, register: MissionRegister, board: Board):
        """Device left the carrier's hands: deployed or lost"""
        session = self.session
        mission = register.release("(device deployed)")
        if mission.site is not None:
            session.history.record_dig(mission.site)
        if mission.item is ItemType.RADAR:
            session.ore_at_last_radar = session.covered_ore(board)
            logger.info(f"📡 {len(board.radars)} radars, {session.ore_at_last_radar} ore under cover")

    def _site_taken(self, mission: Mission, board: Board) -> bool:
        return mission.site in board.radars or mission.site in board.traps

    def _pick_site(self, item: ItemType, board: Board, unit_id: int) -> Optional[Coordinate]:
        session = self.session
        if item is ItemType.RADAR:
            return session.radar_planner.next_site(board, session.coverage)
        return self._trap_site(board, unit_id)

    def _trap_site(self, board: Board, unit_id: int) -> Optional[Coordinate]:
        """Enemy dig median, then the forecast cell, then the first rich ore cell"""
        session = self.session
        history = session.history
        site = session.trap_planner.next_site(board, history, unit_id)
        if site is not None:
            return site
        blocked = set(board.radars) | set(board.traps)
        target = session.forecast_target
        if (target is not None and board.contains(target) and target not in blocked
                and not history.is_claimed(target, unit_id)):
            return target
        for pos in board.columns(start=HQ_COLUMN + 1):
            cell = board.cells[pos.y][pos.x]
            if (cell.known and cell.ore > TRAP_RICH_ORE and pos not in blocked
                    and not history.is_claimed(pos, unit_id) and history.diggable(board, pos)):
                return pos
        return None

    def _radar_wanted(self, board: Board) -> bool:
        """Ask for another radar once covered ore has run low"""
        session = self.session
        if not session.radar_planner.has_site(board, session.coverage):
            return False
        if session.ore_at_last_radar == 0:
            return True
        return session.covered_ore(board) < RADAR_REFRESH_RATIO * session.ore_at_last_radar

    def _offer_mission(self, unit: Unit, board: Board) -> Optional[Action]:
        session = self.session
        if unit.item is not ItemType.NONE:
            return None
        if (board.radar_cooldown == 0 and session.radar_mission.is_free()
                and not session.trap_mission.held_by(unit.id) and self._radar_wanted(board)):
            session.radar_mission.assign(unit.id)
            return Action.request(ItemType.RADAR)
        if (board.trap_cooldown == 0 and session.trap_mission.is_free()
                and not session.radar_mission.held_by(unit.id)):
            session.trap_mission.assign(unit.id)
            return Action.request(ItemType.TRAP)
        return None

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def _decide(self, unit: Unit, board: Board) -> Action:
        if not unit.alive:
            return Action.wait()
        action = self._continue_mission(unit, board)
        if action is None:
            action = self._offer_mission(unit, board)
        if action is None:
            action = self._route(unit, board)
        return action

    def _route(self, unit: Unit, board: Board) -> Action:
        session = self.session
        if unit.item is ItemType.ORE:
            session.history.record_delivery(unit.id)
            return Action.move(Coordinate(HQ_COLUMN, unit.position.y))
        target = session.selector.select(unit, board, session.history)
        if target is None:
            return Action.wait()
        return Action.dig(target)

    def _log_turn(self, board: Board):
        session = self.session
        alive = sum(1 for unit in board.units if unit.alive)
        logger.info(
            f"🎮 TURN {session.turn:3d} | ⭐ {board.my_score:3d} vs {board.enemy_score:3d} | "
            f"👥 {alive}/{len(board.units)} alive | 📡 {len(board.radars)} (cd {board.radar_cooldown}) | "
            f"🪤 {len(board.traps)} (cd {board.trap_cooldown}) | "
            f"missions radar={session.radar_mission.owner} trap={session.trap_mission.owner}"
        )
