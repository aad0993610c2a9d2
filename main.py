"""
Entry point for the ore-rush bot
"""
import logging
import sys

from orebot.bot import Bot
from orebot.config import LOG_FILE, LOG_LEVEL
from orebot.protocol import JudgeClient
from orebot.session import PlanningSession

# stdout belongs to the judge; logs go to stderr (and optionally a file)
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATEFMT = '%H:%M:%S'

handlers = [logging.StreamHandler(sys.stderr)]
if LOG_FILE:
    handlers.append(logging.FileHandler(LOG_FILE, encoding="utf-8"))

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format=LOG_FORMAT,
    datefmt=LOG_DATEFMT,
    handlers=handlers,
)

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    client = JudgeClient(sys.stdin, sys.stdout)
    width, height = client.read_init()
    session = PlanningSession(width, height)
    logger.info(f"Radar policy: {session.radar_policy}")

    bot = Bot(session, client)
    bot.run()


if __name__ == "__main__":
    main()
