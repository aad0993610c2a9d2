"""
Configuration for the ore-rush bot

Game constants (Unleash-the-Geek style arena):
- Board: 30x15, extraction column x=0
- Radar: reveals ore within Manhattan radius 4
- Items per unit: one of radar / trap / ore
- Cooldowns: a device may be requested when its cooldown is 0

All tuning constants can be overridden from the environment.
"""
import os
from typing import List, Tuple


def _coords(raw: str) -> List[Tuple[int, int]]:
    """Parse "x,y;x,y;..." into a list of tuples"""
    sites = []
    for chunk in raw.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        x, y = chunk.split(",")
        sites.append((int(x), int(y)))
    return sites


# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE: str = os.getenv("LOG_FILE", "")  # empty -> stderr only

# Sensing
RADAR_RANGE: int = int(os.getenv("RADAR_RANGE", "4"))  # Manhattan radius

# Radar placement
RADAR_POLICY: str = os.getenv("RADAR_POLICY", "hybrid")  # waypoint | frontier | hybrid
RADAR_WAYPOINTS: List[Tuple[int, int]] = _coords(
    os.getenv("RADAR_WAYPOINTS", "4,7;9,4;9,10;17,4;17,10;25,4;25,10")
)
ORE_WEIGHT: int = int(os.getenv("ORE_WEIGHT", "3"))  # score = ore * weight - overlap
PROXIMITY: int = int(os.getenv("PROXIMITY", "3"))  # min Chebyshev gap to another radar
SEARCH_STEPS: Tuple[int, ...] = (8, 7, 6, 5)  # farthest first, all beyond RADAR_RANGE
RADAR_REFRESH_RATIO: float = float(os.getenv("RADAR_REFRESH_RATIO", "0.3"))

# Traps
TRAP_RICH_ORE: int = int(os.getenv("TRAP_RICH_ORE", "1"))  # fallback site needs ore > this

# Enemy forecast
ENEMY_WEIGHT: int = int(os.getenv("ENEMY_WEIGHT", "3"))
NEIGHBOUR_WEIGHT: int = 1

# Early probing before any radar exists
PROBE_COLUMN: int = int(os.getenv("PROBE_COLUMN", "5"))
PROBE_ROW: int = int(os.getenv("PROBE_ROW", "5"))
PROBE_SPREAD: int = int(os.getenv("PROBE_SPREAD", "10"))

# Extraction edge
HQ_COLUMN: int = 0
