"""
NFL league structure and season utilities.
"""

from enum import Enum
from datetime import datetime
from typing import Optional


class Conference(str, Enum):
    """NFL conferences."""
    AFC = "AFC"
    NFC = "NFC"


# Team abbreviation -> division. ESPN has used more than one abbreviation for
# a few franchises, so the alternates are listed as well.
DIVISION_MAP = {
    # NFC North
    "CHI": "NFC North",
    "DET": "NFC North",
    "GB": "NFC North",
    "MIN": "NFC North",

    # NFC South
    "ATL": "NFC South",
    "CAR": "NFC South",
    "NO": "NFC South",
    "TB": "NFC South",

    # NFC East
    "DAL": "NFC East",
    "NYG": "NFC East",
    "PHI": "NFC East",
    "WAS": "NFC East",
    "WSH": "NFC East",

    # NFC West
    "ARI": "NFC West",
    "LAR": "NFC West",
    "SF": "NFC West",
    "SEA": "NFC West",

    # AFC North
    "BAL": "AFC North",
    "CIN": "AFC North",
    "CLE": "AFC North",
    "PIT": "AFC North",

    # AFC South
    "HOU": "AFC South",
    "IND": "AFC South",
    "JAX": "AFC South",
    "JAC": "AFC South",
    "TEN": "AFC South",

    # AFC East
    "BUF": "AFC East",
    "MIA": "AFC East",
    "NE": "AFC East",
    "NYJ": "AFC East",

    # AFC West
    "DEN": "AFC West",
    "KC": "AFC West",
    "LV": "AFC West",
    "OAK": "AFC West",
    "LAC": "AFC West",
}

# Playoff structure per conference
DIVISION_WINNER_SPOTS = 4
WILD_CARD_SPOTS = 3
PLAYOFF_SPOTS = DIVISION_WINNER_SPOTS + WILD_CARD_SPOTS

REGULAR_SEASON_WEEKS = 18


def get_division(abbr: str) -> Optional[str]:
    """Division name for a team abbreviation, or None if unknown."""
    return DIVISION_MAP.get(abbr)


def get_conference(abbr: str) -> Optional[str]:
    """Conference for a team abbreviation, or None if unknown."""
    division = DIVISION_MAP.get(abbr)
    if division is None:
        return None
    return Conference.NFC.value if division.startswith("NFC") else Conference.AFC.value


def get_current_season() -> int:
    """
    Get the current NFL season year.

    Sept-Dec = current year, Jan-Feb = previous year (playoffs of the
    season that started the year before).
    """
    now = datetime.now()
    if now.month <= 2:
        return now.year - 1
    return now.year
