"""
Shared fixtures: an AFC conference with distinct records plus a few NFC teams.
"""

import pytest
from factories import AFC_RECORDS, NFC_RECORDS, make_team


@pytest.fixture
def afc_standings():
    """Sixteen AFC teams; seeds are KC, BUF, BAL, HOU, LAC, PIT, MIA."""
    return {abbr: make_team(abbr, w, l) for abbr, (w, l) in AFC_RECORDS.items()}


@pytest.fixture
def league_standings(afc_standings):
    """The AFC plus four NFC teams."""
    standings = dict(afc_standings)
    standings.update({abbr: make_team(abbr, w, l) for abbr, (w, l) in NFC_RECORDS.items()})
    return standings
