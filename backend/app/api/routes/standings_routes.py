"""
Standings API routes.
"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status

from ..schemas import StandingsResponse, TeamResponse, PlayoffTeamResponse
from ..store import get_provider
from ...platforms import ScheduleProvider, SeasonDataNotFoundError, PlatformError
from ...simulator import seed_league


router = APIRouter(prefix="/standings", tags=["standings"])


@router.get("", response_model=StandingsResponse)
async def get_standings(
    season: Optional[int] = None,
    provider: ScheduleProvider = Depends(get_provider)
) -> StandingsResponse:
    """
    Current standings with the playoff picture for both conferences.
    """
    try:
        league = await provider.load_league(season)
    except SeasonDataNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PlatformError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    picture = seed_league(league.standings, league.records)

    return StandingsResponse(
        season=league.season,
        week=league.week,
        teams=[TeamResponse(**t.to_dict()) for t in league.standings.values()],
        playoff_picture={
            conference: [PlayoffTeamResponse(**p.to_dict()) for p in teams]
            for conference, teams in picture.items()
        }
    )
