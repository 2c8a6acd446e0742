from fastapi import APIRouter

from ..schemas import RulesOut
from ..scoring import (
    BID_STEP,
    MAX_BID,
    MAX_FRIENDS,
    MIN_BID,
    MODES,
    NO_BIDS_VALUE,
    ONE_VS_FIVE_BID,
    ROSTER_SIZE,
    START_BID,
    TOTAL_POINTS,
)
from ..services.stats import QUALIFYING_GAMES

router = APIRouter(prefix="/rules", tags=["rules"])


# GET /api/v0/rules
@router.get("", response_model=RulesOut)
async def game_rules() -> RulesOut:
    """Constants a client needs to build the new-round form."""
    return RulesOut(
        modes=list(MODES),
        totalPoints=TOTAL_POINTS,
        rosterSize=ROSTER_SIZE,
        maxFriends=MAX_FRIENDS,
        startBid=START_BID,
        minBid=MIN_BID,
        maxBid=MAX_BID,
        bidStep=BID_STEP,
        noBidsValue=NO_BIDS_VALUE,
        oneVsFiveBid=ONE_VS_FIVE_BID,
        qualifyingGames=QUALIFYING_GAMES,
    )
