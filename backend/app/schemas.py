from typing import Dict, List, Optional, Union
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator, ConfigDict

from .scoring import MODES, NORMAL

Points = Union[int, float]


class RulesOut(BaseModel):
    modes: List[str]
    totalPoints: int
    rosterSize: int
    maxFriends: int
    startBid: int
    minBid: int
    maxBid: int
    bidStep: int
    noBidsValue: int
    oneVsFiveBid: int
    qualifyingGames: int


class PlayerRename(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    model_config = ConfigDict(extra="forbid")


class RoundCreate(BaseModel):
    """A new round; ``host`` and ``friends`` are roster indexes."""

    mode: str = NORMAL
    host: int = 0
    friends: List[int] = Field(default_factory=list)
    bid: Optional[int] = None
    opponentScore: int = 0

    model_config = ConfigDict(extra="forbid")


class RoundOut(BaseModel):
    id: str
    round: int
    mode: str
    players: List[str]
    host: str
    friends: List[str]
    bid: int
    opponentScore: int
    scores: Dict[str, Points]
    winner: str
    distribution: str
    date: date


class SessionOut(BaseModel):
    date: date
    label: str
    players: List[str]
    rounds: List[RoundOut]
    nextRound: int
    locked: bool


class TotalOut(BaseModel):
    player: str
    total: Points


class RoleStatsOut(BaseModel):
    hosted: int
    hostWins: int
    friendGames: int
    friendWins: int
    played: int


class SessionStatsOut(BaseModel):
    date: date
    label: str
    totals: List[TotalOut]
    roles: Dict[str, RoleStatsOut]


class SessionSummaryOut(BaseModel):
    date: date
    label: str
    rounds: int
    leaders: List[TotalOut]
    locked: bool


class RankingOut(BaseModel):
    name: str
    totalScore: int
    gamesPlayed: int
    hosted: int
    hostWins: int
    hostRate: int
    friendGames: int
    friendWins: int
    friendRate: int


class LeaderboardOut(BaseModel):
    totalRounds: int
    playerRankings: List[RankingOut]
    bestHost: Optional[RankingOut] = None
    bestFriend: Optional[RankingOut] = None
    mostGamesPlayed: Optional[RankingOut] = None


class GameCreate(BaseModel):
    players: List[str] = Field(..., min_length=1)
    scores: Dict[str, Points]
    mode: str

    model_config = ConfigDict(extra="forbid")

    @field_validator("mode")
    @classmethod
    def _validate_mode(cls, value: str) -> str:
        if value not in MODES:
            raise ValueError(f"mode must be one of: {', '.join(MODES)}")
        return value

    @field_validator("players")
    @classmethod
    def _validate_players(cls, value: List[str]) -> List[str]:
        trimmed = [name.strip() for name in value]
        if any(not name for name in trimmed):
            raise ValueError("player names must not be empty")
        return trimmed


class GameOut(BaseModel):
    id: str
    players: List[str]
    scores: Dict[str, Points]
    mode: str
    playedAt: Optional[datetime] = None
