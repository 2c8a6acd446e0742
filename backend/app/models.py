from sqlalchemy import Column, String, DateTime, JSON, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from .db import Base


class Game(Base):
    """One completed round as written to the record store."""

    __tablename__ = "game"
    id = Column(String, primary_key=True)
    players = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    scores = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    mode = Column(String, nullable=False)  # "Normal" | "1v5"
    played_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (Index("ix_game_played_at", played_at.desc()),)
