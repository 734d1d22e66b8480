# models/game.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, JSON
from database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class CompletedGame(Base):
    __tablename__ = "completed_games"

    id = Column(Integer, primary_key=True, index=True)
    winner = Column(String, nullable=False)  # "X", "O" or "draw"
    grid_size = Column(Integer, nullable=False)
    final_board = Column(JSON, nullable=False)
    winning_line = Column(JSON, nullable=True)  # [{"row": 0, "col": 0}, ...]
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)

    def to_dict(self):
        return {
            "_id": str(self.id),
            "winner": self.winner,
            "gridSize": self.grid_size,
            "finalBoard": self.final_board,
            "winningLine": self.winning_line,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
