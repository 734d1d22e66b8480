from sqlalchemy.exc import SQLAlchemyError

from config import Config
from database import SessionLocal
from models.game import CompletedGame


class GameRepository:
    """Append-only store of finished games."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def save(self, winner: str, grid_size: int, final_board, winning_line=None) -> int:
        db = self.session_factory()
        try:
            game = CompletedGame(
                winner=winner,
                grid_size=grid_size,
                final_board=[list(row) for row in final_board],
                winning_line=winning_line,
            )
            db.add(game)
            db.commit()
            return game.id
        except SQLAlchemyError:
            db.rollback()
            raise
        finally:
            db.close()

    def latest(self, limit=Config.COMPLETED_GAMES_LIMIT) -> list[dict]:
        # Newest first
        db = self.session_factory()
        try:
            games = (
                db.query(CompletedGame)
                .order_by(CompletedGame.created_at.desc(), CompletedGame.id.desc())
                .limit(limit)
                .all()
            )
            return [game.to_dict() for game in games]
        finally:
            db.close()
