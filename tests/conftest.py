import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app import create_app
from database import Base, build_engine
from services.ai_service import AIService, MoveOracle
from services.game_repository import GameRepository
from services.game_service import GameService

X, O, _ = "X", "O", None


class ScriptedOracle(MoveOracle):
    """Replays canned replies; an Exception instance in the script is raised."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def request_move(self, board, active_mark):
        self.calls.append((board, active_mark))
        reply = self.replies.pop(0) if self.replies else None
        if isinstance(reply, Exception):
            raise reply
        return reply


class IndexRng:
    """Stand-in for random.Random that always picks the same index."""

    def __init__(self, index=0):
        self.index = index
        self.seen = []

    def choice(self, seq):
        self.seen.append(list(seq))
        return seq[self.index]


class RecordingRepository:
    def __init__(self, fail=False):
        self.fail = fail
        self.saved = []

    def save(self, winner, grid_size, final_board, winning_line=None):
        if self.fail:
            raise SQLAlchemyError("database is down")
        self.saved.append({
            "winner": winner,
            "grid_size": grid_size,
            "final_board": [list(row) for row in final_board],
            "winning_line": winning_line,
        })
        return len(self.saved)

    def latest(self, limit=100):
        return list(reversed(self.saved))[:limit]


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def repository(session_factory):
    return GameRepository(session_factory)


@pytest.fixture
def oracle():
    return ScriptedOracle()


@pytest.fixture
def rng():
    return IndexRng()


@pytest.fixture
def recording_repository():
    return RecordingRepository()


@pytest.fixture
def service(oracle, rng, recording_repository):
    return GameService(AIService(oracle, rng=rng), recording_repository)


@pytest.fixture
def client(oracle, repository):
    game_service = GameService(AIService(oracle, rng=IndexRng()), repository)
    app = create_app(game_service)
    app.config["TESTING"] = True
    return app.test_client()
