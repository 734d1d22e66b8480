import threading
from typing import Optional

from models.session import GameSession


class InMemorySessionStore:
    """Active games keyed by id, plus one lock per game.

    Any object exposing get/put/remove/lock can stand in for this one, e.g. a
    store backed by an external cache.
    """

    def __init__(self):
        self._sessions: dict[str, GameSession] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, game_id) -> Optional[GameSession]:
        return self._sessions.get(game_id)

    def put(self, session: GameSession):
        with self._guard:
            self._sessions[session.game_id] = session
            self._locks.setdefault(session.game_id, threading.Lock())

    def remove(self, game_id):
        with self._guard:
            self._sessions.pop(game_id, None)
            self._locks.pop(game_id, None)

    def lock(self, game_id) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(game_id, threading.Lock())

    def __len__(self):
        return len(self._sessions)
