from conftest import X, O, _


def game_state(board, current_player="X", grid_size=None):
    return {"gameState": {
        "board": board,
        "currentPlayer": current_player,
        "gridSize": grid_size if grid_size is not None else len(board),
    }}


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.get_json()["status"] == "OK"


class TestEvaluateEndpoint:
    def test_ongoing(self, client):
        res = client.post("/api/game/evaluate", json=game_state([[_] * 3 for _row in range(3)]))
        assert res.status_code == 200
        assert res.get_json() == {
            "isGameOver": False,
            "winner": None,
            "winningLine": None,
            "message": "Game is still in progress",
        }

    def test_win_is_recorded(self, client):
        board = [
            [X, O, _],
            [X, O, _],
            [X, _, _],
        ]
        res = client.post("/api/game/evaluate", json=game_state(board, "O"))
        body = res.get_json()
        assert body["isGameOver"] is True
        assert body["winner"] == "X"
        assert body["message"] == "Player X wins!"
        assert body["winningLine"] == [
            {"row": 0, "col": 0}, {"row": 1, "col": 0}, {"row": 2, "col": 0},
        ]

        games = client.get("/api/game/completed").get_json()["games"]
        assert len(games) == 1
        assert games[0]["winner"] == "X"
        assert games[0]["gridSize"] == 3
        assert games[0]["finalBoard"] == board
        assert games[0]["createdAt"]

    def test_draw_message(self, client):
        board = [
            [X, O, X],
            [X, O, O],
            [O, X, X],
        ]
        body = client.post("/api/game/evaluate", json=game_state(board)).get_json()
        assert body["winner"] == "draw"
        assert body["message"] == "The game is a draw!"

    def test_invalid_state(self, client):
        res = client.post("/api/game/evaluate", json=game_state([[_] * 11 for _row in range(11)]))
        assert res.status_code == 400
        assert "gridSize must be between 3 and 10" in res.get_json()["message"]

    def test_missing_game_state(self, client):
        res = client.post("/api/game/evaluate", json={})
        assert res.status_code == 400


class TestAIMoveEndpoint:
    def test_returns_oracle_move(self, client, oracle):
        oracle.replies = ['{"row": 2, "col": 1}']
        res = client.post("/api/game/ai-move", json=game_state([[_] * 3 for _row in range(3)], "O"))
        assert res.status_code == 200
        assert res.get_json() == {"move": {"row": 2, "col": 1}}

    def test_oracle_failure_still_returns_legal_move(self, client, oracle):
        oracle.replies = [ConnectionError("unreachable")]
        board = [
            [X, O, X],
            [_, O, _],
            [_, X, _],
        ]
        move = client.post("/api/game/ai-move", json=game_state(board, "O")).get_json()["move"]
        assert board[move["row"]][move["col"]] is None

    def test_game_over(self, client):
        board = [
            [O, O, O],
            [X, X, _],
            [X, _, _],
        ]
        res = client.post("/api/game/ai-move", json=game_state(board, "X"))
        assert res.status_code == 400
        assert "game is already over" in res.get_json()["message"]


class TestSessionEndpoints:
    def start(self, client, **body):
        payload = {"mode": "ai", "gridSize": 3}
        payload.update(body)
        return client.post("/api/game/start", json=payload)

    def test_start(self, client):
        res = self.start(client, playerSymbol="O", gridSize=5)
        assert res.status_code == 201
        body = res.get_json()
        assert body["currentPlayer"] == "O"
        assert body["aiSymbol"] == "X"
        assert body["gridSize"] == 5
        assert len(body["board"]) == 5

    def test_start_rejects_bad_size(self, client):
        assert self.start(client, gridSize=2).status_code == 400
        assert self.start(client, gridSize=11).status_code == 400

    def test_start_requires_mode(self, client):
        res = client.post("/api/game/start", json={"gridSize": 3})
        assert res.status_code == 400

    def test_full_game_flow(self, client, oracle):
        game_id = self.start(client).get_json()["gameId"]
        oracle.replies = ['{"row": 0, "col": 0}']  # occupied after the human move

        res = client.post(f"/api/game/{game_id}/move", json={"row": 0, "col": 0})
        assert res.status_code == 200
        body = res.get_json()
        assert body["board"][0][0] == "X"
        assert sum(cell is not None for row in body["board"] for cell in row) == 2
        assert body["status"] == "ongoing"
        assert body["currentPlayer"] == "X"

        assert client.get(f"/api/game/{game_id}").get_json() == body

    def test_human_win_is_persisted(self, client, oracle):
        game_id = self.start(client).get_json()["gameId"]
        # keep the opponent off row 0
        oracle.replies = ['{"row": 1, "col": 0}', '{"row": 1, "col": 1}']
        client.post(f"/api/game/{game_id}/move", json={"row": 0, "col": 0})
        client.post(f"/api/game/{game_id}/move", json={"row": 0, "col": 1})
        body = client.post(f"/api/game/{game_id}/move", json={"row": 0, "col": 2}).get_json()

        assert body["status"] == "win"
        assert body["winner"] == "X"
        games = client.get("/api/game/completed").get_json()["games"]
        assert [g["winner"] for g in games] == ["X"]

        again = client.post(f"/api/game/{game_id}/move", json={"row": 2, "col": 2}).get_json()
        assert again["message"] == "Game is already over."
        assert again["board"] == body["board"]

    def test_unknown_game(self, client):
        res = client.post("/api/game/nope/move", json={"row": 0, "col": 0})
        assert res.status_code == 404
        assert res.get_json() == {"message": "Game not found"}
        assert client.get("/api/game/nope").status_code == 404

    def test_illegal_move(self, client):
        game_id = self.start(client).get_json()["gameId"]
        res = client.post(f"/api/game/{game_id}/move", json={"row": 5, "col": 0})
        assert res.status_code == 400
        assert res.get_json()["message"] == "Invalid move."

    def test_non_integer_coordinates(self, client):
        game_id = self.start(client).get_json()["gameId"]
        res = client.post(f"/api/game/{game_id}/move", json={"row": "a", "col": 0})
        assert res.status_code == 400
