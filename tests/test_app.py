import json
import unittest

from app import app as flask_app
from app import state_to_json, cell_to_json
import app as app_mod
from game import Board, GameConfig


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self._orig_config = app_mod.session.config
        self.client = flask_app.test_client()
        r = self._post("/api/new", {"width": 2, "height": 2, "players": 2})
        self.assertEqual(r.status_code, 200)

    def tearDown(self):
        app_mod.session.restart(self._orig_config)

    def _post(self, url, payload=None):
        return self.client.post(url, data=json.dumps(payload or {}), content_type="application/json")

    def test_given_new_game_when_posted_then_returns_empty_state_and_legal_moves(self):
        r = self._post("/api/new", {"width": 3, "height": 4, "players": 3})
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["ok"])
        state = data["state"]
        self.assertEqual((state["width"], state["height"], state["numPlayers"]), (3, 4, 3))
        self.assertEqual(state["currentPlayer"], 1)
        self.assertEqual(state["scores"], [0, 0, 0])
        self.assertEqual(len(state["cells"]), 4)
        self.assertEqual(len(state["cells"][0]), 3)
        self.assertEqual(state["cells"][0][0], {"orbs": 0, "owner": 0, "capacity": 2})
        self.assertEqual(state["cells"][1][1]["capacity"], 4)
        self.assertEqual(len(data["legalMoves"]), 12)

    def test_given_omitted_fields_when_new_game_then_previous_config_kept(self):
        r = self._post("/api/new", {"players": 3})
        state = r.get_json()["state"]
        self.assertEqual((state["width"], state["height"], state["numPlayers"]), (2, 2, 3))

    def test_given_bad_config_when_new_game_then_400(self):
        for payload in ({"width": 1}, {"players": 7}, {"height": "tall"}, {"width": [2]}):
            r = self._post("/api/new", payload)
            self.assertEqual(r.status_code, 400, payload)
            self.assertFalse(r.get_json()["ok"])
        # The running game is untouched
        state = self.client.get("/api/state").get_json()["state"]
        self.assertEqual((state["width"], state["height"]), (2, 2))

    def test_given_moves_when_posted_then_events_and_transits_reported(self):
        d1 = self._post("/api/move", {"move": [0, 0]}).get_json()
        self.assertTrue(d1["ok"])
        self.assertEqual(d1["events"], [{"type": "stateChanged"}])
        self.assertEqual(d1["transits"], [])
        self.assertEqual(d1["explosions"], 0)
        self.assertEqual(d1["state"]["currentPlayer"], 2)

        self._post("/api/move", {"move": [1, 1]})
        d3 = self._post("/api/move", {"move": [0, 0]}).get_json()
        self.assertEqual(d3["explosions"], 1)
        self.assertEqual(d3["transits"], [
            {"from": [0, 0], "to": [1, 0], "player": 1},
            {"from": [0, 0], "to": [0, 1], "player": 1},
        ])
        self.assertEqual(d3["state"]["scores"], [2, 1])

        d4 = self._post("/api/move", {"move": [1, 1]}).get_json()
        self.assertEqual(d4["events"], [{"type": "gameOver", "winner": 2}])
        self.assertTrue(d4["state"]["gameOver"])
        self.assertEqual(d4["state"]["winner"], 2)
        self.assertEqual(d4["legalMoves"], [])

        r5 = self._post("/api/move", {"move": [0, 1]})
        self.assertEqual(r5.status_code, 400)
        self.assertEqual(r5.get_json()["error"], "Game is over")

    def test_given_illegal_move_when_posted_then_400_with_legal_moves(self):
        self._post("/api/move", {"move": [0, 0]})
        r = self._post("/api/move", {"move": [0, 0]})
        self.assertEqual(r.status_code, 400)
        data = r.get_json()
        self.assertFalse(data["ok"])
        self.assertEqual(data["error"], "Illegal move")
        self.assertNotIn([0, 0], data["legalMoves"])
        self.assertEqual(data["state"]["moveCount"], 1)

        r2 = self._post("/api/move", {"move": [5, 5]})
        self.assertEqual(r2.status_code, 400)

    def test_given_malformed_move_when_posted_then_400(self):
        for payload in ({}, {"move": [1]}, {"move": "0,0"}, {"move": ["a", "b"]}):
            r = self._post("/api/move", payload)
            self.assertEqual(r.status_code, 400, payload)
        self.assertEqual(self.client.get("/api/state").get_json()["state"]["moveCount"], 0)

    def test_given_json_body_that_is_not_an_object_when_posted_then_400(self):
        for url, payload in (("/api/move", [0, 0]), ("/api/new", [3]), ("/api/move", "0,0"), ("/api/new", 7)):
            r = self._post(url, payload)
            self.assertEqual(r.status_code, 400, (url, payload))
            data = r.get_json()
            self.assertFalse(data["ok"])
            self.assertEqual(data["error"], "body must be a JSON object")
        self.assertEqual(self.client.get("/api/state").get_json()["state"]["moveCount"], 0)

    def test_given_float_or_bool_numbers_when_posted_then_400_not_truncated(self):
        for payload in ({"width": 3.9, "height": 3}, {"players": 2.0}, {"height": True}):
            r = self._post("/api/new", payload)
            self.assertEqual(r.status_code, 400, payload)
            self.assertIn("must be an integer", r.get_json()["error"])
        state = self.client.get("/api/state").get_json()["state"]
        self.assertEqual((state["width"], state["height"], state["numPlayers"]), (2, 2, 2))

        for payload in ({"move": [True, 0]}, {"move": [0, 1.0]}, {"move": [0.5, 0]}):
            r = self._post("/api/move", payload)
            self.assertEqual(r.status_code, 400, payload)
            self.assertIn("must be an integer", r.get_json()["error"])
        self.assertEqual(self.client.get("/api/state").get_json()["state"]["moveCount"], 0)

    def test_given_played_game_when_reset_then_initial_state_and_state_changed(self):
        self._post("/api/move", {"move": [0, 0]})
        data = self._post("/api/reset").get_json()
        self.assertTrue(data["ok"])
        self.assertEqual(data["events"], [{"type": "stateChanged"}])
        self.assertEqual(data["state"]["moveCount"], 0)
        self.assertEqual(data["state"]["currentPlayer"], 1)
        self.assertFalse(data["state"]["gameOver"])

    def test_given_game_when_querying_legal_moves_then_owned_cells_excluded(self):
        self._post("/api/move", {"move": [1, 0]})
        data = self.client.get("/api/legal").get_json()
        self.assertTrue(data["ok"])
        self.assertEqual(data["legalMoves"], [[0, 0], [0, 1], [1, 1]])

    def test_given_board_when_converting_to_json_then_fields_match(self):
        board = Board(2, 3, 2)
        board.make_move(2, 1)
        js = state_to_json(board)
        self.assertEqual(js["moveCount"], 1)
        self.assertEqual(js["cells"][2][1], {"orbs": 1, "owner": 1, "capacity": 2})
        self.assertEqual(cell_to_json(board.get_cell(1, 0)), {"orbs": 0, "owner": 0, "capacity": 3})
        self.assertIsNone(js["winner"])
        self.assertEqual(GameConfig(2, 3, 2).width, js["width"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
