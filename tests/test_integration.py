"""
Integration test suite for StageChess.

Tests components working together end-to-end:
- Full games between stages
- StageEngine wrapper (AI moves, hints, undo, outcomes)
- FastAPI REST API
- Console front end
"""

import random

import chess
import pytest

from stagechess.config import Config
from stagechess.engine import StageEngine
from interface.cli import ConsoleGame

POISONED_ROOK = "5nk1/3r4/8/8/p7/8/8/3Q2K1 w - - 0 1"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 0 1"


def seeded_engine(level=1, fen=None, seed=0):
    return StageEngine(level=level, fen=fen, config=Config(), rng=random.Random(seed))


# ════════════════════════════════════════════════════════════════════════════
#  FULL GAMES
# ════════════════════════════════════════════════════════════════════════════


class TestFullGame:
    """Stages can play complete games without producing illegal moves."""

    def test_random_vs_greedy(self):
        engine = seeded_engine(seed=5)
        levels = {chess.WHITE: 1, chess.BLACK: 4}
        for _ in range(120):
            if engine.board.is_game_over():
                break
            side = engine.board.side_to_move()
            before = set(engine.board.board.legal_moves)
            move = engine.play_ai_move(levels[side])
            assert move is not None
            assert move.move in before
        assert len(engine.board.board.move_stack) > 0

    def test_search_stage_short_game(self):
        engine = seeded_engine(level=6, seed=1)
        for _ in range(6):
            assert engine.play_ai_move() is not None
        assert len(engine.board.board.move_stack) == 6

    def test_same_seed_same_game(self):
        def play(seed):
            engine = seeded_engine(level=2, seed=seed)
            return [engine.play_ai_move().uci for _ in range(10)]

        assert play(9) == play(9)

    def test_config_seed_is_used(self):
        cfg = Config(seed=21)
        a = StageEngine(level=1, config=cfg)
        b = StageEngine(level=1, config=cfg)
        assert [a.play_ai_move().uci for _ in range(8)] == [b.play_ai_move().uci for _ in range(8)]


# ════════════════════════════════════════════════════════════════════════════
#  STAGE ENGINE WRAPPER
# ════════════════════════════════════════════════════════════════════════════


class TestStageEngine:
    def test_default_level_from_config(self):
        cfg = Config()
        cfg.play.default_level = 7
        assert StageEngine(config=cfg).level == 7

    def test_play_ai_move_applies_move(self):
        engine = seeded_engine(level=4, fen=POISONED_ROOK)
        move = engine.play_ai_move()
        assert move.uci == "d1d7"
        assert engine.board.side_to_move() == chess.BLACK

    def test_level_argument_overrides_engine_level(self):
        engine = seeded_engine(level=4, fen=POISONED_ROOK)
        assert engine.best_move(6).uci == "d1a4"

    def test_hint_leaves_board_unchanged(self):
        engine = seeded_engine(level=4, fen=POISONED_ROOK)
        fen = engine.board.get_fen()
        hint = engine.hint()
        assert hint.uci == "d1d7"
        assert engine.board.get_fen() == fen

    def test_no_move_when_game_over(self):
        engine = seeded_engine(fen=FOOLS_MATE)
        assert engine.play_ai_move() is None
        assert engine.hint() is None
        assert engine.outcome() == ("Black Wins!", "Checkmate!")

    def test_make_and_undo(self):
        engine = seeded_engine()
        assert engine.make_move("e2e4") is True
        assert engine.make_move("e2e4") is False
        assert engine.undo_move() is True
        assert engine.board.get_fen() == chess.STARTING_FEN
        assert engine.undo_move() is False

    def test_reset(self):
        engine = seeded_engine()
        engine.make_move("e2e4")
        engine.reset()
        assert engine.board.get_fen() == chess.STARTING_FEN
        engine.reset(POISONED_ROOK)
        assert engine.board.get_fen() == POISONED_ROOK

    def test_stage_overrides_from_config(self):
        cfg = Config()
        cfg.stages = {12: {"depth": 1, "randomness": 0.0, "strategy": "greedy"}}
        engine = StageEngine(level=12, fen=POISONED_ROOK, config=cfg, rng=random.Random(0))
        assert engine.catalog.lookup(12).depth == 1
        assert engine.best_move().uci == "d1d7"


# ════════════════════════════════════════════════════════════════════════════
#  REST API
# ════════════════════════════════════════════════════════════════════════════


class TestAPIIntegration:
    """Tests FastAPI REST API endpoints."""

    @pytest.fixture(autouse=True)
    def setup_client(self):
        from fastapi.testclient import TestClient
        from interface.api import app, engine

        self.client = TestClient(app)
        self.engine = engine
        # Reset state before each test
        engine.reset()
        engine.selector.rng = random.Random(0)

    def test_get_board_initial(self):
        response = self.client.get("/board")
        assert response.status_code == 200
        data = response.json()
        assert data["fen"] == chess.STARTING_FEN
        assert data["turn"] == "white"
        assert data["is_game_over"] is False
        assert data["outcome"] is None
        assert len(data["legal_moves"]) == 20

    def test_post_move_valid(self):
        response = self.client.post("/move", json={"move": "e2e4"})
        assert response.status_code == 200
        data = response.json()
        assert data["move"] == "e2e4"
        assert data["san"] == "e4"
        assert "4P3" in data["fen"]

    def test_post_move_illegal(self):
        response = self.client.post("/move", json={"move": "e2e5"})
        assert response.status_code == 400

    def test_post_move_invalid_format(self):
        response = self.client.post("/move", json={"move": "zzzz"})
        assert response.status_code == 400

    def test_set_position_valid(self):
        response = self.client.post("/position", json={"fen": POISONED_ROOK})
        assert response.status_code == 200
        assert response.json()["fen"] == POISONED_ROOK

    def test_set_position_invalid(self):
        response = self.client.post("/position", json={"fen": "invalid"})
        assert response.status_code == 400

    def test_ai_move_greedy_capture(self):
        self.client.post("/move", json={"move": "e2e4"})
        self.client.post("/move", json={"move": "d7d5"})
        response = self.client.post("/ai-move", json={"level": 4})
        assert response.status_code == 200
        data = response.json()
        assert data["move"] == "e4d5"
        assert data["san"] == "exd5"
        assert self.engine.board.get_fen() == data["fen"]

    def test_ai_move_default_level(self):
        response = self.client.post("/ai-move", json={})
        assert response.status_code == 200
        assert self.engine.board.side_to_move() == chess.BLACK

    def test_ai_move_game_over(self):
        self.client.post("/position", json={"fen": FOOLS_MATE})
        response = self.client.post("/ai-move", json={"level": 6})
        assert response.status_code == 400

    def test_board_reports_outcome(self):
        self.client.post("/position", json={"fen": FOOLS_MATE})
        data = self.client.get("/board").json()
        assert data["is_game_over"] is True
        assert data["outcome"] == {"title": "Black Wins!", "reason": "Checkmate!"}

    def test_hint_does_not_move(self):
        self.client.post("/position", json={"fen": POISONED_ROOK})
        response = self.client.post("/hint", json={"level": 6})
        assert response.status_code == 200
        data = response.json()
        assert data["move"] == "d1a4"
        assert data["from"] == "d1"
        assert data["to"] == "a4"
        assert self.client.get("/board").json()["fen"] == POISONED_ROOK

    def test_hint_game_over(self):
        self.client.post("/position", json={"fen": FOOLS_MATE})
        assert self.client.post("/hint", json={}).status_code == 400

    def test_undo(self):
        assert self.client.post("/undo").status_code == 400
        self.client.post("/move", json={"move": "e2e4"})
        response = self.client.post("/undo")
        assert response.status_code == 200
        assert response.json()["fen"] == chess.STARTING_FEN

    def test_reset(self):
        self.client.post("/move", json={"move": "e2e4"})
        response = self.client.post("/reset")
        assert response.json()["fen"] == chess.STARTING_FEN

    def test_stages(self):
        data = self.client.get("/stages").json()
        assert [s["level"] for s in data] == list(range(1, 16))
        by_level = {s["level"]: s for s in data}
        assert by_level[4]["strategy"] == "greedy"
        assert by_level[1]["randomness"] == 1.0
        boss = {k: v for k, v in by_level[15].items() if k != "level"}
        for level in (11, 12, 13, 14):
            assert {k: v for k, v in by_level[level].items() if k != "level"} == boss
        assert not any(s["locked"] for s in data)

    def test_stages_locked_by_progress(self):
        data = self.client.get("/stages", params={"completed": 2}).json()
        locked = {s["level"]: s["locked"] for s in data}
        assert [lvl for lvl, is_locked in locked.items() if not is_locked] == [1, 2, 3]
        assert all(locked[lvl] for lvl in range(4, 16))


# ════════════════════════════════════════════════════════════════════════════
#  CONSOLE
# ════════════════════════════════════════════════════════════════════════════


class TestConsoleGame:
    def make_game(self, level=4, fen=None, color=chess.WHITE):
        return ConsoleGame(seeded_engine(level=level, fen=fen), color)

    def test_player_move(self):
        game = self.make_game()
        assert game.handle("e2e4") == "You play: e2e4"
        assert game.ai_turn() is True

    def test_illegal_move(self):
        game = self.make_game()
        assert game.handle("e2e5") == "Illegal move, try again."
        assert game.handle("nonsense") == "Illegal move, try again."

    def test_hint(self):
        game = self.make_game(fen=POISONED_ROOK)
        assert game.handle("hint") == "Hint: Qxd7"

    def test_ai_reply_and_undo(self):
        game = self.make_game()
        game.handle("e2e4")
        assert game.play_ai().startswith("AI plays: ")
        assert game.handle("undo") == "Undid 2 move(s)."
        assert game.engine.board.get_fen() == chess.STARTING_FEN
        assert game.handle("undo") == "Nothing to undo."

    def test_stages_listing(self):
        text = self.make_game().handle("stages")
        assert "Level 4: depth 1, randomness 0.0, greedy" in text
        assert "Level 15: depth 4" in text
        assert "(locked)" not in text

    def test_stages_listing_marks_locked(self):
        game = ConsoleGame(seeded_engine(), completed=1)
        lines = game.handle("stages").splitlines()
        assert lines[0] == "Level 1: depth 1, randomness 1.0, none"
        assert lines[1] == "Level 2: depth 1, randomness 0.5, none"
        assert lines[2] == "Level 3: depth 1, randomness 0.2, none (locked)"
        assert lines[-1] == "Level 15: depth 4, randomness 0.0, none (locked)"

    def test_help_and_board(self):
        game = self.make_game()
        assert "hint" in game.handle("help")
        assert game.handle("board") == str(chess.Board())

    def test_status_after_mate(self):
        game = self.make_game(fen=FOOLS_MATE)
        assert game.status() == "Black Wins! Checkmate!"

    def test_run_ai_moves_first_for_black_player(self, monkeypatch, capsys):
        game = self.make_game(color=chess.BLACK)
        monkeypatch.setattr("builtins.input", lambda prompt="": "quit")
        game.run()
        out = capsys.readouterr().out
        assert "AI plays: " in out
        assert len(game.engine.board.board.move_stack) == 1
