import random
from typing import Optional, Tuple

from stagechess.config import CONFIG, Config
from stagechess.core.board import ChessBoard, Move
from stagechess.core.evaluator import Evaluator
from stagechess.core.search import SearchEngine
from stagechess.core.selector import MoveSelector
from stagechess.core.stages import StageCatalog


class StageEngine:
    """A game against the stage AI: one board, one selector."""

    def __init__(self, level: Optional[int] = None, fen: str = None,
                 config: Optional[Config] = None, rng: Optional[random.Random] = None):
        cfg = config or CONFIG
        self.level = level if level is not None else cfg.play.default_level
        self.board = ChessBoard(fen)
        self.catalog = StageCatalog.from_config(cfg.stages)
        self.selector = MoveSelector(
            self.catalog,
            SearchEngine(Evaluator(cfg.eval)),
            rng or random.Random(cfg.seed),
        )

    def best_move(self, level: Optional[int] = None) -> Optional[Move]:
        return self.selector.select_move(self.board, self.level if level is None else level)

    def play_ai_move(self, level: Optional[int] = None) -> Optional[Move]:
        """Let the AI move on the board. Returns None when the game is over."""
        if self.board.is_game_over():
            return None
        move = self.best_move(level)
        if move is not None:
            self.board.apply_move(move)
        return move

    def hint(self, level: Optional[int] = None) -> Optional[Move]:
        """Suggest a move for the side to move without playing it."""
        if self.board.is_game_over():
            return None
        moves = self.board.legal_moves()
        if not moves:
            return None
        return self.best_move(level) or moves[0]

    def make_move(self, move_uci: str) -> bool:
        return self.board.make_move(move_uci)

    def undo_move(self) -> bool:
        return self.board.undo_move()

    def reset(self, fen: str = None):
        if fen:
            self.board.set_fen(fen)
        else:
            self.board.reset()

    def outcome(self) -> Optional[Tuple[str, str]]:
        return self.board.outcome_summary()
