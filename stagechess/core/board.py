"""Board wrapper over python-chess: the rules contract the stage engine plays against."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

import chess


@dataclass(frozen=True)
class Move:
    """A legal move with the details the selector and the UI need."""

    move: chess.Move
    captured: Optional[chess.PieceType]
    notation: str

    @property
    def from_square(self) -> chess.Square:
        return self.move.from_square

    @property
    def to_square(self) -> chess.Square:
        return self.move.to_square

    @property
    def promotion(self) -> Optional[chess.PieceType]:
        return self.move.promotion

    @property
    def uci(self) -> str:
        return self.move.uci()

    def __str__(self) -> str:
        return self.notation


class ChessBoard:
    def __init__(self, fen: str = None):
        """Initialize from FEN or the standard starting position."""
        self.board = chess.Board(fen) if fen else chess.Board()

    def reset(self):
        """Reset to the initial position."""
        self.board.reset()

    def set_fen(self, fen: str):
        """Set board state from a FEN string. Raises ValueError if invalid."""
        self.board.set_fen(fen)

    def get_fen(self) -> str:
        """Return the current FEN."""
        return self.board.fen()

    def piece_map(self):
        return self.board.piece_map()

    def side_to_move(self) -> chess.Color:
        return self.board.turn

    def legal_moves(self, square: Optional[chess.Square] = None, verbose: bool = True):
        """Legal moves in generation order.

        With verbose=False the raw chess.Move objects are returned, which is
        what the search recursion walks. square limits the result to moves
        starting on that square.
        """
        from_mask = chess.BB_SQUARES[square] if square is not None else chess.BB_ALL
        raw = list(self.board.generate_legal_moves(from_mask=from_mask))
        if not verbose:
            return raw
        return [self._describe(m) for m in raw]

    def _describe(self, move: chess.Move) -> Move:
        if self.board.is_en_passant(move):
            captured = chess.PAWN
        else:
            captured = self.board.piece_type_at(move.to_square)
            # castling is encoded as king-takes-own-rook in chess960 mode only
            if captured is not None and self.board.color_at(move.to_square) == self.board.turn:
                captured = None
        return Move(move=move, captured=captured, notation=self.board.san(move))

    def apply_move(self, move: Union[Move, chess.Move]) -> bool:
        """Push a legal move. Returns False and leaves the board untouched otherwise."""
        raw = move.move if isinstance(move, Move) else move
        if not self.board.is_legal(raw):
            return False
        self.board.push(raw)
        return True

    def undo_last_move(self):
        self.board.pop()

    @contextmanager
    def applied(self, move: Union[Move, chess.Move]) -> Iterator["ChessBoard"]:
        """Apply move for the duration of the block; it is undone on every exit."""
        if not self.apply_move(move):
            raise ValueError(f"Illegal move in this position: {move}")
        try:
            yield self
        finally:
            self.undo_last_move()

    def make_move(self, move_str: str) -> bool:
        """Push a UCI move (e.g. 'e2e4'). Returns True if legal."""
        try:
            move = chess.Move.from_uci(move_str)
        except ValueError:
            return False
        return self.apply_move(move)

    def undo_move(self) -> bool:
        """Pop the last move if there is one."""
        if not self.board.move_stack:
            return False
        self.board.pop()
        return True

    def is_game_over(self) -> bool:
        """Checkmate, stalemate, dead position, threefold repetition or 50-move rule."""
        b = self.board
        if not any(b.generate_legal_moves()):
            return True
        return b.is_insufficient_material() or b.halfmove_clock >= 100 or b.is_repetition(3)

    def outcome_summary(self) -> Optional[Tuple[str, str]]:
        """(title, reason) for a finished game, None while it is still running."""
        b = self.board
        if b.is_checkmate():
            winner = "Black" if b.turn == chess.WHITE else "White"
            return f"{winner} Wins!", "Checkmate!"
        if b.is_stalemate():
            return "Draw", "Stalemate!"
        if b.is_repetition(3):
            return "Draw", "Threefold Repetition"
        if b.is_insufficient_material():
            return "Draw", "Insufficient Material"
        if b.halfmove_clock >= 100:
            return "Draw", "50-Move Rule"
        return None

    def __str__(self) -> str:
        return str(self.board)
