"""Material plus piece-square static evaluator shared by every stage."""

from typing import Dict, List, Optional

import chess
from stagechess.config import CONFIG, EvalConfig

# Piece-square bonuses, row 0 = rank 8, column 0 = file a.
# Only pawns and knights have a table; other pieces get no bonus.
PST: Dict[chess.PieceType, List[List[int]]] = {
    chess.PAWN: [
        [0, 0, 0, 0, 0, 0, 0, 0],
        [5, 5, 5, 5, 5, 5, 5, 5],
        [1, 1, 2, 3, 3, 2, 1, 1],
        [0, 0, 0, 2, 2, 0, 0, 0],
        [0, 0, 0, 1, 1, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0],
        [5, 5, 10, -10, -10, 10, 5, 5],
        [0, 0, 0, 0, 0, 0, 0, 0],
    ],
    chess.KNIGHT: [
        [-5, -4, -3, -3, -3, -3, -4, -5],
        [-4, -2, 0, 0, 0, 0, -2, -4],
        [-3, 0, 1, 1, 1, 1, 0, -3],
        [-3, 0, 1, 2, 2, 1, 0, -3],
        [-3, 0, 1, 2, 2, 1, 0, -3],
        [-3, 0, 1, 1, 1, 1, 0, -3],
        [-4, -2, 0, 0, 0, 0, -2, -4],
        [-5, -4, -3, -3, -3, -3, -4, -5],
    ],
}


class Evaluator:
    def __init__(self, cfg: Optional[EvalConfig] = None):
        self.cfg = cfg or CONFIG.eval
        self.piece_values: Dict[chess.PieceType, int] = {
            pt: self.cfg.piece_values.get(chess.piece_name(pt).upper(), 0)
            for pt in chess.PIECE_TYPES
        }

    def piece_value(self, piece_type: Optional[chess.PieceType]) -> int:
        """Material weight of a piece type, 0 for None."""
        if piece_type is None:
            return 0
        return self.piece_values.get(piece_type, 0)

    def evaluate(self, position) -> float:
        """Return the static score, positive favors White whoever is to move."""
        total = 0.0
        for sq, piece in position.piece_map().items():
            row = 7 - chess.square_rank(sq)
            col = chess.square_file(sq)

            # The table is read at the raw square for both colors.
            table = PST.get(piece.piece_type)
            bonus = table[row][col] if table else 0

            score = self.piece_values[piece.piece_type] + bonus * self.cfg.pst_weight
            if piece.color == chess.WHITE:
                total += score
            else:
                total -= score
        return total
