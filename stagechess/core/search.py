from typing import Optional

from stagechess.core.evaluator import Evaluator

INF = float("inf")


class SearchEngine:
    """Depth-bounded negamax with alpha-beta pruning.

    The position is borrowed for the whole call: every move is applied
    through position.applied(), so the board is back in its original state
    when negamax returns, cutoffs included.
    """

    def __init__(self, evaluator: Optional[Evaluator] = None):
        self.evaluator = evaluator or Evaluator()
        self.nodes = 0

    def negamax(self, position, depth: int, alpha: float, beta: float, sign: int) -> float:
        """Score of position for the side given by sign (+1 White, -1 Black)."""
        self.nodes += 1
        if depth == 0 or position.is_game_over():
            return self.evaluator.evaluate(position) * sign

        moves = position.legal_moves(verbose=False)
        # No mate bonus: mated and stalemated sides get the static score.
        if not moves:
            return self.evaluator.evaluate(position) * sign

        best = -INF
        for move in moves:
            with position.applied(move):
                score = -self.negamax(position, depth - 1, -beta, -alpha, -sign)

            if score > best:
                best = score
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break  # beta cutoff
        return best
