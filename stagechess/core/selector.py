"""Stage-driven move choice: random play, greedy captures or negamax search."""

import logging
import random
import time
from typing import Optional

import chess

from stagechess.core.board import Move
from stagechess.core.search import INF, SearchEngine
from stagechess.core.stages import StageCatalog, Strategy
from stagechess.core.utils import format_info

logger = logging.getLogger(__name__)


class MoveSelector:
    """Picks one move for a position at a given difficulty level.

    Used for both the AI's own turns and player hints. The random source is
    injected so tests can seed it; each call is self-contained and leaves the
    position exactly as it found it.
    """

    def __init__(self, catalog: Optional[StageCatalog] = None,
                 search: Optional[SearchEngine] = None,
                 rng: Optional[random.Random] = None):
        self.catalog = catalog or StageCatalog()
        self.search = search or SearchEngine()
        self.rng = rng or random.Random()

    def select_move(self, position, level: int) -> Optional[Move]:
        config = self.catalog.lookup(level)
        moves = position.legal_moves()
        if not moves:
            return None

        if self.rng.random() < config.randomness:
            move = self.rng.choice(moves)
            logger.debug("stage %d: random move %s", level, move)
            return move

        if config.strategy is Strategy.GREEDY:
            piece_value = self.search.evaluator.piece_value
            ordered = sorted(moves, key=lambda m: piece_value(m.captured), reverse=True)
            logger.debug("stage %d: greedy move %s", level, ordered[0])
            return ordered[0]

        return self._search_root(position, moves, level, config.depth)

    def _search_root(self, position, moves, level, depth) -> Move:
        color = 1 if position.side_to_move() == chess.WHITE else -1

        # Shuffle once so equal scores do not always repeat the same opening.
        self.rng.shuffle(moves)

        self.search.nodes = 0
        start = time.time()
        best_move = None
        best_value = -INF
        for move in moves:
            with position.applied(move):
                value = -self.search.negamax(position, depth - 1, -INF, INF, -color)
            if value > best_value:
                best_value = value
                best_move = move

        logger.debug(format_info(level, depth, best_value, self.search.nodes,
                                 time.time() - start, best_move))
        return best_move if best_move is not None else moves[0]
