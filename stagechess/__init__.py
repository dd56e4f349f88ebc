"""
StageChess: a chess opponent and hint generator with fifteen difficulty stages.

Low stages play random or greedy moves; higher stages run a depth-limited
negamax search with alpha-beta pruning over a material and piece-square
evaluation.
"""

__version__ = "1.0.0"
