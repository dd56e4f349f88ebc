"""Core engine components: board adapter, evaluator, search, stages and move selection."""

from .board import ChessBoard, Move
from .evaluator import Evaluator
from .search import SearchEngine
from .stages import StageCatalog, StageConfig
from .selector import MoveSelector
