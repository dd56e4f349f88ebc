"""FastAPI REST interface for playing against and asking hints from the stage AI."""

import threading

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

from stagechess.config import CONFIG
from stagechess.core.utils import setup_logging
from stagechess.engine import StageEngine

setup_logging(CONFIG.log_level)

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared game session; one request at a time may touch the board.
engine = StageEngine()
_board_lock = threading.Lock()


class FenRequest(BaseModel):
    fen: str


class MoveRequest(BaseModel):
    move: str  # UCI format e.g. "e2e4"


class LevelRequest(BaseModel):
    level: Optional[int] = None


def _outcome():
    summary = engine.outcome()
    if summary is None:
        return None
    title, reason = summary
    return {"title": title, "reason": reason}


@app.get("/board")
def get_board():
    with _board_lock:
        board = engine.board
        return {
            "fen": board.get_fen(),
            "turn": "white" if board.side_to_move() == chess.WHITE else "black",
            "legal_moves": [m.uci() for m in board.legal_moves(verbose=False)],
            "is_game_over": board.is_game_over(),
            "outcome": _outcome(),
        }


@app.post("/position")
def set_position(req: FenRequest):
    with _board_lock:
        try:
            engine.reset(req.fen)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Invalid FEN: {e}")
        return {"fen": engine.board.get_fen()}


@app.post("/move")
def make_move(req: MoveRequest):
    with _board_lock:
        try:
            move = chess.Move.from_uci(req.move)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid UCI move: {req.move}")
        if not engine.board.board.is_legal(move):
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.move}")
        san = engine.board.board.san(move)
        engine.board.apply_move(move)
        return {"fen": engine.board.get_fen(), "move": req.move, "san": san}


@app.post("/ai-move")
def ai_move(req: LevelRequest = LevelRequest()):
    with _board_lock:
        if engine.board.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        move = engine.play_ai_move(req.level)
        return {
            "move": move.uci,
            "san": move.notation,
            "fen": engine.board.get_fen(),
            "outcome": _outcome(),
        }


@app.post("/hint")
def hint(req: LevelRequest = LevelRequest()):
    with _board_lock:
        move = engine.hint(req.level)
        if move is None:
            raise HTTPException(status_code=400, detail="Game is already over")
        return {
            "move": move.uci,
            "san": move.notation,
            "from": chess.square_name(move.from_square),
            "to": chess.square_name(move.to_square),
        }


@app.post("/undo")
def undo():
    with _board_lock:
        if not engine.undo_move():
            raise HTTPException(status_code=400, detail="Nothing to undo")
        return {"fen": engine.board.get_fen()}


@app.post("/reset")
def reset_board():
    with _board_lock:
        engine.reset()
        return {"fen": engine.board.get_fen()}


@app.get("/stages")
def list_stages(completed: Optional[int] = None):
    """Effective config per level; with `completed`, levels beyond the next one are locked."""
    catalog = engine.catalog
    levels = range(1, catalog.max_level + 1)
    unlocked = set(catalog.unlocked_levels(completed, catalog.max_level)) if completed is not None else set(levels)
    return [
        {"level": level, "locked": level not in unlocked, **catalog.lookup(level).to_dict()}
        for level in levels
    ]
