"""Play against a stage in the terminal."""

import argparse
import logging
import random
import time
from typing import Optional

import chess

from stagechess.config import CONFIG
from stagechess.core.utils import setup_logging
from stagechess.engine import StageEngine

logger = logging.getLogger(__name__)

HELP = "Commands: <uci move> | hint | undo | board | stages | help | quit"


class ConsoleGame:
    def __init__(self, engine: StageEngine, human_color: chess.Color = chess.WHITE,
                 ai_delay_ms: int = 0, completed: Optional[int] = None):
        self.engine = engine
        self.human_color = human_color
        self.ai_delay_ms = ai_delay_ms
        # stages the player has finished; None leaves every level open
        self.completed = completed

    def ai_turn(self) -> bool:
        return (not self.engine.board.is_game_over()
                and self.engine.board.side_to_move() != self.human_color)

    def play_ai(self) -> str:
        if self.ai_delay_ms:
            time.sleep(self.ai_delay_ms / 1000)
        move = self.engine.play_ai_move()
        if move is None:
            return "AI has no move."
        return f"AI plays: {move.notation}"

    def stage_listing(self) -> str:
        catalog = self.engine.catalog
        unlocked = None
        if self.completed is not None:
            unlocked = set(catalog.unlocked_levels(self.completed, catalog.max_level))
        lines = []
        for lvl in catalog.levels():
            cfg = catalog.lookup(lvl)
            line = f"Level {lvl}: depth {cfg.depth}, randomness {cfg.randomness}, {cfg.strategy.value}"
            if unlocked is not None and lvl not in unlocked:
                line += " (locked)"
            lines.append(line)
        return "\n".join(lines)

    def handle(self, command: str) -> str:
        """Run one player command and return the text to show."""
        command = command.strip()
        if command in ("help", "?"):
            return HELP
        if command == "board":
            return str(self.engine.board)
        if command == "stages":
            return self.stage_listing()
        if command == "hint":
            move = self.engine.hint()
            return f"Hint: {move.notation}" if move else "No moves available."
        if command == "undo":
            # take back the AI reply and the player's move
            undone = 0
            for _ in range(2):
                if self.engine.undo_move():
                    undone += 1
                if self.engine.board.side_to_move() == self.human_color:
                    break
            return f"Undid {undone} move(s)." if undone else "Nothing to undo."
        if self.engine.make_move(command):
            return f"You play: {command}"
        return "Illegal move, try again."

    def status(self) -> str:
        summary = self.engine.outcome()
        if summary is None:
            return ""
        title, reason = summary
        return f"{title} {reason}"

    def run(self):
        print(HELP)
        while not self.engine.board.is_game_over():
            if self.ai_turn():
                print(self.play_ai())
                continue
            print(self.engine.board)
            print("----------------------------")
            command = input("Your move: ")
            if command.strip() in ("quit", "exit"):
                return
            print(self.handle(command))

        print(self.engine.board)
        print("Game Over")
        print(self.status())


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play chess against a StageChess level.")
    parser.add_argument("--level", type=int, default=CONFIG.play.default_level)
    parser.add_argument("--color", choices=["white", "black"], default=CONFIG.play.human_color)
    parser.add_argument("--fen", default=None)
    parser.add_argument("--seed", type=int, default=CONFIG.seed)
    parser.add_argument("--completed", type=int, default=None,
                        help="stages already completed; higher levels are shown locked")
    args = parser.parse_args(argv)

    setup_logging(CONFIG.log_level)
    logger.info("Starting level %d as %s", args.level, args.color)
    engine = StageEngine(level=args.level, fen=args.fen, rng=random.Random(args.seed))
    color = chess.WHITE if args.color == "white" else chess.BLACK
    ConsoleGame(engine, color, CONFIG.play.ai_delay_ms, args.completed).run()


if __name__ == "__main__":
    main()
