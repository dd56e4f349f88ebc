import logging


def format_info(level, depth, score, nodes, elapsed, move):
    """One UCI-style info line describing a finished stage search."""
    nps = int(nodes / elapsed) if elapsed > 0 else 0
    move_str = str(move) if move is not None else "-"
    return (f"info stage {level} depth {depth} score {score:.1f} nodes {nodes} "
            f"nps {nps} time {int(elapsed * 1000)} move {move_str}")


def setup_logging(level: str = "INFO"):
    """Configure root logging once for the console and API entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
