# stagechess/config.py
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import os
import tomllib  # python >=3.11

# Material weights used by both the evaluator and the greedy stage.
PIECE_VALUES = {
    "PAWN": 10,
    "KNIGHT": 32,
    "BISHOP": 33,
    "ROOK": 50,
    "QUEEN": 90,
    "KING": 2000,
}

@dataclass
class PlayConfig:
    default_level: int = 1
    ai_delay_ms: int = 500  # pause before the AI replies in the console
    human_color: str = "white"

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())
    pst_weight: float = 0.1

@dataclass
class UIConfig:
    engine_name: str = "StageChess"
    api_port: int = 8000

@dataclass
class Config:
    play: PlayConfig = field(default_factory=PlayConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    # raw [stages.N] tables, validated when the catalog is built
    stages: Dict[int, Dict[str, Any]] = field(default_factory=dict)
    log_level: str = "INFO"
    seed: Optional[int] = None

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        return Config.from_dict(raw)

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "Config":
        cfg = Config()
        for section in ("play", "eval", "ui"):
            if section in raw:
                target = getattr(cfg, section)
                for k, v in raw[section].items():
                    if hasattr(target, k):
                        setattr(target, k, v)
        for key, entry in raw.get("stages", {}).items():
            try:
                level = int(key)
            except ValueError:
                raise ValueError(f"Stage key must be an integer level, got {key!r}")
            if not isinstance(entry, dict):
                raise ValueError(f"Stage {level} must be a table")
            cfg.stages[level] = dict(entry)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"]).upper()
        if "seed" in raw:
            cfg.seed = int(raw["seed"])
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("STAGECHESS_CONFIG_TOML", "config.toml"))
# env overrides for quick experiments
if os.environ.get("STAGECHESS_LEVEL"):
    CONFIG.play.default_level = int(os.environ["STAGECHESS_LEVEL"])
if os.environ.get("STAGECHESS_SEED"):
    CONFIG.seed = int(os.environ["STAGECHESS_SEED"])
