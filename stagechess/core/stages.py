"""Difficulty stages: search depth, randomness and strategy per level."""

from dataclasses import dataclass, asdict
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional


class Strategy(str, Enum):
    NONE = "none"
    GREEDY = "greedy"


class EvalProfile(str, Enum):
    # Recorded per stage; the evaluator does not read it.
    DEFAULT = "default"
    POSITIONAL = "positional"
    MIXED = "mixed"
    STRONG = "strong"


@dataclass(frozen=True)
class StageConfig:
    depth: int = 1
    randomness: float = 0.0
    strategy: Strategy = Strategy.NONE
    eval_profile: EvalProfile = EvalProfile.DEFAULT

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["strategy"] = self.strategy.value
        d["eval_profile"] = self.eval_profile.value
        return d


DEFAULT_STAGES: Dict[int, StageConfig] = {
    1: StageConfig(depth=1, randomness=1.0),  # uniformly random
    2: StageConfig(depth=1, randomness=0.5),
    3: StageConfig(depth=1, randomness=0.2),
    4: StageConfig(depth=1, randomness=0.0, strategy=Strategy.GREEDY),  # captures first
    5: StageConfig(depth=2, randomness=0.1),
    6: StageConfig(depth=2, randomness=0.0),
    7: StageConfig(depth=2, randomness=0.0, eval_profile=EvalProfile.POSITIONAL),
    8: StageConfig(depth=3, randomness=0.0),
    9: StageConfig(depth=3, randomness=0.0, eval_profile=EvalProfile.MIXED),
    10: StageConfig(depth=3, randomness=0.0, eval_profile=EvalProfile.STRONG),
    15: StageConfig(depth=4, randomness=0.0),  # boss
}

# Number of levels offered to the player; gaps in the table play as the boss.
TOTAL_LEVELS = 15


def stage_from_dict(level: int, raw: Mapping[str, Any], base: Optional[StageConfig] = None) -> StageConfig:
    """Build a StageConfig from a config table, validating the values."""
    base = base or StageConfig()
    depth = int(raw.get("depth", base.depth))
    randomness = float(raw.get("randomness", base.randomness))
    if depth < 1:
        raise ValueError(f"Stage {level}: depth must be >= 1, got {depth}")
    if not 0.0 <= randomness <= 1.0:
        raise ValueError(f"Stage {level}: randomness must be in [0, 1], got {randomness}")
    try:
        strategy = Strategy(raw.get("strategy", base.strategy.value))
        profile = EvalProfile(raw.get("eval_profile", base.eval_profile.value))
    except ValueError as e:
        raise ValueError(f"Stage {level}: {e}")
    return StageConfig(depth=depth, randomness=randomness, strategy=strategy, eval_profile=profile)


class StageCatalog:
    """Read-only level -> StageConfig table.

    Levels are matched exactly after clamping to the highest defined level.
    Anything without an entry (11-14, above 15, zero or negative) plays as the
    strongest stage.
    """

    def __init__(self, stages: Optional[Mapping[int, StageConfig]] = None):
        table = dict(DEFAULT_STAGES if stages is None else stages)
        if not table:
            raise ValueError("StageCatalog needs at least one stage")
        self._stages = MappingProxyType(table)
        self.max_level = max(table)

    @classmethod
    def from_config(cls, overrides: Mapping[int, Mapping[str, Any]]) -> "StageCatalog":
        """Default table with [stages.N] overrides applied on top."""
        table = dict(DEFAULT_STAGES)
        for level, raw in overrides.items():
            table[level] = stage_from_dict(level, raw, table.get(level))
        return cls(table)

    @property
    def stages(self) -> Mapping[int, StageConfig]:
        return self._stages

    def lookup(self, level: int) -> StageConfig:
        strongest = self._stages[self.max_level]
        return self._stages.get(min(level, self.max_level), strongest)

    def levels(self) -> List[int]:
        return sorted(self._stages)

    def unlocked_levels(self, completed: int, total: int = TOTAL_LEVELS) -> List[int]:
        """Levels the player may pick after completing `completed` stages."""
        return [lvl for lvl in range(1, total + 1) if lvl <= completed + 1]
