from dataclasses import dataclass
from typing import List, Optional

from domain.models.enums import CategoryKey


class XpRules:
    DAILY_MAX_XP = 100

    @staticmethod
    def daily_xp(completed: int, total: int) -> int:
        """
        round_half_up(100 * completed / total), 0 when nothing was due.
        Integer arithmetic keeps .5 cases exact.
        """
        if total <= 0:
            return 0
        completed = max(0, min(completed, total))
        scaled = 2 * XpRules.DAILY_MAX_XP * completed
        return (scaled + total) // (2 * total)


@dataclass(frozen=True)
class CharacterStage:
    stage: int
    name: str
    min_xp: int
    message: str


# Same ladder for every category
STAGES: List[CharacterStage] = [
    CharacterStage(1, "Seed", 0, "Every journey starts small."),
    CharacterStage(2, "Rise", 501, "Momentum is building."),
    CharacterStage(3, "Flow", 1501, "This is becoming natural."),
    CharacterStage(4, "Ascend", 3501, "This is who you are now."),
]

FINAL_STAGE_MAX_XP = 1_000_000

CHARACTERS = {
    CategoryKey.HEALTH: ("Vita", "Energy, balance, vitality"),
    CategoryKey.MIND: ("Aeris", "Clarity, thought, awareness"),
    CategoryKey.CAREER: ("Forge", "Building, effort, discipline"),
    CategoryKey.LIFE: ("Axis", "Stability, routine, alignment"),
    CategoryKey.FUN: ("Pulse", "Creativity, joy, expression"),
}


class StageRules:
    @staticmethod
    def current_stage(total_xp: int) -> CharacterStage:
        current = STAGES[0]
        for stage in STAGES:
            if total_xp >= stage.min_xp:
                current = stage
            else:
                break
        return current

    @staticmethod
    def max_xp(stage: CharacterStage) -> int:
        """Inclusive upper bound: next stage's minimum minus one."""
        following: Optional[CharacterStage] = next((s for s in STAGES if s.stage == stage.stage + 1), None)
        return following.min_xp - 1 if following else FINAL_STAGE_MAX_XP
