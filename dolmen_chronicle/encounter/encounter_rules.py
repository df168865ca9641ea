"""
Encounter rules from the Dolmenwood Player's Book.

- Surprise: 2-in-6 base chance for each unaware side
- Encounter distance: 2d6×10' dungeon, 2d6×30' outdoors
  (1d4×10' / 1d4×30' if both sides are surprised)
- Initiative: 1d6 per side, highest acts first
"""

from dataclasses import dataclass
from typing import Union

from dolmen_chronicle.data_models import DiceRoller, EncounterEnvironment


class EncounterRules:
    """Default values and dice used while resolving an encounter."""

    # X-in-6 chance that an unaware side is surprised
    DEFAULT_SURPRISE_CHANCE = 2

    # Distance if at least one side is not surprised, and if both are
    DUNGEON_DISTANCE = "2d6*10"
    DUNGEON_DISTANCE_SURPRISED = "1d4*10"
    OUTDOOR_DISTANCE = "2d6*30"
    OUTDOOR_DISTANCE_SURPRISED = "1d4*30"

    CHECK_DIE = "1d6"  # X-in-6 checks
    INITIATIVE_DIE = "1d6"


def distance_notation(
    environment: Union[EncounterEnvironment, str], both_surprised: bool
) -> str:
    """Get the dice notation for encounter distance."""
    if EncounterEnvironment(environment) == EncounterEnvironment.OUTDOORS:
        if both_surprised:
            return EncounterRules.OUTDOOR_DISTANCE_SURPRISED
        return EncounterRules.OUTDOOR_DISTANCE

    if both_surprised:
        return EncounterRules.DUNGEON_DISTANCE_SURPRISED
    return EncounterRules.DUNGEON_DISTANCE


@dataclass(frozen=True)
class CheckResult:
    """Outcome of an X-in-6 check."""

    meets_target: bool  # Roll was at or under the target
    roll: int  # Die result plus any modifier


def resolve_check_result(target: int, roll: int) -> CheckResult:
    """
    Resolve an X-in-6 check against a die result made elsewhere (e.g. by a
    player at the table), consistently with roll_check().
    """
    return CheckResult(meets_target=roll <= target, roll=roll)


def roll_check(dice: DiceRoller, target: int, modifier: int = 0, reason: str = "") -> CheckResult:
    """Roll an X-in-6 check with the given dice roller."""
    roll = dice.roll(EncounterRules.CHECK_DIE, reason).total + modifier
    return resolve_check_result(target, roll)
