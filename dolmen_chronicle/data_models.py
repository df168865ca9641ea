"""
Shared data structures for Dolmen Chronicle.

Holds the enums used across the game-clock, delve and encounter modules, and
the dice roller through which every random outcome is produced.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional
import logging
import random
import re


logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class EncounterEnvironment(str, Enum):
    """Where an encounter takes place. Determines encounter distance."""
    DUNGEON = "dungeon"
    OUTDOORS = "outdoors"


class EncounterSide(str, Enum):
    """The two sides of an encounter."""
    NPCS = "npcs"
    PLAYERS = "players"


class LightSourceType(str, Enum):
    """Standard light sources with known durations."""
    TORCH = "torch"  # 6 turns (1 hour)
    CANDLE = "candle"  # 12 turns (2 hours)
    LANTERN = "lantern"  # 24 turns (4 hours) per flask


class CheckFrequencyType(str, Enum):
    """How wandering monster checks are scheduled."""
    INTERVAL = "interval"  # Every N turns
    PROBABILITY = "probability"  # N% chance each turn


# Burn time in turns
STANDARD_LIGHT_DURATIONS: dict[LightSourceType, int] = {
    LightSourceType.TORCH: 6,
    LightSourceType.CANDLE: 12,
    LightSourceType.LANTERN: 24,
}


# =============================================================================
# WANDERING MONSTERS
# =============================================================================


@dataclass(frozen=True)
class WanderingMonsterConfig:
    """
    How often, and how likely, wandering monsters turn up during a delve.

    The standard Dolmenwood dungeon check is 1-in-6, every 2 turns.

    Attributes:
        chance: X-in-6 chance a check finds a wandering monster
        check_frequency: Turns between checks (interval), or the percent
            chance of a check each turn (probability)
        check_frequency_type: Which of the two schedules is used
    """
    chance: int = 1
    check_frequency: int = 2
    check_frequency_type: CheckFrequencyType = CheckFrequencyType.INTERVAL

    def __post_init__(self):
        object.__setattr__(
            self, "check_frequency_type", CheckFrequencyType(self.check_frequency_type)
        )

    def validate(self) -> None:
        """
        Raises:
            ValueError: If a value is out of range for its schedule
        """
        if not 1 <= self.chance <= 6:
            raise ValueError(f"Wandering monster chance must be 1-6: {self.chance}")
        if self.check_frequency_type == CheckFrequencyType.INTERVAL:
            if not isinstance(self.check_frequency, int) or self.check_frequency < 1:
                raise ValueError(
                    f"Check interval must be a whole number of turns: {self.check_frequency}"
                )
        elif not 0 <= self.check_frequency <= 100:
            raise ValueError(f"Check probability must be 0-100: {self.check_frequency}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "chance": self.chance,
            "check_frequency": self.check_frequency,
            "check_frequency_type": self.check_frequency_type.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WanderingMonsterConfig":
        defaults = cls()
        config = cls(
            chance=data.get("chance", defaults.chance),
            check_frequency=data.get("check_frequency", defaults.check_frequency),
            check_frequency_type=data.get(
                "check_frequency_type", defaults.check_frequency_type
            ),
        )
        config.validate()
        return config


# =============================================================================
# DICE AND RANDOMIZATION
# =============================================================================


# e.g. "d6", "1d100", "2d6*10", "1d6+2", "1d4*30-5"
_DICE_NOTATION = re.compile(
    r"^\s*(?P<count>\d*)\s*d\s*(?P<sides>\d+)"
    r"(?:\s*\*\s*(?P<multiplier>\d+))?"
    r"(?:\s*(?P<sign>[+-])\s*(?P<modifier>\d+))?\s*$",
    re.IGNORECASE,
)


@dataclass
class DiceResult:
    """Result of a dice roll with full information."""
    notation: str
    rolls: list[int]
    modifier: int
    total: int
    reason: str
    multiplier: int = 1
    min_total: int = 0
    max_total: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        dice = f"{self.rolls}"
        if self.multiplier != 1:
            dice = f"{dice} x {self.multiplier}"
        if self.modifier > 0:
            return f"{self.notation}: {dice} + {self.modifier} = {self.total}"
        elif self.modifier < 0:
            return f"{self.notation}: {dice} - {abs(self.modifier)} = {self.total}"
        return f"{self.notation}: {dice} = {self.total}"


class DiceRoller:
    """
    Randomization interface for one chronicle.

    All dice rolls made by a Delve or Encounter go through the roller injected
    into it. Each roller owns its own random generator, so two sessions held
    in memory never share random state, and tests can seed or script it.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """
        Initialize the roller.

        Args:
            seed: Seed for a private random generator
            rng: Generator to use instead of creating one (takes precedence over seed)
        """
        self._seed = seed
        self._rng = rng if rng is not None else random.Random(seed)
        self._roll_log: list[DiceResult] = []

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def set_seed(self, seed: int) -> None:
        """Reseed the private generator for reproducibility."""
        self._seed = seed
        self._rng.seed(seed)

    def _roll_die(self, sides: int) -> int:
        """Roll a single die. The only place a random number is drawn."""
        return self._rng.randint(1, sides)

    def roll(self, dice: str, reason: str = "") -> DiceResult:
        """
        Roll dice using standard notation (e.g., '2d6', '1d20+5', '2d6*10').

        Args:
            dice: Dice notation string
            reason: Why this roll is being made (for logging)

        Returns:
            DiceResult with individual rolls, total and possible range

        Raises:
            ValueError: If the notation cannot be parsed
        """
        match = _DICE_NOTATION.match(dice)
        if not match:
            raise ValueError(f"Invalid dice notation: {dice!r}")

        num_dice = int(match.group("count")) if match.group("count") else 1
        die_size = int(match.group("sides"))
        multiplier = int(match.group("multiplier")) if match.group("multiplier") else 1
        modifier = int(match.group("modifier")) if match.group("modifier") else 0
        if match.group("sign") == "-":
            modifier = -modifier

        if num_dice < 1 or die_size < 1:
            raise ValueError(f"Invalid dice notation: {dice!r}")

        rolls = [self._roll_die(die_size) for _ in range(num_dice)]
        total = sum(rolls) * multiplier + modifier

        result = DiceResult(
            notation=dice,
            rolls=rolls,
            modifier=modifier,
            total=total,
            reason=reason,
            multiplier=multiplier,
            min_total=num_dice * multiplier + modifier,
            max_total=num_dice * die_size * multiplier + modifier,
        )

        logger.debug(f"Rolled {result} ({reason or 'unspecified'})")
        self._roll_log.append(result)
        return result

    def roll_d20(self, reason: str = "") -> DiceResult:
        """Convenience method for d20 rolls."""
        return self.roll("1d20", reason)

    def roll_2d6(self, reason: str = "") -> DiceResult:
        """Convenience method for 2d6 reaction/morale rolls."""
        return self.roll("2d6", reason)

    def roll_d6(self, num_dice: int = 1, reason: str = "") -> DiceResult:
        """Convenience method for d6 rolls."""
        return self.roll(f"{num_dice}d6", reason)

    def roll_percentile(self, reason: str = "") -> DiceResult:
        """Roll d100 for percentile checks."""
        return self.roll("1d100", reason)

    def get_roll_log(self) -> list[DiceResult]:
        """Get every roll made by this roller."""
        return self._roll_log.copy()

    def clear_roll_log(self) -> None:
        self._roll_log = []
