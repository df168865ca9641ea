"""
Configuration for Dolmen Chronicle.

Settings can be given in code or loaded from a JSON file such as:

    {
        "default_site_name": "The Spectral Manse",
        "default_start_time": {"year": 1089, "month": "Haggryme", "day": 12,
                               "hour": 9, "turn": 1},
        "wandering_monsters": {"chance": 2, "check_frequency": 3},
        "dice_seed": 42,
        "verbose": true
    }
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional
import json
import logging

from dolmen_chronicle.data_models import DiceRoller, WanderingMonsterConfig
from dolmen_chronicle.date_time import (
    DEFAULT_DATE_TIME,
    GameDateTime,
    get_month_by_name,
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass
class ChronicleConfig:
    """Defaults used when starting delves."""

    default_site_name: str = "Unknown Dungeon"
    default_start_time: GameDateTime = DEFAULT_DATE_TIME
    wandering_monsters: WanderingMonsterConfig = field(default_factory=WanderingMonsterConfig)

    # Runtime options
    dice_seed: Optional[int] = None  # Fixed seed for reproducible sessions
    verbose: bool = False

    def __post_init__(self):
        self.default_start_time.validate()
        self.wandering_monsters.validate()

    def create_dice_roller(self) -> DiceRoller:
        """Create a dice roller, seeded if a seed is configured."""
        return DiceRoller(seed=self.dice_seed)

    def to_dict(self) -> dict[str, Any]:
        start = self.default_start_time
        return {
            "default_site_name": self.default_site_name,
            "default_start_time": {
                "year": start.year,
                "month": start.month,
                "day": start.day,
                "hour": start.hour,
                "turn": start.turn,
                "round": start.round,
            },
            "wandering_monsters": self.wandering_monsters.to_dict(),
            "dice_seed": self.dice_seed,
            "verbose": self.verbose,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChronicleConfig":
        """
        Build a configuration from a mapping. Missing keys take their defaults.

        Raises:
            ValueError: If a value is invalid
        """
        defaults = cls()

        dice_seed = data.get("dice_seed")
        if dice_seed is not None and (not isinstance(dice_seed, int) or isinstance(dice_seed, bool)):
            raise ValueError(f"Invalid dice_seed: {dice_seed!r}")

        start_data = data.get("default_start_time")
        start_time = (
            _parse_start_time(start_data) if start_data else defaults.default_start_time
        )

        return cls(
            default_site_name=str(data.get("default_site_name", defaults.default_site_name)),
            default_start_time=start_time,
            wandering_monsters=WanderingMonsterConfig.from_dict(
                data.get("wandering_monsters") or {}
            ),
            dice_seed=dice_seed,
            verbose=bool(data.get("verbose", defaults.verbose)),
        )


def _parse_start_time(data: Mapping[str, Any]) -> GameDateTime:
    """Parse a start time whose month may be given by number or name."""
    month = data.get("month", DEFAULT_DATE_TIME.month)
    if isinstance(month, str):
        named = get_month_by_name(month)
        if named is None:
            raise ValueError(f"Unknown month: {month!r}")
        month = named.number

    try:
        return GameDateTime(
            year=int(data.get("year", DEFAULT_DATE_TIME.year)),
            month=int(month),
            day=int(data.get("day", 1)),
            hour=int(data.get("hour", DEFAULT_DATE_TIME.hour)),
            turn=int(data.get("turn", 1)),
            round=int(data.get("round", 1)),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid default_start_time: {e}") from e


def load_config(path: Path | str) -> ChronicleConfig:
    """
    Load configuration from a JSON file.

    Args:
        path: Path to the configuration file. A missing file gives the defaults.

    Raises:
        ValueError: If the file is not valid JSON or holds invalid settings
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"No configuration at {path}, using defaults")
        return ChronicleConfig()

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must hold a JSON object")

    config = ChronicleConfig.from_dict(data)
    logger.info(f"Loaded configuration from {path}")
    return config
