"""
Dolmen Chronicle: game clock and encounter resolution for Dolmenwood.

Tracks in-game time on the Dolmenwood calendar, runs dungeon delves turn by
turn, and resolves the opening of encounters (awareness, surprise, distance,
initiative).
"""

from dolmen_chronicle.config import ChronicleConfig, load_config, setup_logging
from dolmen_chronicle.data_models import (
    CheckFrequencyType,
    DiceResult,
    DiceRoller,
    EncounterEnvironment,
    EncounterSide,
    LightSourceType,
    WanderingMonsterConfig,
)
from dolmen_chronicle.date_time import DateTimeUnit, GameDateTime
from dolmen_chronicle.dungeon import Delve, load_delve, save_delve, start_delve
from dolmen_chronicle.encounter import Encounter, EncounterPhase

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "ChronicleConfig",
    "load_config",
    "setup_logging",
    # Shared types
    "CheckFrequencyType",
    "DiceResult",
    "DiceRoller",
    "EncounterEnvironment",
    "EncounterSide",
    "LightSourceType",
    "WanderingMonsterConfig",
    # Clock
    "DateTimeUnit",
    "GameDateTime",
    # Delves and encounters
    "Delve",
    "start_delve",
    "save_delve",
    "load_delve",
    "Encounter",
    "EncounterPhase",
]
