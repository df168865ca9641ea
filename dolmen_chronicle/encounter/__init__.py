"""
Encounter resolution for Dolmenwood.

Awareness, surprise, distance and initiative for a single encounter.
"""

from dolmen_chronicle.encounter.encounter_rules import (
    EncounterRules,
    CheckResult,
    distance_notation,
    resolve_check_result,
    roll_check,
)
from dolmen_chronicle.encounter.encounter import (
    INITIATIVE_AUTOMATIC,
    INITIATIVE_SURPRISED,
    EncounterPhase,
    InitiativeWinner,
    Awareness,
    SideSurpriseOutcome,
    Surprise,
    DistanceRange,
    Initiative,
    EncounterSnapshot,
    Encounter,
)

__all__ = [
    # Rules
    "EncounterRules",
    "CheckResult",
    "distance_notation",
    "resolve_check_result",
    "roll_check",
    # Encounter
    "INITIATIVE_AUTOMATIC",
    "INITIATIVE_SURPRISED",
    "EncounterPhase",
    "InitiativeWinner",
    "Awareness",
    "SideSurpriseOutcome",
    "Surprise",
    "DistanceRange",
    "Initiative",
    "EncounterSnapshot",
    "Encounter",
]
