"""
Encounter state machine for Dolmenwood encounters.

Resolves the opening of a single encounter through four phases:

1. new - an encounter was called for
2. awareness-determined - which side(s) already knew of the other
3. surprise-and-distance-set - surprise rolled for unaware sides, distance rolled
4. initiative-rolled - action order determined

The phase is never stored: it is derived from which results are present.
Two shortcuts skip input that cannot matter:

- If both sides are aware, nobody can be surprised, so surprise and distance
  are resolved as soon as awareness is set.
- If exactly one side is surprised, it loses initiative automatically.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union
import logging

from dolmen_chronicle.chronicle.observable import Observable
from dolmen_chronicle.data_models import DiceRoller, EncounterEnvironment, EncounterSide
from dolmen_chronicle.date_time import (
    DEFAULT_DATE_TIME,
    GameDateTime,
    from_timestamp,
    to_timestamp,
)
from dolmen_chronicle.encounter.encounter_rules import (
    EncounterRules,
    distance_notation,
    resolve_check_result,
    roll_check,
)


logger = logging.getLogger(__name__)


# Special initiative results
INITIATIVE_AUTOMATIC = "automatic"  # Won because only the other side was surprised
INITIATIVE_SURPRISED = "surprised"  # Lost because this side alone was surprised

InitiativeValue = Union[int, str]


class EncounterPhase(str, Enum):
    """Phases of the encounter sequence."""

    NEW = "new"
    AWARENESS_DETERMINED = "awareness-determined"
    SURPRISE_AND_DISTANCE_SET = "surprise-and-distance-set"
    INITIATIVE_ROLLED = "initiative-rolled"


class InitiativeWinner(str, Enum):
    """Which side acts first."""

    NPCS = "npcs"
    PLAYERS = "players"
    TIE = "tie"


@dataclass(frozen=True)
class Awareness:
    """Which side(s) knew of the other before the encounter began."""

    npcs: bool
    players: bool

    def to_dict(self) -> dict[str, bool]:
        return {"npcs": self.npcs, "players": self.players}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Awareness":
        return cls(npcs=bool(data.get("npcs", False)), players=bool(data.get("players", False)))


@dataclass(frozen=True)
class SideSurpriseOutcome:
    """Surprise check for one side."""

    chance: int  # X-in-6 chance of being surprised
    roll: int
    surprised: bool

    def to_dict(self) -> dict[str, Any]:
        return {"chance": self.chance, "roll": self.roll, "surprised": self.surprised}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SideSurpriseOutcome":
        return cls(
            chance=int(data["chance"]),
            roll=int(data["roll"]),
            surprised=bool(data["surprised"]),
        )


@dataclass(frozen=True)
class Surprise:
    """
    Surprise outcome per side. A side is None if it could not be surprised
    (e.g. it was already aware of the other).
    """

    npcs: Optional[SideSurpriseOutcome]
    players: Optional[SideSurpriseOutcome]

    def is_surprised(self, side: EncounterSide) -> bool:
        outcome = self.npcs if side == EncounterSide.NPCS else self.players
        return outcome is not None and outcome.surprised

    def to_dict(self) -> dict[str, Any]:
        return {
            "npcs": self.npcs.to_dict() if self.npcs else None,
            "players": self.players.to_dict() if self.players else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Surprise":
        npcs = data.get("npcs")
        players = data.get("players")
        return cls(
            npcs=SideSurpriseOutcome.from_dict(npcs) if npcs else None,
            players=SideSurpriseOutcome.from_dict(players) if players else None,
        )


@dataclass(frozen=True)
class DistanceRange:
    """Possible encounter distances, in feet."""

    min: int
    max: int

    def to_dict(self) -> dict[str, int]:
        return {"min": self.min, "max": self.max}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DistanceRange":
        return cls(min=int(data["min"]), max=int(data["max"]))


@dataclass(frozen=True)
class Initiative:
    """
    Initiative result per side: a number, or INITIATIVE_AUTOMATIC /
    INITIATIVE_SURPRISED when only one side was surprised.
    """

    npcs: InitiativeValue
    players: InitiativeValue

    def to_dict(self) -> dict[str, InitiativeValue]:
        return {"npcs": self.npcs, "players": self.players}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Initiative":
        """
        Raises:
            ValueError: Unless both values are rolls, or one side won
                automatically and the other was surprised
        """
        npcs, players = data["npcs"], data["players"]
        rolled = all(isinstance(v, int) and not isinstance(v, bool) for v in (npcs, players))
        automatic = {npcs, players} == {INITIATIVE_AUTOMATIC, INITIATIVE_SURPRISED}
        if not (rolled or automatic):
            raise ValueError(f"Invalid initiative: npcs={npcs!r}, players={players!r}")
        return cls(npcs=npcs, players=players)


@dataclass(frozen=True)
class EncounterSnapshot:
    """Immutable view of an encounter, including its derived phase."""

    environment: EncounterEnvironment
    timestamp: GameDateTime
    phase: EncounterPhase
    awareness: Optional[Awareness] = None
    surprise: Optional[Surprise] = None
    distance: Optional[int] = None
    distance_range: Optional[DistanceRange] = None
    initiative: Optional[Initiative] = None


class Encounter(Observable):
    """
    A single encounter, resolved phase by phase by calling its mutators in
    order: set_awareness(), roll_surprise(), roll_initiative().

    NPC rolls are made with the injected dice roller; player rolls are made at
    the table and passed in.
    """

    def __init__(
        self,
        environment: Union[EncounterEnvironment, str] = EncounterEnvironment.DUNGEON,
        timestamp: Optional[GameDateTime] = None,
        dice: Optional[DiceRoller] = None,
    ):
        """
        Initialize the encounter.

        Args:
            environment: Where the encounter takes place (dungeon or outdoors)
            timestamp: In-game time of the encounter. All encounters last one turn.
            dice: Dice roller for NPC and distance rolls
        """
        super().__init__()
        self._environment = EncounterEnvironment(environment)
        self._timestamp = timestamp or DEFAULT_DATE_TIME
        self.dice = dice or DiceRoller()

        self._awareness: Optional[Awareness] = None
        self._surprise: Optional[Surprise] = None
        self._distance: Optional[int] = None
        self._distance_range: Optional[DistanceRange] = None
        self._initiative: Optional[Initiative] = None

    # =========================================================================
    # DERIVED STATE
    # =========================================================================

    @property
    def environment(self) -> EncounterEnvironment:
        return self._environment

    @property
    def timestamp(self) -> GameDateTime:
        """In-game time at which the encounter occurred."""
        return self._timestamp

    @property
    def awareness(self) -> Optional[Awareness]:
        return self._awareness

    @property
    def surprise(self) -> Optional[Surprise]:
        return self._surprise

    @property
    def distance(self) -> Optional[int]:
        """Distance at which the encounter begins, in feet."""
        return self._distance

    @property
    def distance_range(self) -> Optional[DistanceRange]:
        return self._distance_range

    @property
    def initiative(self) -> Optional[Initiative]:
        return self._initiative

    @property
    def phase(self) -> EncounterPhase:
        if self._awareness is None:
            return EncounterPhase.NEW
        elif self._surprise is None:
            return EncounterPhase.AWARENESS_DETERMINED
        elif self._initiative is None:
            return EncounterPhase.SURPRISE_AND_DISTANCE_SET
        return EncounterPhase.INITIATIVE_ROLLED

    @property
    def only_surprised_side(self) -> Optional[EncounterSide]:
        """
        The side that is surprised if exactly one is, else None (neither or
        both surprised, or surprise not yet rolled).
        """
        if self._surprise is None:
            return None

        npcs_surprised = self._surprise.is_surprised(EncounterSide.NPCS)
        players_surprised = self._surprise.is_surprised(EncounterSide.PLAYERS)
        if npcs_surprised and not players_surprised:
            return EncounterSide.NPCS
        elif players_surprised and not npcs_surprised:
            return EncounterSide.PLAYERS
        return None

    @property
    def initiative_winner(self) -> Optional[InitiativeWinner]:
        """The side that won initiative, TIE, or None if not yet rolled."""
        initiative = self._initiative
        if initiative is None:
            return None

        if initiative.npcs == INITIATIVE_AUTOMATIC:
            return InitiativeWinner.NPCS
        elif initiative.players == INITIATIVE_AUTOMATIC:
            return InitiativeWinner.PLAYERS
        elif initiative.npcs > initiative.players:
            return InitiativeWinner.NPCS
        elif initiative.players > initiative.npcs:
            return InitiativeWinner.PLAYERS
        return InitiativeWinner.TIE

    def create_snapshot(self) -> EncounterSnapshot:
        """Create an immutable snapshot of the encounter's current state."""
        return EncounterSnapshot(
            environment=self._environment,
            timestamp=self._timestamp,
            phase=self.phase,
            awareness=self._awareness,
            surprise=self._surprise,
            distance=self._distance,
            distance_range=self._distance_range,
            initiative=self._initiative,
        )

    # =========================================================================
    # ENCOUNTER SEQUENCE
    # =========================================================================

    def set_awareness(self, npcs: bool, players: bool) -> None:
        """
        Record which side(s) are already aware of the other.

        Any later results are discarded. If both sides are aware, surprise
        and distance are resolved immediately.
        """
        with self._mutation():
            self._clear_after(EncounterPhase.NEW)
            self._awareness = Awareness(npcs=npcs, players=players)
            logger.debug(f"Encounter awareness set: npcs={npcs}, players={players}")

            if npcs and players:
                # Player roll is irrelevant: neither side can be surprised
                self.roll_surprise(0)

    def roll_surprise(
        self,
        player_roll: int,
        surprise_chance: Optional[Mapping[Union[EncounterSide, str], int]] = None,
    ) -> None:
        """
        Determine surprise for each unaware side, then roll encounter distance.

        The NPC surprise roll is made with the dice roller; the players' d6
        roll is passed in. If exactly one side ends up surprised, initiative is
        resolved immediately.

        Args:
            player_roll: The d6 result of the players' surprise roll
            surprise_chance: X-in-6 chance per side (default 2-in-6 for each)

        Raises:
            ValueError: If awareness has not been determined
        """
        if self._awareness is None:
            raise ValueError("Awareness must be determined before rolling surprise")

        chances = {
            EncounterSide.NPCS: EncounterRules.DEFAULT_SURPRISE_CHANCE,
            EncounterSide.PLAYERS: EncounterRules.DEFAULT_SURPRISE_CHANCE,
        }
        for side, chance in (surprise_chance or {}).items():
            chances[EncounterSide(side)] = chance

        with self._mutation():
            self._clear_after(EncounterPhase.AWARENESS_DETERMINED)

            npc_outcome = None
            if not self._awareness.npcs:
                check = roll_check(self.dice, chances[EncounterSide.NPCS], reason="npc surprise")
                npc_outcome = SideSurpriseOutcome(
                    chance=chances[EncounterSide.NPCS],
                    roll=check.roll,
                    surprised=check.meets_target,
                )

            player_outcome = None
            if not self._awareness.players:
                check = resolve_check_result(chances[EncounterSide.PLAYERS], player_roll)
                player_outcome = SideSurpriseOutcome(
                    chance=chances[EncounterSide.PLAYERS],
                    roll=check.roll,
                    surprised=check.meets_target,
                )

            self._surprise = Surprise(npcs=npc_outcome, players=player_outcome)
            self._roll_encounter_distance()

            if self.only_surprised_side is not None:
                # Player roll is irrelevant: the surprised side loses
                self.roll_initiative(0)

    def roll_initiative(self, player_roll: int, npc_initiative_modifier: int = 0) -> None:
        """
        Record the players' initiative roll and roll NPC initiative.

        If exactly one side is surprised, the other wins automatically and no
        rolls are used.

        Args:
            player_roll: The players' d6 initiative result
            npc_initiative_modifier: Added to the NPCs' d6 roll

        Raises:
            ValueError: If surprise has not been determined
        """
        if self._surprise is None:
            raise ValueError("Surprise must be determined before rolling initiative")

        with self._mutation():
            only_surprised_side = self.only_surprised_side
            if only_surprised_side == EncounterSide.NPCS:
                self._initiative = Initiative(
                    npcs=INITIATIVE_SURPRISED, players=INITIATIVE_AUTOMATIC
                )
            elif only_surprised_side == EncounterSide.PLAYERS:
                self._initiative = Initiative(
                    npcs=INITIATIVE_AUTOMATIC, players=INITIATIVE_SURPRISED
                )
            else:
                npc_roll = self.dice.roll(EncounterRules.INITIATIVE_DIE, "npc initiative")
                self._initiative = Initiative(
                    npcs=npc_roll.total + npc_initiative_modifier,
                    players=player_roll,
                )
            logger.debug(f"Encounter initiative: {self._initiative}")

    def reset_to_phase(self, phase: Union[EncounterPhase, str]) -> None:
        """
        Discard every result belonging to phases after `phase`, so that step
        can be rolled again.
        """
        phase = EncounterPhase(phase)
        with self._mutation():
            if not self._clear_after(phase):
                self._mark_unchanged()

    def _clear_after(self, phase: EncounterPhase) -> bool:
        """Clear the results of phases after `phase`. Returns True if anything was cleared."""
        before = self.create_snapshot()

        if phase == EncounterPhase.NEW:
            self._awareness = None
        if phase in (EncounterPhase.NEW, EncounterPhase.AWARENESS_DETERMINED):
            self._surprise = None
            self._distance = None
            self._distance_range = None
        if phase != EncounterPhase.INITIATIVE_ROLLED:
            self._initiative = None

        return self.create_snapshot() != before

    def _roll_encounter_distance(self) -> None:
        """Roll encounter distance for the environment and surprise status."""
        both_surprised = self._surprise is not None and (
            self._surprise.is_surprised(EncounterSide.NPCS)
            and self._surprise.is_surprised(EncounterSide.PLAYERS)
        )
        roll = self.dice.roll(
            distance_notation(self._environment, both_surprised), "encounter distance"
        )
        self._distance = roll.total
        self._distance_range = DistanceRange(min=roll.min_total, max=roll.max_total)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Serialize the encounter. The phase is not stored; it is derived on load."""
        return {
            "environment": self._environment.value,
            "timestamp": to_timestamp(self._timestamp),
            "awareness": self._awareness.to_dict() if self._awareness else None,
            "surprise": self._surprise.to_dict() if self._surprise else None,
            "distance": self._distance,
            "distance_range": self._distance_range.to_dict() if self._distance_range else None,
            "initiative": self._initiative.to_dict() if self._initiative else None,
        }

    def load_dict(self, state: Mapping[str, Any]) -> None:
        """
        Load the encounter in place from a serialized state.

        A missing environment defaults to dungeon; missing results are unset.

        Raises:
            ValueError: If the data is malformed or its phases are out of order
        """
        timestamp = state.get("timestamp")
        if not isinstance(timestamp, int) or timestamp < 0:
            raise ValueError(f"Invalid encounter timestamp: {timestamp!r}")

        try:
            environment = EncounterEnvironment(state.get("environment") or "dungeon")
            awareness = Awareness.from_dict(state["awareness"]) if state.get("awareness") else None
            surprise = Surprise.from_dict(state["surprise"]) if state.get("surprise") else None
            distance_range = (
                DistanceRange.from_dict(state["distance_range"])
                if state.get("distance_range")
                else None
            )
            initiative = (
                Initiative.from_dict(state["initiative"]) if state.get("initiative") else None
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid encounter data: {e}") from e

        distance = state.get("distance")
        if surprise is not None and awareness is None:
            raise ValueError("Encounter has surprise results but no awareness")
        if initiative is not None and surprise is None:
            raise ValueError("Encounter has initiative results but no surprise")

        with self._mutation():
            self._environment = environment
            self._timestamp = from_timestamp(timestamp)
            self._awareness = awareness
            self._surprise = surprise
            self._distance = distance
            self._distance_range = distance_range
            self._initiative = initiative

    @classmethod
    def from_dict(cls, state: Mapping[str, Any], dice: Optional[DiceRoller] = None) -> "Encounter":
        """Create an encounter from a serialized state."""
        encounter = cls(dice=dice)
        encounter.load_dict(state)
        return encounter
