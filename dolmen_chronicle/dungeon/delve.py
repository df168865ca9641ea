"""
Delve: a dungeon exploration session, measured in 10-minute turns.

Each turn of a delve:
1) Light sources burn down; any that run out are logged
2) Wandering monster check as scheduled (standard: every 2 turns, 1-in-6)
3) An encounter is started if a wandering monster turns up

Moving the clock backwards rewinds the event log with it, so a turn advanced
by mistake can be undone.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union
import json
import logging
import uuid

from dolmen_chronicle.chronicle.event_log import EventLog
from dolmen_chronicle.chronicle.iid_sequence import IidGenerator
from dolmen_chronicle.chronicle.observable import Observable
from dolmen_chronicle.config import ChronicleConfig
from dolmen_chronicle.data_models import (
    CheckFrequencyType,
    DiceRoller,
    EncounterEnvironment,
    LightSourceType,
    STANDARD_LIGHT_DURATIONS,
    WanderingMonsterConfig,
)
from dolmen_chronicle.date_time import (
    DEFAULT_DATE_TIME,
    DateTimeUnit,
    GameDateTime,
    add_turns,
    difference,
    from_timestamp,
    to_timestamp,
)
from dolmen_chronicle.encounter.encounter import Encounter


logger = logging.getLogger(__name__)


LIGHT_SOURCE_SEQUENCE = "light-source"
ROUTINE_CHECK = "routine"


# =============================================================================
# LIGHT SOURCES
# =============================================================================


@dataclass(frozen=True)
class LightSource:
    """A light source carried during the delve."""

    iid: int
    carried_by: str
    type: str  # "torch", "candle", "lantern" or any custom light
    maximum_duration: int  # Turns
    lit_at: GameDateTime

    def to_dict(self) -> dict[str, Any]:
        return {
            "iid": self.iid,
            "carried_by": self.carried_by,
            "type": self.type,
            "maximum_duration": self.maximum_duration,
            "lit_at": to_timestamp(self.lit_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LightSource":
        lit_at = data.get("lit_at")
        if not isinstance(lit_at, int) or lit_at < 0:
            raise ValueError(f"Invalid light source lit_at: {lit_at!r}")
        try:
            return cls(
                iid=int(data["iid"]),
                carried_by=str(data["carried_by"]),
                type=str(data["type"]),
                maximum_duration=int(data["maximum_duration"]),
                lit_at=from_timestamp(lit_at),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid light source data: {e}") from e


@dataclass(frozen=True)
class ActiveLightSource:
    """A light source that is still burning, with its remaining time."""

    iid: int
    carried_by: str
    type: str
    maximum_duration: int
    turns_remaining: int


def light_type_name(light_type: Union[LightSourceType, str]) -> str:
    if isinstance(light_type, LightSourceType):
        return light_type.value
    return str(light_type)


def standard_light_duration(light_type: Union[LightSourceType, str]) -> Optional[int]:
    """Get the burn time in turns of a standard light source, or None."""
    try:
        return STANDARD_LIGHT_DURATIONS[LightSourceType(light_type_name(light_type).lower())]
    except ValueError:
        return None


# =============================================================================
# DELVE
# =============================================================================


class Delve(Observable):
    """
    A single dungeon delve.

    The clock starts at `start_time` on turn 1; `end_time` is the start of the
    current turn. Light sources, encounters and the event log are all
    stamped with game time from this clock.
    """

    activity_type = "delve"

    def __init__(
        self,
        site_name: str = "Unknown Dungeon",
        start_time: Optional[GameDateTime] = None,
        dice: Optional[DiceRoller] = None,
        wandering_monster_config: Optional[WanderingMonsterConfig] = None,
        delve_id: Optional[str] = None,
    ):
        """
        Initialize the delve.

        Args:
            site_name: Name of the dungeon being explored
            start_time: Game time of the first turn
            dice: Dice roller for wandering monster checks and encounters
            wandering_monster_config: Check schedule (standard 1-in-6 every 2 turns)
            delve_id: Identifier to use instead of a fresh UUID
        """
        super().__init__()
        self.id = delve_id or str(uuid.uuid4())
        self.dice = dice or DiceRoller()

        self._site_name = site_name
        self._start_time = start_time or DEFAULT_DATE_TIME
        self._turns = 1

        config = wandering_monster_config or WanderingMonsterConfig()
        config.validate()
        self._wandering_monster_config = config

        self._iids = IidGenerator()
        self._light_sources: dict[int, LightSource] = {}
        self._encounters: list[Encounter] = []
        self.event_log = EventLog()
        self.event_log.subscribe(self._on_part_changed)

    def _on_part_changed(self, part: Observable) -> None:
        """Announce a change made directly to an encounter or the event log."""
        if self._mutation_depth > 0:
            # Our own mutation notifies when it completes
            return
        with self._mutation():
            logger.debug(f"Delve '{self._site_name}' changed via {type(part).__name__}")

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def site_name(self) -> str:
        return self._site_name

    @site_name.setter
    def site_name(self, value: str) -> None:
        with self._mutation():
            self._site_name = value

    @property
    def title(self) -> str:
        return self._site_name

    @property
    def start_time(self) -> GameDateTime:
        return self._start_time

    @property
    def turns(self) -> int:
        """Number of the current turn, starting at 1."""
        return self._turns

    @property
    def end_time(self) -> GameDateTime:
        """Game time at the start of the current turn."""
        return add_turns(self._start_time, self._turns - 1)

    @property
    def wandering_monster_config(self) -> WanderingMonsterConfig:
        return self._wandering_monster_config

    @property
    def light_sources(self) -> list[LightSource]:
        """Every light source added to the delve, lit or not, in IID order."""
        return [self._light_sources[iid] for iid in sorted(self._light_sources)]

    @property
    def active_light_sources(self) -> list[ActiveLightSource]:
        """Light sources still burning at the current turn, in IID order."""
        active = []
        for light in self.light_sources:
            remaining = self._turns_remaining(light)
            if 0 < remaining <= light.maximum_duration:
                active.append(
                    ActiveLightSource(
                        iid=light.iid,
                        carried_by=light.carried_by,
                        type=light.type,
                        maximum_duration=light.maximum_duration,
                        turns_remaining=remaining,
                    )
                )
        return active

    @property
    def encounters(self) -> list[Encounter]:
        return list(self._encounters)

    @property
    def active_encounter(self) -> Optional[Encounter]:
        """The encounter taking place on the current turn, if any."""
        now = to_timestamp(self.end_time)
        for encounter in self._encounters:
            if to_timestamp(encounter.timestamp) == now:
                return encounter
        return None

    # =========================================================================
    # TURN SEQUENCE
    # =========================================================================

    def advance_turn(self, delta: int = 1) -> None:
        """
        Move the delve clock by `delta` turns (negative to go back).

        Every turn moved forward is processed in order: light sources burn
        down, then a wandering monster check is made if one is due. Moving
        back rewinds the event log to the new current turn. The clock never
        goes before turn 1.
        """
        with self._mutation():
            target = max(1, self._turns + delta)
            if target == self._turns:
                self._mark_unchanged()
                return

            if target > self._turns:
                while self._turns < target:
                    self._turns += 1
                    self._burn_light_sources()
                    if self._is_check_due():
                        self.check_for_wandering_monsters()
            else:
                self._turns = target
                self.event_log.rewind_to(self.end_time)

            logger.info(f"Delve '{self._site_name}' now on turn {self._turns} ({self.end_time})")

    def _burn_light_sources(self) -> None:
        """Log every light source that runs out on the current turn."""
        for light in self.light_sources:
            if self._turns_remaining(light) == 0:
                description = f"{light.type} carried by {light.carried_by} went out."
                self.event_log.add_event(description, self.end_time)
                logger.info(description)

    def _turns_remaining(self, light: LightSource) -> int:
        return light.maximum_duration - difference(
            light.lit_at, self.end_time, DateTimeUnit.TURN
        )

    def _is_check_due(self) -> bool:
        config = self._wandering_monster_config
        if config.check_frequency_type == CheckFrequencyType.PROBABILITY:
            roll = self.dice.roll_percentile("wandering monster check due")
            return roll.total <= config.check_frequency
        return self._turns % config.check_frequency == 0

    # =========================================================================
    # WANDERING MONSTERS
    # =========================================================================

    def check_for_wandering_monsters(self, reason: str = ROUTINE_CHECK) -> Optional[Encounter]:
        """
        Check for a wandering monster on the current turn.

        A roll of 1d6 at or under the configured chance means a monster turns
        up, and an encounter is started on this turn. Routine misses are not
        logged; misses on checks made for any other reason are.

        Args:
            reason: Why the check is made (e.g. "routine", "noise")

        Returns:
            The active encounter if a monster turned up, None otherwise
        """
        with self._mutation():
            roll = self.dice.roll_d6(1, f"wandering monster ({reason})")

            if roll.total <= self._wandering_monster_config.chance:
                description = f"Wandering monster check ({reason}): ENCOUNTER!"
                self.event_log.add_event(description, self.end_time)
                logger.info(description)
                return self.start_encounter()

            if reason != ROUTINE_CHECK:
                self.event_log.add_event(
                    f"Wandering monster check ({reason}): none", self.end_time
                )
            else:
                self._mark_unchanged()
            logger.debug(f"Wandering monster check ({reason}): none (rolled {roll.total})")
            return None

    def start_encounter(
        self, environment: Union[EncounterEnvironment, str] = EncounterEnvironment.DUNGEON
    ) -> Encounter:
        """
        Get the encounter on the current turn, starting one if there is none.

        Encounters last one turn, so there is at most one per turn.
        """
        with self._mutation():
            encounter = self.active_encounter
            if encounter is not None:
                self._mark_unchanged()
                return encounter

            encounter = Encounter(environment, self.end_time, dice=self.dice)
            encounter.subscribe(self._on_part_changed)
            self._encounters.append(encounter)
            logger.info(f"Encounter started in {self._site_name} at {self.end_time}")
            return encounter

    def set_wandering_monster_config(self, config: WanderingMonsterConfig) -> None:
        """
        Replace the wandering monster check schedule.

        Raises:
            ValueError: If the configuration is out of range
        """
        config.validate()
        with self._mutation():
            self._wandering_monster_config = config

    # =========================================================================
    # LIGHT SOURCE MANAGEMENT
    # =========================================================================

    def add_light_source(
        self,
        carried_by: str,
        light_type: Union[LightSourceType, str],
        maximum_duration: Optional[int] = None,
    ) -> LightSource:
        """
        Light a new light source on the current turn.

        Args:
            carried_by: Who is carrying it
            light_type: Kind of light (torch, candle, lantern or custom)
            maximum_duration: Burn time in turns. Defaults to the standard
                duration for torches, candles and lanterns.

        Raises:
            ValueError: If no duration is given for a non-standard light
        """
        type_name = light_type_name(light_type)
        if maximum_duration is None:
            maximum_duration = standard_light_duration(type_name)
            if maximum_duration is None:
                raise ValueError(f"No standard duration for light source '{type_name}'")
        if maximum_duration < 1:
            raise ValueError(f"Light source duration must be at least 1 turn: {maximum_duration}")

        with self._mutation():
            light = LightSource(
                iid=self._iids.next(LIGHT_SOURCE_SEQUENCE),
                carried_by=carried_by,
                type=type_name,
                maximum_duration=maximum_duration,
                lit_at=self.end_time,
            )
            self._light_sources[light.iid] = light
        logger.debug(f"Light source {light.iid} ({type_name}) lit by {carried_by}")
        return light

    def delete_light_source(self, iid: int) -> bool:
        """Remove a light source. Returns False if there was none with that IID."""
        if iid not in self._light_sources:
            return False
        with self._mutation():
            del self._light_sources[iid]
        return True

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Serialize the delve, with every game time as a timestamp."""
        return {
            "id": self.id,
            "site_name": self._site_name,
            "start_time": to_timestamp(self._start_time),
            "turns": self._turns,
            "iids": self._iids.to_dict(),
            "light_sources": [light.to_dict() for light in self.light_sources],
            "wandering_monster_config": self._wandering_monster_config.to_dict(),
            "encounters": [encounter.to_dict() for encounter in self._encounters],
            "event_log": self.event_log.to_dict(),
        }

    def load_dict(self, state: Mapping[str, Any]) -> None:
        """
        Load the delve in place from a serialized state.

        Subscriptions to this delve survive the load. Missing IID sequences,
        wandering monster configuration, encounters and event log fall back
        to their defaults.

        Raises:
            ValueError: If any part of the state is invalid
        """
        start_time = state.get("start_time")
        if not isinstance(start_time, int) or start_time < 0:
            raise ValueError(f"Invalid delve start_time: {start_time!r}")

        turns = state.get("turns", 1)
        if not isinstance(turns, int) or turns < 1:
            raise ValueError(f"Invalid delve turns: {turns!r}")

        config_data = state.get("wandering_monster_config")
        config = (
            WanderingMonsterConfig.from_dict(config_data)
            if config_data
            else WanderingMonsterConfig()
        )

        iids = IidGenerator()
        iids.load_dict(state.get("iids") or {})

        light_sources = {}
        for data in state.get("light_sources") or []:
            light = LightSource.from_dict(data)
            light_sources[light.iid] = light

        # Older states may lack the IID sequence; never reissue a loaded IID
        highest_iid = max(light_sources, default=0)
        if iids.peek(LIGHT_SOURCE_SEQUENCE) < highest_iid:
            iids.load_dict({**iids.to_dict(), LIGHT_SOURCE_SEQUENCE: highest_iid})

        encounters = [
            Encounter.from_dict(data, dice=self.dice) for data in state.get("encounters") or []
        ]

        with self._mutation():
            self.event_log.load_dict(state.get("event_log") or [])
            self.id = state.get("id") or self.id
            self._site_name = state.get("site_name", self._site_name)
            self._start_time = from_timestamp(start_time)
            self._turns = turns
            self._wandering_monster_config = config
            self._iids = iids
            self._light_sources = light_sources
            for encounter in self._encounters:
                encounter.unsubscribe(self._on_part_changed)
            for encounter in encounters:
                encounter.subscribe(self._on_part_changed)
            self._encounters = encounters

    @classmethod
    def from_dict(cls, state: Mapping[str, Any], dice: Optional[DiceRoller] = None) -> "Delve":
        """Create a delve from a serialized state."""
        delve = cls(dice=dice)
        delve.load_dict(state)
        return delve


def start_delve(
    site_name: Optional[str] = None,
    start_time: Optional[GameDateTime] = None,
    config: Optional[ChronicleConfig] = None,
    dice: Optional[DiceRoller] = None,
) -> Delve:
    """
    Start a new delve using configured defaults.

    Args:
        site_name: Dungeon name (defaults to the configured name)
        start_time: Game time of the first turn (defaults to the configured time)
        config: Chronicle configuration (defaults to ChronicleConfig())
        dice: Dice roller (defaults to one seeded from the configuration)
    """
    config = config or ChronicleConfig()
    delve = Delve(
        site_name=site_name or config.default_site_name,
        start_time=start_time or config.default_start_time,
        dice=dice or config.create_dice_roller(),
        wandering_monster_config=WanderingMonsterConfig.from_dict(
            config.wandering_monsters.to_dict()
        ),
    )
    logger.info(f"Started delve into {delve.site_name} at {delve.start_time}")
    return delve


def save_delve(delve: Delve, filepath: Path | str) -> Path:
    """Save a delve to a JSON file."""
    filepath = Path(filepath)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(delve.to_dict(), f, indent=2, ensure_ascii=False)

    logger.info(f"Saved delve to: {filepath}")
    return filepath


def load_delve(filepath: Path | str, dice: Optional[DiceRoller] = None) -> Delve:
    """
    Load a delve from a JSON file.

    Raises:
        FileNotFoundError: If there is no file at `filepath`
        ValueError: If the file does not hold a valid delve
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Save file not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid save file {filepath}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Save file {filepath} must hold a JSON object")

    delve = Delve.from_dict(data, dice=dice)
    logger.info(f"Loaded delve: {delve.site_name} ({delve.id})")
    return delve
