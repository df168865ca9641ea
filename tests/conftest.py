"""
Pytest fixtures for the Dolmen Chronicle test suite.

Provides reusable fixtures for dice, dates, encounters and delves.
"""

import pytest

from dolmen_chronicle.data_models import DiceRoller, WanderingMonsterConfig
from dolmen_chronicle.date_time import GameDateTime
from dolmen_chronicle.dungeon.delve import Delve
from dolmen_chronicle.encounter.encounter import Encounter
from tests.helpers import RecordingSubscriber, ScriptedDiceRoller


# =============================================================================
# DICE FIXTURES
# =============================================================================


@pytest.fixture
def seeded_dice():
    """Provide a seeded DiceRoller for reproducible tests."""
    return DiceRoller(seed=42)


@pytest.fixture
def scripted_dice():
    """Provide a DiceRoller that returns queued faces (see ScriptedDiceRoller.queue)."""
    return ScriptedDiceRoller()


# =============================================================================
# TIME AND DATE FIXTURES
# =============================================================================


@pytest.fixture
def midsummer():
    """Midday on the last day of Chysting, the longest month."""
    return GameDateTime(year=1089, month=7, day=31, hour=12, turn=1)


@pytest.fixture
def new_year():
    """Midday on the first day of 1089."""
    return GameDateTime(year=1089, month=1, day=1, hour=12, turn=1)


# =============================================================================
# CHRONICLE FIXTURES
# =============================================================================


@pytest.fixture
def subscriber():
    """A subscriber that records change notifications."""
    return RecordingSubscriber()


@pytest.fixture
def encounter(scripted_dice, new_year):
    """A new dungeon encounter using scripted dice."""
    return Encounter(timestamp=new_year, dice=scripted_dice)


@pytest.fixture
def delve(scripted_dice, new_year):
    """A delve on turn 1 with the standard check schedule and scripted dice."""
    return Delve(
        site_name="The Spectral Manse",
        start_time=new_year,
        dice=scripted_dice,
        wandering_monster_config=WanderingMonsterConfig(),
        delve_id="test-delve",
    )
