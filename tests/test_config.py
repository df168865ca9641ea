"""
Tests for configuration loading (dolmen_chronicle/config.py).
"""

import json
import logging

import pytest

from dolmen_chronicle.config import ChronicleConfig, load_config, setup_logging
from dolmen_chronicle.data_models import CheckFrequencyType, WanderingMonsterConfig
from dolmen_chronicle.date_time import DEFAULT_DATE_TIME, GameDateTime


class TestChronicleConfig:
    """Tests for ChronicleConfig."""

    def test_defaults(self):
        config = ChronicleConfig()

        assert config.default_site_name == "Unknown Dungeon"
        assert config.default_start_time == DEFAULT_DATE_TIME
        assert config.wandering_monsters == WanderingMonsterConfig(
            chance=1, check_frequency=2, check_frequency_type=CheckFrequencyType.INTERVAL
        )
        assert config.dice_seed is None
        assert config.verbose is False

    def test_invalid_start_time(self):
        with pytest.raises(ValueError):
            ChronicleConfig(default_start_time=GameDateTime(1089, 2, 30, 12, 1))

    def test_seeded_dice_roller(self):
        first = ChronicleConfig(dice_seed=5).create_dice_roller()
        second = ChronicleConfig(dice_seed=5).create_dice_roller()

        assert first is not second
        assert [first.roll_d6().total for _ in range(5)] == [
            second.roll_d6().total for _ in range(5)
        ]

    def test_from_dict_with_month_name(self):
        config = ChronicleConfig.from_dict(
            {
                "default_site_name": "The Spectral Manse",
                "default_start_time": {"year": 1089, "month": "Haggryme", "day": 12, "hour": 9},
                "wandering_monsters": {"chance": 2, "check_frequency": 3},
                "dice_seed": 42,
                "verbose": True,
            }
        )

        assert config.default_site_name == "The Spectral Manse"
        assert config.default_start_time == GameDateTime(1089, 3, 12, 9, 1)
        assert config.wandering_monsters == WanderingMonsterConfig(chance=2, check_frequency=3)
        assert config.dice_seed == 42
        assert config.verbose is True

    def test_from_dict_empty(self):
        assert ChronicleConfig.from_dict({}) == ChronicleConfig()

    def test_round_trip(self):
        config = ChronicleConfig(
            default_site_name="Hag's Addle",
            default_start_time=GameDateTime(1090, 7, 31, 23, 6, round=12),
            wandering_monsters=WanderingMonsterConfig(
                chance=3, check_frequency=10, check_frequency_type=CheckFrequencyType.PROBABILITY
            ),
            dice_seed=7,
        )
        assert ChronicleConfig.from_dict(config.to_dict()) == config

    @pytest.mark.parametrize(
        "data",
        [
            {"default_start_time": {"month": "Smarch"}},
            {"default_start_time": {"month": 4, "day": 30}},
            {"default_start_time": {"hour": "noon"}},
            {"wandering_monsters": {"chance": 0}},
            {"wandering_monsters": {"check_frequency_type": "hourly"}},
            {"dice_seed": "lucky"},
        ],
    )
    def test_from_dict_invalid(self, data):
        with pytest.raises(ValueError):
            ChronicleConfig.from_dict(data)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.json") == ChronicleConfig()

    def test_load_file(self, tmp_path):
        path = tmp_path / "chronicle.json"
        path.write_text(json.dumps({"default_site_name": "Nodding Castle"}), encoding="utf-8")

        config = load_config(str(path))

        assert config.default_site_name == "Nodding Castle"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "chronicle.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "chronicle.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(path)


class TestSetupLogging:
    """Tests for setup_logging()."""

    @pytest.mark.parametrize("verbose,level", [(True, logging.DEBUG), (False, logging.INFO)])
    def test_level(self, monkeypatch, verbose, level):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        setup_logging(verbose)

        assert calls[0]["level"] == level
        assert calls[0]["format"] == "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
