from __future__ import annotations

import logging
from pathlib import Path

import pytest

from smaller_hungrier.configuration import (
    Configuration,
    ConfigurationLoader,
    load_configuration,
)
from smaller_hungrier.errors import ConfigurationError, UnknownSourceError
from smaller_hungrier.host_api import Keys
from smaller_hungrier.metric_source import MetricSource
from smaller_hungrier.scale_range import Range
from tests.host_doubles import DummyPlayer, DummyTransaction


def test_scale_for_player_uses_food_by_default():
    config = Configuration()
    assert config.scale_for_player(DummyPlayer(food_level=20)) == pytest.approx(1.0)
    assert config.scale_for_player(DummyPlayer(food_level=0)) == pytest.approx(0.45)
    assert config.scale_for_player(DummyPlayer(food_level=10)) == pytest.approx(0.725)


def test_scale_for_transaction_skips_unrelated_changes():
    config = Configuration(source=MetricSource.HEALTH, range=Range(1.0, 0.5))
    assert config.scale_for_transaction(DummyTransaction({Keys.FOOD_LEVEL: 3})) is None
    assert config.scale_for_transaction(DummyTransaction({Keys.HEALTH: 10.0})) == pytest.approx(0.75)


def test_from_mapping_without_source_defaults_to_food():
    config = Configuration.from_mapping({"range": {"low": 0.3, "high": 2}})
    assert config == Configuration(MetricSource.FOOD, Range(0.3, 2.0))


def test_from_mapping_rejects_scalar_range():
    with pytest.raises(ConfigurationError):
        Configuration.from_mapping({"range": 5})


def test_missing_file_loads_defaults(tmp_path: Path):
    loader = ConfigurationLoader(tmp_path / "smallerhungrier.conf")
    assert loader.load() == Configuration()


@pytest.mark.parametrize(
    "config",
    [
        Configuration(),
        Configuration(MetricSource.HEALTH, Range(low=1.6, high=0.25)),
        Configuration(MetricSource.FOOD, Range(low=-0.125, high=3.0)),
    ],
)
def test_save_then_load_round_trips(tmp_path: Path, config: Configuration):
    loader = ConfigurationLoader(tmp_path / "nested" / "smallerhungrier.conf")
    loader.save(config)
    assert loader.load() == config


def test_rendered_file_is_commented(tmp_path: Path):
    loader = ConfigurationLoader(tmp_path / "smallerhungrier.conf")
    text = loader.render(Configuration(MetricSource.HEALTH))
    assert 'source = "health"' in text
    assert "# Defines the source which will be used to calculate the scale." in text
    assert "# You can also set the low value higher than the high value" in text
    assert "    low = 0.45" in text
    assert "    high = 1.0" in text


def test_load_accepts_hand_written_hocon(tmp_path: Path):
    path = tmp_path / "smallerhungrier.conf"
    path.write_text(
        "// tuned for the event server\n"
        "source = HEALTH\n"
        "range {\n"
        "  low = 1.2  # bigger when hurt\n"
        "  high: 0.8\n"
        "}\n",
        encoding="utf-8",
    )
    assert ConfigurationLoader(path).load() == Configuration(MetricSource.HEALTH, Range(1.2, 0.8))


def test_load_unknown_source_raises(tmp_path: Path):
    path = tmp_path / "smallerhungrier.conf"
    path.write_text('source = "mana"\n', encoding="utf-8")
    with pytest.raises(UnknownSourceError, match="mana"):
        ConfigurationLoader(path).load()


def test_load_unparseable_file_raises(tmp_path: Path):
    path = tmp_path / "smallerhungrier.conf"
    path.write_text("range { low = 0.2\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        ConfigurationLoader(path).load()


def test_load_configuration_writes_defaults_on_first_run(tmp_path: Path):
    path = tmp_path / "config" / "smallerhungrier.conf"
    config = load_configuration(ConfigurationLoader(path), logging.getLogger("test-config-first-run"))
    assert config == Configuration()
    assert path.exists()
    assert ConfigurationLoader(path).load() == Configuration()


def test_load_configuration_adds_missing_source_key(tmp_path: Path):
    path = tmp_path / "smallerhungrier.conf"
    path.write_text("range {\n    low = 1.0\n    high = 0.5\n}\n", encoding="utf-8")
    config = load_configuration(ConfigurationLoader(path), logging.getLogger("test-config-merge"))
    assert config == Configuration(MetricSource.FOOD, Range(1.0, 0.5))
    assert 'source = "food"' in path.read_text(encoding="utf-8")


def test_load_configuration_falls_back_without_clobbering(tmp_path: Path, caplog):
    path = tmp_path / "smallerhungrier.conf"
    user_text = 'source = "mana"\nrange { low = 2.0, high = 1.0 }\n'
    path.write_text(user_text, encoding="utf-8")
    caplog.set_level(logging.ERROR)

    config = load_configuration(ConfigurationLoader(path), logging.getLogger("test-config-fallback"))

    assert config == Configuration()
    assert path.read_text(encoding="utf-8") == user_text
    assert "Failed to load configuration, loading defaults instead" in caplog.text
    assert "mana" in caplog.text


def test_load_configuration_falls_back_on_io_error(tmp_path: Path, caplog):
    class BrokenLoader(ConfigurationLoader):
        def load(self) -> Configuration:
            raise PermissionError("denied")

    caplog.set_level(logging.ERROR)
    loader = BrokenLoader(tmp_path / "smallerhungrier.conf")
    config = load_configuration(loader, logging.getLogger("test-config-io"))
    assert config == Configuration()
    assert "denied" in caplog.text


def test_load_configuration_falls_back_on_non_utf8_file(tmp_path: Path, caplog):
    path = tmp_path / "smallerhungrier.conf"
    user_bytes = b'source = "f\xe9od"\n'
    path.write_bytes(user_bytes)
    caplog.set_level(logging.ERROR)

    config = load_configuration(ConfigurationLoader(path), logging.getLogger("test-config-encoding"))

    assert config == Configuration()
    assert path.read_bytes() == user_bytes
    assert "Failed to load configuration, loading defaults instead" in caplog.text


def test_load_non_utf8_file_raises_configuration_error(tmp_path: Path):
    path = tmp_path / "smallerhungrier.conf"
    path.write_bytes(b"range { low = 0.5 }\n# caf\xe9\n")
    with pytest.raises(ConfigurationError, match="Failed to read"):
        ConfigurationLoader(path).load()


def test_load_resolves_includes_next_to_config_file(tmp_path: Path, monkeypatch):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "shared-range.conf").write_text("range { low = 1.4, high = 0.6 }\n", encoding="utf-8")
    path = config_dir / "smallerhungrier.conf"
    path.write_text('include "shared-range.conf"\nsource = "health"\n', encoding="utf-8")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)

    assert ConfigurationLoader(path).load() == Configuration(MetricSource.HEALTH, Range(1.4, 0.6))
