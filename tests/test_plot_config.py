"""Tests for plot configuration and theme tables."""

from __future__ import annotations

import json

import pytest

from geoviz.config import (
    THEMES,
    ArrayType,
    Mode,
    PlotConfig,
    ResistivityOptions,
    VLFOptions,
    load_config,
    save_config,
)
from geoviz.core.errors import ConfigError


def test_defaults_and_palettes() -> None:
    """Default config is VLF with the first theme."""
    config = PlotConfig()

    assert config.mode == Mode.VLF
    assert config.palette == ("#0ea5e9", "#f97316")
    assert config.format_hint == "Station, InPhase, Quad"
    assert all(len(theme.colors) == 5 for theme in THEMES[Mode.RESISTIVITY])


def test_string_values_are_coerced_to_enums() -> None:
    """Mode and array type accept their string values."""
    config = PlotConfig(mode="Resistivity", array_type="other")

    assert config.mode is Mode.RESISTIVITY
    assert config.array_type is ArrayType.OTHER


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mode": "magnetics"},
        {"array_type": "dipole"},
        {"theme_index": 3},
        {"theme_index": -1},
        {"theme_index": True},
        {"custom_title": 5},
        {"show_derivative_filter": "false"},
        {"dark_mode": 1},
    ],
)
def test_invalid_values_raise_config_error(kwargs: dict) -> None:
    """Values outside the allowed options are rejected."""
    with pytest.raises(ConfigError):
        PlotConfig(**kwargs)


def test_transform_options_variant_follows_mode() -> None:
    """VLF mode gives ``VLFOptions``, resistivity gives ``ResistivityOptions``."""
    vlf = PlotConfig(show_derivative_filter=True).transform_options(False)
    res = PlotConfig(mode="resistivity", array_type="other").transform_options()

    assert isinstance(vlf, VLFOptions)
    assert vlf.derivative_enabled is False
    assert res == ResistivityOptions(array_type=ArrayType.OTHER)


def test_save_and_load_round_trip(tmp_path) -> None:
    """Config written to JSON loads back equal."""
    config = PlotConfig(mode="resistivity", theme_index=1, custom_title="Profile 3")
    path = tmp_path / "cfg" / "config.json"
    save_config(config, path)

    assert json.loads(path.read_text(encoding="utf-8"))["arrayType"] == "wenner"
    assert load_config(path) == config


def test_load_config_ignores_unknown_keys_and_blank_title(tmp_path) -> None:
    """Unknown keys are dropped; empty title means no title."""
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"mode": "vlf", "customTitle": "", "legacyKey": 1}),
        encoding="utf-8",
    )

    assert load_config(path) == PlotConfig()


def test_load_config_missing_file_and_bad_json(tmp_path) -> None:
    """Missing file gives defaults; malformed JSON raises ``ConfigError``."""
    assert load_config(tmp_path / "absent.json") == PlotConfig()
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(bad)
    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(listing)
