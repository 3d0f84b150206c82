"""Plot configuration, option enums and theme palettes."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

from loguru import logger

from geoviz.core.errors import ConfigError


class Mode(str, Enum):
    """Survey mode."""

    VLF = "vlf"
    RESISTIVITY = "resistivity"


class ArrayType(str, Enum):
    """Electrode array geometry used for the geometric factor fallback."""

    WENNER = "wenner"
    OTHER = "other"


@dataclass(frozen=True)
class Theme:
    """Named colour palette."""

    name: str
    colors: tuple[str, ...]


THEMES: dict[Mode, tuple[Theme, ...]] = {
    Mode.VLF: (
        Theme("Ocean (Blue/Orange)", ("#0ea5e9", "#f97316")),
        Theme("Forest (Green/Gold)", ("#10b981", "#eab308")),
        Theme("Sunset (Purple/Red)", ("#8b5cf6", "#ef4444")),
    ),
    Mode.RESISTIVITY: (
        Theme(
            "Scientific (Rainbow)",
            ("#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6"),
        ),
        Theme("Cool (Blues)", ("#082f49", "#0369a1", "#0ea5e9", "#38bdf8", "#7dd3fc")),
        Theme("Warm (Reds)", ("#450a0a", "#991b1b", "#dc2626", "#f87171", "#fca5a5")),
    ),
}

FORMAT_HINTS: dict[Mode, str] = {
    Mode.VLF: "Station, InPhase, Quad",
    Mode.RESISTIVITY: "P1, P2, P3, P4, K, R, ρa",
}

# camelCase file key -> PlotConfig attribute
_FILE_KEYS = {
    "mode": "mode",
    "arrayType": "array_type",
    "showDerivativeFilter": "show_derivative_filter",
    "themeIndex": "theme_index",
    "customTitle": "custom_title",
    "darkMode": "dark_mode",
}


@dataclass(frozen=True)
class VLFOptions:
    """Options for the VLF transform.

    Parameters
    ----------
    show_derivative_filter : bool
        User toggle for the KH filter series.
    annotation_available : bool
        Whether the renderer can draw the secondary filter axis. The filter
        is only computed when both flags are set.
    """

    show_derivative_filter: bool = True
    annotation_available: bool = True

    @property
    def derivative_enabled(self) -> bool:
        return self.show_derivative_filter and self.annotation_available


@dataclass(frozen=True)
class ResistivityOptions:
    """Options for the resistivity transform."""

    array_type: ArrayType = ArrayType.WENNER


TransformOptions = Union[VLFOptions, ResistivityOptions]


def _coerce_enum(enum_type: type[Enum], value: Any, key: str) -> Any:
    """Convert ``value`` to ``enum_type`` or raise ``ConfigError``."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise ConfigError(f"{key} must be one of: {allowed}; got {value!r}") from None


@dataclass(frozen=True)
class PlotConfig:
    """Recognized plot options.

    Parameters
    ----------
    mode : Mode
        Survey mode selecting the transform.
    array_type : ArrayType
        Electrode array geometry for resistivity data.
    show_derivative_filter : bool
        Whether the KH filter series is requested for VLF data.
    theme_index : int
        Index into ``THEMES[mode]``.
    custom_title : str | None
        Chart title overriding the mode default when non-empty.
    dark_mode : bool
        Environment flag forwarded to the renderer for colour adjustment.
    """

    mode: Mode = Mode.VLF
    array_type: ArrayType = ArrayType.WENNER
    show_derivative_filter: bool = True
    theme_index: int = 0
    custom_title: str | None = None
    dark_mode: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", _coerce_enum(Mode, self.mode, "mode"))
        object.__setattr__(
            self, "array_type", _coerce_enum(ArrayType, self.array_type, "arrayType")
        )
        for key, value in (
            ("showDerivativeFilter", self.show_derivative_filter),
            ("darkMode", self.dark_mode),
        ):
            if not isinstance(value, bool):
                raise ConfigError(f"{key} must be true or false, got {value!r}")
        if self.custom_title is not None and not isinstance(self.custom_title, str):
            raise ConfigError(f"customTitle must be a string, got {self.custom_title!r}")
        if isinstance(self.theme_index, bool) or not isinstance(self.theme_index, int):
            raise ConfigError(f"themeIndex must be an integer, got {self.theme_index!r}")
        theme_count = len(THEMES[self.mode])
        if not 0 <= self.theme_index < theme_count:
            raise ConfigError(
                f"themeIndex must be in [0, {theme_count - 1}], got {self.theme_index}"
            )

    @property
    def theme(self) -> Theme:
        return THEMES[self.mode][self.theme_index]

    @property
    def palette(self) -> tuple[str, ...]:
        return self.theme.colors

    @property
    def format_hint(self) -> str:
        return FORMAT_HINTS[self.mode]

    def transform_options(self, annotation_available: bool = True) -> TransformOptions:
        """Build the mode-specific options for the transform dispatch."""
        if self.mode == Mode.VLF:
            return VLFOptions(
                show_derivative_filter=self.show_derivative_filter,
                annotation_available=annotation_available,
            )
        return ResistivityOptions(array_type=self.array_type)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used in config files."""
        return {
            "mode": self.mode.value,
            "arrayType": self.array_type.value,
            "showDerivativeFilter": self.show_derivative_filter,
            "themeIndex": self.theme_index,
            "customTitle": self.custom_title,
            "darkMode": self.dark_mode,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlotConfig:
        """Build config from camelCase keys, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise ConfigError("config data must be a JSON object")
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            attr = _FILE_KEYS.get(key)
            if attr is None:
                logger.debug(f"Ignoring unknown config key: {key}")
                continue
            kwargs[attr] = value
        if kwargs.get("custom_title") == "":
            kwargs["custom_title"] = None
        return cls(**kwargs)


def load_config(file_path: str | Path) -> PlotConfig:
    """Load plot configuration from a JSON file.

    Parameters
    ----------
    file_path : str | Path
        JSON file with the camelCase option keys.

    Returns
    -------
    PlotConfig
        Parsed configuration; a missing file yields the defaults.
    """
    path = Path(file_path)
    if not path.exists():
        logger.info(f"Config file not found, using defaults: {path}")
        return PlotConfig()
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"invalid JSON in {path}: {e}") from e
    config = PlotConfig.from_dict(data)
    logger.debug(f"Loaded config from {path}: {config.to_dict()}")
    return config


def save_config(config: PlotConfig, file_path: str | Path) -> None:
    """Write plot configuration as JSON."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info(f"Saved config to {path}")
