"""Configuration management for outline-reveal."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".outline-reveal"
CONFIG_FILE_NAME = "config.toml"
ENV_PREFIX = "OUTLINE_REVEAL_"


def _find_repo_root(start_dir: Path) -> Path:
    """Find repository root by walking upward looking for .git or pyproject.toml."""
    current_dir = start_dir

    while True:
        if (current_dir / ".git").exists() or (current_dir / "pyproject.toml").exists():
            return current_dir

        parent_dir = current_dir.parent

        # Stop if we reach filesystem root
        if parent_dir == current_dir:
            return start_dir

        current_dir = parent_dir


def _load_toml(config_file: Path) -> dict:
    with open(config_file, "rb") as f:
        return tomllib.load(f)


def _load_repo_config_data(repo_root: Path) -> Optional[dict]:
    """Load repo config data from .outline-reveal/config.toml if it exists."""
    config_file = repo_root / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    if not config_file.exists():
        return None

    try:
        data = _load_toml(config_file)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # A malformed repo config falls back to defaults
        logger.warning(f"Ignoring unreadable config {config_file}: {e}")
        return None
    logger.debug(f"Loaded repo config from {config_file}")
    return data


class LayoutConfig(BaseModel):
    """Fixed row, marker and spacing geometry in pixels."""

    row_height: float = Field(default=48, gt=0)
    column_gap: float = Field(default=6, ge=0)
    indent_space_width: float = Field(default=16, ge=0)
    checkbox_frame_size: float = Field(default=36, gt=0)
    checkbox_circle_size: float = Field(default=30, gt=0)
    bullet_frame_width: float = Field(default=28, gt=0)
    marker_char_width: float = Field(default=12, ge=0)
    connector_width: float = Field(default=4, gt=0)
    bullet_space_width: float = Field(default=20, ge=0)
    text_space_width: float = Field(default=16, ge=0)

    model_config = {"frozen": True}

    @property
    def checkbox_space_width(self) -> float:
        """Per-character width of a space run that follows a checkbox."""
        return max(0.0, self.checkbox_frame_size - 10)

    @property
    def row_pitch(self) -> float:
        return self.row_height + self.column_gap


DEFAULT_TAG_COLORS: dict[str, str] = {
    "application": "#34d399",
    "todo": "#8f6bff",
    "backlog": "#4ba3ff",
    "tag": "#38bdf8",
    "idea": "#facc15",
}

DEFAULT_TAG_COLOR = "#94a3b8"


class TagPalette(BaseModel):
    """Pill and connector colors keyed by exact (case-sensitive) tag name."""

    colors: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_TAG_COLORS))
    default_color: str = Field(default=DEFAULT_TAG_COLOR)

    model_config = {"frozen": True}

    def is_recognized(self, tag_name: str) -> bool:
        return bool(tag_name) and tag_name in self.colors

    def color_for(self, tag_name: Optional[str]) -> str:
        if not tag_name:
            return self.default_color
        return self.colors.get(tag_name, self.default_color)


_LAYOUT_ENV_FIELDS = tuple(LayoutConfig.model_fields)


def _layout_env_overrides() -> dict[str, float]:
    overrides: dict[str, float] = {}
    for name in _LAYOUT_ENV_FIELDS:
        env_name = f"{ENV_PREFIX}{name.upper()}"
        value = os.environ.get(env_name)
        if value is None or not value.strip():
            continue
        try:
            overrides[name] = float(value)
        except ValueError:
            raise ValueError(f"Invalid config: {env_name} must be a number, got {value!r}")
    return overrides


def _section(data: dict, key: str) -> dict[str, Any]:
    section = data.get(key, {})
    if not isinstance(section, dict):
        raise ValueError(f"Invalid config: [{key}] must be a table")
    return section


def _format_validation_error(prefix: str, error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"[{prefix}].{loc}: {item.get('msg')}")
    return "Invalid config: " + "; ".join(parts)


class OutlineConfig(BaseModel):
    """Layout geometry plus tag palette."""

    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    palette: TagPalette = Field(default_factory=TagPalette)

    model_config = {"frozen": True}

    @classmethod
    def from_data(cls, data: Optional[dict], layout_overrides: Optional[dict[str, float]] = None) -> "OutlineConfig":
        """Build config from parsed TOML data.

        Recognized tables are ``[layout]`` (numeric geometry) and ``[palette]``
        (tag name to color, plus an optional ``default`` key).

        Raises:
            ValueError: If a table or value is invalid
        """
        data = data or {}
        layout_data = dict(_section(data, "layout"))
        layout_data.update(layout_overrides or {})
        palette_data = dict(_section(data, "palette"))

        try:
            layout = LayoutConfig(**layout_data)
        except ValidationError as e:
            raise ValueError(_format_validation_error("layout", e)) from e

        default_color = palette_data.pop("default", DEFAULT_TAG_COLOR)
        colors = dict(DEFAULT_TAG_COLORS)
        colors.update(palette_data)
        try:
            palette = TagPalette(colors=colors, default_color=default_color)
        except ValidationError as e:
            raise ValueError(_format_validation_error("palette", e)) from e

        return cls(layout=layout, palette=palette)

    @classmethod
    def from_env(cls, cli_config_path: Optional[str] = None) -> "OutlineConfig":
        """Load configuration with the following precedence:

        1. CLI --config file (if provided)
        2. repo-local .outline-reveal/config.toml (walk upward from CWD)
        3. OUTLINE_REVEAL_<FIELD> environment variables for layout numbers
           (applied on top of either file)
        4. Defaults

        Raises:
            FileNotFoundError: If the CLI config file does not exist
            ValueError: If the CLI config file cannot be read or parsed, or
                any configured value is invalid
        """
        if cli_config_path:
            config_file = Path(cli_config_path).expanduser().resolve()
            if not config_file.exists():
                raise FileNotFoundError(f"Config file does not exist: {config_file}")
            try:
                data = _load_toml(config_file)
            except (OSError, tomllib.TOMLDecodeError) as e:
                raise ValueError(f"Invalid config file {config_file}: {e}") from e
            logger.debug(f"Loaded config from {config_file}")
        else:
            data = _load_repo_config_data(_find_repo_root(Path.cwd()))
            if data is None:
                logger.debug("No repo config found, using defaults")

        return cls.from_data(data, layout_overrides=_layout_env_overrides())
