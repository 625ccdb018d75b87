"""
calcpad.toml configuration.

Example::

    [display]
    precision = 8
    error_text = "Error"

    [dispatch]
    delay_ms = 50
    policy = "debounce"   # "debounce" | "suppress"

    [theme]
    system = "light"
    state_file = ".calcpad/state.json"
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .dispatch import DispatchPolicy
from .errors import ConfigError
from .expression_lang.formatting import DEFAULT_PRECISION
from .preferences import DEFAULT_STATE_FILE, Theme

CONFIG_FILE_NAME = "calcpad.toml"
CONFIG_ENV_VAR = "CALCPAD_CONFIG"

MAX_PRECISION = 15


@dataclass
class DisplayConfig:
    """How results are rendered."""

    precision: int = DEFAULT_PRECISION
    error_text: str = "Error"


@dataclass
class DispatchConfig:
    """Render coalescing for keypad input."""

    delay_ms: int = 50
    policy: DispatchPolicy = DispatchPolicy.DEBOUNCE


@dataclass
class ThemeConfig:
    """Theme fallback and persisted state location."""

    system: Theme = Theme.LIGHT
    state_file: Path = DEFAULT_STATE_FILE


@dataclass
class CalcpadConfig:
    """Configuration loaded from calcpad.toml."""

    display: DisplayConfig = field(default_factory=DisplayConfig)
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    source: Path | None = None


def find_config(path: Path | None = None) -> Path | None:
    """Pick the config file: explicit path, then $CALCPAD_CONFIG, then ./calcpad.toml."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_path:
        return Path(env_path)
    local = Path.cwd() / CONFIG_FILE_NAME
    if local.exists():
        return local
    return None


def load_config(path: Path | None = None) -> CalcpadConfig:
    """
    Load calcpad configuration.

    Args:
        path: Explicit config file. When omitted, $CALCPAD_CONFIG or
            ./calcpad.toml is used if present, otherwise defaults apply.

    Returns:
        CalcpadConfig with defaults filled in

    Raises:
        ConfigError: If the file is missing, not valid TOML, or holds bad values
    """
    config_path = find_config(path)
    if config_path is None:
        return CalcpadConfig()

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {config_path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    config = parse_config(data)
    config.source = config_path
    return config


def parse_config(data: dict) -> CalcpadConfig:
    """Build a CalcpadConfig from already-parsed TOML data."""
    display_data = _section(data, "display")
    dispatch_data = _section(data, "dispatch")
    theme_data = _section(data, "theme")

    precision = display_data.get("precision", DEFAULT_PRECISION)
    if not _is_int(precision) or not 0 <= precision <= MAX_PRECISION:
        raise ConfigError(f"display.precision must be an integer 0..{MAX_PRECISION}, got {precision!r}")

    error_text = display_data.get("error_text", "Error")
    if not isinstance(error_text, str):
        raise ConfigError(f"display.error_text must be a string, got {error_text!r}")

    delay_ms = dispatch_data.get("delay_ms", 50)
    if not _is_int(delay_ms) or delay_ms < 0:
        raise ConfigError(f"dispatch.delay_ms must be a non-negative integer, got {delay_ms!r}")

    policy = dispatch_data.get("policy", DispatchPolicy.DEBOUNCE.value)
    try:
        policy = DispatchPolicy(policy)
    except ValueError as e:
        choices = ", ".join(p.value for p in DispatchPolicy)
        raise ConfigError(f"dispatch.policy must be one of {choices}, got {policy!r}") from e

    system = theme_data.get("system", Theme.LIGHT.value)
    try:
        system = Theme(system)
    except ValueError as e:
        raise ConfigError(f"theme.system must be 'light' or 'dark', got {system!r}") from e

    state_file = theme_data.get("state_file", str(DEFAULT_STATE_FILE))
    if not isinstance(state_file, str) or not state_file:
        raise ConfigError(f"theme.state_file must be a non-empty path string, got {state_file!r}")

    return CalcpadConfig(
        display=DisplayConfig(precision=precision, error_text=error_text),
        dispatch=DispatchConfig(delay_ms=delay_ms, policy=policy),
        theme=ThemeConfig(system=system, state_file=Path(state_file)),
    )


def _section(data: dict, name: str) -> dict:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {section!r}")
    return section


def _is_int(value: object) -> bool:
    # TOML booleans are ints to Python
    return isinstance(value, int) and not isinstance(value, bool)
