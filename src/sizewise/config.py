"""Configuration management for sizewise."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.items import SENTINEL_TITLE
from .core.sequencing import DEFAULT_TSHIRT_SIZES, SortCriterion, SortDirection

logger = logging.getLogger(__name__)

SIZEWISE_HOME = Path(os.environ.get("SIZEWISE_HOME", Path.home() / "sizewise"))
CONFIG_FILE = SIZEWISE_HOME / "config" / "sizewise.conf"
DATA_DIR = SIZEWISE_HOME / "data"
DEFAULT_BOARD_FILE = DATA_DIR / "board.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Config:
    """sizewise configuration."""

    tshirt_sizes: list[str] = field(default_factory=lambda: list(DEFAULT_TSHIRT_SIZES))
    sort_criterion: SortCriterion = SortCriterion.CREATION_ORDER
    sort_direction: SortDirection = SortDirection.ASC
    wsjf_mode: bool = False
    sentinel_title: str = SENTINEL_TITLE
    # Update checker
    update_check_enabled: bool = True
    update_version_url: str = ""
    update_timeout: float = 10.0


def _parse_bool(key: str, value: str, default: bool) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    logger.warning(f"Invalid boolean for {key.upper()}: {value!r}")
    return default


def _strip_value(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from sizewise.conf file."""
    config = Config()
    config_file = path or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _strip_value(value.strip())

        match key:
            case "tshirt_sizes":
                sizes = [s.strip() for s in value.split(",") if s.strip()]
                if sizes:
                    config.tshirt_sizes = sizes
            case "sort_criteria":
                criterion = SortCriterion.parse(value)
                if criterion is None:
                    logger.warning(f"Unknown SORT_CRITERIA {value!r}, keeping {config.sort_criterion.value}")
                else:
                    config.sort_criterion = criterion
            case "sort_direction":
                config.sort_direction = SortDirection.parse(value.lower())
            case "wsjf_mode":
                config.wsjf_mode = _parse_bool(key, value, config.wsjf_mode)
            case "sentinel_title":
                config.sentinel_title = value
            case "update_check_enabled":
                config.update_check_enabled = _parse_bool(key, value, config.update_check_enabled)
            case "update_version_url":
                config.update_version_url = value
            case "update_timeout":
                try:
                    config.update_timeout = float(value)
                except ValueError:
                    logger.warning(f"Invalid UPDATE_TIMEOUT {value!r}, keeping {config.update_timeout}")
            case _:
                logger.debug(f"Ignoring unknown config key {key.upper()}")

    return config
