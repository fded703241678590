"""Configuration management for Mindful."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.entries import DEFAULT_MOOD, InvalidMoodError, Mood, parse_mood

logger = logging.getLogger(__name__)

MINDFUL_HOME = Path(os.environ.get("MINDFUL_HOME", Path.home() / "mindful"))
CONFIG_FILE = MINDFUL_HOME / "config" / "mindful.conf"
DATA_DIR = MINDFUL_HOME / "data"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Config:
    """Mindful configuration."""

    storage_dir: str = ""
    storage_key: str = "mindful-entries"
    default_mood: Mood = DEFAULT_MOOD
    strict_load: bool = False
    # Telegram bot settings
    telegram_bot_token: str = ""
    telegram_allowed_users: list[int] = field(default_factory=list)

    @property
    def storage_path(self) -> Path:
        """Directory holding the key/value files."""
        if self.storage_dir:
            return Path(self.storage_dir).expanduser()
        return DATA_DIR


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def _parse_bool(key: str, value: str, default: bool) -> bool:
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    logger.warning(f"Invalid boolean for {key.upper()}: {value!r}, using {default}")
    return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from mindful.conf file."""
    config = Config()
    config_file = path or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "storage_dir":
                config.storage_dir = value
            case "storage_key":
                if value:
                    config.storage_key = value
            case "default_mood":
                try:
                    config.default_mood = parse_mood(value)
                except InvalidMoodError as e:
                    logger.warning(f"Ignoring DEFAULT_MOOD: {e}")
            case "strict_load":
                config.strict_load = _parse_bool(key, value, config.strict_load)
            case "telegram_bot_token":
                config.telegram_bot_token = value
            case "telegram_allowed_users":
                users = []
                for item in value.split(","):
                    item = item.strip()
                    if not item:
                        continue
                    try:
                        users.append(int(item))
                    except ValueError:
                        logger.warning(f"Ignoring invalid TELEGRAM_ALLOWED_USERS entry: {item!r}")
                config.telegram_allowed_users = users

    return config
