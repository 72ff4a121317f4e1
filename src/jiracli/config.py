"""Configuration management for jiracli.

Settings are loaded from ~/.jiracli/settings.toml with the following precedence:
1. CLI flags (highest)
2. Config file
3. Built-in defaults (lowest)

Credentials are not stored here; they live in the file named by
``[credentials] path`` (``~/.jirarc`` by default).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import toml

# Default paths - stored in the user's home directory
JIRACLI_HOME = Path.home() / ".jiracli"
SETTINGS_FILE = JIRACLI_HOME / "settings.toml"

DEFAULT_CREDENTIALS_FILE = "~/.jirarc"


@dataclass
class ServerConfig:
    """JIRA server endpoints."""

    base_url: str = "https://bits.bazaarvoice.com/jira/rest/api/2"
    browse_url: str = "https://bits.bazaarvoice.com/jira/browse"


@dataclass
class QueriesConfig:
    """JQL used by the listing commands."""

    assigned: str = "assignee = currentUser() ORDER BY status ASC, key DESC"
    watched: str = "issue in watchedIssues() AND status != Closed ORDER BY status ASC, key DESC"


@dataclass
class FieldsConfig:
    """Custom field ids that differ between JIRA installations."""

    resolution: str = "customfield_10016"


@dataclass
class DisplayConfig:
    """Terminal output settings."""

    color: bool = True


@dataclass
class CredentialsConfig:
    """Where the username:password file lives."""

    path: str = DEFAULT_CREDENTIALS_FILE

    @property
    def file(self) -> Path:
        return Path(self.path).expanduser()


@dataclass
class LoggingConfig:
    """Log levels for the file and console handlers."""

    level: str = "info"
    console_level: str = "warning"


@dataclass
class JiraCliConfig:
    """Main configuration container."""

    server: ServerConfig = field(default_factory=ServerConfig)
    queries: QueriesConfig = field(default_factory=QueriesConfig)
    fields: FieldsConfig = field(default_factory=FieldsConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Section name -> keys that may be overridden from settings.toml
_SECTION_KEYS: dict[str, tuple[str, ...]] = {
    "server": ("base_url", "browse_url"),
    "queries": ("assigned", "watched"),
    "fields": ("resolution",),
    "display": ("color",),
    "credentials": ("path",),
    "logging": ("level", "console_level"),
}


def ensure_jiracli_home() -> None:
    """Create the jiracli home directory if it doesn't exist."""
    JIRACLI_HOME.mkdir(parents=True, exist_ok=True)


def load_config() -> JiraCliConfig:
    """Load configuration from settings.toml, merging with defaults."""
    config = JiraCliConfig()

    if not SETTINGS_FILE.exists():
        return config

    try:
        data = toml.load(SETTINGS_FILE)
    except (OSError, toml.TomlDecodeError):
        return config

    for section_name, keys in _SECTION_KEYS.items():
        section_data = data.get(section_name)
        if not isinstance(section_data, dict):
            continue
        section = getattr(config, section_name)
        for key in keys:
            if key in section_data:
                setattr(section, key, section_data[key])

    return config


def save_config(config: JiraCliConfig) -> None:
    """Save configuration to settings.toml."""
    ensure_jiracli_home()

    data: dict[str, Any] = {
        section_name: {key: getattr(getattr(config, section_name), key) for key in keys}
        for section_name, keys in _SECTION_KEYS.items()
    }

    with open(SETTINGS_FILE, "w") as f:
        toml.dump(data, f)


def create_default_config(config: JiraCliConfig | None = None) -> bool:
    """Write settings.toml if it doesn't exist.

    Returns:
        True if a new file was written, False if one already existed.
    """
    if SETTINGS_FILE.exists():
        return False

    save_config(config or JiraCliConfig())
    return True
