# Configuration loading and parsing for sitehooks
import sys
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

# ABOUTME: Per-project config file name, looked up in the project root
CONFIG_FILENAME = ".sitehooks.toml"

# ABOUTME: Table used when settings live in pyproject.toml
PYPROJECT_TABLE = "sitehooks"

# ABOUTME: Relative location of a profile's template files
ASSETS_SUBDIR = Path("src") / "assets"


class ConfigError(ValueError):
    """Raised when a config file is malformed or holds invalid values."""


def _default_scaffold_dirs() -> list[str]:
    return ["modules", "profiles", "themes", "libraries"]


@dataclass
class HooksConfig:
    """Tunables for the setup hooks.

    ABOUTME: Defaults match a stock drupal-project layout with the greencko
    ABOUTME: profile shipping the templates and varbase as parent profile
    """
    web_root: str = "web"
    profile: str = "greencko"
    parent_profile: str = "varbase"
    scaffold_dirs: list[str] = field(default_factory=_default_scaffold_dirs)
    min_tool_version: str = "1.0.0"
    vcs_dir_name: str = ".git"
    rewrite_marker: str = "RewriteEngine on"
    backup: bool = False

    def web_root_path(self, project_root: Path) -> Path:
        """Return the web root for a project root."""
        return project_root / self.web_root

    def assets_path(self, project_root: Path) -> Path:
        """Return the profile's template directory for a project root."""
        return self.web_root_path(project_root) / "profiles" / self.profile / ASSETS_SUBDIR

    def manifest_path(self, project_root: Path) -> Path:
        """Return the parent profile's .info.yml manifest path."""
        return (
            self.web_root_path(project_root)
            / "profiles"
            / self.parent_profile
            / f"{self.parent_profile}.info.yml"
        )

    def backup_dir(self, project_root: Path) -> Path:
        """Return the directory backups are written to."""
        return project_root / ".sitehooks" / "backups"


def config_from_dict(data: dict[str, Any]) -> HooksConfig:
    """Build a HooksConfig from a parsed TOML table.

    ABOUTME: Rejects unknown keys and values of the wrong type
    ABOUTME: Missing keys fall back to the dataclass defaults

    Args:
        data: Mapping of config keys to values

    Returns:
        Validated HooksConfig

    Raises:
        ConfigError: If a key is unknown or a value has the wrong type
    """
    known = {f.name: f for f in fields(HooksConfig)}
    defaults = asdict(HooksConfig())

    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

    for key, value in data.items():
        expected = type(defaults[key])
        if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
            raise ConfigError(
                f"Config key '{key}' must be of type {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        if expected is list and not all(isinstance(item, str) for item in value):
            raise ConfigError(f"Config key '{key}' must be a list of strings")

    return HooksConfig(**data)


def find_config_file(project_root: Path) -> Path | None:
    """Locate the config file for a project.

    ABOUTME: Prefers .sitehooks.toml, falls back to pyproject.toml
    ABOUTME: pyproject.toml only counts if it has a [tool.sitehooks] table

    Args:
        project_root: Path to project root

    Returns:
        Path to config file, or None if the project has none
    """
    dedicated = project_root / CONFIG_FILENAME
    if dedicated.exists():
        return dedicated

    pyproject = project_root / "pyproject.toml"
    if pyproject.exists():
        data = _read_toml(pyproject)
        if PYPROJECT_TABLE in data.get("tool", {}):
            return pyproject

    return None


def load_config(path: Path | None) -> HooksConfig:
    """Load sitehooks config from a TOML file.

    ABOUTME: Returns defaults when path is None
    ABOUTME: pyproject.toml is read from its [tool.sitehooks] table

    Args:
        path: Path to .sitehooks.toml or pyproject.toml, or None

    Returns:
        Parsed HooksConfig

    Raises:
        FileNotFoundError: If path is given but doesn't exist
        ConfigError: If TOML syntax or values are invalid
    """
    if path is None:
        return HooksConfig()

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = _read_toml(path)
    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get(PYPROJECT_TABLE, {})

    return config_from_dict(data)


def load_project_config(project_root: Path) -> HooksConfig:
    """Load the config that applies to a project root."""
    return load_config(find_config_file(project_root))


def save_config(path: Path, config: HooksConfig) -> None:
    """Save config to a TOML file.

    ABOUTME: Writes every key so the file documents the defaults
    ABOUTME: Creates parent directory if needed

    Args:
        path: Path to write .sitehooks.toml
        config: HooksConfig to save
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "wb") as f:
        tomli_w.dump(asdict(config), f)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
