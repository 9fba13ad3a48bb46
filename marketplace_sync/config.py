"""Configuration loader for the marketplace sync."""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError


DEFAULT_CONFIG_PATH = "config/config.yaml"

COLLECTION_DIR = "skills-collection"
SKILLS_INDEX_FILE = "skills.json"
SKILLS_JSON_DIR = "skills-json"
SKILL_FILENAME = "SKILL.md"


def _substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in configuration values.

    Args:
        value: Value that may be a ${VAR} pattern

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        return os.environ.get(var_name, "")
    return value


def _get(data: Dict[str, Any], key: str, default: Any = None) -> Any:
    """Get configuration value by dot-separated key.

    Args:
        data: Parsed YAML configuration
        key: Dot-separated configuration key (e.g., 'paths.downloads_dir')
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    value: Any = data
    for k in key.split("."):
        if isinstance(value, dict):
            value = value.get(k)
            if value is None:
                return default
        else:
            return default

    value = _substitute_env_vars(value)
    if value == "":
        return default
    return value


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    """Read the optional YAML configuration file."""
    if not config_path.is_file():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid configuration file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")
    return data


@dataclass(frozen=True)
class SyncConfig:
    """Immutable settings for one sync run.

    Built once by :meth:`load` and handed to every pipeline component.
    """

    project_root: Path
    local_repo_path: Path
    output_path: Path
    contents_dir: Path
    downloads_dir: Path
    temp_clone_dir: Path
    remote_repo_url: Optional[str] = None
    github_token: Optional[str] = field(default=None, repr=False)
    log_dir: Optional[Path] = None
    excluded_dirs: Tuple[str, ...] = ("node_modules",)
    default_author: str = "AI-Agent Team"
    default_version: str = "1.0.0"
    catalog_version: str = "1.0.0"
    download_url_template: str = "/downloads/{id}.zip"
    install_command_template: str = "pa-skills add {id}"

    @property
    def source_repo(self) -> str:
        """Repository identifier recorded in the catalog metadata."""
        return self.remote_repo_url or "local"

    @classmethod
    def defaults(cls, project_root: Path) -> "SyncConfig":
        """Build the default layout relative to a project root."""
        root = Path(project_root).resolve()
        return cls(
            project_root=root,
            local_repo_path=(root.parent / "skills-repo"),
            output_path=root / "src" / "data" / "skills.json",
            contents_dir=root / "src" / "data" / "contents",
            downloads_dir=root / "public" / "downloads",
            temp_clone_dir=root / ".temp-skills-repo",
        )

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        project_root: Optional[Path] = None,
        **overrides: Any,
    ) -> "SyncConfig":
        """Load configuration from defaults, YAML, environment and overrides.

        Args:
            config_path: Path to YAML configuration file (optional file)
            project_root: Root that relative paths resolve against (default: cwd)
            **overrides: Explicit values (e.g. from the CLI); ``None`` is ignored

        Returns:
            Frozen SyncConfig
        """
        load_dotenv()
        root = Path(project_root or Path.cwd()).resolve()
        base = cls.defaults(root)

        path = Path(config_path or DEFAULT_CONFIG_PATH)
        if not path.is_absolute():
            path = root / path
        data = _read_yaml(path)

        def _path(key: str, fallback: Optional[Path]) -> Optional[Path]:
            value = _get(data, key)
            if value is None:
                return fallback
            p = Path(str(value)).expanduser()
            return p if p.is_absolute() else (root / p).resolve()

        values: Dict[str, Any] = {
            "local_repo_path": _path("repo.local_path", base.local_repo_path),
            "remote_repo_url": _get(data, "repo.url"),
            "output_path": _path("paths.output", base.output_path),
            "contents_dir": _path("paths.contents_dir", base.contents_dir),
            "downloads_dir": _path("paths.downloads_dir", base.downloads_dir),
            "temp_clone_dir": _path("paths.temp_clone_dir", base.temp_clone_dir),
            "log_dir": _path("paths.log_dir", None),
            "default_author": str(_get(data, "skill.default_author", base.default_author)),
            "default_version": str(_get(data, "skill.default_version", base.default_version)),
        }

        excluded = _get(data, "scan.excluded_dirs")
        if excluded is not None:
            if not isinstance(excluded, list):
                raise ConfigurationError("scan.excluded_dirs must be a list")
            values["excluded_dirs"] = tuple(str(d) for d in excluded)

        # Environment wins over the YAML file
        if os.environ.get("SKILLS_REPO_PATH"):
            values["local_repo_path"] = Path(os.environ["SKILLS_REPO_PATH"]).expanduser().resolve()
        if os.environ.get("SKILLS_REPO_URL"):
            values["remote_repo_url"] = os.environ["SKILLS_REPO_URL"]
        values["github_token"] = os.environ.get("GITHUB_TOKEN") or None

        for key, value in overrides.items():
            if value is None:
                continue
            if key not in cls.__dataclass_fields__:
                raise ConfigurationError(f"Unknown configuration option: {key}")
            if isinstance(value, str) and key.endswith(("_path", "_dir")):
                value = Path(value).expanduser().resolve()
            values[key] = value

        return replace(base, **values)
