"""Configuration loader."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError
from .models import MajorChangeConfig, NoteConfig, RelabelConfig, RepoConfig

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("~/.triagebot").expanduser()
CONFIG_DIR_ENV = "TRIAGEBOT_CONFIG_DIR"
ENV_FILE_NAME = ".env"
REPOS_FILE = "repos.yaml"
DEFAULT_BOT_NAMES = ["triagebot"]


@dataclass
class ZulipSettings:
    url: str
    bot_email: str
    api_token: str


@dataclass
class Config:
    repos: Dict[str, RepoConfig]
    config_dir: Path
    bot_names: List[str] = field(default_factory=lambda: list(DEFAULT_BOT_NAMES))
    github_token: Optional[str] = None
    team_api_url: Optional[str] = None
    zulip: Optional[ZulipSettings] = None

    def get_repo(self, name: str) -> Optional[RepoConfig]:
        return self.repos.get(name.lower())


def resolve_config_dir(config_dir: Path | str | None) -> Path:
    """Resolve and validate the directory containing .env + repos.yaml."""
    raw = config_dir or os.getenv(CONFIG_DIR_ENV)
    target = (Path(raw).expanduser() if raw else DEFAULT_CONFIG_DIR).resolve()
    if not target.exists():
        raise ConfigError(
            f"Config directory {target} does not exist. "
            "Create it and add .env and repos.yaml."
        )
    if not target.is_dir():
        raise ConfigError(f"Config directory {target} is not a directory")
    return target


def load_config(config_dir: Path | str | None = None) -> Config:
    """Load triagebot configuration from the provided or default directory."""
    root = resolve_config_dir(config_dir)
    _load_env_file(root / ENV_FILE_NAME)

    repos = load_repos(root / REPOS_FILE)
    zulip = _load_zulip_settings()
    needs_zulip = sorted(name for name, repo in repos.items() if repo.major_change)
    if needs_zulip and zulip is None:
        raise ConfigError(
            "Zulip credentials are required by major-change in: " + ", ".join(needs_zulip)
        )

    return Config(
        repos=repos,
        config_dir=root,
        bot_names=_load_bot_names(),
        github_token=os.getenv("GITHUB_TOKEN"),
        team_api_url=os.getenv("TEAM_API_URL"),
        zulip=zulip,
    )


def _load_env_file(path: Path) -> None:
    if not path.exists():
        LOGGER.warning("No .env file found at %s; relying on shell environment.", path)
        return
    load_dotenv(dotenv_path=path, override=False)


def _load_bot_names() -> List[str]:
    raw_value = os.getenv("TRIAGEBOT_BOT_NAMES")
    if not raw_value:
        return list(DEFAULT_BOT_NAMES)
    names = [name.strip().lstrip("@") for name in raw_value.split(",") if name.strip()]
    if not names:
        raise ConfigError("TRIAGEBOT_BOT_NAMES must list at least one name")
    return names


def _load_zulip_settings() -> Optional[ZulipSettings]:
    url = os.getenv("ZULIP_URL")
    email = os.getenv("ZULIP_BOT_EMAIL")
    token = os.getenv("ZULIP_API_TOKEN")
    if not any((url, email, token)):
        return None
    if not (url and email and token):
        raise ConfigError("ZULIP_URL, ZULIP_BOT_EMAIL and ZULIP_API_TOKEN must be set together")
    return ZulipSettings(url=url.rstrip("/"), bot_email=email, api_token=token)


def load_repos(path: Path) -> Dict[str, RepoConfig]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"repos.yaml not found at {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid repos.yaml structure at {path}")

    repos = {}
    for repo_name, cfg in (data.get("repos") or {}).items():
        repos[str(repo_name).lower()] = parse_repo_config(str(repo_name), cfg)
    if not repos:
        LOGGER.warning("No repositories configured in %s", path)
    return repos


def parse_repo_config(name: str, cfg: Any) -> RepoConfig:
    if "/" not in name:
        raise ConfigError(f"Repository {name} must be written as owner/repo")
    if cfg is None:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"Repository {name} must be a mapping")

    return RepoConfig(
        name=name,
        relabel=_parse_relabel(name, cfg.get("relabel")),
        major_change=_parse_major_change(name, cfg.get("major-change")),
        note=_parse_note(name, cfg.get("note")),
    )


def _parse_relabel(repo: str, cfg: Any) -> Optional[RelabelConfig]:
    if cfg is None:
        return None
    if not isinstance(cfg, dict):
        raise ConfigError(f"relabel for {repo} must be a mapping")
    patterns = cfg.get("allow-unauthenticated") or []
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise ConfigError(f"relabel.allow-unauthenticated for {repo} must be a list of strings")
    return RelabelConfig(allow_unauthenticated=tuple(patterns))


def _parse_major_change(repo: str, cfg: Any) -> Optional[MajorChangeConfig]:
    if cfg is None:
        return None
    if not isinstance(cfg, dict):
        raise ConfigError(f"major-change for {repo} must be a mapping")
    try:
        return MajorChangeConfig(
            enabling_label=cfg.get("enabling-label", "major-change"),
            second_label=cfg.get("second-label", "final-comment-period"),
            zulip_stream=int(cfg["zulip-stream"]),
            zulip_ping=cfg["zulip-ping"],
        )
    except KeyError as exc:
        raise ConfigError(f"Incomplete major-change config for {repo}: missing {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"major-change.zulip-stream for {repo} must be an integer") from exc


def _parse_note(repo: str, cfg: Any) -> Optional[NoteConfig]:
    if cfg is None or cfg is False:
        return None
    if cfg is True:
        return NoteConfig()
    if isinstance(cfg, dict):
        return NoteConfig(enabled=bool(cfg.get("enabled", True)))
    raise ConfigError(f"note for {repo} must be a boolean or a mapping")
