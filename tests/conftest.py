"""Shared test fixtures: a small skills repository built on disk."""

import json
from dataclasses import replace
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

from marketplace_sync.config import SyncConfig


AUTH_HELPER_SKILL = """\
---
name: Auth Helper
description: Helps with authentication flows.
tags:
  - security
version: "2.1.0"
---

# Auth Helper

Use this skill to wire up login.
"""

JSON_FORMATTER_SKILL = """\
---
name: json-formatter
tags: []
---

# JSON Formatter
"""


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of the tests."""
    for var in ("SKILLS_REPO_PATH", "SKILLS_REPO_URL", "GITHUB_TOKEN"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def repo_path(tmp_path: Path) -> Path:
    path = tmp_path / "skills-repo"
    (path / "skills-collection").mkdir(parents=True)
    return path


@pytest.fixture
def make_skill(repo_path: Path) -> Callable[..., Path]:
    """Create a skill directory with SKILL.md and optional extra files."""

    def _make(name: str, skill_md: Optional[str] = None, files: Optional[Dict[str, str]] = None) -> Path:
        skill_dir = repo_path / "skills-collection" / name
        skill_dir.mkdir(parents=True, exist_ok=True)
        if skill_md is not None:
            (skill_dir / "SKILL.md").write_text(skill_md, encoding="utf-8")
        for rel, content in (files or {}).items():
            target = skill_dir / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return skill_dir

    return _make


@pytest.fixture
def write_json(repo_path: Path) -> Callable[[str, object], Path]:
    """Write a JSON file relative to the skills repository root."""

    def _write(rel: str, data: object) -> Path:
        target = repo_path / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(data), encoding="utf-8")
        return target

    return _write


@pytest.fixture
def sample_repo(make_skill, write_json, repo_path: Path) -> Path:
    """Two skills: auth-helper (front matter tags) and json-formatter (skills-json tags)."""
    make_skill("auth-helper", AUTH_HELPER_SKILL, {"scripts/login.sh": "echo login\n"})
    make_skill("json-formatter", JSON_FORMATTER_SKILL)
    write_json("skills-json/json-formatter.json", {
        "name": "json-formatter",
        "tags": ["text", "tools"],
        "stars": 42,
        "sourceUrl": "https://github.com/example/json-formatter",
    })
    return repo_path


@pytest.fixture
def config(tmp_path: Path, repo_path: Path) -> SyncConfig:
    site = tmp_path / "site"
    return replace(SyncConfig.defaults(site), local_repo_path=repo_path)
