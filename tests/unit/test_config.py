"""Unit tests for configuration loading."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from marketplace_sync.config import SyncConfig
from marketplace_sync.exceptions import ConfigurationError


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    (root / "config").mkdir(parents=True)
    return root.resolve()


def _write_config(project: Path, text: str) -> None:
    (project / "config" / "config.yaml").write_text(text, encoding="utf-8")


class TestDefaults:

    def test_layout_relative_to_project_root(self, project) -> None:
        config = SyncConfig.load(project_root=project)

        assert config.local_repo_path == project.parent / "skills-repo"
        assert config.output_path == project / "src" / "data" / "skills.json"
        assert config.contents_dir == project / "src" / "data" / "contents"
        assert config.downloads_dir == project / "public" / "downloads"
        assert config.temp_clone_dir == project / ".temp-skills-repo"
        assert config.remote_repo_url is None
        assert config.github_token is None
        assert config.source_repo == "local"

    def test_config_is_immutable(self, project) -> None:
        config = SyncConfig.load(project_root=project)

        with pytest.raises(FrozenInstanceError):
            config.remote_repo_url = "https://example.com"  # type: ignore[misc]

    def test_token_not_in_repr(self, project, monkeypatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "secret-token")

        config = SyncConfig.load(project_root=project)

        assert config.github_token == "secret-token"
        assert "secret-token" not in repr(config)


class TestYamlFile:

    def test_values_from_yaml(self, project) -> None:
        _write_config(project, """
repo:
  local_path: vendor/skills
  url: https://github.com/org/skills-repo
paths:
  downloads_dir: dist/downloads
scan:
  excluded_dirs: [node_modules, drafts]
skill:
  default_author: Platform Team
""")

        config = SyncConfig.load(project_root=project)

        assert config.local_repo_path == project / "vendor" / "skills"
        assert config.remote_repo_url == "https://github.com/org/skills-repo"
        assert config.downloads_dir == project / "dist" / "downloads"
        assert config.excluded_dirs == ("node_modules", "drafts")
        assert config.default_author == "Platform Team"
        assert config.source_repo == "https://github.com/org/skills-repo"

    def test_env_var_substitution(self, project, monkeypatch) -> None:
        monkeypatch.setenv("MY_SKILLS_URL", "https://github.com/org/from-env")
        _write_config(project, "repo:\n  url: ${MY_SKILLS_URL}\n")

        assert SyncConfig.load(project_root=project).remote_repo_url == "https://github.com/org/from-env"

    def test_unset_env_var_falls_back_to_default(self, project) -> None:
        _write_config(project, "repo:\n  url: ${UNSET_SKILLS_URL_FOR_TEST}\n")

        assert SyncConfig.load(project_root=project).remote_repo_url is None

    def test_invalid_yaml(self, project) -> None:
        _write_config(project, "repo: [unclosed\n")

        with pytest.raises(ConfigurationError):
            SyncConfig.load(project_root=project)

    def test_excluded_dirs_must_be_list(self, project) -> None:
        _write_config(project, "scan:\n  excluded_dirs: node_modules\n")

        with pytest.raises(ConfigurationError):
            SyncConfig.load(project_root=project)


class TestPrecedence:

    def test_environment_overrides_yaml(self, project, monkeypatch, tmp_path) -> None:
        _write_config(project, "repo:\n  local_path: vendor/skills\n")
        monkeypatch.setenv("SKILLS_REPO_PATH", str(tmp_path / "env-skills"))

        assert SyncConfig.load(project_root=project).local_repo_path == (tmp_path / "env-skills").resolve()

    def test_explicit_overrides_win(self, project, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("SKILLS_REPO_URL", "https://github.com/org/env")

        config = SyncConfig.load(
            project_root=project,
            remote_repo_url="https://github.com/org/cli",
            output_path=str(tmp_path / "out.json"),
            contents_dir=None,
        )

        assert config.remote_repo_url == "https://github.com/org/cli"
        assert config.output_path == (tmp_path / "out.json").resolve()
        assert config.contents_dir == project / "src" / "data" / "contents"

    def test_unknown_override(self, project) -> None:
        with pytest.raises(ConfigurationError):
            SyncConfig.load(project_root=project, not_an_option="x")
