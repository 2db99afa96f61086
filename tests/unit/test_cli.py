"""Tests for CLI entry point."""

import json
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from pluginhealth.scoring.cli import (
    app,
    parse_repositories,
    prepare_plugin,
    resolve_config,
)
from pluginhealth.scoring.models.config import ScoringConfig
from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.models.update_center import UpdateCenter

runner = CliRunner()

OLD = datetime(2023, 1, 1, tzinfo=UTC)


@pytest.fixture
def update_center_file(tmp_path: Path) -> Path:
    """Write an update-center snapshot to disk."""
    path = tmp_path / "update-center.json"
    path.write_text(
        json.dumps(
            {
                "plugins": {
                    "mailer": {
                        "name": "mailer",
                        "version": "1.2",
                        "scm": "https://github.com/jenkinsci/mailer-plugin",
                        "labels": [],
                        "releaseTimestamp": "2024-02-01T10:00:00Z",
                    },
                    "git": {
                        "name": "git",
                        "version": "5.0",
                        "scm": "https://github.com/jenkinsci/git-plugin",
                        "labels": [],
                        "releaseTimestamp": "2024-02-01T10:00:00Z",
                    },
                },
                "deprecations": {},
                "warnings": [],
            }
        )
    )
    return path


@pytest.fixture
def repository(tmp_path: Path) -> Path:
    """Create a working tree with a JEP-229 workflow."""
    repo = tmp_path / "mailer-plugin"
    workflows = repo / ".github" / "workflows"
    workflows.mkdir(parents=True)
    (workflows / "cd.yaml").touch()
    (repo / "Jenkinsfile").touch()
    return repo


def test_main_runs_probes(update_center_file: Path, repository: Path) -> None:
    """Main prints the details of every evaluated plugin."""
    with patch(
        "pluginhealth.scoring.cli.GitHubClient.repository_exists",
        new=AsyncMock(return_value=True),
    ):
        result = runner.invoke(
            app,
            [
                "--plugin",
                "mailer",
                "--repository",
                f"mailer={repository}",
                "--update-center",
                str(update_center_file),
            ],
        )

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    details = output["mailer"]
    assert details["scm"]["status"] == "SUCCESS"
    assert details["jep-229"]["status"] == "SUCCESS"
    assert details["jep-229"]["message"] == "JEP-229 workflow definition found"
    assert details["jenkinsfile"]["status"] == "SUCCESS"
    assert details["dependabot"]["status"] == "FAILURE"
    assert details["deprecation"]["status"] == "SUCCESS"
    assert details["security"]["status"] == "SUCCESS"


def test_main_without_repository_skips_source_probes(
    update_center_file: Path,
) -> None:
    """Without a working tree only non source probes run."""
    with patch(
        "pluginhealth.scoring.cli.GitHubClient.repository_exists",
        new=AsyncMock(return_value=True),
    ):
        result = runner.invoke(
            app, ["--plugin", "mailer", "--update-center", str(update_center_file)]
        )

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert sorted(output["mailer"]) == [
        "deprecation",
        "scm",
        "security",
        "up-for-adoption",
    ]


def test_main_applies_exclusions(
    update_center_file: Path, repository: Path, tmp_path: Path
) -> None:
    """Probes excluded in the configuration do not run."""
    config_file = tmp_path / "scoring.yaml"
    config_file.write_text(
        f'update_center_url: "{update_center_file}"\n'
        "exclusions:\n"
        "  mailer:\n"
        '    - "jenkinsfile"\n'
    )

    with patch(
        "pluginhealth.scoring.cli.GitHubClient.repository_exists",
        new=AsyncMock(return_value=True),
    ):
        result = runner.invoke(
            app,
            [
                "--plugin",
                "mailer",
                "--repository",
                f"mailer={repository}",
                "--config",
                str(config_file),
            ],
        )

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert "jenkinsfile" not in output["mailer"]
    assert "jep-229" in output["mailer"]


def test_main_persists_state(
    update_center_file: Path, repository: Path, tmp_path: Path
) -> None:
    """Details are written to the state file and reused."""
    state = tmp_path / "state.json"
    args = [
        "--plugin",
        "mailer",
        "--repository",
        f"mailer={repository}",
        "--update-center",
        str(update_center_file),
        "--state",
        str(state),
    ]
    exists = AsyncMock(return_value=True)

    with patch("pluginhealth.scoring.cli.GitHubClient.repository_exists", new=exists):
        first = runner.invoke(app, args)
        second = runner.invoke(app, args)

    assert first.exit_code == 0
    assert second.exit_code == 0
    stored = json.loads(state.read_text())
    assert stored["mailer"]["details"]["jep-229"]["status"] == "SUCCESS"
    # scm only runs again after a new release
    assert exists.call_count == 1


def test_main_uses_each_plugin_working_tree(
    update_center_file: Path, repository: Path, tmp_path: Path
) -> None:
    """Every plugin is evaluated against its own working tree only."""
    git_repository = tmp_path / "git-plugin"
    (git_repository / ".github" / "workflows").mkdir(parents=True)
    (git_repository / "CODEOWNERS").touch()

    with patch(
        "pluginhealth.scoring.cli.GitHubClient.repository_exists",
        new=AsyncMock(return_value=True),
    ):
        result = runner.invoke(
            app,
            [
                "--plugin",
                "mailer",
                "--plugin",
                "git",
                "--repository",
                f"mailer={repository}",
                "--repository",
                f"git={git_repository}",
                "--update-center",
                str(update_center_file),
            ],
        )

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["mailer"]["jep-229"]["status"] == "SUCCESS"
    assert output["mailer"]["code-ownership"]["status"] == "FAILURE"
    assert output["git"]["jep-229"]["status"] == "FAILURE"
    assert output["git"]["jenkinsfile"]["status"] == "FAILURE"
    assert output["git"]["code-ownership"]["status"] == "SUCCESS"


def test_main_plugin_without_working_tree_skips_source_checks(
    update_center_file: Path, repository: Path
) -> None:
    """A plugin with no working tree gets no source results."""
    with patch(
        "pluginhealth.scoring.cli.GitHubClient.repository_exists",
        new=AsyncMock(return_value=True),
    ):
        result = runner.invoke(
            app,
            [
                "--plugin",
                "mailer",
                "--plugin",
                "git",
                "--repository",
                f"mailer={repository}",
                "--update-center",
                str(update_center_file),
            ],
        )

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert "jep-229" in output["mailer"]
    assert "jep-229" not in output["git"]
    assert "jenkinsfile" not in output["git"]
    assert output["git"]["scm"]["status"] == "SUCCESS"


def test_main_rejects_unnamed_repository(
    update_center_file: Path, repository: Path
) -> None:
    """Main exits with error code when a working tree is not tied to a plugin."""
    result = runner.invoke(
        app,
        [
            "--plugin",
            "mailer",
            "--repository",
            str(repository),
            "--update-center",
            str(update_center_file),
        ],
    )

    assert result.exit_code == 1


def test_parse_repositories() -> None:
    """parse_repositories maps plugin names to paths."""
    repositories = parse_repositories(
        ["mailer=/src/mailer", "git=/src/a=b"], ["mailer", "git"]
    )

    assert repositories == {"mailer": Path("/src/mailer"), "git": Path("/src/a=b")}


@pytest.mark.parametrize(
    ("values", "match"),
    [
        (["/src/mailer"], "expected NAME=PATH"),
        (["=/src/mailer"], "expected NAME=PATH"),
        (["mailer="], "expected NAME=PATH"),
        (["other=/src/other"], "unselected plugin: other"),
        (["mailer=/a", "mailer=/b"], "given twice for plugin: mailer"),
    ],
)
def test_parse_repositories_invalid(values: list[str], match: str) -> None:
    """parse_repositories rejects malformed or ambiguous values."""
    with pytest.raises(ValueError, match=match):
        parse_repositories(values, ["mailer"])


def test_main_unknown_plugin(update_center_file: Path) -> None:
    """Main exits with error code for plugins missing from the snapshot."""
    result = runner.invoke(
        app, ["--plugin", "nope", "--update-center", str(update_center_file)]
    )

    assert result.exit_code == 1


def test_main_missing_update_center(tmp_path: Path) -> None:
    """Main exits with error code when the snapshot cannot be read."""
    result = runner.invoke(
        app,
        ["--plugin", "mailer", "--update-center", str(tmp_path / "missing.json")],
    )

    assert result.exit_code == 1


def test_main_invalid_config(tmp_path: Path) -> None:
    """Main exits with error code on an invalid configuration file."""
    config_file = tmp_path / "scoring.yaml"
    config_file.write_text("")

    result = runner.invoke(
        app, ["--plugin", "mailer", "--config", str(config_file)]
    )

    assert result.exit_code == 1


def test_resolve_config_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Command line and environment override configuration values."""
    monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3")

    config = resolve_config(None, "/tmp/uc.json", "ghp_token")

    assert config.update_center_url == "/tmp/uc.json"
    assert config.github_token == "ghp_token"
    assert config.github_api_url == "https://ghe.example.com/api/v3"


def test_resolve_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without overrides the defaults are kept."""
    monkeypatch.delenv("GITHUB_API_URL", raising=False)

    assert resolve_config(None, None, None) == ScoringConfig()


def test_prepare_plugin_carries_stored_details() -> None:
    """Stored details are merged onto the fresh plugin record."""
    snapshot = UpdateCenter.model_validate(
        {"plugins": {"mailer": {"name": "mailer", "version": "1.2"}}}
    )
    previous = Plugin(name="mailer", version="1.1")
    previous.add_details(ProbeResult.success("scm", "", OLD))
    config = ScoringConfig(exclusions={"mailer": ["security"]})

    plugin = prepare_plugin("mailer", snapshot, config, {"mailer": previous})

    assert plugin.version == "1.2"
    assert plugin.excluded_probes == {"security"}
    assert plugin.details == previous.details
