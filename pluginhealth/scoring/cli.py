"""CLI entry point for plugin health probes."""

import asyncio
import json
import logging
import os
import sys
from pathlib import Path

import typer

from pluginhealth.scoring.config_loader import load_config
from pluginhealth.scoring.engine import ProbeConfigurationError, ProbeEngine
from pluginhealth.scoring.github import GitHubClient
from pluginhealth.scoring.models.config import ScoringConfig
from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.result_status import ResultStatus
from pluginhealth.scoring.models.update_center import UpdateCenter
from pluginhealth.scoring.probes.registry import default_probes
from pluginhealth.scoring.store import load_plugins, save_plugins
from pluginhealth.scoring.update_center import load_update_center

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
    force=True,
)
logger = logging.getLogger(__name__)

app = typer.Typer()


def _fail(message: str) -> typer.Exit:
    logger.error(message)
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=1)


def resolve_config(
    config_path: Path | None,
    update_center: str | None,
    github_token: str | None,
) -> ScoringConfig:
    """Merge the configuration file with command line and environment overrides."""
    config = load_config(config_path) if config_path else ScoringConfig()

    if update_center:
        config.update_center_url = update_center
    if github_token:
        config.github_token = github_token
    if "GITHUB_API_URL" in os.environ:
        config.github_api_url = os.environ["GITHUB_API_URL"]

    return config


def prepare_plugin(
    name: str,
    update_center: UpdateCenter,
    config: ScoringConfig,
    stored: dict[str, Plugin],
) -> Plugin:
    """Build the plugin from the snapshot, carrying over stored details."""
    plugin = update_center.to_plugin(name, config.exclusions_for(name))
    previous = stored.get(name)
    if previous is not None:
        for result in previous.details.values():
            plugin.add_details(result)
    return plugin


def parse_repositories(
    values: list[str], plugin_names: list[str]
) -> dict[str, Path]:
    """Parse ``NAME=PATH`` working tree options.

    Raises:
        ValueError: On a malformed value, a duplicate or an unknown plugin

    """
    repositories: dict[str, Path] = {}
    for value in values:
        name, sep, path = value.partition("=")
        name = name.strip()
        if not sep or not name or not path:
            raise ValueError(f"Invalid repository '{value}', expected NAME=PATH")
        if name not in plugin_names:
            raise ValueError(f"Repository given for unselected plugin: {name}")
        if name in repositories:
            raise ValueError(f"Repository given twice for plugin: {name}")
        repositories[name] = Path(path)
    return repositories


async def evaluate(
    engine: ProbeEngine,
    plugins: list[Plugin],
    update_center: UpdateCenter,
    github: GitHubClient,
    repositories: dict[str, Path],
) -> list[Plugin]:
    """Run the engine on every plugin against its own working tree."""
    return await engine.run_all(
        plugins,
        lambda plugin: engine.create_context(
            scm_repository=repositories.get(plugin.name),
            update_center=update_center,
            github=github,
        ),
    )


@app.command()
def main(
    plugin_names: list[str] = typer.Option(  # noqa: B008
        ..., "--plugin", help="Plugin to evaluate (repeatable)"
    ),
    repository_options: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--repository",
        help="Working tree of a plugin as NAME=PATH (repeatable)",
    ),
    config_path: Path | None = typer.Option(  # noqa: B008
        None, "--config", help="Path to the YAML configuration file"
    ),
    update_center: str | None = typer.Option(
        None, help="Update-center snapshot path or URL"
    ),
    state: Path | None = typer.Option(  # noqa: B008
        None, help="JSON file holding plugin details between runs"
    ),
    github_token: str | None = typer.Option(
        None, envvar="GITHUB_TOKEN", help="GitHub token"
    ),
) -> None:
    """Run health probes on plugins and print their details."""
    logger.info("=" * 80)
    logger.info("Plugin Health Probes - Starting")
    logger.info("=" * 80)
    logger.info(f"Plugins: {', '.join(plugin_names)}")
    repository_options = repository_options or []
    logger.info(f"Working trees: {', '.join(repository_options) or '(none)'}")

    try:
        repositories = parse_repositories(repository_options, plugin_names)
        config = resolve_config(config_path, update_center, github_token)
        engine = ProbeEngine(default_probes())
        snapshot = asyncio.run(load_update_center(config.update_center_url))
        stored = load_plugins(state) if state else {}
        plugins = [
            prepare_plugin(name, snapshot, config, stored) for name in plugin_names
        ]
    except ProbeConfigurationError as e:
        raise _fail(f"Invalid probe configuration: {e}")
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        raise _fail(str(e))
    except KeyError as e:
        raise _fail(str(e.args[0]))

    github = GitHubClient(token=config.github_token, base_url=config.github_api_url)
    results = asyncio.run(evaluate(engine, plugins, snapshot, github, repositories))

    if state:
        stored.update({plugin.name: plugin for plugin in results})
        save_plugins(state, stored)

    logger.info("=" * 80)
    logger.info("Probe Results Summary:")
    logger.info("=" * 80)
    for plugin in results:
        for key, result in sorted(plugin.details.items()):
            if result.status is ResultStatus.SUCCESS:
                logger.info(f"✓ {plugin.name}/{key}: {result.message}")
            else:
                logger.error(
                    f"✗ {plugin.name}/{key}: {result.status.value} {result.message}"
                )

    output = {
        plugin.name: {
            key: result.model_dump(mode="json")
            for key, result in sorted(plugin.details.items())
        }
        for plugin in results
    }
    typer.echo(json.dumps(output, indent=2))


if __name__ == "__main__":  # pragma: no cover
    app()
