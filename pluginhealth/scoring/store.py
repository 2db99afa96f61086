"""JSON file store for plugin records between runs."""

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from pluginhealth.scoring.models.plugin import Plugin

logger = logging.getLogger(__name__)

_plugins_adapter = TypeAdapter(dict[str, Plugin])


def load_plugins(state_path: Path) -> dict[str, Plugin]:
    """Read stored plugins keyed by name.

    A missing file yields an empty mapping.

    Raises:
        ValueError: If the file is not valid JSON or doesn't match the schema

    """
    if not state_path.exists():
        logger.info(f"No state file at {state_path}, starting fresh")
        return {}

    try:
        return _plugins_adapter.validate_json(state_path.read_bytes())
    except ValidationError as e:
        raise ValueError(f"Invalid state file {state_path}: {e}") from e


def save_plugins(state_path: Path, plugins: dict[str, Plugin]) -> None:
    """Write plugins to the state file, replacing its content."""
    payload = {
        name: plugin.model_dump(mode="json") for name, plugin in sorted(plugins.items())
    }
    state_path.parent.mkdir(parents=True, exist_ok=True)
    state_path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n")
    logger.info(f"Saved {len(plugins)} plugins to {state_path}")
