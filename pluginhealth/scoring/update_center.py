"""Load the update-center snapshot from a file or over HTTP."""

import json
import logging
from pathlib import Path

import aiohttp
from pydantic import ValidationError

from pluginhealth.scoring.models.update_center import UpdateCenter

logger = logging.getLogger(__name__)


def parse_update_center(data: object, source: str) -> UpdateCenter:
    """Validate raw update-center JSON.

    Raises:
        ValueError: If the document doesn't match the schema

    """
    if data is None:
        raise ValueError(f"Empty update center: {source}")

    try:
        return UpdateCenter.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid update center schema in {source}: {e}") from e


def load_update_center_file(path: Path) -> UpdateCenter:
    """Load an update-center snapshot from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the JSON is invalid or doesn't match the schema

    """
    if not path.exists():
        raise FileNotFoundError(f"Update center file not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    return parse_update_center(data, str(path))


async def fetch_update_center(url: str) -> UpdateCenter:
    """Download an update-center snapshot.

    Raises:
        RuntimeError: If the server doesn't answer with 200
        ValueError: If the payload doesn't match the schema

    """
    async with aiohttp.ClientSession() as session:
        async with session.get(url) as response:
            if response.status != 200:
                text = await response.text()
                raise RuntimeError(
                    f"Failed to fetch update center: {response.status} {text}"
                )
            data = await response.json(content_type=None)

    return parse_update_center(data, url)


async def load_update_center(location: str) -> UpdateCenter:
    """Load a snapshot from a URL or a local path."""
    if location.startswith(("http://", "https://")):
        logger.info(f"Fetching update center from {location}")
        return await fetch_update_center(location)

    logger.info(f"Reading update center from {location}")
    return load_update_center_file(Path(location))
