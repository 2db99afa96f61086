"""Load scoring configuration from YAML files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from pluginhealth.scoring.models.config import ScoringConfig


def load_config(config_path: Path) -> ScoringConfig:
    """Load scoring configuration.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Parsed configuration

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If YAML is invalid or doesn't match schema

    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty config file: {config_path}")

    try:
        return ScoringConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config schema in {config_path}: {e}") from e
