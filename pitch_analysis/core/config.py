"""Configuration loading for zone classification and ranking thresholds."""

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .types import ZoneConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "configs" / "zone_config.yaml"


def config_from_dict(data: Dict[str, Any]) -> ZoneConfig:
    """Build a ZoneConfig, ignoring keys it does not know."""
    known = {f.name for f in fields(ZoneConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")
    config = ZoneConfig(**{k: v for k, v in data.items() if k in known})
    validate_config(config)
    return config


def validate_config(config: ZoneConfig):
    if config.near_target_ratio < 0:
        raise ValueError("near_target_ratio must be non-negative")
    if config.edge_margin < 0 or config.miss_threshold < 0:
        raise ValueError("edge_margin and miss_threshold must be non-negative")
    if config.player_min_samples < 0 or config.team_min_samples < 0:
        raise ValueError("min sample thresholds must be non-negative")
    if config.top_performers < 1:
        raise ValueError("top_performers must be at least 1")


def load_config(path: Optional[str] = None) -> ZoneConfig:
    """Load thresholds from YAML, using defaults when the file is missing."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.info(f"No config at {config_path}, using defaults")
        return ZoneConfig()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    # Thresholds may be nested under a top-level "zones" section.
    data = data.get('zones', data)
    return config_from_dict(data)
