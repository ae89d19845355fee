"""
Configuration utilities.
"""

import copy
import yaml
from typing import Dict, Any, Optional
from pathlib import Path


def load_config(config_path: str, defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file
        defaults: Optional dictionary the loaded values are merged over

    Returns:
        Configuration dictionary
    """
    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}
    if defaults is None:
        return loaded
    return merge_config(defaults, loaded)


def save_config(config: Dict[str, Any], config_path: str):
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        config_path: Path to save config
    """
    Path(config_path).parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False)


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_default_config() -> Dict[str, Any]:
    """
    Get default configuration.

    Returns:
        Default configuration dictionary
    """
    return {
        "loss": {
            "reduction": "sum",
            "distribution": "bernoulli",
            "distribution_kwargs": {},
        },
        "training": {
            "epochs": 200,
            "learning_rate": 0.05,
            "num_samples": 512,
            "latent_dim": 4,
            "output_dim": 32,
            "seed": 0,
        },
    }
