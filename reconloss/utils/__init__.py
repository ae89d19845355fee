from .arrays import as_dense, check_sizes
from .config import load_config, save_config, merge_config, get_default_config

__all__ = [
    "as_dense",
    "check_sizes",
    "load_config",
    "save_config",
    "merge_config",
    "get_default_config",
]
