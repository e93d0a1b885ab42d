"""Core utilities and configuration exports."""

from .config import CreateCpConfig, load_config
from .package_name import is_valid_package_name, to_valid_package_name
from .paths import empty_dir, format_target_dir, is_empty

__all__ = [
    "CreateCpConfig",
    "load_config",
    "is_valid_package_name",
    "to_valid_package_name",
    "empty_dir",
    "format_target_dir",
    "is_empty",
]
