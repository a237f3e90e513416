# utils/__init__.py

from .logger import setup_logger
from .exceptions import (
    BackupError,
    CLIError,
    ConnectError,
    CreateError,
    DeleteError,
    DeregisterError,
    DescribeError,
    TagError,
)
from .config import ConfigManager

__all__ = [
    "setup_logger",
    "BackupError",
    "CLIError",
    "ConnectError",
    "CreateError",
    "DeleteError",
    "DeregisterError",
    "DescribeError",
    "TagError",
    "ConfigManager",
]
