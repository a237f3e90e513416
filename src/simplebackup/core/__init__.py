"""Core simplebackup module: EC2 facade, models and constants."""

from .aws import EC2Manager
from .constants import DEFAULT_DESCRIPTION_MARKER, NAME_TAG_KEY
from .models import (
    AMIInfo,
    ImageResult,
    InstanceInfo,
    SnapshotInfo,
    SnapshotState,
)

__all__ = [
    # AWS Managers
    "EC2Manager",
    # Models
    "InstanceInfo",
    "SnapshotInfo",
    "AMIInfo",
    "ImageResult",
    # Enums
    "SnapshotState",
    # Constants
    "DEFAULT_DESCRIPTION_MARKER",
    "NAME_TAG_KEY",
]
