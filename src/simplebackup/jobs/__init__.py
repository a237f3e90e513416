"""simplebackup jobs package."""

from .base import BaseJob
from .create_snapshots import CreateSnapshotsJob
from .rotate_snapshots import RotateSnapshotJob, RotateSnapshotsJob, select_for_deletion
from .register_image import RegisterImageJob
from .deregister_image import DeregisterImageJob

__all__ = [
    "BaseJob",
    "CreateSnapshotsJob",
    "RotateSnapshotJob",
    "RotateSnapshotsJob",
    "select_for_deletion",
    "RegisterImageJob",
    "DeregisterImageJob",
]
