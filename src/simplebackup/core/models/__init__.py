"""Simple data models for AWS resources."""

# Instance models
from .instance import InstanceInfo

# Snapshot models
from .snapshot import (
    SnapshotState,
    SnapshotInfo,
    snapshot_description,
)

# AMI models
from .ami import (
    AMIInfo,
    ImageResult,
    image_description,
)

# Tag helpers
from .tags import name_tag, tags_to_dict

__all__ = [
    # Instance models
    "InstanceInfo",
    # Snapshot models
    "SnapshotState",
    "SnapshotInfo",
    "snapshot_description",
    # AMI models
    "AMIInfo",
    "ImageResult",
    "image_description",
    # Tag helpers
    "name_tag",
    "tags_to_dict",
]
