"""Simple data models for AWS EBS snapshot management."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from simplebackup.core.models.tags import tags_to_dict


class SnapshotState(Enum):
    """EBS Snapshot states."""
    PENDING = "pending"
    COMPLETED = "completed"
    ERROR = "error"


def snapshot_description(marker: str, volume_id: str) -> str:
    """Description stamped on snapshots we create for ``volume_id``."""
    return f"{marker} {volume_id}"


@dataclass
class SnapshotInfo:
    """Simple snapshot information model."""
    snapshot_id: str
    volume_id: str
    start_time: datetime
    state: str = SnapshotState.COMPLETED.value
    description: str = ""
    tags: Dict[str, str] = field(default_factory=dict)

    @property
    def created_at(self) -> int:
        """Creation time in seconds since the epoch."""
        return int(self.start_time.timestamp())

    @property
    def is_completed(self) -> bool:
        return self.state == SnapshotState.COMPLETED.value

    def get_tag(self, key: str, default: str = "") -> str:
        return self.tags.get(key, default)

    def is_owned_by(self, marker: str, volume_id: Optional[str] = None) -> bool:
        """True when this snapshot was created by us for ``volume_id``.

        Matching is exact on the whole description, so a marker written for
        one volume never matches while rotating another.
        """
        volume_id = volume_id or self.volume_id
        return self.description == snapshot_description(marker, volume_id)

    @classmethod
    def from_aws_snapshot(cls, snapshot: Dict[str, Any]) -> "SnapshotInfo":
        """Create SnapshotInfo from AWS snapshot data."""
        start_time = snapshot["StartTime"]
        if start_time.tzinfo is None:
            start_time = start_time.replace(tzinfo=timezone.utc)

        return cls(
            snapshot_id=snapshot["SnapshotId"],
            volume_id=snapshot.get("VolumeId", ""),
            start_time=start_time,
            state=snapshot.get("State", SnapshotState.COMPLETED.value),
            description=snapshot.get("Description", ""),
            tags=tags_to_dict(snapshot.get("Tags")),
        )
