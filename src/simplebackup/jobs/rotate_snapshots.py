#!/usr/bin/env python3
"""
Rotate Snapshots Job

Keeps the N most recent snapshots this tool created for a volume and
deletes the rest, oldest first. Snapshots whose description does not carry
our marker for that exact volume are never touched.

The listing and the deletes are separate calls: another actor may create or
delete snapshots in between, and EC2 offers nothing to guard against that.
"""

from typing import List

from .base import BaseJob
from simplebackup.core.models import SnapshotInfo
from simplebackup.utils.exceptions import BackupError


def select_for_deletion(
    snapshots: List[SnapshotInfo], volume_id: str, marker: str, keep: int
) -> List[SnapshotInfo]:
    """
    Pick the owned snapshots that fall outside the retention count.

    Args:
        snapshots: Snapshots of the volume, in listing order
        volume_id: Volume being rotated
        marker: Ownership marker
        keep: Number of owned snapshots to retain; values below 0 act as 0

    Returns:
        Snapshots to delete, oldest first. Start times are compared in whole
        seconds; snapshots started within the same second keep listing order.
    """
    owned = [s for s in snapshots if s.is_owned_by(marker, volume_id)]
    owned.sort(key=lambda s: s.created_at)
    excess = len(owned) - max(keep, 0)
    return owned[:excess] if excess > 0 else []


class RotateSnapshotJob(BaseJob):
    """Job to prune one volume's snapshots to a retention count"""

    def __init__(self, ec2, marker=None, **kwargs):
        super().__init__(ec2, marker=marker, job_name="rotate_snapshots", **kwargs)

    def execute(self, volume_id: str, keep: int) -> List[str]:
        """
        Delete the oldest owned snapshots of a volume beyond ``keep``.

        Returns:
            Ids of the deleted snapshots, in deletion order
        """
        try:
            snapshots = self.ec2.describe_snapshots(volume_id)
        except BackupError as e:
            raise e.wrap(f"rotate snapshots of {volume_id}") from e

        to_delete = select_for_deletion(snapshots, volume_id, self.marker, keep)
        if not to_delete:
            self.log(f"{volume_id}: nothing to rotate (keep={keep})")
            return []

        deleted = []
        for snapshot in to_delete:
            try:
                self.ec2.delete_snapshot(snapshot.snapshot_id)
            except BackupError as e:
                raise e.wrap(f"rotate snapshots of {volume_id}") from e
            deleted.append(snapshot.snapshot_id)

        self.log(f"{volume_id}: deleted {len(deleted)} snapshot(s), keep={keep}")
        return deleted


class RotateSnapshotsJob(RotateSnapshotJob):
    """Job to rotate the snapshots of every volume attached to an instance"""

    def execute(self, instance_id: str, keep: int) -> List[str]:
        """
        Rotate each attached volume in turn, stopping at the first failure.

        Returns:
            Ids of every deleted snapshot across all volumes
        """
        try:
            volume_ids = self.volume_ids_of(instance_id)
        except BackupError as e:
            raise e.wrap(f"rotate snapshots of {instance_id}") from e

        deleted = []
        for volume_id in volume_ids:
            try:
                deleted.extend(super().execute(volume_id, keep))
            except BackupError as e:
                raise e.wrap(f"rotate snapshots of {instance_id}") from e
        return deleted
