#!/usr/bin/env python3

from typing import List

from .base import BaseJob
from simplebackup.core.models import snapshot_description
from simplebackup.utils.exceptions import BackupError


class CreateSnapshotsJob(BaseJob):
    """Job to snapshot every volume attached to an instance"""

    def __init__(self, ec2, marker=None, **kwargs):
        super().__init__(ec2, marker=marker, job_name="create_snapshots", **kwargs)

    def execute(self, instance_id: str) -> List[str]:
        """
        Snapshot each attached volume and name it after the instance.

        Volumes are processed in the order EC2 reports them. The first
        failure aborts the run; snapshots created before it are kept, tagged
        or not depending on where the failure happened.

        Returns:
            Ids of the snapshots created, in creation order
        """
        try:
            instance = self.ec2.describe_instance(instance_id)
        except BackupError as e:
            raise e.wrap(f"create snapshots of {instance_id}") from e

        if not instance.volume_ids:
            self.log(f"No volumes attached to {instance_id}, nothing to snapshot")
            return []

        created = []
        for volume_id in instance.volume_ids:
            try:
                snapshot_id = self.ec2.create_snapshot(
                    volume_id, snapshot_description(self.marker, volume_id)
                )
                created.append(snapshot_id)
                self.ec2.create_name_tag(snapshot_id, instance.name)
            except BackupError as e:
                self.logger.error(
                    f"[{self.correlation_id}] Stopped after {len(created)} snapshot(s): {e}"
                )
                raise e.wrap(f"create snapshots of {instance_id}") from e

            self.log(f"Snapshot {snapshot_id} of {volume_id} named {instance.name!r}")

        return created
