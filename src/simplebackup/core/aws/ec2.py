"""EC2 Manager: the single handle through which every remote call is issued."""

from typing import List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from simplebackup.core.models import InstanceInfo, SnapshotInfo, name_tag
from simplebackup.utils.exceptions import (
    CreateError,
    DeleteError,
    DeregisterError,
    DescribeError,
    TagError,
)
from simplebackup.utils.logger import setup_logger

AWS_ERRORS = (ClientError, BotoCoreError)


class EC2Manager:
    """Thin AWS EC2 resource manager bound to one session and region.

    Each method is one remote call (snapshot listing follows pagination).
    Failures surface as ``BackupError`` subclasses; nothing is retried here
    beyond what the botocore client itself is configured to do.
    """

    def __init__(
        self,
        session: boto3.Session,
        region: str,
        client=None,
        log_dir: Optional[str] = None,
        level: str = "INFO",
    ):
        """Initialize EC2Manager."""
        self.session = session
        self.region = region
        self.ec2_client = client or session.client("ec2", region_name=region)
        self.logger = setup_logger(
            __name__, "ec2_manager.log", level=level, log_dir=log_dir
        )

    def describe_instance(self, instance_id: str) -> InstanceInfo:
        """Describe a single instance; a missing instance is a lookup failure."""
        try:
            response = self.ec2_client.describe_instances(InstanceIds=[instance_id])
        except AWS_ERRORS as e:
            raise DescribeError("describe instance", instance_id, e) from e

        for reservation in response.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                return InstanceInfo.from_aws_instance(instance)

        raise DescribeError(
            "describe instance", instance_id, ValueError("instance not found")
        )

    def describe_snapshots(self, volume_id: str) -> List[SnapshotInfo]:
        """List every snapshot of a volume, in provider listing order."""
        snapshots = []
        try:
            paginator = self.ec2_client.get_paginator("describe_snapshots")
            for page in paginator.paginate(
                Filters=[{"Name": "volume-id", "Values": [volume_id]}]
            ):
                for snapshot in page.get("Snapshots", []):
                    snapshots.append(SnapshotInfo.from_aws_snapshot(snapshot))
        except AWS_ERRORS + (KeyError, AttributeError) as e:
            raise DescribeError("describe snapshots of", volume_id, e) from e

        self.logger.debug(f"Found {len(snapshots)} snapshot(s) for {volume_id}")
        return snapshots

    def create_snapshot(self, volume_id: str, description: str) -> str:
        """Create a snapshot of a volume and return its id."""
        try:
            response = self.ec2_client.create_snapshot(
                VolumeId=volume_id, Description=description
            )
        except AWS_ERRORS as e:
            raise CreateError("create snapshot of", volume_id, e) from e

        snapshot_id = response["SnapshotId"]
        self.logger.info(f"Created snapshot {snapshot_id} of {volume_id}")
        return snapshot_id

    def delete_snapshot(self, snapshot_id: str) -> None:
        """Delete a snapshot."""
        try:
            self.ec2_client.delete_snapshot(SnapshotId=snapshot_id)
        except AWS_ERRORS as e:
            raise DeleteError("delete snapshot", snapshot_id, e) from e
        self.logger.info(f"Deleted snapshot {snapshot_id}")

    def create_name_tag(self, resource_id: str, name: str) -> None:
        """Set the ``Name`` tag of a snapshot or image."""
        try:
            self.ec2_client.create_tags(Resources=[resource_id], Tags=name_tag(name))
        except AWS_ERRORS as e:
            raise TagError("set name tag on", resource_id, e) from e
        self.logger.debug(f"Tagged {resource_id} with Name={name!r}")

    def create_image(
        self, instance_id: str, name: str, description: str, no_reboot: bool
    ) -> str:
        """Create an AMI from an instance and return its id."""
        try:
            response = self.ec2_client.create_image(
                InstanceId=instance_id,
                Name=name,
                Description=description,
                NoReboot=no_reboot,
            )
        except AWS_ERRORS as e:
            raise CreateError("create image from", instance_id, e) from e

        image_id = response["ImageId"]
        self.logger.info(f"Created image {image_id} from {instance_id}")
        return image_id

    def deregister_image(self, image_id: str) -> None:
        """Deregister an AMI. Its backing snapshots are left in place."""
        try:
            self.ec2_client.deregister_image(ImageId=image_id)
        except AWS_ERRORS as e:
            raise DeregisterError("deregister image", image_id, e) from e
        self.logger.info(f"Deregistered image {image_id}")
