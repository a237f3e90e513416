"""Function-style entry points over the backup jobs.

    ec2 = connect("ap-northeast-1", profile="backup")
    create_snapshots(ec2, "i-0123456789abcdef0")
    rotate_snapshots(ec2, "i-0123456789abcdef0", keep=5)
"""

from typing import List, Optional

from simplebackup.core.aws.ec2 import EC2Manager
from simplebackup.core.models import ImageResult
from simplebackup.jobs import (
    CreateSnapshotsJob,
    DeregisterImageJob,
    RegisterImageJob,
    RotateSnapshotJob,
    RotateSnapshotsJob,
)
from simplebackup.utils.session import connect


def create_snapshots(
    ec2: EC2Manager, instance_id: str, marker: Optional[str] = None
) -> List[str]:
    return CreateSnapshotsJob(ec2, marker=marker).execute(instance_id)


def rotate_snapshot(
    ec2: EC2Manager, volume_id: str, keep: int, marker: Optional[str] = None
) -> List[str]:
    return RotateSnapshotJob(ec2, marker=marker).execute(volume_id, keep)


def rotate_snapshots(
    ec2: EC2Manager, instance_id: str, keep: int, marker: Optional[str] = None
) -> List[str]:
    return RotateSnapshotsJob(ec2, marker=marker).execute(instance_id, keep)


def register_image(
    ec2: EC2Manager,
    instance_id: str,
    no_reboot: bool = True,
    marker: Optional[str] = None,
) -> ImageResult:
    return RegisterImageJob(ec2, marker=marker).execute(instance_id, no_reboot)


def deregister_image(ec2: EC2Manager, image_id: str) -> None:
    DeregisterImageJob(ec2).execute(image_id)


__all__ = [
    "connect",
    "create_snapshots",
    "rotate_snapshot",
    "rotate_snapshots",
    "register_image",
    "deregister_image",
]
