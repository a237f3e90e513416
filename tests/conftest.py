"""Shared fixtures for simplebackup tests."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set

os.environ.setdefault("LOG_PATH", tempfile.mkdtemp(prefix="simplebackup-logs-"))

import boto3
import pytest
from botocore.stub import Stubber

from simplebackup.core.aws.ec2 import EC2Manager
from simplebackup.core.models import InstanceInfo, SnapshotInfo
from simplebackup.utils.exceptions import (
    CreateError,
    DeleteError,
    DeregisterError,
    DescribeError,
    TagError,
)

MARKER = "Created by simplebackup/ec2 from"


class FakeEC2:
    """In-memory stand-in for EC2Manager that records every call.

    ``fail_on`` maps a method name to the resource ids it should fail for;
    failures raise the same error class the real manager would.
    """

    ERRORS = {
        "describe_instance": (DescribeError, "describe instance"),
        "describe_snapshots": (DescribeError, "describe snapshots of"),
        "create_snapshot": (CreateError, "create snapshot of"),
        "delete_snapshot": (DeleteError, "delete snapshot"),
        "create_name_tag": (TagError, "set name tag on"),
        "create_image": (CreateError, "create image from"),
        "deregister_image": (DeregisterError, "deregister image"),
    }

    def __init__(self) -> None:
        self.region = "ap-northeast-1"
        self.instances: Dict[str, InstanceInfo] = {}
        self.snapshots: List[SnapshotInfo] = []
        self.images: Dict[str, dict] = {}
        self.tags: Dict[str, str] = {}
        self.calls: List[tuple] = []
        self.fail_on: Dict[str, Set[str]] = {}
        self._seq = 0

    def _record(self, method: str, resource_id: str) -> None:
        self.calls.append((method, resource_id))
        if resource_id in self.fail_on.get(method, set()):
            error_class, operation = self.ERRORS[method]
            raise error_class(operation, resource_id, RuntimeError("simulated failure"))

    def _next_id(self, prefix: str) -> str:
        self._seq += 1
        return f"{prefix}-{self._seq:04d}"

    def calls_to(self, method: str) -> List[str]:
        return [resource_id for name, resource_id in self.calls if name == method]

    # Test setup helpers

    def add_instance(
        self, instance_id: str, name: str = "", volume_ids: Optional[List[str]] = None
    ) -> InstanceInfo:
        instance = InstanceInfo(
            instance_id=instance_id,
            name=name,
            volume_ids=list(volume_ids or []),
            tags={"Name": name} if name else {},
        )
        self.instances[instance_id] = instance
        return instance

    def add_snapshot(
        self,
        snapshot_id: str,
        volume_id: str,
        timestamp: float,
        description: Optional[str] = None,
    ) -> SnapshotInfo:
        snapshot = SnapshotInfo(
            snapshot_id=snapshot_id,
            volume_id=volume_id,
            start_time=datetime.fromtimestamp(timestamp, tz=timezone.utc),
            description=f"{MARKER} {volume_id}" if description is None else description,
        )
        self.snapshots.append(snapshot)
        return snapshot

    def snapshot_ids(self, volume_id: Optional[str] = None) -> List[str]:
        return [
            s.snapshot_id
            for s in self.snapshots
            if volume_id is None or s.volume_id == volume_id
        ]

    # EC2Manager interface

    def describe_instance(self, instance_id: str) -> InstanceInfo:
        self._record("describe_instance", instance_id)
        if instance_id not in self.instances:
            raise DescribeError(
                "describe instance", instance_id, ValueError("instance not found")
            )
        return self.instances[instance_id]

    def describe_snapshots(self, volume_id: str) -> List[SnapshotInfo]:
        self._record("describe_snapshots", volume_id)
        return [s for s in self.snapshots if s.volume_id == volume_id]

    def create_snapshot(self, volume_id: str, description: str) -> str:
        self._record("create_snapshot", volume_id)
        snapshot_id = self._next_id("snap")
        self.snapshots.append(
            SnapshotInfo(
                snapshot_id=snapshot_id,
                volume_id=volume_id,
                start_time=datetime.now(timezone.utc),
                state="pending",
                description=description,
            )
        )
        return snapshot_id

    def delete_snapshot(self, snapshot_id: str) -> None:
        self._record("delete_snapshot", snapshot_id)
        self.snapshots = [s for s in self.snapshots if s.snapshot_id != snapshot_id]

    def create_name_tag(self, resource_id: str, name: str) -> None:
        self._record("create_name_tag", resource_id)
        self.tags[resource_id] = name

    def create_image(
        self, instance_id: str, name: str, description: str, no_reboot: bool
    ) -> str:
        self._record("create_image", instance_id)
        image_id = self._next_id("ami")
        self.images[image_id] = {
            "instance_id": instance_id,
            "name": name,
            "description": description,
            "no_reboot": no_reboot,
        }
        return image_id

    def deregister_image(self, image_id: str) -> None:
        self._record("deregister_image", image_id)
        self.images.pop(image_id, None)


@pytest.fixture
def fake_ec2() -> FakeEC2:
    return FakeEC2()


@pytest.fixture
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Dummy credentials so no test can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def ec2_client(aws_credentials: None):
    return boto3.client("ec2", region_name="us-east-1")


@pytest.fixture
def stubber(ec2_client):
    with Stubber(ec2_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def manager(ec2_client, stubber) -> EC2Manager:
    return EC2Manager(session=None, region="us-east-1", client=ec2_client)
