"""Simple Instance Data Model

Read-only view of the EC2 instance attributes a backup run consumes."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from simplebackup.core.constants import NAME_TAG_KEY
from simplebackup.core.models.tags import tags_to_dict


@dataclass
class InstanceInfo:
    """Simple instance information model."""
    instance_id: str
    name: str = ""
    volume_ids: List[str] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)

    def get_tag(self, key: str, default: str = "") -> str:
        return self.tags.get(key, default)

    @classmethod
    def from_aws_instance(cls, instance: Dict[str, Any]) -> "InstanceInfo":
        """Create InstanceInfo from AWS instance data.

        Block-device mappings without an ``Ebs`` entry (instance store) carry
        no volume id and are skipped. Provider order is preserved.
        """
        tags = tags_to_dict(instance.get("Tags"))

        volume_ids = []
        for mapping in instance.get("BlockDeviceMappings", []):
            volume_id = mapping.get("Ebs", {}).get("VolumeId")
            if volume_id:
                volume_ids.append(volume_id)

        return cls(
            instance_id=instance["InstanceId"],
            name=tags.get(NAME_TAG_KEY, ""),
            volume_ids=volume_ids,
            tags=tags,
        )
