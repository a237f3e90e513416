"""Simple data models for AWS AMI management."""

from dataclasses import dataclass
from typing import Optional

from simplebackup.utils.exceptions import TagError


def image_description(marker: str, instance_id: str, timestamp: int) -> str:
    """Name and description stamped on images we create."""
    return f"{marker} {instance_id} at {timestamp}"


@dataclass
class AMIInfo:
    """Simple AMI information model."""
    image_id: str
    name: str
    description: str = ""
    instance_id: str = ""


@dataclass
class ImageResult:
    """Outcome of registering an image.

    ``tag_error`` is set when the image was created but naming it failed;
    the image exists either way and ``image.image_id`` is always valid.
    """
    image: AMIInfo
    tag_error: Optional[TagError] = None

    @property
    def image_id(self) -> str:
        return self.image.image_id

    @property
    def ok(self) -> bool:
        return self.tag_error is None
