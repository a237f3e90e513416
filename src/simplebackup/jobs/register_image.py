#!/usr/bin/env python3

import time

from .base import BaseJob
from simplebackup.core.models import AMIInfo, ImageResult, image_description
from simplebackup.utils.exceptions import BackupError, TagError


class RegisterImageJob(BaseJob):
    """Job to create an AMI from an EC2 instance"""

    def __init__(self, ec2, marker=None, **kwargs):
        super().__init__(ec2, marker=marker, job_name="register_image", **kwargs)

    def execute(self, instance_id: str, no_reboot: bool = True) -> ImageResult:
        """Create an AMI from the instance and name it after the instance.

        Lookup and creation failures raise. A failure to tag the new image
        does not: the image exists, so the result carries its id together
        with the TagError.
        """
        try:
            instance = self.ec2.describe_instance(instance_id)
        except BackupError as e:
            raise e.wrap(f"register image of {instance_id}") from e

        description = image_description(self.marker, instance_id, int(time.time()))
        try:
            image_id = self.ec2.create_image(
                instance_id, description, description, no_reboot
            )
        except BackupError as e:
            raise e.wrap(f"register image of {instance_id}") from e

        image = AMIInfo(
            image_id=image_id,
            name=description,
            description=description,
            instance_id=instance_id,
        )

        try:
            self.ec2.create_name_tag(image_id, instance.name)
        except TagError as e:
            self.logger.warning(
                f"[{self.correlation_id}] Created image {image_id}, but failed to set name tag: {e}"
            )
            return ImageResult(
                image=image,
                tag_error=e.wrap(f"register image of {instance_id}"),
            )

        self.log(f"Registered image {image_id} from {instance_id} (no_reboot={no_reboot})")
        return ImageResult(image=image)
