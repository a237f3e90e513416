#!/usr/bin/env python3

from .base import BaseJob


class DeregisterImageJob(BaseJob):
    """Job to deregister an AMI"""

    def __init__(self, ec2, marker=None, **kwargs):
        super().__init__(ec2, marker=marker, job_name="deregister_image", **kwargs)

    def execute(self, image_id: str) -> None:
        # Backing snapshots stay behind and are not tracked.
        self.ec2.deregister_image(image_id)
        self.log(f"Deregistered image {image_id}")
