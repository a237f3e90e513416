"""Base job class for backup operations."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
import uuid

from simplebackup.core.aws.ec2 import EC2Manager
from simplebackup.core.constants import DEFAULT_DESCRIPTION_MARKER
from simplebackup.utils.logger import setup_logger


class BaseJob(ABC):
    """Base class for all backup jobs.

    A job is bound to one EC2Manager and one ownership marker. Jobs run
    their remote calls strictly in sequence and stop at the first failure.
    """

    def __init__(
        self,
        ec2: EC2Manager,
        marker: Optional[str] = None,
        job_name: Optional[str] = None,
        log_dir: Optional[str] = None,
        level: str = "INFO",
    ):
        """Initialize the job with its EC2 handle and ownership marker."""
        self.ec2 = ec2
        self.marker = marker or DEFAULT_DESCRIPTION_MARKER
        self.job_name = job_name or self.__class__.__name__.lower().replace("job", "")
        self.correlation_id = str(uuid.uuid4())[:8]  # Short correlation ID for tracking

        self.logger = setup_logger(
            name=self.__class__.__module__,
            log_file=f"{self.job_name}.log",
            level=level,
            log_dir=log_dir,
        )

    def log(self, message: str) -> None:
        self.logger.info(f"[{self.correlation_id}] {message}")

    def volume_ids_of(self, instance_id: str) -> List[str]:
        """Resolve the EBS volumes currently attached to an instance."""
        return self.ec2.describe_instance(instance_id).volume_ids

    @abstractmethod
    def execute(self, *args, **kwargs) -> Any:
        """Execute the job with given parameters."""
        pass
