"""simplebackup: EC2 snapshot rotation and AMI backups."""

__version__ = "1.0.0"
