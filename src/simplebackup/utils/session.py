#!/usr/bin/env python3
"""
utils/session.py

Session management utilities for AWS interactions.

Builds the boto3 session and EC2 client every backup operation goes through.
"""

import os
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from simplebackup.core.aws.ec2 import EC2Manager
from simplebackup.utils.exceptions import ConnectError
from simplebackup.utils.logger import setup_logger


class SessionManager:
    """Manages AWS sessions and credential handling."""

    @classmethod
    def get_session(
        cls,
        region: str,
        profile: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        session_token: Optional[str] = None,
    ) -> boto3.Session:
        """Create a boto3 Session from a profile, explicit keys, or the default chain."""
        if bool(access_key_id) != bool(secret_access_key):
            raise ValueError(
                "access_key_id and secret_access_key must be given together"
            )

        return boto3.Session(
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            aws_session_token=session_token,
            region_name=region,
            profile_name=profile,
        )

    @classmethod
    def get_session_from_env(cls, region: str) -> boto3.Session:
        """Create a boto3 Session from environment variables.

        Expected environment variables:
        - AWS_ACCESS_KEY_ID
        - AWS_SECRET_ACCESS_KEY
        - AWS_SESSION_TOKEN (optional)
        """
        access_key = os.getenv("AWS_ACCESS_KEY_ID")
        secret_key = os.getenv("AWS_SECRET_ACCESS_KEY")

        if not access_key or not secret_key:
            raise ValueError(
                "Missing required environment variables. "
                "Please set AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY."
            )

        return cls.get_session(
            region,
            access_key_id=access_key,
            secret_access_key=secret_key,
            session_token=os.getenv("AWS_SESSION_TOKEN"),
        )


def connect(
    region: str,
    profile: Optional[str] = None,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    max_attempts: Optional[int] = None,
    log_dir: Optional[str] = None,
    level: str = "INFO",
) -> EC2Manager:
    """Build an EC2Manager bound to one region and credential set.

    Raises ConnectError when the session or client cannot be constructed;
    no remote call has been attempted at that point.
    """
    log = setup_logger(__name__, "session.log", level=level, log_dir=log_dir)
    if not region:
        raise ConnectError("connect", cause=ValueError("region is required"))

    try:
        session = SessionManager.get_session(
            region,
            profile=profile,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
        )
        client_config = None
        if max_attempts is not None:
            client_config = Config(
                retries={"max_attempts": max_attempts, "mode": "standard"}
            )
        client = session.client("ec2", region_name=region, config=client_config)
    except (BotoCoreError, ClientError, ValueError) as e:
        raise ConnectError("connect to ec2 in", region, e) from e

    log.debug(
        f"Connected to EC2 in {region}"
        + (f" with profile {profile}" if profile else "")
    )
    return EC2Manager(
        session, region, client=client, log_dir=log_dir, level=level
    )
