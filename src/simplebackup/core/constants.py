#!/usr/bin/env python3
"""Core constants for simplebackup."""

# Ownership marker prefixed to every snapshot and image description we create
DEFAULT_DESCRIPTION_MARKER = "Created by simplebackup/ec2 from"
NAME_TAG_KEY = "Name"

# AWS Service Constants
DEFAULT_AWS_REGION = "ap-northeast-1"
DEFAULT_KEEP = 5

# Logging Constants
DEFAULT_LOG_PATH = "logs"
