"""Helpers for converting between AWS tag lists and plain dictionaries."""

from typing import Any, Dict, List, Optional

from simplebackup.core.constants import NAME_TAG_KEY


def tags_to_dict(tags: Optional[List[Dict[str, Any]]]) -> Dict[str, str]:
    """Convert an AWS ``[{"Key": ..., "Value": ...}]`` list into a dict."""
    result = {}
    for tag in tags or []:
        if tag.get("Key"):
            result[tag["Key"]] = tag.get("Value", "")
    return result


def name_tag(value: str) -> List[Dict[str, str]]:
    """Build the ``Tags`` argument that sets a resource's display name."""
    return [{"Key": NAME_TAG_KEY, "Value": value}]
