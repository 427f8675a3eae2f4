"""Static region and bucket naming rules."""

import re
from typing import Optional

from .core.exceptions import ConfigurationError

VALID_REGIONS = frozenset(
    {
        "us-gov-west-1",
        "us-gov-east-1",
        "us-east-1",
        "us-east-2",
        "us-west-1",
        "us-west-2",
        "eu-west-1",
        "eu-west-2",
        "eu-west-3",
        "eu-central-1",
        "eu-north-1",
        "ap-south-1",
        "ap-southeast-1",
        "ap-southeast-2",
        "ap-northeast-1",
        "ap-northeast-2",
        "sa-east-1",
        "cn-north-1",
        "cn-northwest-1",
        "ca-central-1",
    }
)

_BUCKET_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]$")
_IPV4_PATTERN = re.compile(r"^\d{1,3}(\.\d{1,3}){3}$")


def sorted_regions() -> list[str]:
    """Return the accepted regions in a stable order."""
    return sorted(VALID_REGIONS)


def validate_region(region: Optional[str], label: str = "region") -> str:
    """Check that a region belongs to the supported set.

    Raises:
        ConfigurationError: If the region is empty or unknown
    """
    if not region or region not in VALID_REGIONS:
        raise ConfigurationError(
            f"invalid {label} [{region}] please use following supported "
            f"regions {sorted_regions()}"
        )
    return region


def is_valid_bucket_name(name: Optional[str]) -> bool:
    """Return True when name follows S3 bucket naming rules."""
    if not name or not _BUCKET_NAME_PATTERN.match(name):
        return False
    if ".." in name or ".-" in name or "-." in name:
        return False
    return not _IPV4_PATTERN.match(name)


def validate_bucket_name(name: Optional[str], label: str = "bucketName") -> str:
    """Check a bucket name, raising ConfigurationError when it is unusable."""
    if not is_valid_bucket_name(name):
        raise ConfigurationError(
            f"invalid {label} [{name}] bucket names must be 3-63 lowercase "
            "letters, digits, dots or hyphens"
        )
    assert name is not None
    return name
