"""Resource record model for a VPC as reported by the provider."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

NAME_TAG_KEY = "Name"


def parse_tags(tags: Optional[list]) -> Dict[str, str]:
    """Convert an AWS ``[{"Key": ..., "Value": ...}]`` tag list to a dict."""
    result: Dict[str, str] = {}
    for tag in tags or []:
        result[tag["Key"]] = tag.get("Value", "")
    return result


@dataclass(frozen=True)
class ResourceRecord:
    """Point-in-time observation of one provider-side VPC.

    Not owned by this system, merely observed. Listing order is preserved
    by whoever builds the sequence of records.

    Attributes:
        id: Provider-assigned VPC ID (e.g., "vpc-0abc1234")
        name_tag: Value of the Name tag, None when the tag is absent
        region: AWS region the VPC lives in
        tags: All tags attached to the VPC
        state: VPC state reported by the provider ("available", "pending")
        cidr_block: Primary IPv4 CIDR block
        is_default: Whether this is the region's default VPC
    """

    id: str
    name_tag: Optional[str]
    region: str
    tags: Dict[str, str] = field(default_factory=dict, compare=False)
    state: str = "available"
    cidr_block: Optional[str] = None
    is_default: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Resource id cannot be empty")
        if not self.region:
            raise ValueError(f"Resource {self.id} has no region")

    @property
    def has_name_tag(self) -> bool:
        """True when the record carries a non-empty Name tag."""
        return bool(self.name_tag)

    @classmethod
    def from_describe_vpc(cls, vpc: Dict[str, Any], region: str) -> "ResourceRecord":
        """Build a record from one item of an EC2 ``describe_vpcs`` response."""
        tags = parse_tags(vpc.get("Tags"))
        return cls(
            id=vpc["VpcId"],
            name_tag=tags.get(NAME_TAG_KEY),
            region=region,
            tags=tags,
            state=vpc.get("State", "available"),
            cidr_block=vpc.get("CidrBlock"),
            is_default=vpc.get("IsDefault", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary for reporting."""
        return {
            "id": self.id,
            "name_tag": self.name_tag,
            "region": self.region,
            "state": self.state,
            "cidr_block": self.cidr_block,
            "is_default": self.is_default,
            "tags": dict(self.tags),
        }
