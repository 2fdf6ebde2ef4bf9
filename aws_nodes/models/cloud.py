"""Data models for EC2 instances and Auto Scaling groups."""

from pydantic import BaseModel, Field, field_validator


class InstanceRecord(BaseModel):
    """An EC2 instance as returned by DescribeInstances."""

    instance_id: str
    instance_type: str = ""
    state: str = ""
    tags: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_boto(cls, data: dict) -> "InstanceRecord":
        """Parse from a boto3 ``Instances`` entry."""
        tags = {}
        for tag in data.get("Tags", []):
            if tag.get("Key") is not None and tag.get("Value") is not None:
                tags[tag["Key"]] = tag["Value"]

        return cls(
            instance_id=data["InstanceId"],
            instance_type=data.get("InstanceType", ""),
            state=data.get("State", {}).get("Name", ""),
            tags=tags,
        )


class ScalingGroupRecord(BaseModel):
    """An Auto Scaling group and its size limits."""

    name: str
    min_size: int
    max_size: int
    desired_capacity: int

    @field_validator("min_size", "max_size", "desired_capacity")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate group sizes are not negative."""
        if v < 0:
            raise ValueError(f"group size cannot be negative, got {v}")
        return v

    @property
    def capacity(self) -> str:
        """Capacity formatted as min/max/desired."""
        return f"{self.min_size}/{self.max_size}/{self.desired_capacity}"

    @classmethod
    def from_boto(cls, data: dict) -> "ScalingGroupRecord":
        """Parse from a boto3 ``AutoScalingGroups`` entry."""
        return cls(
            name=data["AutoScalingGroupName"],
            min_size=data.get("MinSize", 0),
            max_size=data.get("MaxSize", 0),
            desired_capacity=data.get("DesiredCapacity", 0),
        )
