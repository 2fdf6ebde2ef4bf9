"""Joining of EC2 instances and Auto Scaling groups to cluster nodes."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from aws_nodes.logging_config import get_logger
from aws_nodes.models.cloud import InstanceRecord, ScalingGroupRecord

logger = get_logger(__name__)

ASG_TAG_KEY = "aws:autoscaling:groupName"


def index_instances(instances: list[InstanceRecord]) -> Mapping[str, InstanceRecord]:
    """Key instances by instance id."""
    return MappingProxyType({instance.instance_id: instance for instance in instances})


def index_group_capacities(groups: list[ScalingGroupRecord]) -> Mapping[str, str]:
    """Key ``min/max/desired`` capacity strings by group name."""
    return MappingProxyType({group.name: group.capacity for group in groups})


def scaling_group_from_tags(instance: InstanceRecord) -> str:
    """Return the Auto Scaling group an instance belongs to, or ``""``."""
    return instance.tags.get(ASG_TAG_KEY, "")


@dataclass(frozen=True)
class CloudLookup:
    """Instance and group lookups built once per invocation."""

    instances: Mapping[str, InstanceRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )
    group_capacities: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_records(
        cls, instances: list[InstanceRecord], groups: list[ScalingGroupRecord]
    ) -> "CloudLookup":
        return cls(
            instances=index_instances(instances),
            group_capacities=index_group_capacities(groups),
        )

    def instance(self, instance_id: str) -> InstanceRecord | None:
        if not instance_id:
            return None
        return self.instances.get(instance_id)

    def scaling_group(self, instance_id: str) -> tuple[str, str]:
        """Resolve the group name and capacity string for an instance.

        Returns:
            ``(name, capacity)``; either part is ``""`` when it cannot be resolved
        """
        instance = self.instance(instance_id)
        if instance is None:
            if instance_id:
                logger.debug(f"Instance {instance_id} not found in EC2 inventory")
            return "", ""

        name = scaling_group_from_tags(instance)
        if not name:
            return "", ""
        return name, self.group_capacities.get(name, "")


def build_cloud_lookup(cloud) -> CloudLookup:
    """Fetch all instances and groups from the cloud inventory and index them.

    Args:
        cloud: Cloud inventory providing ``list_instances`` and ``list_scaling_groups``

    Raises:
        CloudError: If either listing fails
    """
    instances = cloud.list_instances()
    groups = cloud.list_scaling_groups()
    logger.info(f"Indexed {len(instances)} EC2 instances and {len(groups)} Auto Scaling groups")
    return CloudLookup.from_records(instances, groups)
