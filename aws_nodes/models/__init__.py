"""Data models for nodes, pods, cloud inventory and rendered rows."""

from aws_nodes.models.cloud import InstanceRecord, ScalingGroupRecord
from aws_nodes.models.config import InspectorConfig
from aws_nodes.models.node import (
    ContainerRequests,
    NodeCondition,
    NodeRecord,
    NodeTaint,
    PodRecord,
)
from aws_nodes.models.view import BasicRow, ExtendedRow, OutputMode, ResourceRow

__all__ = [
    "BasicRow",
    "ContainerRequests",
    "ExtendedRow",
    "InspectorConfig",
    "InstanceRecord",
    "NodeCondition",
    "NodeRecord",
    "NodeTaint",
    "OutputMode",
    "PodRecord",
    "ResourceRow",
    "ScalingGroupRecord",
]
