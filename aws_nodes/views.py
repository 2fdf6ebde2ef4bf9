"""Assembly of per-node display rows for each output mode."""

from datetime import datetime

from aws_nodes.formatting import format_cpu, format_memory, humanize_age
from aws_nodes.identifiers import instance_id_from_provider_id
from aws_nodes.joiner import CloudLookup
from aws_nodes.models.node import NodeRecord
from aws_nodes.models.view import BasicRow, ExtendedRow, OutputMode, ResourceRow
from aws_nodes.resources import NodeTally

INSTANCE_TYPE_LABELS = (
    "node.kubernetes.io/instance-type",
    "beta.kubernetes.io/instance-type",
)


def node_status(node: NodeRecord) -> str:
    """Ready, NotReady or Unknown from the node's Ready condition."""
    for condition in node.conditions:
        if condition.type == "Ready":
            return "Ready" if condition.status == "True" else "NotReady"
    return "Unknown"


def node_instance_type(node: NodeRecord) -> str:
    for label in INSTANCE_TYPE_LABELS:
        if node.labels.get(label):
            return node.labels[label]
    return ""


def node_taints(node: NodeRecord) -> str:
    return ",".join(taint.key for taint in node.taints)


def basic_row(node: NodeRecord, now: datetime | None = None) -> BasicRow:
    return BasicRow(
        name=node.name,
        status=node_status(node),
        age=humanize_age(node.created_at, now),
        version=node.kubelet_version,
        instance_id=instance_id_from_provider_id(node.provider_id),
        instance_type=node_instance_type(node),
        taints=node_taints(node),
    )


def extended_row(node: NodeRecord, lookup: CloudLookup, now: datetime | None = None) -> ExtendedRow:
    """Basic row plus Auto Scaling group name and capacity.

    Nodes without an instance-type label show the type of their EC2 instance.
    """
    row = basic_row(node, now)
    asg, asg_capacity = lookup.scaling_group(row.instance_id)

    instance_type = row.instance_type
    if not instance_type:
        instance = lookup.instance(row.instance_id)
        if instance is not None:
            instance_type = instance.instance_type

    return ExtendedRow(
        **row.model_dump(exclude={"instance_type"}),
        instance_type=instance_type,
        asg=asg,
        asg_capacity=asg_capacity,
    )


def resource_row(node: NodeRecord, tally: NodeTally) -> ResourceRow:
    return ResourceRow(
        name=node.name,
        pods=tally.pod_count,
        cpu_capacity=format_cpu(tally.cpu_capacity_millis),
        cpu_requested=format_cpu(tally.cpu_requested_millis),
        cpu_free=tally.cpu_free_percentage,
        memory_capacity=format_memory(tally.memory_capacity_bytes),
        memory_requested=format_memory(tally.memory_requested_bytes),
        memory_free=tally.memory_free_percentage,
    )


def build_rows(
    mode: OutputMode,
    nodes: list[NodeRecord],
    tallies: dict[str, NodeTally],
    lookup: CloudLookup | None = None,
    now: datetime | None = None,
) -> list[BasicRow | ExtendedRow | ResourceRow]:
    """Build one row per node, keeping the order the cluster reported.

    Args:
        mode: Selected output mode
        nodes: Cluster nodes in API order
        tallies: Per-node resource tallies
        lookup: EC2/Auto Scaling lookups, only consulted in wide mode
        now: Reference time for ages

    Returns:
        Rows of the type matching ``mode``
    """
    if mode is OutputMode.TOP:
        return [resource_row(node, tallies.get(node.name, NodeTally())) for node in nodes]
    if mode is OutputMode.WIDE:
        lookup = lookup or CloudLookup()
        return [extended_row(node, lookup, now) for node in nodes]
    return [basic_row(node, now) for node in nodes]
