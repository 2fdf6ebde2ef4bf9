"""Workflows for one plugin invocation: the node listing and the console link."""

from collections.abc import Callable
from datetime import datetime

from aws_nodes.cluster import ClusterInventory
from aws_nodes.console import ConsoleLink, ConsoleTarget, console_url
from aws_nodes.exceptions import NodeLookupError
from aws_nodes.identifiers import instance_id_from_provider_id
from aws_nodes.joiner import (
    CloudLookup,
    build_cloud_lookup,
    index_instances,
    scaling_group_from_tags,
)
from aws_nodes.logging_config import get_logger
from aws_nodes.models.config import InspectorConfig
from aws_nodes.resources import aggregate_node_resources
from aws_nodes.views import build_rows

logger = get_logger(__name__)


def collect_rows(
    settings: InspectorConfig,
    cluster: ClusterInventory,
    cloud_factory: Callable[[], object] | None = None,
    now: datetime | None = None,
) -> list:
    """List nodes and pods and assemble the rows for the selected mode.

    The cloud inventory is only created in wide mode, so the other modes work
    without AWS credentials.

    Args:
        settings: Invocation settings
        cluster: Cluster inventory
        cloud_factory: Callable returning a cloud inventory
        now: Reference time for node ages

    Raises:
        KubernetesError: If nodes or pods cannot be listed
        CloudError: If instances or groups cannot be listed in wide mode
        ConfigurationError: If AWS configuration is missing in wide mode
    """
    nodes = cluster.list_nodes()
    pods = cluster.list_pods()
    tallies = aggregate_node_resources(nodes, pods)

    lookup: CloudLookup | None = None
    if settings.requires_cloud and cloud_factory is not None:
        lookup = build_cloud_lookup(cloud_factory())

    rows = build_rows(settings.mode, nodes, tallies, lookup, now)
    logger.info(f"Built {len(rows)} {settings.mode.value} rows")
    return rows


def resolve_console_link(
    node_name: str,
    target: ConsoleTarget,
    cluster: ClusterInventory,
    cloud,
) -> ConsoleLink:
    """Resolve the console page for a single node.

    Args:
        node_name: Name of the node
        target: Instance page or Auto Scaling group page
        cluster: Cluster inventory
        cloud: Cloud inventory, used for the region and instance tags

    Raises:
        KubernetesError: If the node cannot be fetched
        NodeLookupError: If the node has no instance id, its instance is not
            in EC2, or the instance carries no Auto Scaling group tag
    """
    node = cluster.get_node(node_name)
    instance_id = instance_id_from_provider_id(node.provider_id)
    if not instance_id:
        raise NodeLookupError(f"Could not find instance ID for node '{node_name}'")

    resource_id = instance_id
    if target is ConsoleTarget.SCALING_GROUP:
        instances = index_instances(cloud.list_instances())
        instance = instances.get(instance_id)
        if instance is None:
            raise NodeLookupError(
                f"Could not find EC2 instance '{instance_id}' for node '{node_name}'"
            )
        resource_id = scaling_group_from_tags(instance)
        if not resource_id:
            raise NodeLookupError(f"Could not find Auto Scaling Group for node '{node_name}'")

    region = cloud.region
    return ConsoleLink(
        node_name=node_name,
        target=target,
        resource_id=resource_id,
        url=console_url(target, region, resource_id),
    )
