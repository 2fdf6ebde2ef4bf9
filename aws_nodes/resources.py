"""Per-node aggregation of pod resource requests."""

from dataclasses import dataclass

from aws_nodes.logging_config import get_logger
from aws_nodes.models.node import NodeRecord, PodRecord
from aws_nodes.quantity import cpu_millis, memory_bytes

logger = get_logger(__name__)


@dataclass
class NodeTally:
    """Allocatable capacity of one node and the requests scheduled on it."""

    cpu_capacity_millis: int = 0
    memory_capacity_bytes: int = 0
    cpu_requested_millis: int = 0
    memory_requested_bytes: int = 0
    pod_count: int = 0

    @property
    def cpu_free_percentage(self) -> float:
        return free_percentage(self.cpu_capacity_millis, self.cpu_requested_millis)

    @property
    def memory_free_percentage(self) -> float:
        return free_percentage(self.memory_capacity_bytes, self.memory_requested_bytes)


def _parse_or_zero(parser, quantity: str | None, what: str) -> int:
    try:
        return parser(quantity)
    except (ValueError, ArithmeticError):
        logger.debug(f"Ignoring unparseable {what} quantity: {quantity!r}")
        return 0


def aggregate_node_resources(
    nodes: list[NodeRecord], pods: list[PodRecord]
) -> dict[str, NodeTally]:
    """Build one tally per node from the full node and pod inventories.

    Every node gets a tally, even without pods. Pods are counted against the
    node named in ``spec.nodeName``; unscheduled pods and pods on nodes that
    are not in ``nodes`` are skipped.

    Args:
        nodes: All cluster nodes
        pods: All pods across namespaces

    Returns:
        Mapping of node name to its tally
    """
    tallies = {
        node.name: NodeTally(
            cpu_capacity_millis=_parse_or_zero(cpu_millis, node.allocatable_cpu, "cpu"),
            memory_capacity_bytes=_parse_or_zero(
                memory_bytes, node.allocatable_memory, "memory"
            ),
        )
        for node in nodes
    }

    skipped = 0
    for pod in pods:
        tally = tallies.get(pod.node_name)
        if tally is None:
            skipped += 1
            continue

        tally.pod_count += 1
        for container in pod.containers:
            tally.cpu_requested_millis += _parse_or_zero(cpu_millis, container.cpu, "cpu")
            tally.memory_requested_bytes += _parse_or_zero(
                memory_bytes, container.memory, "memory"
            )

    logger.debug(
        f"Aggregated {len(pods) - skipped} pods over {len(tallies)} nodes "
        f"({skipped} unscheduled or on unknown nodes)"
    )
    return tallies


def free_percentage(capacity: int, requested: int) -> float:
    """Share of ``capacity`` not yet requested, in percent.

    Both values must use the same unit. Zero or missing capacity gives 0.
    The result is negative when a node is overcommitted.
    """
    if capacity <= 0:
        return 0.0
    return (capacity - requested) / capacity * 100
