"""Data models for cluster nodes and pods as read from the Kubernetes API."""

from datetime import datetime

from pydantic import BaseModel, Field


class NodeTaint(BaseModel):
    """Kubernetes node taint."""

    key: str
    value: str | None = None
    effect: str  # NoSchedule, PreferNoSchedule, NoExecute


class NodeCondition(BaseModel):
    """A single entry of a node's status conditions."""

    type: str
    status: str  # True, False, Unknown


class NodeRecord(BaseModel):
    """Read-only view of a cluster node."""

    name: str
    conditions: list[NodeCondition] = Field(default_factory=list)
    created_at: datetime | None = None
    kubelet_version: str = ""
    taints: list[NodeTaint] = Field(default_factory=list)
    allocatable_cpu: str | None = None
    allocatable_memory: str | None = None
    provider_id: str = ""
    labels: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_kubernetes(cls, node) -> "NodeRecord":
        """Parse from a kubernetes.client.V1Node."""
        spec = node.spec
        status = node.status
        allocatable = (status.allocatable if status else None) or {}
        node_info = status.node_info if status else None

        return cls(
            name=node.metadata.name,
            conditions=[
                NodeCondition(type=c.type, status=c.status)
                for c in ((status.conditions if status else None) or [])
            ],
            created_at=node.metadata.creation_timestamp,
            kubelet_version=node_info.kubelet_version if node_info else "",
            taints=[
                NodeTaint(key=t.key, value=t.value, effect=t.effect)
                for t in ((spec.taints if spec else None) or [])
            ],
            allocatable_cpu=allocatable.get("cpu"),
            allocatable_memory=allocatable.get("memory"),
            provider_id=(spec.provider_id if spec else None) or "",
            labels=node.metadata.labels or {},
        )


class ContainerRequests(BaseModel):
    """Resource requests declared by one container. Absent requests are None."""

    name: str
    cpu: str | None = None
    memory: str | None = None


class PodRecord(BaseModel):
    """Read-only view of a pod, reduced to what node accounting needs."""

    name: str
    namespace: str = "default"
    node_name: str = ""  # empty while unscheduled
    containers: list[ContainerRequests] = Field(default_factory=list)

    @classmethod
    def from_kubernetes(cls, pod) -> "PodRecord":
        """Parse from a kubernetes.client.V1Pod."""
        containers = []
        for container in pod.spec.containers or []:
            resources = container.resources
            requests = (resources.requests if resources else None) or {}
            containers.append(
                ContainerRequests(
                    name=container.name,
                    cpu=requests.get("cpu"),
                    memory=requests.get("memory"),
                )
            )

        return cls(
            name=pod.metadata.name,
            namespace=pod.metadata.namespace or "default",
            node_name=pod.spec.node_name or "",
            containers=containers,
        )
