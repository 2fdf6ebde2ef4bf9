"""Pytest configuration and shared fixtures."""

import os
from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import Verbosity, settings

from aws_nodes.exceptions import KubernetesError
from aws_nodes.models.cloud import InstanceRecord, ScalingGroupRecord
from aws_nodes.models.node import ContainerRequests, NodeCondition, NodeRecord, PodRecord

# Configure Hypothesis for property-based testing
settings.register_profile("default", max_examples=100, verbosity=Verbosity.normal)
settings.register_profile("ci", max_examples=1000, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=10, verbosity=Verbosity.verbose)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeCluster:
    """In-memory stand-in for ClusterInventory."""

    def __init__(self, nodes=(), pods=()):
        self.nodes = list(nodes)
        self.pods = list(pods)
        self.calls = []

    def list_nodes(self):
        self.calls.append("list_nodes")
        return list(self.nodes)

    def list_pods(self):
        self.calls.append("list_pods")
        return list(self.pods)

    def get_node(self, name):
        self.calls.append(f"get_node:{name}")
        for node in self.nodes:
            if node.name == name:
                return node
        raise KubernetesError(f"Node '{name}' not found")


class FakeCloud:
    """In-memory stand-in for CloudInventory."""

    def __init__(self, instances=(), groups=(), region="us-west-2"):
        self.instances = list(instances)
        self.groups = list(groups)
        self.region = region
        self.calls = []

    def list_instances(self):
        self.calls.append("list_instances")
        return list(self.instances)

    def list_scaling_groups(self):
        self.calls.append("list_scaling_groups")
        return list(self.groups)


@pytest.fixture
def now():
    """Fixed reference time for node ages."""
    return NOW


@pytest.fixture
def make_node():
    """Factory for NodeRecord objects with sensible EKS defaults."""

    def _make(
        name="ip-10-0-1-100.us-west-2.compute.internal",
        cpu="2",
        memory="4Gi",
        provider_id="aws:///us-west-2a/i-0123456789abcdef0",
        instance_type="m5.large",
        ready="True",
        age=timedelta(days=3),
        taints=(),
        kubelet_version="v1.29.0-eks-5e0fdde",
    ):
        labels = {"node.kubernetes.io/instance-type": instance_type} if instance_type else {}
        conditions = [NodeCondition(type="Ready", status=ready)] if ready is not None else []
        return NodeRecord(
            name=name,
            conditions=conditions,
            created_at=NOW - age,
            kubelet_version=kubelet_version,
            taints=[{"key": key, "effect": "NoSchedule"} for key in taints],
            allocatable_cpu=cpu,
            allocatable_memory=memory,
            provider_id=provider_id,
            labels=labels,
        )

    return _make


@pytest.fixture
def make_pod():
    """Factory for PodRecord objects. Each request is a (cpu, memory) pair."""
    counter = {"n": 0}

    def _make(node_name, *requests):
        counter["n"] += 1
        return PodRecord(
            name=f"pod-{counter['n']}",
            namespace="default",
            node_name=node_name,
            containers=[
                ContainerRequests(name=f"c{i}", cpu=cpu, memory=memory)
                for i, (cpu, memory) in enumerate(requests)
            ],
        )

    return _make


@pytest.fixture
def worker_instance():
    """EC2 instance launched by the 'workers' Auto Scaling group."""
    return InstanceRecord(
        instance_id="i-0123456789abcdef0",
        instance_type="m5.large",
        state="running",
        tags={"aws:autoscaling:groupName": "workers", "Name": "eks-worker"},
    )


@pytest.fixture
def workers_group():
    return ScalingGroupRecord(name="workers", min_size=2, max_size=5, desired_capacity=3)


@pytest.fixture
def fake_cluster():
    return FakeCluster


@pytest.fixture
def fake_cloud():
    return FakeCloud
