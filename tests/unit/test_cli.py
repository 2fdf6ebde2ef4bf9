"""Unit tests for the kubectl-aws_nodes command line."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from aws_nodes.cli import app
from aws_nodes.exceptions import BrowserLaunchError, CloudError, KubernetesError
from aws_nodes.models.cloud import InstanceRecord

runner = CliRunner()

INSTANCE_URL = (
    "https://us-west-2.console.aws.amazon.com/ec2/home?region=us-west-2"
    "#InstanceDetails:instanceId=i-0123456789abcdef0"
)


@pytest.fixture
def cluster(make_node, make_pod, fake_cluster):
    nodes = [
        make_node(name="n1", cpu="2000m", memory="4Gi", taints=("dedicated",)),
        make_node(name="n0", provider_id="", instance_type=None),
    ]
    pods = [
        make_pod("n1", ("500m", "1Gi")),
        make_pod("n1", ("500m", "1Gi")),
        make_pod("", ("1", "1Gi")),
    ]
    return fake_cluster(nodes=nodes, pods=pods)


@pytest.fixture
def cloud(fake_cloud, worker_instance, workers_group):
    return fake_cloud(instances=[worker_instance], groups=[workers_group])


@pytest.fixture
def inventories(cluster, cloud):
    """Patch both inventory constructors used by the CLI."""
    with patch("aws_nodes.cli.ClusterInventory") as cluster_cls, patch(
        "aws_nodes.cli.CloudInventory"
    ) as cloud_cls:
        cluster_cls.from_kubeconfig.return_value = cluster
        cloud_cls.from_environment.return_value = cloud
        yield cluster_cls, cloud_cls


def lines_of(output):
    return [line.split() for line in output.strip().splitlines()]


def test_help():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "--open-asg" in result.output
    assert "--output" in result.output


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == (
        "kubectl-aws_nodes version 0.1.0, commit none, built at unknown"
    )


def test_unsupported_output_format():
    with patch("aws_nodes.cli.ClusterInventory") as cluster_cls:
        result = runner.invoke(app, ["-o", "json"])

    assert result.exit_code == 1
    assert "unsupported output format 'json'" in result.output
    cluster_cls.from_kubeconfig.assert_not_called()


@pytest.mark.parametrize("flag", ["--open", "--open-asg"])
def test_open_requires_node_name(flag):
    result = runner.invoke(app, [flag])

    assert result.exit_code == 1
    assert "require a node name" in result.output


def test_basic_listing(inventories):
    cluster_cls, cloud_cls = inventories

    result = runner.invoke(app, [])

    assert result.exit_code == 0
    rows = lines_of(result.output)
    assert rows[0] == ["NAME", "STATUS", "AGE", "VERSION", "INSTANCE-ID", "INSTANCE-TYPE", "TAINTS"]
    assert rows[1][:2] == ["n1", "Ready"]
    assert rows[1][-3:] == ["i-0123456789abcdef0", "m5.large", "dedicated"]
    assert rows[2][:2] == ["n0", "Ready"]
    cloud_cls.from_environment.assert_not_called()


def test_wide_listing(inventories, cloud):
    result = runner.invoke(app, ["-o", "wide"])

    assert result.exit_code == 0
    rows = lines_of(result.output)
    assert rows[0][-2:] == ["ASG", "ASG-CAPACITY"]
    assert rows[1][0] == "n1"
    assert rows[1][-2:] == ["workers", "2/5/3"]
    assert cloud.calls == ["list_instances", "list_scaling_groups"]


def test_top_listing(inventories):
    cluster_cls, cloud_cls = inventories

    result = runner.invoke(app, ["--output", "top"])

    assert result.exit_code == 0
    rows = lines_of(result.output)
    assert rows[0] == [
        "NAME",
        "PODS",
        "CPU-CAP",
        "CPU-REQ",
        "CPU-FREE%",
        "MEM-CAP",
        "MEM-REQ",
        "MEM-FREE%",
    ]
    assert rows[1] == ["n1", "2", "2", "1", "50.0%", "4.0Gi", "2.0Gi", "50.0%"]
    assert rows[2] == ["n0", "0", "2", "0", "100.0%", "4.0Gi", "0", "100.0%"]
    cloud_cls.from_environment.assert_not_called()


def test_kubeconfig_options_are_forwarded(inventories):
    cluster_cls, _ = inventories

    result = runner.invoke(app, ["--kubeconfig", "/tmp/config", "--context", "staging"])

    assert result.exit_code == 0
    cluster_cls.from_kubeconfig.assert_called_once_with("/tmp/config", "staging")


def test_cluster_error_exits_non_zero(inventories, cluster):
    def fail():
        raise KubernetesError("Failed to list nodes", "403 Forbidden")

    cluster.list_nodes = fail

    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Failed to list nodes" in result.output
    assert "403 Forbidden" in result.output


def test_cloud_error_in_wide_mode(inventories, cloud):
    def fail():
        raise CloudError("AWS call ec2:describe_instances failed", "UnauthorizedOperation")

    cloud.list_instances = fail

    result = runner.invoke(app, ["-o", "wide"])

    assert result.exit_code == 1
    assert "describe_instances failed" in result.output


@patch("aws_nodes.cli.open_url")
def test_open_instance_console(mock_open, inventories):
    result = runner.invoke(app, ["--open", "n1"])

    assert result.exit_code == 0
    assert "Opening AWS console for node 'n1' (instance: i-0123456789abcdef0)" in result.output
    mock_open.assert_called_once_with(INSTANCE_URL)


@patch("aws_nodes.cli.open_url")
def test_open_asg_console(mock_open, inventories):
    result = runner.invoke(app, ["--open-asg", "n1"])

    assert result.exit_code == 0
    assert "(ASG: workers)" in result.output
    assert mock_open.call_args[0][0].endswith("#AutoScalingGroupDetails:id=workers")


@patch("aws_nodes.cli.open_url", side_effect=BrowserLaunchError("'xdg-open' not found in PATH"))
def test_browser_failure_prints_url(mock_open, inventories):
    result = runner.invoke(app, ["--open", "n1"])

    assert result.exit_code == 0
    assert "Error opening browser" in result.output
    assert f"Please open this URL manually: {INSTANCE_URL}" in result.output


@patch("aws_nodes.cli.open_url")
def test_open_asg_without_group_tag(mock_open, inventories, cloud):
    cloud.instances = [InstanceRecord(instance_id="i-0123456789abcdef0")]

    result = runner.invoke(app, ["--open-asg", "n1"])

    assert result.exit_code == 1
    assert "Could not find Auto Scaling Group for node 'n1'" in result.output
    assert "https://" not in result.output
    mock_open.assert_not_called()


@patch("aws_nodes.cli.open_url")
def test_open_node_without_instance_id(mock_open, inventories):
    result = runner.invoke(app, ["--open", "n0"])

    assert result.exit_code == 1
    assert "Could not find instance ID for node 'n0'" in result.output
    mock_open.assert_not_called()
