"""Read-only access to cluster nodes and pods through the Kubernetes API."""

from kubernetes import client, config
from kubernetes.client.rest import ApiException

from aws_nodes.exceptions import ConfigurationError, KubernetesError
from aws_nodes.logging_config import get_logger
from aws_nodes.models.node import NodeRecord, PodRecord

logger = get_logger(__name__)


class ClusterInventory:
    """Lists nodes and pods of the current cluster."""

    def __init__(self, api: client.CoreV1Api):
        """Initialize the inventory.

        Args:
            api: Configured CoreV1Api client
        """
        self.api = api

    @classmethod
    def from_kubeconfig(
        cls, kubeconfig: str | None = None, context: str | None = None
    ) -> "ClusterInventory":
        """Create an inventory from kubeconfig, falling back to in-cluster config.

        Args:
            kubeconfig: Path to a kubeconfig file, defaults to $KUBECONFIG or ~/.kube/config
            context: Kubeconfig context to use, defaults to the current context

        Raises:
            ConfigurationError: If no usable cluster configuration is found
        """
        try:
            config.load_kube_config(config_file=kubeconfig, context=context)
            logger.debug(f"Loaded kubeconfig (file={kubeconfig or 'default'}, context={context})")
        except (config.ConfigException, OSError) as e:
            if kubeconfig or context:
                raise ConfigurationError(
                    f"Failed to load kubeconfig: {e}",
                    "Check the --kubeconfig and --context options",
                )
            try:
                config.load_incluster_config()
                logger.debug("Loaded in-cluster configuration")
            except config.ConfigException:
                raise ConfigurationError(
                    f"Failed to load kubeconfig: {e}",
                    "Make sure ~/.kube/config exists or set KUBECONFIG",
                )

        return cls(client.CoreV1Api())

    def list_nodes(self) -> list[NodeRecord]:
        """List all nodes in API order.

        Raises:
            KubernetesError: If the API call fails
        """
        try:
            response = self.api.list_node()
        except ApiException as e:
            logger.error(f"Failed to list nodes: {e.status} {e.reason}")
            raise KubernetesError("Failed to list nodes", f"{e.status} {e.reason}")
        except Exception as e:
            logger.error(f"Unexpected error listing nodes: {e}", exc_info=True)
            raise KubernetesError(f"Failed to list nodes: {e}")

        nodes = [NodeRecord.from_kubernetes(node) for node in response.items]
        logger.debug(f"Listed {len(nodes)} nodes")
        return nodes

    def list_pods(self) -> list[PodRecord]:
        """List pods across all namespaces.

        Raises:
            KubernetesError: If the API call fails
        """
        try:
            response = self.api.list_pod_for_all_namespaces()
        except ApiException as e:
            logger.error(f"Failed to list pods: {e.status} {e.reason}")
            raise KubernetesError("Failed to list pods", f"{e.status} {e.reason}")
        except Exception as e:
            logger.error(f"Unexpected error listing pods: {e}", exc_info=True)
            raise KubernetesError(f"Failed to list pods: {e}")

        pods = [PodRecord.from_kubernetes(pod) for pod in response.items]
        logger.debug(f"Listed {len(pods)} pods")
        return pods

    def get_node(self, name: str) -> NodeRecord:
        """Fetch a single node by name.

        Raises:
            KubernetesError: If the node does not exist or the API call fails
        """
        try:
            node = self.api.read_node(name)
        except ApiException as e:
            if e.status == 404:
                raise KubernetesError(f"Node '{name}' not found")
            logger.error(f"Failed to get node {name}: {e.status} {e.reason}")
            raise KubernetesError(f"Error getting node '{name}'", f"{e.status} {e.reason}")
        except Exception as e:
            logger.error(f"Unexpected error getting node {name}: {e}", exc_info=True)
            raise KubernetesError(f"Error getting node '{name}': {e}")

        return NodeRecord.from_kubernetes(node)
