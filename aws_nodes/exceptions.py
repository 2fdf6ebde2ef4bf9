"""Custom exceptions for kubectl-aws_nodes."""


class AwsNodesError(Exception):
    """Base exception for all kubectl-aws_nodes errors."""

    def __init__(self, message: str, details: str = None):
        """Initialize the exception.

        Args:
            message: Main error message
            details: Additional details or suggestions
        """
        self.message = message
        self.details = details
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the complete error message.

        Returns:
            Formatted error message with details
        """
        if self.details:
            return f"{self.message}\n\nDetails: {self.details}"
        return self.message


class ConfigurationError(AwsNodesError):
    """Exception raised when kubeconfig or AWS configuration is unusable."""

    pass


class KubernetesError(AwsNodesError):
    """Exception raised for Kubernetes API errors."""

    pass


class CloudError(AwsNodesError):
    """Exception raised for EC2 and Auto Scaling API errors."""

    pass


class ValidationError(AwsNodesError):
    """Exception raised for invalid command line input."""

    pass


class NodeLookupError(AwsNodesError):
    """Exception raised when a node cannot be resolved to an instance or group."""

    pass


class BrowserLaunchError(AwsNodesError):
    """Exception raised when the local browser cannot be started."""

    pass
