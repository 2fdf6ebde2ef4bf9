"""Settings for a single plugin invocation."""

from pydantic import BaseModel

from aws_nodes.models.view import OutputMode


class InspectorConfig(BaseModel):
    """Resolved command line settings.

    Built once at startup and handed to the listing and console workflows.
    """

    mode: OutputMode = OutputMode.BASIC
    kubeconfig: str | None = None
    context: str | None = None
    aws_profile: str | None = None
    aws_region: str | None = None

    @property
    def requires_cloud(self) -> bool:
        """Whether the listing needs EC2 and Auto Scaling access."""
        return self.mode is OutputMode.WIDE
