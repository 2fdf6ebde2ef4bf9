"""AWS web console deep links and the local browser launcher."""

import platform
import subprocess
from enum import Enum

from pydantic import BaseModel

from aws_nodes.exceptions import BrowserLaunchError
from aws_nodes.logging_config import get_logger

logger = get_logger(__name__)

CONSOLE_URL = "https://{region}.console.aws.amazon.com/ec2/home?region={region}#{fragment}"


class ConsoleTarget(str, Enum):
    """Console page to open for a node."""

    INSTANCE = "instance"
    SCALING_GROUP = "asg"


class ConsoleLink(BaseModel):
    """A resolved console page for one node."""

    node_name: str
    target: ConsoleTarget
    resource_id: str  # instance id or group name
    url: str

    @property
    def description(self) -> str:
        if self.target is ConsoleTarget.SCALING_GROUP:
            return f"ASG console for node '{self.node_name}' (ASG: {self.resource_id})"
        return f"AWS console for node '{self.node_name}' (instance: {self.resource_id})"


def instance_console_url(region: str, instance_id: str) -> str:
    return CONSOLE_URL.format(region=region, fragment=f"InstanceDetails:instanceId={instance_id}")


def scaling_group_console_url(region: str, group_name: str) -> str:
    return CONSOLE_URL.format(region=region, fragment=f"AutoScalingGroupDetails:id={group_name}")


def console_url(target: ConsoleTarget, region: str, resource_id: str) -> str:
    if target is ConsoleTarget.SCALING_GROUP:
        return scaling_group_console_url(region, resource_id)
    return instance_console_url(region, resource_id)


def _opener_command() -> list[str]:
    system = platform.system()
    if system == "Windows":
        return ["cmd", "/c", "start", ""]
    if system == "Darwin":
        return ["open"]
    return ["xdg-open"]


def open_url(url: str) -> None:
    """Start the platform's URL opener without waiting for it.

    Raises:
        BrowserLaunchError: If the opener cannot be started.
    """
    command = _opener_command() + [url]
    logger.debug(f"Launching browser: {command}")

    try:
        subprocess.Popen(
            command,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except FileNotFoundError:
        raise BrowserLaunchError(
            f"'{command[0]}' not found in PATH",
            "Install a URL opener or open the link manually",
        )
    except OSError as e:
        raise BrowserLaunchError(f"Failed to start '{command[0]}': {e}")
