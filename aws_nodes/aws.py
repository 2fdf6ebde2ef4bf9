"""EC2 and Auto Scaling inventory through boto3."""

import boto3
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    NoRegionError,
    ProfileNotFound,
)

from aws_nodes.exceptions import CloudError, ConfigurationError
from aws_nodes.logging_config import get_logger
from aws_nodes.models.cloud import InstanceRecord, ScalingGroupRecord

logger = get_logger(__name__)


class CloudInventory:
    """Lists EC2 instances and Auto Scaling groups in one region."""

    def __init__(self, session: boto3.session.Session):
        """Initialize the inventory.

        Args:
            session: boto3 session resolved from the default credential chain
        """
        self.session = session

    @classmethod
    def from_environment(
        cls, profile: str | None = None, region: str | None = None
    ) -> "CloudInventory":
        """Create an inventory from the standard AWS configuration sources.

        Args:
            profile: Named profile, defaults to $AWS_PROFILE or the default profile
            region: Region, defaults to $AWS_REGION or the profile's region

        Raises:
            ConfigurationError: If the profile does not exist
        """
        try:
            session = boto3.session.Session(profile_name=profile, region_name=region)
        except ProfileNotFound as e:
            raise ConfigurationError(
                f"Error loading AWS config: {e}",
                "Check ~/.aws/config or the --profile option",
            )

        logger.debug(f"Using AWS profile={session.profile_name} region={session.region_name}")
        return cls(session)

    @property
    def region(self) -> str:
        """Configured region.

        Raises:
            ConfigurationError: If no region is configured
        """
        if not self.session.region_name:
            raise ConfigurationError(
                "AWS region is not configured",
                "Set AWS_REGION, configure a default region or pass --region",
            )
        return self.session.region_name

    def _paginate(self, service: str, operation: str, result_key: str) -> list[dict]:
        description = f"{service}:{operation}"
        try:
            paginator = self.session.client(service, region_name=self.region).get_paginator(
                operation
            )
            items = []
            for page in paginator.paginate():
                items.extend(page.get(result_key, []))
            return items
        except (NoCredentialsError, NoRegionError) as e:
            logger.error(f"AWS configuration error during {description}: {e}")
            raise ConfigurationError(
                f"Error loading AWS config: {e}",
                "Configure credentials with 'aws configure' or set AWS_PROFILE",
            )
        except ClientError as e:
            error = e.response.get("Error", {})
            logger.error(f"{description} failed: {error.get('Code')} {error.get('Message')}")
            raise CloudError(
                f"AWS call {description} failed",
                f"{error.get('Code', 'Unknown')}: {error.get('Message', str(e))}",
            )
        except BotoCoreError as e:
            logger.error(f"{description} failed: {e}")
            raise CloudError(f"AWS call {description} failed", str(e))

    def list_instances(self) -> list[InstanceRecord]:
        """List every EC2 instance in the region.

        Raises:
            CloudError: If DescribeInstances fails
            ConfigurationError: If credentials or region are missing
        """
        instances = []
        for reservation in self._paginate("ec2", "describe_instances", "Reservations"):
            for data in reservation.get("Instances", []):
                if data.get("InstanceId"):
                    instances.append(InstanceRecord.from_boto(data))

        logger.debug(f"Listed {len(instances)} EC2 instances")
        return instances

    def list_scaling_groups(self) -> list[ScalingGroupRecord]:
        """List every Auto Scaling group in the region.

        Raises:
            CloudError: If DescribeAutoScalingGroups fails
            ConfigurationError: If credentials or region are missing
        """
        groups = [
            ScalingGroupRecord.from_boto(data)
            for data in self._paginate(
                "autoscaling", "describe_auto_scaling_groups", "AutoScalingGroups"
            )
            if data.get("AutoScalingGroupName")
        ]

        logger.debug(f"Listed {len(groups)} Auto Scaling groups")
        return groups
