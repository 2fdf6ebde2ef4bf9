"""Main CLI entry point for kubectl-aws_nodes."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from aws_nodes import __build_date__, __commit__, __version__
from aws_nodes.aws import CloudInventory
from aws_nodes.cluster import ClusterInventory
from aws_nodes.console import ConsoleTarget, open_url
from aws_nodes.exceptions import AwsNodesError, BrowserLaunchError, ValidationError
from aws_nodes.inspector import collect_rows, resolve_console_link
from aws_nodes.logging_config import get_logger, setup_logging
from aws_nodes.models.config import InspectorConfig
from aws_nodes.models.view import OutputMode
from aws_nodes.render import print_table

app = typer.Typer(
    name="kubectl-aws_nodes",
    help="A kubectl plugin that extends 'kubectl get nodes' with AWS EC2 instance information.",
    add_completion=False,
)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)
logger = get_logger(__name__)

EXAMPLES = """
Examples:

  kubectl aws-nodes                           # List all nodes with basic info

  kubectl aws-nodes -o wide                   # List all nodes with ASG info

  kubectl aws-nodes -o top                    # List nodes with resource usage

  kubectl aws-nodes --open ip-10-0-1-100      # Open AWS console for specific node

  kubectl aws-nodes --open-asg ip-10-0-1-100  # Open ASG console for specific node
"""


def version_callback(value: bool) -> None:
    """Print version, commit and build date, then exit."""
    if value:
        typer.echo(
            f"kubectl-aws_nodes version {__version__}, commit {__commit__}, built at {__build_date__}"
        )
        raise typer.Exit()


def open_node_console(settings: InspectorConfig, node_name: str, target: ConsoleTarget) -> None:
    """Resolve a node's console page and open it in the local browser.

    A browser that fails to start is reported as a warning together with the
    URL to open by hand.
    """
    cluster = ClusterInventory.from_kubeconfig(settings.kubeconfig, settings.context)
    cloud = CloudInventory.from_environment(settings.aws_profile, settings.aws_region)
    link = resolve_console_link(node_name, target, cluster, cloud)

    console.print(f"Opening {escape(link.description)}...")
    try:
        open_url(link.url)
    except BrowserLaunchError as e:
        logger.warning(f"Could not launch browser: {e.message}")
        err_console.print(f"[yellow]Warning:[/yellow] Error opening browser: {escape(e.message)}")
        console.print(f"Please open this URL manually: {escape(link.url)}")


def list_nodes(settings: InspectorConfig) -> None:
    """Print the node table for the configured output mode."""
    cluster = ClusterInventory.from_kubeconfig(settings.kubeconfig, settings.context)
    rows = collect_rows(
        settings,
        cluster,
        cloud_factory=lambda: CloudInventory.from_environment(
            settings.aws_profile, settings.aws_region
        ),
    )
    print_table(console, settings.mode, rows)


@app.command(epilog=EXAMPLES)
def main(
    node_name: str | None = typer.Argument(
        None, help="Node to open with --open or --open-asg", show_default=False
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format. Supported: wide, top"
    ),
    open_instance: bool = typer.Option(
        False, "--open", help="Open AWS console for the specified node"
    ),
    open_asg: bool = typer.Option(
        False, "--open-asg", help="Open Auto Scaling Group console for the specified node"
    ),
    kubeconfig: str | None = typer.Option(
        None, "--kubeconfig", help="Path to kubeconfig (defaults to $KUBECONFIG or ~/.kube/config)"
    ),
    context: str | None = typer.Option(None, "--context", help="Kubeconfig context to use"),
    profile: str | None = typer.Option(
        None, "--profile", help="AWS profile (defaults to $AWS_PROFILE)"
    ),
    region: str | None = typer.Option(
        None, "--region", help="AWS region (defaults to $AWS_REGION or the profile's region)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: str | None = typer.Option(None, "--log-file", help="Path to log file"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """
    List cluster nodes with their EC2 instance, Auto Scaling group and
    resource requests, or open the AWS console for one node.

    The default and top layouts only need cluster access; wide also reads
    EC2 and Auto Scaling inventory with the default AWS credential chain.
    """
    setup_logging(verbose=verbose, log_file=Path(log_file) if log_file else None)
    logger.debug("Logging initialized")

    try:
        if open_instance or open_asg:
            if not node_name:
                raise ValidationError("--open and --open-asg require a node name")
            settings = InspectorConfig(
                kubeconfig=kubeconfig, context=context, aws_profile=profile, aws_region=region
            )
            target = ConsoleTarget.SCALING_GROUP if open_asg else ConsoleTarget.INSTANCE
            open_node_console(settings, node_name, target)
        else:
            settings = InspectorConfig(
                mode=OutputMode.parse(output),
                kubeconfig=kubeconfig,
                context=context,
                aws_profile=profile,
                aws_region=region,
            )
            list_nodes(settings)
    except AwsNodesError as e:
        logger.error(f"{type(e).__name__}: {e.message}")
        err_console.print(f"[red]Error:[/red] {escape(e.message)}")
        if e.details:
            err_console.print(f"\n{escape(e.details)}")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(code=130)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        err_console.print("\nRun with --verbose --log-file debug.log for more details")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
