"""kubectl plugin that extends node listings with AWS EC2 information."""

__version__ = "0.1.0"
__commit__ = "none"
__build_date__ = "unknown"
