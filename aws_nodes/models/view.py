"""Output modes and the per-node rows rendered for each of them."""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel

from aws_nodes.exceptions import ValidationError
from aws_nodes.formatting import format_percentage


class OutputMode(str, Enum):
    """Table layout selected with ``-o``."""

    BASIC = "basic"
    WIDE = "wide"
    TOP = "top"

    @classmethod
    def parse(cls, value: str | None) -> "OutputMode":
        """Parse the ``-o`` flag value. No value selects the basic layout.

        Raises:
            ValidationError: If the format is not supported.
        """
        if not value:
            return cls.BASIC
        if value in (cls.WIDE.value, cls.TOP.value):
            return cls(value)
        raise ValidationError(f"unsupported output format '{value}'. Supported: wide, top")


class BasicRow(BaseModel):
    """Default node listing row."""

    COLUMNS: ClassVar[tuple[str, ...]] = (
        "NAME",
        "STATUS",
        "AGE",
        "VERSION",
        "INSTANCE-ID",
        "INSTANCE-TYPE",
        "TAINTS",
    )

    name: str
    status: str
    age: str
    version: str
    instance_id: str = ""
    instance_type: str = ""
    taints: str = ""

    def cells(self) -> list[str]:
        return [
            self.name,
            self.status,
            self.age,
            self.version,
            self.instance_id,
            self.instance_type,
            self.taints,
        ]


class ExtendedRow(BasicRow):
    """Row for ``-o wide``, adding the Auto Scaling group columns."""

    COLUMNS: ClassVar[tuple[str, ...]] = BasicRow.COLUMNS + ("ASG", "ASG-CAPACITY")

    asg: str = ""
    asg_capacity: str = ""

    def cells(self) -> list[str]:
        return super().cells() + [self.asg, self.asg_capacity]


class ResourceRow(BaseModel):
    """Row for ``-o top``: pod count and requested resources against allocatable."""

    COLUMNS: ClassVar[tuple[str, ...]] = (
        "NAME",
        "PODS",
        "CPU-CAP",
        "CPU-REQ",
        "CPU-FREE%",
        "MEM-CAP",
        "MEM-REQ",
        "MEM-FREE%",
    )

    name: str
    pods: int
    cpu_capacity: str
    cpu_requested: str
    cpu_free: float
    memory_capacity: str
    memory_requested: str
    memory_free: float

    def cells(self) -> list[str]:
        return [
            self.name,
            str(self.pods),
            self.cpu_capacity,
            self.cpu_requested,
            format_percentage(self.cpu_free),
            self.memory_capacity,
            self.memory_requested,
            format_percentage(self.memory_free),
        ]


ROW_TYPES: dict[OutputMode, type[BaseModel]] = {
    OutputMode.BASIC: BasicRow,
    OutputMode.WIDE: ExtendedRow,
    OutputMode.TOP: ResourceRow,
}
