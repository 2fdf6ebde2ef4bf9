"""Table rendering in the style of ``kubectl get``."""

from rich.cells import cell_len
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from aws_nodes.models.view import ROW_TYPES, OutputMode

COLUMN_GAP = 3


def build_table(mode: OutputMode, rows: list) -> Table:
    """Build a borderless table with the columns of ``mode``."""
    table = Table(
        box=None,
        show_edge=False,
        pad_edge=False,
        padding=(0, COLUMN_GAP, 0, 0),
        header_style="bold",
    )
    for column in ROW_TYPES[mode].COLUMNS:
        table.add_column(column, no_wrap=True)

    for row in rows:
        table.add_row(*(escape(cell) for cell in row.cells()))
    return table


def table_width(mode: OutputMode, rows: list) -> int:
    """Width needed to print every cell of the table untruncated."""
    columns = ROW_TYPES[mode].COLUMNS
    widths = [cell_len(header) for header in columns]
    for row in rows:
        for index, cell in enumerate(row.cells()):
            widths[index] = max(widths[index], cell_len(cell))
    return sum(widths) + COLUMN_GAP * (len(widths) - 1)


def print_table(console: Console, mode: OutputMode, rows: list) -> None:
    """Print the table, widening the output instead of wrapping long rows."""
    needed = table_width(mode, rows)
    if needed > console.width:
        console = Console(file=console.file, width=needed, color_system=console.color_system)
    console.print(build_table(mode, rows))
