"""Exact conversion of Kubernetes resource quantities to scaled integers.

CPU is tracked in millicores and memory in bytes. Both are plain ``int`` so
sums over many pods never drift; floats only appear when a percentage is
finally computed.
"""

from decimal import ROUND_CEILING, Decimal

from kubernetes.utils import parse_quantity


def _ceil(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def cpu_millis(quantity: str | None) -> int:
    """Convert a CPU quantity (``"2"``, ``"500m"``, ``"0.25"``) to millicores.

    Fractions of a millicore round up. An empty quantity is zero.

    Raises:
        ValueError: If the quantity cannot be parsed.
    """
    if not quantity:
        return 0
    return _ceil(parse_quantity(quantity) * 1000)


def memory_bytes(quantity: str | None) -> int:
    """Convert a memory quantity (``"4Gi"``, ``"512M"``, ``"1024"``) to bytes.

    Raises:
        ValueError: If the quantity cannot be parsed.
    """
    if not quantity:
        return 0
    return _ceil(parse_quantity(quantity))
