from __future__ import annotations
from decimal import Decimal
from typing import Iterable, Optional
from .models import ContainerResources, PodResourceTotals, Quantity

_MILLI = Decimal(1000)
_MIB = Decimal(1024 * 1024)


def cpu_to_milli(q: Optional[Quantity]) -> float:
    """Convert a CPU quantity (cores) to millicores; absent counts as zero."""
    if q is None:
        return 0.0
    return float(q.value * _MILLI)


def mem_to_mib(q: Optional[Quantity]) -> float:
    """Convert a memory quantity (bytes) to MiB; absent counts as zero."""
    if q is None:
        return 0.0
    return float(q.value / _MIB)


def aggregate_pod_resources(containers: Iterable[ContainerResources]) -> PodResourceTotals:
    """Sum requests and limits of every container in a pod template.

    The result is per pod; callers scale by the replica count. Quantities are
    taken as-is, zero and negative values included.
    """
    cpu_req = cpu_lim = mem_req = mem_lim = 0.0
    for c in containers:
        cpu_req += cpu_to_milli(c.cpu_request)
        cpu_lim += cpu_to_milli(c.cpu_limit)
        mem_req += mem_to_mib(c.memory_request)
        mem_lim += mem_to_mib(c.memory_limit)
    return PodResourceTotals(
        cpu_request_milli=cpu_req,
        cpu_limit_milli=cpu_lim,
        memory_request_mib=mem_req,
        memory_limit_mib=mem_lim,
    )
