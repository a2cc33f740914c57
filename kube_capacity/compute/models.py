"""Value types shared by the aggregation and HPA correlation code.

These are plain frozen dataclasses built by the cluster adapter
(``kube_capacity.kube.adapt``) so the compute layer never touches raw API
manifests or Kubernetes client objects.
"""
from __future__ import annotations
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Optional, Tuple, Any, Dict
from kubernetes.utils.quantity import parse_quantity


class QuantityError(ValueError):
    """Raised when a resource quantity cannot be parsed."""


@dataclass(frozen=True)
class Quantity:
    text: str
    value: Decimal

    @classmethod
    def parse(cls, raw: Any, where: str = '') -> 'Quantity':
        text = str(raw).strip()
        try:
            value = parse_quantity(text)
        except (ValueError, ArithmeticError) as e:
            suffix = f' at {where}' if where else ''
            raise QuantityError(f'Invalid quantity {text!r}{suffix}: {e}') from e
        return cls(text=text, value=value)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class ContainerResources:
    name: str = ''
    cpu_request: Optional[Quantity] = None
    cpu_limit: Optional[Quantity] = None
    memory_request: Optional[Quantity] = None
    memory_limit: Optional[Quantity] = None


@dataclass(frozen=True)
class Deployment:
    namespace: str
    name: str
    replicas: Optional[int] = None
    containers: Tuple[ContainerResources, ...] = ()

    @property
    def effective_replicas(self) -> int:
        return 1 if self.replicas is None else self.replicas


@dataclass(frozen=True)
class PodResourceTotals:
    cpu_request_milli: float = 0.0
    cpu_limit_milli: float = 0.0
    memory_request_mib: float = 0.0
    memory_limit_mib: float = 0.0

    def __add__(self, other: 'PodResourceTotals') -> 'PodResourceTotals':
        if not isinstance(other, PodResourceTotals):
            return NotImplemented
        return PodResourceTotals(
            cpu_request_milli=self.cpu_request_milli + other.cpu_request_milli,
            cpu_limit_milli=self.cpu_limit_milli + other.cpu_limit_milli,
            memory_request_mib=self.memory_request_mib + other.memory_request_mib,
            memory_limit_mib=self.memory_limit_mib + other.memory_limit_mib,
        )

    def scaled(self, replicas: int) -> 'PodResourceTotals':
        factor = float(replicas)
        return PodResourceTotals(
            cpu_request_milli=self.cpu_request_milli * factor,
            cpu_limit_milli=self.cpu_limit_milli * factor,
            memory_request_mib=self.memory_request_mib * factor,
            memory_limit_mib=self.memory_limit_mib * factor,
        )


@dataclass(frozen=True)
class ScaleTargetRef:
    kind: str
    name: str


@dataclass(frozen=True)
class MetricTarget:
    # Utilization | AverageValue | Value
    type: str
    average_utilization: Optional[int] = None
    average_value: Optional[Quantity] = None
    value: Optional[Quantity] = None


@dataclass(frozen=True)
class MetricValueStatus:
    average_utilization: Optional[int] = None
    average_value: Optional[Quantity] = None
    value: Optional[Quantity] = None


@dataclass(frozen=True)
class MetricSpec:
    type: str
    resource_name: Optional[str] = None
    target: Optional[MetricTarget] = None


@dataclass(frozen=True)
class MetricStatus:
    type: str
    resource_name: Optional[str] = None
    current: Optional[MetricValueStatus] = None


@dataclass(frozen=True)
class HorizontalPodAutoscaler:
    namespace: str
    name: str
    scale_target_ref: ScaleTargetRef
    max_replicas: int
    min_replicas: Optional[int] = None
    metrics: Tuple[MetricSpec, ...] = ()
    current_metrics: Tuple[MetricStatus, ...] = ()


@dataclass(frozen=True)
class ReportRow:
    namespace: str
    name: str
    replicas: int
    cpu_req_milli: float
    cpu_limit_milli: float
    mem_req_mi: float
    mem_limit_mi: float
    hpa_min: str = '-'
    hpa_max: str = '-'
    hpa_target: str = '-'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
