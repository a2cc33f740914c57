"""Resource aggregation and HPA correlation exports."""
from .models import (
    Quantity, QuantityError, ContainerResources, Deployment, PodResourceTotals,
    ScaleTargetRef, MetricTarget, MetricValueStatus, MetricSpec, MetricStatus,
    HorizontalPodAutoscaler, ReportRow,
)
from .resources import aggregate_pod_resources
from .hpa_index import build_hpa_index, lookup_hpa
from .hpa_metrics import summarize_cpu
from .rows import build_rows, compute_report_totals

__all__ = [
    'Quantity',
    'QuantityError',
    'ContainerResources',
    'Deployment',
    'PodResourceTotals',
    'ScaleTargetRef',
    'MetricTarget',
    'MetricValueStatus',
    'MetricSpec',
    'MetricStatus',
    'HorizontalPodAutoscaler',
    'ReportRow',
    'aggregate_pod_resources',
    'build_hpa_index',
    'lookup_hpa',
    'summarize_cpu',
    'build_rows',
    'compute_report_totals',
]
