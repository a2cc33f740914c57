from __future__ import annotations
from typing import Optional
from .models import HorizontalPodAutoscaler, MetricTarget, MetricValueStatus

RESOURCE_METRIC = 'Resource'
CPU = 'cpu'

UTILIZATION = 'Utilization'
AVERAGE_VALUE = 'AverageValue'
VALUE = 'Value'


def _format_target(target: Optional[MetricTarget]) -> Optional[str]:
    if target is None:
        return None
    if target.type == UTILIZATION:
        if target.average_utilization is not None:
            return f'{target.average_utilization}%'
    elif target.type == AVERAGE_VALUE:
        if target.average_value is not None:
            return str(target.average_value)
    elif target.type == VALUE:
        if target.value is not None:
            return str(target.value)
    return None


def _format_current(current: Optional[MetricValueStatus]) -> Optional[str]:
    if current is None:
        return None
    if current.average_utilization is not None:
        return f'{current.average_utilization}%'
    if current.average_value is not None:
        return str(current.average_value)
    if current.value is not None:
        return str(current.value)
    return None


def cpu_target(hpa: HorizontalPodAutoscaler) -> Optional[str]:
    """Configured CPU target of the first cpu resource metric, if any."""
    for metric in hpa.metrics:
        if metric.type == RESOURCE_METRIC and metric.resource_name == CPU:
            return _format_target(metric.target)
    return None


def cpu_current(hpa: HorizontalPodAutoscaler) -> Optional[str]:
    """Last observed CPU value of the first cpu resource metric, if any."""
    for metric in hpa.current_metrics:
        if metric.type == RESOURCE_METRIC and metric.resource_name == CPU:
            return _format_current(metric.current)
    return None


def summarize_cpu(hpa: HorizontalPodAutoscaler) -> str:
    """Render the CPU metric of an HPA as ``cpu: <current>/<target>``.

    Returns ``-`` when neither side is known; an unknown side shows as ``?``.
    """
    target = cpu_target(hpa)
    current = cpu_current(hpa)
    if current is None and target is None:
        return '-'
    return f"cpu: {current or '?'}/{target or '?'}"
