"""Map raw API manifests (as returned by list calls) onto the compute value types."""
from __future__ import annotations
from typing import Any, Dict, Optional
from ..compute.models import (
    Quantity, ContainerResources, Deployment, ScaleTargetRef,
    MetricTarget, MetricValueStatus, MetricSpec, MetricStatus, HorizontalPodAutoscaler,
)


def _object_ref(manifest: Dict[str, Any]) -> str:
    meta = manifest.get('metadata') or {}
    kind = manifest.get('kind') or 'object'
    return f"{kind} {meta.get('namespace', '')}/{meta.get('name', '')}"


def _quantity(values: Dict[str, Any], key: str, where: str) -> Optional[Quantity]:
    raw = values.get(key)
    if raw is None:
        return None
    return Quantity.parse(raw, where=f'{where}.{key}')


def _int_or_none(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def container_from_spec(container: Dict[str, Any], where: str) -> ContainerResources:
    resources = container.get('resources') or {}
    req = resources.get('requests') or {}
    lim = resources.get('limits') or {}
    return ContainerResources(
        name=container.get('name', ''),
        cpu_request=_quantity(req, 'cpu', f'{where}.requests'),
        cpu_limit=_quantity(lim, 'cpu', f'{where}.limits'),
        memory_request=_quantity(req, 'memory', f'{where}.requests'),
        memory_limit=_quantity(lim, 'memory', f'{where}.limits'),
    )


def deployment_from_manifest(manifest: Dict[str, Any]) -> Deployment:
    meta = manifest.get('metadata') or {}
    spec = manifest.get('spec') or {}
    pod_spec = (spec.get('template') or {}).get('spec') or {}
    ref = _object_ref({'kind': 'Deployment', **manifest})
    containers = tuple(
        container_from_spec(c, f"{ref} container {c.get('name', i)}")
        for i, c in enumerate(pod_spec.get('containers') or [])
    )
    return Deployment(
        namespace=meta.get('namespace', ''),
        name=meta.get('name', ''),
        replicas=_int_or_none(spec.get('replicas')),
        containers=containers,
    )


def _metric_target(raw: Optional[Dict[str, Any]], where: str) -> Optional[MetricTarget]:
    if raw is None:
        return None
    return MetricTarget(
        type=raw.get('type', ''),
        average_utilization=_int_or_none(raw.get('averageUtilization')),
        average_value=_quantity(raw, 'averageValue', where),
        value=_quantity(raw, 'value', where),
    )


def _metric_value_status(raw: Optional[Dict[str, Any]], where: str) -> Optional[MetricValueStatus]:
    if raw is None:
        return None
    return MetricValueStatus(
        average_utilization=_int_or_none(raw.get('averageUtilization')),
        average_value=_quantity(raw, 'averageValue', where),
        value=_quantity(raw, 'value', where),
    )


def metric_spec_from_manifest(raw: Dict[str, Any], where: str) -> MetricSpec:
    metric_type = raw.get('type', '')
    resource = raw.get('resource') if metric_type == 'Resource' else None
    if not resource:
        return MetricSpec(type=metric_type)
    return MetricSpec(
        type=metric_type,
        resource_name=resource.get('name'),
        target=_metric_target(resource.get('target'), f'{where}.target'),
    )


def metric_status_from_manifest(raw: Dict[str, Any], where: str) -> MetricStatus:
    metric_type = raw.get('type', '')
    resource = raw.get('resource') if metric_type == 'Resource' else None
    if not resource:
        return MetricStatus(type=metric_type)
    return MetricStatus(
        type=metric_type,
        resource_name=resource.get('name'),
        current=_metric_value_status(resource.get('current'), f'{where}.current'),
    )


def hpa_from_manifest(manifest: Dict[str, Any]) -> HorizontalPodAutoscaler:
    meta = manifest.get('metadata') or {}
    spec = manifest.get('spec') or {}
    status = manifest.get('status') or {}
    target_ref = spec.get('scaleTargetRef') or {}
    ref = _object_ref({'kind': 'HorizontalPodAutoscaler', **manifest})
    return HorizontalPodAutoscaler(
        namespace=meta.get('namespace', ''),
        name=meta.get('name', ''),
        scale_target_ref=ScaleTargetRef(
            kind=target_ref.get('kind', ''),
            name=target_ref.get('name', ''),
        ),
        min_replicas=_int_or_none(spec.get('minReplicas')),
        max_replicas=int(spec.get('maxReplicas') or 0),
        metrics=tuple(
            metric_spec_from_manifest(m, f'{ref} spec.metrics[{i}]')
            for i, m in enumerate(spec.get('metrics') or [])
        ),
        current_metrics=tuple(
            metric_status_from_manifest(m, f'{ref} status.currentMetrics[{i}]')
            for i, m in enumerate(status.get('currentMetrics') or [])
        ),
    )
