from __future__ import annotations
from typing import Iterable, List
from .models import Deployment, PodResourceTotals, ReportRow
from .resources import aggregate_pod_resources
from .hpa_index import HpaIndex, lookup_hpa
from .hpa_metrics import summarize_cpu
from ..util import logging as log


def build_row(deployment: Deployment, hpa_index: HpaIndex) -> ReportRow:
    replicas = deployment.effective_replicas
    totals = aggregate_pod_resources(deployment.containers).scaled(replicas)
    hpa_min = hpa_max = hpa_target = '-'
    hpa = lookup_hpa(hpa_index, deployment.namespace, deployment.name)
    if hpa is not None:
        hpa_min = str(hpa.min_replicas) if hpa.min_replicas is not None else ''
        hpa_max = str(hpa.max_replicas)
        hpa_target = summarize_cpu(hpa)
    return ReportRow(
        namespace=deployment.namespace,
        name=deployment.name,
        replicas=replicas,
        cpu_req_milli=totals.cpu_request_milli,
        cpu_limit_milli=totals.cpu_limit_milli,
        mem_req_mi=totals.memory_request_mib,
        mem_limit_mi=totals.memory_limit_mib,
        hpa_min=hpa_min,
        hpa_max=hpa_max,
        hpa_target=hpa_target,
    )


def build_rows(deployments: Iterable[Deployment], hpa_index: HpaIndex) -> List[ReportRow]:
    """One report row per deployment, in input order."""
    rows = [build_row(d, hpa_index) for d in deployments]
    log.debug('built report rows', rows=len(rows), hpas=len(hpa_index))
    return rows


def compute_report_totals(rows: Iterable[ReportRow]) -> PodResourceTotals:
    total = PodResourceTotals()
    for r in rows:
        total = total + PodResourceTotals(r.cpu_req_milli, r.cpu_limit_milli, r.mem_req_mi, r.mem_limit_mi)
    return total
