from __future__ import annotations
from typing import Dict, Iterable, Optional, Tuple
from .models import HorizontalPodAutoscaler
from ..util import logging as log

DEPLOYMENT_KIND = 'Deployment'

HpaIndex = Dict[Tuple[str, str], HorizontalPodAutoscaler]


def build_hpa_index(hpas: Iterable[HorizontalPodAutoscaler]) -> HpaIndex:
    """Index HPAs by the (namespace, name) of the Deployment they scale.

    Only exact ``Deployment`` targets are kept. The key namespace is the HPA's
    own, since a scale target cannot live in another namespace. When several
    HPAs point at the same Deployment the last one wins.
    """
    index: HpaIndex = {}
    for hpa in hpas:
        ref = hpa.scale_target_ref
        if ref.kind != DEPLOYMENT_KIND:
            continue
        key = (hpa.namespace, ref.name)
        previous = index.get(key)
        if previous is not None:
            log.warn('multiple hpas target one deployment, keeping last',
                     namespace=hpa.namespace, deployment=ref.name,
                     replaced=previous.name, kept=hpa.name)
        index[key] = hpa
    return index


def lookup_hpa(index: HpaIndex, namespace: str, name: str) -> Optional[HorizontalPodAutoscaler]:
    return index.get((namespace, name))
