from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from ..config import AppConfig, ClusterConfig

@dataclass(frozen=True)
class Scope:
    namespace: Optional[str] = None
    all_namespaces: bool = False
    selector: Optional[str] = None

    def __str__(self) -> str:
        return self.label()

    def label(self) -> str:
        base = 'all namespaces' if self.all_namespaces else f'namespace "{self.namespace or ""}"'
        if self.selector:
            return f'{base} (selector: {self.selector})'
        return base

    def ns(self) -> Optional[str]:
        """Namespace to list in, or None for a cluster-wide list."""
        if self.all_namespaces:
            return None
        return self.namespace


def get_cluster_cfg(app_cfg: AppConfig, name: Optional[str] = None) -> ClusterConfig:
    if name is None:
        return app_cfg.clusters[0]
    for c in app_cfg.clusters:
        if c.name == name:
            return c
    raise ValueError(f'Cluster {name} not found in config')


def resolve_scope(target: ClusterConfig, namespace: Optional[str] = None, all_namespaces: bool = False,
                  selector: Optional[str] = None, context_namespace: Optional[str] = None) -> Scope:
    # --all-namespaces wins over --namespace, then the cluster entry, then the kubeconfig context
    if all_namespaces:
        return Scope(namespace=None, all_namespaces=True, selector=selector or None)
    ns = namespace or target.namespace or context_namespace or 'default'
    return Scope(namespace=ns, all_namespaces=False, selector=selector or None)
