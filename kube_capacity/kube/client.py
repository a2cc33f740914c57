from __future__ import annotations
from typing import Dict, Any, List, Tuple, Iterable, Optional
from kubernetes import config as k8s_config, client as k8s_client
from kubernetes.client.exceptions import ApiException
from kubernetes.config import ConfigException
import base64, os, time, json
import urllib3
from ..util import logging as log

SERVICE_ACCOUNT_NAMESPACE_FILE = '/var/run/secrets/kubernetes.io/serviceaccount/namespace'
PAGE_SIZE = 500
RETRY_STATUSES = (429, 500, 502, 503, 504)

# kind -> (api_version, plural)
KIND_MAP: Dict[str, Tuple[str, str]] = {
    'Deployment': ('apps/v1', 'deployments'),
    'HorizontalPodAutoscaler': ('autoscaling/v2', 'horizontalpodautoscalers'),
}


class ClusterConfigError(Exception):
    """The API client could not be configured for a cluster."""


class ResourceListError(Exception):
    """A list call failed permanently or ran out of retries."""


def configure_from_credentials(credentials) -> k8s_client.Configuration:
    cfg = k8s_client.Configuration()
    cfg.host = credentials.host
    if credentials.token:
        cfg.api_key = {"authorization": credentials.token}
        cfg.api_key_prefix = {"authorization": "Bearer"}
        log.debug('using bearer token', host=credentials.host)
    elif credentials.username and credentials.password:
        basic_auth = base64.b64encode(f"{credentials.username}:{credentials.password}".encode()).decode()
        cfg.api_key = {"authorization": f"Basic {basic_auth}"}
        log.debug('using basic auth', host=credentials.host, username=credentials.username)
    if credentials.cert_file: cfg.cert_file = credentials.cert_file
    if credentials.key_file: cfg.key_file = credentials.key_file
    if credentials.ca_file: cfg.ssl_ca_cert = credentials.ca_file
    cfg.verify_ssl = credentials.verify_ssl
    if not credentials.verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warn('ssl_verification_disabled', host=credentials.host)
    return cfg


def load_client_configuration(target) -> k8s_client.Configuration:
    """Kubeconfig first (explicit path, $KUBECONFIG, ~/.kube/config), then in-cluster."""
    cfg = k8s_client.Configuration()
    try:
        k8s_config.load_kube_config(config_file=target.kubeconfig, context=target.context, client_configuration=cfg)
        log.debug('loaded kubeconfig', cluster=target.name, kubeconfig=target.kubeconfig or 'default', context=target.context)
        return cfg
    except (ConfigException, OSError) as e:
        if target.kubeconfig:
            raise ClusterConfigError(f'Cannot load kubeconfig {target.kubeconfig} for cluster {target.name}: {e}') from e
        kube_error = e
    try:
        k8s_config.load_incluster_config(client_configuration=cfg)
    except ConfigException as e:
        raise ClusterConfigError(f'Cannot build kubeconfig: {kube_error}; not running in-cluster either: {e}') from e
    log.debug('using in-cluster configuration', cluster=target.name)
    return cfg


def build_api_client(target) -> k8s_client.ApiClient:
    if target.credentials:
        cfg = configure_from_credentials(target.credentials)
    else:
        cfg = load_client_configuration(target)
    return k8s_client.ApiClient(configuration=cfg)


def current_namespace(target) -> Optional[str]:
    """Namespace of the active kubeconfig context, or of the in-cluster service account."""
    if target.credentials:
        return None
    try:
        contexts, active = k8s_config.list_kube_config_contexts(config_file=target.kubeconfig)
        if target.context:
            active = next((c for c in contexts if c.get('name') == target.context), active)
        ns = ((active or {}).get('context') or {}).get('namespace')
        if ns:
            return ns
    except (ConfigException, OSError) as e:
        log.debug('no kubeconfig context namespace', cluster=target.name, error=str(e))
    if os.path.exists(SERVICE_ACCOUNT_NAMESPACE_FILE):
        with open(SERVICE_ACCOUNT_NAMESPACE_FILE, 'r', encoding='utf-8') as f:
            return f.read().strip() or None
    return None


def _split_api_version(api_version: str) -> Tuple[str | None, str]:
    if '/' in api_version:
        group, version = api_version.split('/', 1)
        return group, version
    return None, api_version


def _resource_path(api_version: str, plural: str, namespace: Optional[str]) -> str:
    group, version = _split_api_version(api_version)
    prefix = f"/api/{version}" if group is None else f"/apis/{group}/{version}"
    if namespace:
        return f"{prefix}/namespaces/{namespace}/{plural}"
    return f"{prefix}/{plural}"


def list_resources(api_client: k8s_client.ApiClient, api_version: str, plural: str, namespace: Optional[str] = None,
                   label_selector: Optional[str] = None, timeout: float = 15.0, max_retries: int = 4,
                   backoff_base: float = 0.5) -> Iterable[Dict[str, Any]]:
    """Yield raw items of a (paginated) list call, cluster-wide when namespace is None."""
    path = _resource_path(api_version, plural, namespace)
    fields = dict(api_version=api_version, plural=plural, namespace=namespace or '*')
    cont = None
    while True:
        query: List[Tuple[str, Any]] = [('limit', PAGE_SIZE)]
        if label_selector:
            query.append(('labelSelector', label_selector))
        if cont:
            query.append(('continue', cont))
        attempt = 0
        while True:
            try:
                resp = api_client.call_api(path, 'GET', query_params=query, header_params={'Accept': 'application/json'},
                                           response_type='object', _preload_content=False,
                                           auth_settings=['BearerToken'], _request_timeout=timeout)
                payload = json.loads(resp[0].data)
                break
            except ApiException as e:
                status = getattr(e, 'status', None)
                if status in (403, 404):
                    log.warn('skipping list due to access/availability', status=status, **fields)
                    return
                if status in RETRY_STATUSES and attempt < max_retries:
                    sleep_for = backoff_base * (2 ** attempt)
                    log.warn('transient error, retrying', status=status, attempt=attempt+1, sleep=sleep_for, **fields)
                    time.sleep(sleep_for); attempt += 1; continue
                log.error('failed listing resources', status=status, reason=str(e), **fields)
                raise ResourceListError(f'Listing {plural} failed with status {status}: {e.reason}') from e
            except (urllib3.exceptions.HTTPError, OSError) as e:
                if attempt < max_retries:
                    sleep_for = backoff_base * (2 ** attempt)
                    log.warn('connection error, retrying', attempt=attempt+1, sleep=sleep_for, error=str(e), **fields)
                    time.sleep(sleep_for); attempt += 1; continue
                log.error('unhandled error listing resources', error=str(e), **fields)
                raise ResourceListError(f'Listing {plural} failed: {e}') from e
            except ValueError as e:
                log.error('undecodable list response', error=str(e), **fields)
                raise ResourceListError(f'Listing {plural} returned a non-JSON body: {e}') from e
        for item in payload.get('items', []):
            yield item
        cont = (payload.get('metadata') or {}).get('continue')
        if not cont:
            break


def list_kind(api_client: k8s_client.ApiClient, kind: str, scope, label_selector: Optional[str] = None,
              timeout: float = 15.0) -> List[Dict[str, Any]]:
    api_version, plural = KIND_MAP[kind]
    ns = scope.ns()
    if ns:
        log.info('listing kind in namespace', kind=kind, namespace=ns, api_version=api_version, selector=label_selector)
    else:
        log.info('listing kind cluster-wide', kind=kind, api_version=api_version, selector=label_selector)
    items = list(list_resources(api_client, api_version, plural, namespace=ns,
                                label_selector=label_selector, timeout=timeout))
    log.debug('listed kind', kind=kind, count=len(items))
    return items


def list_deployments(api_client: k8s_client.ApiClient, scope, timeout: float = 15.0) -> List[Dict[str, Any]]:
    return list_kind(api_client, 'Deployment', scope, label_selector=scope.selector, timeout=timeout)


def list_hpas(api_client: k8s_client.ApiClient, scope, timeout: float = 15.0) -> List[Dict[str, Any]]:
    # HPAs rarely carry the workload's labels; the selector only narrows deployments
    return list_kind(api_client, 'HorizontalPodAutoscaler', scope, timeout=timeout)
