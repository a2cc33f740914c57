from __future__ import annotations
import os
import yaml
from dataclasses import dataclass, field
from typing import List, Optional
from .util.logging import FORMATS, normalize_level

DEFAULT_CONFIG_FILE = 'config/config.yaml'
DEFAULT_CLUSTER_NAME = 'current'
DEFAULT_REQUEST_TIMEOUT = 15.0
OUTPUT_FORMATS = ('table', 'json', 'html', 'excel')

@dataclass
class ClusterCredentials:
    host: str
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    verify_ssl: bool = True

@dataclass
class ClusterConfig:
    name: str
    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    credentials: Optional[ClusterCredentials] = None
    namespace: Optional[str] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def auth_mode(self) -> str:
        if self.credentials:
            return 'credentials'
        if self.kubeconfig:
            return 'kubeconfig'
        return 'auto'

@dataclass
class ReportConfig:
    output: str = 'table'
    out_dir: str = 'reports'

@dataclass
class LoggingConfig:
    level: str = 'INFO'
    format: str = 'json'

@dataclass
class AppConfig:
    clusters: List[ClusterConfig]
    report: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_config() -> AppConfig:
    """Configuration used when no config file is present: one cluster resolved
    from $KUBECONFIG, ~/.kube/config or the in-cluster service account."""
    return AppConfig(clusters=[ClusterConfig(name=DEFAULT_CLUSTER_NAME)])


def _parse_credentials(name: str, creds_data) -> ClusterCredentials:
    if not isinstance(creds_data, dict) or not creds_data.get('host'):
        raise ValueError(f'Cluster {name} credentials must include host')
    return ClusterCredentials(
        host=creds_data['host'],
        token=creds_data.get('token'),
        username=creds_data.get('username'),
        password=creds_data.get('password'),
        cert_file=creds_data.get('cert_file'),
        key_file=creds_data.get('key_file'),
        ca_file=creds_data.get('ca_file'),
        verify_ssl=creds_data.get('verify_ssl', True)
    )


def load_config(path: str = DEFAULT_CONFIG_FILE) -> AppConfig:
    if not os.path.exists(path):
        raise FileNotFoundError(f'Config file not found: {path}')
    with open(path, 'r', encoding='utf-8') as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f'Invalid YAML in config file {path}: {e}') from e
    if not isinstance(raw, dict):
        raise ValueError(f'Config file {path} must contain a mapping')
    clusters: List[ClusterConfig] = []
    cluster_entries = raw.get('clusters', []) or []
    if not isinstance(cluster_entries, list):
        raise ValueError('clusters must be a list of cluster entries')
    for c in cluster_entries:
        if not isinstance(c, dict):
            raise ValueError(f'Cluster entry {c!r} must be a mapping')
        if not c.get('name'):
            raise ValueError('Every cluster entry needs a name')
        name = c['name']
        credentials = None
        if c.get('credentials'):
            credentials = _parse_credentials(name, c['credentials'])
        kubeconfig = c.get('kubeconfig')
        if kubeconfig and credentials:
            raise ValueError(f'Cluster {name} cannot specify both kubeconfig and credentials')
        timeout = float(c.get('request_timeout', DEFAULT_REQUEST_TIMEOUT))
        if timeout <= 0:
            raise ValueError(f'Cluster {name} request_timeout must be positive')
        clusters.append(ClusterConfig(
            name=name,
            kubeconfig=os.path.expanduser(kubeconfig) if kubeconfig else None,
            context=c.get('context'),
            credentials=credentials,
            namespace=c.get('namespace'),
            request_timeout=timeout,
        ))
    if not clusters:
        raise ValueError('No clusters defined in configuration')
    names = [c.name for c in clusters]
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise ValueError(f'Duplicate cluster names in configuration: {", ".join(dupes)}')
    report_raw = raw.get('report', {}) or {}
    report = ReportConfig(
        output=report_raw.get('output', 'table'),
        out_dir=report_raw.get('out_dir', 'reports'),
    )
    if report.output not in OUTPUT_FORMATS:
        raise ValueError(f'Unknown report output {report.output}. Expected one of {", ".join(OUTPUT_FORMATS)}')
    logging_raw = raw.get('logging', {}) or {}
    logging_cfg = LoggingConfig(
        level=logging_raw.get('level', 'INFO'),
        format=str(logging_raw.get('format', 'json')).lower()
    )
    logging_cfg.level = normalize_level(logging_cfg.level)
    if logging_cfg.format not in FORMATS:
        raise ValueError(f'Unknown log format {logging_cfg.format}. Expected one of {", ".join(FORMATS)}')
    return AppConfig(clusters=clusters, report=report, logging=logging_cfg)
