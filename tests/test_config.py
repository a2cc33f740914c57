import os
import textwrap

import pytest

from kube_capacity.config import load_config, default_config, DEFAULT_CLUSTER_NAME


def write_cfg(tmp_path, text):
    path = tmp_path / 'cfg.yaml'
    path.write_text(textwrap.dedent(text))
    return str(path)


def test_full_config_parsing(tmp_path):
    path = write_cfg(tmp_path, """
    clusters:
      - name: prod
        kubeconfig: ~/.kube/prod.yaml
        context: prod-admin
        namespace: payments
        request_timeout: 30
      - name: lab
        credentials:
          host: https://api.lab:6443
          token: secret
          verify_ssl: false
    logging:
      level: debug
      format: TEXT
    report:
      output: json
      out_dir: out
    """)
    cfg = load_config(path)
    prod, lab = cfg.clusters
    assert prod.kubeconfig == os.path.expanduser('~/.kube/prod.yaml')
    assert prod.context == 'prod-admin'
    assert prod.namespace == 'payments'
    assert prod.request_timeout == 30.0
    assert prod.auth_mode == 'kubeconfig'
    assert lab.credentials.host == 'https://api.lab:6443'
    assert lab.credentials.verify_ssl is False
    assert lab.auth_mode == 'credentials'
    assert lab.request_timeout == 15.0
    assert cfg.logging.level == 'DEBUG'
    assert cfg.logging.format == 'text'
    assert cfg.report.output == 'json'
    assert cfg.report.out_dir == 'out'


def test_defaults_when_sections_missing(tmp_path):
    cfg = load_config(write_cfg(tmp_path, """
    clusters:
      - name: only
    """))
    assert cfg.clusters[0].auth_mode == 'auto'
    assert cfg.report.output == 'table'
    assert cfg.logging.level == 'INFO'
    assert cfg.logging.format == 'json'


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / 'missing.yaml'))


@pytest.mark.parametrize('text,message', [
    ("logging:\n  level: INFO\n", 'No clusters defined'),
    ("clusters:\n  - name: a\n  - name: a\n", 'Duplicate cluster names'),
    ("clusters:\n  - name: a\n    kubeconfig: k\n    credentials:\n      host: h\n", 'cannot specify both'),
    ("clusters:\n  - name: a\n    credentials:\n      token: t\n", 'must include host'),
    ("clusters:\n  - name: a\nreport:\n  output: pdf\n", 'Unknown report output'),
    ("clusters:\n  - name: a\nlogging:\n  level: LOUD\n", 'Unknown log level'),
    ("clusters:\n  - name: a\nlogging:\n  format: xml\n", 'Unknown log format'),
    ("clusters:\n  - name: a\n    request_timeout: 0\n", 'must be positive'),
    ("clusters:\n  - kubeconfig: k\n", 'needs a name'),
    ("clusters: [\n", 'Invalid YAML'),
    ("clusters: [prod]\n", 'must be a mapping'),
    ("clusters: prod\n", 'must be a list'),
    ("- prod\n", 'must contain a mapping'),
])
def test_invalid_configs(tmp_path, text, message):
    path = tmp_path / 'bad.yaml'
    path.write_text(text)
    with pytest.raises(ValueError) as exc:
        load_config(str(path))
    assert message in str(exc.value)


def test_default_config_has_implicit_cluster():
    cfg = default_config()
    assert [c.name for c in cfg.clusters] == [DEFAULT_CLUSTER_NAME]
    assert cfg.clusters[0].auth_mode == 'auto'
