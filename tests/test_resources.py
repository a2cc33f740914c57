import pytest

from kube_capacity.compute.models import ContainerResources, Quantity, PodResourceTotals
from kube_capacity.compute.resources import aggregate_pod_resources, cpu_to_milli, mem_to_mib


def q(text):
    return Quantity.parse(text)


def container(cpu_req=None, cpu_lim=None, mem_req=None, mem_lim=None, name='app'):
    return ContainerResources(
        name=name,
        cpu_request=q(cpu_req) if cpu_req is not None else None,
        cpu_limit=q(cpu_lim) if cpu_lim is not None else None,
        memory_request=q(mem_req) if mem_req is not None else None,
        memory_limit=q(mem_lim) if mem_lim is not None else None,
    )


def test_empty_container_list_is_all_zero():
    assert aggregate_pod_resources([]) == PodResourceTotals(0.0, 0.0, 0.0, 0.0)


def test_unit_conversion_exact():
    totals = aggregate_pod_resources([container(cpu_req='500m', mem_req='1Gi')])
    assert totals.cpu_request_milli == 500.0
    assert totals.memory_request_mib == 1024.0
    assert totals.cpu_limit_milli == 0.0
    assert totals.memory_limit_mib == 0.0


def test_whole_cores_and_plain_bytes():
    totals = aggregate_pod_resources([container(cpu_req='2', cpu_lim='1.5', mem_req='1048576', mem_lim='512Ki')])
    assert totals.cpu_request_milli == 2000.0
    assert totals.cpu_limit_milli == 1500.0
    assert totals.memory_request_mib == 1.0
    assert totals.memory_limit_mib == 0.5


def test_decimal_memory_suffixes():
    totals = aggregate_pod_resources([container(mem_req='1M', mem_lim='1G')])
    assert totals.memory_request_mib == pytest.approx(1_000_000 / (1024 * 1024))
    assert totals.memory_limit_mib == pytest.approx(1_000_000_000 / (1024 * 1024))


def test_absent_quantities_contribute_zero():
    totals = aggregate_pod_resources([
        container(cpu_req='100m'),
        container(mem_lim='256Mi'),
        ContainerResources(name='bare'),
    ])
    assert totals == PodResourceTotals(100.0, 0.0, 0.0, 256.0)


def test_zero_and_negative_values_are_taken_literally():
    totals = aggregate_pod_resources([container(cpu_req='0', cpu_lim='-100m')])
    assert totals.cpu_request_milli == 0.0
    assert totals.cpu_limit_milli == -100.0


def test_aggregation_is_additive():
    a = [container('100m', '200m', '64Mi', '128Mi'), container('250m', None, '1Gi', None)]
    b = [container('1', '2', '512Mi', '1Gi'), container(None, '300m', None, '32Mi')]
    combined = aggregate_pod_resources(a + b)
    split = aggregate_pod_resources(a) + aggregate_pod_resources(b)
    assert combined.cpu_request_milli == pytest.approx(split.cpu_request_milli)
    assert combined.cpu_limit_milli == pytest.approx(split.cpu_limit_milli)
    assert combined.memory_request_mib == pytest.approx(split.memory_request_mib)
    assert combined.memory_limit_mib == pytest.approx(split.memory_limit_mib)


def test_scaled_multiplies_every_column():
    totals = PodResourceTotals(100.0, 200.0, 64.0, 128.0).scaled(3)
    assert totals == PodResourceTotals(300.0, 600.0, 192.0, 384.0)


def test_single_quantity_helpers_handle_none():
    assert cpu_to_milli(None) == 0.0
    assert mem_to_mib(None) == 0.0
    assert cpu_to_milli(q('250m')) == 250.0
    assert mem_to_mib(q('2Gi')) == 2048.0
