from kube_capacity.compute.models import (
    HorizontalPodAutoscaler, ScaleTargetRef, MetricSpec, MetricStatus,
    MetricTarget, MetricValueStatus, Quantity,
)
from kube_capacity.compute.hpa_metrics import summarize_cpu


def make_hpa(metrics=(), current=()):
    return HorizontalPodAutoscaler(
        namespace='default',
        name='web',
        scale_target_ref=ScaleTargetRef(kind='Deployment', name='web'),
        max_replicas=10,
        min_replicas=2,
        metrics=tuple(metrics),
        current_metrics=tuple(current),
    )


def cpu_spec(target_type, **kwargs):
    return MetricSpec(type='Resource', resource_name='cpu', target=MetricTarget(type=target_type, **kwargs))


def cpu_status(**kwargs):
    return MetricStatus(type='Resource', resource_name='cpu', current=MetricValueStatus(**kwargs))


def test_no_metrics_returns_dash():
    assert summarize_cpu(make_hpa()) == '-'


def test_target_only():
    h = make_hpa(metrics=[cpu_spec('Utilization', average_utilization=60)])
    assert summarize_cpu(h) == 'cpu: ?/60%'


def test_current_only():
    h = make_hpa(current=[cpu_status(average_value=Quantity.parse('120m'))])
    assert summarize_cpu(h) == 'cpu: 120m/?'


def test_utilization_target_with_average_value_current():
    h = make_hpa(
        metrics=[cpu_spec('Utilization', average_utilization=80)],
        current=[cpu_status(average_value=Quantity.parse('640m'))],
    )
    assert summarize_cpu(h) == 'cpu: 640m/80%'


def test_average_value_and_value_targets():
    h = make_hpa(metrics=[cpu_spec('AverageValue', average_value=Quantity.parse('250m'))])
    assert summarize_cpu(h) == 'cpu: ?/250m'
    h = make_hpa(metrics=[cpu_spec('Value', value=Quantity.parse('2'))])
    assert summarize_cpu(h) == 'cpu: ?/2'


def test_target_kind_without_value_is_unresolved():
    h = make_hpa(metrics=[cpu_spec('Utilization', average_value=Quantity.parse('250m'))])
    assert summarize_cpu(h) == '-'


def test_unknown_target_kind_is_unresolved():
    h = make_hpa(
        metrics=[cpu_spec('Percentage', average_utilization=50)],
        current=[cpu_status(average_utilization=30)],
    )
    assert summarize_cpu(h) == 'cpu: 30%/?'


def test_current_priority_utilization_then_average_then_value():
    both = cpu_status(average_utilization=40, average_value=Quantity.parse('400m'), value=Quantity.parse('1'))
    assert summarize_cpu(make_hpa(current=[both])) == 'cpu: 40%/?'
    avg_and_value = cpu_status(average_value=Quantity.parse('400m'), value=Quantity.parse('1'))
    assert summarize_cpu(make_hpa(current=[avg_and_value])) == 'cpu: 400m/?'
    value_only = cpu_status(value=Quantity.parse('1500m'))
    assert summarize_cpu(make_hpa(current=[value_only])) == 'cpu: 1500m/?'


def test_empty_current_status_is_unresolved():
    h = make_hpa(metrics=[cpu_spec('Utilization', average_utilization=70)], current=[cpu_status()])
    assert summarize_cpu(h) == 'cpu: ?/70%'


def test_first_cpu_metric_wins():
    h = make_hpa(
        metrics=[
            MetricSpec(type='Resource', resource_name='memory',
                       target=MetricTarget(type='Utilization', average_utilization=90)),
            MetricSpec(type='Pods'),
            cpu_spec('Utilization', average_utilization=50),
            cpu_spec('Utilization', average_utilization=99),
        ],
        current=[
            cpu_status(average_utilization=20),
            cpu_status(average_utilization=77),
        ],
    )
    assert summarize_cpu(h) == 'cpu: 20%/50%'


def test_first_cpu_entry_without_value_does_not_fall_through():
    h = make_hpa(metrics=[
        cpu_spec('Utilization'),
        cpu_spec('Utilization', average_utilization=60),
    ])
    assert summarize_cpu(h) == '-'


def test_non_resource_metrics_are_ignored():
    h = make_hpa(
        metrics=[MetricSpec(type='External')],
        current=[MetricStatus(type='Pods')],
    )
    assert summarize_cpu(h) == '-'
