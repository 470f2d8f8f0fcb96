# tests/core/test_registry.py
"""Tests for the per-request MetricsRegistry."""

import pytest
from prometheus_client.parser import text_string_to_metric_families

from kubesummary.core.projector import project
from kubesummary.core.registry import MetricsRegistry
from kubesummary.models.metrics import MetricRecord

NODE = "test.eu-west-1.compute.internal"


def _samples(registry: MetricsRegistry) -> dict:
    """Parses the rendered exposition into {(name, frozenset(labels)): value}."""
    samples = {}
    for family in text_string_to_metric_families(registry.render().decode("utf-8")):
        assert family.type == "gauge"
        for sample in family.samples:
            samples[(sample.name, frozenset(sample.labels.items()))] = sample.value
    return samples


def test_render_fixture(summary):
    registry = MetricsRegistry()
    assert registry.write(project(summary)) == 18

    body = registry.render().decode("utf-8")
    assert "# HELP kube_summary_container_rootfs_used_bytes Number of bytes that are consumed by the container" in body
    assert "# TYPE kube_summary_container_rootfs_used_bytes gauge" in body

    samples = _samples(registry)
    assert len(samples) == 18

    container = frozenset({"node": NODE, "pod": "dev-server-0", "namespace": "mon", "name": "dev-server"}.items())
    pod = frozenset({"node": NODE, "pod": "dev-server-0", "namespace": "mon"}.items())
    assert samples[("kube_summary_container_rootfs_used_bytes", container)] == 114688
    assert samples[("kube_summary_container_rootfs_capacity_bytes", container)] == 101535985664
    assert samples[("kube_summary_container_rootfs_available_bytes", container)] == 90016837632
    assert samples[("kube_summary_container_rootfs_inodes", container)] == 25474432
    assert samples[("kube_summary_container_rootfs_inodes_free", container)] == 25355212
    assert samples[("kube_summary_container_rootfs_inodes_used", container)] == 14
    assert samples[("kube_summary_pod_ephemeral_storage_used_bytes", pod)] == 133947392
    assert samples[("kube_summary_pod_ephemeral_storage_inodes_used", pod)] == 63


def test_metrics_without_samples_are_not_rendered(summary):
    registry = MetricsRegistry()
    registry.write(project(summary))
    body = registry.render().decode("utf-8")
    assert "kube_summary_node_runtime_imagefs" not in body


def test_empty_registry_renders_nothing():
    assert MetricsRegistry().render() == b""


def test_later_write_overwrites():
    registry = MetricsRegistry()
    labels = {"node": "n1"}
    registry.write([MetricRecord(name="kube_summary_node_runtime_imagefs_used_bytes", labels=labels, value=1)])
    registry.write([MetricRecord(name="kube_summary_node_runtime_imagefs_used_bytes", labels=labels, value=2)])
    assert registry.get_sample_value("kube_summary_node_runtime_imagefs_used_bytes", labels) == 2.0
    assert len(_samples(registry)) == 1


def test_unknown_metric_is_rejected():
    registry = MetricsRegistry()
    with pytest.raises(ValueError):
        registry.write([MetricRecord(name="kube_summary_unknown", labels={"node": "n1"}, value=1)])


def test_wrong_label_set_is_rejected():
    registry = MetricsRegistry()
    with pytest.raises(ValueError):
        registry.write(
            [MetricRecord(name="kube_summary_pod_ephemeral_storage_used_bytes", labels={"node": "n1"}, value=1)]
        )


def test_uid_registry_requires_uid_label(summary):
    registry = MetricsRegistry(include_uid=True)
    with pytest.raises(ValueError):
        registry.write(project(summary, include_uid=False))

    registry = MetricsRegistry(include_uid=True)
    registry.write(project(summary, include_uid=True))
    value = registry.get_sample_value(
        "kube_summary_pod_ephemeral_storage_used_bytes",
        {"node": NODE, "pod": "dev-server-0", "uid": "1b2c3d4e-0000-4a5b-8c7d-9e0f1a2b3c4d", "namespace": "mon"},
    )
    assert value == 133947392


def test_label_values_are_escaped():
    registry = MetricsRegistry()
    labels = {"node": 'weird"node\\name'}
    registry.write([MetricRecord(name="kube_summary_node_runtime_imagefs_inodes", labels=labels, value=3)])
    body = registry.render().decode("utf-8")
    assert 'node="weird\\"node\\\\name"' in body
    assert _samples(registry)[("kube_summary_node_runtime_imagefs_inodes", frozenset(labels.items()))] == 3


def test_projection_idempotent_across_registries(summary):
    first, second = MetricsRegistry(), MetricsRegistry()
    first.write(project(summary))
    second.write(project(summary))
    assert _samples(first) == _samples(second)
    assert first.metric_names == second.metric_names


def test_registries_are_independent(summary):
    first = MetricsRegistry()
    first.write(project(summary))
    assert MetricsRegistry().render() == b""
