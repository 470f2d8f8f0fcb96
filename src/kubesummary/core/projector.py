# src/kubesummary/core/projector.py
"""
Flattens a kubelet Summary into gauge samples following core.schema.
"""

from typing import Dict, Iterator, List, Optional

from ..models.metrics import MetricRecord
from ..models.summary import FsStats, PodStats, Summary
from .schema import Resource, specs_for


def _records_for(fs: Optional[FsStats], resource: Resource, labels: Dict[str, str]) -> Iterator[MetricRecord]:
    """Yields one record per populated field of a FsStats block; nothing for absent fields."""
    if fs is None:
        return
    for spec in specs_for(resource):
        value = getattr(fs, spec.field)
        if value is not None:
            yield MetricRecord(name=spec.name, labels=labels, value=float(value))


def _pod_labels(node_name: str, pod: PodStats, include_uid: bool) -> Dict[str, str]:
    labels = {"node": node_name, "pod": pod.pod_ref.name, "namespace": pod.pod_ref.namespace}
    if include_uid:
        labels["uid"] = pod.pod_ref.uid or ""
    return labels


def project(summary: Summary, include_uid: bool = False) -> List[MetricRecord]:
    """
    Projects a Summary into metric records.

    Pods are walked first (each container's logs and rootfs, then the pod's
    ephemeral storage), followed by the node runtime image filesystem. Every
    record carries the summary's node name.

    Args:
        summary: The parsed /stats/summary report of one node.
        include_uid: Adds the pod uid label to container and pod scoped records.

    Returns:
        The records, one per populated FsStats field.
    """
    node_name = summary.node_name
    records: List[MetricRecord] = []

    for pod in summary.pods:
        pod_labels = _pod_labels(node_name, pod, include_uid)
        for container in pod.containers:
            container_labels = {**pod_labels, "name": container.name}
            records.extend(_records_for(container.logs, Resource.CONTAINER_LOGS, container_labels))
            records.extend(_records_for(container.rootfs, Resource.CONTAINER_ROOTFS, container_labels))
        records.extend(_records_for(pod.ephemeral_storage, Resource.POD_EPHEMERAL_STORAGE, pod_labels))

    runtime = summary.node.runtime
    if runtime is not None:
        records.extend(_records_for(runtime.image_fs, Resource.NODE_IMAGE_FS, {"node": node_name}))

    return records
