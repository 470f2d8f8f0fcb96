# src/kubesummary/core/schema.py
"""
The fixed catalog of gauges exported for a /stats/summary report.

Each entry ties one optional FsStats field of one resource (container logs,
container rootfs, pod ephemeral storage, node image filesystem) to a metric
name and help text. The projector iterates this table, so adding a metric
means adding a row here and nothing else.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

METRICS_NAMESPACE = "kube_summary"


class Scope(str, Enum):
    CONTAINER = "container"
    POD = "pod"
    NODE = "node"


class Resource(str, Enum):
    """Where a FsStats block lives in the summary document."""

    CONTAINER_LOGS = "logs"
    CONTAINER_ROOTFS = "rootfs"
    POD_EPHEMERAL_STORAGE = "ephemeral_storage"
    NODE_IMAGE_FS = "image_fs"

    @property
    def scope(self) -> Scope:
        return _RESOURCE_SCOPES[self]


_RESOURCE_SCOPES = {
    Resource.CONTAINER_LOGS: Scope.CONTAINER,
    Resource.CONTAINER_ROOTFS: Scope.CONTAINER,
    Resource.POD_EPHEMERAL_STORAGE: Scope.POD,
    Resource.NODE_IMAGE_FS: Scope.NODE,
}


@dataclass(frozen=True)
class MetricSpec:
    """One exported gauge: the FsStats field it reads and how it is described."""

    name: str
    help: str
    resource: Resource
    field: str

    @property
    def scope(self) -> Scope:
        return self.resource.scope


def _spec(suffix: str, help_text: str, resource: Resource, field: str) -> MetricSpec:
    return MetricSpec(f"{METRICS_NAMESPACE}_{suffix}", help_text, resource, field)


SCHEMA: Tuple[MetricSpec, ...] = (
    # --- Container logs ---
    _spec(
        "container_logs_inodes_free", "Number of available Inodes for logs", Resource.CONTAINER_LOGS, "inodes_free"
    ),
    _spec("container_logs_inodes", "Number of Inodes for logs", Resource.CONTAINER_LOGS, "inodes"),
    _spec("container_logs_inodes_used", "Number of used Inodes for logs", Resource.CONTAINER_LOGS, "inodes_used"),
    _spec(
        "container_logs_available_bytes",
        "Number of bytes that aren't consumed by the container logs",
        Resource.CONTAINER_LOGS,
        "available_bytes",
    ),
    _spec(
        "container_logs_capacity_bytes",
        "Number of bytes that can be consumed by the container logs",
        Resource.CONTAINER_LOGS,
        "capacity_bytes",
    ),
    _spec(
        "container_logs_used_bytes",
        "Number of bytes that are consumed by the container logs",
        Resource.CONTAINER_LOGS,
        "used_bytes",
    ),
    # --- Container root filesystem ---
    _spec("container_rootfs_inodes_free", "Number of available Inodes", Resource.CONTAINER_ROOTFS, "inodes_free"),
    _spec("container_rootfs_inodes", "Number of Inodes", Resource.CONTAINER_ROOTFS, "inodes"),
    _spec("container_rootfs_inodes_used", "Number of used Inodes", Resource.CONTAINER_ROOTFS, "inodes_used"),
    _spec(
        "container_rootfs_available_bytes",
        "Number of bytes that aren't consumed by the container",
        Resource.CONTAINER_ROOTFS,
        "available_bytes",
    ),
    _spec(
        "container_rootfs_capacity_bytes",
        "Number of bytes that can be consumed by the container",
        Resource.CONTAINER_ROOTFS,
        "capacity_bytes",
    ),
    _spec(
        "container_rootfs_used_bytes",
        "Number of bytes that are consumed by the container",
        Resource.CONTAINER_ROOTFS,
        "used_bytes",
    ),
    # --- Pod ephemeral storage ---
    _spec(
        "pod_ephemeral_storage_available_bytes",
        "Number of bytes of Ephemeral storage that aren't consumed by the pod",
        Resource.POD_EPHEMERAL_STORAGE,
        "available_bytes",
    ),
    _spec(
        "pod_ephemeral_storage_capacity_bytes",
        "Number of bytes of Ephemeral storage that can be consumed by the pod",
        Resource.POD_EPHEMERAL_STORAGE,
        "capacity_bytes",
    ),
    _spec(
        "pod_ephemeral_storage_used_bytes",
        "Number of bytes of Ephemeral storage that are consumed by the pod",
        Resource.POD_EPHEMERAL_STORAGE,
        "used_bytes",
    ),
    _spec(
        "pod_ephemeral_storage_inodes_free",
        "Number of available Inodes for pod Ephemeral storage",
        Resource.POD_EPHEMERAL_STORAGE,
        "inodes_free",
    ),
    _spec(
        "pod_ephemeral_storage_inodes",
        "Number of Inodes for pod Ephemeral storage",
        Resource.POD_EPHEMERAL_STORAGE,
        "inodes",
    ),
    _spec(
        "pod_ephemeral_storage_inodes_used",
        "Number of used Inodes for pod Ephemeral storage",
        Resource.POD_EPHEMERAL_STORAGE,
        "inodes_used",
    ),
    # --- Node runtime image filesystem ---
    _spec(
        "node_runtime_imagefs_available_bytes",
        "Number of bytes of node Runtime ImageFS that aren't consumed",
        Resource.NODE_IMAGE_FS,
        "available_bytes",
    ),
    _spec(
        "node_runtime_imagefs_capacity_bytes",
        "Number of bytes of node Runtime ImageFS that can be consumed",
        Resource.NODE_IMAGE_FS,
        "capacity_bytes",
    ),
    _spec(
        "node_runtime_imagefs_used_bytes",
        "Number of bytes of node Runtime ImageFS that are consumed",
        Resource.NODE_IMAGE_FS,
        "used_bytes",
    ),
    _spec(
        "node_runtime_imagefs_inodes_free",
        "Number of available Inodes for node Runtime ImageFS",
        Resource.NODE_IMAGE_FS,
        "inodes_free",
    ),
    _spec("node_runtime_imagefs_inodes", "Number of Inodes for node Runtime ImageFS", Resource.NODE_IMAGE_FS, "inodes"),
    _spec(
        "node_runtime_imagefs_inodes_used",
        "Number of used Inodes for node Runtime ImageFS",
        Resource.NODE_IMAGE_FS,
        "inodes_used",
    ),
)

SCHEMA_BY_NAME: Dict[str, MetricSpec] = {spec.name: spec for spec in SCHEMA}


def label_names(scope: Scope, include_uid: bool = False) -> Tuple[str, ...]:
    """
    Returns the label keys for every metric of the given scope.

    The pod uid is either on every container and pod scoped metric or on none
    of them; mixing would give one metric name two label sets.
    """
    if scope == Scope.NODE:
        return ("node",)
    pod_labels = ("node", "pod", "uid", "namespace") if include_uid else ("node", "pod", "namespace")
    if scope == Scope.POD:
        return pod_labels
    return pod_labels + ("name",)


def specs_for(resource: Resource) -> Tuple[MetricSpec, ...]:
    return tuple(spec for spec in SCHEMA if spec.resource == resource)
