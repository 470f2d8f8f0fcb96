# src/kubesummary/models/summary.py
"""
Pydantic models for the kubelet /stats/summary document (stats/v1alpha1).

Only the parts needed for filesystem metrics are modelled; every other key the
kubelet reports (cpu, memory, network, volume, timestamps...) is ignored.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _SummaryModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class FsStats(_SummaryModel):
    """
    Filesystem usage of a single resource: container logs, container rootfs,
    pod ephemeral storage or the node image filesystem.

    Every field is optional. A missing field means the kubelet did not report
    it, which is not the same as zero.
    """

    available_bytes: Optional[int] = Field(None, alias="availableBytes")
    capacity_bytes: Optional[int] = Field(None, alias="capacityBytes")
    used_bytes: Optional[int] = Field(None, alias="usedBytes")
    inodes_free: Optional[int] = Field(None, alias="inodesFree")
    inodes: Optional[int] = Field(None, alias="inodes")
    inodes_used: Optional[int] = Field(None, alias="inodesUsed")


class ContainerStats(_SummaryModel):
    name: str
    logs: Optional[FsStats] = None
    rootfs: Optional[FsStats] = None


class PodReference(_SummaryModel):
    name: str
    namespace: str
    uid: Optional[str] = None


class PodStats(_SummaryModel):
    pod_ref: PodReference = Field(..., alias="podRef")
    containers: List[ContainerStats] = Field(default_factory=list)
    ephemeral_storage: Optional[FsStats] = Field(None, alias="ephemeral-storage")

    @field_validator("containers", mode="before")
    @classmethod
    def containers_null_as_empty(cls, value):
        # The kubelet encodes empty slices as null
        return [] if value is None else value


class RuntimeStats(_SummaryModel):
    image_fs: Optional[FsStats] = Field(None, alias="imageFs")


class NodeStats(_SummaryModel):
    node_name: str = Field(..., alias="nodeName")
    runtime: Optional[RuntimeStats] = None


class Summary(_SummaryModel):
    """A single node's point-in-time resource usage report."""

    node: NodeStats
    pods: List[PodStats] = Field(default_factory=list)

    @field_validator("pods", mode="before")
    @classmethod
    def pods_null_as_empty(cls, value):
        return [] if value is None else value

    @property
    def node_name(self) -> str:
        return self.node.node_name
