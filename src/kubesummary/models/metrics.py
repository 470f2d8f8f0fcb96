# src/kubesummary/models/metrics.py

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class MetricRecord(BaseModel):
    """
    A single gauge sample produced by projecting a Summary.

    Attributes:
        name: Fully qualified metric name (e.g. 'kube_summary_container_rootfs_used_bytes')
        labels: Label name to label value mapping; keys are fixed by the metric schema
        value: Sample value, unconverted from the kubelet report
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Metric name")
    labels: Dict[str, str] = Field(default_factory=dict, description="Label values keyed by label name")
    value: float = Field(..., description="Gauge value")
