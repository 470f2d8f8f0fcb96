"""
kube-summary-exporter

Exposes kubelet /stats/summary filesystem usage as Prometheus gauges.
"""

__version__ = "0.4.0"
