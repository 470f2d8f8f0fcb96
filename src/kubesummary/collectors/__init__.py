from .node_collector import NodeCollector
from .summary_collector import SummaryCollector

__all__ = ["NodeCollector", "SummaryCollector"]
