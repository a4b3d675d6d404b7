"""
Power Propagation Package

Reachability recompute and outage screening for power networks.
"""

from .engine import PropagationResult, recompute_power
from .contingency import OutageAnalyzer, OutageResult, screen_critical_outages

__version__ = "1.0.0"
__all__ = [
    "PropagationResult",
    "recompute_power",
    "OutageAnalyzer",
    "OutageResult",
    "screen_critical_outages"
]
