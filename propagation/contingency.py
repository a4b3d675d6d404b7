"""
Outage Screening Engine

Deactivates each active generator and grid relay in turn (N-1) and measures
which relays and consumers lose power, restoring the network afterwards.
"""

import time
from dataclasses import dataclass, field
from typing import List, Set

import pandas as pd
from loguru import logger

from powernet.components import PowerSource
from powernet.network import PowerNetwork


@dataclass
class OutageResult:
    """Results from taking a single element out of service"""
    element_id: str
    element_kind: str  # 'generator', 'grid_relay'
    consumers_lost: List[str] = field(default_factory=list)
    relays_lost: List[str] = field(default_factory=list)
    solve_time: float = 0.0

    # Overall assessment
    severity_score: float = 0.0  # fraction of powered consumers lost
    criticality_level: str = "low"  # 'low', 'medium', 'high', 'critical'

    @property
    def is_cut(self) -> bool:
        """Whether the element is the sole supply path for any consumer"""
        return len(self.consumers_lost) > 0


class OutageAnalyzer:
    """
    N-1 outage analysis over a power network

    The network is mutated during analysis and restored before each
    method returns.
    """

    def __init__(self, network: PowerNetwork):
        self.network = network

        self.criticality_thresholds = {
            'medium': 0.0,
            'high': 0.25,
            'critical': 0.5
        }

    def analyze_all(self) -> List[OutageResult]:
        """Analyze the outage of every active generator and grid relay"""
        self.network.recompute()
        base_consumers = {c.id for c in self.network.consumers.values() if c.powered}
        base_relays = {r.id for r in self.network.relays.values() if r.powered}

        candidates = [g for g in self.network.generators.values() if g.active]
        candidates += [r for r in self.network.relays.values() if r.active]

        logger.info(f"Starting analysis of {len(candidates)} outages...")

        results = []
        for i, element in enumerate(candidates):
            results.append(self.analyze_outage(element, base_consumers, base_relays))

            if (i + 1) % 50 == 0:
                logger.info(f"Completed {i + 1}/{len(candidates)} outages")

        logger.info(f"Completed outage analysis. {len(results)} results generated, "
                    f"{sum(1 for r in results if r.is_cut)} cut elements")
        return results

    def analyze_outage(self, element: PowerSource,
                       base_consumers: Set[str],
                       base_relays: Set[str]) -> OutageResult:
        """Deactivate one element, record the downstream loss, and restore it"""
        start_time = time.time()
        was_active = element.active

        self.network.set_active(element, False)
        try:
            consumers_lost = sorted(cid for cid in base_consumers
                                    if not self.network.consumers[cid].powered)
            relays_lost = sorted(rid for rid in base_relays
                                 if rid != element.id and not self.network.relays[rid].powered)
        finally:
            self.network.set_active(element, was_active)

        severity_score = len(consumers_lost) / len(base_consumers) if base_consumers else 0.0

        return OutageResult(
            element_id=element.id,
            element_kind=element.kind_name,
            consumers_lost=consumers_lost,
            relays_lost=relays_lost,
            solve_time=time.time() - start_time,
            severity_score=severity_score,
            criticality_level=self._assess_criticality(severity_score)
        )

    def _assess_criticality(self, severity_score: float) -> str:
        level = 'low'
        for name, threshold in self.criticality_thresholds.items():
            if severity_score > threshold:
                level = name
        return level

    def export_results_to_dataframe(self, results: List[OutageResult]) -> pd.DataFrame:
        """Export outage results to pandas DataFrame for analysis"""
        records = []

        for result in results:
            records.append({
                'element_id': result.element_id,
                'element_kind': result.element_kind,
                'consumers_lost': ','.join(result.consumers_lost),
                'consumers_lost_count': len(result.consumers_lost),
                'relays_lost_count': len(result.relays_lost),
                'solve_time': result.solve_time,
                'severity_score': result.severity_score,
                'criticality_level': result.criticality_level
            })

        return pd.DataFrame(records, columns=[
            'element_id', 'element_kind', 'consumers_lost', 'consumers_lost_count',
            'relays_lost_count', 'solve_time', 'severity_score', 'criticality_level'
        ])


def screen_critical_outages(results: List[OutageResult],
                            top_n: int = 10) -> List[OutageResult]:
    """Screen and return the outages that cut off at least one consumer"""
    critical_results = [r for r in results if r.is_cut]

    critical_results.sort(key=lambda r: (r.severity_score, len(r.relays_lost)), reverse=True)

    return critical_results[:top_n]
