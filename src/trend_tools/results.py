# src/trend_tools/results.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import pandas as pd

_RULE = "-" * 80


@dataclass(frozen=True)
class PairResult:
    """
    One pairwise comparison: positions "I-J" in the chosen ordering.
    """
    comparison: str
    nx: int
    ny: int
    uxy: float


@dataclass(frozen=True)
class TrendTestResult:
    """
    Container for Jonckheere–Terpstra trend-test results.
    """
    pairs: Tuple[PairResult, ...]
    uxy_sum: float
    jt: float
    p_value: float
    tail: str = "right"
    metadata: Dict[str, Any] = field(default_factory=dict)

    def pairs_to_dataframe(self) -> pd.DataFrame:
        """
        Return the pairwise table (Comparison, Nx, Ny, Uxy), one row per pair.
        """
        return pd.DataFrame(
            [(p.comparison, p.nx, p.ny, p.uxy) for p in self.pairs],
            columns=["Comparison", "Nx", "Ny", "Uxy"],
        )

    def to_dataframe(self) -> pd.DataFrame:
        """
        Return the test statistics as a pandas DataFrame (one row).
        """
        return pd.DataFrame([{
            "Uxy_sum": self.uxy_sum,
            "JT": self.jt,
            "one_tailed_p_values": self.p_value,
            "tail": self.tail,
        }])

    def summary(self) -> str:
        """
        Return the pairwise and summary tables as printable text.
        """
        lines = [
            "JONCKHEERE-TERPSTRA TEST FOR NON PARAMETRIC TREND ANALYSIS",
            _RULE,
        ]
        if self.pairs:
            lines.append(self.pairs_to_dataframe().to_string(index=False))
        lines.extend([
            _RULE,
            "",
            "JONCKHEERE-TERPSTRA STATISTICS",
            _RULE,
            f"Uxy_sum: {self.uxy_sum:g}",
            f"JT: {self.jt:.4f}",
            f"One-tailed p-value ({self.tail}): {self.p_value:.6f}",
        ])
        return "\n".join(lines)
