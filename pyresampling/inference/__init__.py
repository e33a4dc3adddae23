"""
Inference reporting for resampling distributions.

Usage:
    from pyresampling.inference import null_interval, infer

    lo, hi = null_interval(result.null_stats, conf_level=0.95)
    report = infer(result.observed_stat, result.null_stats)
    report.outside      # observed beyond the interval -> reject at alpha
    plot_null_distribution(result.null_stats, result.observed_stat)
"""

from pyresampling.inference._interval import (
    InferenceReport,
    null_interval,
    p_value,
    infer,
)
from pyresampling.inference.plotting import plot_null_distribution

__all__ = [
    "InferenceReport",
    "null_interval",
    "p_value",
    "infer",
    "plot_null_distribution",
]
