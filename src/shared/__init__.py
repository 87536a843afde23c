"""Shared utilities and helpers."""
from shared.diagnostics import (
    ResourceMonitor,
    log_memory_usage,
)
from shared.memory_estimation import (
    check_memory_budget,
    estimate_contour_memory_mb,
)

__all__ = [
    'ResourceMonitor',
    'check_memory_budget',
    'estimate_contour_memory_mb',
    'log_memory_usage',
]
