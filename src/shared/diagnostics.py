"""
Diagnostic utilities.

Process memory snapshots (psutil) and the ResourceMonitor wrapped around
large contour generation runs.
"""

import logging
import time
import types
from typing import Any

import psutil

from shared.constants import PSUTIL_AVAILABLE as _PSUTIL_AVAILABLE

logger = logging.getLogger(__name__)

_MB = 1024 * 1024


def get_memory_info() -> dict[str, Any]:
    """Get comprehensive memory usage information."""
    if not _PSUTIL_AVAILABLE:
        return {'error': 'psutil not available'}

    try:
        process = psutil.Process()
        memory_info = process.memory_info()
        system_memory = psutil.virtual_memory()

        return {
            'process_rss_mb': round(memory_info.rss / _MB, 2),
            'process_vms_mb': round(memory_info.vms / _MB, 2),
            'system_total_mb': round(system_memory.total / _MB, 2),
            'system_available_mb': round(system_memory.available / _MB, 2),
            'system_used_percent': system_memory.percent,
            'process_memory_percent': round(process.memory_percent(), 2),
        }
    except (psutil.Error, OSError) as e:
        return {'error': f'Failed to get memory info: {e}'}


def log_memory_usage(context: str = '') -> None:
    """Quick memory usage logging."""
    memory_info = get_memory_info()
    context_label = f' ({context})' if context else ''
    logger.info(
        'Memory usage%s: RSS=%sMB, Available=%sMB',
        context_label,
        memory_info.get('process_rss_mb', 'N/A'),
        memory_info.get('system_available_mb', 'N/A'),
    )


class ResourceMonitor:
    """Context manager logging duration and memory of an operation."""

    def __init__(self, operation_name: str) -> None:
        self.operation_name = operation_name
        self.start_time: float | None = None
        self.start_memory: dict[str, Any] | None = None
        self.duration: float | None = None

    def __enter__(self) -> 'ResourceMonitor':
        self.start_time = time.perf_counter()
        self.start_memory = get_memory_info()
        log_memory_usage(f'{self.operation_name} - START')
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        _ = exc_tb
        if self.start_time is None:
            msg = 'Unexpected missing start_time in ResourceMonitor'
            raise RuntimeError(msg)
        self.duration = time.perf_counter() - self.start_time
        logger.info(
            "Operation '%s' completed in %.2f seconds",
            self.operation_name,
            self.duration,
        )

        before = (self.start_memory or {}).get('process_rss_mb')
        after = get_memory_info().get('process_rss_mb')
        if isinstance(before, (int, float)) and isinstance(after, (int, float)):
            logger.info(
                "Operation '%s' RSS change: %.2f -> %.2f MB (%+.2f)",
                self.operation_name, before, after, after - before,
            )

        if exc_type:
            logger.error(
                "Operation '%s' failed with %s: %s",
                self.operation_name,
                exc_type.__name__,
                exc_val,
            )


# Check if psutil is available and log warning if not
if not _PSUTIL_AVAILABLE:
    logger.warning(
        'psutil library not available - memory and system monitoring will be limited',
    )
