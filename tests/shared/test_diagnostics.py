"""Tests for shared.diagnostics helpers."""

import logging
from types import SimpleNamespace

import pytest

import shared.diagnostics as diagnostics


def test_get_memory_info_direct():
    info = diagnostics.get_memory_info()
    assert 'process_rss_mb' in info


def test_log_memory_usage_direct(caplog):
    with caplog.at_level(logging.INFO):
        diagnostics.log_memory_usage('test context')
    assert 'Memory usage (test context)' in caplog.text


def test_get_memory_info_with_psutil(monkeypatch):
    """get_memory_info should use psutil when available."""
    class DummyProcess:
        def memory_info(self):
            return SimpleNamespace(rss=1024 * 1024, vms=2 * 1024 * 1024)

        def memory_percent(self):
            return 12.5

    dummy_psutil = SimpleNamespace(
        Process=lambda: DummyProcess(),
        virtual_memory=lambda: SimpleNamespace(
            total=10 * 1024 * 1024,
            available=4 * 1024 * 1024,
            percent=60,
        ),
    )

    monkeypatch.setattr(diagnostics, '_PSUTIL_AVAILABLE', True)
    monkeypatch.setattr(diagnostics, 'psutil', dummy_psutil)

    info = diagnostics.get_memory_info()

    assert info['process_rss_mb'] == 1.0
    assert info['process_vms_mb'] == 2.0
    assert info['system_total_mb'] == 10.0
    assert info['system_available_mb'] == 4.0
    assert info['process_memory_percent'] == 12.5


def test_get_memory_info_without_psutil(monkeypatch):
    monkeypatch.setattr(diagnostics, '_PSUTIL_AVAILABLE', False)
    assert diagnostics.get_memory_info() == {'error': 'psutil not available'}


class TestResourceMonitor:
    """Tests for ResourceMonitor context manager."""

    def test_logs_duration(self, caplog):
        with caplog.at_level(logging.INFO):
            with diagnostics.ResourceMonitor('unit op') as monitor:
                pass
        assert monitor.duration is not None
        assert monitor.duration >= 0
        assert "Operation 'unit op' completed" in caplog.text
        assert 'Memory usage (unit op - START)' in caplog.text

    def test_logs_failure_and_propagates(self, caplog):
        with caplog.at_level(logging.INFO), pytest.raises(ValueError):
            with diagnostics.ResourceMonitor('failing op'):
                raise ValueError('boom')
        assert "Operation 'failing op' failed with ValueError: boom" in caplog.text

    def test_exit_without_enter(self):
        monitor = diagnostics.ResourceMonitor('never started')
        with pytest.raises(RuntimeError):
            monitor.__exit__(None, None, None)


def test_shared_exports_generation_helpers():
    """The shared package exposes only what contour generation uses."""
    import shared

    assert set(shared.__all__) == {
        'ResourceMonitor',
        'check_memory_budget',
        'estimate_contour_memory_mb',
        'log_memory_usage',
    }
