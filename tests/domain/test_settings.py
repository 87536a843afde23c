"""Tests for domain.settings (ContourSettings and TOML storage)."""

import logging

import pytest
from pydantic import ValidationError

from domain.settings import (
    ContourSettings,
    default_settings_path,
    load_settings,
    save_settings,
)
from shared.constants import (
    CONTOUR_PARALLEL_WORKERS,
    MAX_GRID_CELLS,
    SETTINGS_FILE_NAME,
)


class TestContourSettingsValidators:
    """Tests for ContourSettings validators."""

    def test_defaults(self):
        settings = ContourSettings()
        assert settings.max_grid_cells == MAX_GRID_CELLS
        assert settings.parallel_workers == CONTOUR_PARALLEL_WORKERS
        assert settings.log_memory_usage is False

    @pytest.mark.parametrize('field', ['max_grid_cells', 'parallel_workers'])
    def test_positive_required(self, field):
        with pytest.raises(ValidationError):
            ContourSettings(**{field: 0})

    @pytest.mark.parametrize('ratio', [0.0, -0.1, 1.5])
    def test_ratio_range(self, ratio):
        with pytest.raises(ValidationError):
            ContourSettings(memory_safety_ratio=ratio)

    def test_ratio_one_allowed(self):
        assert ContourSettings(memory_safety_ratio=1.0).memory_safety_ratio == 1.0

    def test_min_free_clamped(self):
        """Negative reserve is clamped to 0."""
        assert ContourSettings(memory_min_free_mb=-5).memory_min_free_mb == 0.0

    def test_extra_ignored(self):
        settings = ContourSettings.model_validate({'parallel_workers': 2, 'theme': 'dark'})
        assert settings.parallel_workers == 2


class TestSettingsFile:
    """Tests for load_settings()/save_settings()."""

    def test_round_trip(self, tmp_path):
        settings = ContourSettings(max_grid_cells=123, parallel_workers=3, log_memory_usage=True)
        path = save_settings(tmp_path / 'contours.toml', settings)
        assert path.exists()
        assert load_settings(path) == settings

    def test_saved_layout(self, tmp_path):
        path = save_settings(tmp_path / 'contours.toml', ContourSettings(parallel_workers=2))
        text = path.read_text(encoding='utf-8')
        assert '[limits]' in text
        assert '[execution]' in text
        assert 'workers = 2' in text

    def test_load_flat_file(self, tmp_path):
        path = tmp_path / 'flat.toml'
        path.write_text('max_grid_cells = 50\nparallel_workers = 1\n', encoding='utf-8')
        settings = load_settings(path)
        assert settings.max_grid_cells == 50
        assert settings.parallel_workers == 1

    def test_load_partial_sections(self, tmp_path):
        """Missing keys fall back to defaults."""
        path = tmp_path / 'partial.toml'
        path.write_text('[execution]\nworkers = 6\n', encoding='utf-8')
        settings = load_settings(path)
        assert settings.parallel_workers == 6
        assert settings.max_grid_cells == MAX_GRID_CELLS

    def test_load_invalid_value(self, tmp_path):
        path = tmp_path / 'bad.toml'
        path.write_text('[limits]\nmax_grid_cells = 0\n', encoding='utf-8')
        with pytest.raises(ValidationError):
            load_settings(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / 'nope.toml')

    def test_load_logs(self, tmp_path, caplog):
        path = save_settings(tmp_path / 'contours.toml', ContourSettings())
        with caplog.at_level(logging.INFO, logger='domain.settings'):
            load_settings(str(path))
        assert 'Settings loaded from' in caplog.text

    def test_default_path(self, tmp_path):
        assert default_settings_path(tmp_path) == tmp_path / SETTINGS_FILE_NAME
