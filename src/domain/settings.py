"""Настройки генерации контуров и их хранение в TOML."""

from __future__ import annotations

import logging
from pathlib import Path

import tomlkit
from pydantic import BaseModel, field_validator

from domain.toml_sections import flat_to_sectioned, sectioned_to_flat
from shared.constants import (
    CONTOUR_LOG_MEMORY,
    CONTOUR_PARALLEL_WORKERS,
    MAX_GRID_CELLS,
    MEMORY_MIN_FREE_MB,
    MEMORY_SAFETY_RATIO,
    SETTINGS_FILE_NAME,
)

logger = logging.getLogger(__name__)


class ContourSettings(BaseModel):
    """Лимиты и параметры выполнения для ContourGenerator."""

    model_config = {
        'extra': 'ignore',  # игнорировать лишние поля из файла настроек
    }

    # Максимальное число узлов сетки на запрос
    max_grid_cells: int = MAX_GRID_CELLS
    # Доля доступной RAM для оценки худшего случая
    memory_safety_ratio: float = MEMORY_SAFETY_RATIO
    # Минимум свободной памяти (МБ)
    memory_min_free_mb: float = MEMORY_MIN_FREE_MB

    # Число потоков для параллельной обработки порогов (1 = последовательно)
    parallel_workers: int = CONTOUR_PARALLEL_WORKERS
    # Логировать память процесса до и после построения
    log_memory_usage: bool = CONTOUR_LOG_MEMORY

    @field_validator('max_grid_cells', 'parallel_workers')
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            msg = 'Значение должно быть не меньше 1'
            raise ValueError(msg)
        return v

    @field_validator('memory_safety_ratio')
    @classmethod
    def validate_ratio(cls, v: float) -> float:
        if not (0.0 < v <= 1.0):
            msg = 'Значение должно быть в диапазоне (0.0, 1.0]'
            raise ValueError(msg)
        return v

    @field_validator('memory_min_free_mb')
    @classmethod
    def validate_min_free(cls, v: float) -> float:
        return max(v, 0.0)


def default_settings_path(base_dir: str | Path | None = None) -> Path:
    """Путь к файлу настроек в каталоге ``base_dir`` (по умолчанию - текущий)."""
    return Path(base_dir or Path.cwd()) / SETTINGS_FILE_NAME


def load_settings(path: str | Path) -> ContourSettings:
    """
    Загрузка и валидация настроек TOML -> ContourSettings.

    Понимает как секционный формат ([limits], [execution]), так и плоский.
    """
    path = Path(path)
    if not path.exists():
        msg = f'Файл настроек не найден: {path}'
        raise FileNotFoundError(msg)
    text = path.read_text(encoding='utf-8')
    data = tomlkit.parse(text).unwrap()
    settings = ContourSettings.model_validate(sectioned_to_flat(data))
    logger.info(
        'Settings loaded from %s: max_grid_cells=%d, workers=%d',
        path, settings.max_grid_cells, settings.parallel_workers,
    )
    return settings


def save_settings(path: str | Path, settings: ContourSettings) -> Path:
    """Сохранение настроек в секционный TOML."""
    path = Path(path)
    data = flat_to_sectioned(settings.model_dump())
    text = tomlkit.dumps(data)
    path.write_text(text, encoding='utf-8')
    logger.debug('Settings saved to %s', path)
    return path
