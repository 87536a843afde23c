"""Mapping layer between flat ContourSettings fields and sectioned TOML format.

ContourSettings remains a flat Pydantic model. This module provides two functions:
- flat_to_sectioned(): flat dict → sectioned dict (for TOML save)
- sectioned_to_flat(): sectioned dict → flat dict (for TOML load)

Example of a sectioned file::

    [limits]
    max_grid_cells = 25000000

    [execution]
    workers = 4
    log_memory = false
"""

from __future__ import annotations

# {section_name: {flat_field_name: short_name_in_toml}}
SECTION_MAP: dict[str, dict[str, str]] = {
    'limits': {
        'max_grid_cells': 'max_grid_cells',
        'memory_safety_ratio': 'memory_safety_ratio',
        'memory_min_free_mb': 'memory_min_free_mb',
    },
    'execution': {
        'parallel_workers': 'workers',
        'log_memory_usage': 'log_memory',
    },
}

# Поля без секции пишутся в [common]
COMMON_SECTION = 'common'

# Reverse index: flat_field → (section, short_name)
_FLAT_TO_SECTION: dict[str, tuple[str, str]] = {}
for _section, _fields in SECTION_MAP.items():
    for _flat, _short in _fields.items():
        _FLAT_TO_SECTION[_flat] = (_section, _short)

# Reverse index: (section, short_name) → flat_field
_SECTION_TO_FLAT: dict[str, dict[str, str]] = {}
for _section, _fields in SECTION_MAP.items():
    _SECTION_TO_FLAT[_section] = {v: k for k, v in _fields.items()}


def flat_to_sectioned(flat: dict) -> dict:
    """
    Convert flat ContourSettings dict to sectioned dict for TOML output.

    ``None`` values are skipped (TOML has no null), empty sections are not
    emitted.
    """
    result: dict = {}
    for key, value in flat.items():
        if value is None:
            continue
        section, short_name = _FLAT_TO_SECTION.get(key, (COMMON_SECTION, key))
        result.setdefault(section, {})[short_name] = value
    return result


def sectioned_to_flat(data: dict) -> dict:
    """Convert sectioned TOML dict to flat dict for ContourSettings validation."""
    flat: dict = {}
    for key, value in data.items():
        if isinstance(value, dict) and key in _SECTION_TO_FLAT:
            # Known section - expand short names to flat names
            mapping = _SECTION_TO_FLAT[key]
            for short_name, field_value in value.items():
                flat[mapping.get(short_name, short_name)] = field_value
        elif isinstance(value, dict):
            # [common] and unknown sections - pass through keys as-is
            flat.update(value)
        else:
            # Top-level key (flat TOML without sections)
            flat[key] = value
    return flat
