"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Dict

import pytest


@pytest.fixture
def fixed_first_source_word() -> int:
    """5 V / 3 A first source PDO with every capability bit set."""
    return 0x3F81912C


@pytest.fixture
def fixed_source_attrs() -> Dict[str, str]:
    """Attributes of a 5 V / 3 A source fixed supply."""
    return {"voltage": "5000mV", "maximum_current": "3000mA"}


@pytest.fixture
def pps_source_attrs() -> Dict[str, str]:
    """Attributes of a 3.3-21 V / 3 A power-limited PPS source."""
    return {
        "pps_power_limited": "1",
        "maximum_voltage": "21000mV",
        "minimum_voltage": "3300mV",
        "maximum_current": "3000mA",
    }
