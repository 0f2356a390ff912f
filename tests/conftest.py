from __future__ import annotations

import pytest

from core.schema import FunnelInputs
from data_prep.presets import get_preset
from engine.unit_economics import calculate_unit_economics


@pytest.fixture
def gym_inputs() -> FunnelInputs:
    return get_preset("gym").inputs


@pytest.fixture
def gym_result(gym_inputs):
    return calculate_unit_economics(gym_inputs)
