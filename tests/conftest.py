from collections.abc import Callable
from typing import Any

import pytest

from juicewatch.system.status import BatterySnapshot
from juicewatch.types.power_supply import RawReadings


@pytest.fixture
def discharging_readings() -> RawReadings:
    return {
        "is_plugged": False,
        "is_charging": False,
        "is_charged": False,
        "percentage": 73,
        "time_remaining": "3:40",
        "current_source": "Battery Power",
    }


@pytest.fixture
def make_snapshot() -> Callable[..., BatterySnapshot]:
    def _make(**overrides: Any) -> BatterySnapshot:
        data: dict[str, Any] = {
            "is_plugged": False,
            "is_charging": False,
            "is_charged": False,
            "percentage": 73,
            "time_remaining": "3:40",
            "current_source": "Battery Power",
        }
        data.update(overrides)
        return BatterySnapshot(**data)

    return _make
