from collections.abc import Callable

import pytest

from juicewatch.notifications.gate import NotificationGate, NotificationState
from juicewatch.notifications.keys import NotificationKey
from juicewatch.system.status import BatterySnapshot

SnapshotFactory = Callable[..., BatterySnapshot]

ALL_KEYS = frozenset(NotificationKey)


@pytest.mark.parametrize("percentage", range(0, 101))
def test_candidate_on_battery(make_snapshot: SnapshotFactory, percentage: int) -> None:
    """On battery the key is the percentage floored to ten."""
    key = NotificationGate.candidate_key(make_snapshot(percentage=percentage))
    if percentage < 10:
        assert key is None
    else:
        assert key is not None
        assert key.percentage == percentage // 10 * 10


@pytest.mark.parametrize("percentage", [5, 42, 95, 100])
def test_plugged_and_charged_is_hundred(make_snapshot: SnapshotFactory, percentage: int) -> None:
    """Charged and plugged always maps to HUNDRED."""
    snapshot = make_snapshot(is_plugged=True, is_charged=True, percentage=percentage)
    assert NotificationGate.candidate_key(snapshot) is NotificationKey.HUNDRED


def test_plugged_not_charged_never_notifies(make_snapshot: SnapshotFactory) -> None:
    """Charging but not full never notifies."""
    gate = NotificationGate()
    snapshot = make_snapshot(is_plugged=True, is_charging=True, percentage=55)

    assert gate.evaluate(snapshot, ALL_KEYS) is None
    assert gate.state.last_notified is None


def test_discharge_fires_each_threshold_once(make_snapshot: SnapshotFactory) -> None:
    """Discharging from 91% fires each threshold exactly once."""
    gate = NotificationGate()
    fired: list[NotificationKey] = []

    first = gate.evaluate(make_snapshot(percentage=91), ALL_KEYS)
    assert first is NotificationKey.NINETY

    for percentage in range(90, 9, -1):
        for _ in range(3):  # repeated evaluations at the same level
            key = gate.evaluate(make_snapshot(percentage=percentage), ALL_KEYS)
            if key is not None:
                fired.append(key)

    assert len(fired) == 8
    assert fired == [NotificationKey(p) for p in range(80, 9, -10)]


def test_below_ten_keeps_last_key(make_snapshot: SnapshotFactory) -> None:
    """Below ten percent the remembered key is kept."""
    gate = NotificationGate()
    gate.evaluate(make_snapshot(percentage=12), ALL_KEYS)

    assert gate.evaluate(make_snapshot(percentage=4), ALL_KEYS) is None
    assert gate.state.last_notified is NotificationKey.TEN


def test_disabled_key_is_remembered(make_snapshot: SnapshotFactory) -> None:
    """Disabled keys are remembered without notifying."""
    gate = NotificationGate()
    enabled = frozenset({NotificationKey.TWENTY})

    assert gate.evaluate(make_snapshot(percentage=35), enabled) is None
    assert gate.state.last_notified is NotificationKey.THIRTY

    # Re-enabling after the threshold passed does not fire retroactively
    assert gate.evaluate(make_snapshot(percentage=33), ALL_KEYS) is None
    assert gate.evaluate(make_snapshot(percentage=25), ALL_KEYS) is NotificationKey.TWENTY


def test_plug_cycle_in_same_band_does_not_refire(make_snapshot: SnapshotFactory) -> None:
    """Plugging in and out in the same band does not re-fire."""
    gate = NotificationGate()
    assert gate.evaluate(make_snapshot(percentage=47), ALL_KEYS) is NotificationKey.FORTY

    plugged = make_snapshot(is_plugged=True, is_charging=True, percentage=47)
    assert gate.evaluate(plugged, ALL_KEYS) is None

    assert gate.evaluate(make_snapshot(percentage=46), ALL_KEYS) is None


def test_full_charge_fires_once(make_snapshot: SnapshotFactory) -> None:
    """Reaching full charge fires HUNDRED once."""
    gate = NotificationGate(NotificationState(last_notified=NotificationKey.FORTY))
    charged = make_snapshot(is_plugged=True, is_charged=True, percentage=100)

    assert gate.evaluate(charged, ALL_KEYS) is NotificationKey.HUNDRED
    assert gate.evaluate(charged, ALL_KEYS) is None
