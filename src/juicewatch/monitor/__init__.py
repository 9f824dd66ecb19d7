"""Monitor package - engine and trigger plumbing."""

from juicewatch.monitor.engine import DisplayState, ErrorState, MonitorEngine
from juicewatch.monitor.triggers import TriggerQueue, TriggerWatcher

__all__ = ["DisplayState", "ErrorState", "MonitorEngine", "TriggerQueue", "TriggerWatcher"]
