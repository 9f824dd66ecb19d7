from pathlib import Path

# Default sysfs location of power supplies on Linux
DEFAULT_POWER_SUPPLY_PATH = Path("/sys/class/power_supply")

# time_remaining sentinels
TIME_CALCULATING = "Calculating"
TIME_CHARGED = "Charged"

# current_source labels
SOURCE_AC = "AC Power"
SOURCE_BATTERY = "Battery Power"
SOURCE_UNKNOWN = "Unknown"

APP_NAME = "juicewatch"
