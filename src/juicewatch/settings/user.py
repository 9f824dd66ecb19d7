"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import ClassVar, Final

from dotenv import load_dotenv
from jinja2 import Environment, TemplateSyntaxError
from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    ValidationInfo,
    field_serializer,
    field_validator,
)

from juicewatch.constants import DEFAULT_POWER_SUPPLY_PATH
from juicewatch.notifications.delivery import (
    DEFAULT_CHARGED_TEMPLATE,
    DEFAULT_NOTIFICATION_TEMPLATE,
    DEFAULT_NOTIFICATION_TITLE,
)
from juicewatch.notifications.keys import NotificationKey

# Load environment variables from .env file(s)
load_dotenv()

logger: Final = logging.getLogger(__name__)

CONFIG_ENV_VAR: Final = "JUICEWATCH_CONFIG"


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class UserSettings(BaseModel):
    """User preferences for the battery monitor.

    Every field has a default, so the monitor also runs without a
    config.yaml. Values in the file override the defaults.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/juicewatch/config.yaml").expanduser(),
        Path("/etc/juicewatch/config.yaml"),
    ]

    # Display settings
    show_time: bool = Field(
        False, description="Show the time remaining instead of the percentage"
    )

    # Notification settings
    notifications: frozenset[NotificationKey] = Field(
        default_factory=lambda: frozenset({NotificationKey.TEN, NotificationKey.HUNDRED}),
        description="Percentage thresholds to notify about (multiples of ten, 100 = charged)",
    )
    notification_title: str = Field(DEFAULT_NOTIFICATION_TITLE, min_length=1)
    notification_template: str = Field(
        DEFAULT_NOTIFICATION_TEMPLATE, description="Jinja2 template for threshold notifications"
    )
    charged_template: str = Field(
        DEFAULT_CHARGED_TEMPLATE, description="Jinja2 template for the fully charged notification"
    )

    # Data source settings
    power_supply_path: Path = Field(
        DEFAULT_POWER_SUPPLY_PATH, description="sysfs power-supply class directory"
    )
    poll_seconds: float = Field(5.0, gt=0, description="Seconds between power-source checks")

    # Command that opens the desktop's power settings
    power_settings_command: list[str] = Field(
        default_factory=lambda: ["gnome-control-center", "power"], min_length=1
    )

    # ---- validators ----
    @field_validator("notification_template", "charged_template")
    @classmethod
    def validate_template(cls, v: str, info: ValidationInfo) -> str:
        try:
            template = Environment().from_string(v)
        except TemplateSyntaxError as exc:
            raise ValueError(f"invalid template: {exc.message}") from exc

        if info.field_name == "charged_template":
            keys = [NotificationKey.HUNDRED]
        else:
            keys = [k for k in NotificationKey if k is not NotificationKey.HUNDRED]
        for key in keys:
            try:
                template.render(percentage=key.percentage, key=key)
            except Exception as exc:
                raise ValueError(f"template fails at {key.percentage} %: {exc}") from exc
        return v

    @field_serializer("notifications")
    def serialize_notifications(self, keys: frozenset[NotificationKey]) -> list[int]:
        return sorted(int(k) for k in keys)

    # ---- convenience methods ----
    def is_enabled(self, key: NotificationKey) -> bool:
        """Check whether the user subscribed to a threshold.

        Args:
            key: Threshold key

        Returns:
            True if notifications for the key are enabled
        """
        return key in self.notifications

    @classmethod
    def find_config(cls) -> Path:
        """Locate the config file from the environment or default paths.

        Returns:
            Path to the config file

        Raises:
            FileNotFoundError: If no config file is found
        """
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path)
            if not path.exists():
                raise FileNotFoundError(f"Config file from {CONFIG_ENV_VAR} not found: {path}")
            return path

        for default_path in cls.DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return default_path
        raise FileNotFoundError(
            f"No configuration file found. Create config.yaml or set {CONFIG_ENV_VAR}."
        )

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            path = cls.find_config()

        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw) or {}
        except FileNotFoundError:
            raise
        except Exception as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err

