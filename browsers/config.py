"""The user's configuration file and the settings it holds."""

from __future__ import annotations

import enum
import json
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"
CORRUPTED_CONFIG_FILE_NAME = "config.corrupted.json"


def _expect_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be an object")
    return data


def _bool_field(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be a boolean")
    return value


def _str_field(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _optional_str_field(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{key} must be a string or null")
    return value


def _str_list_field(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{key} must be a list of strings")
    return list(value)


class ConfiguredTheme(enum.Enum):
    """Colour theme chosen by the user."""

    AUTO = "Auto"
    LIGHT = "Light"
    DARK = "Dark"


@dataclass
class BehavioralConfig:
    """Settings that change how links are handled."""

    unwrap_urls: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"unwrap_urls": self.unwrap_urls}

    @classmethod
    def from_dict(cls, data: Any) -> BehavioralConfig:
        data = _expect_mapping(data, "behavior")
        return cls(unwrap_urls=_bool_field(data, "unwrap_urls", False))


@dataclass
class UIConfig:
    """Settings of the user interface."""

    show_hotkeys: bool = True
    # Only reliable on macOS: elsewhere opening a context menu also loses focus.
    quit_on_lost_focus: bool = False
    theme: ConfiguredTheme = ConfiguredTheme.AUTO

    def to_dict(self) -> dict[str, Any]:
        return {
            "show_hotkeys": self.show_hotkeys,
            "quit_on_lost_focus": self.quit_on_lost_focus,
            "theme": self.theme.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> UIConfig:
        data = _expect_mapping(data, "ui")
        theme_name = data.get("theme", ConfiguredTheme.AUTO.value)
        try:
            theme = ConfiguredTheme(theme_name)
        except ValueError as exc:
            raise ValueError(f"unknown theme: {theme_name!r}") from exc
        return cls(
            show_hotkeys=_bool_field(data, "show_hotkeys", True),
            quit_on_lost_focus=_bool_field(data, "quit_on_lost_focus", False),
            theme=theme,
        )


@dataclass
class ProfileAndOptions:
    """A profile to open links in, with its opening options."""

    profile: str = ""
    incognito: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"profile": self.profile, "incognito": self.incognito}

    @classmethod
    def from_dict(cls, data: Any) -> ProfileAndOptions:
        data = _expect_mapping(data, "profile options")
        return cls(
            profile=_str_field(data, "profile", ""),
            incognito=_bool_field(data, "incognito", False),
        )


def _optional_profile(data: dict[str, Any], key: str) -> ProfileAndOptions | None:
    value = data.get(key)
    return None if value is None else ProfileAndOptions.from_dict(value)


@dataclass
class ConfigRule:
    """A rule choosing the opener for links by source app and URL pattern."""

    source_app: str | None = None
    url_pattern: str | None = None
    opener: ProfileAndOptions | None = None

    @property
    def effective_source_app(self) -> str | None:
        """The source app, with an empty string treated as absent."""
        return self.source_app or None

    @property
    def effective_url_pattern(self) -> str | None:
        """The URL pattern, with an empty string treated as absent."""
        return self.url_pattern or None

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_app": self.source_app,
            "url_pattern": self.url_pattern,
            "opener": None if self.opener is None else self.opener.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> ConfigRule:
        data = _expect_mapping(data, "rule")
        return cls(
            source_app=_optional_str_field(data, "source_app"),
            url_pattern=_optional_str_field(data, "url_pattern"),
            opener=_optional_profile(data, "opener"),
        )


@dataclass
class Config:
    """Everything the user has configured."""

    hidden_apps: list[str] = field(default_factory=list)
    hidden_profiles: list[str] = field(default_factory=list)
    profile_order: list[str] = field(default_factory=list)
    default_profile: ProfileAndOptions | None = None
    rules: list[ConfigRule] = field(default_factory=list)
    ui: UIConfig = field(default_factory=UIConfig)
    behavior: BehavioralConfig = field(default_factory=BehavioralConfig)

    def hide_profile(self, profile_id: str) -> None:
        """Hide a profile; hiding an already hidden profile does nothing."""
        if profile_id not in self.hidden_profiles:
            self.hidden_profiles.append(profile_id)

    def restore_profile(self, profile_id: str) -> None:
        """Make a hidden profile visible again."""
        if profile_id in self.hidden_profiles:
            self.hidden_profiles.remove(profile_id)

    def hide_all_profiles(self, profile_ids) -> None:
        """Hide every profile in ``profile_ids``."""
        for profile_id in profile_ids:
            self.hide_profile(profile_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hidden_apps": list(self.hidden_apps),
            "hidden_profiles": list(self.hidden_profiles),
            "profile_order": list(self.profile_order),
            "default_profile": (
                None if self.default_profile is None else self.default_profile.to_dict()
            ),
            "rules": [rule.to_dict() for rule in self.rules],
            "ui": self.ui.to_dict(),
            "behavior": self.behavior.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Build a config; missing keys take defaults, wrong types raise ValueError."""
        data = _expect_mapping(data, "config")
        rules = data.get("rules", [])
        if not isinstance(rules, list):
            raise ValueError("rules must be a list")
        return cls(
            hidden_apps=_str_list_field(data, "hidden_apps"),
            hidden_profiles=_str_list_field(data, "hidden_profiles"),
            profile_order=_str_list_field(data, "profile_order"),
            default_profile=_optional_profile(data, "default_profile"),
            rules=[ConfigRule.from_dict(rule) for rule in rules],
            ui=UIConfig.from_dict(data.get("ui", {})),
            behavior=BehavioralConfig.from_dict(data.get("behavior", {})),
        )


def _write_config(config: Config, path: Path) -> None:
    path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")


def save_config(config: Config, config_root_dir) -> None:
    """Write ``config`` to ``config.json`` in ``config_root_dir``."""
    root = Path(config_root_dir)
    root.mkdir(parents=True, exist_ok=True)
    _write_config(config, root / CONFIG_FILE_NAME)


def load_config(config_root_dir) -> Config:
    """Read the config from ``config_root_dir``.

    A missing file is created with the defaults. An unreadable file is copied
    aside as ``config.corrupted.json`` and the defaults are returned without
    overwriting it.
    """
    root = Path(config_root_dir)
    root.mkdir(parents=True, exist_ok=True)
    path = root / CONFIG_FILE_NAME
    logger.info("Config: %s", path)

    if not path.exists():
        config = Config()
        _write_config(config, path)
        return config

    try:
        with path.open(encoding="utf-8") as handle:
            return Config.from_dict(json.load(handle))
    except (ValueError, UnicodeDecodeError):
        logger.warning("Config %s is not valid, using defaults", path)
        try:
            shutil.copyfile(path, root / CORRUPTED_CONFIG_FILE_NAME)
        except OSError:
            pass
        return Config()