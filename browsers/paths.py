"""Locations of this application's own files and of other applications' data.

Every function looks at the running platform when it is called, so the
answers follow ``sys.platform`` and the environment at that moment.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

try:
    import pwd
except ImportError:  # not available on Windows
    pwd = None  # type: ignore[assignment]

APP_DIR_NAME = "software.Browsers"


def _system() -> str:
    if sys.platform == "darwin":
        return "macos"
    if sys.platform.startswith("win"):
        return "windows"
    return "linux"


def _home() -> Path:
    return Path.home()


def unsandboxed_home_dir() -> Path | None:
    """Return the user's home from the password database, ignoring any sandbox.

    Returns None when the database has no entry or an empty home for the user.
    """
    if pwd is None:
        return None
    try:
        entry = pwd.getpwuid(os.getuid())
    except KeyError:
        return None
    if not entry.pw_dir:
        return None
    return Path(entry.pw_dir)


def _require_unsandboxed_home() -> Path:
    home = unsandboxed_home_dir()
    if home is None:
        raise RuntimeError("cannot determine the unsandboxed home directory")
    return home


def _xdg_dir(variable: str, default: str) -> Path:
    value = os.environ.get(variable, "")
    if value and Path(value).is_absolute():
        return Path(value)
    return _home() / default


def _windows_local_dir() -> Path:
    value = os.environ.get("LOCALAPPDATA")
    return Path(value) if value else _home() / "AppData" / "Local"


def _windows_roaming_dir() -> Path:
    value = os.environ.get("APPDATA")
    return Path(value) if value else _home() / "AppData" / "Roaming"


def _executable_dir() -> Path:
    return Path(sys.executable).resolve().parent


def get_cache_root_dir() -> Path:
    """Directory for this application's caches."""
    system = _system()
    if system == "macos":
        return _home() / "Library" / "Caches" / APP_DIR_NAME
    if system == "windows":
        return _windows_local_dir() / APP_DIR_NAME / "cache"
    return _xdg_dir("XDG_CACHE_HOME", ".cache") / APP_DIR_NAME


def get_logs_root_dir() -> Path:
    """Directory for this application's log files."""
    system = _system()
    if system == "macos":
        return _home() / "Library" / "Logs" / APP_DIR_NAME
    if system == "windows":
        return _windows_local_dir() / APP_DIR_NAME / "logs"
    return _xdg_dir("XDG_DATA_HOME", ".local/share") / APP_DIR_NAME / "logs"


def get_config_root_dir() -> Path:
    """Directory holding this application's configuration."""
    system = _system()
    if system == "macos":
        return _home() / "Library" / "Application Support" / APP_DIR_NAME
    if system == "windows":
        return _windows_local_dir() / APP_DIR_NAME / "config"
    return _xdg_dir("XDG_CONFIG_HOME", ".config") / APP_DIR_NAME


def get_config_json_path() -> Path:
    """Path of the configuration file."""
    return get_config_root_dir() / "config.json"


def get_runtime_dir() -> Path:
    """Directory for files that only live while the application runs."""
    return get_cache_root_dir() / "runtime"


def get_resources_basedir() -> Path:
    """Directory of bundled resources such as translations and icons."""
    system = _system()
    if system == "macos":
        # .../Browsers.app/Contents/MacOS/browsers -> .../Browsers.app/Contents/Resources
        bundle_dir = _executable_dir().parent.parent
        return bundle_dir / "Contents" / "Resources"
    if system == "windows":
        return _executable_dir() / "resources"
    return _xdg_dir("XDG_DATA_HOME", ".local/share") / APP_DIR_NAME / "resources"


def get_repository_basedir() -> Path:
    """Directory of the application repository data."""
    return get_resources_basedir() / "repository"


def get_repository_toml_path() -> Path:
    """Path of the application repository file."""
    return get_repository_basedir() / "application-repository.toml"


def get_localizations_basedir() -> Path:
    """Base of ``{base}/{locale}/{resource}.ftl`` translation files."""
    return get_resources_basedir() / "i18n"


def get_app_icon_path() -> Path:
    """Path of this application's own icon."""
    return get_resources_basedir() / "icons" / "512x512" / "software.Browsers.png"


def get_chrome_user_dir_root() -> Path:
    """Directory under which Chromium-based browsers keep their user data."""
    system = _system()
    if system == "macos":
        return _require_unsandboxed_home() / "Library" / "Application Support"
    if system == "windows":
        return _windows_local_dir()
    return _xdg_dir("XDG_CONFIG_HOME", ".config")


def get_firefox_user_dir_root() -> Path:
    """Directory under which Firefox-based browsers keep their user data."""
    system = _system()
    if system == "macos":
        return _require_unsandboxed_home() / "Library" / "Application Support"
    if system == "windows":
        return _windows_roaming_dir()
    return _home()


def get_user_home_for_unsandboxed_app() -> Path:
    """Home directory seen by an unsandboxed app; empty path off macOS."""
    if _system() == "macos":
        return _require_unsandboxed_home()
    return Path()


def get_user_home_for_sandboxed_app(app_id: str) -> Path:
    """Home directory seen by a sandboxed app; empty path off macOS."""
    if _system() == "macos":
        return _require_unsandboxed_home() / "Library" / "Containers" / app_id / "Data"
    return Path()