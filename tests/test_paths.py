import os
import pwd
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

from browsers import paths


@pytest.fixture
def home(tmp_path, monkeypatch):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    for var in ("XDG_CACHE_HOME", "XDG_CONFIG_HOME", "XDG_DATA_HOME", "LOCALAPPDATA", "APPDATA"):
        monkeypatch.delenv(var, raising=False)
    return home_dir


@pytest.fixture
def pw_home(tmp_path, monkeypatch):
    real_home = tmp_path / "real"
    monkeypatch.setattr(pwd, "getpwuid", lambda uid: SimpleNamespace(pw_dir=str(real_home)))
    return real_home


def test_linux_cache_uses_xdg(home, tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    assert paths.get_cache_root_dir() == tmp_path / "cache" / "software.Browsers"


def test_linux_cache_falls_back_to_home(home, monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert paths.get_cache_root_dir() == home / ".cache" / "software.Browsers"


def test_linux_relative_xdg_is_ignored(home, monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", "relative/dir")
    assert paths.get_config_root_dir() == home / ".config" / "software.Browsers"


def test_linux_resources_under_data_dir(home, monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    expected = home / ".local" / "share" / "software.Browsers" / "resources"
    assert paths.get_resources_basedir() == expected


@pytest.mark.parametrize("platform", ["linux", "darwin", "win32"])
def test_runtime_dir_is_under_cache(home, monkeypatch, platform):
    monkeypatch.setattr(sys, "platform", platform)
    assert paths.get_runtime_dir() == paths.get_cache_root_dir() / "runtime"


@pytest.mark.parametrize("platform", ["linux", "darwin", "win32"])
def test_config_json_path(home, monkeypatch, platform):
    monkeypatch.setattr(sys, "platform", platform)
    assert paths.get_config_json_path() == paths.get_config_root_dir() / "config.json"


@pytest.mark.parametrize("platform", ["linux", "darwin", "win32"])
def test_resource_derived_paths(home, monkeypatch, platform):
    monkeypatch.setattr(sys, "platform", platform)
    base = paths.get_resources_basedir()
    assert paths.get_repository_basedir() == base / "repository"
    assert paths.get_repository_toml_path() == base / "repository" / "application-repository.toml"
    assert paths.get_localizations_basedir() == base / "i18n"
    assert paths.get_app_icon_path() == base / "icons/512x512/software.Browsers.png"


def test_macos_own_dirs(home, monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    assert paths.get_cache_root_dir() == home / "Library" / "Caches" / "software.Browsers"
    assert paths.get_logs_root_dir() == home / "Library" / "Logs" / "software.Browsers"
    assert paths.get_config_root_dir() == (
        home / "Library" / "Application Support" / "software.Browsers"
    )


def test_macos_resources_from_bundle(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    exe = tmp_path / "Browsers.app" / "Contents" / "MacOS" / "browsers"
    exe.parent.mkdir(parents=True)
    exe.touch()
    monkeypatch.setattr(sys, "executable", str(exe))
    expected = (tmp_path / "Browsers.app").resolve() / "Contents" / "Resources"
    assert paths.get_resources_basedir() == expected


def test_macos_unsandboxed_dirs(home, pw_home, monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    support = pw_home / "Library" / "Application Support"
    assert paths.get_chrome_user_dir_root() == support
    assert paths.get_firefox_user_dir_root() == support
    assert paths.get_user_home_for_unsandboxed_app() == pw_home


def test_macos_sandboxed_home(home, pw_home, monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    app_id = "com.tinyspeck.slackmacgap"
    expected = pw_home / "Library" / "Containers" / app_id / "Data"
    assert paths.get_user_home_for_sandboxed_app(app_id) == expected


def test_unsandboxed_home_dir_reads_password_database(pw_home):
    assert paths.unsandboxed_home_dir() == pw_home


def test_unsandboxed_home_dir_empty_entry(monkeypatch):
    monkeypatch.setattr(pwd, "getpwuid", lambda uid: SimpleNamespace(pw_dir=""))
    assert paths.unsandboxed_home_dir() is None


def test_macos_missing_home_raises(home, monkeypatch):
    def missing(uid):
        raise KeyError(uid)

    monkeypatch.setattr(pwd, "getpwuid", missing)
    monkeypatch.setattr(sys, "platform", "darwin")
    with pytest.raises(RuntimeError):
        paths.get_chrome_user_dir_root()


@pytest.mark.parametrize("platform", ["linux", "win32"])
def test_app_homes_empty_off_macos(home, monkeypatch, platform):
    monkeypatch.setattr(sys, "platform", platform)
    assert paths.get_user_home_for_unsandboxed_app() == Path()
    assert paths.get_user_home_for_sandboxed_app("some.app") == Path()


def test_windows_dirs(home, tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    local = tmp_path / "Local"
    roaming = tmp_path / "Roaming"
    monkeypatch.setenv("LOCALAPPDATA", str(local))
    monkeypatch.setenv("APPDATA", str(roaming))
    own = local / "software.Browsers"
    assert paths.get_cache_root_dir() == own / "cache"
    assert paths.get_logs_root_dir() == own / "logs"
    assert paths.get_config_root_dir() == own / "config"
    assert paths.get_chrome_user_dir_root() == local
    assert paths.get_firefox_user_dir_root() == roaming


def test_windows_resources_next_to_executable(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    exe = tmp_path / "Programs" / "browsers.exe"
    exe.parent.mkdir()
    exe.touch()
    monkeypatch.setattr(sys, "executable", str(exe))
    assert paths.get_resources_basedir() == exe.parent.resolve() / "resources"


def test_linux_firefox_root_is_home(home, monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert paths.get_firefox_user_dir_root() == home
    assert os.fspath(paths.get_chrome_user_dir_root()) == os.fspath(home / ".config")