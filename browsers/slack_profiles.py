"""Reading Slack workspaces and presenting them as profiles."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ROOT_STATE_RELATIVE_PATH = Path("storage") / "root-state.json"


@dataclass(frozen=True)
class SlackWorkspace:
    """One workspace the Slack app is signed in to."""

    domain: str
    id: str
    name: str
    icon_68: str
    icon_88: str


@dataclass
class BrowserProfile:
    """A profile of an installed app that links can be opened in."""

    profile_cli_arg_value: str
    profile_cli_container_name: str | None
    profile_name: str
    profile_icon: str | None = None
    profile_restricted_url_patterns: list[str] = field(default_factory=list)


def _text(mapping: dict[str, Any], key: str) -> str:
    value = mapping.get(key)
    return value if isinstance(value, str) else ""


def parse_workspaces(root_state: Any) -> list[SlackWorkspace]:
    """Return the workspaces of a Slack root state, ordered by name.

    Raises ValueError if the state has no ``workspaces`` object or a
    workspace has no ``icon`` object.
    """
    workspaces = root_state.get("workspaces") if isinstance(root_state, dict) else None
    if not isinstance(workspaces, dict):
        raise ValueError("root state has no workspaces object")

    result = []
    for key, workspace in workspaces.items():
        if not isinstance(workspace, dict) or not isinstance(workspace.get("icon"), dict):
            raise ValueError(f"workspace {key!r} has no icon object")
        icon = workspace["icon"]
        result.append(
            SlackWorkspace(
                domain=_text(workspace, "domain"),
                id=_text(workspace, "id"),
                name=_text(workspace, "name"),
                icon_68=_text(icon, "image_68"),
                icon_88=_text(icon, "image_88"),
            )
        )
    result.sort(key=lambda workspace: workspace.name)
    return result


def load_workspaces(root_state_file) -> list[SlackWorkspace]:
    """Read and parse a Slack ``root-state.json`` file."""
    with Path(root_state_file).open(encoding="utf-8") as handle:
        return parse_workspaces(json.load(handle))


def find_slack_profiles(slack_user_dir, app_id: str, cache_root_dir) -> list[BrowserProfile]:
    """Return a profile for each Slack workspace found under ``slack_user_dir``.

    Returns an empty list when Slack has no root state file there.
    """
    root_state_file = Path(slack_user_dir) / ROOT_STATE_RELATIVE_PATH
    logger.debug("Slack root state path: %s", root_state_file)
    if not root_state_file.exists():
        logger.info("Could not find %s", root_state_file)
        return []

    profiles = []
    for workspace in load_workspaces(root_state_file):
        icons_dir = Path(cache_root_dir) / "icons" / "profiles" / app_id
        icons_dir.mkdir(parents=True, exist_ok=True)
        profiles.append(
            BrowserProfile(
                profile_cli_arg_value=workspace.id,
                profile_cli_container_name=workspace.domain,
                profile_name=workspace.name,
                profile_icon=None,
                profile_restricted_url_patterns=[f"{workspace.domain}.slack.com"],
            )
        )
    return profiles