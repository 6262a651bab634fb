"""Convert Slack web links into ``slack://`` deep links."""

from __future__ import annotations

import logging
from urllib.parse import SplitResult, parse_qsl, urlsplit

logger = logging.getLogger(__name__)


def _resource_uri(
    profile_team_id: str, segments: list[str], query: str, unknown: str
) -> str:
    if len(segments) < 2:
        return unknown
    resource_type, resource_id = segments[0], segments[1]
    subresource_id = segments[2] if len(segments) > 2 else None

    if resource_type == "docs" and subresource_id is not None:
        # Canvas: /docs/<team-id>/<doc-id>
        return f"slack://doc?team={profile_team_id}&id={subresource_id}"
    if resource_type == "team":
        # User: /team/<user-id>
        return f"slack://team?team={profile_team_id}&id={resource_id}"
    if resource_type == "files" and subresource_id is not None:
        # File: /files/<user-id>/<file-id>/<filename>
        return f"slack://file?team={resource_id}&id={subresource_id}"
    if resource_type == "archives":
        if subresource_id is None:
            return f"slack://channel?team={profile_team_id}&id={resource_id}"
        thread_ts = next(
            (value for key, value in parse_qsl(query, keep_blank_values=True) if key == "thread_ts"),
            None,
        )
        if thread_ts is not None:
            return (
                f"slack://channel?team={profile_team_id}&id={resource_id}"
                f"&message={subresource_id}&thread_ts={thread_ts}"
            )
        return (
            f"slack://channel?team={profile_team_id}&id={resource_id}"
            f"&message={subresource_id}"
        )
    return unknown


def convert_slack_uri(
    profile_team_id: str, profile_team_domain: str, url: SplitResult | str
) -> str:
    """Return the ``slack://`` link that opens ``url`` in the given workspace.

    Links that cannot be mapped to a resource open the workspace's default
    channel view. Raises ValueError if the URL has no host.
    """
    if isinstance(url, str):
        url = urlsplit(url)
    unknown = f"slack://channel?team={profile_team_id}"

    host = url.hostname
    if not host:
        raise ValueError(f"no host found from url: {url.geturl()}")

    if host != f"{profile_team_domain}.slack.com":
        # slack-gov.com, enterprise.slack.com, app.slack.com and anything else
        return unknown

    logger.info("Domain matches Slack profile")
    path = url.path or "/"
    segments = path[1:].split("/") if path.startswith("/") else path.split("/")
    return _resource_uri(profile_team_id, segments, url.query, unknown)