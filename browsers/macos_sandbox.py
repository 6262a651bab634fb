"""Checking whether a macOS app bundle runs in the app sandbox."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)

SANDBOX_ENTITLEMENT = "<key>com.apple.security.app-sandbox</key><true/>"


def output_has_sandbox_entitlement(output) -> bool:
    """Return whether ``codesign`` entitlement output enables the sandbox."""
    if isinstance(output, (bytes, bytearray)):
        output = bytes(output).decode("utf-8", errors="replace")
    return SANDBOX_ENTITLEMENT in output


def has_sandbox_entitlement(bundle_path) -> bool:
    """Ask ``codesign`` whether the bundle, e.g. ``/Applications/Slack.app``, is sandboxed.

    Returns False when ``codesign`` cannot be run.
    """
    command = ["codesign", "-d", "--entitlements", "-", "--xml", str(bundle_path)]
    try:
        result = subprocess.run(command, capture_output=True, check=False)
    except OSError:
        logger.warning("Could not check if app is sandboxed or not, defaulting to not")
        return False
    return output_has_sandbox_entitlement(result.stdout)