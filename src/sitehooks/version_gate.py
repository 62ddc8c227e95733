# Build tool version compatibility gate
import logging
import os
import re
import shutil
import subprocess
import sys

from packaging.version import InvalidVersion, Version

from sitehooks.models import HookEvent, HookResult

logger = logging.getLogger(__name__)

# ABOUTME: Dev-channel builds report the git revision as their version
REVISION_PATTERN = re.compile(r"^[0-9a-f]{40}$", re.IGNORECASE)

# ABOUTME: Placeholders left in place when the tool runs from a git checkout
DEV_SENTINELS = frozenset({"@package_version@", "@package_branch_alias_version@"})

# ABOUTME: Pulls the version out of "Composer version 2.7.1 2024-02-09 15:26:28"
COMPOSER_VERSION_OUTPUT = re.compile(r"version\s+(\S+)", re.IGNORECASE)

# ABOUTME: Composer normalizes wildcard branch segments to this number
WILDCARD_SEGMENT = "9999999"

DEV_BUILD_WARNING = (
    "<warning>You are running a development version of Composer. If you experience "
    "problems, please update Composer to the latest stable version.</warning>"
)

EXIT_VERSION_TOO_OLD = 1


def resolve_version(version: str | None, branch_alias: str | None) -> str | None:
    """Pick the version string to compare.

    ABOUTME: A 40-char hex revision is replaced by the branch alias

    Examples:
        >>> resolve_version("1.2.3", None)
        '1.2.3'
        >>> resolve_version("a" * 40, "2.0.x-dev")
        '2.0.x-dev'
    """
    if version is not None and REVISION_PATTERN.match(version):
        return branch_alias
    return version


def parse_version(version: str) -> Version:
    """Parse a Composer-style version string.

    ABOUTME: Strips a leading "v" and maps ".x" branch wildcards to 9999999
    ABOUTME: Stability suffixes (-RC1, -alpha, -dev) are handled by packaging

    Raises:
        InvalidVersion: If the string cannot be normalized

    Examples:
        >>> parse_version("v1.10.1")
        <Version('1.10.1')>
        >>> parse_version("1.x-dev") > parse_version("1.0.0")
        True
    """
    normalized = version.strip()
    if normalized[:1] in ("v", "V"):
        normalized = normalized[1:]
    normalized = re.sub(r"(?<=\.)[x*](?=$|[.-])", WILDCARD_SEGMENT, normalized)
    return Version(normalized)


def is_older_than(version: str, minimum: str) -> bool:
    """Return True if version is strictly lower than minimum."""
    return parse_version(version) < parse_version(minimum)


def detect_tool_version() -> str | None:
    """Find the version of the invoking build tool.

    ABOUTME: Checks $COMPOSER_VERSION, then `composer --version` output
    ABOUTME: Returns None if neither is available
    """
    from_env = os.environ.get("COMPOSER_VERSION")
    if from_env:
        return from_env

    composer = shutil.which("composer")
    if composer is None:
        logger.debug("composer not found on PATH")
        return None

    try:
        completed = subprocess.run(
            [composer, "--version", "--no-ansi"],
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning(f"Could not run composer --version: {e}")
        return None

    match = COMPOSER_VERSION_OUTPUT.search(completed.stdout)
    return match.group(1) if match else None


def check_tool_version(event: HookEvent) -> HookResult:
    """Stop the installation if the build tool is too old.

    ABOUTME: Composer 1.0.0 and later treat `install` without a lock file as
    ABOUTME: `update`; older versions would never trigger the scaffold hooks
    ABOUTME: Development builds only get a warning
    ABOUTME: Exits the process with status 1 when the version is too old

    Args:
        event: Hook event carrying tool_version and branch_alias

    Returns:
        Empty HookResult when the gate passes

    Raises:
        SystemExit: If the tool version is lower than the configured minimum
    """
    result = HookResult(hook="check_tool_version")
    minimum = event.config.min_tool_version
    version = resolve_version(event.tool_version, event.branch_alias)

    if version is None or version in DEV_SENTINELS:
        event.io.write_error(DEV_BUILD_WARNING)
        return result

    try:
        too_old = is_older_than(version, minimum)
    except InvalidVersion:
        logger.warning(f"Unrecognized tool version '{version}', treating as development build")
        event.io.write_error(DEV_BUILD_WARNING)
        return result

    if too_old:
        event.io.write_error(
            f"<error>Drupal-project requires Composer version {minimum} or higher. "
            "Please update your Composer before continuing</error>."
        )
        sys.exit(EXIT_VERSION_TOO_OLD)

    logger.debug(f"Tool version {version} satisfies minimum {minimum}")
    return result
