# Post-scaffold patches applied after the core scaffold files land
import logging
from pathlib import Path

from sitehooks.models import HookEvent, HookResult
from sitehooks.utils import copy_file, create_backup

logger = logging.getLogger(__name__)

ROBOTS_STAGING = "robots-staging.txt"
HTACCESS = ".htaccess"
HTACCESS_EXTRA = "htaccess_extra"
DEVELOPMENT_SERVICES = "development.services.yml"


def splice_after_marker(
    lines: list[bytes], extra: list[bytes], marker: bytes
) -> tuple[list[bytes], bool]:
    """Insert extra lines right after the first line containing marker.

    ABOUTME: Returns the lines unchanged if the marker is missing
    ABOUTME: or if extra already directly follows the marker line
    ABOUTME: Second element tells whether anything was inserted

    Examples:
        >>> splice_after_marker([b"a\\n", b"RewriteEngine on\\n", b"b\\n"], [b"X\\n"], b"RewriteEngine on")
        ([b'a\\n', b'RewriteEngine on\\n', b'X\\n', b'b\\n'], True)
    """
    idx = find_marker(lines, marker)
    if idx is None:
        return lines, False

    insert_at = idx + 1
    if extra and lines[insert_at:insert_at + len(extra)] == extra:
        return lines, False
    return lines[:insert_at] + extra + lines[insert_at:], bool(extra)


def find_marker(lines: list[bytes], marker: bytes) -> int | None:
    """Return the index of the first line containing marker, or None."""
    return next((idx for idx, line in enumerate(lines) if marker in line), None)


def _read_lines(path: Path) -> list[bytes]:
    # Raw bytes: .htaccess files are not guaranteed to be UTF-8, and
    # bytes.splitlines only breaks on \n, \r and \r\n
    return path.read_bytes().splitlines(keepends=True)


def patch_htaccess(
    htaccess: Path, extra_file: Path, marker: str, backup_dir: Path | None = None
) -> bool:
    """Splice extra_file's rules into htaccess after the rewrite marker.

    ABOUTME: Works on raw bytes; encoding and line endings are kept as-is
    ABOUTME: htaccess is backed up to backup_dir only when it gets rewritten

    Returns:
        True if htaccess was rewritten
    """
    lines = _read_lines(htaccess)
    extra = _read_lines(extra_file)
    marker_bytes = marker.encode("utf-8")
    marker_idx = find_marker(lines, marker_bytes)

    # Spliced lines must stay terminated so they don't merge with their neighbours
    if extra and not extra[-1].endswith(b"\n"):
        extra[-1] += b"\n"
    if extra and marker_idx == len(lines) - 1 and not lines[-1].endswith(b"\n"):
        lines[-1] += b"\n"

    patched, changed = splice_after_marker(lines, extra, marker_bytes)
    if not changed:
        if marker_idx is None:
            logger.warning(f"Marker '{marker}' not found in {htaccess}, leaving it unchanged")
        else:
            logger.debug(f"{htaccess} already contains the extra rules")
        return False

    if backup_dir is not None:
        create_backup(htaccess, backup_dir)

    htaccess.write_bytes(b"".join(patched))
    return True


def post_scaffold_procedure(event: HookEvent) -> HookResult:
    """Apply the optional patches that follow the core scaffold step.

    ABOUTME: Copies robots-staging.txt to the web root
    ABOUTME: Splices htaccess_extra into .htaccess after "RewriteEngine on"
    ABOUTME: Overwrites sites/development.services.yml with the profile's copy
    ABOUTME: Each patch is skipped on its own when its files are missing

    Args:
        event: Hook event for the current run

    Returns:
        HookResult with created, patched and skipped paths
    """
    result = HookResult(hook="post_scaffold_procedure")
    web_root = event.web_root
    assets = event.assets_dir

    robots_template = assets / ROBOTS_STAGING
    robots_target = web_root / ROBOTS_STAGING
    if robots_template.exists():
        copy_file(robots_template, robots_target)
        result.created.append(robots_target)
    else:
        result.skipped.append(robots_target)

    htaccess = web_root / HTACCESS
    extra_file = assets / HTACCESS_EXTRA
    if htaccess.exists() and extra_file.exists():
        backup_dir = event.config.backup_dir(event.project_root) if event.config.backup else None
        if patch_htaccess(htaccess, extra_file, event.config.rewrite_marker, backup_dir):
            result.patched.append(htaccess)
    else:
        result.skipped.append(htaccess)

    services_template = assets / DEVELOPMENT_SERVICES
    services_target = web_root / "sites" / DEVELOPMENT_SERVICES
    if services_template.exists():
        copy_file(services_template, services_target)
        result.created.append(services_target)
    else:
        result.skipped.append(services_target)

    return result
