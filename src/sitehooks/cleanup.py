# Version-control metadata removal
import logging

from sitehooks.models import HookEvent, HookResult
from sitehooks.utils import find_named, remove_tree

logger = logging.getLogger(__name__)


def remove_vcs_directories(event: HookEvent, dry_run: bool = False) -> HookResult:
    """Remove .git folders from modules, themes and profiles under the web root.

    ABOUTME: Development branches of vendored packages ship their own .git,
    ABOUTME: which confuses tools that look for the enclosing repository
    ABOUTME: Same portable walk on every platform, no shell-out
    ABOUTME: dry_run reports the matches without deleting anything

    Args:
        event: Hook event for the current run
        dry_run: Only report what would be removed

    Returns:
        HookResult with the removed (or removable) paths

    Raises:
        OSError: If an entry cannot be read or removed
    """
    result = HookResult(hook="remove_vcs_directories")
    web_root = event.web_root

    if not web_root.is_dir():
        logger.debug(f"Web root {web_root} not found, nothing to clean")
        result.skipped.append(web_root)
        return result

    for match in find_named(web_root, event.config.vcs_dir_name):
        if dry_run:
            event.io.write(f"Would remove {match}")
        else:
            remove_tree(match)
            logger.debug(f"Removed {match}")
        result.removed.append(match)

    return result
