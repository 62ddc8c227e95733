# Scaffold initialization for a fresh installation
import logging

from sitehooks.models import HookEvent, HookResult
from sitehooks.utils import copy_file, make_dir, touch

logger = logging.getLogger(__name__)

# ABOUTME: Marker file that lets an otherwise empty directory be tracked
KEEP_FILE = ".gitkeep"

# ABOUTME: Templates copied into sites/default, with world read/write
DEFAULT_SITE_FILES = ("settings.php", "services.yml")

SETTINGS_FILE_MODE = 0o666
FILES_DIR_MODE = 0o777


def create_required_files(event: HookEvent) -> HookResult:
    """Create the directory scaffolding and default site files.

    ABOUTME: Creates scaffold dirs with a .gitkeep marker if absent
    ABOUTME: Seeds settings.php and services.yml from the profile's assets
    ABOUTME: Creates sites/default/files with mode 0777
    ABOUTME: Never overwrites an existing file; missing templates are skipped

    Args:
        event: Hook event for the current run

    Returns:
        HookResult listing created and skipped paths
    """
    result = HookResult(hook="create_required_files")
    web_root = event.web_root
    profile = event.config.profile

    for dir_name in event.config.scaffold_dirs:
        target = web_root / dir_name
        if target.exists():
            continue
        make_dir(target)
        touch(target / KEEP_FILE)
        result.created.append(target)

    sites_default = web_root / "sites" / "default"

    for file_name in DEFAULT_SITE_FILES:
        target = sites_default / file_name
        template = event.assets_dir / file_name
        if target.exists():
            continue
        if not template.exists():
            logger.debug(f"Template {template} not found, skipping {target}")
            result.skipped.append(target)
            continue

        copy_file(template, target, mode=SETTINGS_FILE_MODE)
        result.created.append(target)
        if file_name == "settings.php":
            event.io.write(
                f"Create default {profile} settings.php file with chmod 0666 in /sites/default"
            )
        else:
            event.io.write(f"Create default {profile} {file_name} file with /sites/default")

    files_dir = sites_default / "files"
    if not files_dir.exists():
        make_dir(files_dir, mode=FILES_DIR_MODE, open_permissions=True)
        result.created.append(files_dir)
        event.io.write("Create a sites/default/files directory with chmod 0777")

    return result
