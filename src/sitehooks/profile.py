# Sub-profile adjustment of the parent profile's manifest
import logging

from sitehooks.models import HookEvent, HookResult
from sitehooks.utils import create_backup, dump_manifest, load_manifest, remove_key

logger = logging.getLogger(__name__)

DISTRIBUTION_KEY = "distribution"


def post_scaffold_sub_profile_procedure(event: HookEvent) -> HookResult:
    """Drop the distribution entry from the parent profile's .info.yml.

    ABOUTME: Lets a sub profile act as the distribution cover on install
    ABOUTME: No-op if the manifest is missing or has no distribution key
    ABOUTME: yaml.YAMLError propagates for malformed manifests

    Args:
        event: Hook event for the current run

    Returns:
        HookResult with the manifest listed as patched when rewritten
    """
    result = HookResult(hook="post_scaffold_sub_profile_procedure")
    manifest = event.config.manifest_path(event.project_root)

    if not manifest.exists():
        result.skipped.append(manifest)
        return result

    info = load_manifest(manifest)
    if not remove_key(info, DISTRIBUTION_KEY):
        logger.debug(f"No '{DISTRIBUTION_KEY}' key in {manifest}")
        return result

    if event.config.backup:
        create_backup(manifest, event.config.backup_dir(event.project_root))

    dump_manifest(manifest, info)
    result.patched.append(manifest)
    logger.debug(f"Removed '{DISTRIBUTION_KEY}' from {manifest}")

    return result
