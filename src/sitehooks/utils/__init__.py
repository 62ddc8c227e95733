# ABOUTME: Utility modules for sitehooks
# ABOUTME: Exports filesystem, backup, and manifest helpers

from sitehooks.utils.backup import cleanup_old_backups, create_backup
from sitehooks.utils.fs import copy_file, find_named, make_dir, remove_tree, scoped_umask, touch
from sitehooks.utils.manifest import ManifestError, dump_manifest, load_manifest, remove_key

__all__ = [
    "cleanup_old_backups",
    "create_backup",
    "copy_file",
    "find_named",
    "make_dir",
    "remove_tree",
    "scoped_umask",
    "touch",
    "ManifestError",
    "dump_manifest",
    "load_manifest",
    "remove_key",
]
