# ABOUTME: Backup utilities for files rewritten in place by the hooks.
# ABOUTME: Handles timestamped backups with automatic retention cleanup (keep last 5 per file).
import logging
import re
import shutil
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

# Pattern matches: {stem}_{YYYYMMDD}_{HHMMSS}{suffix}
# e.g., htaccess_20260108_143022, varbase.info_20260108_143022.yml
BACKUP_PATTERN = re.compile(r"^(.+?)_(\d{8}_\d{6})(\.[^.]+)?$")


def backup_stem(source_path: Path) -> str:
    """Return the name prefix used for a file's backups.

    ABOUTME: Leading dots are dropped so .htaccess backups stay visible
    """
    return source_path.stem.lstrip(".") or source_path.name.lstrip(".")


def create_backup(source_path: Path, backup_dir: Path, max_backups: int = 5) -> Path:
    """Create a timestamped backup of a file.

    ABOUTME: Backup format: {stem}_{YYYYMMDD}_{HHMMSS}{suffix}
    ABOUTME: Uses shutil.copy2() to preserve file metadata
    ABOUTME: Creates backup_dir if it doesn't exist

    Args:
        source_path: Path to file to backup
        backup_dir: Directory where backup should be created
        max_backups: Backups to keep per file stem

    Returns:
        Path to created backup file

    Raises:
        FileNotFoundError: If source_path doesn't exist
        OSError: If backup creation fails

    Examples:
        >>> backup_path = create_backup(Path("web/.htaccess"), Path(".sitehooks/backups"))
        >>> backup_path.name
        'htaccess_20260108_143022'
    """
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {source_path}")

    backup_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    suffix = source_path.suffix if source_path.stem.lstrip(".") else ""
    backup_path = backup_dir / f"{backup_stem(source_path)}_{timestamp}{suffix}"

    shutil.copy2(source_path, backup_path)
    logger.debug(f"Backed up {source_path} to {backup_path}")

    cleanup_old_backups(backup_dir, max_backups)

    return backup_path


def cleanup_old_backups(backup_dir: Path, max_backups_per_file: int = 5) -> list[Path]:
    """Remove old backup files, keeping only the most recent per file stem.

    ABOUTME: Groups backups by stem prefix (before _timestamp)
    ABOUTME: Logs warnings on errors but does not raise exceptions

    Args:
        backup_dir: Directory containing backup files
        max_backups_per_file: Maximum backups to keep per stem (default 5)

    Returns:
        List of paths that were deleted
    """
    deleted_files: list[Path] = []

    if not backup_dir.exists():
        return deleted_files

    backups_by_stem: dict[str, list[tuple[str, Path]]] = {}

    for file_path in backup_dir.iterdir():
        if not file_path.is_file():
            continue

        match = BACKUP_PATTERN.match(file_path.name)
        if not match:
            continue

        backups_by_stem.setdefault(match.group(1), []).append((match.group(2), file_path))

    for backups in backups_by_stem.values():
        # Newest first
        backups.sort(key=lambda x: x[0], reverse=True)

        for _timestamp, file_path in backups[max_backups_per_file:]:
            try:
                file_path.unlink()
                deleted_files.append(file_path)
                logger.debug(f"Deleted old backup: {file_path}")
            except OSError as e:
                logger.warning(f"Failed to delete old backup {file_path}: {e}")

    return deleted_files
