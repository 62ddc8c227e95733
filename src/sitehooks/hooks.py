# Lifecycle event registry and dispatcher
import logging
from collections.abc import Callable

from sitehooks.cleanup import remove_vcs_directories
from sitehooks.models import HookEvent, HookResult
from sitehooks.patch import post_scaffold_procedure
from sitehooks.profile import post_scaffold_sub_profile_procedure
from sitehooks.scaffold import create_required_files
from sitehooks.version_gate import check_tool_version

logger = logging.getLogger(__name__)

Hook = Callable[[HookEvent], HookResult]

# Hooks addressable by name
HOOKS: dict[str, Hook] = {
    "check_tool_version": check_tool_version,
    "create_required_files": create_required_files,
    "post_scaffold_procedure": post_scaffold_procedure,
    "post_scaffold_sub_profile_procedure": post_scaffold_sub_profile_procedure,
    "remove_vcs_directories": remove_vcs_directories,
}

# Lifecycle event name -> hook names, run in order
EVENTS: dict[str, list[str]] = {
    "pre-install-cmd": ["check_tool_version"],
    "pre-update-cmd": ["check_tool_version"],
    "post-install-cmd": ["create_required_files"],
    "post-update-cmd": ["create_required_files"],
    "post-drupal-scaffold-cmd": ["post_scaffold_procedure"],
    "post-sub-profile-scaffold-cmd": ["post_scaffold_sub_profile_procedure"],
    "clean": ["remove_vcs_directories"],
}


class UnknownEventError(ValueError):
    """Raised when no hooks are registered for an event name."""


def get_hooks(event_name: str) -> list[Hook]:
    """Return the hooks registered for an event.

    Raises:
        UnknownEventError: If event_name isn't registered
    """
    if event_name not in EVENTS:
        known = ", ".join(sorted(EVENTS))
        raise UnknownEventError(f"Unknown event '{event_name}'. Known events: {known}")
    return [HOOKS[name] for name in EVENTS[event_name]]


def run_event(event: HookEvent) -> list[HookResult]:
    """Run every hook registered for event.name.

    ABOUTME: Hooks run sequentially; each one finishes before the next starts
    ABOUTME: Exceptions (and the version gate's SystemExit) propagate

    Args:
        event: Hook event whose name selects the hooks

    Returns:
        One HookResult per hook, in run order

    Examples:
        >>> results = run_event(HookEvent(name="clean", project_root=Path.cwd()))
        >>> [r.hook for r in results]
        ['remove_vcs_directories']
    """
    results: list[HookResult] = []
    for hook in get_hooks(event.name):
        logger.debug(f"Running {hook.__name__} for {event.name}")
        results.append(hook(event))
    return results
