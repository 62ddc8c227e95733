# sitehooks - Build lifecycle setup hooks for Drupal projects
# ABOUTME: Version information
__version__ = "0.1.0"

# ABOUTME: Export config, models and the hook entry points
from sitehooks.config import ConfigError, HooksConfig, load_config, load_project_config
from sitehooks.hooks import EVENTS, HOOKS, UnknownEventError, run_event
from sitehooks.models import BufferedIO, ConsoleIO, HookEvent, HookIO, HookResult

__all__ = [
    "__version__",
    "ConfigError",
    "HooksConfig",
    "load_config",
    "load_project_config",
    "EVENTS",
    "HOOKS",
    "UnknownEventError",
    "run_event",
    "BufferedIO",
    "ConsoleIO",
    "HookEvent",
    "HookIO",
    "HookResult",
]
