# Core data models for sitehooks
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, TextIO, runtime_checkable

from sitehooks.config import HooksConfig


@runtime_checkable
class HookIO(Protocol):
    """Protocol for the output sink handed to every hook.

    ABOUTME: Mirrors the standard + error channels of the invoking build tool
    ABOUTME: Uses @runtime_checkable for isinstance() support
    """

    def write(self, message: str) -> None:
        """Write a progress message to the standard channel."""
        ...

    def write_error(self, message: str) -> None:
        """Write a warning or error message to the error channel."""
        ...


class ConsoleIO:
    """HookIO implementation writing to stdout/stderr."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = out
        self._err = err

    def write(self, message: str) -> None:
        print(message, file=self._out or sys.stdout)

    def write_error(self, message: str) -> None:
        print(message, file=self._err or sys.stderr)


@dataclass
class BufferedIO:
    """HookIO implementation collecting messages in memory.

    ABOUTME: Used by library callers that want to inspect hook output
    """
    messages: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def write(self, message: str) -> None:
        self.messages.append(message)

    def write_error(self, message: str) -> None:
        self.errors.append(message)


@dataclass
class HookEvent:
    """Event object passed to each hook.

    ABOUTME: Carries the dispatching context (tool version, branch alias)
    ABOUTME: and the output sink, plus the project root and config in effect
    """
    name: str
    project_root: Path
    io: HookIO = field(default_factory=ConsoleIO)
    tool_version: str | None = None
    branch_alias: str | None = None
    config: HooksConfig = field(default_factory=HooksConfig)

    @property
    def web_root(self) -> Path:
        """Web root directory the hooks operate on."""
        return self.config.web_root_path(self.project_root)

    @property
    def assets_dir(self) -> Path:
        """Directory holding the profile's template files."""
        return self.config.assets_path(self.project_root)


@dataclass
class HookResult:
    """Report from a single hook run.

    ABOUTME: Tracks which paths were created, patched, removed or skipped
    ABOUTME: Skipped paths are steps whose precondition was not met
    """
    hook: str
    created: list[Path] = field(default_factory=list)
    patched: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """True if the hook touched the filesystem."""
        return bool(self.created or self.patched or self.removed)
