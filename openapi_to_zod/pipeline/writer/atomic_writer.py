"""
Atomic file writer for generated code.

Ensures that file writes are atomic to prevent a half-written schema file
from an interrupted run.
"""

from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import OutputValidationError

_CLOSING = {")": "(", "]": "[", "}": "{"}
_QUOTES = "\"'`"


def _skip_string(content: str, start: int) -> int:
    """Return the index just past the string literal opening at ``start``."""
    quote = content[start]
    i = start + 1
    while i < len(content):
        ch = content[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n" and quote != "`":
            break
        i += 1
    raise OutputValidationError(f"Unterminated string literal at offset {start}")


def check_brackets(content: str) -> None:
    """
    Check that brackets are balanced outside strings and comments.

    Raises:
        OutputValidationError: On the first mismatched or unclosed bracket
    """
    stack: list[tuple[str, int]] = []
    i = 0
    while i < len(content):
        ch = content[i]
        if ch in _QUOTES:
            i = _skip_string(content, i)
            continue
        if content.startswith("//", i):
            end = content.find("\n", i)
            i = len(content) if end == -1 else end
            continue
        if content.startswith("/*", i):
            end = content.find("*/", i + 2)
            if end == -1:
                raise OutputValidationError(f"Unterminated comment at offset {i}")
            i = end + 2
            continue
        if ch in "([{":
            stack.append((ch, i))
        elif ch in _CLOSING:
            if not stack or stack[-1][0] != _CLOSING[ch]:
                raise OutputValidationError(f"Unbalanced '{ch}' at offset {i}")
            stack.pop()
        i += 1

    if stack:
        ch, offset = stack[-1]
        raise OutputValidationError(f"Unclosed '{ch}' at offset {offset}")


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, setup_line: str = "", validate: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            setup_line: Line the generated file must contain (the Zod import)
            validate: Optional validation function replacing the default check
        """
        self._setup_line = setup_line
        self._validate = validate or self._default_validate

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self.validate_content(content)

            temp_path.replace(path)

        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True) -> bool:
        """Write content only if the file doesn't exist.

        Returns:
            True if file was written

        Raises:
            FileExistsError: If the file already exists
            OutputValidationError: If validation fails
        """
        path = Path(path)
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        self.write(path, content, validate)
        return True

    def validate_content(self, content: str) -> None:
        """Run the configured validation.

        Raises:
            OutputValidationError: If validation fails
        """
        self._validate(content)

    def _default_validate(self, content: str) -> None:
        """Default check: setup line present and brackets balanced.

        Raises:
            OutputValidationError: If validation fails
        """
        if self._setup_line and self._setup_line not in content:
            raise OutputValidationError(f"Generated code is missing the setup line: {self._setup_line}")
        check_brackets(content)
