"""Output-root path confinement.

Security model:
    Tool arguments and provider responses are untrusted. Every path that is
    written or read on behalf of a tool call goes through `PathGuard`, which
    canonicalizes with `os.path.realpath` and checks containment with
    `os.path.commonpath`. Violations raise `PathError` before any I/O.

Path semantics:
    - `safe_join(name)`: strips directory components and joins to the output root.
    - `validate(path)`: caller-supplied full path; relative paths resolve against
      the project root (so `outputs/a.png` is valid with the default layout).
    - `check_filename(name)`: bare filename only, no separators or dot entries.
"""

import os

from image_beautifier.core.errors import PathError

_SEPARATORS = ("/", "\\")


class PathGuard:
    """Confine file access to one output directory."""

    def __init__(self, project_root: str, output_dir: str) -> None:
        self.project_root = os.path.realpath(project_root)
        self.output_root = os.path.realpath(os.path.join(self.project_root, output_dir))

    def _is_contained(self, path: str) -> bool:
        try:
            return os.path.commonpath([path, self.output_root]) == self.output_root
        except ValueError:
            # Different drives or mixed absolute/relative paths.
            return False

    def check_filename(self, name: str) -> str:
        """Return `name` when it is a plain filename, raise `PathError` otherwise."""
        if not name or not name.strip():
            raise PathError("Invalid filename: empty name")
        if "\x00" in name:
            raise PathError("Invalid filename: NUL byte")
        if any(sep in name for sep in _SEPARATORS):
            raise PathError("Invalid filename: path separators are not allowed")
        if name in (".", ".."):
            raise PathError("Invalid filename: path traversal detected")
        return name

    def safe_join(self, name: str) -> str:
        """Join the basename of `name` to the output root and verify containment."""
        base = os.path.basename(name.replace("\\", "/"))
        if not base or base in (".", "..") or "\x00" in base:
            raise PathError("Invalid output path: path traversal detected")

        resolved = os.path.realpath(os.path.join(self.output_root, base))
        if not self._is_contained(resolved) or resolved == self.output_root:
            raise PathError("Invalid output path: path traversal detected")
        return resolved

    def validate(self, path: str) -> str:
        """Return the canonical form of `path` if it lies inside the output root."""
        if not path or "\x00" in path:
            raise PathError("Invalid path: must be within the output directory")

        resolved = os.path.realpath(os.path.join(self.project_root, os.path.expanduser(path)))
        if not self._is_contained(resolved):
            raise PathError("Invalid path: must be within the output directory")
        return resolved

    def resolve_output_name(self, output_path: str) -> str:
        """Turn a caller-supplied output name into a filename in the output root.

        A bare filename is accepted as-is. A path with directory components is
        accepted only when it resolves directly inside the output root.
        """
        if not any(sep in output_path for sep in _SEPARATORS):
            return self.check_filename(output_path)

        resolved = self.validate(output_path)
        if os.path.dirname(resolved) != self.output_root:
            raise PathError("Invalid output path: must be directly inside the output directory")
        return os.path.basename(resolved)

    def to_relative(self, path: str) -> str:
        """Return `path` relative to the project root."""
        return os.path.relpath(path, self.project_root)

    def ensure_output_root(self) -> str:
        os.makedirs(self.output_root, exist_ok=True)
        return self.output_root
