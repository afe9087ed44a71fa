"""
Import Resolver.

Inlines `@import "..."` statements that point at other pscss resources.

Eligible imports:
    - `@import "_partial";`        (leading underscore, stripped before loading)
    - `@import "theme.pscss";`     (extension .scss, .ncss, .pscss or .pncss)

Everything else (`@import "print.css";`, `@import url(...)`) is plain CSS
and passes through untouched for the consumer to resolve.

Resources are fetched through a loader, a plain callable `loader(path) -> str`
that raises `ResourceLoadError` (or `OSError`) on failure. Each resource is
loaded at most once per `ResourceCache`, which also breaks circular imports.
"""

from __future__ import annotations

import os
import re
import threading
from typing import TYPE_CHECKING, Callable, Dict, Optional, Set

from pscss.comments import strip_comments
from pscss.quotes import QUOTE_CLOSE, QUOTE_OPEN, unquote
from pscss.textutils import line_number, normalize_newlines

if TYPE_CHECKING:
    from pscss.context import ConversionContext


Loader = Callable[[str], str]

_IMPORT_RE = re.compile(r"@import\s*" + QUOTE_OPEN + r"(\d+)" + QUOTE_CLOSE + r"(\s*;)?")
_PSCSS_PATH_RE = re.compile(r"^_|\.p?[sn]css$")


class ResourceLoadError(Exception):
    """Raised by loaders when a resource cannot be fetched."""
    pass


class ResourceCache:
    """
    Set of already loaded resource identifiers.

    Shared by every conversion that uses it, so it must be safe to claim
    identifiers from several threads at once.
    """

    def __init__(self) -> None:
        self._loaded: Set[str] = set()
        self._lock = threading.Lock()

    def __contains__(self, identifier: str) -> bool:
        with self._lock:
            return identifier in self._loaded

    def __len__(self) -> int:
        with self._lock:
            return len(self._loaded)

    def claim(self, identifier: str) -> bool:
        """
        Mark `identifier` as loaded.

        Returns:
            True if the caller is the first to claim it and should load it,
            False if it was already loaded (duplicate or circular import).
        """
        with self._lock:
            if identifier in self._loaded:
                return False
            self._loaded.add(identifier)
            return True

    def clear(self) -> None:
        with self._lock:
            self._loaded.clear()


# Process-wide cache used when a conversion does not bring its own.
DEFAULT_RESOURCE_CACHE = ResourceCache()


class FileLoader:
    """Loads resources from the filesystem relative to `root`."""

    def __init__(self, root: str = ".", encoding: str = "utf-8") -> None:
        self.root = root
        self.encoding = encoding

    def __call__(self, path: str) -> str:
        full_path = os.path.join(self.root, path)
        try:
            with open(full_path, "r", encoding=self.encoding) as f:
                return f.read()
        except OSError as e:
            raise ResourceLoadError(f"failed to load: {path} ({e.strerror or e})") from e


class DictLoader:
    """Serves resources from an in-memory mapping of path -> text."""

    def __init__(self, resources: Optional[Dict[str, str]] = None) -> None:
        self.resources: Dict[str, str] = dict(resources or {})

    def __call__(self, path: str) -> str:
        try:
            return self.resources[path]
        except KeyError:
            raise ResourceLoadError(f"failed to load: {path}") from None


def is_pscss_import(path: str) -> bool:
    """True when an import path should be inlined rather than left to CSS."""
    return bool(_PSCSS_PATH_RE.search(path))


def resolve_import_path(base_path: Optional[str], import_path: str) -> str:
    """
    Resolve an import path against the resource that contains it.

    The last segment of `base_path` is replaced with `import_path`.
    Without a directory component the import resolves against the root.

    Examples:
        - ("css/main.pscss", "vars.pscss")  -> "css/vars.pscss"
        - ("main.pscss", "vars.pscss")      -> "vars.pscss"
        - (None, "vars.pscss")              -> "vars.pscss"
    """
    directory, slash, _ = (base_path or "").rpartition("/")
    resolved = f"{directory}/{import_path}" if slash else import_path
    return resolved.lstrip("/")


def resolve_imports(text: str, context: ConversionContext, base_path: Optional[str] = None) -> str:
    """
    Inline every eligible `@import` in `text`, depth-first.

    Args:
        text: Quote-protected, comment-free text
        context: Conversion context (loader, cache and quote vault are used)
        base_path: Path of the resource `text` came from; defaults to the
            context's base path

    Returns:
        Text with eligible imports replaced by the (processed) imported text
    """
    if base_path is None:
        base_path = context.base_path

    def _inline(match: re.Match) -> str:
        import_path = unquote(context.quotes[int(match.group(1)) - 1])
        if not is_pscss_import(import_path):
            return match.group(0)
        if import_path.startswith("_"):
            import_path = import_path[1:]

        identifier = resolve_import_path(base_path, import_path)
        if not context.cache.claim(identifier):
            return ""

        try:
            imported = context.loader(identifier)
        except (ResourceLoadError, OSError) as e:
            context.warn(
                str(e),
                line=line_number(text, match.start()),
                construct=context.quotes.restore(match.group(0)),
            )
            return ""

        imported = normalize_newlines(imported or "")
        imported = context.quotes.protect(imported)
        imported = strip_comments(imported, context.options.nested_comments)
        return resolve_imports(imported, context, identifier)

    return _IMPORT_RE.sub(_inline, text)
