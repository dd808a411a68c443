"""Log contexts: the subsystem/category pair that tags and selects entries.

A context is built from one bundle variant and one category variant. Both
unions are closed; ``describe_bundle`` and ``describe_category`` are the only
places that turn a variant into its display string.
"""

from __future__ import annotations

import functools
import os
import sys
from dataclasses import dataclass, field

FALLBACK_BUNDLE_IDENTIFIER = "Unknown Bundle Identifier"


@functools.lru_cache(maxsize=None)
def main_bundle_identifier() -> str:
    """Identifier of the host process, or the fallback when none is known.

    Lookup order: ``LOGKIT_BUNDLE_IDENTIFIER``, the ``__main__`` module's
    import name (``python -m pkg``), the stem of ``sys.argv[0]``. Resolved
    once per process; ``main_bundle_identifier.cache_clear()`` forces a
    fresh lookup.
    """
    identifier = os.environ.get("LOGKIT_BUNDLE_IDENTIFIER", "").strip()
    if identifier:
        return identifier

    main = sys.modules.get("__main__")
    spec = getattr(main, "__spec__", None)
    if spec is not None and spec.name:
        name = spec.name
        if name.endswith(".__main__"):
            name = name[: -len(".__main__")]
        return name

    argv0 = sys.argv[0] if sys.argv else ""
    stem = os.path.splitext(os.path.basename(argv0))[0]
    if stem and stem != "-c":
        return stem
    return FALLBACK_BUNDLE_IDENTIFIER


# --- bundles ---------------------------------------------------------------


@dataclass(frozen=True)
class MainBundle:
    """The host process's own identifier."""


@dataclass(frozen=True)
class CustomBundle:
    identifier: str


LogBundle = MainBundle | CustomBundle


def describe_bundle(bundle: LogBundle) -> str:
    if isinstance(bundle, MainBundle):
        return main_bundle_identifier()
    if isinstance(bundle, CustomBundle):
        return bundle.identifier
    raise TypeError(f"Unsupported bundle variant: {type(bundle).__name__}")


# --- categories ------------------------------------------------------------


@dataclass(frozen=True)
class NamedCategory:
    name: str


@dataclass(frozen=True)
class DerivedCategory:
    """Category derived from a call site: source file and function name."""

    file: str
    function: str

    @classmethod
    def here(cls, depth: int = 0) -> DerivedCategory:
        """Build from the caller, or from ``depth`` frames above it."""
        frame = sys._getframe(depth + 1)
        return cls(file=frame.f_code.co_filename, function=frame.f_code.co_name)


@dataclass(frozen=True)
class CustomCategory:
    name: str


LogCategory = NamedCategory | DerivedCategory | CustomCategory

DEVELOPMENT = NamedCategory("Development")
PRODUCTION = NamedCategory("Production")


def describe_category(category: LogCategory) -> str:
    if isinstance(category, NamedCategory):
        return category.name
    if isinstance(category, DerivedCategory):
        return f"File: {os.path.basename(category.file)}, Function: {category.function}"
    if isinstance(category, CustomCategory):
        return category.name
    raise TypeError(f"Unsupported category variant: {type(category).__name__}")


# --- context ---------------------------------------------------------------


@dataclass(frozen=True)
class LogContext:
    bundle: LogBundle = field(default_factory=MainBundle)
    category: LogCategory = DEVELOPMENT

    @property
    def bundle_description(self) -> str:
        """Subsystem string used to tag and match entries."""
        return describe_bundle(self.bundle)

    @property
    def category_description(self) -> str:
        """Category string used to tag and match entries."""
        return describe_category(self.category)

    @classmethod
    def development(cls, bundle: LogBundle | None = None) -> LogContext:
        return cls(bundle=bundle or MainBundle(), category=DEVELOPMENT)

    @classmethod
    def production(cls, bundle: LogBundle | None = None) -> LogContext:
        return cls(bundle=bundle or MainBundle(), category=PRODUCTION)

    @classmethod
    def default(
        cls,
        bundle: LogBundle | None = None,
        file: str | None = None,
        function: str | None = None,
        depth: int = 1,
    ) -> LogContext:
        """Context whose category is derived from the calling location.

        ``file`` and ``function`` override the captured values. ``depth``
        counts frames up from this method: 1 is its direct caller.
        """
        if file is None or function is None:
            here = DerivedCategory.here(depth)
            file = file if file is not None else here.file
            function = function if function is not None else here.function
        return cls(
            bundle=bundle or MainBundle(),
            category=DerivedCategory(file=file, function=function),
        )
