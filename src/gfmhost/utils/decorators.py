#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gfmhost/utils/decorators.py
"""Dependency gating and timing helpers for gfmhost.

The Markdown compiler and the Jinja2 integration import their libraries
inside the functions that need them. ``requires_dependencies`` runs before
such a function and turns a missing or too-old library into a
``DependencyError`` that names what to install, instead of an
``ImportError`` from deep inside the call.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from importlib import metadata
from typing import Any, Callable, Generator, Iterable, Optional, Tuple

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from gfmhost.exceptions import DependencyError

# (install_name, import_name, version_spec), as in the DEPS_* tables
Requirement = Tuple[str, str, str]


def installed_version(distribution: str) -> Optional[str]:
    """Return the installed version of a distribution, or None."""
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return None


def check_requirements(
    requirements: Iterable[Requirement],
) -> tuple[list[tuple[str, str]], list[tuple[str, str, str]], ImportError | None]:
    """Find the requirements that are not satisfied.

    Parameters
    ----------
    requirements : iterable of (install_name, import_name, version_spec)
        Packages to check. An empty ``version_spec`` accepts any version.

    Returns
    -------
    tuple
        ``(missing, version_mismatches, import_error)``. ``missing`` holds
        ``(install_name, version_spec)`` pairs for packages that cannot be
        imported, ``version_mismatches`` holds ``(install_name, version_spec,
        installed)`` triples, and ``import_error`` is the first ImportError
        seen.

    """
    missing: list[tuple[str, str]] = []
    mismatches: list[tuple[str, str, str]] = []
    import_error: ImportError | None = None

    for install_name, import_name, version_spec in requirements:
        try:
            # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            import_error = import_error or e
            continue

        if not version_spec:
            continue
        found = installed_version(install_name)
        try:
            satisfied = found is not None and SpecifierSet(version_spec).contains(Version(found), prereleases=True)
        except InvalidVersion:
            satisfied = False
        if not satisfied:
            mismatches.append((install_name, version_spec, found or "unknown"))

    return missing, mismatches, import_error


def requires_dependencies(feature_name: str, packages: list[Requirement]) -> Callable:
    """Check required packages before every call of the decorated function.

    Parameters
    ----------
    feature_name : str
        Feature named in the error message ("markdown", "jinja").
    packages : list of (install_name, import_name, version_spec)
        Packages the function imports.

    Raises
    ------
    DependencyError
        If a package is missing or its version does not satisfy its specifier.

    Examples
    --------
        >>> @requires_dependencies("markdown", [("mistune", "mistune", ">=3.0.0")])
        ... def compile_markdown(text):
        ...     import mistune
        ...     return mistune.html(text)

    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing, mismatches, import_error = check_requirements(packages)
            if missing or mismatches:
                raise DependencyError(
                    feature_name=feature_name,
                    missing_packages=missing,
                    version_mismatches=mismatches,
                    original_import_error=import_error,
                ) from import_error
            return func(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log the time spent in the block at DEBUG level.

    Nothing is measured when the logger is not enabled for DEBUG.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.debug("%s completed in %.4fs", operation, time.perf_counter() - start)
