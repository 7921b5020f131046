"""deps-resolver exception hierarchy.

All failures of a search branch inherit from ResolutionError.  The resolver
recovers from them by trying the next candidate version; only the error that
survives every candidate of the requested libraries reaches the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from semantic_version import Version

    from .models import LibraryName
    from .versions import VersionSet


class ResolverError(Exception):
    """Base exception for all deps-resolver errors."""


class ResolutionError(ResolverError, ValueError):
    """Raised when no consistent assignment exists for a branch of the search."""


class IncompatibleWithChosen(ResolutionError):
    """A candidate requires a version of a dependency other than the one already chosen."""

    def __init__(self, dependency_name: LibraryName, chosen: Version, allowed: VersionSet) -> None:
        self.dependency_name: LibraryName = dependency_name
        self.chosen: Version = chosen
        self.allowed: VersionSet = allowed
        super().__init__(f"No compatible version of {dependency_name}: chose {chosen}, requires one of {allowed!s}")


class ExhaustedCandidates(ResolutionError):
    """Every candidate version of a library was tried and failed.

    `causes` pairs a candidate with the most specific reason it failed, in the
    order the candidates were tried.  A candidate that failed because a later
    library exhausted its own candidates is recorded with that library's root
    causes instead, so the error never holds a nested tree.  At most
    `max_causes` causes are kept and none of them keeps its traceback.
    """

    max_causes: int = 32

    def __init__(self, library_name: LibraryName, causes: Iterable[tuple[Version, ResolutionError]] = ()) -> None:
        self.library_name: LibraryName = library_name
        self.causes: list[tuple[Version, ResolutionError]] = []
        for version, cause in causes:
            if not self.add_cause(version, cause):
                break
        super().__init__(f"No compatible versions of {library_name} found")

    def add_cause(self, version: Version, cause: ResolutionError) -> bool:
        """Record why `version` failed; returns False once no more causes are kept."""
        if isinstance(cause, ExhaustedCandidates):
            specific: list[ResolutionError] = cause.root_causes()
        else:
            specific = [cause.with_traceback(None)]
        for error in specific:
            if len(self.causes) >= self.max_causes:
                return False
            self.causes.append((version, error))
        return len(self.causes) < self.max_causes

    def root_causes(self) -> list[ResolutionError]:
        """Return the innermost failures that are not themselves exhausted candidates."""
        return [cause for _, cause in self.causes]


class NoVersionsAvailable(ResolutionError):
    """A library has no known or no remaining candidate versions."""

    def __init__(self, library_name: LibraryName) -> None:
        self.library_name: LibraryName = library_name
        super().__init__(f"No versions of {library_name} are available")


class Starved(ResolutionError):
    """Merging new constraints left libraries without any possible version."""

    def __init__(self, library_names: Iterable[LibraryName]) -> None:
        self.library_names: list[LibraryName] = list(library_names)
        super().__init__(f"No compatible versions of: {', '.join(self.library_names)}")


class ResolutionCancelled(ResolverError):
    """The search was aborted by its deadline or cancel signal."""
