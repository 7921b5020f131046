"""Backtracking search for a consistent assignment of library versions."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from tqdm import tqdm

from .errors import (
    ExhaustedCandidates,
    IncompatibleWithChosen,
    NoVersionsAvailable,
    ResolutionCancelled,
    ResolutionError,
    Starved,
)
from .models import Available, Configuration, LibraryName

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from semantic_version import Version

    from .graph import LibraryIndex
    from .versions import VersionSet


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraceStep:
    """A snapshot of the search state at one step."""

    assignment: Configuration
    constraints: Available
    worklist: tuple[LibraryName, ...]


@dataclass
class _Choice:
    """A library whose candidate versions are being tried, with the state it branches from."""

    mapped: Configuration
    avail: Available
    rest: tuple[LibraryName, ...]
    library: LibraryName
    versions: Iterator[Version]
    failure: ExhaustedCandidates
    current: Version | None = None

    def reject(self, error: ResolutionError) -> None:
        logger.debug("Rejected %s@%s: %s", self.library, self.current, error)
        self.failure.add_cause(self.current, error)  # type: ignore[arg-type]


class Resolver:
    """Find a single mutually-compatible version for each requested library.

    The search is greedy first-fit with backtracking: candidates are tried
    newest-first and the first complete assignment found is returned.
    """

    def __init__(
        self,
        index: LibraryIndex,
        *,
        timeout: float | None = None,
        cancel: Callable[[], bool] | None = None,
        trace: Callable[[TraceStep], None] | None = None,
        show_progress: bool = False,
    ) -> None:
        """Initialize the resolver.

        Args:
            index: The library index to resolve against; it is only read
            timeout: Abort the search with `ResolutionCancelled` after this many seconds
            cancel: Abort the search with `ResolutionCancelled` once this returns True
            trace: Called with the search state at every step
            show_progress: Display a progress counter of the candidates tried

        """
        self.index: LibraryIndex = index
        self.timeout: float | None = timeout
        self.cancel: Callable[[], bool] | None = cancel
        self.trace: Callable[[TraceStep], None] | None = trace
        self.show_progress: bool = show_progress
        self._deadline: float | None = None
        self._progress: tqdm | None = None

    def resolve(self, *libraries: str) -> Configuration:
        """Resolve a version for each of `libraries` and everything they depend on.

        Raises:
            ResolutionError: if no consistent assignment exists
            ResolutionCancelled: if the timeout expired or the cancel signal was set

        """
        worklist = [LibraryName(name) for name in dict.fromkeys(libraries)]
        logger.info("Resolving %s", ", ".join(worklist))
        self._deadline = None if self.timeout is None else time.monotonic() + self.timeout
        try:
            with tqdm(
                desc=f"resolving {', '.join(worklist)}",
                leave=False,
                unit=" candidates",
                disable=not self.show_progress,
            ) as t:
                self._progress = t
                configuration = self.resolve_from(Configuration(), Available(), worklist)
        finally:
            self._progress = None
        logger.info("Resolved %s", configuration)
        return configuration

    def _check_cancelled(self) -> None:
        if self._deadline is not None and time.monotonic() >= self._deadline:
            msg = f"Resolution timed out after {self.timeout} seconds"
            raise ResolutionCancelled(msg)
        if self.cancel is not None and self.cancel():
            msg = "Resolution was cancelled"
            raise ResolutionCancelled(msg)

    def candidates(self, library: LibraryName, constraints: Available) -> VersionSet:
        """Return the versions still possible for `library`, newest first."""
        if library in constraints:
            return constraints[library].sorted_descending()
        # unconstrained: any version known to the index is still possible
        return self.index.versions_of(library)

    def resolve_from(
        self,
        mapped: Configuration,
        avail: Available,
        rest: Sequence[LibraryName],
    ) -> Configuration:
        """Extend the assignment `mapped` to every library in `rest`.

        The pending choices are kept on an explicit stack, one per library
        being decided, so the depth of the search is not limited by the
        interpreter's recursion limit.  Each choice keeps the assignment and
        constraints it branched from; candidates work on clones of them.

        Args:
            mapped: Libraries whose versions have already been chosen
            avail: Constraints on the possible versions of the remaining libraries
            rest: Libraries whose versions still need to be decided

        """
        stack: list[_Choice] = []
        step: tuple[Configuration, Available, tuple[LibraryName, ...]] | None = (mapped, avail, tuple(rest))
        while True:
            if step is not None:
                mapped, avail, worklist = step
                step = None
                logger.debug("Mapped: %s", mapped)
                logger.debug("Avail: %s", avail)
                logger.debug("Rest: %s", worklist)
                if self.trace is not None:
                    self.trace(TraceStep(assignment=mapped, constraints=avail, worklist=worklist))

                # Nothing left to process...we are done!
                if not worklist:
                    return mapped

                lib = worklist[0]
                versions = self.candidates(lib, avail)
                if len(versions) == 0:
                    if not stack:
                        raise NoVersionsAvailable(lib)
                    stack[-1].reject(NoVersionsAvailable(lib))
                else:
                    stack.append(
                        _Choice(mapped, avail, worklist[1:], lib, iter(versions), ExhaustedCandidates(lib))
                    )

            choice = stack[-1]
            step = self._next_candidate(choice)
            if step is None:
                stack.pop()
                if not stack:
                    raise choice.failure
                stack[-1].reject(choice.failure)

    def _next_candidate(
        self, choice: _Choice
    ) -> tuple[Configuration, Available, tuple[LibraryName, ...]] | None:
        """Advance `choice` to its next acceptable candidate; None once they are all rejected."""
        for ver in choice.versions:
            self._check_cancelled()
            if self._progress is not None:
                self._progress.update(1)
            logger.debug("Considering version %s of %s", ver, choice.library)
            choice.current = ver
            try:
                return self._try_candidate(choice.mapped, choice.avail, choice.rest, choice.library, ver)
            except ResolutionError as e:
                choice.reject(e)
        return None

    def _try_candidate(
        self,
        mapped: Configuration,
        avail: Available,
        rest: tuple[LibraryName, ...],
        lib: LibraryName,
        ver: Version,
    ) -> tuple[Configuration, Available, tuple[LibraryName, ...]]:
        config = mapped.clone()
        # fixed before the checks below so that a dependency on itself is checked too
        config[lib] = ver
        depvers = self.index.dependencies_of(lib, ver)

        # Have any of this library's dependencies already been chosen?
        for dep, allowed in sorted(depvers.items()):
            if dep in config and config[dep] not in allowed:
                raise IncompatibleWithChosen(dep, config[dep], allowed)

        # The chosen dependencies are compatible, so they need no further tracking
        for chosen in config:
            depvers.pop(chosen, None)

        newlibs = tuple(dep for dep in sorted(depvers) if dep not in rest)

        constraints = avail.merge(depvers)
        # this library's version is now fixed rather than constrained
        constraints.pop(lib, None)

        empty = constraints.starved_libraries()
        if empty:
            raise Starved(empty)

        return config, constraints, newlibs + rest


def resolve(index: LibraryIndex, *libraries: str, **options: object) -> Configuration:
    """Resolve `libraries` against `index`; `options` are passed to `Resolver`."""
    return Resolver(index, **options).resolve(*libraries)  # type: ignore[arg-type]
