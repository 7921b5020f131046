"""Property-based tests for the resolver over random small library universes.

- Soundness: every assignment returned satisfies every dependency edge of the chosen versions
- Completeness: the resolver fails only when no consistent assignment exists
- Preference: an unconstrained requested library gets its newest version
"""

from __future__ import annotations

import itertools

from hypothesis import given
from hypothesis import strategies as st

from deps_resolver.dependencies import (
    Configuration,
    LibraryIndex,
    LibraryName,
    ResolutionError,
    Resolver,
    Version,
)

NAMES = ["a", "b", "c"]
VERSIONS = ["1.0.0", "1.1.0-beta", "2.0.0"]

unique_libraries = st.tuples(st.sampled_from(NAMES), st.sampled_from(VERSIONS))


@st.composite
def closed_indexes(draw: st.DrawFn) -> LibraryIndex:
    """Generate an index where every version mentioned by an edge is also declared."""
    index = LibraryIndex()
    for name, version in draw(st.lists(unique_libraries, min_size=1, max_size=6)):
        index.add_version(name, version)
    for (name, version), (dep, dep_version) in draw(
        st.lists(st.tuples(unique_libraries, unique_libraries), max_size=8)
    ):
        index.add_edge(name, version, dep, dep_version)
        index.add_version(dep, dep_version)
    return index


requests = st.lists(st.sampled_from(NAMES), min_size=1, max_size=3)


def brute_force(index: LibraryIndex, roots: list[str]) -> list[Configuration]:
    """Every assignment over known versions that covers `roots` and satisfies all its dependencies."""
    options = [[None, *index.versions_of(name)] for name in NAMES]
    solutions = []
    for choice in itertools.product(*options):
        configuration = Configuration(
            {LibraryName(name): version for name, version in zip(NAMES, choice) if version is not None}
        )
        if all(root in configuration for root in roots) and index.is_consistent(configuration):
            solutions.append(configuration)
    return solutions


@given(index=closed_indexes(), roots=requests)
def test_resolution_is_sound(index: LibraryIndex, roots: list[str]) -> None:
    try:
        result = Resolver(index).resolve(*roots)
    except ResolutionError:
        return
    assert all(root in result for root in roots)
    assert index.violations(result) == []
    for name, version in result.items():
        assert version in index.versions_of(name)


@given(index=closed_indexes(), roots=requests)
def test_resolution_is_complete(index: LibraryIndex, roots: list[str]) -> None:
    solutions = brute_force(index, roots)
    try:
        result = Resolver(index).resolve(*roots)
    except ResolutionError:
        assert solutions == []
    else:
        assert result in solutions


@given(index=closed_indexes(), root=st.sampled_from(NAMES))
def test_unconstrained_library_gets_newest_version(index: LibraryIndex, root: str) -> None:
    versions = index.versions_of(root)
    if len(versions) == 0:
        return
    # the same versions without any dependencies
    independent = LibraryIndex()
    for version in versions:
        independent.add_version(root, version)
    assert Resolver(independent).resolve(root) == {root: versions.newest()}


@given(index=closed_indexes(), roots=requests)
def test_resolution_is_deterministic(index: LibraryIndex, roots: list[str]) -> None:
    def attempt() -> Configuration | type[ResolutionError]:
        try:
            return Resolver(index).resolve(*roots)
        except ResolutionError as e:
            return type(e)

    assert attempt() == attempt()


def test_brute_force_oracle() -> None:
    index = LibraryIndex()
    index.add_edge("a", "1.0.0", "b", "1.0.0")
    index.add_version("b", "1.0.0")
    index.add_version("b", "2.0.0")
    solutions = brute_force(index, ["a"])
    assert {"a": Version("1.0.0"), "b": Version("1.0.0")} in solutions
    assert {"a": Version("1.0.0"), "b": Version("1.0.0"), "c": Version("1.0.0")} not in solutions
    assert all(s.get(LibraryName("b")) != Version("2.0.0") for s in solutions)
