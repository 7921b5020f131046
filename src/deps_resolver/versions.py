"""Ordered, duplicate-free collections of semantic versions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from semantic_version import Version

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


def to_version(version: str | Version) -> Version:
    """Parse `version` if it is a string, otherwise return it unchanged."""
    if isinstance(version, str):
        return Version(version)
    if not isinstance(version, Version):
        msg = f"Expected a semantic version, got {version!r}"
        raise TypeError(msg)
    return version


class VersionSet:
    """An ordered set of versions with set algebra.

    Membership is decided by value: two distinct `Version` objects for the same
    version are the same member.  Iteration follows insertion order until the
    set is sorted with `reverse_sort()`.
    """

    __slots__ = ("_members", "_versions")

    def __init__(self, versions: Iterable[str | Version] = ()) -> None:
        """Initialize the set, skipping duplicate versions."""
        self._versions: list[Version] = []
        self._members: set[Version] = set()
        for version in versions:
            self.add(version)

    def add(self, version: str | Version) -> bool:
        """Add a version to the set.

        Returns:
            True if the version was added, False if an equal version was already present

        """
        version = to_version(version)
        if version in self._members:
            return False
        self._members.add(version)
        self._versions.append(version)
        return True

    def __len__(self) -> int:
        """Return the number of versions in the set."""
        return len(self._versions)

    def __iter__(self) -> Iterator[Version]:
        """Iterate over the versions in their current order."""
        yield from self._versions

    def __contains__(self, version: object) -> bool:
        """Check if an equal version is in the set."""
        if isinstance(version, str):
            version = Version(version)
        return version in self._members

    def __eq__(self, other: object) -> bool:
        """Check if both sets hold the same versions, regardless of order."""
        return isinstance(other, VersionSet) and self._members == other._members

    # mutable through add(), so not hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Get the representation of the set."""
        return f"{self.__class__.__name__}([{', '.join(repr(str(v)) for v in self._versions)}])"

    def __str__(self) -> str:
        """Get the string representation of the set."""
        return "{" + ", ".join(map(str, self._versions)) + "}"

    def intersection(self, other: VersionSet) -> VersionSet:
        """Return a new set with the versions present in both sets, in this set's order."""
        return VersionSet(v for v in self._versions if v in other._members)  # noqa: SLF001

    def union(self, other: VersionSet) -> VersionSet:
        """Return a new set with the versions of this set followed by the new versions of `other`."""
        ret = self.copy()
        for version in other:
            ret.add(version)
        return ret

    __and__ = intersection
    __or__ = union

    def copy(self) -> VersionSet:
        """Copy the set."""
        ret = VersionSet()
        ret._versions = list(self._versions)
        ret._members = set(self._members)
        return ret

    def reverse_sort(self) -> VersionSet:
        """Sort the set newest-first, in place.

        Returns:
            Self for method chaining

        """
        self._versions.sort(reverse=True)
        return self

    def sorted_descending(self) -> VersionSet:
        """Return a newest-first copy of the set."""
        return self.copy().reverse_sort()

    def newest(self) -> Version | None:
        """Return the newest version in the set, or None if the set is empty."""
        if not self._versions:
            return None
        return max(self._versions)
