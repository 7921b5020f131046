"""Core data models for dependency resolution."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, NewType

from semantic_version import Version

from .versions import VersionSet

if TYPE_CHECKING:
    from collections.abc import Mapping

LibraryName = NewType("LibraryName", str)
"""The unit of resolution: one library, any version."""


@dataclass(frozen=True, order=True)
class UniqueLibrary:
    """A library name together with one exact version."""

    name: LibraryName
    version: Version

    def __post_init__(self) -> None:
        """Parse a string version."""
        if isinstance(self.version, str):
            object.__setattr__(self, "version", Version(self.version))

    @classmethod
    def from_string(cls, description: str) -> UniqueLibrary:
        """Create a unique library from a string description.

        Args:
            description: String in format "name@version", for example "left-pad@1.3.0"

        Returns:
            New UniqueLibrary instance

        """
        try:
            name, version_string = description.strip().rsplit("@", 1)
            if not name:
                msg = "missing library name"
                raise ValueError(msg)  # noqa: TRY301
            version = Version.coerce(version_string.strip())
        except ValueError as e:
            msg = f"Can not parse library description <{description}>"
            raise ValueError(msg) from e
        return cls(name=LibraryName(name.strip()), version=version)

    def __str__(self) -> str:
        """Return string representation of the library."""
        return f"{self.name}@{self.version}"


@dataclass(frozen=True)
class DependencyEdge:
    """An edge in the dependency graph: `library` requires `depends_on`."""

    library: UniqueLibrary
    depends_on: UniqueLibrary

    @classmethod
    def from_string(cls, description: str) -> DependencyEdge:
        """Create an edge from a string in format "name@version -> dependency@version"."""
        if description.count("->") != 1:
            msg = f"Can not parse dependency edge <{description}>"
            raise ValueError(msg)
        library, depends_on = description.split("->")
        return cls(library=UniqueLibrary.from_string(library), depends_on=UniqueLibrary.from_string(depends_on))

    def __str__(self) -> str:
        """Return string representation of the edge."""
        return f"{self.library} -> {self.depends_on}"


class Configuration(dict[LibraryName, Version]):
    """A (partial) assignment of exactly one version to each library."""

    def clone(self) -> Configuration:
        """Copy the assignment so that a search branch can extend it privately."""
        return Configuration(self)

    def unique_libraries(self) -> list[UniqueLibrary]:
        """Return the chosen libraries, sorted by name."""
        return [UniqueLibrary(name, version) for name, version in sorted(self.items())]

    def to_obj(self) -> dict[str, str]:
        """Convert the assignment to dictionary representation."""
        return {name: str(version) for name, version in sorted(self.items())}

    def dumps(self) -> str:
        """Serialize the assignment to JSON string."""
        return json.dumps(self.to_obj())

    def __str__(self) -> str:
        """Return string representation of the assignment."""
        return ", ".join(map(str, self.unique_libraries()))


class Available(dict[LibraryName, VersionSet]):
    """The versions that remain possible for each constrained library.

    A library missing from the mapping is unconstrained: any version known to the
    index is still possible.
    """

    def clone(self) -> Available:
        """Shallow copy; the version sets themselves are never mutated once stored."""
        return Available(self)

    def merge(self, constraints: Mapping[LibraryName, VersionSet]) -> Available:
        """Combine these constraints with newly discovered ones.

        Libraries constrained on only one side keep their set; libraries
        constrained on both sides get the intersection.
        """
        ret = self.clone()
        for name, versions in constraints.items():
            if name in ret:
                ret[name] = ret[name].intersection(versions)
            else:
                ret[name] = versions
        return ret

    def starved_libraries(self) -> list[LibraryName]:
        """Return the libraries that have no possible version left."""
        return sorted(name for name, versions in self.items() if len(versions) == 0)

    def __str__(self) -> str:
        """Return string representation of the constraints."""
        return ", ".join(f"{name}: {versions!s}" for name, versions in sorted(self.items()))
