"""The library index: every known (library, version) and what it depends on."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import networkx as nx
from graphviz import Digraph

from .models import Available, Configuration, DependencyEdge, LibraryName, UniqueLibrary
from .versions import VersionSet, to_version

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from semantic_version import Version

logger = logging.getLogger(__name__)


class LibraryIndex:
    """A directed multigraph of dependency edges between unique libraries.

    Nodes are `UniqueLibrary` values, so versions are matched by value rather
    than by identity.  Parallel edges are kept: adding the same edge twice is
    harmless but the edge is not collapsed.
    """

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._graph: nx.MultiDiGraph = nx.MultiDiGraph()
        # versions that are the source of an edge or were declared explicitly
        self._known: dict[LibraryName, VersionSet] = {}

    def _declare(self, library: UniqueLibrary) -> None:
        self._graph.add_node(library)
        if library.name not in self._known:
            self._known[library.name] = VersionSet()
        self._known[library.name].add(library.version)

    def add_version(self, library: str, version: str | Version) -> UniqueLibrary:
        """Declare that a version of a library exists, whether or not it has dependencies."""
        unique = UniqueLibrary(LibraryName(library), to_version(version))
        self._declare(unique)
        return unique

    def add_edge(
        self,
        library: str,
        library_version: str | Version,
        dependency: str,
        dependency_version: str | Version,
    ) -> DependencyEdge:
        """Record that `library@library_version` is compatible with `dependency@dependency_version`.

        Several edges from the same library version to the same dependency express
        that any of their dependency versions is acceptable.
        """
        edge = DependencyEdge(
            library=UniqueLibrary(LibraryName(library), to_version(library_version)),
            depends_on=UniqueLibrary(LibraryName(dependency), to_version(dependency_version)),
        )
        self._declare(edge.library)
        self._graph.add_edge(edge.library, edge.depends_on)
        return edge

    def add_from_string(self, description: str) -> UniqueLibrary:
        """Add a library version, or one of its dependency edges, from a string description.

        For example:
            left-pad@1.3.0
            express@4.17.1 -> debug@2.6.9

        Args:
            description: Library or dependency edge description string

        Returns:
            The declared library version

        """
        if "->" in description:
            edge = DependencyEdge.from_string(description)
            self._declare(edge.library)
            self._graph.add_edge(edge.library, edge.depends_on)
            return edge.library
        library = UniqueLibrary.from_string(description)
        self._declare(library)
        return library

    @property
    def edge_count(self) -> int:
        """Number of edges added, repeats included."""
        return int(self._graph.number_of_edges())

    def edges(self) -> Iterator[DependencyEdge]:
        """Iterate over every edge in the index."""
        for library, depends_on in self._graph.edges():
            yield DependencyEdge(library=library, depends_on=depends_on)

    def libraries(self) -> list[LibraryName]:
        """Return the names of all libraries with at least one known version."""
        return sorted(self._known)

    def versions_of(self, library: str) -> VersionSet:
        """Build a list of all versions of a library known to the index, latest to earliest.

        A version is known once it has a dependency edge or was declared with
        `add_version()`; being the target of an edge is not enough.
        """
        known = self._known.get(LibraryName(library))
        if known is None:
            return VersionSet()
        return known.sorted_descending()

    def dependencies_of(self, library: str, version: str | Version) -> Available:
        """Return, for each dependency of `library@version`, the union of its acceptable versions."""
        node = UniqueLibrary(LibraryName(library), to_version(version))
        depvers = Available()
        if node not in self._graph:
            return depvers
        for _, depends_on in self._graph.out_edges(node):
            if depends_on.name not in depvers:
                depvers[depends_on.name] = VersionSet()
            depvers[depends_on.name].add(depends_on.version)
        return depvers

    def violations(self, configuration: Configuration) -> list[tuple[UniqueLibrary, LibraryName]]:
        """Find every dependency that `configuration` leaves unsatisfied.

        Returns:
            `(library, dependency name)` pairs where the dependency is either
            missing from the configuration or assigned a version the library does not accept

        """
        ret: list[tuple[UniqueLibrary, LibraryName]] = []
        for library in configuration.unique_libraries():
            for dep, allowed in sorted(self.dependencies_of(library.name, library.version).items()):
                if configuration.get(dep) not in allowed:
                    ret.append((library, dep))
        return ret

    def is_consistent(self, configuration: Configuration) -> bool:
        """Check that every chosen library has all of its dependencies satisfied."""
        return not self.violations(configuration)

    def resolved_graph(self, configuration: Configuration) -> nx.DiGraph:
        """Return the dependency graph between the libraries chosen in `configuration`."""
        chosen = configuration.unique_libraries()
        return nx.DiGraph(self._graph.subgraph(chosen))

    def to_dot(self, configuration: Configuration, roots: Iterable[str] = ()) -> Digraph:
        """Render a Graphviz Dot graph of a resolved configuration.

        Libraries named in `roots` are drawn as double octagons.
        """
        roots = set(roots)
        if roots:
            dot = Digraph(comment=f"Resolution of {', '.join(sorted(roots))}")
        else:
            dot = Digraph()
        graph = self.resolved_graph(configuration)
        library_ids: dict[UniqueLibrary, str] = {}
        for library in configuration.unique_libraries():
            library_id = f"library{len(library_ids)}"
            library_ids[library] = library_id
            shape = "doubleoctagon" if library.name in roots else "rectangle"
            dot.node(library_id, label=str(library), shape=shape)
        for library, depends_on in sorted(graph.edges()):
            dot.edge(library_ids[library], library_ids[depends_on])
        return dot

    def __len__(self) -> int:
        """Return number of known library versions."""
        return sum(len(versions) for versions in self._known.values())

    def __contains__(self, library: object) -> bool:
        """Check if a unique library is a known version."""
        return isinstance(library, UniqueLibrary) and library.version in self._known.get(library.name, ())

    def __repr__(self) -> str:
        """Get the representation of the index."""
        return f"<{self.__class__.__name__} libraries={len(self._known)} edges={self.edge_count}>"
