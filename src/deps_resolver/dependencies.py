"""Dependencies module - provides a unified interface to the resolution API.

The implementation is split into several focused modules:
- versions: Ordered version sets and their algebra
- models: Core data classes (UniqueLibrary, DependencyEdge, Configuration, Available)
- graph: The library index of dependency edges
- errors: Resolution failures
- resolver: The backtracking search
"""

from semantic_version import Version

from .errors import (
    ExhaustedCandidates,
    IncompatibleWithChosen,
    NoVersionsAvailable,
    ResolutionCancelled,
    ResolutionError,
    ResolverError,
    Starved,
)
from .graph import LibraryIndex
from .models import (
    Available,
    Configuration,
    DependencyEdge,
    LibraryName,
    UniqueLibrary,
)
from .resolver import Resolver, TraceStep, resolve
from .versions import VersionSet

__all__ = [
    "Available",
    "Configuration",
    "DependencyEdge",
    "ExhaustedCandidates",
    "IncompatibleWithChosen",
    "LibraryIndex",
    "LibraryName",
    "NoVersionsAvailable",
    "ResolutionCancelled",
    "ResolutionError",
    "ResolverError",
    "Resolver",
    "Starved",
    "TraceStep",
    "UniqueLibrary",
    "Version",
    "VersionSet",
    "resolve",
]
