import json
from unittest import TestCase

import pytest

from deps_resolver.dependencies import (
    Available,
    Configuration,
    DependencyEdge,
    LibraryName,
    UniqueLibrary,
    Version,
    VersionSet,
)


def available(**constraints: list[str]) -> Available:
    return Available({LibraryName(name): VersionSet(versions) for name, versions in constraints.items()})


class TestUniqueLibrary(TestCase):
    def test_from_string(self) -> None:
        lib = UniqueLibrary.from_string("left-pad@1.3.0")
        assert lib.name == "left-pad"
        assert lib.version == Version("1.3.0")
        assert str(lib) == "left-pad@1.3.0"
        # versions are coerced like a resolver would
        assert UniqueLibrary.from_string(" left-pad @ 1.3 ").version == Version("1.3.0")
        # scoped names keep their leading @
        assert UniqueLibrary.from_string("@types/node@20.1.0").name == "@types/node"

    def test_from_string_errors(self) -> None:
        for description in ("left-pad", "@1.0.0", "left-pad@", "left-pad@banana"):
            with pytest.raises(ValueError, match="Can not parse library description"):
                UniqueLibrary.from_string(description)

    def test_value_semantics(self) -> None:
        a = UniqueLibrary(LibraryName("a"), Version("1.0.0"))
        b = UniqueLibrary(LibraryName("a"), "1.0.0")  # type: ignore[arg-type]
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1
        assert a < UniqueLibrary(LibraryName("a"), Version("1.0.1"))


class TestDependencyEdge(TestCase):
    def test_from_string(self) -> None:
        edge = DependencyEdge.from_string("express@4.17.1 -> debug@2.6.9")
        assert edge.library == UniqueLibrary.from_string("express@4.17.1")
        assert edge.depends_on == UniqueLibrary.from_string("debug@2.6.9")
        assert str(edge) == "express@4.17.1 -> debug@2.6.9"
        assert DependencyEdge.from_string(str(edge)) == edge

    def test_from_string_errors(self) -> None:
        for description in ("express@4.17.1", "a@1.0.0->b@1.0.0->c@1.0.0", "express@4.17.1->"):
            with pytest.raises(ValueError, match="Can not parse"):
                DependencyEdge.from_string(description)


class TestConfiguration(TestCase):
    def test_clone_is_independent(self) -> None:
        config = Configuration({LibraryName("a"): Version("1.0.0")})
        clone = config.clone()
        clone[LibraryName("b")] = Version("2.0.0")
        assert LibraryName("b") not in config
        assert isinstance(clone, Configuration)
        assert clone[LibraryName("a")] is config[LibraryName("a")]

    def test_serialization(self) -> None:
        config = Configuration({LibraryName("b"): Version("2.0.0"), LibraryName("a"): Version("1.0.0-rc.1")})
        assert config.to_obj() == {"a": "1.0.0-rc.1", "b": "2.0.0"}
        assert list(config.to_obj()) == ["a", "b"]
        assert json.loads(config.dumps()) == {"a": "1.0.0-rc.1", "b": "2.0.0"}
        assert str(config) == "a@1.0.0-rc.1, b@2.0.0"
        assert config.unique_libraries() == [
            UniqueLibrary.from_string("a@1.0.0-rc.1"),
            UniqueLibrary.from_string("b@2.0.0"),
        ]


class TestAvailable(TestCase):
    def test_merge_retains_new_libraries(self) -> None:
        merged = Available().merge(available(y=["1.0.0"]))
        assert merged == available(y=["1.0.0"])

    def test_merge_keeps_existing_libraries(self) -> None:
        merged = available(x=["1.0.0", "2.0.0"]).merge(Available())
        assert merged == available(x=["1.0.0", "2.0.0"])

    def test_merge_intersects_overlaps(self) -> None:
        avail = available(x=["1.0.0", "2.0.0"], y=["1.0.0", "1.1.0", "1.2.0"])
        merged = avail.merge(available(y=["1.1.0", "1.2.0", "2.0.0"], z=["0.1.0"]))
        assert merged == available(x=["1.0.0", "2.0.0"], y=["1.1.0", "1.2.0"], z=["0.1.0"])
        # the receiver is not modified
        assert avail == available(x=["1.0.0", "2.0.0"], y=["1.0.0", "1.1.0", "1.2.0"])
        assert isinstance(merged, Available)

    def test_starved_libraries(self) -> None:
        avail = available(x=["1.0.0"], y=["1.0.0"], z=["2.0.0"])
        assert avail.starved_libraries() == []
        merged = avail.merge(available(z=["1.0.0"], y=["2.0.0"]))
        assert merged.starved_libraries() == ["y", "z"]

    def test_clone_is_independent(self) -> None:
        avail = available(x=["1.0.0"])
        clone = avail.clone()
        del clone[LibraryName("x")]
        assert LibraryName("x") in avail

    def test_str(self) -> None:
        assert str(available(b=["1.0.0"], a=["2.0.0", "3.0.0"])) == "a: {2.0.0, 3.0.0}, b: {1.0.0}"
