"""Tests for Dependency, DependencyList and DependencyInformation."""

import pytest

from bundle import (
    Dependency,
    DependencyInformation,
    DependencyList,
    FormatError,
    Identifier,
    StructuralError,
)
from bundle.dependency import is_valid_kind, is_valid_metadata_name
from versioning import parse_version_range


def dep(range_text="1.0", kinds=("runtime",), **metadata):
    builder = Dependency.builder().set_range(parse_version_range(range_text))
    for kind in kinds:
        builder.add_kind(kind)
    for name, value in metadata.items():
        builder.add_metadata(name, value)
    return builder.build()


class TestDependency:
    """Dependency values and their builder."""

    def test_kinds_sorted_and_unique(self):
        d = dep(kinds=("test", "main", "test"))
        assert d.kinds == ("main", "test")
        assert d.has_kind("main")
        assert not d.has_kind("other")
        assert not d.has_kind(None)

    def test_build_requires_range_and_kind(self):
        with pytest.raises(StructuralError):
            Dependency.builder().add_kind("runtime").build()
        with pytest.raises(StructuralError):
            Dependency.builder().set_range(parse_version_range("1")).build()

    @pytest.mark.parametrize("kind", ["run time", "a.b", "", "x:y"])
    def test_invalid_kind(self, kind):
        with pytest.raises(FormatError):
            Dependency.builder().add_kind(kind)

    @pytest.mark.parametrize("name", ["nest-kind", "NEST-Kind"])
    def test_reserved_kind_and_metadata(self, name):
        with pytest.raises(StructuralError):
            Dependency.builder().add_kind(name)
        with pytest.raises(StructuralError):
            Dependency.builder().add_metadata(name, "x")

    def test_invalid_metadata_name(self):
        with pytest.raises(FormatError):
            Dependency.builder().add_metadata("a.b", "x")

    def test_validators(self):
        assert is_valid_kind("class-path_1")
        assert not is_valid_kind(None)
        assert is_valid_metadata_name("jre-version")
        assert not is_valid_metadata_name("a b")

    def test_add_metadata_overwrites(self):
        d = Dependency.builder().set_range(parse_version_range("1")).add_kind("k") \
            .add_metadata("m", "1").add_metadata("m", "2").build()
        assert dict(d.metadata) == {"m": "2"}

    def test_optional_and_private(self):
        assert dep(optional="TRUE").is_optional()
        assert not dep(optional="yes").is_optional()
        assert not dep().is_optional()
        assert dep(private="true").is_private()

    def test_equality_ignores_metadata_order(self):
        a = dep(x="1", y="2")
        b = dep(y="2", x="1")
        assert a == b
        assert hash(a) == hash(b)
        assert dep(x="1") != dep(x="2")
        assert dep("1") != dep("2")

    def test_metadata_is_read_only(self):
        d = dep(x="1")
        with pytest.raises(TypeError):
            d.metadata["x"] = "2"

    def test_builder_copy(self):
        original = dep(kinds=("a",), x="1")
        copy = Dependency.builder(original).add_kind("b").build()
        assert copy.kinds == ("a", "b")
        assert dict(copy.metadata) == {"x": "1"}
        assert original.kinds == ("a",)
        cleared = Dependency.builder(original).clear_metadata().clear_kinds().add_kind("c").build()
        assert cleared.kinds == ("c",)
        assert not cleared.metadata


class TestDependencyList:
    """Ordered, duplicate-free dependency lists."""

    def test_create_dedups_keeping_order(self):
        a, b = dep("1"), dep("2")
        dlist = DependencyList.create([a, b, dep("1")])
        assert list(dlist) == [a, b]
        assert len(dlist) == 2

    def test_empty_is_shared(self):
        assert DependencyList.create([]) is DependencyList.EMPTY
        assert DependencyList.EMPTY.is_empty()

    def test_equality_is_order_insensitive(self):
        a, b = dep("1"), dep("2")
        assert DependencyList.create([a, b]) == DependencyList.create([b, a])

    def test_filter_identity_returns_self(self):
        dlist = DependencyList.create([dep("1"), dep("2")])
        assert dlist.filter(lambda d: d) is dlist

    def test_filter_drops_none(self):
        keep = dep("1")
        dlist = DependencyList.create([keep, dep("2", optional="true")])
        assert list(dlist.without_optionals()) == [keep]
        assert DependencyList.create([dep(optional="true")]).without_optionals() is DependencyList.EMPTY

    def test_has_optional_and_kinds(self):
        dlist = DependencyList.create([dep(kinds=("b",)), dep("2", kinds=("a", "b"), optional="true")])
        assert dlist.has_optional()
        assert dlist.all_present_kinds() == ("a", "b")


class TestDependencyInformation:
    """Mappings from target bundles to dependency lists."""

    def test_create_rejects_versioned_target(self):
        with pytest.raises(StructuralError):
            DependencyInformation.create({Identifier.parse("a-v1"): DependencyList.create([dep()])})

    def test_create_drops_empty_lists(self):
        info = DependencyInformation.create({
            Identifier.parse("a"): DependencyList.EMPTY,
            Identifier.parse("b"): DependencyList.create([dep()]),
        })
        assert list(info) == [Identifier.parse("b")]
        assert Identifier.parse("a") not in info
        assert info.get_dependency_list(Identifier.parse("a")) is None
        assert info.get_dependency_list(None) is None

    def test_empty_is_shared(self):
        assert DependencyInformation.create({}) is DependencyInformation.EMPTY
        assert DependencyInformation.create({Identifier.parse("a"): DependencyList.EMPTY}) is DependencyInformation.EMPTY

    def test_filter_identity_returns_self(self):
        info = DependencyInformation.create({Identifier.parse("a"): DependencyList.create([dep()])})
        assert info.filter(lambda _id, dlist: dlist) is info

    def test_without_optionals_drops_emptied_targets(self):
        required = DependencyList.create([dep()])
        info = DependencyInformation.create({
            Identifier.parse("a"): required,
            Identifier.parse("b"): DependencyList.create([dep(optional="true")]),
        })
        assert info.has_optional()
        stripped = info.without_optionals()
        assert list(stripped) == [Identifier.parse("a")]
        assert stripped.get_dependency_list(Identifier.parse("a")) is required
        assert not stripped.has_optional()

    def test_filter_to_nothing_is_empty(self):
        info = DependencyInformation.create({Identifier.parse("a"): DependencyList.create([dep()])})
        assert info.filter(lambda _id, _dlist: None) is DependencyInformation.EMPTY

    def test_dependencies_view_is_read_only(self):
        info = DependencyInformation.create({Identifier.parse("a"): DependencyList.create([dep()])})
        with pytest.raises(TypeError):
            info.dependencies[Identifier.parse("b")] = DependencyList.EMPTY

    def test_equality(self):
        def make():
            return DependencyInformation.create({Identifier.parse("A-q"): DependencyList.create([dep()])})
        assert make() == make()
        assert hash(make()) == hash(make())


@pytest.mark.parametrize("target", [
    Identifier("a", ("v1",)),
    Identifier("a", (), ("V1",)),
    Identifier.parse("a-q-v2.0"),
])
def test_information_rejects_targets_with_meta_qualifiers(target):
    with pytest.raises(StructuralError):
        DependencyInformation.create({target: DependencyList.create([dep()])})
