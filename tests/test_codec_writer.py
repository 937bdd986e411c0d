"""Tests for the canonical declaration writer."""

import codecs
import io

import pytest

from bundle import Dependency, DependencyInformation, DependencyList, Identifier
from codec import format_dependency_information, format_metadata_value, parse, write
from versioning import parse_version_range

from test_codec_reader import DECLARING, ESCAPER, MULTILINE_METADATA


def single(bundle, range_text, kinds, **metadata):
    builder = Dependency.builder().set_range(parse_version_range(range_text))
    for kind in kinds:
        builder.add_kind(kind)
    for name, value in metadata.items():
        builder.add_metadata(name, value)
    return DependencyInformation.create({Identifier.parse(bundle): DependencyList.create([builder.build()])})


class TestFormat:
    """Canonical text output."""

    def test_layout(self):
        info = single("b", "[1,2)", ["classpath"], optional="true")
        assert format_dependency_information(info) == "b\n\tclasspath: [1, 2)\n\t\toptional: true\n"

    def test_kinds_sorted(self):
        info = single("b-q", "1", ["runtime", "main"])
        assert format_dependency_information(info) == "b-q\n\tmain, runtime: 1\n"

    def test_empty_value(self):
        info = single("b", "1", ["k"], note="")
        assert format_dependency_information(info) == "b\n\tk: 1\n\t\tnote:\n"

    def test_empty_information(self):
        assert format_dependency_information(DependencyInformation.EMPTY) == ""

    @pytest.mark.parametrize("value,expected", [
        ("", ""),
        ("abc", "abc"),
        ("a b", "a b"),
        ("x\\", "x\\"),
        (" a", '" a"'),
        ("a\t", '"a\t"'),
        ('"q', '""q"'),
        ('q"', 'q"'),
        ("1\n2", '"1\n2"'),
        ('1"\n2', '"1"\\\n2"'),
        ('1\\\n2', '"1\\\\\n2"'),
        ("\n", '"\\\n"'),
        ("1\r\n2", '"1\n2"'),
    ])
    def test_format_metadata_value(self, value, expected):
        assert format_metadata_value(value) == expected


class TestWrite:
    """Stream handling."""

    INFO = single("b", "1", ["k"], note="café")

    def test_returns_text_without_stream(self):
        assert write(self.INFO) == "b\n\tk: 1\n\t\tnote: café\n"

    def test_text_stream(self):
        out = io.StringIO()
        assert write(self.INFO, out) is None
        assert out.getvalue() == write(self.INFO)

    def test_binary_stream(self):
        out = io.BytesIO()
        write(self.INFO, out)
        assert out.getvalue() == "b\n\tk: 1\n\t\tnote: café\n".encode("utf-8")
        assert not out.closed

    def test_none_rejected(self):
        with pytest.raises(TypeError):
            write(None)

    def test_stream_writer_wrapping_bytes(self):
        raw = io.BytesIO()
        write(self.INFO, codecs.getwriter("utf-8")(raw))
        assert raw.getvalue() == write(self.INFO).encode("utf-8")

    def test_duck_typed_text_stream(self):
        class Collector:
            def __init__(self):
                self.parts = []

            def write(self, text):
                if not isinstance(text, str):
                    raise TypeError("str expected")
                self.parts.append(text)

        out = Collector()
        write(self.INFO, out)
        assert "".join(out.parts) == write(self.INFO)


class TestRoundTrip:
    """Writing and reading back yields equal declarations."""

    def test_single_dependency(self):
        info = single("b", "[1,2)", ["classpath"], optional="true")
        assert parse(write(info)) == info

    @pytest.mark.parametrize("text", [MULTILINE_METADATA, ESCAPER])
    def test_fixture_files(self, text):
        info = parse(text, DECLARING)
        assert parse(write(info), DECLARING) == info

    def test_awkward_values(self):
        values = [
            " ", "a\n", "\n\n", "x\\", '"', 'a"\nb', "  \t\n  ",
            "tail\\\nx", 'q" \nz', 'a\nb"c', "a\n \nb", '"a\\', " x\\",
        ]
        metadata = {f"m{i}": value for i, value in enumerate(values)}
        info = single("b", "{[1) & (3] | 5}", ["k"], **metadata)
        reread = parse(write(info))
        assert reread == info
        (d,) = reread.get_dependency_list(Identifier.parse("b"))
        assert dict(d.metadata) == metadata

    def test_bytes_round_trip(self):
        info = single("b-x", "[2]", ["a", "b"], note="multi\nline")
        out = io.BytesIO()
        write(info, out)
        assert parse(out.getvalue()) == info
