"""Tests for Go identifier naming."""

import pytest

from xsdgen.codegen.core.naming import NamingCase, split_words
from xsdgen.codegen.languages.go.naming import (
    create_go_sanitizer,
    go_field_name,
    go_struct_name,
    lint_title,
    validate_go_package_name,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("tagId", ["tag", "Id"]),
        ("XMLHttpRequest", ["XML", "Http", "Request"]),
        ("foo-bar_baz qux", ["foo", "bar", "baz", "qux"]),
        ("v2Name", ["v2", "Name"]),
        ("utf8Text", ["utf8", "Text"]),
        ("", []),
    ],
)
def test_split_words(name, expected):
    assert split_words(name) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("foo cpu baz", "FooCPUBaz"),
        ("test Id", "TestID"),
        ("json and html", "JSONAndHTML"),
        ("tagId", "TagID"),
        ("url", "URL"),
        ("http-equiv", "HTTPEquiv"),
        ("title", "Title"),
    ],
)
def test_lint_title(name, expected):
    assert lint_title(name) == expected


class TestStructNames:
    """Element names to Go type names."""

    @pytest.mark.parametrize(
        "name, prefix, exported, expected",
        [
            ("titleList", "", False, "titleList"),
            ("title", "", False, "title"),
            ("tagId", "", False, "tagID"),
            ("URL", "", False, "url"),
            ("url", "xxx", True, "XxxURL"),
            ("url", "xxx", False, "xxxURL"),
            ("tagId", "", True, "TagID"),
            ("book-item", "", False, "bookItem"),
        ],
    )
    def test_prefix_and_export(self, name, prefix, exported, expected):
        assert go_struct_name(name, prefix, exported) == expected

    @pytest.mark.parametrize("name", ["type", "string", "map", "int"])
    def test_reserved_words_get_suffix(self, name):
        assert go_struct_name(name) == f"{name}_"

    def test_exported_names_are_never_reserved(self):
        assert go_struct_name("type", exported=True) == "Type"

    def test_leading_digit(self):
        assert go_struct_name("1st") == "x1st"
        assert go_struct_name("1st", exported=True) == "X1st"
        assert go_field_name("3d") == "X3d"


class TestFieldNames:
    """Attribute and element names to Go field names."""

    def test_fields_are_exported(self):
        assert go_field_name("language") == "Language"
        assert go_field_name("tagId") == "TagID"

    def test_sanitizer_deduplicates(self):
        sanitizer = create_go_sanitizer()

        first = sanitizer.sanitize_name("lang", NamingCase.PASCAL_CASE)
        second = sanitizer.sanitize_name("Lang", NamingCase.PASCAL_CASE)
        sanitizer.reset_used_names()
        third = sanitizer.sanitize_name("lang", NamingCase.PASCAL_CASE)

        assert (first, second, third) == ("Lang", "Lang_1", "Lang")

    def test_empty_name(self):
        assert go_field_name("---") == "Field"


class TestPackageNames:
    """Package clause validation."""

    @pytest.mark.parametrize("name", ["main", "models", "xsd2", ""])
    def test_valid(self, name):
        assert validate_go_package_name(name) == []

    @pytest.mark.parametrize("name", ["Models", "func", "my-pkg", "2fast"])
    def test_invalid(self, name):
        assert validate_go_package_name(name) != []
