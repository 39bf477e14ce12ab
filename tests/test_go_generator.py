"""Tests for Go struct generation."""

import pytest

from conftest import wrap_schema
from xsdgen.codegen import (
    generate_code,
    generate_from_file,
    generate_from_trees,
    quick_generate,
)
from xsdgen.codegen.core.config import ConfigError, GeneratorConfig
from xsdgen.codegen.languages.go import GoGenerator
from xsdgen.resolver import XmlAttrib, XmlTree, resolve_string
from xsdgen.xsd import SchemaLoaderError


def normalize(code: str) -> str:
    """Collapse whitespace so structs can be compared regardless of alignment."""
    return " ".join(code.split())


def generate(schema: str, **options) -> str:
    options.setdefault("package_name", "")
    options.setdefault("add_comments", False)
    return quick_generate(schema, **options)


TITLE_LIST_XSD = """<schema>
    <element name="titleList" type="titleListType">
    </element>
    <complexType name="titleListType">
        <sequence>
            <element name="title" type="originalTitleType" maxOccurs="unbounded" />
        </sequence>
    </complexType>
    <complexType name="originalTitleType">
        <simpleContent>
            <extension base="titleType">
                <attribute name="original" type="boolean">
                </attribute>
            </extension>
        </simpleContent>
    </complexType>
    <complexType name="titleType">
        <simpleContent>
            <restriction base="textType">
                <maxLength value="300" />
            </restriction>
        </simpleContent>
    </complexType>
    <complexType name="textType">
        <simpleContent>
            <extension base="string">
                <attribute name="language" type="language">
                </attribute>
            </extension>
        </simpleContent>
    </complexType>
</schema>"""

TAG_LIST_XSD = """<schema>
    <element name="tagList">
        <complexType>
            <sequence>
                <element name="tag" type="tagReferenceType" minOccurs="0" maxOccurs="unbounded" />
            </sequence>
        </complexType>
    </element>
    <complexType name="tagReferenceType">
        <simpleContent>
            <extension base="nidType">
                <attribute name="type" type="tagTypeType" use="required" />
            </extension>
        </simpleContent>
    </complexType>
    <simpleType name="nidType">
        <restriction base="string">
            <pattern value="[0-9a-zA-Z\\-]+" />
        </restriction>
    </simpleType>
    <simpleType name="tagTypeType">
        <restriction base="string">
        </restriction>
    </simpleType>
</schema>"""

TAG_REFERENCE_TYPE = """
    <complexType name="tagReferenceType">
        <simpleContent>
            <extension base="string">
                <attribute name="type" type="string" use="required" />
            </extension>
        </simpleContent>
    </complexType>
"""


class TestReferenceOutputs:
    """Structs generated for the reference schemas."""

    def test_title_list(self):
        code = generate(TITLE_LIST_XSD)

        assert normalize(code) == normalize(
            """
            type titleList struct {
                Title []title `xml:"title"`
            }

            type title struct {
                Language string `xml:"language,attr"`
                Original bool `xml:"original,attr"`
                Title string `xml:",chardata"`
            }
            """
        )

    def test_tag_list(self):
        code = generate(TAG_LIST_XSD)

        assert normalize(code) == normalize(
            """
            type tagList struct {
                Tag []tag `xml:"tag"`
            }

            type tag struct {
                Type string `xml:"type,attr"`
                Tag string `xml:",chardata"`
            }
            """
        )

    def test_unexported_initialism(self):
        code = generate(
            f'<schema><element name="tagId" type="tagReferenceType" />{TAG_REFERENCE_TYPE}</schema>'
        )

        assert normalize(code) == normalize(
            """
            type tagID struct {
                Type string `xml:"type,attr"`
                TagID string `xml:",chardata"`
            }
            """
        )

    def test_exported_with_prefix(self):
        code = generate(
            f'<schema><element name="url" type="tagReferenceType" />{TAG_REFERENCE_TYPE}</schema>',
            type_prefix="xxx",
            exported=True,
        )

        assert normalize(code) == normalize(
            """
            type XxxURL struct {
                Type string `xml:"type,attr"`
                URL string `xml:",chardata"`
            }
            """
        )


class TestLayout:
    """Formatting of the generated file."""

    def test_fields_are_aligned(self):
        code = generate(TITLE_LIST_XSD)

        assert "\tLanguage string `xml:\"language,attr\"`\n" in code
        assert "\tOriginal bool   `xml:\"original,attr\"`\n" in code
        assert "\tTitle    string `xml:\",chardata\"`\n" in code

    def test_spaces_instead_of_tabs(self):
        code = generate(TITLE_LIST_XSD, use_tabs=False, indent_size=2)
        assert "\n  Title []title `xml:\"title\"`\n" in code

    def test_structs_are_separated_by_one_blank_line(self):
        code = generate(TITLE_LIST_XSD)

        assert code.startswith("type titleList struct {\n")
        assert "}\n\ntype title struct {\n" in code
        assert code.endswith("}\n")

    def test_package_clause_and_header(self):
        code = quick_generate(wrap_schema('<xs:element name="a" type="xs:string"/>'))

        lines = code.splitlines()
        assert lines[0] == "// Code generated by xsdgen. DO NOT EDIT."
        assert lines[2] == "package main"
        assert "// a maps the element <a>." in lines

    def test_package_without_comments(self):
        code = quick_generate(
            wrap_schema('<xs:element name="a" type="xs:string"/>'),
            package_name="models",
            add_comments=False,
        )
        assert code.startswith("package models\n\ntype a struct {\n")

    def test_empty_package_name_omits_clause(self):
        code = generate(wrap_schema('<xs:element name="a" type="xs:string"/>'))
        assert "package" not in code


class TestFieldMapping:
    """Children, attributes and scalar types."""

    PERSON_XSD = wrap_schema(
        """
        <xs:element name="person">
            <xs:complexType>
                <xs:sequence>
                    <xs:element name="name" type="xs:string"/>
                    <xs:element name="age" type="xs:int"/>
                    <xs:element name="height" type="xs:double"/>
                    <xs:element name="nick" type="xs:string" maxOccurs="unbounded"/>
                    <xs:element name="address">
                        <xs:complexType>
                            <xs:sequence>
                                <xs:element name="city" type="xs:string"/>
                            </xs:sequence>
                        </xs:complexType>
                    </xs:element>
                </xs:sequence>
                <xs:attribute name="id" type="xs:ID"/>
                <xs:attribute name="active" type="xs:boolean"/>
            </xs:complexType>
        </xs:element>
        """
    )

    def test_scalar_children_are_plain_fields(self):
        code = generate(self.PERSON_XSD)

        assert normalize(code) == normalize(
            """
            type person struct {
                ID string `xml:"id,attr"`
                Active bool `xml:"active,attr"`
                Name string `xml:"name"`
                Age int `xml:"age"`
                Height float64 `xml:"height"`
                Nick []string `xml:"nick"`
                Address address `xml:"address"`
            }

            type address struct {
                City string `xml:"city"`
            }
            """
        )

    def test_unbounded_choice_gives_slices(self):
        code = generate(
            wrap_schema(
                """
                <xs:element name="doc">
                    <xs:complexType>
                        <xs:choice maxOccurs="unbounded">
                            <xs:element name="para" type="xs:string"/>
                            <xs:element name="note" type="xs:string"/>
                        </xs:choice>
                    </xs:complexType>
                </xs:element>
                """
            )
        )

        assert normalize(code) == normalize(
            """
            type doc struct {
                Para []string `xml:"para"`
                Note []string `xml:"note"`
            }
            """
        )

    def test_groups_become_fields(self):
        code = generate(
            wrap_schema(
                """
                <xs:group name="g">
                    <xs:sequence><xs:element name="a" type="xs:string"/></xs:sequence>
                </xs:group>
                <xs:attributeGroup name="ag">
                    <xs:attribute name="id" type="xs:string"/>
                </xs:attributeGroup>
                <xs:element name="e">
                    <xs:complexType>
                        <xs:sequence>
                            <xs:group ref="g"/>
                            <xs:element name="b" type="xs:string"/>
                        </xs:sequence>
                        <xs:attributeGroup ref="ag"/>
                    </xs:complexType>
                </xs:element>
                """
            )
        )

        assert normalize(code) == normalize(
            """
            type e struct {
                ID string `xml:"id,attr"`
                A string `xml:"a"`
                B string `xml:"b"`
            }
            """
        )

    def test_mixed_content_gets_chardata_field(self):
        code = generate(
            wrap_schema(
                """
                <xs:element name="para">
                    <xs:complexType mixed="true">
                        <xs:sequence>
                            <xs:element name="em" type="xs:string" maxOccurs="unbounded"/>
                        </xs:sequence>
                    </xs:complexType>
                </xs:element>
                """
            )
        )

        assert normalize(code) == normalize(
            """
            type para struct {
                Em []string `xml:"em"`
                Para string `xml:",chardata"`
            }
            """
        )

    def test_configured_numeric_types(self):
        code = generate(self.PERSON_XSD, int_type="int64", float_type="float32")

        assert "Age int64" in normalize(code)
        assert "Height float32" in normalize(code)

    def test_type_overrides(self):
        code = generate(self.PERSON_XSD, type_overrides={"float": "string"})
        assert "Height string" in normalize(code)

    def test_unknown_types_pass_through(self):
        code = generate(wrap_schema('<xs:element name="pos" type="gml:Point"/>'))
        assert "Pos Point `xml:\",chardata\"`" in normalize(code)

    def test_degenerate_child_gets_empty_struct(self):
        code = generate(
            wrap_schema(
                """
                <xs:element name="doc">
                    <xs:complexType>
                        <xs:sequence><xs:element name="br"/></xs:sequence>
                    </xs:complexType>
                </xs:element>
                """
            )
        )
        assert "type br struct {\n}" in code

    def test_field_name_conflicts_are_suffixed(self):
        code = generate(
            wrap_schema(
                """
                <xs:element name="entry">
                    <xs:complexType>
                        <xs:sequence><xs:element name="lang" type="xs:string"/></xs:sequence>
                        <xs:attribute name="lang" type="xs:string"/>
                    </xs:complexType>
                </xs:element>
                """
            )
        )

        assert "Lang   string `xml:\"lang,attr\"`" in code
        assert "Lang_1 string `xml:\"lang\"`" in code

    def test_reserved_struct_names(self):
        code = generate(
            wrap_schema(
                """
                <xs:element name="type">
                    <xs:complexType>
                        <xs:attribute name="name" type="xs:string"/>
                    </xs:complexType>
                </xs:element>
                """
            )
        )
        assert code.startswith("type type_ struct {")


class TestEmissionMemo:
    """Each element name produces one struct."""

    def test_same_element_in_two_parents(self):
        code = generate(
            wrap_schema(
                """
                <xs:element name="a">
                    <xs:complexType><xs:sequence>
                        <xs:element name="shared" type="sharedType"/>
                    </xs:sequence></xs:complexType>
                </xs:element>
                <xs:element name="b">
                    <xs:complexType><xs:sequence>
                        <xs:element name="shared" type="sharedType" maxOccurs="unbounded"/>
                    </xs:sequence></xs:complexType>
                </xs:element>
                <xs:complexType name="sharedType">
                    <xs:attribute name="id" type="xs:int"/>
                </xs:complexType>
                """
            )
        )

        assert code.count("type shared struct") == 1
        assert "Shared []shared" in code

    def test_conflicting_duplicate_is_skipped_with_warning(self):
        session, trees = resolve_string(
            wrap_schema(
                """
                <xs:element name="item" type="xs:string"/>
                <xs:element name="item" type="xs:int"/>
                """
            )
        )
        generator = GoGenerator(GeneratorConfig(package_name="", add_comments=False))

        result = generate_code(generator, trees, session)

        assert result.success
        assert result.code.count("type item struct") == 1
        assert "Item string" in normalize(result.code)
        assert any("item" in w and "different content" in w for w in result.warnings)

    def test_identical_duplicate_is_skipped_silently(self):
        session, trees = resolve_string(
            wrap_schema(
                """
                <xs:element name="item" type="xs:string"/>
                <xs:element name="item" type="xs:string"/>
                """
            )
        )
        generator = GoGenerator(GeneratorConfig(package_name=""))

        result = generate_code(generator, trees, session)

        assert result.code.count("type item struct") == 1
        assert result.warnings == []

    def test_struct_name_clash_between_elements(self):
        session, trees = resolve_string(
            wrap_schema(
                """
                <xs:element name="tagId" type="xs:string"/>
                <xs:element name="tag-id" type="xs:string"/>
                """
            )
        )
        generator = GoGenerator(GeneratorConfig(package_name="", add_comments=False))

        result = generate_code(generator, trees, session)

        assert "type tagID struct" in result.code
        assert "type tagID1 struct" in result.code
        assert any("tagID1" in w for w in result.warnings)

    def test_session_records_emitted_nodes(self):
        session, trees = resolve_string(TITLE_LIST_XSD)
        generate_code(GoGenerator(), trees, session)

        assert sorted(session.emitted) == ["title", "titleList"]


class TestGenerationResult:
    """Metadata and failure reporting."""

    def test_metadata(self):
        session, trees = resolve_string(TITLE_LIST_XSD)

        result = generate_code(GoGenerator(), trees, session)

        assert result.metadata == {
            "language": "go",
            "file_extension": ".go",
            "root_count": 1,
            "struct_count": 2,
            "element_count": 2,
            "max_depth": 2,
        }

    def test_degenerate_elements_are_reported(self):
        session, trees = resolve_string(wrap_schema('<xs:element name="marker"/>'))

        result = generate_code(GoGenerator(), trees, session)

        assert result.success
        assert any("marker" in w for w in result.warnings)

    def test_no_elements_is_reported(self):
        session, trees = resolve_string(wrap_schema('<xs:complexType name="unused"/>'))

        result = generate_code(GoGenerator(), trees, session)

        assert result.success
        assert any("no top-level elements" in w for w in result.warnings)

    def test_template_failure_is_wrapped(self):
        generator = GoGenerator()
        generator.template_engine.add_template("struct.go.j2", "{{ missing() }}")
        session, trees = resolve_string(TITLE_LIST_XSD)

        result = generate_code(generator, trees, session)

        assert not result.success
        assert result.code == ""
        assert "Code generation failed" in result.error_message
        assert result.exception is not None

    def test_generate_single_tree(self):
        tree = XmlTree(
            name="price",
            type="float",
            chardata=True,
            attribs=[XmlAttrib("currency", "string")],
        )
        generator = GoGenerator(GeneratorConfig(add_comments=False))

        code = generator.generate_single_tree(tree)

        assert normalize(code) == normalize(
            """
            type price struct {
                Currency string `xml:"currency,attr"`
                Price float64 `xml:",chardata"`
            }
            """
        )

    def test_generate_from_file(self, write_xsd):
        write_xsd(
            "types.xsd",
            """
            <xs:complexType name="bookType">
                <xs:sequence><xs:element name="title" type="xs:string"/></xs:sequence>
            </xs:complexType>
            """,
        )
        path = write_xsd(
            "book.xsd",
            '<xs:include schemaLocation="types.xsd"/><xs:element name="book" type="bookType"/>',
        )

        result = generate_from_file(path, config={"package_name": "books"})

        assert result.success
        assert "package books" in result.code.splitlines()
        assert "type book struct" in result.code
        assert result.metadata["struct_count"] == 1

    def test_generate_from_file_propagates_load_errors(self, tmp_path):
        with pytest.raises(SchemaLoaderError):
            generate_from_file(tmp_path / "missing.xsd")

    def test_generate_from_trees(self):
        session, trees = resolve_string(TITLE_LIST_XSD)

        result = generate_from_trees(trees, session, "golang", {"add_comments": False})

        assert result.success
        assert "type titleList struct" in result.code
        assert sorted(session.emitted) == ["title", "titleList"]

    def test_generator_without_session(self):
        _, trees = resolve_string(TITLE_LIST_XSD)

        result = generate_code(GoGenerator(GeneratorConfig(package_name="")), trees)

        assert result.success
        assert "type titleList struct" in result.code


def test_language_properties():
    generator = GoGenerator()
    assert generator.language_name == "go"
    assert generator.file_extension == ".go"
    assert generator.template_exists("struct.go.j2")
    assert generator.template_exists("package.go.j2")


def test_fresh_session_per_run_gives_identical_output():
    first = generate(TITLE_LIST_XSD)
    second = generate(TITLE_LIST_XSD)
    assert first == second


@pytest.mark.parametrize("bad", [{"int_type": "int128"}, {"float_type": "double"}])
def test_invalid_go_settings(bad):
    with pytest.raises(ConfigError):
        generate(TITLE_LIST_XSD, **bad)
