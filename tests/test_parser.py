"""Tests for struct extraction and the tag grammar."""

import pytest

from struct2nest.codegen.core.parser import (
    TagSyntaxError,
    find_struct,
    find_structs,
    parse_tag,
    tokenize,
)
from struct2nest.codegen.core.schema import FieldDescriptor

from .conftest import ORDER_SOURCE, USER_SOURCE


class TestTagParser:
    """Field lines -> FieldDescriptor."""

    def test_identity_field(self, parser):
        fields = parser.parse('ID string `json:"id" bson:"_id"`')
        assert len(fields) == 1
        field = fields[0]
        assert (field.name, field.source_type, field.required) == ("_id", "string", True)
        assert field.go_name == "ID"

    def test_omitempty_makes_field_optional(self, parser):
        fields = parser.parse(
            'Name string `json:"name,omitempty" bson:"name,omitempty"`'
        )
        assert fields == [
            FieldDescriptor("name", "string", False, go_name="Name", line=1)
        ]

    def test_required_follows_json_tag_only(self, parser):
        fields = parser.parse('Note string `json:"note" bson:"note,omitempty"`')
        assert fields[0].required is True

        fields = parser.parse('Note string `json:"note,omitempty" bson:"note"`')
        assert fields[0].required is False

    def test_order_matches_source(self, parser):
        body = """
	B string `json:"b" bson:"b"`
	A string `json:"a" bson:"a"`
	C bool   `json:"c" bson:"c"`
"""
        assert [f.name for f in parser.parse(body)] == ["b", "a", "c"]

    def test_name_comes_from_bson_tag(self, parser):
        fields = parser.parse('Email string `json:"mail" bson:"email"`')
        assert fields[0].name == "email"

    def test_qualified_type_uses_last_identifier(self, parser):
        fields = parser.parse('CreatedAt time.Time `json:"createdAt" bson:"createdAt"`')
        assert fields[0].source_type == "Time"

    def test_slice_and_pointer_prefixes(self, parser):
        body = """
	Tags  []string `json:"tags" bson:"tags"`
	Owner *User    `json:"owner" bson:"owner"`
"""
        assert [f.source_type for f in parser.parse(body)] == ["string", "User"]

    def test_extra_tag_components_allowed(self, parser):
        fields = parser.parse(
            'Age int `json:"age" bson:"age" validate:"required"`'
        )
        assert fields[0].name == "age"

    def test_empty_input(self, parser):
        assert parser.parse("") == []
        assert parser.parse("   \n\t\n") == []

    def test_untagged_lines_are_ignored(self, parser):
        body = """
	// a comment
	Hidden string
	Base
	Name string `json:"name" bson:"name"` // trailing comment
"""
        result = parser.parse_detailed(body)
        assert [f.name for f in result.fields] == ["name"]
        assert result.ok

    def test_semicolon_separated_fields(self, parser):
        body = 'A string `json:"a" bson:"a"`; B string `json:"b" bson:"b"`'
        assert [f.name for f in parser.parse(body)] == ["a", "b"]

    def test_line_numbers(self, parser):
        body = '\n\nA string `json:"a" bson:"a"`\n\nB int `json:"b" bson:"b"`\n'
        assert [f.line for f in parser.parse(body)] == [3, 5]


class TestMalformedTags:
    """Tagged lines outside the grammar are dropped and reported."""

    @pytest.mark.parametrize(
        "line, reason",
        [
            ('ID string `bson:"_id" json:"id"`', "expected json tag first"),
            ('ID string `json:"id"`', "expected json and bson"),
            ('ID string `json:"id" yaml:"id"`', "expected bson tag"),
            ('ID string `json:"-" bson:"_id"`', "not an identifier"),
            ('ID string `json:"id,string" bson:"_id"`', "unsupported json tag option"),
            ('Base `bson:",inline"`', "field name and a type"),
            ('ID string `json:"id" bson:"_id"` extra', "must end"),
        ],
    )
    def test_reported_issue(self, parser, line, reason):
        result = parser.parse_detailed(line)
        assert result.fields == []
        assert len(result.issues) == 1
        assert reason in result.issues[0].reason

    def test_parse_skips_silently(self, parser):
        body = """
	ID   string `json:"id" bson:"_id"`
	Bad  string `yaml:"bad"`
	Name string `json:"name" bson:"name"`
"""
        assert [f.name for f in parser.parse(body)] == ["_id", "name"]

    def test_issue_records_line(self, parser):
        body = 'A string `json:"a" bson:"a"`\nB string `bson:"b"`'
        issue = parser.parse_detailed(body).issues[0]
        assert issue.line == 2
        assert "B" in issue.text
        assert str(issue).startswith("line 2:")


class TestParseTag:
    def test_returns_bson_name_and_required(self):
        assert parse_tag('`json:"n" bson:"name"`') == ("name", True)
        assert parse_tag('`json:"n,omitempty" bson:"name"`') == ("name", False)

    def test_garbage_between_pairs(self):
        with pytest.raises(TagSyntaxError):
            parse_tag('`json:"n" , bson:"name"`')


class TestFindStruct:
    def test_first_struct_only(self):
        block = find_struct(ORDER_SOURCE)
        assert block.name == "Order"
        assert "total" in block.body
        assert "sku" not in block.body

    def test_all_structs(self):
        assert [b.name for b in find_structs(ORDER_SOURCE)] == ["Order", "OrderLine"]

    def test_no_struct(self):
        assert find_struct("package models\n\nfunc main() {}\n") is None
        assert find_structs("") == []

    def test_user_source(self, parser):
        block = find_struct(USER_SOURCE)
        assert block.name == "User"
        names = [f.name for f in parser.parse(block.body)]
        assert names == ["_id", "name", "age", "active", "createdAt"]


def test_tokenize_skips_whitespace():
    kinds = [t.kind for t in tokenize('A  *pkg.T `json:"a" bson:"a"`')]
    assert kinds == ["IDENT", "PUNCT", "IDENT", "PUNCT", "IDENT", "TAG"]
