"""Tests for the template compiler."""

import logging

import pytest

from cmdcore.domain.errors import InvalidTemplate
from cmdcore.domain.template import compile_template
from cmdcore.domain.types import ArgumentDefinition, ArrayKind, PrimitiveType, SimpleKind


def _names(template: str) -> list[str]:
    return [d.name for d in compile_template(template)]


class TestSimpleEntries:
    def test_single(self) -> None:
        assert compile_template("&int age") == (
            ArgumentDefinition("age", SimpleKind(PrimitiveType.INT)),
        )

    def test_all_primitives_in_order(self) -> None:
        defs = compile_template("&string s &int i &float f &char c")
        assert [d.kind for d in defs] == [
            SimpleKind(PrimitiveType.STRING),
            SimpleKind(PrimitiveType.INT),
            SimpleKind(PrimitiveType.FLOAT),
            SimpleKind(PrimitiveType.CHAR),
        ]
        assert [d.name for d in defs] == ["s", "i", "f", "c"]

    def test_empty_template(self) -> None:
        assert compile_template("") == ()

    def test_arbitrary_whitespace(self) -> None:
        assert _names("  &int   a\n\t&string\tb  ") == ["a", "b"]

    def test_detail_clause_on_simple_type_ignored(self) -> None:
        assert compile_template("&int<5> n") == (
            ArgumentDefinition("n", SimpleKind(PrimitiveType.INT)),
        )


class TestArrayEntries:
    def test_fixed_size_typed(self) -> None:
        (d,) = compile_template("&array<2,int> pair")
        assert d == ArgumentDefinition("pair", ArrayKind("2", PrimitiveType.INT))

    def test_untyped(self) -> None:
        (d,) = compile_template("&array<3> words")
        assert d.kind == ArrayKind("3", None)

    def test_detail_whitespace_trimmed(self) -> None:
        (d,) = compile_template("&array< 4 , float > xs")
        assert d.kind == ArrayKind("4", PrimitiveType.FLOAT)

    def test_size_references_earlier_argument(self) -> None:
        defs = compile_template("&int n &array<n,string> items")
        assert defs[1].kind == ArrayKind("n", PrimitiveType.STRING)

    def test_formula_over_earlier_arguments(self) -> None:
        defs = compile_template("&int rows &int cols &array<rows*cols,float> cells")
        assert defs[2].kind == ArrayKind("rows*cols", PrimitiveType.FLOAT)

    def test_missing_detail_clause(self) -> None:
        with pytest.raises(InvalidTemplate, match="needs size details"):
            compile_template("&array items")

    def test_unknown_element_type(self) -> None:
        with pytest.raises(InvalidTemplate, match="Unknown array element type 'bool'"):
            compile_template("&array<2,bool> flags")

    def test_empty_size(self) -> None:
        with pytest.raises(InvalidTemplate):
            compile_template("&array< ,int> xs")


class TestReferences:
    def test_forward_reference_rejected(self) -> None:
        with pytest.raises(InvalidTemplate, match="must be defined before it"):
            compile_template("&array<n,string> items &int n")

    def test_self_reference_rejected(self) -> None:
        with pytest.raises(InvalidTemplate):
            compile_template("&array<items> items")

    def test_unknown_name_rejected(self) -> None:
        with pytest.raises(InvalidTemplate) as exc_info:
            compile_template("&int n &array<m+1> xs")
        assert exc_info.value.context["names"] == ["m"]

    def test_malformed_expression_left_for_bind_time(self) -> None:
        (d,) = compile_template("&array<2+> xs")
        assert d.kind == ArrayKind("2+", None)


class TestTolerantScan:
    def test_prose_between_entries_ignored(self) -> None:
        assert _names("first &string name then (optional) &int age please") == ["name", "age"]

    def test_fragment_that_never_matches_is_skipped(self) -> None:
        assert _names("&int a & b &&& &int") == ["a"]

    def test_no_entries(self) -> None:
        assert compile_template("just words") == ()


class TestInvalidTypes:
    def test_unknown_type(self) -> None:
        with pytest.raises(InvalidTemplate) as exc_info:
            compile_template("&bool flag")
        assert str(exc_info.value) == (
            "InvalidTemplate: Unknown data type 'bool' for argument 'flag'."
        )

    def test_error_after_valid_entries(self) -> None:
        with pytest.raises(InvalidTemplate):
            compile_template("&int a &double b")


class TestCompileProperties:
    @pytest.mark.parametrize(
        "template",
        ["&int age", "&int n &array<n,string> items", "&array<2> x &char c", ""],
    )
    def test_idempotent(self, template: str) -> None:
        first = compile_template(template)
        compile_template.cache_clear()
        assert compile_template(template) == first

    def test_memoised(self) -> None:
        assert compile_template("&int a") is compile_template("&int a")

    def test_duplicate_names_kept_in_order(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="cmdcore"):
            defs = compile_template("&int x &string x")
        assert [d.name for d in defs] == ["x", "x"]
        assert "Duplicate argument 'x'" in caplog.text
