"""타입 동치 판정과 메서드/필드 검색 테스트."""

import logging

import pytest

from javadoc_runtime.models import ClassDoc, CommentText, FieldDoc, MethodDoc
from javadoc_runtime.runtime.matching import (
    ALIAS_EQUIVALENTS,
    PRIMITIVE_EQUIVALENTS,
    find_field,
    find_method,
    is_type_match,
    parameter_types_match,
)


def _method(name, *types, text=""):
    return MethodDoc(name=name, param_types=list(types), comment=CommentText(text=text))


class TestIsTypeMatch:
    @pytest.mark.parametrize("name", ["int", "String", "com.example.Foo", "int[]", "[I", "Unknown"])
    def test_reflexive(self, name):
        assert is_type_match(name, name)

    @pytest.mark.parametrize(
        ("stored", "reflected"),
        [
            ("int", "Integer"),
            ("boolean", "Boolean"),
            ("char", "Character"),
            ("int[]", "[I"),
            ("double[]", "[D"),
            ("long[]", "[J"),
            ("Int", "int"),
            ("Int", "Integer"),
            ("Char", "Character"),
            ("IntArray", "int[]"),
            ("IntArray", "[I"),
            ("BooleanArray", "[Z"),
        ],
    )
    def test_equivalence_tables(self, stored, reflected):
        assert is_type_match(stored, reflected)
        assert is_type_match(reflected, stored)

    @pytest.mark.parametrize(
        ("stored", "reflected"),
        [
            ("java.lang.String", "String"),
            ("com.example.A.B.C", "C"),
            ("com.example.Outer.Inner", "other.pkg.Inner"),
            ("Outer$Inner", "Inner"),
        ],
    )
    def test_qualified_and_nested_names(self, stored, reflected):
        assert is_type_match(stored, reflected)
        assert is_type_match(reflected, stored)

    @pytest.mark.parametrize(
        ("stored", "reflected"),
        [
            ("int", "long"),
            ("String", "Integer"),
            ("Map", "List"),
            ("int[]", "[J"),
            ("IntArray", "long[]"),
        ],
    )
    def test_different_types(self, stored, reflected):
        assert not is_type_match(stored, reflected)

    def test_tables_are_unordered_pairs(self):
        for table in (PRIMITIVE_EQUIVALENTS, ALIAS_EQUIVALENTS):
            for pair in table:
                assert len(pair) == 2
                first, second = sorted(pair)
                assert is_type_match(first, second)
                assert is_type_match(second, first)

    @pytest.mark.parametrize("name", ["Boolean", "Long"])
    def test_alias_equal_to_boxed_name_has_no_self_pair(self, name):
        assert frozenset({name}) not in ALIAS_EQUIVALENTS


class TestParameterTypesMatch:
    def test_positional(self):
        assert parameter_types_match(["int", "String"], ["Integer", "java.lang.String"])

    def test_order_matters(self):
        assert not parameter_types_match(["int", "String"], ["String", "int"])

    def test_count_mismatch(self):
        assert not parameter_types_match(["int"], ["int", "int"])

    def test_empty(self):
        assert parameter_types_match([], [])


class TestFindMethod:
    def test_first_match_wins(self):
        class_doc = ClassDoc(
            name="a.B",
            methods=[_method("f", "int", text="first"), _method("f", "Integer", text="second")],
        )

        assert find_method(class_doc, "f", ["Integer"]).comment.text == "first"

    def test_selects_overload_by_types(self):
        class_doc = ClassDoc(
            name="a.B",
            methods=[_method("find", "long", text="by id"), _method("find", "String", text="by name")],
        )

        assert find_method(class_doc, "find", ["java.lang.String"]).comment.text == "by name"
        assert find_method(class_doc, "find", ["Long"]).comment.text == "by id"

    def test_missing_method_returns_empty_with_query(self):
        result = find_method(ClassDoc.empty("a.B"), "missing", ["int"])

        assert result == MethodDoc.empty("missing", ["int"])
        assert result.comment.is_empty()

    def test_count_mismatch_returns_empty(self):
        class_doc = ClassDoc(name="a.B", methods=[_method("f", "int", text="one")])

        assert find_method(class_doc, "f", ["int", "int"]).comment.is_empty()

    def test_logs_candidates_at_debug(self, caplog):
        class_doc = ClassDoc(name="a.B", methods=[_method("f", "long")])

        with caplog.at_level(logging.DEBUG, logger="javadoc_runtime.runtime.matching"):
            find_method(class_doc, "f", ["String"])

        assert "f(long)" in caplog.text
        assert "long vs String = False" in caplog.text


class TestFindField:
    def test_single_match(self):
        class_doc = ClassDoc(name="a.B", fields=[FieldDoc(name="x", comment=CommentText(text="the x"))])

        assert find_field(class_doc, "x").comment.text == "the x"

    def test_missing_returns_empty(self):
        assert find_field(ClassDoc.empty("a.B"), "x") == FieldDoc.empty("x")

    def test_duplicate_names_return_empty(self):
        class_doc = ClassDoc(
            name="a.B",
            fields=[
                FieldDoc(name="x", comment=CommentText(text="one")),
                FieldDoc(name="x", comment=CommentText(text="two")),
            ],
        )

        assert find_field(class_doc, "x").comment.is_empty()
