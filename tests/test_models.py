"""문서 모델과 아티팩트 JSON 형식 테스트."""

import json

import pytest
from pydantic import ValidationError

from javadoc_runtime.models import (
    ClassDoc,
    CommentText,
    FieldDoc,
    InlineTag,
    MethodDoc,
    ParamDoc,
    SeeAlsoDoc,
)


class TestCommentText:
    def test_blank_text_is_empty(self):
        assert CommentText(text="  \n ").is_empty()
        assert CommentText.empty().is_empty()

    def test_inline_tags_make_it_non_empty(self):
        assert not CommentText(text="", inline_tags=[InlineTag(name="link", content="Foo")]).is_empty()

    def test_frozen(self):
        comment = CommentText(text="a")
        with pytest.raises(ValidationError):
            comment.text = "b"


class TestEmptyValues:
    def test_method_doc_empty_keeps_query(self):
        doc = MethodDoc.empty("create", ["int"])

        assert doc.name == "create"
        assert doc.param_types == ["int"]
        assert doc.params == []
        assert doc.returns.is_empty()
        assert doc.is_constructor is False

    def test_field_doc_empty(self):
        assert FieldDoc.empty("x") == FieldDoc(name="x", comment=CommentText(text=""))

    def test_class_doc_empty(self):
        doc = ClassDoc.empty("a.B")

        assert doc.is_empty()
        assert doc.name == "a.B"

    def test_class_doc_with_members_is_not_empty(self):
        assert not ClassDoc(name="a.B", fields=[FieldDoc.empty("x")]).is_empty()


class TestJsonFormat:
    def test_keys_are_camel_case(self):
        doc = ClassDoc(
            name="a.B",
            methods=[
                MethodDoc(
                    name="f",
                    param_types=["int"],
                    params=[ParamDoc(name="x", comment=CommentText(text="the x"))],
                    see_also=[SeeAlsoDoc(link="g")],
                    is_constructor=False,
                )
            ],
        )

        data = json.loads(doc.to_json())
        method = data["methods"][0]

        assert set(data) == {"name", "comment", "methods", "constructors", "fields", "seeAlso", "other"}
        assert method["paramTypes"] == ["int"]
        assert method["seeAlso"] == [{"link": "g"}]
        assert method["isConstructor"] is False
        assert data["comment"] == {"text": "", "inlineTags": []}

    def test_indent_only_when_requested(self):
        doc = ClassDoc.empty("a.B")

        assert "\n" not in doc.to_json()
        assert "\n  " in doc.to_json(indent=2)

    def test_round_trip(self):
        doc = ClassDoc(
            name="a.B",
            comment=CommentText(text="Body."),
            constructors=[MethodDoc(name="<init>", param_types=["String"], is_constructor=True)],
            fields=[FieldDoc(name="x", comment=CommentText(text="the x"))],
        )

        assert ClassDoc.from_json(doc.to_json()) == doc

    def test_unknown_keys_are_ignored(self):
        raw = '{"name": "a.B", "version": 3, "methods": [{"name": "f", "visibility": "public"}]}'

        doc = ClassDoc.from_json(raw)

        assert doc.name == "a.B"
        assert doc.methods[0].name == "f"

    def test_missing_optional_fields_use_defaults(self):
        doc = ClassDoc.from_json('{"name": "a.B", "methods": [{"name": "f"}]}')

        assert doc.comment.is_empty()
        assert doc.methods[0].param_types == []
        assert doc.methods[0].returns.is_empty()
        assert doc.fields == []

    def test_snake_case_input_accepted(self):
        doc = MethodDoc.model_validate({"name": "f", "param_types": ["int"], "is_constructor": True})

        assert doc.param_types == ["int"]
        assert doc.is_constructor is True

    def test_malformed_json_raises_validation_error(self):
        with pytest.raises(ValidationError):
            ClassDoc.from_json('{"name": ')

    def test_missing_name_raises_validation_error(self):
        with pytest.raises(ValidationError):
            ClassDoc.from_json('{"methods": []}')
