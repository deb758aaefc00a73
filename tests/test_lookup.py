"""런타임 문서 조회 테스트. 미리 만들어 둔 아티팩트를 읽는다."""

import logging

import pytest

from javadoc_runtime.models import ClassDoc, FieldDoc, MethodDoc
from javadoc_runtime.runtime.descriptors import FieldDescriptor, MethodDescriptor
from javadoc_runtime.runtime.lookup import RuntimeDocs
from javadoc_runtime.store import FileArtifactStore, InMemoryArtifactStore

EXAMPLE = "com.example.ExampleClassWithDocs"


@pytest.fixture
def docs(fixture_store):
    return RuntimeDocs(fixture_store)


def _method(name, *types):
    return MethodDescriptor(declaring_class=EXAMPLE, name=name, parameter_types=list(types))


class TestClassDoc:
    def test_class_comment(self, docs):
        class_doc = docs.get_class_doc(EXAMPLE)

        assert class_doc.name == EXAMPLE
        assert class_doc.comment.text.startswith("This is a record with some documentation comments for testing.")
        assert "\n\nA JSON was generated" in class_doc.comment.text

    def test_missing_artifact_is_empty(self, docs):
        class_doc = docs.get_class_doc("com.example.NoSuchClass")

        assert class_doc.is_empty()
        assert class_doc.name == "com.example.NoSuchClass"

    def test_corrupted_artifact_is_empty(self, docs, caplog):
        with caplog.at_level(logging.DEBUG, logger="javadoc_runtime.runtime.lookup"):
            class_doc = docs.get_class_doc("com.example.CorruptedJson")

        assert class_doc.is_empty()
        assert "com.example.CorruptedJson" in caplog.text

    def test_corrupted_result_is_cached(self):
        store = InMemoryArtifactStore({"a.B": "{not json"})
        docs = RuntimeDocs(store)

        first = docs.get_class_doc("a.B")
        store.artifacts["a.B"] = '{"name": "a.B", "comment": {"text": "fixed"}}'
        second = docs.get_class_doc("a.B")

        assert first is second
        assert second.is_empty()

    def test_unusable_file_name_is_empty(self, tmp_path):
        docs = RuntimeDocs(FileArtifactStore(tmp_path))

        class_doc = docs.get_documentation("a.\x00B")

        assert class_doc.is_empty()
        assert class_doc.name == "a.\x00B"

    def test_same_instance_is_returned(self, docs):
        assert docs.get_class_doc(EXAMPLE) is docs.get_class_doc(EXAMPLE)


class TestCache:
    def test_cache_size_and_clear(self, docs):
        assert docs.cache_size == 0

        docs.get_class_doc(EXAMPLE)
        docs.get_class_doc("com.example.NoSuchClass")
        assert docs.cache_size == 2

        docs.clear_cache()
        assert docs.cache_size == 0

    def test_clear_cache_reloads(self):
        store = InMemoryArtifactStore({"a.B": '{"name": "a.B", "comment": {"text": "old"}}'})
        docs = RuntimeDocs(store)
        assert docs.get_class_doc("a.B").comment.text == "old"

        store.artifacts["a.B"] = '{"name": "a.B", "comment": {"text": "new"}}'
        assert docs.get_class_doc("a.B").comment.text == "old"

        docs.clear_cache()
        assert docs.get_class_doc("a.B").comment.text == "new"


class TestMethodDoc:
    def test_method_without_parameters(self, docs):
        method_doc = docs.get_method_doc(_method("methodWithoutParameters"))

        assert method_doc.comment.text == "A documented method that doesn't have any parameters."
        assert method_doc.returns.text == "Does not return anything because it throws an error beforehand."
        assert method_doc.throws[0].name == "UnsupportedOperationException"
        assert method_doc.throws[0].comment.text == "This method always raises an error."
        assert method_doc.see_also[0].link == "methodWithParameters"

    def test_method_with_qualified_reflected_type(self, docs):
        method_doc = docs.get_method_doc(_method("methodWithParameters", "java.lang.String"))

        assert method_doc.comment.text == "A documented method that *does* have parameters."
        assert method_doc.params[0].name == "textParameter"
        assert method_doc.params[0].comment.text == "A parameter that's also documented."
        assert method_doc.other[0].name == "since"

    def test_boxed_and_jvm_array_types(self, docs):
        method_doc = docs.get_method_doc(_method("scale", "Integer", "[D"))

        assert method_doc.comment.text == "Scales the values."

    def test_overload_resolved_by_nested_type(self, docs):
        method_doc = docs.get_method_doc(_method("scale", "int", "Factor"))

        assert method_doc.comment.text == "Scales by a factor."

    def test_unknown_method_is_empty_with_query(self, docs):
        method_doc = docs.get_method_doc(_method("nothing", "int"))

        assert method_doc == MethodDoc.empty("nothing", ["int"])

    def test_parameter_count_mismatch_is_empty(self, docs):
        assert docs.get_method_doc(_method("methodWithParameters")).comment.is_empty()


class TestFieldDoc:
    def test_field_from_record_component(self, docs):
        field = docs.get_field_doc(FieldDescriptor(declaring_class=EXAMPLE, name="number"))

        assert field.comment.text == "This is an integer field."

    def test_unknown_field_is_empty(self, docs):
        field = docs.get_field_doc(FieldDescriptor(declaring_class=EXAMPLE, name="nothing"))

        assert field == FieldDoc.empty("nothing")


class TestGetDocumentation:
    def test_dispatch_by_target_type(self, docs):
        assert isinstance(docs.get_documentation(EXAMPLE), ClassDoc)
        assert isinstance(docs.get_documentation(_method("methodWithoutParameters")), MethodDoc)
        assert isinstance(
            docs.get_documentation(FieldDescriptor(declaring_class=EXAMPLE, name="text")), FieldDoc
        )

    def test_field_text(self, docs):
        field = docs.get_documentation(FieldDescriptor.parse(f"{EXAMPLE}#text"))

        assert field.comment.text == "This is a text field."

    def test_unsupported_target(self, docs):
        with pytest.raises(TypeError):
            docs.get_documentation(42)
