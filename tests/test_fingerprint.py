"""지문 계산과 변경 감지 캐시 테스트."""

import threading

from javadoc_runtime.declarations import FieldDeclaration
from javadoc_runtime.processing.fingerprint import IncrementalCache, compute_fingerprint, member_sort_key
from tests.factories import constructor, declaration, function, param


def _service(**kwargs):
    kwargs.setdefault("doc_comment", " A service.")
    kwargs.setdefault(
        "functions",
        [
            function("run", param("count", "int", "int"), doc=" Runs."),
            function("stop", doc=" Stops."),
        ],
    )
    kwargs.setdefault("constructors", [constructor(param("name", "String"), doc=" Creates.")])
    return declaration("com.example.Service", **kwargs)


class TestComputeFingerprint:
    def test_is_32_char_hex(self):
        fingerprint = compute_fingerprint(_service())

        assert len(fingerprint) == 32
        assert int(fingerprint, 16) >= 0
        assert fingerprint == fingerprint.lower()

    def test_deterministic(self):
        assert compute_fingerprint(_service()) == compute_fingerprint(_service())

    def test_member_order_does_not_matter(self):
        forward = _service()
        reversed_ = _service(functions=list(reversed(forward.functions)))

        assert compute_fingerprint(forward) == compute_fingerprint(reversed_)

    def test_same_name_overloads_order_does_not_matter(self):
        a = function("run", param("x", "int", "int"), doc=" A.")
        b = function("run", param("x", "int", "int"), doc=" B.")

        assert compute_fingerprint(_service(functions=[a, b])) == compute_fingerprint(_service(functions=[b, a]))

    def test_changes_when_method_comment_changes(self):
        changed = _service(functions=[function("run", param("count", "int", "int"), doc=" Runs fast.")])

        assert compute_fingerprint(_service()) != compute_fingerprint(changed)

    def test_changes_when_class_comment_changes(self):
        assert compute_fingerprint(_service()) != compute_fingerprint(_service(doc_comment=" Other."))

    def test_changes_when_parameter_type_changes(self):
        changed = _service(
            functions=[
                function("run", param("count", "long", "long"), doc=" Runs."),
                function("stop", doc=" Stops."),
            ]
        )

        assert compute_fingerprint(_service()) != compute_fingerprint(changed)

    def test_changes_when_constructor_comment_changes(self):
        changed = _service(constructors=[constructor(param("name", "String"), doc=" Builds.")])

        assert compute_fingerprint(_service()) != compute_fingerprint(changed)

    def test_changes_when_constructor_added(self):
        assert compute_fingerprint(_service()) != compute_fingerprint(_service(constructors=[]))

    def test_changes_with_qualified_name(self):
        other = declaration("com.example.Other", doc_comment=" A service.")
        same = declaration("com.example.Service", doc_comment=" A service.")

        assert compute_fingerprint(other) != compute_fingerprint(same)

    def test_absent_comment_equals_empty_comment(self):
        assert compute_fingerprint(declaration("a.B", doc_comment=None)) == compute_fingerprint(
            declaration("a.B", doc_comment="")
        )

    def test_field_changes_are_ignored(self):
        with_field = _service(fields=[FieldDeclaration(name="x", doc_comment=" X.")])

        assert compute_fingerprint(_service()) == compute_fingerprint(with_field)


def test_member_sort_key():
    fn = function("process", param("a", "java.lang.String"), param("b", "int", "int"))

    assert member_sort_key(fn) == "process_String,int"


class TestIncrementalCache:
    def test_first_sighting_is_processed(self):
        cache = IncrementalCache()

        assert cache.should_process("a.B", "h1")

    def test_recorded_same_fingerprint_is_skipped(self):
        cache = IncrementalCache()
        cache.record_processed("a.B", "h1")

        assert not cache.should_process("a.B", "h1")
        assert cache.should_process("a.B", "h2")

    def test_should_process_does_not_mutate(self):
        cache = IncrementalCache()
        cache.should_process("a.B", "h1")

        assert cache.processed_count == 0
        assert cache.fingerprint_for("a.B") is None

    def test_disable_cache_always_processes(self):
        cache = IncrementalCache(disable_cache=True)
        cache.record_processed("a.B", "h1")

        assert cache.should_process("a.B", "h1")

    def test_force_regenerate_always_processes(self):
        cache = IncrementalCache(force_regenerate=True)
        cache.record_processed("a.B", "h1")

        assert cache.should_process("a.B", "h1")

    def test_acquire_is_idempotent_for_same_fingerprint(self):
        cache = IncrementalCache()

        assert cache.acquire("a.B", "h1") is True
        assert cache.acquire("a.B", "h1") is False
        assert cache.acquire("a.B", "h2") is True
        assert cache.fingerprint_for("a.B") == "h2"

    def test_begin_round_keeps_state_by_default(self):
        cache = IncrementalCache()
        cache.record_processed("a.B", "h1")
        cache.begin_round()

        assert cache.processed_count == 1

    def test_begin_round_clears_when_forced(self):
        cache = IncrementalCache(force_regenerate=True)
        cache.record_processed("a.B", "h1")
        cache.begin_round()

        assert cache.processed_count == 0
        assert cache.fingerprint_for("a.B") is None

    def test_clear(self):
        cache = IncrementalCache()
        cache.record_processed("a.B", "h1")
        cache.clear()

        assert cache.should_process("a.B", "h1")

    def test_concurrent_acquire_admits_exactly_one(self):
        cache = IncrementalCache()
        results: list[bool] = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(cache.acquire("a.B", "h1"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1
