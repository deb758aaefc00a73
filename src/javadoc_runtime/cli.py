"""
CLI 진입점: ``javadoc-runtime extract`` 와 ``javadoc-runtime lookup``.

extract: Java 소스 수집 → 선언 추출 → 변경 감지 → 주석 파싱 → JSON 아티팩트 기록
lookup:  JSON 아티팩트에서 클래스/메서드/필드 문서를 찾아 출력

사용법:
    javadoc-runtime extract src/main/java -o build/javadoc --all
    javadoc-runtime lookup com.example.OrderController "create(int, String)" -d build/javadoc
    javadoc-runtime lookup com.example.OrderRequest quantity
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from javadoc_runtime.config import Settings
from javadoc_runtime.logging_config import setup_logging
from javadoc_runtime.models import ClassDoc, CommentText, FieldDoc, MethodDoc
from javadoc_runtime.parsing.extractors import scan_sources
from javadoc_runtime.processing.processor import DocumentationProcessor
from javadoc_runtime.runtime.descriptors import FieldDescriptor, MethodDescriptor
from javadoc_runtime.runtime.lookup import RuntimeDocs
from javadoc_runtime.store import FileArtifactStore

console = Console()


def main(argv: Sequence[str] | None = None) -> int:
    """CLI 메인 함수. 종료 코드를 반환한다."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "extract":
        return _run_extract(args)
    if args.command == "lookup":
        return _run_lookup(args)
    parser.print_help()
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="javadoc-runtime",
        description="Javadoc 주석을 JSON 아티팩트로 추출하고 런타임에 조회한다.",
    )
    sub = parser.add_subparsers(dest="command")

    extract = sub.add_parser("extract", help="Java 소스에서 문서 아티팩트 생성")
    extract.add_argument("source", nargs="?", help="Java 소스 루트 (기본: 설정의 source_path)")
    extract.add_argument("--output-dir", "-o", help="아티팩트 출력 디렉터리 (기본: 설정의 output_dir)")
    extract.add_argument("--packages", help="처리할 패키지 접두어, 콤마 구분")
    extract.add_argument("--disable-cache", action="store_true", default=None, help="변경 감지 게이트 우회")
    extract.add_argument("--force-regenerate", action="store_true", default=None, help="캐시를 비우고 전부 재생성")
    extract.add_argument("--debug", action="store_true", default=None, help="상세 추적 로그")
    extract.add_argument(
        "--all",
        dest="process_all_declarations",
        action="store_true",
        default=None,
        help="마커 어노테이션이 없어도 모든 클래스 처리",
    )
    extract.add_argument("--workers", dest="max_workers", type=int, help="동시 처리 스레드 수")

    lookup = sub.add_parser("lookup", help="아티팩트에서 문서 조회")
    lookup.add_argument("class_name", help="정규화된 클래스 이름")
    lookup.add_argument("member", nargs="?", help="메서드 'name(type, ...)' 또는 필드 'name'")
    lookup.add_argument("--artifact-dir", "-d", help="아티팩트 디렉터리 (기본: 설정의 output_dir)")
    lookup.add_argument("--debug", action="store_true", default=None, help="상세 추적 로그")
    return parser


def _settings_from_args(args: argparse.Namespace, **mapping: str) -> Settings:
    """지정된 인수만 설정을 덮어쓴다. 지정하지 않은 값은 .env/환경변수를 따른다."""
    overrides: dict[str, Any] = {}
    for field, attr in mapping.items():
        value = getattr(args, attr, None)
        if value is not None:
            overrides[field] = value
    return Settings(**overrides)


def _run_extract(args: argparse.Namespace) -> int:
    settings = _settings_from_args(
        args,
        source_path="source",
        output_dir="output_dir",
        packages="packages",
        disable_cache="disable_cache",
        force_regenerate="force_regenerate",
        debug="debug",
        process_all_declarations="process_all_declarations",
        max_workers="max_workers",
    )
    setup_logging(settings.effective_log_level)

    source_root = Path(settings.source_path)
    if not source_root.is_dir():
        console.print(f"[red]소스 디렉터리를 찾을 수 없습니다: {source_root}[/red]")
        return 2

    declarations = scan_sources(source_root)
    console.print(f"최상위 선언: {len(declarations)}개")
    console.print("=" * 60)

    store = FileArtifactStore(settings.output_dir, indent=settings.json_indent)
    processor = DocumentationProcessor(store, settings)
    report = processor.process(declarations)

    for name in report.emitted:
        console.print(f"  [green]기록[/green] {name}")
    for name in report.failed:
        console.print(f"  [red]실패[/red] {name}")
    console.print("=" * 60)
    console.print(
        f"기록 {len(report.emitted)}개 / 건너뜀 {len(report.skipped)}개 / 실패 {len(report.failed)}개"
        f" → {settings.output_dir}"
    )
    return 1 if report.failed else 0


def _run_lookup(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args, output_dir="artifact_dir", debug="debug")
    setup_logging(settings.effective_log_level)
    docs = RuntimeDocs(FileArtifactStore(settings.output_dir))

    if not args.member:
        _print_class(docs.get_class_doc(args.class_name))
        return 0

    try:
        if "(" in args.member:
            target = MethodDescriptor.parse(f"{args.class_name}#{args.member}")
        else:
            target = FieldDescriptor.parse(f"{args.class_name}#{args.member}")
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return 2

    result = docs.get_documentation(target)
    if isinstance(result, MethodDoc):
        _print_method(result)
    else:
        _print_field(result)
    return 0


# Javadoc 본문의 대괄호가 rich 마크업으로 해석되지 않도록 모두 escape한다
def _comment_or_dim(comment: CommentText) -> str:
    return escape(comment.text) if not comment.is_empty() else "[dim](문서 없음)[/dim]"


def _signature(method: MethodDoc) -> str:
    return escape(f"{method.name}({', '.join(method.param_types)})")


def _print_class(class_doc: ClassDoc):
    console.print(Panel(_comment_or_dim(class_doc.comment), title=escape(class_doc.name), border_style="green"))
    for method in class_doc.constructors + class_doc.methods:
        console.print(f"  {_signature(method)}")
    for field in class_doc.fields:
        console.print(f"  {escape(field.name)}")


def _print_method(method: MethodDoc):
    lines = [_comment_or_dim(method.comment)]
    for param in method.params:
        lines.append(f"[bold]@param[/bold] {escape(param.name)} {escape(param.comment.text)}")
    if not method.returns.is_empty():
        lines.append(f"[bold]@return[/bold] {escape(method.returns.text)}")
    for throws in method.throws:
        lines.append(f"[bold]@throws[/bold] {escape(throws.name)} {escape(throws.comment.text)}")
    for see in method.see_also:
        lines.append(f"[bold]@see[/bold] {escape(see.link)}")
    for other in method.other:
        lines.append(f"[bold]@{escape(other.name)}[/bold] {escape(other.comment.text)}")
    console.print(Panel("\n".join(lines), title=_signature(method), border_style="green"))


def _print_field(field: FieldDoc):
    console.print(Panel(_comment_or_dim(field.comment), title=escape(field.name), border_style="green"))


if __name__ == "__main__":
    raise SystemExit(main())
