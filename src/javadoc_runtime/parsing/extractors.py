"""
선언 추출 모듈.

tree-sitter AST를 순회하여 Java 소스 코드에서 ClassDeclaration 트리를 추출한다.
추출 결과는 문서 처리기(DocumentationProcessor)의 입력이다.

추출 대상:
- 클래스/인터페이스/enum/record/어노테이션 타입 선언 (중첩 선언 포함)
- 메서드 선언 (파라미터 타입, 어노테이션, Javadoc)
- 생성자 선언 (이름은 "<init>")
- 필드 선언 (선언자마다 하나), enum 상수, record 컴포넌트

AST 순회 흐름:
    program
    ├── package_declaration → 패키지명 추출
    └── class_declaration
        ├── ClassDeclaration 생성
        └── class_body
            ├── method_declaration → FunctionDeclaration
            ├── constructor_declaration → 생성자 FunctionDeclaration
            ├── field_declaration → FieldDeclaration (variable_declarator마다)
            └── class_declaration (중첩 클래스) → 재귀 처리, 이름은 "Outer.Inner"

record는 컴포넌트가 곧 필드이고, 컴포넌트 목록으로 정식(canonical) 생성자를 만든다.
컴포넌트 설명은 보통 클래스 Javadoc의 @param에 있으며, 처리기가 필드 주석으로 옮긴다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from tree_sitter import Node, Tree

from javadoc_runtime.declarations import (
    CONSTRUCTOR_NAME,
    ClassDeclaration,
    FieldDeclaration,
    FunctionDeclaration,
    ParameterDeclaration,
)
from javadoc_runtime.parsing.comment_extractor import (
    ANNOTATION_NODE_TYPES,
    extract_annotations,
    extract_javadoc,
    node_text,
)
from javadoc_runtime.parsing.java_parser import JavaParser

logger = logging.getLogger(__name__)

# 노드 타입 → ClassDeclaration.kind
_CLASS_KINDS = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "record_declaration": "record",
    "annotation_type_declaration": "annotation",
}

# 소스 텍스트가 곧 단순 이름인 타입 노드
_NAMED_TYPE_NODES = (
    "integral_type",
    "floating_point_type",
    "boolean_type",
    "void_type",
    "type_identifier",
)


def resolve_type_node(node: Node | None, source: bytes) -> str | None:
    """
    타입 노드를 구조적으로 해석하여 단순 이름을 반환한다. 해석할 수 없으면 None.

    리플렉션의 단순 이름(getSimpleName) 표기를 따른다:
        int                    → "int"
        java.util.List<String> → "List"       (generic_type → 원시 타입)
        Map.Entry<K, V>        → "Entry"      (scoped_type_identifier → 마지막 식별자)
        String[][]             → "String[][]" (array_type → 원소 + 차원)
        @NonNull String        → "String"     (annotated_type → 어노테이션 제외)
    """
    if node is None:
        return None

    if node.type in _NAMED_TYPE_NODES:
        return node_text(node, source)

    if node.type == "scoped_type_identifier":
        identifiers = [c for c in node.named_children if c.type == "type_identifier"]
        return node_text(identifiers[-1], source) if identifiers else None

    if node.type == "generic_type":
        return resolve_type_node(node.named_children[0], source) if node.named_children else None

    if node.type == "array_type":
        element = resolve_type_node(node.child_by_field_name("element"), source)
        dimensions = node.child_by_field_name("dimensions")
        if element is None or dimensions is None:
            return None
        return element + _dimension_suffix(dimensions, source)

    if node.type == "annotated_type":
        inner = [c for c in node.named_children if c.type not in ANNOTATION_NODE_TYPES]
        return resolve_type_node(inner[-1], source) if inner else None

    return None


def _dimension_suffix(dimensions: Node, source: bytes) -> str:
    # "[] []"나 "@A []" 같은 표기도 괄호 개수만 센다
    return "[]" * node_text(dimensions, source).count("[")


class DeclarationExtractor:
    """
    tree-sitter AST에서 ClassDeclaration 트리를 추출하는 추출기.

    하나의 Java 파일을 입력받아 최상위 선언 목록을 반환한다.
    중첩 선언은 각 선언의 nested_classes에 들어간다.
    """

    def extract(self, tree: Tree, source: bytes, file_path: Path | None = None) -> list[ClassDeclaration]:
        """
        AST에서 최상위 타입 선언을 모두 추출한다.

        Args:
            tree: tree-sitter 파싱 결과 AST
            source: 원본 소스 바이트
            file_path: Java 파일 경로 (메타데이터용)

        Returns:
            최상위 ClassDeclaration 리스트
        """
        root = tree.root_node
        package_name = self._extract_package(root, source)
        declarations = []
        for child in root.children:
            if child.type in _CLASS_KINDS:
                declaration = self._extract_class_like(child, source, file_path, package_name, None)
                if declaration is not None:
                    declarations.append(declaration)
        return declarations

    def _extract_package(self, root: Node, source: bytes) -> str | None:
        """
        루트 노드에서 package 선언을 찾아 패키지명을 반환한다.

        Java AST 구조:
            program
            └── package_declaration
                └── scoped_identifier ("com.example.service")
                    또는 identifier ("util")
        """
        for child in root.children:
            if child.type == "package_declaration":
                for sub in child.children:
                    if sub.type in ("scoped_identifier", "identifier"):
                        return node_text(sub, source)
        return None

    def _extract_class_like(
        self,
        node: Node,
        source: bytes,
        file_path: Path | None,
        package_name: str | None,
        enclosing: str | None,
    ) -> ClassDeclaration | None:
        """
        타입 선언 하나와 그 멤버를 추출한다.

        Args:
            node: class_declaration/interface_declaration/enum_declaration/... 노드
            enclosing: 감싸는 타입들의 이름 경로 (예: "Outer.Middle"). 최상위이면 None
        """
        name = self._get_name(node, source)
        if not name:
            return None

        kind = _CLASS_KINDS[node.type]
        nested_path = f"{enclosing}.{name}" if enclosing else name
        functions: list[FunctionDeclaration] = []
        constructors: list[FunctionDeclaration] = []
        fields: list[FieldDeclaration] = []
        nested: list[ClassDeclaration] = []
        canonical_doc: str | None = None

        body = node.child_by_field_name("body")
        for member in self._members(body):
            if member.type in ("method_declaration", "annotation_type_element_declaration"):
                functions.append(self._extract_function(member, source, self._get_name(member, source)))
            elif member.type == "constructor_declaration":
                constructors.append(self._extract_function(member, source, CONSTRUCTOR_NAME))
            elif member.type == "compact_constructor_declaration":
                canonical_doc = extract_javadoc(member, source)
            elif member.type in ("field_declaration", "constant_declaration"):
                fields.extend(self._extract_fields(member, source))
            elif member.type == "enum_constant":
                constant = self._get_name(member, source)
                if constant:
                    fields.append(FieldDeclaration(
                        name=constant, type_text=name, doc_comment=extract_javadoc(member, source)
                    ))
            elif member.type in _CLASS_KINDS:
                inner = self._extract_class_like(member, source, file_path, package_name, nested_path)
                if inner is not None:
                    nested.append(inner)

        if kind == "record":
            components = self._extract_parameters(node, source)
            fields = [FieldDeclaration(name=c.name, type_text=c.type_text) for c in components] + fields
            if not self._has_constructor_with(constructors, components):
                constructors.insert(0, FunctionDeclaration(
                    name=CONSTRUCTOR_NAME, parameters=components, doc_comment=canonical_doc
                ))

        return ClassDeclaration(
            name=name,
            qualified_name=self._qualify(package_name, nested_path),
            package_name=package_name,
            kind=kind,
            annotations=extract_annotations(node, source),
            doc_comment=extract_javadoc(node, source),
            functions=functions,
            constructors=constructors,
            fields=fields,
            nested_classes=nested,
            file_path=str(file_path) if file_path else None,
        )

    def _members(self, body: Node | None) -> Iterator[Node]:
        """
        본문의 멤버 노드를 순회한다.

        enum 본문은 상수 목록 뒤의 enum_body_declarations 안에 메서드/필드가 들어 있으므로 한 단계 더 내려간다.
        """
        if body is None:
            return
        for member in body.children:
            if member.type == "enum_body_declarations":
                yield from member.children
            else:
                yield member

    def _extract_function(self, node: Node, source: bytes, name: str | None) -> FunctionDeclaration:
        return FunctionDeclaration(
            name=name or "",
            parameters=self._extract_parameters(node, source),
            doc_comment=extract_javadoc(node, source),
            annotations=extract_annotations(node, source),
        )

    def _extract_parameters(self, node: Node, source: bytes) -> list[ParameterDeclaration]:
        """
        메서드/생성자/record의 파라미터 목록을 추출한다.

        - formal_parameter: 일반 파라미터. "int values[]"처럼 이름 뒤의 차원도 타입에 붙인다.
        - spread_parameter: 가변 인수 (String... args). 런타임에는 배열이므로 "String[]"이 된다.
        - receiver_parameter (Foo this): 실제 파라미터가 아니므로 제외한다.
        """
        params: list[ParameterDeclaration] = []
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return params

        for child in params_node.children:
            if child.type == "formal_parameter":
                type_node = child.child_by_field_name("type")
                name_node = child.child_by_field_name("name")
                dimensions = child.child_by_field_name("dimensions")
                suffix = _dimension_suffix(dimensions, source) if dimensions else ""
                resolved = resolve_type_node(type_node, source)
                params.append(ParameterDeclaration(
                    name=node_text(name_node, source) if name_node else "",
                    type_text=(node_text(type_node, source) if type_node else "") + suffix,
                    resolved_type=resolved + suffix if resolved else None,
                ))
            elif child.type == "spread_parameter":
                type_node = next(
                    (c for c in child.named_children
                     if c.type not in ("modifiers", "variable_declarator", *ANNOTATION_NODE_TYPES)),
                    None,
                )
                declarator = self._find_child(child, "variable_declarator")
                name_node = declarator.child_by_field_name("name") if declarator else None
                resolved = resolve_type_node(type_node, source)
                params.append(ParameterDeclaration(
                    name=node_text(name_node, source) if name_node else "",
                    type_text=(node_text(type_node, source) if type_node else "") + "[]",
                    resolved_type=resolved + "[]" if resolved else None,
                ))
        return params

    def _extract_fields(self, node: Node, source: bytes) -> list[FieldDeclaration]:
        """
        필드 선언에서 선언자마다 FieldDeclaration을 만든다.

        Java AST 구조:
            field_declaration
            ├── modifiers
            ├── type
            ├── variable_declarator (name = "a")
            └── variable_declarator (name = "b")    ← int a, b;

        Javadoc은 선언문 전체에 붙으므로 모든 선언자가 같은 주석을 공유한다.
        """
        type_node = node.child_by_field_name("type")
        type_text = node_text(type_node, source) if type_node else None
        doc_comment = extract_javadoc(node, source)
        fields = []
        for child in node.children:
            if child.type != "variable_declarator":
                continue
            name_node = child.child_by_field_name("name")
            if name_node:
                fields.append(FieldDeclaration(
                    name=node_text(name_node, source), type_text=type_text, doc_comment=doc_comment
                ))
        return fields

    @staticmethod
    def _has_constructor_with(
        constructors: list[FunctionDeclaration], parameters: list[ParameterDeclaration]
    ) -> bool:
        # record에 정식 생성자를 직접 선언한 경우 암시적 생성자를 만들지 않는다
        expected = [p.type_text for p in parameters]
        return any([p.type_text for p in c.parameters] == expected for c in constructors)

    def _get_name(self, node: Node, source: bytes) -> str | None:
        """노드의 name 필드에서 식별자를 추출한다."""
        name_node = node.child_by_field_name("name")
        if name_node:
            return node_text(name_node, source)
        return None

    def _qualify(self, package: str | None, nested_path: str) -> str:
        """
        패키지명과 중첩 경로를 조합하여 정규화된 이름을 만든다.

        예: ("com.example", "Outer.Inner") → "com.example.Outer.Inner"
        """
        return f"{package}.{nested_path}" if package else nested_path

    def _find_child(self, node: Node, child_type: str) -> Node | None:
        """특정 타입의 자식 노드를 찾아 반환한다."""
        for child in node.children:
            if child.type == child_type:
                return child
        return None


def scan_sources(
    source_root: Path,
    parser: JavaParser | None = None,
    extractor: DeclarationExtractor | None = None,
) -> list[ClassDeclaration]:
    """
    소스 루트 아래의 모든 .java 파일을 파싱하여 최상위 선언을 모은다.

    파일은 경로 순으로 정렬하여 처리한다. 읽을 수 없는 파일은 경고 후 건너뛴다.

    Args:
        source_root: Java 소스 루트 (예: src/main/java)

    Returns:
        모든 파일의 최상위 ClassDeclaration 리스트
    """
    parser = parser or JavaParser()
    extractor = extractor or DeclarationExtractor()
    java_files = sorted(Path(source_root).rglob("*.java"))
    logger.info("Java 파일 수: %d개", len(java_files))

    declarations: list[ClassDeclaration] = []
    for i, java_file in enumerate(java_files, 1):
        try:
            tree, source = parser.parse_file(java_file)
        except OSError as e:
            logger.warning("%s 파일을 읽지 못해 건너뜁니다: %s", java_file, e)
            continue
        found = extractor.extract(tree, source, java_file)
        declarations.extend(found)
        logger.debug("[%d/%d] %s → %d개 선언", i, len(java_files), java_file.name, len(found))
    return declarations
