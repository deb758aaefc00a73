"""
주석 및 어노테이션 추출 모듈.

tree-sitter AST 노드에서 다음 요소를 추출하는 헬퍼 함수들:
- Javadoc 주석 (/** ... */): 구분자를 떼어 파서에 넘길 원문으로 만든다
- 어노테이션 (@RestController, @Deprecated 등)

tree-sitter AST 구조 (Java):
    class_body
    ├── block_comment ("/** ... */")   ← 선언 바로 앞의 형제 노드
    └── method_declaration
        ├── modifiers
        │   ├── marker_annotation (@Override처럼 인수 없는 어노테이션)
        │   ├── annotation (@RequestMapping("/api")처럼 인수 있는 어노테이션)
        │   └── "public", "static" 등의 키워드 노드
        └── name (identifier)
"""

from tree_sitter import Node

ANNOTATION_NODE_TYPES = ("marker_annotation", "annotation")

# 구버전 tree-sitter-java는 모든 주석을 "comment" 노드로 만든다
_COMMENT_NODE_TYPES = ("block_comment", "comment")


def extract_javadoc(node: Node, source: bytes) -> str | None:
    """
    선언 노드 바로 앞의 Javadoc 주석을 구분자 없이 추출한다.

    prev_named_sibling이 /**로 시작하는 블록 주석일 때만 Javadoc으로 본다.
    일반 블록 주석(/* ... */)과 라인 주석(// ...)은 제외된다.

    Args:
        node: 클래스/메서드/필드 등의 선언 노드
        source: 원본 소스 바이트

    Returns:
        "/**", "*/"를 제거한 주석 원문 또는 None
    """
    prev = node.prev_named_sibling
    if prev is None or prev.type not in _COMMENT_NODE_TYPES:
        return None
    text = node_text(prev, source)
    # "/**/"는 여는 "/*"와 닫는 "*/"가 겹친 빈 일반 주석이다
    if not text.startswith("/**") or len(text) < 5:
        return None
    return strip_comment_delimiters(text)


def strip_comment_delimiters(text: str) -> str:
    """
    "/** ... */"에서 여는/닫는 구분자를 제거한다.

    줄 앞의 '*' 장식은 남겨 두며, 주석 파서가 줄 단위로 제거한다.
    """
    body = text.strip()
    if body.startswith("/**"):
        body = body[3:]
    if body.endswith("*/"):
        body = body[:-2]
    return body


def extract_annotations(node: Node, source: bytes) -> list[str]:
    """
    선언 노드의 modifiers에서 어노테이션 이름을 추출한다.

    - marker_annotation: 인수 없음 (예: @Deprecated)
    - annotation: 인수 있음 (예: @RequestMapping(path="/api"))

    두 경우 모두 name 필드의 이름에 @를 붙인다. 정규화 이름으로 쓴 어노테이션은
    그대로 유지된다 (예: "@org.springframework.web.bind.annotation.RestController").

    Returns:
        어노테이션 이름 리스트 (예: ["@RestController", "@RequestMapping"])
    """
    modifiers = next((c for c in node.children if c.type == "modifiers"), None)
    if modifiers is None:
        return []
    names = (
        annotation.child_by_field_name("name")
        for annotation in modifiers.named_children
        if annotation.type in ANNOTATION_NODE_TYPES
    )
    return ["@" + node_text(name, source) for name in names if name is not None]


def node_text(node: Node, source: bytes) -> str:
    """노드가 가리키는 원본 소스 구간을 문자열로 돌려준다."""
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
