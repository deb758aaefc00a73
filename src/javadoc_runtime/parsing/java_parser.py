"""
Javadoc 추출 프런트엔드의 진입점.

.java 파일 하나를 읽어 tree-sitter-java 문법 트리로 바꾼다. 선언과 주석을
꺼내는 일은 extractors와 comment_extractor가 이 트리를 받아서 한다.

    parser = JavaParser()
    tree, source = parser.parse_file(Path("OrderController.java"))
    declarations = DeclarationExtractor().extract(tree, source)
"""

from pathlib import Path

import tree_sitter_java as tsjava
from tree_sitter import Language, Parser, Tree

# 문법은 프로세스당 하나만 로드해서 모든 JavaParser가 나눠 쓴다
JAVA_LANGUAGE = Language(tsjava.language())


class JavaParser:
    """
    소스 바이트를 문법 트리로 바꾼다.

    트리 노드의 위치는 바이트 오프셋이라서 원본도 bytes로 들고 다닌다.
    내부 Parser는 스레드 간에 공유하지 않는다. scan_sources는 호출마다 하나를 만들어 쓴다.
    """

    def __init__(self):
        self.parser = Parser(JAVA_LANGUAGE)

    def parse_file(self, file_path: Path) -> tuple[Tree, bytes]:
        """
        파일 내용을 인코딩 해석 없이 읽어 (트리, 원본 바이트)로 돌려준다.

        Raises:
            OSError: 읽기에 실패했을 때. scan_sources가 경고를 남기고 그 파일만 건너뛴다
        """
        source = file_path.read_bytes()
        return self.parse_source(source), source

    def parse_source(self, source: bytes) -> Tree:
        """메모리에 있는 소스를 파싱한다. 문법이 깨진 소스도 ERROR 노드가 섞인 트리로 돌려준다."""
        return self.parser.parse(source)
