"""Finds initialized top-level variables in C source files."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path

from a2lgen.c_syntax import NodeKind, parse_top_level

logger = logging.getLogger(__name__)


class CodeParser:
    """Collects C files and reports the plainly named variables they initialize."""

    def __init__(self) -> None:
        self.file_paths: list[str] = []

    def add_file_path(self, file_path: str | PathLike[str]) -> None:
        """Remember a file to be parsed."""
        self.file_paths.append(str(file_path))

    def parse_file(self, file_path: str | PathLike[str]) -> list[str]:
        """Read a C file and return the names of its initialized top-level variables."""
        code = Path(file_path).read_text(encoding="utf-8")
        return self.find_variables(code)

    def find_variables(self, code: str) -> list[str]:
        """Names of top-level variables declared as ``<type> name = <value>``, in order."""
        names = []
        for node in parse_top_level(code):
            if node.kind is not NodeKind.DECLARATION:
                continue
            for declarator in node.children:
                if (
                    declarator.kind is NodeKind.INIT_DECLARATOR
                    and declarator.declarator.kind is NodeKind.IDENTIFIER
                ):
                    logger.info("found text:\n%s\n", declarator.name)
                    names.append(declarator.name)
        return names