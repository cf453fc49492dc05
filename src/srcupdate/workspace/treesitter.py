# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared helpers for working with the C and C++ Tree-sitter grammars."""

from __future__ import annotations

import importlib
from collections.abc import Callable, Iterator
from functools import lru_cache
from pathlib import Path
from typing import Final, cast

from tree_sitter import Language, Node, Parser, Tree

C_GRAMMAR: Final[str] = "c"
CPP_GRAMMAR: Final[str] = "cpp"
_GRAMMAR_MODULES: Final[dict[str, str]] = {
    C_GRAMMAR: "tree_sitter_c",
    CPP_GRAMMAR: "tree_sitter_cpp",
}
_CPP_SUFFIXES: Final[frozenset[str]] = frozenset(
    {".cc", ".cpp", ".cxx", ".c++", ".hh", ".hpp", ".hxx", ".h++", ".ipp", ".tpp"},
)


def grammar_for(path: Path) -> str:
    """Return the grammar token used to parse ``path``."""

    return CPP_GRAMMAR if path.suffix.lower() in _CPP_SUFFIXES else C_GRAMMAR


@lru_cache(maxsize=None)
def load_language(grammar: str) -> Language:
    """Return the compiled Tree-sitter language for ``grammar``.

    Raises:
        RuntimeError: If the grammar package is not installed.
    """

    module_name = _GRAMMAR_MODULES.get(grammar)
    if module_name is None:
        raise RuntimeError(f"unsupported grammar '{grammar}'")
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        raise RuntimeError(f"Tree-sitter grammar package '{module_name}' is not installed") from exc
    return Language(module.language())


def build_parser(grammar: str) -> Parser:
    """Return a new parser configured for ``grammar``.

    Raises:
        RuntimeError: If the grammar cannot be loaded.
    """

    parser = Parser()
    language = load_language(grammar)
    if hasattr(parser, "set_language"):
        setter = cast(Callable[[Language], None], getattr(parser, "set_language"))
        setter(language)
    else:
        setattr(parser, "language", language)
    return parser


def parse_source(content: bytes, path: Path) -> Tree:
    """Parse ``content`` using the grammar matching ``path``."""

    return build_parser(grammar_for(path)).parse(content)


def iter_nodes(root: Node, *, skip_errors: bool = False) -> Iterator[Node]:
    """Yield ``root`` and its descendants in source order.

    Args:
        root: Node to start from.
        skip_errors: Do not descend into ``ERROR`` nodes.
    """

    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if skip_errors and node.type == "ERROR":
            continue
        stack.extend(reversed(node.children))


def node_text(content: bytes, node: Node) -> str:
    """Return the source text spanned by ``node``."""

    return content[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


__all__ = ["build_parser", "grammar_for", "iter_nodes", "load_language", "node_text", "parse_source"]
