"""Regex-based extraction of functions, classes and import patterns.

Extraction works on surface syntax only. Each construct is located with a
regular expression and its body is cut out by matching braces from the start
of the match, so results are best-effort: malformed code yields fewer units,
never an exception.
"""

import re

from devmem.constants import KEYWORD_STOPLIST, MIN_KEYWORD_LENGTH, SNIPPET_LENGTH
from devmem.models import CodeUnit, ExtractionResult, UnitKind

FUNCTION_PATTERN = re.compile(
    r"(?:async\s+)?function\s+(?P<declared>\w+)"
    r"|(?:const|let)\s+(?P<bound>\w+)\s*=\s*(?:async\s+)?\("
    r"|(?P<called>\w+)\s*\([^)]*\)\s*\{",
    re.ASCII,
)
CLASS_PATTERN = re.compile(r"class\s+(?P<name>\w+)", re.ASCII)
IMPORT_PATTERN = re.compile(r"""import\s+.+\s+from\s+['"](.+)['"]""")
IDENTIFIER_PATTERN = re.compile(r"\b[A-Za-z_][A-Za-z0-9_]*\b", re.ASCII)

QUOTE_CHARS = ("'", '"')


def find_closing_brace(text: str, start: int) -> int:
    """Find the end of the brace-delimited block opened at or after ``start``.

    Quoted string literals are skipped so that braces inside them do not
    count. Comments, regex literals and template strings are not understood.

    Args:
        text: Full source text
        start: Offset to start scanning from

    Returns:
        Offset just past the ``}`` that closes the first block, or
        ``len(text)`` when the block never closes
    """
    depth = 0
    quote = ""

    for i in range(start, len(text)):
        char = text[i]

        if quote:
            if char == quote and text[i - 1] != "\\":
                quote = ""
            continue

        if char in QUOTE_CHARS:
            quote = char
            continue

        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i + 1

    return len(text)


def extract_keywords(code: str) -> str:
    """Derive the space-joined search keywords of a code slice.

    Tokens are lower-cased, stoplist words and tokens shorter than three
    characters are dropped, and duplicates keep their first position.
    """
    keywords: dict[str, None] = {}
    for token in IDENTIFIER_PATTERN.findall(code):
        word = token.lower()
        if len(word) < MIN_KEYWORD_LENGTH or word in KEYWORD_STOPLIST:
            continue
        keywords.setdefault(word, None)
    return " ".join(keywords)


def line_number_at(text: str, offset: int) -> int:
    """1-based line number of ``offset`` in ``text``."""
    return text.count("\n", 0, offset) + 1


def build_unit(kind: UnitKind, name: str, text: str, start: int) -> CodeUnit:
    """Cut the unit starting at ``start`` out of ``text``.

    The end line is the start line plus the number of newlines inside the
    extracted body.
    """
    end = find_closing_brace(text, start)
    code = text[start:end]
    line_start = line_number_at(text, start)
    return CodeUnit(
        kind=kind,
        name=name,
        raw_text=code,
        snippet=code[:SNIPPET_LENGTH],
        line_start=line_start,
        line_end=line_start + code.count("\n"),
        keywords=extract_keywords(code),
    )


def extract_functions(text: str) -> list[CodeUnit]:
    functions = []
    for match in FUNCTION_PATTERN.finditer(text):
        name = match.group("declared") or match.group("bound") or match.group("called")
        if name:
            functions.append(build_unit(UnitKind.FUNCTION, name, text, match.start()))
    return functions


def extract_classes(text: str) -> list[CodeUnit]:
    return [
        build_unit(UnitKind.CLASS, match.group("name"), text, match.start())
        for match in CLASS_PATTERN.finditer(text)
    ]


def extract_patterns(text: str) -> list[str]:
    """Collect ``import:<module>`` tags for ES-style import statements."""
    return [f"import:{module}" for module in IMPORT_PATTERN.findall(text)]


def extract_units(text: str) -> ExtractionResult:
    """Run every extraction pass over the text of one file."""
    return ExtractionResult(
        functions=extract_functions(text),
        classes=extract_classes(text),
        patterns=extract_patterns(text),
    )
