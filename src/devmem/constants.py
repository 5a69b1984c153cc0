"""Static configuration for devmem: languages, ignore rules and limits."""

# Extension allow-list mapped to the language hint used in code fences.
LANGUAGE_MAP: dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "jsx",
    ".py": "python",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
}

ALWAYS_IGNORE_PATTERNS: list[str] = [
    "node_modules/",
    "dist/",
    "build/",
    ".git/",
    "coverage/",
]

# Declaration and control-flow words that carry no search value.
KEYWORD_STOPLIST: frozenset[str] = frozenset(
    {"const", "let", "var", "if", "else", "for", "while", "return", "function", "class"}
)
MIN_KEYWORD_LENGTH = 3

SNIPPET_LENGTH = 200

DEFAULT_SEARCH_LIMIT = 10
EXPORT_FETCH_LIMIT = 1000
EXPORT_GROUP_LIMIT = 20
DEFAULT_EXPORT_FILE = "./devmem-context.md"

DATA_DIR_NAME = ".devmem"
DB_FILE_NAME = "index.db"
DATA_DIR_ENV = "DEVMEM_HOME"
