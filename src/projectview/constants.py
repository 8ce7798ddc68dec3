"""Default configuration values for projectview."""

# Directory-name substrings pruned from every listing.
DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = (".git", ".next", "node_modules")

# Extra gitwildmatch patterns applied when gitignore support is enabled.
ALWAYS_IGNORE_PATTERNS: tuple[str, ...] = (
    # Version Control
    ".git/",
    ".svn/",
    ".hg/",
    # Dependencies
    "node_modules/",
    "bower_components/",
    # Build outputs
    ".next/",
    ".nuxt/",
    ".turbo/",
    ".vercel/",
    # Python
    "__pycache__/",
    "*.pyc",
    ".venv/",
    ".pytest_cache/",
    ".mypy_cache/",
    ".ruff_cache/",
    # OS
    ".DS_Store",
    "Thumbs.db",
)

DEFAULT_ENCODING = "utf-8"

CONTAINMENT_PREFIX = "prefix"
CONTAINMENT_ANCESTRY = "ancestry"
CONTAINMENT_MODES = (CONTAINMENT_PREFIX, CONTAINMENT_ANCESTRY)

FILE_PATH_REQUIRED = "File path is required"
PATH_TRAVERSAL_DETECTED = "Invalid file path: Path traversal detected"
FETCH_FAILED_PREFIX = "Failed to fetch file content"
LIST_FAILED = "Failed to list files"

LANGUAGE_MAP: dict[str, str] = {
    # Python
    ".py": "python",
    ".pyi": "python",
    "pyproject.toml": "toml",
    "setup.cfg": "ini",
    "requirements.txt": "text",
    # JavaScript/TypeScript/Node
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "jsx",
    ".ts": "typescript",
    ".tsx": "tsx",
    "package.json": "json",
    "tsconfig.json": "json",
    # Web
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".vue": "vue",
    ".svelte": "svelte",
    # Other languages
    ".java": "java",
    ".kt": "kotlin",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cs": "csharp",
    ".go": "go",
    ".rs": "rust",
    ".rb": "ruby",
    ".php": "php",
    ".swift": "swift",
    # Shell
    ".sh": "bash",
    ".bash": "bash",
    ".zsh": "zsh",
    ".ps1": "powershell",
    # Data & config
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".ini": "ini",
    ".xml": "xml",
    ".sql": "sql",
    ".env": "bash",
    # Docs
    ".md": "markdown",
    ".mdx": "markdown",
    ".rst": "rst",
    ".txt": "text",
    # Build
    "dockerfile": "dockerfile",
    "makefile": "makefile",
    "Makefile": "makefile",
}
