"""Language hints for fenced code blocks."""

import pathlib

from projectview.constants import LANGUAGE_MAP

FALLBACK_LANGUAGE = "text"


def _lookup_keys(path: pathlib.PurePath) -> tuple[str, ...]:
    # Whole names win over suffixes; Makefile is keyed case-sensitively.
    return (path.name.lower(), path.name, path.suffix.lower())


def get_language_from_path(file_path: str | pathlib.PurePath) -> str:
    """Return the fence language hint for ``file_path``.

    Examples:
        >>> get_language_from_path("src/app/page.tsx")
        'tsx'
        >>> get_language_from_path("LICENSE")
        'text'
    """
    path = pathlib.PurePath(file_path)
    for key in _lookup_keys(path):
        if key and key in LANGUAGE_MAP:
            return LANGUAGE_MAP[key]

    # Workflow files are YAML whatever they are named
    if path.parts[:2] == (".github", "workflows"):
        return "yaml"
    return FALLBACK_LANGUAGE
