"""Markdown rendering of listings, single files and whole-project dumps."""

import re
import sys
from datetime import datetime

from tqdm import tqdm

from projectview.browser import ProjectBrowser
from projectview.language_detection import get_language_from_path
from projectview.models import FileContent, FileListing, Snapshot


def generate_gfm_anchor(heading_text: str, occurrences: dict[str, int] | None = None) -> str:
    """Slug a heading the way GitHub builds its heading anchors.

    Punctuation is dropped, underscores and hyphens survive, and every space
    becomes one hyphen. Pass the same ``occurrences`` dict for every heading of
    a document so repeated slugs get GitHub's ``-1``, ``-2`` suffixes.

    Examples:
        >>> generate_gfm_anchor("File: `src/__init__.py`")
        'file-src__init__py'
    """
    base = re.sub(r"[^\w\- ]", "", heading_text.lower()).replace(" ", "-")
    if occurrences is None:
        return base

    slug = base
    while slug in occurrences:
        occurrences[base] += 1
        slug = f"{base}-{occurrences[base]}"
    occurrences.setdefault(base, 0)
    occurrences[slug] = 0
    return slug


def code_fence(content: str, language: str) -> str:
    """Wrap ``content`` in a fence longer than any backtick run it contains."""
    longest = max((len(run) for run in re.findall(r"`+", content)), default=0)
    fence = "`" * max(3, longest + 1)
    body = content if content.endswith("\n") or not content else content + "\n"
    return f"{fence}{language}\n{body}{fence}\n"


def generate_file_list(listing: FileListing) -> str:
    """Markdown bullet list of the listing, or a notice when it is empty or failed."""
    if listing.failure is not None:
        return f"> ⚠ {listing.failure.message}\n"
    if not listing.files:
        return "_No files found._\n"
    return "".join(f"- `{path}`\n" for path in listing.files)


def generate_file_section(selected: FileContent) -> str:
    """Heading plus fenced content, or the error, for one read result."""
    section = f"## File: `{selected.path}`\n\n"
    if selected.failure is not None:
        return section + f"> ❌ Could not read file: {selected.failure.message}\n"
    return section + code_fence(selected.content, get_language_from_path(selected.path))


def render_page(snapshot: Snapshot, root: str) -> str:
    """Render one page request: the file list and, if any, the selected file."""
    page = f"# 📂 Project: {root}\n\n"
    page += f"## 📑 Files ({len(snapshot.listing.files)})\n\n"
    page += generate_file_list(snapshot.listing)
    if snapshot.selected is not None:
        page += "\n---\n\n"
        page += generate_file_section(snapshot.selected)
    return page


def render_dump(browser: ProjectBrowser, verbose: bool = False) -> str:
    """Render every listed file into one Markdown document.

    Files that cannot be read are skipped with a warning on stderr and left
    out of the table of contents.
    """
    listing = browser.list_files()
    if listing.failure is not None:
        print(f"⚠ Warning: {listing.failure.message}", file=sys.stderr)

    included: list[FileContent] = []
    with tqdm(total=len(listing.files), desc="Reading", unit="file") as pbar:
        for path in listing.files:
            selected = browser.read_file(path)
            if selected.failure is not None:
                print(f"⚠ Warning: Could not read {path}: {selected.failure.message}", file=sys.stderr)
            else:
                included.append(selected)
                if verbose:
                    pbar.write(f"  ✓ {path} ({len(selected.content)} chars)", file=sys.stderr)
            pbar.update(1)

    doc = f"# 📦 Project Dump: {browser.root}\n\n"
    doc += f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n"
    doc += "---\n\n"

    doc += "## 📑 Table of Contents\n\n"
    occurrences: dict[str, int] = {}
    for selected in included:
        # Anchor matches the heading written below
        anchor = generate_gfm_anchor(f"File: `{selected.path}`", occurrences)
        doc += f"- [`{selected.path}`](#{anchor})\n"
    doc += "\n---\n\n"

    for selected in included:
        doc += f"### File: `{selected.path}`\n\n"
        doc += code_fence(selected.content, get_language_from_path(selected.path))
        doc += "\n---\n\n"

    doc += f"_{len(included)} of {len(listing.files)} files included._\n"
    return doc
