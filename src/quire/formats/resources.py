# ABOUTME: Resource path and manifest id helpers shared by the OPF reader and writer.
# ABOUTME: Keeps id derivation in one place so manifest ids and spine idrefs agree.

import re
from collections.abc import Iterable, Sequence
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote

from quire.formats.constants import CHAPTER_SUFFIX, FALLBACK_CHAPTER_STEM

if TYPE_CHECKING:
    from quire.model.chapter import Chapter

_MAX_COLLISION_ATTEMPTS = 10_000

# Path separators plus characters Windows refuses in file names.
_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|#%\x00-\x1f]+')


def derive_id(resource_path: str) -> str:
    """Return the manifest id for a resource: its file name without extension."""
    return PurePosixPath(resource_path).stem


def _sanitize_stem(title: str) -> str:
    cleaned = _UNSAFE_CHARS.sub("_", title).strip().strip(".")
    return cleaned or FALLBACK_CHAPTER_STEM


def _free_name(stem: str, taken_ids: set[str]) -> str:
    if stem.casefold() not in taken_ids:
        return stem
    for counter in range(1, _MAX_COLLISION_ATTEMPTS + 1):
        candidate = f"{stem}_{counter}"
        if candidate.casefold() not in taken_ids:
            return candidate
    raise ValueError(
        f"Could not find a free resource name after "
        f"{_MAX_COLLISION_ATTEMPTS} attempts: {stem}"
    )


def fallback_resource_path(title: str, taken_ids: set[str]) -> str:
    """Build a title-derived chapter file name whose id is not in taken_ids.

    Ids are compared case-insensitively because archives are often
    extracted onto case-insensitive filesystems. A colliding name gets
    ``_1``, ``_2``, ... appended to its stem.

    Args:
        title: Chapter title to derive the name from.
        taken_ids: Casefolded ids already in use.

    Returns:
        A relative resource path such as ``"Chapter One.xhtml"``.
    """
    return f"{_free_name(_sanitize_stem(title), taken_ids)}{CHAPTER_SUFFIX}"


def assign_resource_paths(chapters: Iterable["Chapter"]) -> None:
    """Give every chapter without a resource path a unique fallback path.

    Chapters that already carry a path keep it, and their ids are reserved
    before any fallback is chosen so explicit paths always win.
    """
    chapters = list(chapters)
    taken = {
        derive_id(ch.resource_path).casefold()
        for ch in chapters
        if ch.resource_path is not None
    }
    for chapter in chapters:
        if chapter.resource_path is not None:
            continue
        chapter.resource_path = fallback_resource_path(chapter.title, taken)
        taken.add(derive_id(chapter.resource_path).casefold())


def manifest_ids(chapters: Sequence["Chapter"]) -> list[str]:
    """Return one manifest id per chapter, in chapter order.

    Each id is derive_id of the resource path. Chapters in different
    directories can share a file stem; the later ones get ``_1``, ``_2``,
    ... so every id stays unique while the file names are left alone.
    """
    derived = [derive_id(ch.resource_path) for ch in chapters]
    taken = {resource_id.casefold() for resource_id in derived}
    used: set[str] = set()
    ids = []
    for resource_id in derived:
        if resource_id.casefold() in used:
            resource_id = _free_name(resource_id, taken)
            taken.add(resource_id.casefold())
        used.add(resource_id.casefold())
        ids.append(resource_id)
    return ids


def href_for(resource_path: str) -> str:
    """Percent-encode a resource path for use as a manifest href."""
    return quote(resource_path, safe="/")


def resource_path_for(href: str) -> str:
    """Decode a manifest href back into a resource path, dropping any fragment."""
    return unquote(href.split("#", 1)[0])


def resolve_inside(root: Path, relative: str) -> Path | None:
    """Join relative onto root, or return None if the result escapes root."""
    if not relative or PurePosixPath(relative).is_absolute():
        return None
    base = root.resolve()
    candidate = (base / relative).resolve()
    if candidate == base or not candidate.is_relative_to(base):
        return None
    return candidate
