"""Clickable source links for model nodes."""

from collections.abc import Iterable

from ..inflector import underscore_name
from ..utils.paths import normalize_path


def resolve_source_url(
    class_name: str,
    base: str | None,
    known_files: Iterable[str] = (),
    layouts: Iterable[str] = ("{path}.rb",),
    source_file: str | None = None,
) -> str | None:
    """Build the source URL of a class.

    A file the class declares itself is used as is. Otherwise each layout
    template is filled with the underscored class path and probed against
    the known source files; the first hit wins. Without a hit the first
    layout is used.

    Examples:
        >>> resolve_source_url("Admin::User", "https://git.example/app/blob/main",
        ...                    ["app/models/admin/user.rb"], ["app/models/{path}.rb"])
        'https://git.example/app/blob/main/app/models/admin/user.rb'
    """
    if not base:
        return None

    if source_file:
        return f"{base.rstrip('/')}/{normalize_path(source_file).lstrip('/')}"

    path = underscore_name(class_name)
    candidates = [layout.format(path=path) for layout in layouts]
    if not candidates:
        return None

    known = {normalize_path(f) for f in known_files}
    relative = next((c for c in candidates if c in known), candidates[0])
    return f"{base.rstrip('/')}/{relative.lstrip('/')}"
