"""Name inflection helpers for class and association names."""

import re

import inflection

_NAMESPACE_SEPARATOR = re.compile(r"::|\.")


def underscore_name(name: str) -> str:
    """Convert a class name to its underscored, path-like form.

    Namespace separators (``::`` or ``.``) become path separators.

    Examples:
        >>> underscore_name("LineItem")
        'line_item'
        >>> underscore_name("Admin::UserAccount")
        'admin/user_account'
    """
    name = name.strip().lstrip(":")
    segments = [s for s in _NAMESPACE_SEPARATOR.split(name) if s]
    return "/".join(inflection.underscore(segment) for segment in segments)


def pluralize_name(name: str) -> str:
    """Pluralize the last path segment of an underscored name."""
    head, _, tail = name.rpartition("/")
    plural = inflection.pluralize(tail)
    return f"{head}/{plural}" if head else plural


def default_association_name(macro: str, class_name: str) -> str:
    """Name an association would get by convention.

    ``has_many`` and ``has_and_belongs_to_many`` use the plural of the
    target's underscored basename, the singular macros use the basename.
    """
    basename = underscore_name(class_name).rpartition("/")[2]
    if macro in ("has_many", "has_and_belongs_to_many"):
        return inflection.pluralize(basename)
    return basename
