"""Path normalization for source file listings."""


def normalize_path(path: str) -> str:
    """Convert a source path to relative forward slash form.

    Examples:
        >>> normalize_path("app\\\\models\\\\user.rb")
        'app/models/user.rb'
        >>> normalize_path("./app/models/user.rb")
        'app/models/user.rb'
    """
    if not path:
        return path

    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized
