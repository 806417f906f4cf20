def path_matches(path: str, allowed_paths: set[str]) -> bool:
    """Check if path matches any allowed path, ignoring a trailing slash."""
    if path in allowed_paths:
        return True

    if path.endswith("/"):
        return path[:-1] in allowed_paths
    return f"{path}/" in allowed_paths


def path_has_prefix(path: str, prefixes: list[str]) -> bool:
    """Check if path equals or is nested under any of the prefixes.

    Matching is per path segment, so ``/api/v1/auth/logout`` matches
    ``/api/v1/auth/logout/all`` but not ``/api/v1/auth/logoutx``.
    """
    for prefix in prefixes:
        prefix = prefix.rstrip("/")
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False
