"""
Path resolution for the File Explorer.

Paths are built by plain string concatenation against the session's current
directory. Embedded ``.``, ``..`` and repeated slashes are left as typed;
the filesystem interprets them when the path is used.
"""


def resolve(session_path: str, token: str) -> str:
    """
    Turn a navigation token into an absolute path.

    Args:
        session_path: Current directory of the session (absolute)
        token: ``..``, an absolute path, or a path relative to session_path

    Returns:
        The absolute path the token refers to. No existence check is made.
    """
    if token == "..":
        return parent(session_path)
    if token.startswith("/"):
        return token
    return join(session_path, token)


def parent(path: str) -> str:
    """Strip the last segment of an absolute path; ``/`` has no parent but itself."""
    pos = path.rfind("/")
    if pos > 0:
        return path[:pos]
    return "/"


def join(session_path: str, name: str) -> str:
    """Append a bare name to a directory path."""
    if session_path.endswith("/"):
        return session_path + name
    return session_path + "/" + name
