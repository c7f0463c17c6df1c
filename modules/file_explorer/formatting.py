"""
Metadata formatting for the File Explorer.

Renders raw stat() data (mode bits, ids, sizes) into display strings.
"""

import grp
import pwd
import stat
from enum import Enum


class FileType(Enum):
    """Kind of filesystem object, derived from its mode bits."""
    DIR = "DIR"
    FILE = "FILE"
    LINK = "LINK"
    CHR = "CHR"
    BLK = "BLK"
    FIFO = "FIFO"
    SOCK = "SOCK"
    UNKNOWN = "UNKN"


# First match wins.
_TYPE_CHECKS = (
    (stat.S_ISDIR, FileType.DIR),
    (stat.S_ISREG, FileType.FILE),
    (stat.S_ISLNK, FileType.LINK),
    (stat.S_ISCHR, FileType.CHR),
    (stat.S_ISBLK, FileType.BLK),
    (stat.S_ISFIFO, FileType.FIFO),
    (stat.S_ISSOCK, FileType.SOCK),
)

_PERMISSION_BITS = (
    (stat.S_IRUSR, "r"), (stat.S_IWUSR, "w"), (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"), (stat.S_IWGRP, "w"), (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"), (stat.S_IWOTH, "w"), (stat.S_IXOTH, "x"),
)

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def classify(mode: int) -> FileType:
    """Return the FileType encoded in a st_mode value."""
    for check, file_type in _TYPE_CHECKS:
        if check(mode):
            return file_type
    return FileType.UNKNOWN


def permission_string(mode: int) -> str:
    """Return the 9-character rwxrwxrwx string for a st_mode value."""
    return "".join(ch if mode & bit else "-" for bit, ch in _PERMISSION_BITS)


def human_size(num_bytes: int) -> str:
    """
    Format a byte count with binary units.

    >>> human_size(1536)
    '1.50 KB'
    """
    size = float(num_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1
    return f"{size:.2f} {SIZE_UNITS[unit_index]}"


def owner_name(uid: int) -> str:
    """User name for a uid, or the uid itself when it has no entry."""
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def group_name(gid: int) -> str:
    """Group name for a gid, or the gid itself when it has no entry."""
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)
