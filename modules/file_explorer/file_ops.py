"""
File operations for the File Explorer.

Every operation takes bare string arguments, resolves them against the
session's current directory and reports an OperationResult. Failures are
never raised to the caller. Each outcome is written to the audit log.

Metadata is checked before acting on it, so another process can change the
target in between. That race is accepted.
"""

import os
import pwd
import shutil
import stat
from dataclasses import dataclass
from typing import List, Optional

from core.config import ExplorerConfig
from core.logger import AuditLogger, ActionType, ActionStatus

from .formatting import FileType, classify, permission_string, human_size, owner_name, group_name
from .paths import resolve, join
from .results import ErrorKind, OperationResult
from .search import search
from .session import Session


OCTAL_DIGITS = "01234567"


@dataclass
class DirectoryEntry:
    """Information about a file or directory."""
    name: str
    path: str
    file_type: FileType
    mode: int
    permissions: str
    owner: str
    group: str
    size: int

    @classmethod
    def from_stat(cls, name: str, path: str, st: os.stat_result) -> "DirectoryEntry":
        return cls(
            name=name,
            path=path,
            file_type=classify(st.st_mode),
            mode=stat.S_IMODE(st.st_mode),
            permissions=permission_string(st.st_mode),
            owner=owner_name(st.st_uid),
            group=group_name(st.st_gid),
            size=st.st_size,
        )

    @property
    def is_dir(self) -> bool:
        return self.file_type is FileType.DIR

    @property
    def is_executable(self) -> bool:
        """True for non-directories with the owner execute bit set."""
        return not self.is_dir and bool(self.mode & stat.S_IXUSR)

    @property
    def size_human(self) -> str:
        return human_size(self.size)


@dataclass
class DirectoryListing:
    """Entries of one directory, in the order the OS returned them."""
    path: str
    entries: List[DirectoryEntry]

    @property
    def directories(self) -> List[str]:
        """Sorted names of the subdirectories."""
        return sorted(e.name for e in self.entries if e.is_dir)

    @property
    def files(self) -> List[str]:
        """Sorted names of everything that is not a directory."""
        return sorted(e.name for e in self.entries if not e.is_dir)


class FileExplorer:
    """Filesystem operations bound to one explorer session."""

    def __init__(
        self,
        logger: AuditLogger,
        session: Optional[Session] = None,
        config: Optional[ExplorerConfig] = None
    ):
        """
        Initialize FileExplorer.

        Args:
            logger: Audit logger instance
            session: Session holding the current directory (default: process cwd)
            config: Explorer configuration (default: built-in defaults)
        """
        self.logger = logger
        self.session = session or Session.from_cwd()
        self.config = config or ExplorerConfig()

    @property
    def current_path(self) -> str:
        return self.session.current_path

    def _path(self, name: str) -> str:
        return join(self.session.current_path, name)

    def _reject_null_bytes(self, *values: str) -> Optional[OperationResult]:
        """Refuse arguments the OS cannot accept as part of a path or user name."""
        if any("\x00" in value for value in values):
            return OperationResult.fail(ErrorKind.INVALID_ARGUMENT, "Arguments may not contain a null byte")
        return None

    def _record(
        self,
        action_type: ActionType,
        description: str,
        target: str,
        result: OperationResult
    ) -> OperationResult:
        """Write the outcome of an operation to the audit log and pass it through."""
        try:
            self.logger.log_action(
                action_type=action_type,
                description=description,
                target=target,
                status=ActionStatus.EXECUTED if result.success else ActionStatus.FAILED,
                result=result.message,
                metadata={"status": result.status}
            )
        except OSError:
            # A lost audit entry never changes the outcome of the operation
            pass
        return result

    def list_directory(self, detailed: bool = False) -> OperationResult:
        """
        List the contents of the current directory.

        Entries whose metadata cannot be read are left out. Symbolic links
        are reported as LINK rather than as their target.

        Args:
            detailed: Recorded in the audit log; the listing always carries
                full metadata and the caller decides how much to show

        Returns:
            OperationResult whose data is a DirectoryListing
        """
        path = self.session.current_path
        entries = []
        try:
            with os.scandir(path) as it:
                for item in it:
                    try:
                        st = item.stat(follow_symlinks=False)
                    except OSError:
                        continue
                    entries.append(DirectoryEntry.from_stat(item.name, item.path, st))
        except OSError as e:
            result = OperationResult.from_os_error(e, "Cannot open directory")
        else:
            result = OperationResult.ok(
                f"{len(entries)} entries",
                data=DirectoryListing(path=path, entries=entries)
            )

        return self._record(
            ActionType.READ,
            f"{'Detailed list' if detailed else 'List'} directory: {path}",
            path,
            result
        )

    def change_directory(self, token: str) -> OperationResult:
        """
        Move the session to another directory.

        Args:
            token: ``..``, an absolute path, or a path relative to the current directory

        Returns:
            OperationResult whose data is the new current path. On failure
            the current directory is unchanged.
        """
        new_path = resolve(self.session.current_path, token)
        description = f"Change directory: {token}"

        rejected = self._reject_null_bytes(token)
        if rejected:
            return self._record(ActionType.NAVIGATE, description, new_path, rejected)

        try:
            st = os.stat(new_path)
        except OSError as e:
            result = OperationResult.from_os_error(e, f"Directory not found or not accessible: {token}")
        else:
            if stat.S_ISDIR(st.st_mode):
                self.session.current_path = new_path
                result = OperationResult.ok(f"Changed directory to {new_path}", data=new_path)
            else:
                result = OperationResult.fail(ErrorKind.NOT_A_DIRECTORY, f"Not a directory: {token}")

        return self._record(ActionType.NAVIGATE, description, new_path, result)

    def create_directory(self, name: str) -> OperationResult:
        """Create a directory with the configured mode (0755 by default)."""
        path = self._path(name)
        rejected = self._reject_null_bytes(name)
        if rejected:
            return self._record(ActionType.WRITE, f"Create directory: {name}", path, rejected)

        try:
            os.mkdir(path, self.config.directory_mode)
        except OSError as e:
            result = OperationResult.from_os_error(e, f"Cannot create directory {name}")
        else:
            result = OperationResult.ok(f"Directory created successfully: {name}", data=path)

        return self._record(ActionType.WRITE, f"Create directory: {name}", path, result)

    def create_file(self, name: str) -> OperationResult:
        """Create an empty file. An existing file is truncated."""
        path = self._path(name)
        rejected = self._reject_null_bytes(name)
        if rejected:
            return self._record(ActionType.WRITE, f"Create file: {name}", path, rejected)

        try:
            with open(path, "wb"):
                pass
        except OSError as e:
            result = OperationResult.from_os_error(e, f"Cannot create file {name}")
        else:
            result = OperationResult.ok(f"File created successfully: {name}", data=path)

        return self._record(ActionType.WRITE, f"Create file: {name}", path, result)

    def delete_item(self, name: str) -> OperationResult:
        """
        Delete a file or an empty directory.

        A symbolic link is removed itself, never its target.

        Args:
            name: Name relative to the current directory

        Returns:
            OperationResult; DIRECTORY_NOT_EMPTY leaves the directory untouched
        """
        path = self._path(name)
        rejected = self._reject_null_bytes(name)
        if rejected:
            return self._record(ActionType.DELETE, f"Delete: {name}", path, rejected)

        try:
            st = os.lstat(path)
        except OSError as e:
            result = OperationResult.from_os_error(e, f"Item not found: {name}")
            return self._record(ActionType.DELETE, f"Delete: {name}", path, result)

        if stat.S_ISDIR(st.st_mode):
            try:
                os.rmdir(path)
            except OSError as e:
                result = OperationResult.from_os_error(e, f"Cannot delete directory {name}")
                # Some platforms report a non-empty directory as EEXIST
                if result.error is ErrorKind.ALREADY_EXISTS:
                    result = OperationResult.fail(ErrorKind.DIRECTORY_NOT_EMPTY, result.message)
            else:
                result = OperationResult.ok(f"Directory deleted: {name}", data=path)
        else:
            try:
                os.unlink(path)
            except OSError as e:
                result = OperationResult.from_os_error(e, f"Cannot delete file {name}")
            else:
                result = OperationResult.ok(f"File deleted: {name}", data=path)

        return self._record(ActionType.DELETE, f"Delete: {name}", path, result)

    def copy(self, src: str, dest: str) -> OperationResult:
        """
        Copy a regular file's contents and permission bits.

        Args:
            src: Source file name
            dest: Destination file name; an existing file is overwritten

        Returns:
            OperationResult whose data is the number of bytes copied
        """
        src_path = self._path(src)
        dest_path = self._path(dest)
        description = f"Copy {src} to {dest}"

        rejected = self._reject_null_bytes(src, dest)
        if rejected:
            return self._record(ActionType.WRITE, description, dest_path, rejected)

        try:
            st = os.stat(src_path)
        except OSError as e:
            result = OperationResult.from_os_error(e, f"Source file not found: {src}")
            return self._record(ActionType.WRITE, description, dest_path, result)

        if not stat.S_ISREG(st.st_mode):
            result = OperationResult.fail(
                ErrorKind.NOT_A_REGULAR_FILE,
                f"Can only copy regular files: {src} is {classify(st.st_mode).value}"
            )
            return self._record(ActionType.WRITE, description, dest_path, result)

        try:
            shutil.copyfile(src_path, dest_path)
            shutil.copymode(src_path, dest_path)
        except shutil.SameFileError:
            result = OperationResult.fail(ErrorKind.INVALID_ARGUMENT, f"{src} and {dest} are the same file")
        except OSError as e:
            result = OperationResult.from_os_error(e, f"Cannot copy {src} to {dest}")
        else:
            result = OperationResult.ok("File copied successfully", data=st.st_size)

        return self._record(ActionType.WRITE, description, dest_path, result)

    def move(self, src: str, dest: str) -> OperationResult:
        """
        Move or rename an item with a single rename() call.

        An existing destination file is replaced. Moving across filesystems
        fails with CROSS_DEVICE.
        """
        src_path = self._path(src)
        dest_path = self._path(dest)
        description = f"Move {src} to {dest}"

        rejected = self._reject_null_bytes(src, dest)
        if rejected:
            return self._record(ActionType.WRITE, description, dest_path, rejected)

        try:
            os.rename(src_path, dest_path)
        except OSError as e:
            result = OperationResult.from_os_error(e, f"Cannot move/rename {src}")
        else:
            result = OperationResult.ok("Item moved/renamed successfully", data=dest_path)

        return self._record(ActionType.WRITE, description, dest_path, result)

    def search(self, pattern: str) -> OperationResult:
        """
        Search below the current directory for names containing pattern.

        Returns:
            OperationResult whose data is the list of matching paths
        """
        root = self.session.current_path
        matches = search(root, pattern, follow_symlinks=self.config.follow_symlinks)
        result = OperationResult.ok(f"Found {len(matches)} match(es)", data=matches)
        return self._record(ActionType.READ, f"Search for: {pattern}", root, result)

    def change_permissions(self, name: str, mode: str) -> OperationResult:
        """
        Set the rwx bits of an item from a three-digit octal string.

        Args:
            name: Name relative to the current directory
            mode: Exactly three octal digits, e.g. "755"
        """
        path = self._path(name)
        description = f"Change permissions of {name} to {mode}"

        rejected = self._reject_null_bytes(name)
        if rejected:
            return self._record(ActionType.PERMISSION, description, path, rejected)

        if len(mode) != 3 or any(c not in OCTAL_DIGITS for c in mode):
            result = OperationResult.fail(
                ErrorKind.INVALID_ARGUMENT,
                f"Permission format should be octal (e.g., 755), got: {mode}"
            )
            return self._record(ActionType.PERMISSION, description, path, result)

        bits = int(mode, 8)
        try:
            os.chmod(path, bits)
        except OSError as e:
            result = OperationResult.from_os_error(e, f"Cannot change permissions of {name}")
        else:
            result = OperationResult.ok("Permissions changed successfully", data=permission_string(bits))

        return self._record(ActionType.PERMISSION, description, path, result)

    def change_owner(self, name: str, owner: str) -> OperationResult:
        """
        Give an item a new owning user. The group is left as it is.

        Args:
            name: Name relative to the current directory
            owner: User name known to the system user database
        """
        path = self._path(name)
        description = f"Change owner of {name} to {owner}"

        rejected = self._reject_null_bytes(name, owner)
        if rejected:
            return self._record(ActionType.PERMISSION, description, path, rejected)

        try:
            uid = pwd.getpwnam(owner).pw_uid
        except KeyError:
            result = OperationResult.fail(ErrorKind.INVALID_ARGUMENT, f"User not found: {owner}")
            return self._record(ActionType.PERMISSION, description, path, result)

        try:
            os.chown(path, uid, -1)
        except OSError as e:
            result = OperationResult.from_os_error(e, f"Cannot change owner of {name}")
        else:
            result = OperationResult.ok("Owner changed successfully", data=uid)

        return self._record(ActionType.PERMISSION, description, path, result)
