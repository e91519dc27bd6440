import shutil
import logging
from pathlib import Path

from ..exceptions import FileOperationError, DirectoryCreationError


class FileMover:
    """
    Filesystem mutations of a catalog run. Under dry_run every operation is
    only logged. Any OSError is turned into a FileOperationError, which aborts
    the run.
    """

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def make_dirs(self, directory: Path):
        logging.debug(f"{self._prefix()}Make new directory {directory}")
        if self.dry_run:
            return
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(f"Unable to create {directory}: {e}") from e

    def copy(self, src: Path, dest: Path):
        logging.debug(f"{self._prefix()}Copy {src} to {dest}")
        if self.dry_run:
            return
        try:
            shutil.copy2(str(src), str(dest))
        except OSError as e:
            raise FileOperationError(f"The copy operation failed: {e}") from e

    def move(self, src: Path, dest: Path):
        logging.debug(f"{self._prefix()}Move {src} to {dest}")
        if self.dry_run:
            return
        try:
            shutil.move(str(src), str(dest))
        except OSError as e:
            raise FileOperationError(f"The move operation failed: {e}") from e

    def delete(self, src: Path):
        logging.debug(f"{self._prefix()}Deleting {src}")
        if self.dry_run:
            return
        try:
            src.unlink()
        except OSError as e:
            raise FileOperationError(f"Can't delete {src}: {e}") from e

    def _prefix(self) -> str:
        return "[DRY RUN] " if self.dry_run else ""
