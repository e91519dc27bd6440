import os
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from .. import config
from ..exceptions import CollisionLimitError, FileOperationError
from ..models import DestinationCandidate, AlreadyPresent, Place
from ..scanning.hasher import FileHasher

Action = Union[AlreadyPresent, Place]


class CollisionResolver:
    """
    Decides where a source file goes inside its date folder.

    Names are probed as name.ext, name_1.ext, name_2.ext ... until a free slot
    or a file with identical content turns up, so distinct contents never share
    a path. Before a free slot is handed out, the folder is also checked for
    the same content stored under another name, so identical content is never
    stored twice.

    With `simulate=True` nothing is written to disk; placements are kept in a
    virtual overlay (destination -> source) which existence and content checks
    honor on top of whatever the catalog already holds.
    """

    def __init__(self, hasher=None, simulate: bool = False, max_counter: Optional[int] = None):
        self.hasher = hasher or FileHasher()
        self.simulate = simulate
        self.max_counter = config.MAX_COLLISION_COUNTER if max_counter is None else max_counter

        self._digests: Dict[Path, str] = {}
        self._virtual: Dict[Path, Path] = {}
        # directory -> size -> catalog files of that size
        self._index: Dict[Path, Dict[int, List[Path]]] = {}

    def resolve(self, source: Path, candidate: DestinationCandidate) -> Action:
        source_digest = None
        counter = 0

        while True:
            if counter > self.max_counter:
                raise CollisionLimitError(
                    f"No free name for {source} in {candidate.directory} after {self.max_counter} attempts"
                )

            path = candidate.path_for(counter)
            if not self._exists(path):
                break

            logging.debug(f"File {path} already exists")
            if self._same_file(source, path):
                logging.debug(f"{source} is already in place")
                return AlreadyPresent(path, in_place=True)
            if self._is_file(path):
                if source_digest is None:
                    source_digest = self.hasher.hash_file(source)
                if self._digest(path) == source_digest:
                    logging.debug("The two files are equal")
                    return AlreadyPresent(path)

            logging.debug("The two files are different")
            counter += 1

        duplicate = self._find_identical(source, candidate.directory, source_digest)
        if duplicate is not None:
            logging.debug(f"Same content already stored as {duplicate}")
            return AlreadyPresent(duplicate)

        return Place(path, counter)

    def record_placement(self, source: Path, destination: Path):
        """
        Registers a file that was (or, when simulating, would have been)
        stored at `destination`.
        """
        if self.simulate:
            self._virtual[destination] = source
        size = self._size(source if self.simulate else destination)

        bucket = self._entries(destination.parent).setdefault(size, [])
        if destination not in bucket:
            bucket.append(destination)

    # --- Internal helpers ---

    def _exists(self, path: Path) -> bool:
        return path in self._virtual or os.path.lexists(path)

    def _is_file(self, path: Path) -> bool:
        return path in self._virtual or path.is_file()

    def _same_file(self, source: Path, path: Path) -> bool:
        if path in self._virtual:
            return False
        try:
            return os.path.samefile(source, path)
        except OSError:
            return False

    def _digest(self, path: Path) -> str:
        if path not in self._digests:
            self._digests[path] = self.hasher.hash_file(self._virtual.get(path, path))
        return self._digests[path]

    def _size(self, path: Path) -> int:
        try:
            return path.stat().st_size
        except OSError as e:
            raise FileOperationError(f"Cannot stat {path}: {e}") from e

    def _entries(self, directory: Path) -> Dict[int, List[Path]]:
        if directory in self._index:
            return self._index[directory]

        entries: Dict[int, List[Path]] = {}
        if directory.is_dir():
            try:
                with os.scandir(directory) as it:
                    for e in it:
                        if e.is_file(follow_symlinks=False):
                            entries.setdefault(e.stat().st_size, []).append(Path(e.path))
            except OSError as e:
                raise FileOperationError(f"Cannot list {directory}: {e}") from e

        self._index[directory] = entries
        return entries

    def _find_identical(self, source: Path, directory: Path, source_digest: Optional[str]) -> Optional[Path]:
        same_size = self._entries(directory).get(self._size(source))
        if not same_size:
            return None

        if source_digest is None:
            source_digest = self.hasher.hash_file(source)
        for path in same_size:
            if self._same_file(source, path):
                continue
            if self._digest(path) == source_digest:
                return path
        return None
