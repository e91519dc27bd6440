import os
import logging
from pathlib import Path
from typing import Iterator, Set, Optional

from ..exceptions import SourceDirectoryError


class DiskScanner:
    def iter_files(self,
                   root: Path,
                   max_depth: Optional[int] = 0,
                   skip_dirs: Optional[Set[Path]] = None) -> Iterator[Path]:
        """
        Depth-first walker using os.scandir for speed.

        Yields regular files in directory-listing order. `max_depth` is the
        number of levels below `root` to descend: 0 reads only the root's own
        entries, None means unlimited. Symlinks and special files are ignored.

        Args:
            skip_dirs: Directories never descended into (e.g. the catalog root
                       when it lives inside the source tree).
        """
        skip_dirs = skip_dirs or set()

        stack = [(root, 0)]
        while stack:
            current, depth = stack.pop()

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                if current == root:
                    raise SourceDirectoryError(f"Error in opening dir {root}: {e}") from e
                logging.warning(f"Permission denied: {current}")
                continue

            dirs = []
            for e in entries:
                if e.is_dir(follow_symlinks=False):
                    dirs.append(Path(e.path))
                elif e.is_file(follow_symlinks=False):
                    yield Path(e.path)

            if max_depth is not None and depth >= max_depth:
                continue

            # Push dirs to stack (reversed so they are visited in listing order)
            for d in reversed(dirs):
                if d in skip_dirs:
                    logging.debug(f"Not descending into {d}")
                    continue
                stack.append((d, depth + 1))
