import logging
from pathlib import Path
from typing import List, Optional, Set

from .metadata.dates import DateResolver
from .models import SourceFile, DestinationCandidate, AlreadyPresent, CatalogStats, FileOutcome
from .organization.collisions import CollisionResolver
from .organization.mover import FileMover
from .organization.rules import DestinationPlanner
from .reporting import CatalogReporter
from .scanning.filesystem import DiskScanner


class Cataloger:
    def __init__(self,
                 dest_root: Path,
                 copy: bool = False,
                 dry_run: bool = False,
                 recursive: bool = False,
                 max_depth: Optional[int] = None,
                 date_resolver: Optional[DateResolver] = None,
                 hasher=None,
                 reporter: Optional[CatalogReporter] = None):
        """
        Args:
            copy: Copy files into the catalog; otherwise they are moved and
                  duplicates already in the catalog are deleted from the source.
            recursive: Descend into subdirectories without limit.
            max_depth: Descend at most this many levels. Implies recursion and
                       takes precedence over `recursive`.
        """
        self.dest_root = dest_root
        self.copy = copy
        self.dry_run = dry_run

        if max_depth is not None:
            self.max_depth = max_depth
        elif recursive:
            self.max_depth = None
        else:
            self.max_depth = 0

        self.scanner = DiskScanner()
        self.date_resolver = date_resolver or DateResolver()
        self.planner = DestinationPlanner()
        self.collisions = CollisionResolver(hasher=hasher, simulate=dry_run)
        self.mover = FileMover(dry_run=dry_run)
        self.reporter = reporter or CatalogReporter()

        self.stats = CatalogStats()
        self.outcomes: List[FileOutcome] = []
        # Directories already made (or, in dry run, considered made)
        self._created_dirs: Set[Path] = set()

    def run(self, src_root: Path) -> CatalogStats:
        """
        Catalogs every eligible file under src_root, one at a time.
        Any FileOperationError aborts the run at the failing file.
        """
        mode = "Copy" if self.copy else "Move"
        logging.info(f"Cataloging {src_root} -> {self.dest_root} (Mode={mode}, DryRun={self.dry_run})")

        files = list(self.scanner.iter_files(src_root, self.max_depth, skip_dirs={self.dest_root}))
        num_files = len(files)

        with self.reporter.progress(num_files) as bar:
            for path in files:
                self.outcomes.append(self._process(path, num_files))
                bar.update(1)

        return self.stats

    def _process(self, path: Path, num_files: int) -> FileOutcome:
        self.stats.total += 1
        source = SourceFile.from_path(path)
        logging.debug(f"({self.stats.total}/{num_files}) Filename: {path}")

        date = self.date_resolver.resolve(path, source.name)
        if date is None:
            logging.info(f"Skipping {path} because cannot extract creation date")
            self.stats.skipped += 1
            return FileOutcome(path, "Skipped")

        target_dir = self.planner.plan(self.dest_root, date)
        self._ensure_directory(target_dir)

        action = self.collisions.resolve(path, DestinationCandidate(target_dir, source.name, source.ext))

        if isinstance(action, AlreadyPresent):
            # A file already sitting in its catalog slot is the only copy
            if not self.copy and not action.in_place:
                self.mover.delete(path)
            self.stats.already_present += 1
            return FileOutcome(path, "Already Present", action.existing)

        if action.renamed:
            logging.debug(f"Renaming file from {source.filename} to {action.destination.name}")
            self.stats.renamed += 1

        if self.copy:
            self.mover.copy(path, action.destination)
            self.stats.copied += 1
            status = "Copied"
        else:
            self.mover.move(path, action.destination)
            self.stats.moved += 1
            status = "Moved"
        self.collisions.record_placement(path, action.destination)

        if action.renamed:
            status += " (Renamed)"
        return FileOutcome(path, status, action.destination)

    def _ensure_directory(self, directory: Path):
        if directory in self._created_dirs:
            return
        if not directory.is_dir():
            self.mover.make_dirs(directory)
        self._created_dirs.add(directory)
