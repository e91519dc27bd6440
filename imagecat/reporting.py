import csv
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from .models import CatalogStats, FileOutcome


class CatalogReporter:
    """
    Progress bar while cataloging, and the final summary afterwards.

    In verbose mode the per-file log lines replace the progress bar.
    """

    def __init__(self, verbose: bool = False, report_csv: Optional[Path] = None):
        self.verbose = verbose
        self.report_csv = report_csv

    @contextmanager
    def progress(self, total: int) -> Iterator[tqdm]:
        # Route log records through tqdm.write so they don't tear the bar
        with logging_redirect_tqdm():
            with tqdm(total=total, desc="Cataloging", unit="file", disable=self.verbose) as bar:
                yield bar

    def summarize(self, stats: CatalogStats, outcomes: Iterable[FileOutcome] = ()):
        for line in stats.summary_lines():
            logging.info(line)

        if self.report_csv:
            self.write_csv(outcomes, self.report_csv)

    def write_csv(self, outcomes: Iterable[FileOutcome], output_csv: Path):
        headers = ["Source Path", "Status", "Destination Path"]

        count = 0
        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(headers)
            for outcome in outcomes:
                writer.writerow([
                    str(outcome.source),
                    outcome.status,
                    str(outcome.destination) if outcome.destination else "",
                ])
                count += 1

        logging.info(f"Report complete. Wrote {count} rows to {output_csv}")
