"""CSV export of a rota."""

import csv
import io
import logging
from pathlib import Path
from typing import Union

from oncallrota.domain.models import CSV_HEADER, Schedule

logger = logging.getLogger(__name__)


class CSVExporter:
    """Writes one row per week under the standard rota header.

    Example:
        >>> CSVExporter().export(schedule, "rota.csv")
    """

    def write(self, schedule: Schedule, stream) -> None:
        """Write CSV rows to an open text stream."""
        writer = csv.writer(stream, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for assignment in schedule:
            writer.writerow(assignment.to_row())

    def to_string(self, schedule: Schedule) -> str:
        buffer = io.StringIO()
        self.write(schedule, buffer)
        return buffer.getvalue()

    def export(self, schedule: Schedule, output_path: Union[str, Path]) -> None:
        """Write the schedule to ``output_path``, replacing any existing file."""
        path = Path(output_path)
        with path.open("w", newline="", encoding="utf-8") as f:
            self.write(schedule, f)
        logger.info("Wrote %d weeks to %s", len(schedule), path)
