"""Plain-text rendering of a rota for the terminal."""

import sys
from typing import Optional, TextIO

from oncallrota.domain.models import Schedule

COLUMNS = ["Week", "Start", "End", "Assigned To", "Holiday", "Patching"]


def _flag(value: bool) -> str:
    return "yes" if value else ""


def format_schedule_table(schedule: Schedule) -> str:
    """Render the schedule as an aligned text table."""
    rows = [
        [
            str(a.week_number),
            a.start_date.isoformat(),
            a.end_date.isoformat(),
            a.assignee_label,
            _flag(a.has_holiday),
            _flag(a.has_patching),
        ]
        for a in schedule
    ]

    widths = [len(c) for c in COLUMNS]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def fmt(cells: list[str]) -> str:
        return "  ".join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

    lines = [fmt(COLUMNS), fmt(["-" * w for w in widths])]
    lines.extend(fmt(row) for row in rows)
    return "\n".join(lines)


def format_member_summary(stats: dict) -> str:
    """Render per-member totals from ``RotaScheduler`` statistics."""
    per_member = stats.get("per_member", {})
    if not per_member:
        return ""

    name_width = max(len("Member"), *(len(m) for m in per_member))
    lines = [f"{'Member'.ljust(name_width)}  Weeks  Holiday  Patching"]
    for member in sorted(per_member):
        counts = per_member[member]
        lines.append(
            f"{member.ljust(name_width)}  {counts['weeks']:>5}  "
            f"{counts['holiday_weeks']:>7}  {counts['patching_weeks']:>8}"
        )
    return "\n".join(lines)


def print_schedule(
    schedule: Schedule,
    stats: Optional[dict] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Print the schedule table, followed by a summary when stats are given."""
    out = stream or sys.stdout
    print(f"On-call rota: {schedule.start_date} to {schedule.end_date}", file=out)
    print(format_schedule_table(schedule), file=out)

    if stats:
        print(file=out)
        print(
            f"Assigned: {stats['assigned_weeks']}/{stats['total_weeks']} weeks, "
            f"unassigned: {stats['unassigned_weeks']}",
            file=out,
        )
        summary = format_member_summary(stats)
        if summary:
            print(file=out)
            print(summary, file=out)
