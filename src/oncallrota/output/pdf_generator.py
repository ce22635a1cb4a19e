"""PDF generation for rota output.

This module creates a printable PDF rota showing:
- One row per week with dates, assignee and holiday/patching markers
- A summary page with per-member week counts
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from oncallrota.domain.models import Schedule, WeekAssignment

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    "holiday": (1.0, 0.85, 0.5),  # Amber
    "patching": (0.6, 0.75, 0.95),  # Blue
    "unassigned": (0.95, 0.6, 0.6),  # Red
    "stripe": (0.95, 0.95, 0.95),  # Light gray
    "bar": (0.4, 0.6, 0.8),
}


class PDFGenerator:
    """Generates printable PDF rotas.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(schedule, "rota.pdf", stats=stats)
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
        title: str = "On-Call Rota",
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.title = title

    def generate(
        self,
        schedule: Schedule,
        output_path: Union[str, Path],
        stats: Optional[dict] = None,
    ) -> None:
        """Generate PDF rota and save to file.

        Args:
            schedule: The rota to render.
            output_path: Path to save the PDF.
            stats: Scheduler statistics; adds a summary page when given.
        """
        canvas = self._canvas_module()
        c = canvas.Canvas(str(output_path), pagesize=(self.page_width, self.page_height))
        self._draw(c, schedule, stats)
        c.save()

    def generate_to_buffer(
        self,
        schedule: Schedule,
        stats: Optional[dict] = None,
    ) -> BytesIO:
        """Generate PDF and return as bytes buffer."""
        canvas = self._canvas_module()
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=(self.page_width, self.page_height))
        self._draw(c, schedule, stats)
        c.save()
        buffer.seek(0)
        return buffer

    @staticmethod
    def _canvas_module():
        try:
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )
        return canvas

    def _draw(self, c, schedule: Schedule, stats: Optional[dict]) -> None:
        self._draw_schedule_pages(c, schedule)
        if stats:
            self._draw_summary_page(c, schedule, stats)

    def _draw_schedule_pages(self, c, schedule: Schedule) -> None:
        """Draw the week-by-week table, paginated."""
        row_height = 18
        header_height = 70
        footer_height = 40
        usable_height = self.page_height - 2 * self.margin - header_height - footer_height
        rows_per_page = max(1, int(usable_height / row_height))

        weeks = list(schedule)
        total_pages = max(1, (len(weeks) + rows_per_page - 1) // rows_per_page)

        for page_index in range(total_pages):
            page_weeks = weeks[page_index * rows_per_page:(page_index + 1) * rows_per_page]

            self._draw_header(c, schedule)
            y = self.page_height - self.margin - header_height
            self._draw_column_headings(c, y)

            for i, assignment in enumerate(page_weeks):
                y -= row_height
                self._draw_week_row(c, assignment, y, row_height, striped=i % 2 == 1)

            self._draw_legend(c, self.margin, self.margin + 10)

            c.setFont("Helvetica", 9)
            c.drawCentredString(
                self.page_width / 2,
                self.margin - 10,
                f"Page {page_index + 1} of {total_pages}",
            )
            c.showPage()

    def _column_positions(self) -> list[float]:
        left = self.margin
        return [left, left + 60, left + 160, left + 260, left + 500, left + 580]

    def _draw_header(self, c, schedule: Schedule) -> None:
        """Draw page header with title and date range."""
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"{self.title} - {schedule.start_date.strftime('%B %d, %Y')} "
            f"to {schedule.end_date.strftime('%B %d, %Y')}",
        )

        c.setFont("Helvetica", 10)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 35,
            f"Weeks: {len(schedule)}   Unassigned: {len(schedule.unassigned_weeks)}",
        )

    def _draw_column_headings(self, c, y: float) -> None:
        c.setFont("Helvetica-Bold", 10)
        labels = ["Week", "Start", "End", "Assigned To", "Holiday", "Patching"]
        for x, label in zip(self._column_positions(), labels):
            c.drawString(x, y, label)
        c.setStrokeColorRGB(0.3, 0.3, 0.3)
        c.line(self.margin, y - 4, self.page_width - self.margin, y - 4)

    def _draw_week_row(
        self,
        c,
        assignment: WeekAssignment,
        y: float,
        height: float,
        striped: bool,
    ) -> None:
        """Draw a single week's row."""
        width = self.page_width - 2 * self.margin
        if striped:
            c.setFillColorRGB(*COLORS["stripe"])
            c.rect(self.margin, y - 4, width, height, fill=1, stroke=0)

        cols = self._column_positions()
        if not assignment.is_assigned:
            c.setFillColorRGB(*COLORS["unassigned"])
            c.rect(cols[3] - 2, y - 4, cols[4] - cols[3] - 8, height, fill=1, stroke=0)
        if assignment.has_holiday:
            c.setFillColorRGB(*COLORS["holiday"])
            c.rect(cols[4] - 2, y - 4, 60, height, fill=1, stroke=0)
        if assignment.has_patching:
            c.setFillColorRGB(*COLORS["patching"])
            c.rect(cols[5] - 2, y - 4, 60, height, fill=1, stroke=0)

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 9)
        cells = [
            str(assignment.week_number),
            assignment.start_date.isoformat(),
            assignment.end_date.isoformat(),
            assignment.assignee_label[:40],
            "Yes" if assignment.has_holiday else "",
            "Yes" if assignment.has_patching else "",
        ]
        for x, cell in zip(cols, cells):
            c.drawString(x, y, cell)

    def _draw_legend(self, c, x: float, y: float) -> None:
        """Draw legend for colors."""
        c.setFont("Helvetica-Bold", 8)
        c.drawString(x, y, "Legend:")

        items = [
            ("holiday", "Holiday week"),
            ("patching", "Patching week"),
            ("unassigned", "Unassigned"),
        ]

        c.setFont("Helvetica", 7)
        current_x = x + 45
        for key, label in items:
            c.setFillColorRGB(*COLORS[key])
            c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            c.drawString(current_x + 15, y, label)
            current_x += 90

    def _draw_summary_page(self, c, schedule: Schedule, stats: dict) -> None:
        """Draw summary page with per-member counts."""
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"{self.title} Summary",
        )

        y = self.page_height - self.margin - 60
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Overview")
        y -= 20

        c.setFont("Helvetica", 10)
        for line in [
            f"Total Weeks: {stats['total_weeks']}",
            f"Assigned Weeks: {stats['assigned_weeks']}",
            f"Unassigned Weeks: {stats['unassigned_weeks']}",
            f"Holiday Weeks: {stats['holiday_weeks']}",
            f"Patching Weeks: {stats['patching_weeks']}",
        ]:
            c.drawString(self.margin + 20, y, line)
            y -= 15

        y -= 20
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Weeks per Member")
        y -= 20

        per_member = stats.get("per_member", {})
        max_weeks = max((v["weeks"] for v in per_member.values()), default=0) or 1
        bar_left = self.margin + 140
        bar_width = 300

        c.setFont("Helvetica", 9)
        for member in sorted(per_member):
            if y < self.margin + 20:
                c.showPage()
                c.setFont("Helvetica-Bold", 12)
                y = self.page_height - self.margin - 20
                c.drawString(self.margin, y, "Weeks per Member (continued)")
                y -= 20
                c.setFont("Helvetica", 9)
            counts = per_member[member]
            c.setFillColorRGB(0, 0, 0)
            c.drawString(self.margin + 20, y, member[:22])

            c.setFillColorRGB(*COLORS["bar"])
            c.rect(bar_left, y - 2, bar_width * counts["weeks"] / max_weeks, 10, fill=1, stroke=0)

            c.setFillColorRGB(0, 0, 0)
            c.drawString(
                bar_left + bar_width + 10,
                y,
                f"{counts['weeks']} weeks, {counts['holiday_weeks']} holiday, "
                f"{counts['patching_weeks']} patching",
            )
            y -= 15

        c.showPage()
