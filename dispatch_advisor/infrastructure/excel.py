from __future__ import annotations
import logging
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Iterable, List, Any
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet
from dispatch_advisor.application.recommend_incidents import IncidentRecommendation


logger = logging.getLogger(__name__)

HEADERS = [
    "incident_id",
    "mc1",
    "mc2",
    "mc3",
    "base",
    "extra",
    "total",
    "rationale",
]

# wrapped multi-line cells are capped so rationale does not blow up the sheet
MAX_COLUMN_WIDTH = 80

class ExcelReportError(RuntimeError):
    """Raised when the Excel report cannot be generated."""

def build_excel(recommendations: Iterable[IncidentRecommendation]) -> bytes:

    # sorts by mc1, mc2, mc3, incident id (ascending)
    sorted_recommendations: List[IncidentRecommendation] = sorted(
        recommendations,
        key=lambda r: (
            (r.incident.mc1 or "").lower(),
            (r.incident.mc2 or "").lower(),
            (r.incident.mc3 or "").lower(),
            r.incident.id or "",
        ),
    )

    try:
        wb = Workbook()

        ws_raw = wb.active
        if ws_raw is None or not isinstance(ws_raw, Worksheet):
            logger.error("Active sheet is not a Worksheet or is None: %r", ws_raw)
            raise ExcelReportError("Failed to get active worksheet")
        ws: Worksheet = ws_raw

        ws.title = "Recommendations"
        ws.append(HEADERS)

        header_font = Font(bold=True)
        for col_idx in range(1, len(HEADERS) + 1):
            ws.cell(row=1, column=col_idx).font = header_font

        for rec in sorted_recommendations:
            incident, result = rec.incident, rec.result
            ws.append(
                [
                    incident.id or "",
                    incident.mc1 or "",
                    incident.mc2 or "",
                    incident.mc3 or "",
                    ", ".join(result.base),
                    ", ".join(result.extra),
                    ", ".join(result.total),
                    "\n".join(line for line in result.rationale if line),
                ]
            )

        rationale_col = HEADERS.index("rationale") + 1
        for row_idx in range(2, ws.max_row + 1):
            ws.cell(row=row_idx, column=rationale_col).alignment = Alignment(wrap_text=True, vertical="top")

        # auto-fit by setting column width from max content length
        for column_cells in ws.columns:
            max_length = 0

            col_index: Any = column_cells[0].column
            if not isinstance(col_index, int):
                logger.warning("Unexpected column index type: %r (%r)", col_index, type(col_index))
                continue

            for cell in column_cells:
                if cell.value is None:
                    continue
                longest_line = max(len(line) for line in str(cell.value).split("\n"))
                max_length = max(max_length, longest_line)

            ws.column_dimensions[get_column_letter(col_index)].width = min(max_length + 2, MAX_COLUMN_WIDTH)

        with BytesIO() as buffer:
            wb.save(buffer)
            return buffer.getvalue()

    except ExcelReportError:
        raise
    except Exception as exc:
        logger.exception("Failed to build Excel report")
        raise ExcelReportError("Failed to build Excel report") from exc

def save_excel(
    recommendations: Iterable[IncidentRecommendation],
    output_dir: Path,
    filename_prefix: str = "",
) -> Path:
    """Write the report into ``output_dir`` with a timestamped file name and return its path."""

    content = build_excel(recommendations)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = output_dir / f"{filename_prefix}recommendations_{timestamp}.xlsx"
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    except OSError as exc:
        msg = f"Failed to write Excel report to {path}: {exc}"
        logger.error(msg)
        raise ExcelReportError(msg) from exc

    logger.info("Recommendation report saved to %s", path)
    return path
