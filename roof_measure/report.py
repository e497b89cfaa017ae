"""Roof measurement report.

Builds the text lines of the measurement report and renders them, with
an optional map snapshot, into a single-page A4 PDF using reportlab.

Layout (points, measured from the top of the page):
    title at 40 (22 pt), one text line every 20 (12 pt), then the image
    500 pt wide, height scaled to keep its aspect ratio.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from roof_measure.core.config import RoofConfig
from roof_measure.core.constants import NOT_AVAILABLE, REPORT_TITLE, SQ_METRES_TO_SQ_FEET
from roof_measure.models.measurement import RoofMeasurement

logger = logging.getLogger(__name__)

_MARGIN_PT = 40
_TITLE_FONT_SIZE = 22
_BODY_FONT_SIZE = 12
_LINE_SPACING_PT = 20
_IMAGE_WIDTH_PT = 500
_FONT = "Helvetica"


def build_report_lines(measurement: RoofMeasurement) -> list[str]:
    """Report body lines for a measurement."""
    area = measurement.area
    projected = area.projected_area_m2
    real = area.real_area_m2
    return [
        f"Address: {measurement.address or NOT_AVAILABLE}",
        f"Roof pitch angle: {measurement.pitch_deg:g}°",
        f"Projected area: {projected:.2f} m² ({projected * SQ_METRES_TO_SQ_FEET:.0f} ft²)",
        f"Real area: {real:.2f} m² ({real * SQ_METRES_TO_SQ_FEET:.0f} ft²)",
        f"In ft²: {area.area_ft2:.0f} ft²",
        f"In squares: {area.area_sq:.1f} squares",
    ]


def render_pdf(
    lines: list[str],
    output: str | Path,
    *,
    title: str = REPORT_TITLE,
    image: str | Path | BinaryIO | None = None,
) -> Path:
    """Write a one-page A4 report.

    Args:
        lines: Body text, one entry per line.
        output: Destination PDF path.
        title: Heading text.
        image: Optional map snapshot (path or binary stream) placed below the text.

    Returns:
        The output path.
    """
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.utils import ImageReader
    from reportlab.pdfgen import canvas

    output = Path(output)
    _page_width, page_height = A4
    pdf = canvas.Canvas(str(output), pagesize=A4)
    pdf.setTitle(title)

    # reportlab's origin is bottom-left
    y = _MARGIN_PT
    pdf.setFont(_FONT, _TITLE_FONT_SIZE)
    pdf.drawString(_MARGIN_PT, page_height - y, title)

    pdf.setFont(_FONT, _BODY_FONT_SIZE)
    for line in lines:
        y += _LINE_SPACING_PT
        pdf.drawString(_MARGIN_PT, page_height - y, line)
    y += _LINE_SPACING_PT

    if image is not None:
        reader = ImageReader(image)
        img_width, img_height = reader.getSize()
        scaled_height = img_height * _IMAGE_WIDTH_PT / img_width
        pdf.drawImage(
            reader,
            _MARGIN_PT,
            page_height - y - scaled_height,
            width=_IMAGE_WIDTH_PT,
            height=scaled_height,
        )

    pdf.showPage()
    pdf.save()
    logger.info("Report written | path=%s | lines=%d | image=%s", output, len(lines), image is not None)
    return output


def export_report(
    measurement: RoofMeasurement,
    output_dir: str | Path = ".",
    *,
    config: RoofConfig | None = None,
    image: str | Path | BinaryIO | None = None,
) -> Path:
    """Render a measurement to ``<output_dir>/<config.report_filename>``."""
    config = config or RoofConfig()
    return render_pdf(
        build_report_lines(measurement),
        Path(output_dir) / config.report_filename,
        image=image,
    )
