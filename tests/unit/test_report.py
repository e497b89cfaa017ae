"""Tests for report line formatting and PDF rendering."""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from roof_measure.core.config import RoofConfig
from roof_measure.models.geo_point import GeoPoint
from roof_measure.models.measurement import AreaResult, RoofMeasurement
from roof_measure.report import build_report_lines, export_report, render_pdf


def _png(width: int, height: int) -> io.BytesIO:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 80, 40)).save(buffer, format="PNG")
    buffer.seek(0)
    return buffer


@pytest.fixture()
def measurement() -> RoofMeasurement:
    area = AreaResult(projected_area_m2=100.0, real_area_m2=115.47, area_ft2=1242.91, area_sq=12.4291)
    vertices = (GeoPoint(0.0, 0.0), GeoPoint(0.0, 0.001), GeoPoint(0.001, 0.0))
    return RoofMeasurement(vertices=vertices, pitch_deg=30.0, area=area, address="1 Main St")


class TestBuildReportLines:
    def test_lines(self, measurement: RoofMeasurement) -> None:
        assert build_report_lines(measurement) == [
            "Address: 1 Main St",
            "Roof pitch angle: 30°",
            "Projected area: 100.00 m² (1076 ft²)",
            "Real area: 115.47 m² (1243 ft²)",
            "In ft²: 1243 ft²",
            "In squares: 12.4 squares",
        ]

    def test_missing_address(self, measurement: RoofMeasurement) -> None:
        no_address = RoofMeasurement(vertices=measurement.vertices, pitch_deg=22.5, area=measurement.area)
        lines = build_report_lines(no_address)
        assert lines[0] == "Address: N/A"
        assert lines[1] == "Roof pitch angle: 22.5°"


class TestRenderPdf:
    def test_writes_pdf(self, tmp_path: Path) -> None:
        out = render_pdf(["Address: N/A", "In squares: 1.0 squares"], tmp_path / "r.pdf")
        assert out == tmp_path / "r.pdf"
        assert out.read_bytes().startswith(b"%PDF")

    def test_no_body_lines(self, tmp_path: Path) -> None:
        out = render_pdf([], str(tmp_path / "empty.pdf"), title="Custom Title")
        assert out.read_bytes().startswith(b"%PDF")

    def test_embeds_image(self, tmp_path: Path) -> None:
        out = render_pdf(["Address: N/A"], tmp_path / "map.pdf", image=_png(40, 20))
        assert b"/Subtype /Image" in out.read_bytes()

    def test_no_image_object_without_snapshot(self, tmp_path: Path) -> None:
        out = render_pdf(["Address: N/A"], tmp_path / "plain.pdf")
        assert b"/Subtype /Image" not in out.read_bytes()

    def test_image_placed_below_text_at_fixed_width(self, tmp_path: Path) -> None:
        lines = ["Address: N/A", "In squares: 1.0 squares"]
        with patch.object(canvas.Canvas, "drawImage") as draw_image:
            render_pdf(lines, tmp_path / "r.pdf", image=_png(40, 20))

        draw_image.assert_called_once()
        _reader, x, y = draw_image.call_args.args
        # title at 40, two lines at 20 each, then a 20 pt gap
        text_bottom = 40 + 20 * len(lines) + 20
        assert x == 40
        assert draw_image.call_args.kwargs == {"width": 500, "height": 250.0}
        assert y == pytest.approx(A4[1] - text_bottom - 250.0)

    def test_export_passes_image_through(self, tmp_path: Path, measurement: RoofMeasurement) -> None:
        out = export_report(measurement, tmp_path, image=_png(10, 10))
        assert b"/Subtype /Image" in out.read_bytes()

    def test_export_uses_configured_filename(self, tmp_path: Path, measurement: RoofMeasurement) -> None:
        out = export_report(measurement, tmp_path, config=RoofConfig(report_filename="job-42.pdf"))
        assert out == tmp_path / "job-42.pdf"
        assert out.exists()
