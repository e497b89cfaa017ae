"""Result models for roof measurements.

``AreaResult`` is the output of the area calculation; ``EdgeMeasurement``
describes one side of the traced outline; ``RoofMeasurement`` bundles
both with the inputs that produced them. All are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from roof_measure.models.geo_point import GeoPoint


@dataclass(frozen=True, slots=True)
class AreaResult:
    """Roof areas derived from one outline and pitch.

    Attributes:
        projected_area_m2: Ground-plane footprint area in square metres.
        real_area_m2: Pitch-corrected roof surface area in square metres.
        area_ft2: Real area in square feet.
        area_sq: Real area in roofing squares (100 ft²).
    """

    projected_area_m2: float
    real_area_m2: float
    area_ft2: float
    area_sq: float

    def to_dict(self) -> dict[str, float]:
        return {
            "projected_area_m2": self.projected_area_m2,
            "real_area_m2": self.real_area_m2,
            "area_ft2": self.area_ft2,
            "area_sq": self.area_sq,
        }


@dataclass(frozen=True, slots=True)
class EdgeMeasurement:
    """Ground length of one outline edge.

    Attributes:
        index: Zero-based index of the start vertex.
        start: Start vertex.
        end: End vertex (the first vertex for the closing edge).
        midpoint: Label anchor halfway along the edge.
        length_ft: Great-circle length in feet.
    """

    index: int
    start: GeoPoint
    end: GeoPoint
    midpoint: GeoPoint
    length_ft: float

    @property
    def label(self) -> str:
        """Display text, e.g. ``"32.8 ft"``."""
        return f"{self.length_ft:.1f} ft"

    def to_dict(self) -> dict[str, object]:
        return {
            "index": self.index,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "midpoint": self.midpoint.to_dict(),
            "length_ft": self.length_ft,
            "label": self.label,
        }


@dataclass(frozen=True, slots=True)
class RoofMeasurement:
    """A complete measurement of one traced roof.

    Attributes:
        vertices: Normalised outline (closing duplicate removed).
        pitch_deg: Roof pitch used for the real area.
        area: Computed areas.
        edges: One entry per edge, wrapping last to first.
        address: Display name of the searched address, if any.
        is_simple: ``False`` when the outline crosses itself.
    """

    vertices: tuple[GeoPoint, ...]
    pitch_deg: float
    area: AreaResult
    edges: tuple[EdgeMeasurement, ...] = field(default_factory=tuple)
    address: str = ""
    is_simple: bool = True

    @property
    def perimeter_ft(self) -> float:
        """Sum of edge lengths in feet."""
        return sum(edge.length_ft for edge in self.edges)

    def to_dict(self) -> dict[str, object]:
        """Serialise for JSON transport to the UI layer."""
        return {
            "vertices": [v.to_dict() for v in self.vertices],
            "pitch_deg": self.pitch_deg,
            "area": self.area.to_dict(),
            "edges": [e.to_dict() for e in self.edges],
            "perimeter_ft": self.perimeter_ft,
            "address": self.address,
            "is_simple": self.is_simple,
        }
