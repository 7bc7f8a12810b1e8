"""Envelope geometry and 3D box value objects."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_THICKNESS = 19.0
DEFAULT_SOCLE_HEIGHT = 100.0
DEFAULT_TOLERANCE = 0.05


class DimensionError(ValueError):
    """Raised when dimensions cannot produce any carcass geometry.

    Raised before any cell or segment is computed, so callers never
    receive partial geometry.
    """

    pass


@dataclass(frozen=True)
class Dimensions:
    """Immutable overall furniture dimensions in millimetres."""

    width: float
    height: float
    depth: float

    def __post_init__(self) -> None:
        # Written as "not > 0" so NaN is rejected as well.
        if not (self.width > 0 and self.height > 0 and self.depth > 0):
            raise DimensionError(
                f"All dimensions must be positive "
                f"(got {self.width} x {self.height} x {self.depth})"
            )

    @property
    def volume_m3(self) -> float:
        """Bounding volume in cubic metres."""
        return self.width * self.height * self.depth / 1e9


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in the front elevation.

    The origin is the bottom-left corner of the furniture at floor level,
    x grows to the right and y grows upward.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


def validate_envelope(
    dimensions: Dimensions,
    thickness: float,
    socle_height: float = 0.0,
    back_thickness: float | None = None,
) -> list[str]:
    """Validate envelope parameters without raising.

    Args:
        dimensions: Overall furniture dimensions.
        thickness: Structural panel thickness.
        socle_height: Height of the socle under the carcass.
        back_thickness: Back panel thickness (defaults to ``thickness``).

    Returns:
        List of error messages. Empty list means valid.
    """
    errors: list[str] = []

    if not thickness > 0:
        errors.append(f"Panel thickness must be positive (got {thickness})")
        return errors
    if socle_height < 0:
        errors.append(f"Socle height cannot be negative (got {socle_height})")

    content_width = dimensions.width - 2 * thickness
    if not content_width > 0:
        errors.append(
            f"Width {dimensions.width} leaves no room inside two "
            f"{thickness}mm side panels"
        )

    content_height = dimensions.height - max(socle_height, 0.0) - 2 * thickness
    if not content_height > 0:
        errors.append(
            f"Height {dimensions.height} leaves no room above a "
            f"{socle_height}mm socle and between top and bottom panels"
        )

    back = thickness if back_thickness is None else back_thickness
    if not back > 0:
        errors.append(f"Back thickness must be positive (got {back})")
    elif not dimensions.depth > back:
        errors.append(
            f"Depth {dimensions.depth} must exceed the back thickness {back}"
        )

    return errors


@dataclass(frozen=True)
class Envelope:
    """Outer envelope of the carcass.

    Attributes:
        dimensions: Overall width, height and depth.
        thickness: Thickness of sides, top, bottom and separators.
        socle_height: Height of the socle plane; the carcass sits on it.
        back_thickness: Back panel thickness, ``None`` meaning ``thickness``.
        tolerance: Distance under which two edges are considered touching.
    """

    dimensions: Dimensions
    thickness: float = DEFAULT_THICKNESS
    socle_height: float = 0.0
    back_thickness: float | None = None
    tolerance: float = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        errors = validate_envelope(
            self.dimensions, self.thickness, self.socle_height, self.back_thickness
        )
        if errors:
            raise DimensionError("; ".join(errors))

    @classmethod
    def of(
        cls,
        width: float,
        height: float,
        depth: float,
        thickness: float = DEFAULT_THICKNESS,
        socle_height: float = 0.0,
    ) -> Envelope:
        """Build an envelope from plain numbers."""
        return cls(
            dimensions=Dimensions(width, height, depth),
            thickness=thickness,
            socle_height=socle_height,
        )

    @property
    def width(self) -> float:
        return self.dimensions.width

    @property
    def height(self) -> float:
        return self.dimensions.height

    @property
    def depth(self) -> float:
        return self.dimensions.depth

    @property
    def effective_back_thickness(self) -> float:
        if self.back_thickness is None:
            return self.thickness
        return self.back_thickness

    @property
    def carcass_height(self) -> float:
        """Height of the carcass body above the socle plane."""
        return self.height - self.socle_height

    @property
    def content_rect(self) -> Rect:
        """Usable rectangle inside the sides, top and bottom panels."""
        t = self.thickness
        return Rect(
            x=t,
            y=self.socle_height + t,
            width=self.width - 2 * t,
            height=self.height - self.socle_height - 2 * t,
        )


@dataclass(frozen=True)
class Position3D:
    """Point in Z-up space (x width, y depth, z height)."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class BoundingBox3D:
    """Axis-aligned 3D box occupied by one panel segment."""

    origin: Position3D
    size_x: float  # width, left to right
    size_y: float  # depth, front to back
    size_z: float  # height, bottom to top

    def __post_init__(self) -> None:
        if self.size_x <= 0 or self.size_y <= 0 or self.size_z <= 0:
            raise ValueError("Bounding box dimensions must be positive")

    def get_vertices(self) -> list[tuple[float, float, float]]:
        """Return the 8 corners, bottom face first."""
        x0, y0, z0 = self.origin.x, self.origin.y, self.origin.z
        x1, y1, z1 = x0 + self.size_x, y0 + self.size_y, z0 + self.size_z
        return [
            (x0, y0, z0),
            (x1, y0, z0),
            (x1, y1, z0),
            (x0, y1, z0),
            (x0, y0, z1),
            (x1, y0, z1),
            (x1, y1, z1),
            (x0, y1, z1),
        ]

    def get_triangles(self) -> list[tuple[int, int, int]]:
        """Return the 12 triangles of the box faces as vertex indices.

        Winding is clockwise seen from outside in Z-up coordinates, which
        turns into outward normals once exporters swap Y and Z.
        """
        return [
            (0, 1, 2),
            (0, 2, 3),
            (4, 6, 5),
            (4, 7, 6),
            (0, 5, 1),
            (0, 4, 5),
            (2, 7, 3),
            (2, 6, 7),
            (0, 7, 4),
            (0, 3, 7),
            (1, 6, 2),
            (1, 5, 6),
        ]
