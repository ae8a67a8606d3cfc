"""Clip the puzzle image to piece polygons.

Polygons are in board coordinates, so the source image is first fitted to
the square board and then cut along each contour.
"""

from typing import Tuple

from PIL import Image, ImageDraw

from .models import Polygon


def fit_to_canvas(image: Image.Image, canvas_size: float) -> Image.Image:
    """Resize an image to the square board it is shown on."""
    side = max(1, int(round(canvas_size)))
    if image.size == (side, side):
        return image
    return image.resize((side, side), Image.Resampling.LANCZOS)


def calculate_piece_bounds(
    polygon: Polygon,
    padding: int = 0,
    image_width: int = 0,
    image_height: int = 0,
) -> Tuple[int, int, int, int]:
    """Calculate the bounding box of a piece polygon with padding.

    Args:
        polygon: Piece contour.
        padding: Extra pixels to add around the bounding box.
        image_width: Source image width (for clamping). 0 = no clamping.
        image_height: Source image height (for clamping). 0 = no clamping.

    Returns:
        Tuple of (x_min, y_min, x_max, y_max) in integer pixels.
    """
    xs = [p.x for p in polygon.points]
    ys = [p.y for p in polygon.points]

    x_min = int(min(xs)) - padding
    y_min = int(min(ys)) - padding
    x_max = int(max(xs)) + padding + 1  # +1 to include the max pixel
    y_max = int(max(ys)) + padding + 1

    if image_width > 0:
        x_min = max(0, x_min)
        x_max = min(image_width, x_max)
    if image_height > 0:
        y_min = max(0, y_min)
        y_max = min(image_height, y_max)

    return (x_min, y_min, x_max, y_max)


def create_piece_mask(
    polygon: Polygon,
    width: int,
    height: int,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    antialias_scale: int = 4,
) -> Image.Image:
    """Create an anti-aliased mask for a piece.

    The polygon is drawn at ``antialias_scale`` times the resolution and
    downsampled.

    Args:
        polygon: Piece contour in board coordinates.
        width: Output mask width in pixels.
        height: Output mask height in pixels.
        offset_x: X offset to subtract from polygon coordinates.
        offset_y: Y offset to subtract from polygon coordinates.
        antialias_scale: Supersampling factor.

    Returns:
        Grayscale image, white inside the polygon.
    """
    hi_res_mask = Image.new("L", (width * antialias_scale, height * antialias_scale), 0)
    draw = ImageDraw.Draw(hi_res_mask)

    scaled = [((p.x - offset_x) * antialias_scale, (p.y - offset_y) * antialias_scale) for p in polygon.points]
    draw.polygon(scaled, fill=255)

    return hi_res_mask.resize((width, height), Image.Resampling.LANCZOS)


def cut_piece(source_image: Image.Image, polygon: Polygon, padding: int = 0) -> Tuple[Image.Image, Tuple[int, int]]:
    """Cut a piece out of the board image.

    Args:
        source_image: Image already fitted to the board.
        polygon: Piece contour in board coordinates.
        padding: Extra pixels around the bounding box.

    Returns:
        Tuple of:
        - RGBA image of the piece with transparent background
        - (x_offset, y_offset) of the piece image's top-left corner on the board
    """
    x_min, y_min, x_max, y_max = calculate_piece_bounds(
        polygon,
        padding=padding,
        image_width=source_image.width,
        image_height=source_image.height,
    )

    crop_width = x_max - x_min
    crop_height = y_max - y_min

    if crop_width <= 0 or crop_height <= 0:
        # Polygon lies entirely outside the image
        return Image.new("RGBA", (1, 1), (0, 0, 0, 0)), (x_min, y_min)

    cropped = source_image.crop((x_min, y_min, x_max, y_max))
    if cropped.mode != "RGB":
        cropped = cropped.convert("RGB")

    mask = create_piece_mask(polygon, width=crop_width, height=crop_height, offset_x=x_min, offset_y=y_min)

    result = Image.new("RGBA", (crop_width, crop_height), (0, 0, 0, 0))
    result.paste(cropped, mask=mask)
    return result, (x_min, y_min)
