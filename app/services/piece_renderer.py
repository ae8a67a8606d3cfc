"""Service for rendering piece cutouts of a puzzle image."""

import io
from typing import Optional, Tuple

from PIL import Image

from einstein_puzzle import PuzzlePiece, cut_piece, fit_to_canvas


class PieceRenderer:
    """Cuts pieces out of the board image as PNG."""

    def __init__(self, padding: int = 0):
        """Initialize the renderer.

        Args:
            padding: Transparent margin around each piece in pixels.
        """
        self.padding = padding

    def render(self, image: Image.Image, piece: PuzzlePiece, canvas_size: float) -> Tuple[bytes, Tuple[int, int]]:
        """Render a piece.

        Args:
            image: The puzzle image at any resolution.
            piece: Piece whose contour is cut.
            canvas_size: Side length of the board the polygons live on.

        Returns:
            Tuple of (PNG bytes, board position of the image's top-left corner
            when the piece sits on its anchor).
        """
        board_image = fit_to_canvas(image, canvas_size)
        piece_img, offset = cut_piece(board_image, piece.polygon, padding=self.padding)
        return self._image_to_png(piece_img), offset

    def _image_to_png(self, image: Image.Image) -> bytes:
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()


# Singleton instance
_piece_renderer: Optional[PieceRenderer] = None


def get_piece_renderer() -> PieceRenderer:
    """Get the singleton PieceRenderer instance."""
    global _piece_renderer
    if _piece_renderer is None:
        _piece_renderer = PieceRenderer()
    return _piece_renderer
