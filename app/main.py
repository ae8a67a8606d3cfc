"""Main FastAPI application module for the puzzle game."""

import logging
import uuid
from typing import Annotated, Optional

from fastapi import Depends, FastAPI, HTTPException, Response, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware

from einstein_puzzle import PuzzlePiece, explain_formula

from app.config import settings
from app.models.puzzle_model import (
    CreateSessionRequest,
    FormulaResponse,
    PointerDownRequest,
    PointerMoveRequest,
    PuzzleResponse,
    ResetSessionRequest,
    SessionStateResponse,
)
from app.services.piece_renderer import PieceRenderer, get_piece_renderer
from app.services.session_store import SessionEntry, SessionStore, get_session_store
from app.services.storage import ImageStorage, InvalidImageError, get_image_storage

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(title=settings.PROJECT_NAME)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Store = Annotated[SessionStore, Depends(get_session_store)]
Storage = Annotated[ImageStorage, Depends(get_image_storage)]
Renderer = Annotated[PieceRenderer, Depends(get_piece_renderer)]


def _get_entry(store: SessionStore, session_id: str) -> SessionEntry:
    entry = store.get(session_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return entry


def _get_piece(entry: SessionEntry, piece_id: str) -> PuzzlePiece:
    piece = entry.session.board.get_piece(piece_id)
    if piece is None:
        raise HTTPException(status_code=404, detail="Piece not found")
    return piece


def _state(session_id: str, entry: SessionEntry) -> SessionStateResponse:
    entry.session.tick()
    return SessionStateResponse.from_session(session_id, entry.session)


def _check_num_missing(num_missing: Optional[int]) -> None:
    if num_missing is not None and num_missing > settings.MAX_MISSING_PIECES:
        raise HTTPException(
            status_code=422,
            detail=f"num_missing must be at most {settings.MAX_MISSING_PIECES}",
        )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post(f"{settings.API_V1_STR}/puzzle/upload", response_model=PuzzleResponse)
async def upload_puzzle(storage: Storage, file: Optional[UploadFile] = None) -> PuzzleResponse:
    """Upload the picture to reconstruct.

    Args:
        storage: Image storage service.
        file: The puzzle image file.

    Returns:
        PuzzleResponse: Response containing the puzzle ID.

    Raises:
        HTTPException: If no file is sent, it is too large or not an image.
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    if file.size and file.size > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=413, detail="File too large")

    puzzle_id = str(uuid.uuid4())
    try:
        path = storage.save(puzzle_id, await file.read())
    except InvalidImageError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return PuzzleResponse(puzzle_id=puzzle_id, image_url=str(path))


# Session endpoints are coroutines so requests on one session run one at a time
# on the event loop
@app.post(f"{settings.API_V1_STR}/sessions", response_model=SessionStateResponse)
async def create_session(request: CreateSessionRequest, store: Store, storage: Storage) -> SessionStateResponse:
    """Start a puzzle session.

    Raises:
        HTTPException: If the uploaded image is unknown or too many pieces are requested.
    """
    _check_num_missing(request.num_missing)

    image_url = ""
    if request.puzzle_id is not None:
        path = storage.get_path(request.puzzle_id)
        if path is None:
            raise HTTPException(status_code=404, detail="Puzzle not found")
        image_url = str(path)

    session_id = store.create(
        mode=request.mode,
        num_missing=request.num_missing,
        scatter=request.scatter,
        seed=request.seed,
        puzzle_id=request.puzzle_id,
        image_url=image_url,
    )
    return _state(session_id, _get_entry(store, session_id))


@app.get(f"{settings.API_V1_STR}/sessions/{{session_id}}", response_model=SessionStateResponse)
async def get_session(session_id: str, store: Store) -> SessionStateResponse:
    """Current state of a session, with the solve animation brought up to date."""
    return _state(session_id, _get_entry(store, session_id))


@app.delete(f"{settings.API_V1_STR}/sessions/{{session_id}}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, store: Store) -> Response:
    """Discard a session."""
    if not store.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post(f"{settings.API_V1_STR}/sessions/{{session_id}}/reset", response_model=SessionStateResponse)
async def reset_session(session_id: str, request: ResetSessionRequest, store: Store) -> SessionStateResponse:
    """Rebuild the pieces of a session, optionally with new parameters.

    Fields left out keep their current value; an explicit ``"seed": null``
    switches back to unseeded random scatter.
    """
    _check_num_missing(request.num_missing)
    entry = _get_entry(store, session_id)
    entry.session.reset(**request.model_dump(exclude_unset=True))
    return _state(session_id, entry)


@app.post(f"{settings.API_V1_STR}/sessions/{{session_id}}/pointer/down", response_model=SessionStateResponse)
async def pointer_down(session_id: str, request: PointerDownRequest, store: Store) -> SessionStateResponse:
    """Pointer pressed on a piece. Unknown or locked pieces are ignored."""
    entry = _get_entry(store, session_id)
    entry.session.pointer_down(request.piece_id, request.x, request.y)
    return _state(session_id, entry)


@app.post(f"{settings.API_V1_STR}/sessions/{{session_id}}/pointer/move", response_model=SessionStateResponse)
async def pointer_move(session_id: str, request: PointerMoveRequest, store: Store) -> SessionStateResponse:
    """Pointer moved while possibly dragging a piece."""
    entry = _get_entry(store, session_id)
    entry.session.pointer_move(request.x, request.y)
    return _state(session_id, entry)


@app.post(f"{settings.API_V1_STR}/sessions/{{session_id}}/pointer/up", response_model=SessionStateResponse)
async def pointer_up(session_id: str, store: Store) -> SessionStateResponse:
    """Pointer released; the dragged piece snaps if it is close enough."""
    entry = _get_entry(store, session_id)
    entry.session.pointer_up()
    return _state(session_id, entry)


@app.post(f"{settings.API_V1_STR}/sessions/{{session_id}}/pointer/leave", response_model=SessionStateResponse)
async def pointer_leave(session_id: str, store: Store) -> SessionStateResponse:
    """Pointer left the board; handled like a release."""
    entry = _get_entry(store, session_id)
    entry.session.pointer_leave()
    return _state(session_id, entry)


@app.post(f"{settings.API_V1_STR}/sessions/{{session_id}}/solve", response_model=SessionStateResponse)
async def solve_session(session_id: str, store: Store) -> SessionStateResponse:
    """Start the solve animation. Ignored once solved."""
    entry = _get_entry(store, session_id)
    entry.session.solve()
    return _state(session_id, entry)


@app.get(
    f"{settings.API_V1_STR}/sessions/{{session_id}}/pieces/{{piece_id}}/formula",
    response_model=FormulaResponse,
)
async def get_piece_formula(session_id: str, piece_id: str, store: Store) -> FormulaResponse:
    """Golden-ratio formula behind a hat-mode piece.

    Raises:
        HTTPException: If the session or piece is unknown, or the piece has no formula.
    """
    piece = _get_piece(_get_entry(store, session_id), piece_id)
    if piece.formula is None:
        raise HTTPException(status_code=404, detail="Piece has no formula")
    return FormulaResponse(piece_id=piece.id, **explain_formula(piece.formula))


@app.get(f"{settings.API_V1_STR}/sessions/{{session_id}}/pieces/{{piece_id}}/image")
def get_piece_image(session_id: str, piece_id: str, store: Store, storage: Storage, renderer: Renderer) -> Response:
    """PNG cutout of a piece from the session's uploaded image.

    The board position of the image's top-left corner is sent in the
    ``X-Piece-Offset-X`` and ``X-Piece-Offset-Y`` headers.

    Raises:
        HTTPException: If the session or piece is unknown, or the session has no image.
    """
    entry = _get_entry(store, session_id)
    piece = _get_piece(entry, piece_id)

    image = storage.open(entry.puzzle_id) if entry.puzzle_id else None
    if image is None:
        raise HTTPException(status_code=404, detail="Session has no puzzle image")

    content, (offset_x, offset_y) = renderer.render(image, piece, entry.session.config.canvas_size)
    return Response(
        content=content,
        media_type="image/png",
        headers={"X-Piece-Offset-X": str(offset_x), "X-Piece-Offset-Y": str(offset_y)},
    )
