import logging
from typing import Optional

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse, Response

from .config import Settings, configure_logging
from .ingest import IngestError
from .models import (
    HealthResponse,
    KeyRequest,
    SearchRequest,
    SearchResponse,
    SelectionResponse,
    SelectRequest,
    SessionResponse,
    TimeData,
    TimeErrorResponse,
    TimeResponse,
    TokenRequest,
    UploadResponse,
)
from .session import ModeError, SearchSession
from .timeapi import current_time

logger = logging.getLogger(__name__)

TIME_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET",
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_session(request: Request) -> SearchSession:
    return request.app.state.session


def _selection_response(session: SearchSession) -> SelectionResponse:
    return SelectionResponse(
        text=session.query,
        selections=session.selections,
        error=session.token_error,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings)

    app = FastAPI(
        title="p75-search",
        description="Upload a Code/P75 CSV and look up P75 values by code",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.session = SearchSession(mode=settings.mode, tolerant_headers=settings.tolerant_headers)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return {"ok": True}

    @app.post("/upload", response_model=UploadResponse)
    async def upload_csv(file: UploadFile = File(...), session: SearchSession = Depends(get_session)):
        raw = await file.read()
        try:
            rows = session.load(file.filename, raw)
        except IngestError as exc:
            raise HTTPException(status_code=422, detail=exc.message)
        return UploadResponse(file_name=file.filename, rows=len(rows))

    @app.get("/session", response_model=SessionResponse)
    async def get_state(session: SearchSession = Depends(get_session)):
        return SessionResponse(**session.snapshot())

    @app.post("/search", response_model=SearchResponse)
    async def search_codes(body: SearchRequest, session: SearchSession = Depends(get_session)):
        results = session.type_search(body.query)
        return SearchResponse(query=session.query, results=results, pinned=session.pinned)

    @app.post("/select", response_model=SearchResponse)
    async def select_code(body: SelectRequest, session: SearchSession = Depends(get_session)):
        try:
            session.select(body.code)
        except ModeError as exc:
            raise HTTPException(status_code=409, detail=str(exc))
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        return SearchResponse(query=session.query, results=session.results, pinned=session.pinned)

    @app.post("/tokens/key", response_model=SelectionResponse)
    async def token_key(body: KeyRequest, session: SearchSession = Depends(get_session)):
        try:
            session.handle_key(body.key, body.text)
        except ModeError as exc:
            raise HTTPException(status_code=409, detail=str(exc))
        return _selection_response(session)

    @app.post("/tokens", response_model=SelectionResponse)
    async def add_token(body: TokenRequest, session: SearchSession = Depends(get_session)):
        try:
            session.complete_token(body.token)
        except ModeError as exc:
            raise HTTPException(status_code=409, detail=str(exc))
        return _selection_response(session)

    @app.delete("/selections/{code}", response_model=SelectionResponse)
    async def remove_selection(code: str, session: SearchSession = Depends(get_session)):
        session.remove(code)
        return _selection_response(session)

    @app.get("/api/time", response_model=TimeResponse, responses={500: {"model": TimeErrorResponse}})
    def get_time():
        try:
            body = TimeResponse(data=TimeData(**current_time()))
        except Exception:
            logger.exception("Failed to get time")
            return JSONResponse(
                status_code=500,
                content=TimeErrorResponse(error="Failed to get time").model_dump(),
            )
        return JSONResponse(status_code=200, content=body.model_dump(), headers=TIME_CORS_HEADERS)

    @app.options("/api/time", status_code=204)
    def time_preflight():
        return Response(status_code=204, headers=TIME_CORS_HEADERS)

    return app


app = create_app()
