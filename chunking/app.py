from fastapi import FastAPI, HTTPException

from .config import ChunkingServiceConfig
from .models import AnalyzeRequest, ChunkRequest, ChunkResponse, ContentStats
from .service import ChunkingService


def create_app(config: ChunkingServiceConfig | None = None) -> FastAPI:
    service = ChunkingService(config=config)
    app = FastAPI(
        title="Chunking Service",
        version="1.0.0",
        description="Paragraph- and sentence-aware chunking under a token budget.",
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/analyze", response_model=ContentStats)
    def analyze(request: AnalyzeRequest) -> ContentStats:
        return service.analyze(request.text)

    @app.post("/chunk", response_model=ChunkResponse)
    def chunk(request: ChunkRequest) -> ChunkResponse:
        try:
            chunks = service.chunk_text(request.text, request.budget)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return ChunkResponse(
            chunks=chunks,
            total_chunks=len(chunks),
            stats=service.analyze(request.text),
        )

    return app


app = create_app()
