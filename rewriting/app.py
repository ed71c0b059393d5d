from fastapi import FastAPI, HTTPException

from .config import RewriteServiceConfig
from .exceptions import RemoteError
from .models import ConnectionTestResponse, RewriteRequest, RewriteResponse
from .service import RewriteService
from .settings import RewriteSettings, SettingsStore


def create_app(
    settings: RewriteSettings | None = None,
    config: RewriteServiceConfig | None = None,
    service: RewriteService | None = None,
) -> FastAPI:
    if service is None:
        config = config or RewriteServiceConfig.from_env()
        if settings is None:
            settings = SettingsStore(config.settings_path, defaults=RewriteSettings.from_env()).settings
        service = RewriteService(settings, config=config)
    app = FastAPI(
        title="PDF Rewrite Service",
        version="1.0.0",
        description="Chunked PDF rewriting for text-to-speech.",
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/rewrite", response_model=RewriteResponse)
    def rewrite(request: RewriteRequest) -> RewriteResponse:
        try:
            outcome, paths = service.process_and_save(
                request.pdf_path, chunk_size=request.chunk_size
            )
        except Exception as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return RewriteResponse(
            document_id=paths.document_id,
            total_chunks=outcome.total_chunks,
            rewritten_chunks=outcome.result.success_count,
            failed_chunks=outcome.result.failed_indices,
            text_path=str(paths.text_file),
            pdf_path=str(paths.pdf_file),
            result_path=str(paths.result_file),
            preview=outcome.preview,
        )

    @app.get("/models")
    def models() -> dict:
        try:
            return {"models": service.client.list_models()}
        except Exception as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    @app.post("/test-connection", response_model=ConnectionTestResponse)
    def test_connection() -> ConnectionTestResponse:
        try:
            reply = service.client.test_connection()
        except RemoteError as exc:
            return ConnectionTestResponse(ok=False, message=str(exc))
        except Exception as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return ConnectionTestResponse(ok=True, message=reply)

    return app
