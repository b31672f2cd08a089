from __future__ import annotations

from fastapi import FastAPI, HTTPException

from . import __version__
from .config import AppConfig, load_config
from .converter import Converter
from .executors import run_sync
from .logging import ConversionLogEntry, ConversionLogger
from .options import Options
from .schemas import ConvertRequest, ConvertResponse, HealthStatus, Timings
from .settings import get_settings
from .utils import size_within_limit


def _resolve_config(config: AppConfig | None) -> AppConfig:
    if config is not None:
        return config
    settings = get_settings()
    resolved = load_config(settings.config_path)
    if settings.enable_local_api is not None:
        resolved.api.enable_local_api = settings.enable_local_api
    return resolved


def create_app(config: AppConfig | None = None, *, require_enabled: bool = True) -> FastAPI:
    config = _resolve_config(config)
    if require_enabled and not config.api.enable_local_api:
        raise RuntimeError("Local API is disabled. Enable it via [api] enable_local_api in config.toml")
    converter = Converter()
    log_path = config.runtime.log_path
    logger = ConversionLogger(log_path) if log_path else None
    app = FastAPI(title="supermarkdown", version=__version__)

    @app.get("/health", summary="Health check")
    def health() -> HealthStatus:
        return HealthStatus(status="ok", version=__version__)

    @app.post("/convert", summary="Convert an HTML document to Markdown")
    async def convert(request: ConvertRequest) -> ConvertResponse:
        if not size_within_limit(request.html, config.runtime.max_input_bytes):
            raise HTTPException(status_code=413, detail="SIZE_LIMIT")
        options = Options.from_mapping(request.options, base=config.conversion)
        result = await run_sync(converter.run, request.html, options)
        if logger:
            logger.append(
                ConversionLogEntry(
                    source="api",
                    status="success",
                    options=options.as_dict(),
                    timings=result.timings,
                    input_chars=result.input_chars,
                    output_chars=result.output_chars,
                )
            )
        return ConvertResponse(
            markdown=result.markdown,
            timings=Timings(**result.timings.as_dict()),
            input_chars=result.input_chars,
            output_chars=result.output_chars,
        )

    return app


def serve(config: AppConfig | None = None) -> None:
    """Run the local API on the host and port configured under ``[api]``."""

    import uvicorn

    config = _resolve_config(config)
    uvicorn.run(create_app(config), host=config.api.host, port=config.api.port)


__all__ = ["create_app", "serve"]


if __name__ == "__main__":
    serve()
