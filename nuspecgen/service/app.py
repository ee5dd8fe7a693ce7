"""FastAPI application entrypoint for nuspecgen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..errors import NuspecGenError
from ..orchestrator import GenerationRequest, GenerationResult, Orchestrator


class GenerateRequest(BaseModel):
    target_path: str
    target_name: str
    project_dir: str
    project_path: str
    template: str
    dry_run: bool = False


class DependencyModel(BaseModel):
    id: str
    version: Optional[str] = None


class GenerateResponse(BaseModel):
    version: Optional[str] = None
    output_path: str
    written: bool
    dependencies: List[DependencyModel] = []
    content: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing manifest generation."""

    app = FastAPI(title="nuspecgen", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        # One orchestrator per request; runs share no state.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        request = GenerationRequest(
            target_path=payload.target_path,
            target_name=payload.target_name,
            project_dir=payload.project_dir,
            project_path=payload.project_path,
            template_path=payload.template,
        )

        def _run() -> GenerationResult:
            return orchestrator.run(request, dry_run=payload.dry_run)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run)
        return GenerateResponse(
            version=result.version,
            output_path=str(result.output_path),
            written=result.written,
            dependencies=[
                DependencyModel(id=record.id, version=record.version)
                for record in result.dependencies
            ],
            content=result.content.decode("utf-8") if payload.dry_run else None,
        )

    @app.exception_handler(NuspecGenError)
    async def generation_error_handler(_: Any, exc: NuspecGenError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
