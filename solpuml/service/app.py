"""FastAPI application entrypoint for solpuml service mode."""

from __future__ import annotations

import asyncio
from typing import Callable, List

from fastapi import Depends, FastAPI
from pydantic import BaseModel

from ..pipeline import DiagramPipeline, RunReport


class SourceFile(BaseModel):
    path: str
    content: str


class DiagramRequest(BaseModel):
    sources: List[SourceFile] = []


class FileErrorModel(BaseModel):
    path: str
    stage: str
    message: str


class DiagramResponse(BaseModel):
    document: str
    contracts: int
    errors: List[FileErrorModel] = []


class HealthResponse(BaseModel):
    status: str


def _default_pipeline() -> DiagramPipeline:
    return DiagramPipeline()


def create_app(
    pipeline_factory: Callable[[], DiagramPipeline] = _default_pipeline,
) -> FastAPI:
    """Create the FastAPI application exposing diagram rendering."""

    app = FastAPI(title="solpuml", version="1.0.0")

    async def get_pipeline() -> DiagramPipeline:
        return pipeline_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/diagram", response_model=DiagramResponse)
    async def diagram(
        payload: DiagramRequest,
        pipeline: DiagramPipeline = Depends(get_pipeline),
    ) -> DiagramResponse:
        sources = [(source.path, source.content) for source in payload.sources]
        loop = asyncio.get_running_loop()
        # Parsing is CPU bound; keep it off the event loop.
        report: RunReport = await loop.run_in_executor(None, pipeline.run_sources, sources)
        return DiagramResponse(
            document=report.document,
            contracts=len(report.contracts),
            errors=[
                FileErrorModel(path=error.path, stage=error.stage, message=error.message)
                for error in report.errors
            ],
        )

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
