# app_fastapi.py
# -*- coding: utf-8 -*-

from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# settings / logging live in the core package
from core.config import GatewayConfig, load_gateway_config
from core.logging import logger
from routers import adapt, health, intake, orchestrate
from services.intake_pipeline import IntakePipeline

# ============================================================
# FastAPI app (Swagger description included)
# ============================================================

DESCRIPTION = """
Intake gateway for **creative-brief documents**.

- Upload PDF / plain-text briefs to `/api/intake`.
- Each brief's text goes to the Brain classification service, and the Brain
  output is adapted into the canonical intent object
  (why / who / what / where / how_hard + uncertainty).
- A routing verdict is computed for each brief:
  - blocked (human confirmation required) briefs stop there
  - routed briefs go to the Processor with `{"intent_object": ...}`
- `/api/adapt` and `/api/orchestrate` expose the adapter and the routing
  decision on their own.
"""


def create_app(
    config: Optional[GatewayConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the gateway app.

    config defaults to the environment (.env); transport is only passed by
    tests that fake the Brain / Processor.
    """
    config = config or load_gateway_config()

    app = FastAPI(
        title="Brief Intake Gateway API",
        description=DESCRIPTION,
        version="1.0.0",
    )
    app.state.config = config
    app.state.pipeline = IntakePipeline(config, transport=transport)

    # CORS: * during development, restrict to known origins in deployment
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(intake.router)
    app.include_router(adapt.router)
    app.include_router(orchestrate.router)

    @app.get(
        "/debug/routes",
        tags=["debug"],
        summary="Registered route paths (debugging)",
    )
    def debug_routes():
        return [r.path for r in app.routes]

    if not config.brain_url:
        logger.warning("⚠️ BRAIN_URL is not set: every intake file will fail at the Brain step")
    if not config.processor_url:
        logger.info("PROCESSOR_URL is not set: the Processor step will be skipped")

    return app


app = create_app()

# ============================================================
# uvicorn entry point
# ============================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app_fastapi:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
