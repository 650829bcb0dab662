"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from annotator.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.annotator_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Tutor Annotator",
        description="Resolves tutor annotation phrases to bounding boxes on the problem canvas",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import the engine so @strategy decorators fire
    import annotator.engine  # noqa: F401
    from annotator.engine.resolver.oracle import get_oracle_cache

    get_oracle_cache().max_entries = settings.oracle_cache_size

    from annotator.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
