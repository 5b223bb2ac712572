"""
FastAPI application for the book inventory service.

Run with:
    python -m bookinventory.api.main
or:
    uvicorn bookinventory.api.main:app
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookinventory.api.responses import register_exception_handlers
from bookinventory.api.routes import auth, books, users
from bookinventory.core.config import settings
from bookinventory.db.session import init_db

logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"Book Inventory API started ({settings.ENVIRONMENT})")
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Book Inventory API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.list_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(books.router)
    app.include_router(users.router)

    @app.get("/")
    def read_root():
        return {"message": "Book Inventory API is running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
