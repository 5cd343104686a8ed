import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from insights_hub.api.endpoints import article
from insights_hub.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(title=settings.PROJECT_NAME)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(article.router, prefix=settings.API_STR)

    @app.get("/")
    async def root():
        return {"status": f"{settings.PROJECT_NAME} API is running"}

    return app


app = create_app()
