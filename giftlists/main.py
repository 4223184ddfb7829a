import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from giftlists.config import settings
from giftlists.database import engine
from giftlists.errors import GiftListError
from giftlists.logger import configure_logging
from giftlists.routers import auth, gifts, lists, users

logger = logging.getLogger("giftlists.api")


def create_app() -> FastAPI:
    configure_logging()
    application = FastAPI(title="Gift Lists API")

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(auth.router)
    application.include_router(users.router)
    application.include_router(lists.router)
    application.include_router(gifts.router)

    @application.exception_handler(GiftListError)
    async def gift_list_error_handler(request: Request, exc: GiftListError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        body = {"detail": exc.message, "error": exc.code}
        claimed_by = getattr(exc, "claimed_by", None)
        if claimed_by is not None:
            body["claimed_by"] = claimed_by
        return JSONResponse(status_code=exc.status_code, content=body)

    @application.get("/health")
    def health():
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {"status": "healthy"}
        except Exception:
            logger.exception("Health check failed")
            return JSONResponse(status_code=503, content={"status": "unhealthy"})

    return application


app = create_app()
