import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from subscription_service.config import Settings, settings
from subscription_service.database import Base, build_engine, build_session_factory
from subscription_service.exceptions import SubscriptionServiceError
from subscription_service.logging_config import configure_logging
from subscription_service.middleware import TimingMiddleware
from subscription_service.routers import subscriptions
from subscription_service.seeds import seed_subscriptions

VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def _format_validation_errors(errors) -> str:
    parts = []
    for err in errors:
        # Drop the "body" / "query" / "path" prefix FastAPI puts on every location.
        loc = [str(p) for p in err.get("loc", ())[1:]]
        parts.append(f"{'.'.join(loc)}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts) or "invalid request"


async def subscription_error_handler(request: Request, exc: SubscriptionServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_errors(exc.errors())
    logger.warning("Invalid request %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "internal server error"})


def create_application(app_settings: Settings = settings) -> FastAPI:
    configure_logging(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        engine = build_engine(app_settings)
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)
        logger.info("Database engine created: pool_size=%d", app_settings.DB_POOL_SIZE)

        if app_settings.DB_CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables ensured")

        if app_settings.SEED_ON_STARTUP:
            async with app.state.session_factory() as session:
                await seed_subscriptions(session)
                await session.commit()
        yield
        # Shutdown
        await engine.dispose()
        logger.info("Database engine disposed")

    app = FastAPI(
        title="Subscription Service API",
        description="Manages user subscriptions and aggregates their cost over a period",
        version=VERSION,
        lifespan=lifespan,
    )

    # Middleware
    app.add_middleware(TimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error translation
    app.add_exception_handler(SubscriptionServiceError, subscription_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Routers
    app.include_router(subscriptions.router)

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": VERSION}

    return app


app = create_application()


def run() -> None:
    import uvicorn

    logger.info("Server is starting: port=%d", settings.APP_PORT)
    uvicorn.run(
        "subscription_service.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
