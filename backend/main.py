import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import API_PREFIX, CORS_ORIGINS
from database import Database
from errors import PersistenceError, PlanGenerationError, RegenerationPreconditionError
from logger import setup_logging
from routers import profile_router, plan_router, today_router, stats_router, feedback_router, lessons_router
from services.plan_client import PlanGeneratorClient

log = logging.getLogger(__name__)


def create_app(database: Database = None, plan_client: PlanGeneratorClient = None) -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.database is None:
            app.state.database = Database()
        app.state.database.ensure_indexes()
        log.info("Hair coach API started")
        yield
        app.state.database.close()

    app = FastAPI(
        title="Hair Coach API",
        description="Backend for the hair-care coaching app: plans, daily routine and streaks",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.plan_client = plan_client or PlanGeneratorClient()

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 注册路由
    app.include_router(profile_router, prefix=API_PREFIX)
    app.include_router(plan_router, prefix=API_PREFIX)
    app.include_router(today_router, prefix=API_PREFIX)
    app.include_router(stats_router, prefix=API_PREFIX)
    app.include_router(feedback_router, prefix=API_PREFIX)
    app.include_router(lessons_router, prefix=API_PREFIX)

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        return JSONResponse(
            status_code=503,
            content={"detail": "Could not save your progress, please try again"},
            headers={"Retry-After": "1"},
        )

    @app.exception_handler(PlanGenerationError)
    async def plan_generation_error_handler(request: Request, exc: PlanGenerationError):
        log.warning("Plan generation failed: %s", exc)
        return JSONResponse(status_code=502, content={"detail": f"Failed to generate plan: {exc}"})

    @app.exception_handler(RegenerationPreconditionError)
    async def regeneration_error_handler(request: Request, exc: RegenerationPreconditionError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.get("/")
    async def root():
        return {"message": "Hair coach API is running", "version": "1.0.0"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
