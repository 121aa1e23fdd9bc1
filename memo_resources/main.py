from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
from sqlalchemy import select, func

from memo_resources.config import get_settings
from memo_resources.database.database import engine, AsyncSessionLocal, init_db
from memo_resources.database.models.user import User
from memo_resources.database.models.memo import Memo
from memo_resources.database.models.resource import Resource
from memo_resources.core.errors import ServiceError, service_error_handler
from memo_resources.core.security import hash_password

from memo_resources.api import auth, resources

settings = get_settings()
logger = logging.getLogger(__name__)

logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@asynccontextmanager
async def lifespan(app: FastAPI):

    logger.info("Starting application...")

    await init_db()

    if settings.SEED_DEMO_DATA:
        async with AsyncSessionLocal() as session:
            user_count = await session.scalar(select(func.count(User.id)))

            if user_count == 0:
                logger.info("Initializing database with demo data...")
                await initialize_demo_data(session)

    logger.info("Application started successfully")

    yield

    logger.info("Shutting down application...")
    await engine.dispose()


async def initialize_demo_data(session):

    demo_user = User(
        username="demo",
        nickname="Demo",
        password_hash=hash_password("demo123")
    )
    session.add(demo_user)
    await session.flush()

    memo = Memo(
        creator_id=demo_user.id,
        content="Trip photos #travel"
    )
    session.add(memo)
    await session.flush()

    session.add_all([
        Resource(
            creator_id=demo_user.id,
            filename="beach.png",
            type="image/png",
            size=48213,
            memo_id=memo.id
        ),
        Resource(
            creator_id=demo_user.id,
            filename="itinerary.pdf",
            external_link="https://example.com/itinerary.pdf",
            type="application/pdf"
        ),
    ])

    await session.commit()
    logger.info("Database initialized with demo data")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)

    app.include_router(auth.router)
    app.include_router(resources.router)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/docs"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "memo_resources.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
