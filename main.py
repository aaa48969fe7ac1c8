import contextlib
import logging

from fastapi import FastAPI

from merchnexus.config import config
from merchnexus.db.session import create_tables, engine
from merchnexus.routers import register_routers, register_exception_handlers

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(_app: FastAPI):
    if config.CREATE_TABLES:
        await create_tables()
        logger.info("Database schema ensured")
    yield
    await engine.dispose()


app = FastAPI(title="Merch Nexus", lifespan=lifespan)
register_routers(app)
register_exception_handlers(app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.FASTAPI_HOST, port=config.FASTAPI_PORT)
