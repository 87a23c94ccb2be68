from fastapi import FastAPI
from quote_intake.routes.quote_router import quote_router
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException
from quote_intake.core.config import settings
from quote_intake.core.database import engine, init_models
from quote_intake.core.exceptions import (
    ClientInputError,
    client_input_error_handler,
    method_not_allowed_handler,
)
from quote_intake.core.logger import get_logger
from quote_intake.core.middleware import log_requests

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if engine is not None:
        try:
            await init_models(engine)
        except Exception as e:
            # Storage is best-effort
            logger.exception(f"Could not create quotes table: {e}")
    else:
        logger.info("DATABASE_URL not set, quote persistence disabled")

    logger.info(" Application startup complete")

    yield

    logger.info(" Application shutdown initiated")
    if engine is not None:
        await engine.dispose()

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.add_exception_handler(ClientInputError, client_input_error_handler)
app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)
app.middleware("http")(log_requests)
app.include_router(quote_router)
