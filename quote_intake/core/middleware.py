
import time
from fastapi import Request
from quote_intake.core.logger import get_logger

logger = get_logger("request_logger")

async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    client = request.client.host if request.client else "unknown"
    logger.info(f"Started request {request.method} {request.url.path} from {client}")
    response = await call_next(request)
    duration = time.perf_counter() - started
    logger.info(
        f"Completed request {request.method} {request.url.path} "
        f"with status={response.status_code} in {duration:.3f}s"
    )
    return response
