import time

from fastapi import Request

from app.core.logger import logger


async def log_requests(request: Request, call_next):
    """Log chaque requête / réponse avec sa durée."""
    start_time = time.perf_counter()
    logger.info(f"➡️  {request.method} {request.url.path}")

    try:
        response = await call_next(request)
    except Exception:
        process_time = (time.perf_counter() - start_time) * 1000
        logger.exception(f"❌ {request.method} {request.url.path} - Time: {process_time:.2f}ms")
        raise

    process_time = (time.perf_counter() - start_time) * 1000
    logger.info(
        f"⬅️  {request.method} {request.url.path} "
        f"- Status: {response.status_code} "
        f"- Time: {process_time:.2f}ms"
    )
    return response
