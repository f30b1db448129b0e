import logging
import time

from fastapi.requests import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

from api.exception_handlers import error_response
from utils.network import get_client_ip


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        await self.custom_log(request, response)
        return response

    @staticmethod
    async def custom_log(request: Request, response: Response):
        ip = get_client_ip(request)
        process_time = response.headers.get("X-Process-Time", "")
        logging.info(
            f'{ip} - "{request.method} {request.url.path} HTTP/1.1" {response.status_code} {process_time}'
        )


class TimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        try:
            response = await call_next(request)
        except RuntimeError as exc:
            if str(exc) == "No response returned." and await request.is_disconnected():
                response = Response(status_code=204)
            else:
                logging.exception(f"Internal Server Error: {exc}")
                response = error_response(str(exc))
        except Exception as e:
            logging.exception(f"Internal Server Error: {e}")
            response = error_response(str(e) or e.__class__.__name__)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f} seconds"
        return response
