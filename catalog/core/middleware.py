import time, enum
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from typing import Callable, Awaitable
from logging import getLogger

logger = getLogger(__name__)

class Event(enum.Enum):
    LIST_BOOKS = 'list_books'
    LIST_COPIES = 'list_copies'
    FETCH_COPY = 'fetch_copy'
    CREATE_FORM = 'create_form'
    CREATE_COPY = 'create_copy'
    DELETE_FORM = 'delete_form'
    DELETE_COPY = 'delete_copy'
    UPDATE_FORM = 'update_form'
    UPDATE_COPY = 'update_copy'
    UNIDENTIFIED_EVENT = 'unidentified_event'

def detect_event_from_request(request: Request) -> Event:
    path = request.url.path.lower().rstrip('/')
    method = request.method.upper()

    if path == '/catalog/books' and method == 'GET':
        return Event.LIST_BOOKS
    if path == '/catalog/bookinstances' and method == 'GET':
        return Event.LIST_COPIES

    if path == '/catalog/bookinstance/create':
        return Event.CREATE_COPY if method == 'POST' else Event.CREATE_FORM
    if path.startswith('/catalog/bookinstance/'):
        if path.endswith('/delete'):
            return Event.DELETE_COPY if method == 'POST' else Event.DELETE_FORM
        if path.endswith('/update'):
            return Event.UPDATE_COPY if method == 'POST' else Event.UPDATE_FORM
        if method == 'GET' and path.count('/') == 3:
            return Event.FETCH_COPY

    return Event.UNIDENTIFIED_EVENT

class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        start_time = time.time()
        event_type = detect_event_from_request(request)
        request.state.event = event_type

        response = await call_next(request)

        latency = round((time.time() - start_time) * 1000, 2)
        line = (f'{request.method} {request.url.path} event={event_type.value} '
                f'status={response.status_code} latency={latency} ms')
        if event_type == Event.UNIDENTIFIED_EVENT:
            logger.warning(f'Unidentified event: {line}')
        elif response.status_code >= 500:
            logger.error(line)
        else:
            logger.info(line)
        return response
