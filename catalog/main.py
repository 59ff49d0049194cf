import logging
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from catalog.core.config import get_settings
from catalog.core.database import engine, Base
from catalog.core.middleware import RequestLogMiddleware
from catalog.routers import books, bookinstances
from catalog.templating import templates

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f'{settings.app_name} started')
    yield # app runs here
    await engine.dispose()

app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(RequestLogMiddleware)

app.include_router(books.books_router)
app.include_router(bookinstances.bookinstances_router)

@app.exception_handler(StarletteHTTPException)
async def render_http_exception(request: Request, exc: StarletteHTTPException):
    return templates.TemplateResponse(request, 'error.html', {
        'title': 'Error',
        'message': exc.detail,
        'status_code': exc.status_code,
    }, status_code=exc.status_code, headers=exc.headers)

@app.get('/')
async def root():
    return RedirectResponse('/catalog/bookinstances')
