from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from catalog import services
from catalog.core.database import get_session, AsyncSession
from catalog.templating import templates

books_router = APIRouter(prefix='/catalog')

@books_router.get('/books', response_class=HTMLResponse)
async def book_list(
    request: Request,
    db: AsyncSession=Depends(get_session)
    ):
    books = await services.get_books_service(db)
    return templates.TemplateResponse(request, 'book_list.html', {
        'title': 'Book List',
        'book_list': books,
    })
