from fastapi import APIRouter, status, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from catalog import services
from catalog.core.database import get_session, get_sessionmaker, AsyncSession
from catalog.models import BookInstanceStatus
from catalog.schemas.bookinstance import BookInstanceFormData
from catalog.templating import templates
from sqlalchemy.ext.asyncio import async_sessionmaker
from typing import Annotated

bookinstances_router = APIRouter(prefix='/catalog')

BOOK_LIST_URL = '/catalog/books'

def render_form(request: Request, title: str, book_list, bookinstance=None,
                selected_book=None, errors=None):
    return templates.TemplateResponse(request, 'bookinstance_form.html', {
        'title': title,
        'book_list': book_list,
        'bookinstance': bookinstance,
        'selected_book': selected_book,
        'statuses': list(BookInstanceStatus),
        'errors': errors or [],
    })

@bookinstances_router.get('/bookinstances', response_class=HTMLResponse)
async def bookinstance_list(
    request: Request,
    db: AsyncSession=Depends(get_session)
    ):
    bookinstances = await services.get_all_bookinstances_service(db)
    return templates.TemplateResponse(request, 'bookinstance_list.html', {
        'title': 'Book Instance List',
        'bookinstance_list': bookinstances,
    })

# must be registered before /bookinstance/{bookinstance_id}
@bookinstances_router.get('/bookinstance/create', response_class=HTMLResponse)
async def bookinstance_create_get(
    request: Request,
    db: AsyncSession=Depends(get_session)
    ):
    book_list = await services.get_book_titles_service(db)
    return render_form(request, 'Create BookInstance', book_list)

@bookinstances_router.post('/bookinstance/create')
async def bookinstance_create_post(
    request: Request,
    form_data: Annotated[BookInstanceFormData, Form()],
    db: AsyncSession=Depends(get_session)
    ):
    bookinstance, errors = await services.create_bookinstance_service(db, form_data)
    if errors:
        book_list = await services.get_book_titles_service(db)
        return render_form(request, 'Create BookInstance', book_list,
                           bookinstance=form_data, selected_book=form_data.book, errors=errors)
    return RedirectResponse(bookinstance.url, status_code=status.HTTP_303_SEE_OTHER)

@bookinstances_router.get('/bookinstance/{bookinstance_id}', response_class=HTMLResponse)
async def bookinstance_detail(
    request: Request,
    bookinstance_id: str,
    db: AsyncSession=Depends(get_session)
    ):
    bookinstance = await services.get_bookinstance_service(db, bookinstance_id)
    return templates.TemplateResponse(request, 'bookinstance_detail.html', {
        'title': 'Book:',
        'bookinstance': bookinstance,
    })

@bookinstances_router.get('/bookinstance/{bookinstance_id}/delete', response_class=HTMLResponse)
async def bookinstance_delete_get(
    request: Request,
    bookinstance_id: str,
    db: AsyncSession=Depends(get_session)
    ):
    bookinstance = await services.get_bookinstance_service(db, bookinstance_id)
    return templates.TemplateResponse(request, 'bookinstance_delete.html', {
        'title': 'Delete BookInstance',
        'bookinstance': bookinstance,
    })

@bookinstances_router.post('/bookinstance/{bookinstance_id}/delete')
async def bookinstance_delete_post(
    bookinstance_id: str,
    db: AsyncSession=Depends(get_session)
    ):
    await services.delete_bookinstance_service(db, bookinstance_id)
    return RedirectResponse(BOOK_LIST_URL, status_code=status.HTTP_303_SEE_OTHER)

@bookinstances_router.get('/bookinstance/{bookinstance_id}/update', response_class=HTMLResponse)
async def bookinstance_update_get(
    request: Request,
    bookinstance_id: str,
    session_factory: async_sessionmaker[AsyncSession]=Depends(get_sessionmaker)
    ):
    bookinstance, book_list = await services.get_update_form_service(session_factory, bookinstance_id)
    return render_form(request, 'Update BookInstance', book_list,
                       bookinstance=bookinstance, selected_book=bookinstance.book_id)

@bookinstances_router.post('/bookinstance/{bookinstance_id}/update')
async def bookinstance_update_post(
    request: Request,
    bookinstance_id: str,
    form_data: Annotated[BookInstanceFormData, Form()],
    db: AsyncSession=Depends(get_session)
    ):
    bookinstance, errors = await services.update_bookinstance_service(db, bookinstance_id, form_data)
    if errors:
        book_list = await services.get_book_titles_service(db)
        return render_form(request, 'Update BookInstance', book_list,
                           bookinstance=form_data, selected_book=form_data.book, errors=errors)
    return RedirectResponse(bookinstance.url, status_code=status.HTTP_303_SEE_OTHER)
