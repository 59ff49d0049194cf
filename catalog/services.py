import asyncio
from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from catalog import crud
from catalog.models import BookInstance
from catalog.schemas.bookinstance import BookInstanceFormData, BookInstanceCreate
from logging import getLogger

logger = getLogger(__name__)

bookinstance_not_found_exception = HTTPException(
    status.HTTP_404_NOT_FOUND,
    detail='Book copy not found'
)

book_not_found_exception = HTTPException(
    status.HTTP_404_NOT_FOUND,
    detail='Book not found'
)

internal_error_exception = HTTPException(
    status.HTTP_500_INTERNAL_SERVER_ERROR,
    detail='An internal error occured'
)

def validate_bookinstance_form(form_data: BookInstanceFormData):
    """
    Apply the field rules to sanitized form data.

    Returns `(payload, errors)`: the validated `BookInstanceCreate` and an empty
    list, or `None` and a list of `{'field': ..., 'msg': ...}` dicts.
    """
    try:
        payload = BookInstanceCreate.model_validate(form_data.model_dump())
        return payload, []
    except ValidationError as e:
        errors = [
            {'field': str(err['loc'][0]) if err['loc'] else '', 'msg': err['msg']}
            for err in e.errors()
        ]
        return None, errors

async def _check_form(db: AsyncSession, form_data: BookInstanceFormData):
    payload, errors = validate_bookinstance_form(form_data)
    if payload and not await crud.get_book_by_id(db, payload.book):
        errors.append({'field': 'book', 'msg': 'Selected book does not exist'})
        payload = None
    return payload, errors

async def get_all_bookinstances_service(db: AsyncSession):
    try:
        bookinstances = await crud.get_all_bookinstances(db)
        logger.debug(f'Retrieved {len(bookinstances)} book copies')
        return bookinstances
    except SQLAlchemyError as e:
        logger.error(f'DataBase error retrieving book copies: {e}')
        await db.rollback()
        raise internal_error_exception

async def get_bookinstance_service(db: AsyncSession, bookinstance_id: str):
    try:
        bookinstance = await crud.get_bookinstance_by_id(db, bookinstance_id)
        if not bookinstance:
            raise bookinstance_not_found_exception
        return bookinstance
    except HTTPException:
        raise
    except SQLAlchemyError as e:
        logger.error(f'DataBase error retrieving book copy: {e}')
        await db.rollback()
        raise internal_error_exception

async def get_book_titles_service(db: AsyncSession):
    try:
        return await crud.get_book_titles(db)
    except SQLAlchemyError as e:
        logger.error(f'DataBase error retrieving book titles: {e}')
        await db.rollback()
        raise internal_error_exception

async def get_books_service(db: AsyncSession):
    try:
        return await crud.get_books_with_copy_count(db)
    except SQLAlchemyError as e:
        logger.error(f'DataBase error retrieving books: {e}')
        await db.rollback()
        raise internal_error_exception

async def get_update_form_service(
        session_factory: async_sessionmaker[AsyncSession],
        bookinstance_id: str):
    """Load the copy and the book titles at the same time, one session each."""
    async def _run(query, *args):
        async with session_factory() as session:
            return await query(session, *args)

    # a failing read cancels the other one
    try:
        async with asyncio.TaskGroup() as tg:
            bookinstance_task = tg.create_task(_run(crud.get_bookinstance_by_id, bookinstance_id))
            book_list_task = tg.create_task(_run(crud.get_book_titles))
    except* SQLAlchemyError as eg:
        logger.error(f'DataBase error loading update form: {eg.exceptions[0]}')
        raise internal_error_exception
    bookinstance = bookinstance_task.result()
    if not bookinstance:
        raise book_not_found_exception
    return bookinstance, book_list_task.result()

async def create_bookinstance_service(db: AsyncSession, form_data: BookInstanceFormData):
    try:
        payload, errors = await _check_form(db, form_data)
        if errors:
            logger.info(f'Rejected book copy form: {errors}')
            return None, errors
        bookinstance = BookInstance(
            book_id=payload.book,
            imprint=payload.imprint,
            status=payload.status,
            due_back=payload.due_back
        )
        await crud.create_bookinstance(db, bookinstance)
        logger.info(f'New book copy created: {bookinstance.id}')
        return bookinstance, []
    except SQLAlchemyError as e:
        logger.error(f'DataBase error creating book copy: {e}')
        await db.rollback()
        raise internal_error_exception

async def update_bookinstance_service(
        db: AsyncSession,
        bookinstance_id: str,
        form_data: BookInstanceFormData):
    try:
        payload, errors = await _check_form(db, form_data)
        if errors:
            logger.info(f'Rejected book copy form for {bookinstance_id}: {errors}')
            return None, errors
        bookinstance = await crud.get_bookinstance_by_id(db, bookinstance_id)
        if not bookinstance:
            raise bookinstance_not_found_exception
        update_data = {
            'book_id': payload.book,
            'imprint': payload.imprint,
            'status': payload.status,
            'due_back': payload.due_back
        }
        await crud.update_bookinstance(db, bookinstance, update_data)
        logger.info(f'Book copy {bookinstance_id} updated')
        return bookinstance, []
    except HTTPException:
        raise
    except SQLAlchemyError as e:
        logger.error(f'DataBase error updating book copy: {e}')
        await db.rollback()
        raise internal_error_exception

async def delete_bookinstance_service(db: AsyncSession, bookinstance_id: str):
    try:
        deleted = await crud.delete_bookinstance(db, bookinstance_id)
        if deleted:
            logger.info(f'Book copy {bookinstance_id} deleted')
        else:
            logger.info(f'No book copy {bookinstance_id} to delete')
        return bool(deleted)
    except SQLAlchemyError as e:
        logger.error(f'DataBase error deleting book copy: {e}')
        await db.rollback()
        raise internal_error_exception
