from sqlalchemy import select, delete, func
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession
from catalog.models import Book, BookInstance

async def get_all_bookinstances(db: AsyncSession):
    stmt = select(BookInstance).options(selectinload(BookInstance.book))
    result = await db.execute(stmt)
    return result.scalars().all()

async def get_bookinstance_by_id(db: AsyncSession, bookinstance_id: str):
    stmt = select(BookInstance).options(
        selectinload(BookInstance.book)).where(BookInstance.id == bookinstance_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()

async def get_book_by_id(db: AsyncSession, book_id: int):
    book = await db.get(Book, book_id)
    return book

async def get_book_titles(db: AsyncSession):
    stmt = select(Book.id, Book.title).order_by(Book.title)
    result = await db.execute(stmt)
    return result.all()

async def get_books_with_copy_count(db: AsyncSession):
    stmt = select(Book, func.count(BookInstance.id).label('copies')).outerjoin(
        BookInstance, BookInstance.book_id == Book.id).group_by(Book.id).order_by(Book.title)
    result = await db.execute(stmt)
    return result.all()

async def create_bookinstance(db: AsyncSession, bookinstance: BookInstance):
    db.add(bookinstance)
    await db.commit()
    await db.refresh(bookinstance)
    return bookinstance

async def update_bookinstance(
        db: AsyncSession,
        bookinstance: BookInstance,
        update_data: dict,
        ):
    for key, value in update_data.items():
        setattr(bookinstance, key, value)
    await db.commit()
    await db.refresh(bookinstance)
    return bookinstance

async def delete_bookinstance(db: AsyncSession, bookinstance_id: str):
    stmt = delete(BookInstance).where(BookInstance.id == bookinstance_id)
    result = await db.execute(stmt)
    await db.commit()
    return result.rowcount
