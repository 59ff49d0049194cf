import pytest
from datetime import date
from httpx import ASGITransport, AsyncClient

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from catalog.core.database import Base, get_sessionmaker
from catalog.main import app
from catalog.models import Book, BookInstance, BookInstanceStatus

BASE_URL = "http://127.0.0.1:8000"


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="function")
async def test_engine(tmp_path):
    # file backed so update-get can open two connections at once
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture(scope="function")
async def test_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
async def client(session_factory):
    app.dependency_overrides[get_sessionmaker] = lambda: session_factory
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def book_creation_data():
    return {"title": "The Time Machine", "author": "H. G. Wells", "isbn": "9780141439976"}


@pytest.fixture(scope="function")
async def mock_book(test_session, book_creation_data):
    book = Book(**book_creation_data)
    test_session.add(book)
    await test_session.commit()
    await test_session.refresh(book)
    return book


@pytest.fixture(scope="function")
async def other_book(test_session):
    book = Book(title="Dune", author="Frank Herbert", isbn="9780441013593")
    test_session.add(book)
    await test_session.commit()
    await test_session.refresh(book)
    return book


@pytest.fixture(scope="function")
async def mock_bookinstance(test_session, mock_book):
    bookinstance = BookInstance(
        book_id=mock_book.id,
        imprint="Penguin Classics, 2005",
        status=BookInstanceStatus.LOANED,
        due_back=date(2026, 11, 1),
    )
    test_session.add(bookinstance)
    await test_session.commit()
    await test_session.refresh(bookinstance)
    return bookinstance
