from catalog.core.database import Base
from sqlalchemy import (Column, String, Integer, Date,
                        DateTime, func, ForeignKey, Enum)
from sqlalchemy.orm import relationship
from catalog.utils import generate_copy_id, format_date
import enum

class BookInstanceStatus(enum.StrEnum):
    AVAILABLE = 'Available'
    MAINTENANCE = 'Maintenance'
    LOANED = 'Loaned'
    RESERVED = 'Reserved'

DEFAULT_STATUS = BookInstanceStatus.MAINTENANCE

class Book(Base):
    __tablename__ = 'books'

    id = Column(Integer, primary_key=True)
    title = Column(String(100), nullable=False)
    author = Column(String(100), nullable=False)
    isbn = Column(String(50), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    instances = relationship('BookInstance', back_populates='book')

    @property
    def url(self):
        return f'/catalog/book/{self.id}'

class BookInstance(Base):
    __tablename__ = 'book_instances'

    id = Column(String(50), primary_key=True, default=generate_copy_id)
    book_id = Column(Integer, ForeignKey('books.id'), nullable=False, index=True)
    imprint = Column(String(200), nullable=False)
    status = Column(Enum(BookInstanceStatus), nullable=False, default=DEFAULT_STATUS)
    due_back = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    book = relationship('Book', back_populates='instances')

    @property
    def url(self):
        return f'/catalog/bookinstance/{self.id}'

    @property
    def due_back_formatted(self):
        return format_date(self.due_back)

    @property
    def due_back_yyyy_mm_dd(self):
        return self.due_back.isoformat() if self.due_back else ''
