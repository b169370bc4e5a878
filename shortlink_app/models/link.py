from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from shortlink_app.database.connection import Base

SHORT_CODE_LENGTH = 7
MAX_URL_LENGTH = 2048


class Link(Base):
    """
    A short code mapped to a long URL.

    Both columns are unique: short_code so the store arbitrates collisions
    between concurrent allocators, long_url so one URL never gets two codes.
    Rows are written once and never updated or deleted.
    created_at is loaded during the flush, so a committed Link needs no
    follow-up query.
    """
    __tablename__ = "links"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    short_code = Column(String(SHORT_CODE_LENGTH), unique=True, nullable=False, index=True)
    long_url = Column(String(MAX_URL_LENGTH), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<Link {self.short_code} -> {self.long_url}>"
