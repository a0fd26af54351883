# backend/app/db/models.py

import time

from sqlalchemy import BigInteger, Column, Integer, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def now_ms() -> int:
    return int(time.time() * 1000)


class Announcement(Base):
    __tablename__ = "announcement_table"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    wechat_url = Column(Text, nullable=False)
    # Epoch milliseconds, as the mini-program client expects
    created_at = Column(BigInteger, nullable=False, default=now_ms, index=True)
    updated_at = Column(BigInteger, nullable=False, default=now_ms, onupdate=now_ms)

    def __repr__(self):
        return f"<Announcement(id={self.id}, title='{self.title}')>"


class WordsCount(Base):
    __tablename__ = "words_count"

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_words_count = Column(Integer, nullable=False)
    server_words_count = Column(Integer)
    download_url = Column(Text)
    create_time = Column(Text)
    order_id = Column(Text)

    def __repr__(self):
        return f"<WordsCount(id={self.id}, order_id='{self.order_id}')>"
