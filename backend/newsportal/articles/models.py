# backend/newsportal/articles/models.py
from enum import Enum as PyEnum
import uuid
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey, Boolean,
    Enum as SQLEnum, Index
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
from ..database import Base
from ..users.models import utcnow


class ArticleCategory(str, PyEnum):
    POLITICS = "Politics"
    TECHNOLOGY = "Technology"
    SPORTS = "Sports"
    ENTERTAINMENT = "Entertainment"
    BUSINESS = "Business"
    HEALTH = "Health"
    SCIENCE = "Science"
    WORLD = "World"
    LIFESTYLE = "Lifestyle"
    EDUCATION = "Education"

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]


class Article(Base):
    __tablename__ = "articles"
    __table_args__ = (
        Index("ix_articles_published_created", "is_published", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(String(300), nullable=True)
    category = Column(
        SQLEnum(ArticleCategory, name="article_category", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    image = Column(String(500), nullable=True)
    # Set once at creation; never reassigned.
    author_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    views = Column(Integer, default=0, nullable=False)
    # Nullable: an update that omits isPublished clears it, which unlists the article.
    is_published = Column(Boolean, default=True, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    author = relationship("User", lazy="selectin")
    tag_rows = relationship(
        "ArticleTag",
        order_by="ArticleTag.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def tags(self) -> list[str]:
        return [row.name for row in self.tag_rows]

    @tags.setter
    def tags(self, names) -> None:
        self.tag_rows = [ArticleTag(name=name) for name in (names or [])]

    def __repr__(self) -> str:
        return f"Article(id={self.id!r}, title={self.title!r}, category={self.category!r}, author_id={self.author_id!r})"
    def __str__(self) -> str:
        return self.title


class ArticleTag(Base):
    """One tag of an article; ``position`` keeps the client's ordering and allows duplicates."""
    __tablename__ = "article_tags"
    __table_args__ = (
        Index("ix_article_tags_article_position", "article_id", "position"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(String(36), ForeignKey("articles.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    name = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"ArticleTag(article_id={self.article_id!r}, position={self.position}, name={self.name!r})"
