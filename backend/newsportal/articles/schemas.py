# backend/newsportal/articles/schemas.py
from ..models import CustomModel
from .models import ArticleCategory
from pydantic import ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime


def _clean_tags(v):
    """Trim every tag and drop the ones left blank; order and duplicates are kept.

    Scalar entries such as ``2024`` are kept as their string form.
    """
    if v is None:
        return v
    if isinstance(v, str):
        v = v.split(",")
    if not isinstance(v, (list, tuple)):
        raise ValueError("tags must be a list of strings")
    cleaned = []
    for t in v:
        if t is None:
            continue
        if not isinstance(t, (str, int, float, bool)):
            raise ValueError("tags must be a list of strings")
        t = str(t).strip()
        if t:
            cleaned.append(t)
    return cleaned


class AuthorSummary(CustomModel):
    """Read-only author projection embedded in article listings."""
    id: str
    name: str
    avatar: Optional[str] = None
    email: str


class AuthorDetail(AuthorSummary):
    bio: Optional[str] = None


class ArticleCreate(CustomModel):
    # Unknown fields, notably "author", are ignored: the author is always the caller.
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    category: ArticleCategory
    excerpt: Optional[str] = Field(None, max_length=300)
    image: Optional[str] = Field(None, max_length=500)
    tags: List[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, v):
        return _clean_tags(v) or []


class ArticleUpdate(CustomModel):
    """Full replacement payload for an article.

    Every field is optional at the schema level; the service treats an omitted
    field as cleared rather than untouched.
    """
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = None
    excerpt: Optional[str] = Field(None, max_length=300)
    category: Optional[ArticleCategory] = None
    image: Optional[str] = Field(None, max_length=500)
    tags: Optional[List[str]] = None
    is_published: Optional[bool] = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, v):
        return _clean_tags(v)


class ArticleOut(CustomModel):
    id: str
    title: str
    content: str
    excerpt: Optional[str] = None
    category: ArticleCategory
    image: Optional[str] = None
    author: AuthorSummary
    tags: List[str] = Field(default_factory=list)
    views: int = 0
    is_published: Optional[bool] = None
    created_at: datetime
    updated_at: datetime


class ArticleDetailOut(ArticleOut):
    author: AuthorDetail


class ArticleListResponse(CustomModel):
    success: bool = True
    total: int
    page: int
    pages: int
    news: List[ArticleOut]


class TopArticlesResponse(CustomModel):
    success: bool = True
    news: List[ArticleOut]


class ArticleResponse(CustomModel):
    success: bool = True
    message: Optional[str] = None
    news: ArticleOut


class ArticleDetailResponse(CustomModel):
    success: bool = True
    news: ArticleDetailOut
