# backend/newsportal/articles/router.py
from typing import Optional

from fastapi import APIRouter, Query, status

from ..auth.dependencies import CurrentUser
from ..database import SessionDep
from ..models import MessageResponse
from ..users.models import User as UserModel
from . import service
from .schemas import (
    ArticleCreate,
    ArticleDetailResponse,
    ArticleListResponse,
    ArticleResponse,
    ArticleUpdate,
    TopArticlesResponse,
)

router = APIRouter(prefix="/news", tags=["news"])


@router.get("", response_model=ArticleListResponse)
async def list_news(
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    category: Optional[str] = None,
    author: Optional[str] = None,
    search: Optional[str] = None,
):
    """Published news, newest first, with optional category/author/search filters."""
    articles, total, pages = await service.list_published(
        db,
        page=page,
        limit=limit,
        category=category,
        author=author,
        search=search,
    )
    return {"success": True, "total": total, "page": page, "pages": pages, "news": articles}


@router.get("/top", response_model=TopArticlesResponse)
async def top_news(db: SessionDep):
    return {"success": True, "news": await service.list_top(db)}


@router.get("/{news_id}", response_model=ArticleDetailResponse)
async def get_news(news_id: str, db: SessionDep):
    """Single article. Each call counts as one view."""
    article = await service.view_article(db, news_id)
    return {"success": True, "news": article}


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_news(
    body: ArticleCreate,
    db: SessionDep,
    current_user: UserModel = CurrentUser,
):
    article = await service.create_article(db, body, author=current_user)
    return {"success": True, "message": "News created successfully!", "news": article}


@router.put("/{news_id}", response_model=ArticleResponse)
async def update_news(
    news_id: str,
    body: ArticleUpdate,
    db: SessionDep,
    current_user: UserModel = CurrentUser,
):
    article = await service.update_article(db, news_id, body, user=current_user)
    return {"success": True, "message": "News updated successfully!", "news": article}


@router.delete("/{news_id}", response_model=MessageResponse)
async def delete_news(
    news_id: str,
    db: SessionDep,
    current_user: UserModel = CurrentUser,
):
    await service.delete_article(db, news_id, user=current_user)
    return {"success": True, "message": "News deleted successfully!"}
