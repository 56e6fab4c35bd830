import logging
import math
import re
from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ForbiddenError, InvalidInputError, NotFoundError
from ..users.models import User, UserRole
from .models import Article, ArticleCategory, ArticleTag
from .schemas import ArticleCreate, ArticleUpdate

logger = logging.getLogger(__name__)

TOP_ARTICLES_LIMIT = 6
EXCERPT_LENGTH = 250
EXCERPT_SUFFIX = "..."

_TAG_RE = re.compile(r"<[^>]*>")


def make_excerpt(content: str) -> str:
    """Plain-text preview: markup tags removed, cut to 250 characters, ellipsis appended."""
    return _TAG_RE.sub("", content)[:EXCERPT_LENGTH] + EXCERPT_SUFFIX


def can_modify(user: User, article: Article) -> bool:
    """Owners and admins may change or remove an article; nobody else may."""
    return article.author_id == user.id or user.role == UserRole.ADMIN


def _published_filters(
    *,
    category: Optional[str] = None,
    author: Optional[str] = None,
    search: Optional[str] = None,
) -> Optional[list]:
    """Build the WHERE clauses for the public listing.

    Returns None when the filters can never match anything (a category outside
    the fixed enumeration), so callers can skip the query entirely.
    """
    conditions = [Article.is_published.is_(True)]
    if category:
        if category not in ArticleCategory.values():
            return None
        conditions.append(Article.category == ArticleCategory(category))
    if author:
        conditions.append(Article.author_id == author)
    if search:
        conditions.append(
            or_(
                Article.title.icontains(search, autoescape=True),
                Article.content.icontains(search, autoescape=True),
                Article.tag_rows.any(ArticleTag.name.icontains(search, autoescape=True)),
            )
        )
    return conditions


async def get_article(db: AsyncSession, article_id: str) -> Optional[Article]:
    stmt = (
        select(Article)
        .where(Article.id == article_id)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_article_or_404(db: AsyncSession, article_id: str) -> Article:
    article = await get_article(db, article_id)
    if article is None:
        raise NotFoundError("News not found.")
    return article


async def list_published(
    db: AsyncSession,
    *,
    page: int = 1,
    limit: int = 10,
    category: Optional[str] = None,
    author: Optional[str] = None,
    search: Optional[str] = None,
) -> Tuple[List[Article], int, int]:
    """Return ``(articles, total, pages)`` for one page of published news, newest first."""
    conditions = _published_filters(category=category, author=author, search=search)
    if conditions is None:
        return [], 0, 0

    total = (
        await db.execute(select(func.count()).select_from(Article).where(*conditions))
    ).scalar_one()

    stmt = (
        select(Article)
        .where(*conditions)
        .order_by(Article.created_at.desc(), Article.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    result = await db.execute(stmt)
    articles = list(result.scalars().all())
    return articles, total, math.ceil(total / limit)


async def list_top(db: AsyncSession) -> List[Article]:
    stmt = (
        select(Article)
        .where(Article.is_published.is_(True))
        .order_by(Article.created_at.desc(), Article.id.desc())
        .limit(TOP_ARTICLES_LIMIT)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def view_article(db: AsyncSession, article_id: str) -> Article:
    """Fetch one article and count the view.

    Every successful fetch adds exactly one view; the increment is a single
    ``UPDATE ... SET views = views + 1`` so concurrent readers do not lose counts.
    """
    result = await db.execute(
        update(Article)
        .where(Article.id == article_id)
        .values(views=Article.views + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise NotFoundError("News not found.")
    await db.commit()
    return await get_article_or_404(db, article_id)


async def create_article(db: AsyncSession, data: ArticleCreate, author: User) -> Article:
    article = Article(
        title=data.title,
        content=data.content,
        excerpt=data.excerpt or make_excerpt(data.content),
        category=data.category,
        image=data.image,
        tags=data.tags,
        author_id=author.id,
    )
    db.add(article)
    await db.commit()
    logger.info(f"User {author.id} created article {article.id} ({article.category.value})")
    return await get_article_or_404(db, article.id)


async def update_article(db: AsyncSession, article_id: str, data: ArticleUpdate, user: User) -> Article:
    """Replace the editable fields of an article with the payload.

    Fields missing from the payload are cleared, not kept. The required ones
    (title, content, category) cannot be cleared, so omitting any of them is
    rejected. An empty excerpt is derived again from the new content.
    """
    article = await get_article_or_404(db, article_id)
    if not can_modify(user, article):
        logger.warning(f"User {user.id} refused update of article {article.id} owned by {article.author_id}")
        raise ForbiddenError("Not authorized to update this news.")

    if not data.title or not data.content or data.category is None:
        raise InvalidInputError("Title, content, and category are required.")

    article.title = data.title
    article.content = data.content
    article.excerpt = data.excerpt or make_excerpt(data.content)
    article.category = data.category
    article.image = data.image
    article.tags = data.tags or []
    article.is_published = data.is_published

    await db.commit()
    logger.info(f"User {user.id} updated article {article.id}")
    return await get_article_or_404(db, article.id)


async def delete_article(db: AsyncSession, article_id: str, user: User) -> None:
    article = await get_article_or_404(db, article_id)
    if not can_modify(user, article):
        logger.warning(f"User {user.id} refused deletion of article {article.id} owned by {article.author_id}")
        raise ForbiddenError("Not authorized to delete this news.")

    await db.delete(article)
    await db.commit()
    logger.info(f"User {user.id} deleted article {article_id}")
