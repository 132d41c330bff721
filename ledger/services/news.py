"""News categories, articles and comments."""

from __future__ import annotations

import re
from typing import Any

from sqlalchemy import or_

from ledger.errors import AuthorizationError, NotFoundError, ValidationError
from ledger.extensions import db
from ledger.models import LikeTarget, NewsArticle, NewsCategory, NewsComment, article_category, podcast_category
from ledger.services.crud import CRUDService, paginate, transaction
from ledger.services.likes import delete_likes_for
from ledger.services.publishing import PublishableService, resolve_categories

_SLUG_STRIP = re.compile(r'[^a-z0-9]+')


def slugify(value: str) -> str:
    return _SLUG_STRIP.sub('-', value.lower()).strip('-')


class NewsCategoryService(CRUDService):
    label = 'Category'

    def __init__(self):
        super().__init__(NewsCategory)

    def list(self, active_only: bool = False) -> list[NewsCategory]:
        query = self.query()
        if active_only:
            query = query.filter(NewsCategory.is_active.is_(True))
        return query.order_by(NewsCategory.display_order, NewsCategory.name).all()

    def _prepare(self, data: dict[str, Any], instance) -> dict[str, Any]:
        if instance is None and not data.get('slug') and data.get('name'):
            data['slug'] = slugify(data['name'])
        if 'slug' in data and not data['slug']:
            data.pop('slug')
        if instance is None and not data.get('slug'):
            raise ValidationError({'slug': ['Could not derive a slug from the name']})
        return data

    def _delete_dependents(self, instance: NewsCategory) -> None:
        db.session.execute(article_category.delete().where(article_category.c.category_id == instance.id))
        db.session.execute(podcast_category.delete().where(podcast_category.c.category_id == instance.id))


class ArticleService(PublishableService):
    label = 'Article'

    def __init__(self):
        super().__init__(NewsArticle)

    def list(
        self,
        user=None,
        category: str | None = None,
        status: str | None = None,
        featured: bool | None = None,
        archived: str = 'exclude',
        search: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[NewsArticle], int]:
        """
        List articles visible to ``user``, newest first.

        Args:
            user: Caller; editors and admins also see drafts
            category: Category slug filter
            status: Status filter (editors only)
            featured: Only featured (True) or non-featured (False) articles
            archived: 'exclude' (default), 'include' or 'only'
            search: Case-insensitive match on title and excerpt
            limit: Page size
            offset: Page offset

        Returns:
            (articles, total)
        """
        query = self.visible_query(user, archived=archived, status=status)
        if category:
            query = query.filter(NewsArticle.categories.any(NewsCategory.slug == category.lower()))
        if featured is not None:
            query = query.filter(NewsArticle.is_featured.is_(featured))
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(NewsArticle.title.ilike(pattern), NewsArticle.excerpt.ilike(pattern)))
        query = query.order_by(NewsArticle.published_at.desc(), NewsArticle.created_at.desc())
        return paginate(query, limit, offset)

    def create(self, data: dict[str, Any], user: Any = None, skip_log: bool = False) -> NewsArticle:
        if user is not None:
            data = {**data, 'author_id': user.id}
        return super().create(data, user, skip_log)

    def _prepare(self, data: dict[str, Any], instance) -> dict[str, Any]:
        data = super()._prepare(data, instance)
        categories = resolve_categories(data.pop('category_ids', None), data.pop('category', None))
        if categories is not None:
            if not categories:
                raise ValidationError({'category_ids': ['At least one category is required.']})
            data['categories'] = categories
        elif instance is None:
            raise ValidationError({'category': ['This field is required.']})
        return data

    def _delete_dependents(self, instance: NewsArticle) -> None:
        db.session.query(NewsComment).filter(NewsComment.article_id == instance.id).delete(synchronize_session=False)
        delete_likes_for(LikeTarget.ARTICLE, [instance.id])
        instance.categories = []

    # Comments

    def list_comments(self, article_id: str, user=None) -> list[NewsComment]:
        article = self.get_visible(article_id, user)
        return (
            db.session.query(NewsComment)
            .filter(NewsComment.article_id == article.id)
            .order_by(NewsComment.created_at.asc())
            .all()
        )

    def add_comment(self, article_id: str, user, content: str) -> NewsComment:
        article = self.get_visible(article_id, user)
        with transaction("add comment"):
            comment = NewsComment(article_id=article.id, author_id=user.id, content=content)
            db.session.add(comment)
        return comment

    def delete_comment(self, article_id: str, comment_id: str, user) -> None:
        """Only the comment's author may delete it."""
        comment = db.session.get(NewsComment, comment_id)
        if comment is None or comment.article_id != article_id:
            raise NotFoundError("Comment not found")
        if comment.author_id != user.id:
            raise AuthorizationError("Only the author can delete this comment")
        with transaction("delete comment"):
            db.session.delete(comment)


news_category_service = NewsCategoryService()
article_service = ArticleService()


__all__ = [
    'slugify',
    'NewsCategoryService',
    'ArticleService',
    'news_category_service',
    'article_service',
]
