"""News articles, comments and news categories."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from ledger.blueprints.common.params import arg_bool, device_token, json_body, page_args
from ledger.blueprints.common.serializers import (
    page,
    serialize_article,
    serialize_comment,
    serialize_news_category,
)
from ledger.blueprints.objects import finalize_from_request
from ledger.extensions import limiter
from ledger.forms import validate_payload
from ledger.forms.content import (
    ArchiveForm,
    ArticleForm,
    CommentForm,
    NewsCategoryForm,
    PublishStatusForm,
)
from ledger.models import LikeTarget
from ledger.security import current_actor, login_required, permission_required
from ledger.services import likes
from ledger.services.news import article_service, news_category_service

news_bp = Blueprint('news', __name__, url_prefix='/api')


# ============= News Categories =============

@news_bp.route('/news-categories', methods=['GET'])
def list_news_categories():
    categories = news_category_service.list(active_only=arg_bool('active_only', False))
    return jsonify([serialize_news_category(c) for c in categories])


@news_bp.route('/admin/news-categories', methods=['POST'])
@permission_required('news_category.manage')
def create_news_category():
    data = validate_payload(NewsCategoryForm, json_body())
    category = news_category_service.create(data, current_actor())
    return jsonify(serialize_news_category(category)), 201


@news_bp.route('/admin/news-categories/<category_id>', methods=['PUT', 'PATCH'])
@permission_required('news_category.manage')
def update_news_category(category_id):
    data = validate_payload(NewsCategoryForm, json_body(), partial=request.method == 'PATCH')
    category = news_category_service.update(category_id, data, current_actor())
    return jsonify(serialize_news_category(category))


@news_bp.route('/admin/news-categories/<category_id>', methods=['DELETE'])
@permission_required('news_category.manage')
def delete_news_category(category_id):
    news_category_service.delete(category_id, current_actor())
    return jsonify({'success': True})


# ============= Articles =============

@news_bp.route('/news', methods=['GET'])
def list_articles():
    limit, offset = page_args()
    articles, total = article_service.list(
        current_actor(),
        category=request.args.get('category'),
        status=request.args.get('status'),
        featured=arg_bool('featured'),
        archived=request.args.get('archived', 'exclude'),
        search=request.args.get('search'),
        limit=limit,
        offset=offset,
    )
    return jsonify(page(articles, total, limit, offset, serialize_article))


@news_bp.route('/news', methods=['POST'])
@permission_required('article.create')
def create_article():
    data = validate_payload(ArticleForm, json_body())
    article = article_service.create(data, current_actor())
    return jsonify(serialize_article(article)), 201


@news_bp.route('/news/<article_id>', methods=['GET'])
def get_article(article_id):
    return jsonify(serialize_article(article_service.get_visible(article_id, current_actor())))


@news_bp.route('/news/<article_id>', methods=['PUT', 'PATCH'])
@permission_required('article.update')
def update_article(article_id):
    data = validate_payload(ArticleForm, json_body(), partial=request.method == 'PATCH')
    article = article_service.update(article_id, data, current_actor())
    return jsonify(serialize_article(article))


@news_bp.route('/news/<article_id>', methods=['DELETE'])
@permission_required('article.delete')
def delete_article(article_id):
    article_service.delete(article_id, current_actor())
    return jsonify({'success': True})


@news_bp.route('/news/<article_id>/archive', methods=['PATCH'])
@permission_required('article.archive')
def archive_article(article_id):
    data = validate_payload(ArchiveForm, json_body())
    article = article_service.set_archived(article_id, data['is_archived'], current_actor())
    return jsonify(serialize_article(article))


@news_bp.route('/news/<article_id>/status', methods=['PATCH'])
@permission_required('article.publish')
def article_status(article_id):
    data = validate_payload(PublishStatusForm, json_body())
    article = article_service.set_status(article_id, data['status'], current_actor())
    return jsonify(serialize_article(article))


@news_bp.route('/news/<article_id>/like', methods=['POST'])
@limiter.limit("60 per minute")
def like_article(article_id):
    result = likes.like(LikeTarget.ARTICLE, article_id, current_actor(), device_token())
    return jsonify(result.to_dict())


@news_bp.route('/news/<article_id>/like', methods=['DELETE'])
@limiter.limit("60 per minute")
def unlike_article(article_id):
    result = likes.unlike(LikeTarget.ARTICLE, article_id, current_actor(), device_token())
    return jsonify(result.to_dict())


@news_bp.route('/articles/images', methods=['PUT'])
@permission_required('article.create')
def finalize_article_image():
    object_path = finalize_from_request(('article-image',), 'image_url', 'imageURL')
    return jsonify({'object_path': object_path})


# ============= Comments =============

@news_bp.route('/news/<article_id>/comments', methods=['GET'])
def list_comments(article_id):
    comments = article_service.list_comments(article_id, current_actor())
    return jsonify([serialize_comment(c) for c in comments])


@news_bp.route('/news/<article_id>/comments', methods=['POST'])
@permission_required('comment.create')
def add_comment(article_id):
    data = validate_payload(CommentForm, json_body())
    comment = article_service.add_comment(article_id, current_actor(), data['content'])
    return jsonify(serialize_comment(comment)), 201


@news_bp.route('/news/<article_id>/comments/<comment_id>', methods=['DELETE'])
@login_required
def delete_comment(article_id, comment_id):
    article_service.delete_comment(article_id, comment_id, current_actor())
    return jsonify({'success': True})
