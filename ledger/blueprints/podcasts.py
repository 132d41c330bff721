"""Podcast episode directory."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from ledger.blueprints.common.params import arg_bool, device_token, json_body, page_args
from ledger.blueprints.common.serializers import page, serialize_podcast
from ledger.blueprints.objects import finalize_from_request
from ledger.errors import NotFoundError
from ledger.extensions import limiter
from ledger.forms import validate_payload
from ledger.forms.content import ArchiveForm, PodcastForm, PublishStatusForm
from ledger.models import LikeTarget
from ledger.security import current_actor, permission_required
from ledger.services import likes
from ledger.services.podcasts import podcast_service

podcasts_bp = Blueprint('podcasts', __name__, url_prefix='/api/podcasts')


@podcasts_bp.route('', methods=['GET'])
def list_podcasts():
    limit, offset = page_args()
    episodes, total = podcast_service.list(
        current_actor(),
        category=request.args.get('category'),
        status=request.args.get('status'),
        featured=arg_bool('featured'),
        archived=request.args.get('archived', 'exclude'),
        search=request.args.get('search'),
        limit=limit,
        offset=offset,
    )
    return jsonify(page(episodes, total, limit, offset, serialize_podcast))


@podcasts_bp.route('/featured', methods=['GET'])
def featured_podcast():
    episode = podcast_service.featured(current_actor())
    if episode is None:
        raise NotFoundError("No podcast episodes yet")
    return jsonify(serialize_podcast(episode))


@podcasts_bp.route('', methods=['POST'])
@permission_required('podcast.create')
def create_podcast():
    data = validate_payload(PodcastForm, json_body())
    episode = podcast_service.create(data, current_actor())
    return jsonify(serialize_podcast(episode)), 201


@podcasts_bp.route('/<episode_id>', methods=['GET'])
def get_podcast(episode_id):
    return jsonify(serialize_podcast(podcast_service.get_visible(episode_id, current_actor())))


@podcasts_bp.route('/<episode_id>', methods=['PUT', 'PATCH'])
@permission_required('podcast.update')
def update_podcast(episode_id):
    data = validate_payload(PodcastForm, json_body(), partial=request.method == 'PATCH')
    episode = podcast_service.update(episode_id, data, current_actor())
    return jsonify(serialize_podcast(episode))


@podcasts_bp.route('/<episode_id>', methods=['DELETE'])
@permission_required('podcast.delete')
def delete_podcast(episode_id):
    podcast_service.delete(episode_id, current_actor())
    return jsonify({'success': True})


@podcasts_bp.route('/<episode_id>/archive', methods=['PATCH'])
@permission_required('podcast.archive')
def archive_podcast(episode_id):
    data = validate_payload(ArchiveForm, json_body())
    episode = podcast_service.set_archived(episode_id, data['is_archived'], current_actor())
    return jsonify(serialize_podcast(episode))


@podcasts_bp.route('/<episode_id>/status', methods=['PATCH'])
@permission_required('podcast.publish')
def podcast_status(episode_id):
    data = validate_payload(PublishStatusForm, json_body())
    episode = podcast_service.set_status(episode_id, data['status'], current_actor())
    return jsonify(serialize_podcast(episode))


@podcasts_bp.route('/<episode_id>/play', methods=['POST'])
@limiter.limit("120 per minute")
def play_podcast(episode_id):
    episode = podcast_service.record_play(episode_id, current_actor())
    return jsonify({'play_count': episode.play_count})


@podcasts_bp.route('/<episode_id>/like', methods=['POST'])
@limiter.limit("60 per minute")
def like_podcast(episode_id):
    result = likes.like(LikeTarget.PODCAST, episode_id, current_actor(), device_token())
    return jsonify(result.to_dict())


@podcasts_bp.route('/<episode_id>/like', methods=['DELETE'])
@limiter.limit("60 per minute")
def unlike_podcast(episode_id):
    result = likes.unlike(LikeTarget.PODCAST, episode_id, current_actor(), device_token())
    return jsonify(result.to_dict())


@podcasts_bp.route('/audio', methods=['PUT'])
@permission_required('podcast.create')
def finalize_podcast_audio():
    object_path = finalize_from_request(('podcast-audio',), 'audio_url', 'audioURL')
    return jsonify({'object_path': object_path})


@podcasts_bp.route('/images', methods=['PUT'])
@permission_required('podcast.create')
def finalize_podcast_image():
    object_path = finalize_from_request(('podcast-cover',), 'image_url', 'imageURL')
    return jsonify({'object_path': object_path})
