"""Object storage uploads through pre-signed URLs.

Bytes never pass through the API. A client asks for an upload URL, PUTs the
file straight to the bucket, then hands the resulting URL back to a finalize
endpoint which records the access policy and returns the canonical
``/objects/...`` path to store on the owning entity.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import timedelta
from urllib.parse import urlparse

import requests
from flask import current_app

from ledger.errors import (
    AuthenticationError,
    AuthorizationError,
    DependencyError,
    NotFoundError,
    ValidationError,
)
from ledger.extensions import db
from ledger.models import ObjectVisibility, StoredObject, User, utcnow
from ledger.security.policy import user_can
from ledger.services.crud import transaction

MB = 1024 * 1024
OBJECTS_PREFIX = '/objects/'

IMAGE_TYPES = frozenset({'image/jpeg', 'image/png', 'image/gif', 'image/webp'})
IMAGE_EXTENSIONS = frozenset({'jpg', 'jpeg', 'png', 'gif', 'webp'})
AUDIO_TYPES = frozenset({
    'audio/mpeg', 'audio/mp3', 'audio/mp4', 'audio/x-m4a', 'audio/wav', 'audio/x-wav', 'audio/ogg', 'audio/aac',
})
AUDIO_EXTENSIONS = frozenset({'mp3', 'm4a', 'mp4', 'wav', 'ogg', 'aac'})
DOCUMENT_TYPES = frozenset({
    'application/pdf',
    'application/zip',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/vnd.ms-excel',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'application/vnd.ms-powerpoint',
    'application/vnd.openxmlformats-officedocument.presentationml.presentation',
})
DOCUMENT_EXTENSIONS = frozenset({'pdf', 'zip', 'doc', 'docx', 'xls', 'xlsx', 'ppt', 'pptx'})


@dataclass(frozen=True)
class UploadPolicy:
    action: str
    content_types: frozenset
    extensions: frozenset
    max_bytes: int


UPLOAD_POLICIES: dict[str, UploadPolicy] = {
    'article-image': UploadPolicy('article.create', IMAGE_TYPES, IMAGE_EXTENSIONS, 5 * MB),
    'podcast-cover': UploadPolicy('podcast.create', IMAGE_TYPES, IMAGE_EXTENSIONS, 5 * MB),
    'podcast-audio': UploadPolicy('podcast.create', AUDIO_TYPES, AUDIO_EXTENSIONS, 100 * MB),
    'toolbox-image': UploadPolicy('toolbox.manage', IMAGE_TYPES, IMAGE_EXTENSIONS, 5 * MB),
    'resource-file': UploadPolicy('resource.create', DOCUMENT_TYPES, DOCUMENT_EXTENSIONS, 25 * MB),
    'avatar': UploadPolicy('upload.create', IMAGE_TYPES, IMAGE_EXTENSIONS, 5 * MB),
}


def check_upload(purpose: str, filename: str, content_type: str, size: int) -> UploadPolicy:
    """Validate a proposed upload against its purpose's limits."""
    policy = UPLOAD_POLICIES.get(purpose)
    if policy is None:
        raise ValidationError({'purpose': [f"Unknown upload purpose: {purpose}"]})

    errors: dict[str, list[str]] = {}
    if content_type.lower() not in policy.content_types:
        errors['content_type'] = [f"{content_type} is not allowed for {purpose}"]
    extension = filename.rsplit('.', 1)[1].lower() if '.' in filename else ''
    if extension not in policy.extensions:
        errors['filename'] = [f"Files of this type are not allowed for {purpose}"]
    if size > policy.max_bytes:
        errors['size'] = [f"File exceeds the {policy.max_bytes // MB} MB limit for {purpose}"]
    if errors:
        raise ValidationError(errors)
    return policy


def _private_dir() -> str:
    private_dir = current_app.config.get('PRIVATE_OBJECT_DIR', '').rstrip('/')
    if not private_dir:
        raise DependencyError("Object storage is not configured")
    return private_dir


def _split_bucket_path(full_path: str) -> tuple[str, str]:
    """'/bucket/a/b' -> ('bucket', 'a/b')"""
    parts = full_path.lstrip('/').split('/', 1)
    if len(parts) < 2 or not parts[1]:
        raise ValidationError(message="Invalid object path")
    return parts[0], parts[1]


def sign_object_url(
    full_path: str,
    method: str,
    ttl_seconds: int,
    content_type: str | None = None,
    max_bytes: int | None = None,
) -> str:
    """
    Ask the signing sidecar for a time-limited URL.

    Args:
        full_path: '/<bucket>/<object name>'
        method: HTTP method the URL authorizes (PUT, GET or HEAD)
        ttl_seconds: Lifetime of the signed URL
        content_type: Content-Type a signed PUT must carry
        max_bytes: Upper bound of the content-length range a signed PUT accepts

    Returns:
        The signed URL

    Raises:
        DependencyError: The signer is unreachable or returned an error
    """
    bucket_name, object_name = _split_bucket_path(full_path)
    payload = {
        'bucket_name': bucket_name,
        'object_name': object_name,
        'method': method,
        'expires_at': (utcnow() + timedelta(seconds=ttl_seconds)).isoformat(),
    }
    if content_type:
        payload['content_type'] = content_type
    if max_bytes is not None:
        payload['content_length_range'] = [0, max_bytes]
    signer_url = current_app.config['OBJECT_STORAGE_SIGNER_URL'].rstrip('/')

    try:
        response = requests.post(
            f"{signer_url}/object-storage/signed-object-url",
            json=payload,
            timeout=current_app.config.get('OBJECT_STORAGE_TIMEOUT_SECONDS', 10),
        )
    except requests.RequestException as e:
        current_app.logger.error(f"Object storage signer unreachable: {e}")
        raise DependencyError("Object storage is unavailable") from e

    if not 200 <= response.status_code < 300:
        current_app.logger.error(
            f"Object storage signer returned HTTP {response.status_code}: {response.text[:200]}"
        )
        raise DependencyError("Object storage is unavailable")

    try:
        signed_url = response.json().get('signed_url')
    except ValueError:
        signed_url = None
    if not signed_url:
        current_app.logger.error("Object storage signer response did not include a signed_url")
        raise DependencyError("Object storage is unavailable")
    return signed_url


def stat_object(full_path: str) -> tuple[int, str] | None:
    """Return (size in bytes, content type) of a stored object, or None if it is missing."""
    signed_url = sign_object_url(full_path, 'HEAD', 60)
    try:
        response = requests.head(
            signed_url,
            timeout=current_app.config.get('OBJECT_STORAGE_TIMEOUT_SECONDS', 10),
        )
    except requests.RequestException as e:
        current_app.logger.error(f"Object storage metadata lookup failed: {e}")
        raise DependencyError("Object storage is unavailable") from e

    if response.status_code == 404:
        return None
    if not 200 <= response.status_code < 300:
        current_app.logger.error(f"Object storage HEAD returned HTTP {response.status_code} for {full_path}")
        raise DependencyError("Object storage is unavailable")

    try:
        size = int(response.headers.get('Content-Length', ''))
    except ValueError:
        raise DependencyError("Object storage did not report the object size")
    content_type = response.headers.get('Content-Type', '').split(';', 1)[0].strip().lower()
    return size, content_type


def normalize_object_path(raw_url: str) -> str:
    """
    Map a bucket URL to the canonical '/objects/<id>' path.

    URLs that are not on the object-store host, or not inside the private
    directory, are returned unchanged.
    """
    public_host = current_app.config.get('OBJECT_STORAGE_PUBLIC_HOST', '').rstrip('/')
    if not public_host or not raw_url.startswith(public_host):
        return raw_url

    path = urlparse(raw_url).path
    private_dir = _private_dir()
    if not path.startswith(f"{private_dir}/"):
        return path
    return f"{OBJECTS_PREFIX}{path[len(private_dir) + 1:]}"


def request_upload(user: User, purpose: str, filename: str, content_type: str, size: int) -> dict:
    """
    Authorize a direct upload.

    Limits are checked before the signer is contacted. The object is recorded
    as private until it is finalized.

    Returns:
        {'upload_url', 'method', 'object_path', 'expires_at'}
    """
    policy = check_upload(purpose, filename, content_type, size)
    if not user_can(user, policy.action):
        raise AuthorizationError()

    object_id = str(uuid.uuid4())
    ttl = int(current_app.config.get('UPLOAD_URL_TTL_SECONDS', 900))
    upload_url = sign_object_url(
        f"{_private_dir()}/uploads/{object_id}",
        'PUT',
        ttl,
        content_type=content_type.lower(),
        max_bytes=policy.max_bytes,
    )
    object_path = f"{OBJECTS_PREFIX}uploads/{object_id}"

    with transaction("record pending upload"):
        db.session.add(StoredObject(
            object_path=object_path,
            purpose=purpose,
            owner_id=user.id,
            content_type=content_type.lower(),
            declared_size=size,
            original_name=filename,
            visibility=ObjectVisibility.PRIVATE,
        ))

    current_app.logger.info(f"Issued {purpose} upload URL for {object_path} to user {user.id}")
    return {
        'upload_url': upload_url,
        'method': 'PUT',
        'object_path': object_path,
        'expires_at': (utcnow() + timedelta(seconds=ttl)).isoformat(),
    }


def finalize_upload(user: User, raw_url: str, purposes: tuple[str, ...]) -> str:
    """
    Apply the access policy to an uploaded object and return its canonical path.

    Args:
        user: Caller, who must own the pending upload
        raw_url: URL the client uploaded to
        purposes: Upload purposes accepted by the calling endpoint

    Returns:
        Canonical object path, or the URL unchanged when it is not ours
    """
    object_path = normalize_object_path(raw_url)
    if not object_path.startswith(OBJECTS_PREFIX):
        return object_path

    stored = db.session.query(StoredObject).filter_by(object_path=object_path).first()
    if stored is None:
        raise NotFoundError("Upload not found")
    if stored.owner_id != user.id:
        raise AuthorizationError("This upload belongs to another user")
    if stored.purpose not in purposes:
        raise ValidationError({'url': [f"Upload was requested for {stored.purpose}"]})

    # Limits apply to the bytes actually stored, not the declared ones
    stat = stat_object(f"{_private_dir()}/{object_path[len(OBJECTS_PREFIX):]}")
    if stat is None:
        raise NotFoundError("Uploaded file was not found in storage")
    size, content_type = stat
    policy = UPLOAD_POLICIES[stored.purpose]
    errors: dict[str, list[str]] = {}
    if size > policy.max_bytes:
        errors['size'] = [f"File exceeds the {policy.max_bytes // MB} MB limit for {stored.purpose}"]
    if content_type != stored.content_type:
        errors['content_type'] = [f"Uploaded file is {content_type or 'untyped'}, expected {stored.content_type}"]
    if errors:
        current_app.logger.warning(f"Rejected upload {object_path} from user {user.id}: {errors}")
        raise ValidationError(errors)

    with transaction("finalize upload"):
        stored.visibility = ObjectVisibility.PUBLIC
        stored.finalized_at = stored.finalized_at or utcnow()
    return object_path


def download_url(object_path: str, user: User | None) -> str:
    """Return a short-lived signed GET URL after checking the stored policy."""
    canonical = f"{OBJECTS_PREFIX}{object_path.lstrip('/')}"
    stored = db.session.query(StoredObject).filter_by(object_path=canonical).first()
    if stored is None:
        raise NotFoundError("Object not found")

    if stored.visibility != ObjectVisibility.PUBLIC:
        if user is None:
            raise AuthenticationError()
        if stored.owner_id != user.id and not user_can(user, 'content.moderate'):
            raise AuthorizationError()

    ttl = int(current_app.config.get('DOWNLOAD_URL_TTL_SECONDS', 3600))
    entity = canonical[len(OBJECTS_PREFIX):]
    return sign_object_url(f"{_private_dir()}/{entity}", 'GET', ttl)


__all__ = [
    'MB',
    'UPLOAD_POLICIES',
    'UploadPolicy',
    'check_upload',
    'sign_object_url',
    'stat_object',
    'normalize_object_path',
    'request_upload',
    'finalize_upload',
    'download_url',
]
