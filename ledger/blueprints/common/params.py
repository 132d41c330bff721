"""Query string and request body helpers shared by the API blueprints."""

from __future__ import annotations

from flask import current_app, request

from ledger.errors import ValidationError

TRUE_VALUES = ('1', 'true', 'yes', 'on')
FALSE_VALUES = ('0', 'false', 'no', 'off')


def arg_int(name: str, default: int | None = None, minimum: int | None = None) -> int | None:
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError({name: ['Must be an integer']})
    if minimum is not None and value < minimum:
        raise ValidationError({name: [f"Must be at least {minimum}"]})
    return value


def arg_bool(name: str, default: bool | None = None) -> bool | None:
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    raw = raw.strip().lower()
    if raw in TRUE_VALUES:
        return True
    if raw in FALSE_VALUES:
        return False
    raise ValidationError({name: ['Must be true or false']})


def page_args() -> tuple[int, int]:
    """``(limit, offset)`` from the query string, clamped to the configured page size."""
    default = current_app.config.get('DEFAULT_PAGE_SIZE', 20)
    maximum = current_app.config.get('MAX_PAGE_SIZE', 100)
    limit = min(arg_int('limit', default, minimum=1), maximum)
    offset = arg_int('offset', 0, minimum=0)
    return limit, offset


def json_body() -> dict:
    """Decoded JSON object body; an empty body is an empty dict."""
    payload = request.get_json(silent=True)
    if payload is None:
        if request.get_data(cache=True):
            raise ValidationError(message='Request body must be valid JSON')
        return {}
    if not isinstance(payload, dict):
        raise ValidationError(message='Request body must be a JSON object')
    return payload


def device_token() -> str | None:
    token = request.headers.get('X-Device-Token', '').strip()
    return token[:256] or None


__all__ = ['arg_int', 'arg_bool', 'page_args', 'json_body', 'device_token']
