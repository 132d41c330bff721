"""JSON payload validation on top of WTForms."""

from __future__ import annotations

from typing import Any, Mapping

from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import Field, PasswordField

from ledger.errors import ValidationError

ISO_DATETIME_FORMATS = [
    '%Y-%m-%dT%H:%M:%S.%fZ',
    '%Y-%m-%dT%H:%M:%SZ',
    '%Y-%m-%dT%H:%M:%S.%f',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d',
]


class JsonForm(FlaskForm):
    """Base form for API payloads; CSRF is enforced globally by CSRFProtect."""

    class Meta:
        csrf = False


class StringListField(Field):
    """A list of short strings (tags, category ids)."""

    def process_formdata(self, valuelist):
        self.data = [value.strip() for value in valuelist if value and value.strip()]

    def _value(self):
        return ','.join(self.data or [])


def _to_formdata(payload: Mapping[str, Any]) -> MultiDict:
    items: list[tuple[str, str]] = []
    for key, value in payload.items():
        if value is None:
            items.append((key, ''))
        elif isinstance(value, bool):
            items.append((key, 'true' if value else 'false'))
        elif isinstance(value, (list, tuple)):
            items.extend((key, str(item)) for item in value if item is not None)
        elif isinstance(value, dict):
            raise ValidationError({key: ['Nested objects are not supported']})
        else:
            items.append((key, str(value)))
    return MultiDict(items)


def _clean(field: Field, value: Any) -> Any:
    if isinstance(field, PasswordField):
        return value or None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(field, StringListField) and value is None:
        return []
    return value


def validate_payload(form_class: type[JsonForm], payload: Any, *, partial: bool = False) -> dict[str, Any]:
    """Validate a decoded JSON body against ``form_class``.

    Args:
        form_class: JsonForm subclass describing the accepted fields
        payload: Decoded request body
        partial: Only validate keys present in the payload (PATCH semantics)

    Returns:
        Dict of cleaned values for the form fields present in the payload

    Raises:
        ValidationError: With field-level messages when validation fails
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ValidationError(message='Request body must be a JSON object')

    form = form_class(formdata=_to_formdata(payload))
    form.validate()

    errors = {name: list(messages) for name, messages in form.errors.items()}
    if partial:
        errors = {name: messages for name, messages in errors.items() if name in payload}
    if errors:
        raise ValidationError(errors)

    cleaned: dict[str, Any] = {}
    for name, field in form._fields.items():
        if name in payload:
            cleaned[name] = _clean(field, field.data)
    return cleaned


__all__ = ['ISO_DATETIME_FORMATS', 'JsonForm', 'StringListField', 'validate_payload']
