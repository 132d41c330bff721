"""WTForms definitions used to validate JSON request bodies."""

from ledger.forms.base import JsonForm, StringListField, validate_payload

__all__ = ['JsonForm', 'StringListField', 'validate_payload']
