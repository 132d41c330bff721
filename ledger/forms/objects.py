from __future__ import annotations

from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange

from ledger.forms.base import JsonForm


class UploadRequestForm(JsonForm):
    purpose = StringField("Purpose", validators=[DataRequired(), Length(max=32)])
    filename = StringField("File Name", validators=[DataRequired(), Length(max=500)])
    content_type = StringField("Content Type", validators=[DataRequired(), Length(max=200)])
    size = IntegerField("Size", validators=[InputRequired(), NumberRange(min=1)])


class FinalizeUploadForm(JsonForm):
    url = StringField("Uploaded URL", validators=[DataRequired(), Length(max=2048)])


__all__ = ['UploadRequestForm', 'FinalizeUploadForm']
