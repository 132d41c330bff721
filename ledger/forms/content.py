"""Forms for editorial and community content."""

from __future__ import annotations

from wtforms import BooleanField, DateTimeField, IntegerField, StringField, TextAreaField
from wtforms.validators import AnyOf, DataRequired, InputRequired, Length, NumberRange, Optional, Regexp, URL

from ledger.forms.base import ISO_DATETIME_FORMATS, JsonForm, StringListField

STATUS_CHOICES = ['published', 'draft']
RESOURCE_TYPES = ['guide', 'video', 'template', 'tool', 'case-study']
DIFFICULTY_CHOICES = ['beginner', 'intermediate', 'advanced']
TOOLBOX_SECTIONS = ['controller', 'fpa']
TOOLBOX_STATUSES = ['developing', 'testing', 'beta_ready', 'ready_for_commercial_use']

HEX_COLOR = Regexp(r'^#[0-9A-Fa-f]{6}$', message='Use a hex colour such as #3B82F6')


class NewsCategoryForm(JsonForm):
    name = StringField("Name", validators=[DataRequired(), Length(max=120)])
    slug = StringField("Slug", validators=[Optional(), Length(max=120), Regexp(r'^[a-z0-9-]+$')])
    description = TextAreaField("Description", validators=[Optional(), Length(max=2000)])
    icon = StringField("Icon", validators=[Optional(), Length(max=64)])
    color = StringField("Color", validators=[Optional(), HEX_COLOR])
    display_order = IntegerField("Display Order", validators=[Optional()])
    is_active = BooleanField("Active")


class ArticleForm(JsonForm):
    title = StringField("Title", validators=[DataRequired(), Length(max=500)])
    content = TextAreaField("Content", validators=[DataRequired()])
    excerpt = TextAreaField("Excerpt", validators=[Optional(), Length(max=2000)])
    # A single category slug/name; ``category_ids`` replaces the whole set
    category = StringField("Category", validators=[Optional(), Length(max=120)])
    category_ids = StringListField("Categories")
    image_url = StringField("Image", validators=[Optional(), Length(max=1024)])
    thumbnail_url = StringField("Thumbnail", validators=[Optional(), Length(max=1024)])
    source_url = StringField("Source URL", validators=[Optional(), URL(), Length(max=1024)])
    source_name = StringField("Source", validators=[Optional(), Length(max=255)])
    published_at = DateTimeField("Published", format=ISO_DATETIME_FORMATS, validators=[Optional()])
    is_featured = BooleanField("Featured")
    is_archived = BooleanField("Archived")
    status = StringField("Status", validators=[Optional(), AnyOf(STATUS_CHOICES)])


class CommentForm(JsonForm):
    content = TextAreaField("Comment", validators=[DataRequired(), Length(max=5000)])


class ArchiveForm(JsonForm):
    is_archived = BooleanField("Archived", validators=[InputRequired()])


class PublishStatusForm(JsonForm):
    status = StringField("Status", validators=[DataRequired(), AnyOf(STATUS_CHOICES)])


class PodcastForm(JsonForm):
    episode_number = IntegerField("Episode", validators=[InputRequired(), NumberRange(min=1)])
    title = StringField("Title", validators=[DataRequired(), Length(max=500)])
    description = TextAreaField("Description", validators=[Optional()])
    audio_url = StringField("Audio", validators=[Optional(), Length(max=1024)])
    image_url = StringField("Cover", validators=[Optional(), Length(max=1024)])
    duration = StringField("Duration", validators=[Optional(), Length(max=32)])
    host_name = StringField("Host", validators=[Optional(), Length(max=255)])
    guest_name = StringField("Guest", validators=[Optional(), Length(max=255)])
    guest_title = StringField("Guest Title", validators=[Optional(), Length(max=255)])
    category_ids = StringListField("Categories")
    published_at = DateTimeField("Published", format=ISO_DATETIME_FORMATS, validators=[Optional()])
    is_featured = BooleanField("Featured")
    is_archived = BooleanField("Archived")
    status = StringField("Status", validators=[Optional(), AnyOf(STATUS_CHOICES)])


class ForumCategoryForm(JsonForm):
    name = StringField("Name", validators=[DataRequired(), Length(max=255)])
    description = TextAreaField("Description", validators=[Optional(), Length(max=2000)])
    icon = StringField("Icon", validators=[Optional(), Length(max=64)])
    color = StringField("Color", validators=[Optional(), HEX_COLOR])


class DiscussionForm(JsonForm):
    title = StringField("Title", validators=[DataRequired(), Length(max=500)])
    content = TextAreaField("Content", validators=[DataRequired()])
    category_id = StringField("Category", validators=[DataRequired(), Length(max=36)])


class ModerationForm(JsonForm):
    is_pinned = BooleanField("Pinned")
    is_locked = BooleanField("Locked")
    is_featured = BooleanField("Featured")
    status = StringField("Status", validators=[Optional(), AnyOf(STATUS_CHOICES)])


class ReplyForm(JsonForm):
    content = TextAreaField("Reply", validators=[DataRequired(), Length(max=10000)])
    discussion_id = StringField("Discussion", validators=[DataRequired(), Length(max=36)])
    parent_reply_id = StringField("Parent", validators=[Optional(), Length(max=36)])


class ReplyUpdateForm(JsonForm):
    content = TextAreaField("Reply", validators=[DataRequired(), Length(max=10000)])


class ResourceForm(JsonForm):
    title = StringField("Title", validators=[DataRequired(), Length(max=500)])
    description = TextAreaField("Description", validators=[Optional()])
    type = StringField("Type", validators=[DataRequired(), AnyOf(RESOURCE_TYPES)])
    category = StringField("Category", validators=[DataRequired(), Length(max=120)])
    url = StringField("URL", validators=[Optional(), URL(), Length(max=1024)])
    file_url = StringField("File", validators=[Optional(), Length(max=1024)])
    image_url = StringField("Image", validators=[Optional(), Length(max=1024)])
    duration = StringField("Duration", validators=[Optional(), Length(max=32)])
    difficulty = StringField("Difficulty", validators=[Optional(), AnyOf(DIFFICULTY_CHOICES)])
    is_free = BooleanField("Free")


class RatingForm(JsonForm):
    rating = IntegerField("Rating", validators=[InputRequired(), NumberRange(min=1, max=5)])


class ToolboxAppForm(JsonForm):
    name = StringField("Name", validators=[DataRequired(), Length(max=255)])
    description = TextAreaField("Description", validators=[DataRequired()])
    link = StringField("Link", validators=[Optional(), URL(), Length(max=1024)])
    image_url = StringField("Image", validators=[Optional(), Length(max=1024)])
    section = StringField("Section", validators=[Optional(), AnyOf(TOOLBOX_SECTIONS)])
    status = StringField("Status", validators=[Optional(), AnyOf(TOOLBOX_STATUSES)])
    display_order = IntegerField("Display Order", validators=[Optional()])
    is_active = BooleanField("Active")


class PollForm(JsonForm):
    question = TextAreaField("Question", validators=[DataRequired(), Length(max=500)])
    options = StringListField("Options")
    expires_at = DateTimeField("Expires", format=ISO_DATETIME_FORMATS, validators=[Optional()])
    is_active = BooleanField("Active")


class PollVoteForm(JsonForm):
    option_index = IntegerField("Option", validators=[InputRequired(), NumberRange(min=0)])


__all__ = [
    'STATUS_CHOICES',
    'RESOURCE_TYPES',
    'DIFFICULTY_CHOICES',
    'TOOLBOX_SECTIONS',
    'TOOLBOX_STATUSES',
    'NewsCategoryForm',
    'ArticleForm',
    'CommentForm',
    'ArchiveForm',
    'PublishStatusForm',
    'PodcastForm',
    'ForumCategoryForm',
    'DiscussionForm',
    'ModerationForm',
    'ReplyForm',
    'ReplyUpdateForm',
    'ResourceForm',
    'RatingForm',
    'ToolboxAppForm',
    'PollForm',
    'PollVoteForm',
]
