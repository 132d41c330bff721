"""Forms for accounts, invitations and newsletter subscriptions."""

from __future__ import annotations

from wtforms import BooleanField, EmailField, IntegerField, PasswordField, StringField, TextAreaField
from wtforms.validators import AnyOf, DataRequired, Email, InputRequired, Length, NumberRange, Optional

from ledger.forms.base import JsonForm, StringListField

ROLE_CHOICES = ['subscriber', 'contributor', 'editor', 'admin']
FREQUENCY_CHOICES = ['daily', 'weekly', 'bi-weekly', 'monthly']


class RegisterForm(JsonForm):
    email = EmailField("Email", validators=[DataRequired(), Email(), Length(max=255)])
    password = PasswordField("Password", validators=[DataRequired(), Length(min=8, max=128)])
    first_name = StringField("First Name", validators=[Optional(), Length(max=120)])
    last_name = StringField("Last Name", validators=[Optional(), Length(max=120)])


class LoginForm(JsonForm):
    email = EmailField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])


class ChangePasswordForm(JsonForm):
    current_password = PasswordField("Current Password", validators=[DataRequired()])
    new_password = PasswordField("New Password", validators=[DataRequired(), Length(min=8, max=128)])


class ProfileForm(JsonForm):
    """Fields a member may edit on their own profile."""

    first_name = StringField("First Name", validators=[Optional(), Length(max=120)])
    last_name = StringField("Last Name", validators=[Optional(), Length(max=120)])
    title = StringField("Title", validators=[Optional(), Length(max=255)])
    company = StringField("Company", validators=[Optional(), Length(max=255)])
    bio = TextAreaField("Bio", validators=[Optional(), Length(max=5000)])
    profile_image_url = StringField("Profile Image", validators=[Optional(), Length(max=1024)])
    expertise_tags = StringListField("Expertise")


class UserForm(ProfileForm):
    """Admin view of a user record."""

    email = EmailField("Email", validators=[DataRequired(), Email(), Length(max=255)])
    password = PasswordField("Password", validators=[Optional(), Length(min=8, max=128)])
    role = StringField("Role", validators=[Optional(), AnyOf(ROLE_CHOICES)])
    is_active = BooleanField("Active")
    points = IntegerField("Points", validators=[Optional(), NumberRange(min=0)])
    badges = StringListField("Badges")


class RoleForm(JsonForm):
    role = StringField("Role", validators=[DataRequired(), AnyOf(ROLE_CHOICES)])


class StatusForm(JsonForm):
    is_active = BooleanField("Active", validators=[InputRequired()])


class InvitationForm(JsonForm):
    email = EmailField("Email", validators=[DataRequired(), Email(), Length(max=255)])
    role = StringField("Role", validators=[DataRequired(), AnyOf(ROLE_CHOICES)])


class SubscribeForm(JsonForm):
    email = EmailField("Email", validators=[DataRequired(), Email(), Length(max=255)])
    categories = StringListField("Categories")
    frequency = StringField("Frequency", validators=[Optional(), AnyOf(FREQUENCY_CHOICES)])


class UnsubscribeForm(JsonForm):
    email = EmailField("Email", validators=[DataRequired(), Email()])


__all__ = [
    'ROLE_CHOICES',
    'FREQUENCY_CHOICES',
    'RegisterForm',
    'LoginForm',
    'ChangePasswordForm',
    'ProfileForm',
    'UserForm',
    'RoleForm',
    'StatusForm',
    'InvitationForm',
    'SubscribeForm',
    'UnsubscribeForm',
]
