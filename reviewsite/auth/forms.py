"""
WTForms definitions for signup and login.

Server-side validation is authoritative; HTML5 attributes in the
templates are a convenience only.

Input constraints:
- Username: required, 3-30 chars
- Email: required, valid format, max 254 chars (RFC 5321)
- Password: required, max 128 chars (bounds bcrypt input size)
"""

from flask_wtf import FlaskForm
from wtforms import EmailField, PasswordField, StringField
from wtforms.validators import DataRequired, Email, EqualTo, Length


def strip_whitespace(value):
    return value.strip() if isinstance(value, str) else value


def normalize_email(value):
    return value.strip().lower() if isinstance(value, str) else value


class SignupForm(FlaskForm):
    """Registration form. Field order decides which error is shown first."""

    username = StringField(
        'Username',
        filters=[strip_whitespace],
        validators=[
            DataRequired(message='Username is required.'),
            Length(min=3, max=30, message='Username must be between 3 and 30 characters.'),
        ],
        render_kw={'autocomplete': 'username', 'autofocus': True},
    )

    email = EmailField(
        'Email address',
        filters=[normalize_email],
        validators=[
            DataRequired(message='Email address is required.'),
            Email(message='Please enter a valid email address.'),
            Length(max=254, message='Email address is too long.'),
        ],
        render_kw={'autocomplete': 'email'},
    )

    password = PasswordField(
        'Password',
        validators=[
            DataRequired(message='Password is required.'),
            Length(max=128, message='Password is too long.'),
        ],
        render_kw={'autocomplete': 'new-password'},
    )

    confirm_password = PasswordField(
        'Confirm password',
        validators=[
            DataRequired(message='Please confirm your password.'),
            EqualTo('password', message='Passwords do not match.'),
        ],
        render_kw={'autocomplete': 'new-password'},
    )


class LoginForm(FlaskForm):
    """Login form with email and password validation."""

    email = EmailField(
        'Email address',
        filters=[normalize_email],
        validators=[
            DataRequired(message='Email address is required.'),
            Email(message='Please enter a valid email address.'),
            Length(max=254, message='Email address is too long.'),
        ],
        render_kw={
            'placeholder': 'e.g., jane.doe@example.com',
            'autofocus': True,
            'autocomplete': 'email',
        },
    )

    password = PasswordField(
        'Password',
        validators=[
            DataRequired(message='Password is required.'),
            Length(max=128, message='Password is too long.'),
        ],
        render_kw={
            'placeholder': 'Enter your password',
            'autocomplete': 'current-password',
        },
    )


def first_error(form) -> str:
    """Return the first validation message in field declaration order."""
    for field in form:
        if field.errors:
            return field.errors[0]
    return 'Please check the form and try again.'
