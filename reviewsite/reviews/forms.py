"""
Review submission form.

The comment length cap is read from REVIEW_COMMENT_MAX_LENGTH at
validation time, so each app can configure its own limit.
"""

from flask import current_app
from flask_wtf import FlaskForm
from wtforms import IntegerField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, NumberRange, ValidationError

from reviewsite.auth.forms import strip_whitespace


class ReviewForm(FlaskForm):
    """A star rating from 1 to 5 plus a comment."""

    rating = IntegerField(
        'Rating',
        validators=[
            InputRequired(message='Rating is required.'),
            NumberRange(min=1, max=5, message='Rating must be between 1 and 5.'),
        ],
        render_kw={'min': 1, 'max': 5},
    )

    comment = TextAreaField(
        'Comment',
        filters=[strip_whitespace],
        validators=[
            DataRequired(message='Comment is required.'),
        ],
        render_kw={'rows': 5},
    )

    def validate_comment(self, field):
        limit = current_app.config.get('REVIEW_COMMENT_MAX_LENGTH', 2000)
        if field.data and len(field.data) > limit:
            raise ValidationError(f'Comment must be at most {limit} characters.')
