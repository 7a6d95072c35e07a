"""
Reviews blueprint — feed, compose/submit, and detail routes.
"""

from flask import Blueprint

reviews_bp = Blueprint(
    'reviews',
    __name__,
    template_folder='../templates',
)

from reviewsite.reviews import routes  # noqa: E402, F401
