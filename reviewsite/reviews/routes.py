"""
Review routes — feed, compose/submit, detail.

Compose and submit need a logged-in session. Anonymous visitors are
redirected to the login page before the form is validated, so nothing
is ever persisted for them.
"""

from flask import current_app

from reviewsite.auth.forms import first_error
from reviewsite.context import RequestContext
from reviewsite.errors import StoreError
from reviewsite.extensions import limiter
from reviewsite.logging_config import audit_log, log_store_error
from reviewsite.results import Err, ErrorKind, Ok, render_result
from reviewsite.reviews import reviews_bp
from reviewsite.reviews.forms import ReviewForm
from reviewsite.reviews.models import create_review, get_review, list_reviews

FEED_LOAD_ERROR = 'Could not load reviews. Please try again later.'
DETAIL_LOAD_ERROR = 'Could not load this review. Please try again later.'
SAVE_ERROR = 'Something went wrong while saving your review. Please try again.'
NOT_FOUND = 'Review not found.'

# SQLite INTEGER range; larger ids cannot be bound as query parameters.
MAX_REVIEW_ID = 2**63 - 1


# --- Handlers ---

def handle_feed(ctx: RequestContext):
    try:
        reviews = list_reviews()
    except StoreError as exc:
        log_store_error(ctx, 'feed', exc)
        return Err(ErrorKind.STORE, FEED_LOAD_ERROR, 'index.html', {'reviews': []})
    return Ok.page('index.html', reviews=reviews)


def handle_compose(ctx: RequestContext, form: ReviewForm):
    if not ctx.is_authenticated:
        return Err(ErrorKind.AUTHORIZATION, 'Login required.')
    return Ok.page('new.html', form=form)


def handle_submit(ctx: RequestContext, form: ReviewForm):
    if not ctx.is_authenticated:
        return Err(ErrorKind.AUTHORIZATION, 'Login required.')

    if not form.validate():
        return Err(ErrorKind.VALIDATION, first_error(form), 'new.html', {'form': form})

    try:
        review_id = create_review(
            user_id=ctx.user.id,
            rating=form.rating.data,
            comment=form.comment.data,
        )
    except StoreError as exc:
        log_store_error(ctx, 'submit review', exc)
        return Err(ErrorKind.STORE, SAVE_ERROR, 'new.html', {'form': form})

    audit_log(
        event='review_created',
        message=f'Review {review_id} created',
        user_id=ctx.user.id,
        review_id=review_id,
        **ctx.log_fields(),
    )
    return Ok.redirect('reviews.index')


def handle_detail(ctx: RequestContext, raw_id: str):
    try:
        review_id = int(raw_id)
    except ValueError:
        return Err(ErrorKind.NOT_FOUND, NOT_FOUND, 'detail.html', {'review': None})
    if not -MAX_REVIEW_ID - 1 <= review_id <= MAX_REVIEW_ID:
        return Err(ErrorKind.NOT_FOUND, NOT_FOUND, 'detail.html', {'review': None})

    try:
        review = get_review(review_id)
    except StoreError as exc:
        log_store_error(ctx, 'review detail', exc)
        return Err(ErrorKind.STORE, DETAIL_LOAD_ERROR, 'detail.html', {'review': None})

    if review is None:
        return Err(ErrorKind.NOT_FOUND, NOT_FOUND, 'detail.html', {'review': None})
    return Ok.page('detail.html', review=review)


# --- Routes ---

@reviews_bp.route('/')
def index():
    ctx = RequestContext.from_request()
    return render_result(handle_feed(ctx), ctx)


@reviews_bp.route('/reviews/new', methods=['GET', 'POST'])
@limiter.limit(
    lambda: current_app.config.get('REVIEW_RATE_LIMIT', '20/minute'),
    methods=['POST'],
)
def new():
    ctx = RequestContext.from_request()
    form = ReviewForm()
    if form.is_submitted():
        result = handle_submit(ctx, form)
    else:
        result = handle_compose(ctx, form)
    return render_result(result, ctx)


@reviews_bp.route('/reviews/<review_id>')
def detail(review_id):
    ctx = RequestContext.from_request()
    return render_result(handle_detail(ctx, review_id), ctx)
