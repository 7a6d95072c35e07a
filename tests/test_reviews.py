"""
Tests for the review routes.

Covers: feed rendering and ordering, the login gate on compose/submit,
rating and comment validation, detail lookups, and store failures.
"""

from datetime import datetime, timedelta, timezone
from urllib.parse import urlparse

from reviewsite.errors import StoreError
from reviewsite.reviews.models import create_review, list_reviews


def location_path(response):
    return urlparse(response.headers['Location']).path


def review_count(app):
    with app.app_context():
        return len(list_reviews())


class TestFeed:

    def test_empty_feed(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert b'No reviews yet' in response.data

    def test_feed_is_public_and_lists_authors(self, app, client, registered_user):
        with app.app_context():
            create_review(registered_user.id, 4, 'Solid coffee.')

        response = client.get('/')
        assert b'Solid coffee.' in response.data
        assert b'ann' in response.data

    def test_feed_is_newest_first(self, app, client, registered_user):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        with app.app_context():
            create_review(registered_user.id, 3, 'oldest review', created_at=base)
            create_review(registered_user.id, 5, 'newest review', created_at=base + timedelta(days=2))
            create_review(registered_user.id, 1, 'middle review', created_at=base + timedelta(days=1))

        html = client.get('/').data.decode()
        assert html.index('newest review') < html.index('middle review') < html.index('oldest review')

    def test_store_failure_shows_generic_error(self, client, monkeypatch):
        def broken():
            raise StoreError('database is locked')

        monkeypatch.setattr('reviewsite.reviews.routes.list_reviews', broken)

        response = client.get('/')
        assert response.status_code == 200
        assert b'Could not load reviews' in response.data
        assert b'database is locked' not in response.data


class TestComposeGate:
    """Anonymous visitors are redirected and nothing is written."""

    def test_compose_requires_login(self, client):
        response = client.get('/reviews/new', follow_redirects=False)
        assert response.status_code == 302
        assert location_path(response) == '/login'

    def test_submit_requires_login(self, app, client, registered_user):
        response = client.post('/reviews/new', data={
            'rating': '5',
            'comment': 'sneaky',
        }, follow_redirects=False)

        assert response.status_code == 302
        assert location_path(response) == '/login'
        assert review_count(app) == 0

    def test_compose_form_renders_when_logged_in(self, authenticated_client):
        response = authenticated_client.get('/reviews/new')
        assert response.status_code == 200
        assert b'name="rating"' in response.data
        assert b'name="comment"' in response.data


class TestSubmit:

    def test_valid_review_is_saved_and_redirects(self, app, authenticated_client):
        response = authenticated_client.post('/reviews/new', data={
            'rating': '4',
            'comment': '  Great pastries.  ',
        }, follow_redirects=False)

        assert response.status_code == 302
        assert location_path(response) == '/'
        with app.app_context():
            [review] = list_reviews()
        assert review.rating == 4
        assert review.comment == 'Great pastries.'
        assert review.author.username == 'ann'

    def test_rating_above_range_rejected(self, app, authenticated_client):
        response = authenticated_client.post('/reviews/new', data={
            'rating': '6',
            'comment': 'Too good',
        })
        assert response.status_code == 200
        assert b'Rating must be between 1 and 5' in response.data
        assert review_count(app) == 0

    def test_rating_below_range_rejected(self, app, authenticated_client):
        response = authenticated_client.post('/reviews/new', data={
            'rating': '0',
            'comment': 'Awful',
        })
        assert b'Rating must be between 1 and 5' in response.data
        assert review_count(app) == 0

    def test_non_numeric_rating_rejected(self, app, authenticated_client):
        response = authenticated_client.post('/reviews/new', data={
            'rating': 'five',
            'comment': 'Nice',
        })
        assert response.status_code == 200
        assert review_count(app) == 0

    def test_missing_rating_rejected(self, app, authenticated_client):
        response = authenticated_client.post('/reviews/new', data={'comment': 'Nice'})
        assert b'Rating is required' in response.data
        assert review_count(app) == 0

    def test_whitespace_comment_rejected(self, app, authenticated_client):
        response = authenticated_client.post('/reviews/new', data={
            'rating': '3',
            'comment': '   ',
        })
        assert b'Comment is required' in response.data
        assert review_count(app) == 0

    def test_overlong_comment_rejected(self, app, authenticated_client):
        response = authenticated_client.post('/reviews/new', data={
            'rating': '3',
            'comment': 'x' * 2001,
        })
        assert b'at most 2000 characters' in response.data
        assert review_count(app) == 0

    def test_store_failure_rerenders_form(self, app, authenticated_client, monkeypatch):
        def broken(**kwargs):
            raise StoreError('disk I/O error')

        monkeypatch.setattr('reviewsite.reviews.routes.create_review', broken)

        response = authenticated_client.post('/reviews/new', data={
            'rating': '3',
            'comment': 'Fine',
        })
        assert response.status_code == 200
        assert b'Something went wrong while saving your review' in response.data
        assert review_count(app) == 0


class TestDetail:

    def test_detail_shows_review(self, app, client, registered_user):
        with app.app_context():
            review_id = create_review(registered_user.id, 2, 'Cold soup.')

        response = client.get(f'/reviews/{review_id}')
        assert response.status_code == 200
        assert b'Cold soup.' in response.data
        assert b'ann' in response.data

    def test_unknown_id_shows_not_found_message(self, client):
        response = client.get('/reviews/999')
        assert response.status_code == 200
        assert b'Review not found' in response.data

    def test_malformed_id_shows_not_found_message(self, client):
        response = client.get('/reviews/not-an-id')
        assert response.status_code == 200
        assert b'Review not found' in response.data

    def test_id_beyond_integer_range_shows_not_found_message(self, client):
        response = client.get('/reviews/99999999999999999999999')
        assert response.status_code == 200
        assert b'Review not found' in response.data

    def test_negative_id_beyond_integer_range_shows_not_found_message(self, client):
        response = client.get('/reviews/-99999999999999999999999')
        assert response.status_code == 200
        assert b'Review not found' in response.data

    def test_store_failure_shows_load_error(self, client, monkeypatch):
        def broken(review_id):
            raise StoreError('no such table: reviews')

        monkeypatch.setattr('reviewsite.reviews.routes.get_review', broken)

        response = client.get('/reviews/1')
        assert response.status_code == 200
        assert b'Could not load this review' in response.data
