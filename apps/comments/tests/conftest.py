import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.comments.models import Comment
from apps.posts.models import Post


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def post_author(db):
    return User.objects.create_user(
        email='poster@example.com',
        password='TestPass123!',
        display_name='Poster',
    )


@pytest.fixture
def commenter(db):
    return User.objects.create_user(
        email='commenter@example.com',
        password='TestPass123!',
        display_name='Commenter',
    )


@pytest.fixture
def post_author_client(post_author):
    return _client_for(post_author)


@pytest.fixture
def commenter_client(commenter):
    return _client_for(commenter)


@pytest.fixture
def post(post_author):
    return Post.objects.create(author=post_author, title='A post', content='Body')


@pytest.fixture
def comment(post, commenter):
    """Comment written by the commenter on someone else's post."""
    return Comment.objects.create(author=commenter, post=post, content='First!')
