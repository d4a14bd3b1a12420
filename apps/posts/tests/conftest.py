import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.posts.models import Post


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def author(db):
    """Create and return the post author."""
    return User.objects.create_user(
        email='author@example.com',
        password='TestPass123!',
        display_name='Post Author',
    )


@pytest.fixture
def reader(db):
    """Create and return a user who did not write the post."""
    return User.objects.create_user(
        email='reader@example.com',
        password='TestPass123!',
        display_name='Reader',
    )


@pytest.fixture
def author_client(author):
    """Return API client authenticated as the author."""
    client = APIClient()
    refresh = RefreshToken.for_user(author)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def reader_client(reader):
    """Return API client authenticated as the reader."""
    client = APIClient()
    refresh = RefreshToken.for_user(reader)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def post(author):
    """Create and return a post by the author."""
    return Post.objects.create(
        author=author,
        title='Ownership in Rust',
        content='Borrowing rules explained',
    )
