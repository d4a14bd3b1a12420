import pytest
from apps.accounts.models import User
from apps.comments.models import Comment
from apps.groups.models import Group, GroupMembership, GroupRole
from apps.posts.models import Post


@pytest.fixture
def author(db):
    """User who writes the post and comment."""
    return User.objects.create_user(
        email='author@example.com',
        password='TestPass123!',
        display_name='Author',
    )


@pytest.fixture
def other_user(db):
    """User who owns nothing."""
    return User.objects.create_user(
        email='stranger@example.com',
        password='TestPass123!',
        display_name='Stranger',
    )


@pytest.fixture
def post(author):
    return Post.objects.create(author=author, title='Hello', content='First post')


@pytest.fixture
def comment(post, other_user):
    """Comment by other_user on the author's post."""
    return Comment.objects.create(author=other_user, post=post, content='Nice post')


@pytest.fixture
def group(author, other_user):
    """Group owned by the author with other_user as a member."""
    group = Group.objects.create(name='Core Group', owner=author)
    GroupMembership.objects.create(group=group, user=author, role=GroupRole.OWNER)
    GroupMembership.objects.create(group=group, user=other_user, role=GroupRole.MEMBER)
    return group
