# ==========================================
# apps/posts/models.py
# ==========================================

from django.db import models
import uuid


class Post(models.Model):
    """User post. The author is set at creation and never changes."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    author = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='posts')
    title = models.CharField(max_length=200)
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'posts'
        indexes = [
            models.Index(fields=['author', 'created_at'], name='posts_author_created_idx'),
            models.Index(fields=['created_at'], name='posts_created_at_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.title
