# ==========================================
# apps/comments/models.py
# ==========================================

from django.db import models
import uuid


class Comment(models.Model):
    """Comment on a post. The author is set at creation and never changes."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    author = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='comments')
    post = models.ForeignKey('posts.Post', on_delete=models.CASCADE, related_name='comments')
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'comments'
        indexes = [
            models.Index(fields=['post', 'created_at'], name='comments_post_created_idx'),
            models.Index(fields=['author', 'created_at'], name='comments_author_created_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.author.get_display_name()} on {self.post.title}"
