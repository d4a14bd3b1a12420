# ==========================================
# apps/posts/admin.py
# ==========================================

from django.contrib import admin
from apps.posts.models import Post


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    """Admin interface for Posts."""

    list_display = ['title', 'author', 'created_at', 'updated_at']
    list_filter = ['created_at']
    search_fields = ['title', 'content', 'author__email']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('author')
