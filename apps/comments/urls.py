from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'comments'

router = DefaultRouter()
router.register(r'', views.CommentViewSet, basename='comment')

urlpatterns = [
    # GET    /api/comments/?post={id} - List comments of a post
    # POST   /api/comments/           - Create comment
    # GET    /api/comments/{id}/      - Get comment
    # PATCH  /api/comments/{id}/      - Update comment (author)
    # DELETE /api/comments/{id}/      - Delete comment (author)
    path('', include(router.urls)),
]
