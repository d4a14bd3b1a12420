from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'posts'

router = DefaultRouter()
router.register(r'', views.PostViewSet, basename='post')

urlpatterns = [
    # GET    /api/posts/          - List posts
    # POST   /api/posts/          - Create post
    # GET    /api/posts/mine/     - Current user's posts
    # GET    /api/posts/{id}/     - Get post
    # PUT    /api/posts/{id}/     - Update post (author)
    # PATCH  /api/posts/{id}/     - Partial update (author)
    # DELETE /api/posts/{id}/     - Delete post (author)
    path('', include(router.urls)),
]
