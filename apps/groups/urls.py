from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/              - List user's groups
    # POST   /api/groups/              - Create group (creator becomes owner)
    # GET    /api/groups/{id}/         - Get group details
    # PUT    /api/groups/{id}/         - Rename group (owner)
    # PATCH  /api/groups/{id}/         - Rename group (owner)
    # DELETE /api/groups/{id}/         - Delete group (owner)

    # Custom group actions
    # GET    /api/groups/{id}/members/                - List members
    # POST   /api/groups/{id}/join/                   - Join as member
    # POST   /api/groups/{id}/leave/                  - Leave group
    # DELETE /api/groups/{id}/members/{user_id}/      - Remove member (owner)
    # POST   /api/groups/{id}/transfer_ownership/     - Transfer ownership (owner)

    # Include router URLs
    path('', include(router.urls)),
]
