"""
URL configuration for the Groups app.
"""
from django.urls import include, path
from rest_framework.routers import SimpleRouter

from apps.groups.views import GroupMemberViewSet, GroupViewSet

app_name = 'groups'

router = SimpleRouter(trailing_slash=False)
router.register(r'groups', GroupViewSet, basename='group')

# Nested routes for members
member_list = GroupMemberViewSet.as_view({
    'get': 'list',
    'post': 'create',
})
member_detail = GroupMemberViewSet.as_view({
    'put': 'update',
    'delete': 'destroy',
})

urlpatterns = [
    path('', include(router.urls)),
    path(
        'groups/<int:group_id>/members',
        member_list,
        name='group-member-list',
    ),
    path(
        'groups/<int:group_id>/members/<int:user_id>',
        member_detail,
        name='group-member-detail',
    ),
]
