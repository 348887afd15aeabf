"""
URL configuration for the Meetings app.
"""
from django.urls import include, path
from rest_framework.routers import SimpleRouter

from apps.meetings.views import MeetingViewSet

app_name = 'meetings'

router = SimpleRouter(trailing_slash=False)
router.register(r'meetings', MeetingViewSet, basename='meeting')

urlpatterns = [
    path('', include(router.urls)),
]
