"""
Rate Limit URL Configuration
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .viewsets import FormRateLimitViewSet

router = SimpleRouter()
router.register(r'rate-limits', FormRateLimitViewSet, basename='rate-limit')

app_name = 'ratelimit'

urlpatterns = [
    path('', include(router.urls)),
]
