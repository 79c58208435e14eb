"""
URL Configuration for formguard
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import path, include

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Simple health check
    path('health/', lambda request: JsonResponse({'status': 'healthy'}), name='health-check'),

    # Form pages and the rate limit operator API
    path('api/v1/', include('formguard.apps.userforms.urls')),
    path('api/v1/', include('formguard.apps.ratelimit.urls')),
]
