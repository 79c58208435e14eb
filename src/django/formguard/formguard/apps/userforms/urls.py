"""
User Defined Forms URL Configuration
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .viewsets import UserDefinedFormViewSet

router = DefaultRouter()
router.register(r'forms', UserDefinedFormViewSet, basename='form')

app_name = 'userforms'

urlpatterns = [
    path('', include(router.urls)),
]
