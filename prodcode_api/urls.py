"""
Root URL configuration for the product code API.
"""
from django.urls import include, path

urlpatterns = [
    path('api/', include('api.urls')),
]
