"""
API URL configuration.
"""
from django.urls import path
from . import views

urlpatterns = [
    path('health/', views.HealthCheckView.as_view(), name='health-check'),

    # Product codes
    path('codes/', views.ProductCodeView.as_view(), name='product-codes'),
]
