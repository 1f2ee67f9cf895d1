"""
Serializers for API requests and responses.
"""
from rest_framework import serializers


class ProductCodeSerializer(serializers.Serializer):
    """Serializer for a single product code."""
    code = serializers.CharField(max_length=10)
    discount_code = serializers.CharField(min_length=1, max_length=1)
    description = serializers.CharField(max_length=255)


class SaveProductCodeSerializer(ProductCodeSerializer):
    """Serializer for save requests, optionally naming the stored code."""
    prior_code = serializers.CharField(max_length=10, required=False, allow_null=True)


class ErrorResponseSerializer(serializers.Serializer):
    """Serializer for error responses."""
    error = serializers.CharField()
    message = serializers.CharField()
