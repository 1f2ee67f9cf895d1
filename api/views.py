"""
API views for the product code table.
"""
import logging
from datetime import datetime

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from prodcode import ProductCode, SQLiteStorage, StorageError, __version__

from .serializers import (
    ErrorResponseSerializer,
    ProductCodeSerializer,
    SaveProductCodeSerializer,
)

logger = logging.getLogger(__name__)


class BaseCodeView(APIView):
    """Base view with common functionality."""

    def get_storage(self) -> SQLiteStorage:
        """Storage for the configured database, opened per request."""
        return SQLiteStorage(settings.PRODCODE_DATABASE_PATH)

    def handle_storage_error(self, error: StorageError) -> Response:
        """Handle storage-related errors."""
        logger.error("Storage operation failed: %s", error)
        body = ErrorResponseSerializer({
            'error': type(error).__name__,
            'message': str(error),
        })
        return Response(body.data, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class HealthCheckView(APIView):
    """Health check endpoint."""

    def get(self, request) -> Response:
        """Get health status."""
        return Response({
            'status': 'healthy',
            'timestamp': datetime.now().isoformat(),
            'version': __version__,
        }, status=status.HTTP_200_OK)


class ProductCodeView(BaseCodeView):
    """List and save product codes."""

    def get(self, request) -> Response:
        """List every product code."""
        try:
            with self.get_storage() as storage:
                codes = ProductCode.all(storage)
        except StorageError as e:
            return self.handle_storage_error(e)

        return Response({
            'codes': ProductCodeSerializer(codes, many=True).data,
            'count': len(codes),
        }, status=status.HTTP_200_OK)

    def put(self, request) -> Response:
        """Insert or update a product code."""
        serializer = SaveProductCodeSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        code = ProductCode(data['code'], data['discount_code'], data['description'])

        try:
            with self.get_storage() as storage:
                action = code.save(storage, prior_code=data.get('prior_code'))
        except StorageError as e:
            return self.handle_storage_error(e)

        return Response({
            'action': action,
            'code': ProductCodeSerializer(code).data,
        }, status=status.HTTP_201_CREATED if action == 'insert' else status.HTTP_200_OK)
