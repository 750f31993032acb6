import base64
import io
import logging
import re
import time

from django.conf import settings
from django.db import connection
from django.utils import timezone
from PIL import Image, UnidentifiedImageError
from rest_framework import status
from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdminOrRestaurantOwner, IsAdminUser, resolve_principal
from accounts.utils import client_ip
from .business_logic import AnalyticsBusinessLogic, StatsBusinessLogic
from .exceptions import BadRequest, require_fields
from .moderation import ModerationUnavailable, get_moderator
from .serializers import AnalyticsEventSerializer, HealthCheckSerializer

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/png', 'image/webp')


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    """Health check endpoint"""
    try:
        connection.ensure_connection()
        database_status = 'connected'
    except Exception as e:
        logger.error(f"Health check database error: {e}")
        database_status = 'unavailable'

    data = {
        'status': 'healthy' if database_status == 'connected' else 'degraded',
        'timestamp': timezone.now(),
        'database': database_status,
        'service': 'dishmatch-admin-api',
        'version': settings.VERSION,
    }

    serializer = HealthCheckSerializer(data)
    return Response(serializer.data)


@api_view(['GET'])
@permission_classes([IsAdminOrRestaurantOwner])
def dashboard_stats(request):
    """Dashboard counts, scoped to the caller's restaurants"""
    return Response(StatsBusinessLogic.dashboard_stats(resolve_principal(request)))


@api_view(['GET'])
@permission_classes([IsAdminUser])
def platform_stats(request):
    """Platform statistics (admin only)"""
    return Response(StatsBusinessLogic.platform_stats())


def _safe_filename(name):
    return f"{int(time.time() * 1000)}-{re.sub(r'[^a-zA-Z0-9.-]', '', name or 'upload')}"


@api_view(['POST'])
@permission_classes([IsAdminOrRestaurantOwner])
@parser_classes([MultiPartParser, FormParser])
def upload_image(request):
    """Validate, moderate and return an uploaded dish/restaurant image"""
    upload = request.FILES.get('file')
    if upload is None:
        raise BadRequest('No file provided')

    if upload.content_type not in ALLOWED_IMAGE_TYPES:
        raise BadRequest('Only JPEG, PNG, and WebP images are allowed')

    max_bytes = settings.UPLOAD_MAX_BYTES
    if upload.size > max_bytes:
        raise BadRequest(f'File size must be less than {max_bytes // (1024 * 1024)}MB')

    content = upload.read()
    try:
        with Image.open(io.BytesIO(content)) as image:
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise BadRequest('File is not a valid image')

    data_url = f"data:{upload.content_type};base64,{base64.b64encode(content).decode('ascii')}"

    moderator = get_moderator()
    try:
        result = moderator.moderate(data_url)
    except ModerationUnavailable as e:
        # Moderation outages do not block uploads
        logger.error(f"Image moderation unavailable ({moderator.get_moderator_name()}): {e}")
    else:
        if not result.approved:
            logger.info(f"Image {upload.name} rejected by moderation: {result.reason}")
            raise BadRequest('Image rejected by content moderation',
                             extra={'reason': result.reason})

    return Response({
        'url': data_url,
        'filename': _safe_filename(upload.name),
        'size': upload.size,
        'type': upload.content_type,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def track_event(request):
    """Record an analytics event for the current user"""
    require_fields(request.data, ('event_type', 'event_name'))
    serializer = AnalyticsEventSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    event = serializer.save(
        user=request.user,
        ip_address=client_ip(request),
        user_agent=request.META.get('HTTP_USER_AGENT', ''),
    )

    return Response({
        'event': {
            'id': event.id,
            'event_type': event.event_type,
            'event_name': event.event_name,
            'created_at': event.created_at,
        },
        'message': 'Event tracked successfully'
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def analytics_summary(request):
    """Summary of the current user's analytics events"""
    timeframe = request.query_params.get('timeframe', '30')
    try:
        days = int(timeframe)
    except ValueError:
        raise BadRequest(f'Invalid timeframe: {timeframe}')
    if days < 1:
        raise BadRequest('Timeframe must be at least 1 day')

    summary = AnalyticsBusinessLogic.summary(
        request.user, days=days, event_type=request.query_params.get('event_type'))
    summary['recent_events'] = AnalyticsEventSerializer(
        summary['recent_events'], many=True).data
    return Response(summary)
