import logging

from accounts.utils import client_ip
from .models import AuditLog

logger = logging.getLogger(__name__)


def record(request, action, instance=None, model_name=None, details=None, user=None):
    """Write an audit entry for the principal behind ``request``."""
    if user is None and request.user.is_authenticated:
        user = request.user
    entry = AuditLog(
        user=user,
        action=action,
        model_name=model_name or type(instance).__name__,
        object_id=str(instance.pk) if instance is not None and instance.pk is not None else None,
        details=details or {},
        ip_address=client_ip(request),
        user_agent=request.META.get('HTTP_USER_AGENT', ''),
    )
    entry.save()
    logger.info(f"{action} {entry.model_name} {entry.object_id} by {user}")
    return entry
