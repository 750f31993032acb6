import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from .models import OTPVerification

logger = logging.getLogger(__name__)

User = get_user_model()

VERIFIED_FLAGS = {
    OTPVerification.TYPE_EMAIL: ('email__iexact', 'email_verified'),
    OTPVerification.TYPE_PHONE: ('phone', 'phone_verified'),
}


def generate_code():
    return f"{secrets.randbelow(900000) + 100000}"


def deliver_code(identifier, otp_type, code):
    """Hand a code over to the e-mail/SMS provider.

    Delivery itself lives outside this service; the code is only logged.
    """
    logger.info(f"Verification code issued for {otp_type} {identifier}")
    logger.debug(f"Verification code for {identifier}: {code}")


@transaction.atomic
def issue_code(identifier, otp_type):
    """Invalidate pending codes for ``identifier`` and issue a fresh one."""
    OTPVerification.objects.filter(
        identifier=identifier, type=otp_type, used=False
    ).update(used=True)

    ttl = timedelta(minutes=settings.OTP_TTL_MINUTES)
    return OTPVerification.objects.create(
        identifier=identifier,
        type=otp_type,
        code=generate_code(),
        expires_at=timezone.now() + ttl,
    )


@transaction.atomic
def verify_code(identifier, otp_type, code):
    """Consume a valid code and flag the matching users as verified.

    Returns False when no unused, unexpired code matches.
    """
    record = OTPVerification.objects.select_for_update().filter(
        identifier=identifier,
        type=otp_type,
        code=code,
        used=False,
        expires_at__gt=timezone.now(),
    ).first()

    if record is None:
        return False

    record.used = True
    record.save(update_fields=['used'])

    lookup, flag = VERIFIED_FLAGS[otp_type]
    User.objects.filter(**{lookup: identifier}).update(
        **{flag: True, 'updated_at': timezone.now()})
    return True
