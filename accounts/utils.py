import jwt
from datetime import datetime, timedelta, timezone
from django.conf import settings

JWT_ALGORITHM = 'HS256'


def create_jwt_token(user):
    """Create JWT token for authenticated user"""
    now = datetime.now(timezone.utc)
    payload = {
        'user_id': user.id,
        'email': user.email,
        'role': user.role,
        'exp': now + timedelta(days=settings.JWT_EXPIRATION_DAYS),
        'iat': now
    }

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_jwt_token(token):
    """Decode a JWT token, raising jwt.PyJWTError subclasses on failure"""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[JWT_ALGORITHM])


def client_ip(request):
    """First hop of X-Forwarded-For, falling back to the socket address"""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')
