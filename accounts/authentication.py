import jwt
from django.contrib.auth import get_user_model
from rest_framework import authentication
from rest_framework.exceptions import AuthenticationFailed

from .principal import Principal
from .utils import decode_jwt_token

User = get_user_model()


class JWTAuthentication(authentication.BaseAuthentication):
    """JWT authentication for DRF.

    On success the request carries the user as ``request.user`` and a
    :class:`~accounts.principal.Principal` on ``request.principal``.
    """
    keyword = 'Bearer'

    def authenticate(self, request):
        auth_header = request.headers.get('Authorization', '')

        if not auth_header.startswith(f'{self.keyword} '):
            return None  # Let other auth classes try

        parts = auth_header.split()
        if len(parts) != 2:
            raise AuthenticationFailed('Invalid authorization header')
        token = parts[1]

        try:
            payload = decode_jwt_token(token)
        except jwt.ExpiredSignatureError:
            raise AuthenticationFailed('Token has expired')
        except jwt.InvalidTokenError:
            raise AuthenticationFailed('Invalid token')

        user_id = payload.get('user_id')
        if not user_id:
            raise AuthenticationFailed('Invalid token payload')

        try:
            user = User.objects.get(id=user_id)
        except User.DoesNotExist:
            raise AuthenticationFailed('User not found')

        if not user.is_active:
            raise AuthenticationFailed('User account is disabled')

        request.principal = Principal.from_user(user)
        return (user, token)

    def authenticate_header(self, request):
        return self.keyword
