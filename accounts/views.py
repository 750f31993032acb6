import logging

from django.conf import settings
from django.contrib.auth import authenticate
from django.contrib.auth.models import update_last_login
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from core import audit
from core.exceptions import BadRequest, Conflict, NotFound, Unauthenticated
from core.filters import SubstringSearchFilter
from core.models import AuditLog
from core.pagination import PagePagination
from .models import CustomUser, Role
from .permissions import ADMIN_ONLY, HasCapability, resolve_principal
from .serializers import (
    UserSerializer, RegisterSerializer, LoginSerializer,
    ChangePasswordSerializer, UpdateProfileSerializer,
    RoleAssignmentSerializer, OTPResendSerializer, OTPVerifySerializer
)
from .utils import create_jwt_token
from . import otp

logger = logging.getLogger(__name__)

# ============ Authentication Views ============


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    """User registration endpoint, storing a hashed password only"""
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    if CustomUser.objects.filter(email__iexact=serializer.validated_data['email']).exists():
        raise Conflict('User with this email already exists')

    user = serializer.save()
    logger.info(f"Registered user {user.id} as {user.role}")

    return Response({
        'success': True,
        'message': 'Account created successfully',
        'token': create_jwt_token(user),
        'user': UserSerializer(user).data
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """Login endpoint with JWT token generation"""
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = authenticate(
        request,
        username=serializer.validated_data['username'],
        password=serializer.validated_data['password'])

    if user is None:
        raise Unauthenticated('Invalid credentials')

    update_last_login(None, user)
    audit.record(request, AuditLog.ACTION_LOGIN, user, user=user)

    return Response({
        'success': True,
        'message': 'Login successful',
        'token': create_jwt_token(user),
        'user': UserSerializer(user).data
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([AllowAny])
def otp_resend_view(request):
    """Issue a fresh verification code for an e-mail address or phone"""
    serializer = OTPResendSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    record = otp.issue_code(
        serializer.validated_data['identifier'], serializer.validated_data['type'])

    if settings.DEBUG:
        return Response({
            'message': 'New verification code generated',
            'development_mode': True,
            'otp_code': record.code,
        })

    otp.deliver_code(record.identifier, record.type, record.code)
    return Response({'message': 'Verification code sent successfully'})


@api_view(['POST'])
@permission_classes([AllowAny])
def otp_verify_view(request):
    """Consume a verification code and mark the e-mail/phone verified"""
    serializer = OTPVerifySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    if not otp.verify_code(data['identifier'], data['type'], data['code']):
        raise BadRequest('Invalid or expired verification code')

    label = 'Email' if data['type'] == 'email' else 'Phone'
    return Response({'message': f'{label} verified successfully'})

# ============ User Profile Views ============


@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def profile_view(request):
    """Get or update the current user's profile"""
    if request.method == 'GET':
        return Response(UserSerializer(request.user).data)

    serializer = UpdateProfileSerializer(
        request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()

    return Response({
        'success': True,
        'message': 'Profile updated successfully',
        'user': UserSerializer(request.user).data
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password_view(request):
    """Change user password"""
    serializer = ChangePasswordSerializer(
        data=request.data, context={'request': request})
    serializer.is_valid(raise_exception=True)

    user = request.user
    if not user.check_password(serializer.validated_data['old_password']):
        raise BadRequest('Old password is incorrect')

    user.set_password(serializer.validated_data['new_password'])
    user.save(update_fields=['password', 'updated_at'])

    return Response({
        'success': True,
        'message': 'Password changed successfully'
    })

# ============ Admin Views ============


class UserAdminViewSet(mixins.ListModelMixin,
                       mixins.RetrieveModelMixin,
                       viewsets.GenericViewSet):
    """Admin: list users, change roles, activate/deactivate accounts"""
    queryset = CustomUser.objects.all().order_by('-created_at', '-id')
    serializer_class = UserSerializer
    permission_classes = [HasCapability]
    default_capability = ADMIN_ONLY
    pagination_class = PagePagination
    filter_backends = [DjangoFilterBackend, SubstringSearchFilter]
    filterset_fields = ['role', 'is_active']
    search_fields = ['name', 'email', 'username']
    http_method_names = ['get', 'patch', 'post', 'head', 'options']
    lookup_value_regex = r'\d+'

    def get_object(self):
        try:
            return self.get_queryset().get(pk=self.kwargs['pk'])
        except CustomUser.DoesNotExist:
            raise NotFound('User not found')

    def partial_update(self, request, pk=None):
        """Assign/change a user's role"""
        serializer = RoleAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_role = serializer.validated_data['role']

        user = self.get_object()
        if user.pk == resolve_principal(request).id and new_role != Role.ADMIN:
            raise BadRequest('Cannot remove admin role from yourself')

        user.role = new_role
        user.save(update_fields=['role', 'updated_at'])
        audit.record(request, AuditLog.ACTION_UPDATE, user,
                     details={'role': new_role})

        return Response(UserSerializer(user).data)

    @action(detail=True, methods=['post'], url_path='toggle-active')
    def toggle_active(self, request, pk=None):
        """Activate/Deactivate user"""
        user = self.get_object()
        if user.pk == resolve_principal(request).id:
            raise BadRequest('Cannot deactivate yourself')

        user.is_active = not user.is_active
        user.save(update_fields=['is_active', 'updated_at'])
        audit.record(request, AuditLog.ACTION_UPDATE, user,
                     details={'is_active': user.is_active})

        status_text = 'activated' if user.is_active else 'deactivated'
        return Response({
            'success': True,
            'message': f'User {status_text} successfully',
            'user': UserSerializer(user).data
        })
