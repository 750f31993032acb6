"""
Authorized Resource Endpoint shared by the admin API.

Every request goes through the same pipeline: authenticate the bearer token,
check the principal's role against the view's capability table, compute the
query scope, then run the operation against the scoped queryset. Single-row
operations resolve their target through the scope, so a row owned by someone
else is indistinguishable from a missing one.
"""

import logging

from django.db import transaction
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.response import Response

from accounts.permissions import ADMIN_SURFACE, HasCapability, resolve_principal
from . import audit
from .exceptions import BadRequest, NotFound, require_fields
from .filters import SubstringSearchFilter
from .models import AuditLog
from .pagination import PagePagination
from .scope import build_scope

logger = logging.getLogger(__name__)

WRITE_ACTIONS = ('create', 'update', 'partial_update')


def parse_id(value, name):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadRequest(f"Invalid {name}: {value}")


class AuthorizedResourceViewSet(viewsets.ModelViewSet):
    """Base viewset for scoped admin resources.

    Subclasses set ``resource`` (a key understood by
    :func:`core.scope.build_scope`), ``queryset``, the read/write serializer
    classes, ``required_fields`` for creation and optionally ``capabilities``.
    """
    resource = None
    label = 'Resource'
    required_fields = ()
    write_serializer_class = None
    detail_serializer_class = None

    permission_classes = [HasCapability]
    default_capability = ADMIN_SURFACE
    capabilities = {}

    pagination_class = PagePagination
    filter_backends = [DjangoFilterBackend, SubstringSearchFilter]
    http_method_names = ['get', 'post', 'put', 'patch', 'delete', 'head', 'options']
    lookup_value_regex = r'\d+'
    ordering = ['-created_at', '-id']

    @property
    def principal(self):
        return resolve_principal(self.request)

    # ---- scope ---------------------------------------------------------

    def get_parent_id(self):
        """Caller-supplied parent filter, if the resource has one."""
        return None

    def get_scope(self):
        return build_scope(self.principal, self.resource, self.get_parent_id())

    def get_queryset(self):
        return super().get_queryset().filter(self.get_scope()).order_by(*self.ordering)

    def get_object(self):
        pk = parse_id(self.kwargs.get(self.lookup_url_kwarg or self.lookup_field), 'id')
        try:
            obj = self.get_queryset().get(pk=pk)
        except self.queryset.model.DoesNotExist:
            raise NotFound(f"{self.label} not found")
        self.check_object_permissions(self.request, obj)
        return obj

    # ---- serializers ---------------------------------------------------

    def get_serializer_class(self):
        if self.action in WRITE_ACTIONS and self.write_serializer_class:
            return self.write_serializer_class
        if self.action == 'retrieve' and self.detail_serializer_class:
            return self.detail_serializer_class
        return self.serializer_class

    def fresh_representation(self, instance):
        """Re-read ``instance`` from the database and serialize it."""
        fresh = self.queryset.all().get(pk=instance.pk)
        return self.serializer_class(fresh, context=self.get_serializer_context()).data

    # ---- writes --------------------------------------------------------

    def prepare_create(self, validated_data):
        """Check the scope before a row is created; returns extra save kwargs."""
        return {}

    def create(self, request, *args, **kwargs):
        require_fields(request.data, self.required_fields)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        extra = self.prepare_create(serializer.validated_data)

        with transaction.atomic():
            instance = serializer.save(**extra)
            audit.record(request, AuditLog.ACTION_CREATE, instance,
                         details={'name': str(instance)})

        logger.info(f"{self.label} {instance.pk} created by principal {self.principal.id}")
        return Response(self.fresh_representation(instance), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        # PUT and PATCH both only change the fields that were sent
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            instance = serializer.save()
            audit.record(request, AuditLog.ACTION_UPDATE, instance,
                         details={'fields': sorted(request.data.keys())})

        return Response(self.fresh_representation(instance))

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()

        with transaction.atomic():
            audit.record(request, AuditLog.ACTION_DELETE, instance,
                         details={'name': str(instance)})
            instance.delete()

        return Response({'message': f'{self.label} deleted successfully'})
