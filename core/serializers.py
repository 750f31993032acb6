from rest_framework import serializers

from .children import replace_children
from .models import AnalyticsEvent


class StringListField(serializers.ListField):
    """A list of non-blank strings, order and duplicates kept."""
    child = serializers.CharField(max_length=255)

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('write_only', True)
        super().__init__(**kwargs)


class NestedCollectionsMixin:
    """ModelSerializer mixin writing one-to-many string collections.

    ``collections`` maps a serializer field to ``(related_name, column)`` of the
    child model. A collection present in the payload replaces the stored one
    wholesale; an absent collection is left untouched.
    """
    collections = {}

    def _pop_collections(self, validated_data):
        return {
            field: validated_data.pop(field)
            for field in list(self.collections)
            if field in validated_data
        }

    def _write_collections(self, instance, collections):
        for field, values in collections.items():
            related_name, column = self.collections[field]
            replace_children(instance, related_name, column, values)

    def create(self, validated_data):
        collections = self._pop_collections(validated_data)
        instance = super().create(validated_data)
        self._write_collections(instance, collections)
        return instance

    def update(self, instance, validated_data):
        collections = self._pop_collections(validated_data)
        instance = super().update(instance, validated_data)
        self._write_collections(instance, collections)
        return instance


class AnalyticsEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = AnalyticsEvent
        fields = [
            'id', 'event_type', 'event_name', 'properties',
            'value', 'currency', 'created_at'
        ]
        read_only_fields = ['id', 'created_at']


class HealthCheckSerializer(serializers.Serializer):
    status = serializers.CharField()
    timestamp = serializers.DateTimeField()
    database = serializers.CharField()
    service = serializers.CharField()
    version = serializers.CharField()
