from datetime import date, datetime
from decimal import Decimal

from django.db import models
from rest_framework import serializers


def to_plain(value):
    """
    Turn validated serializer output into JSON-safe values for a JSONField
    """
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class ContactPersonSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    position = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    email = serializers.EmailField(required=False, allow_blank=True, default='')
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    mobile = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')


class DocumentSerializer(serializers.ModelSerializer):
    """
    ModelSerializer whose nested serializers are stored in JSONFields.

    Nested values are embedded in the parent row, so create/update write them
    as plain dicts and lists instead of following relations.
    """

    def to_document(self, validated_data):
        model = self.Meta.model
        document = {}
        for attr, value in validated_data.items():
            field = model._meta.get_field(attr)
            if isinstance(field, models.JSONField):
                value = to_plain(value)
            document[attr] = value
        return document

    def create(self, validated_data):
        instance = self.Meta.model(**self.to_document(validated_data))
        instance.save()
        return instance

    def update(self, instance, validated_data):
        for attr, value in self.to_document(validated_data).items():
            setattr(instance, attr, value)
        instance.save()
        return instance
