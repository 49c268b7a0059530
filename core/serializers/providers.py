from rest_framework import serializers

from core.models import PROVIDER_ENTITY_TYPE_CHOICES, PROVIDER_TYPE_CHOICES, WORK_STATUS_CHOICES

from .common import EntitySerializer, enum, string_list, text


class ProviderSerializer(EntitySerializer):
    name = text(max_length=255, required=True)
    type = enum(PROVIDER_TYPE_CHOICES)
    entityType = enum(PROVIDER_ENTITY_TYPE_CHOICES, allow_null=False, source='entity_type')
    contactEmail = serializers.EmailField(source='contact_email')
    contactPhone = text(max_length=32, source='contact_phone')
    location = text(max_length=255)
    qualifications = string_list()
    specializations = string_list()
    availability = serializers.JSONField(required=False, allow_null=True)
    rating = serializers.FloatField(required=False, allow_null=True, min_value=0, max_value=5)
    isVerified = serializers.BooleanField(required=False, source='is_verified')
    status = enum(WORK_STATUS_CHOICES, allow_null=False)
