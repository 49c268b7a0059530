from rest_framework import serializers

from core.models import BASE_STATUS_CHOICES, CONTACT_METHOD_CHOICES, Industry

from .common import EntitySerializer, enum, ref, text


class ClientSerializer(EntitySerializer):
    name = text(max_length=255, required=True)
    email = serializers.EmailField(required=False, allow_null=True)
    phone = text(max_length=32)
    website = serializers.URLField(required=False, allow_null=True)
    address = text()
    billingAddress = text(source='billing_address')
    taxId = text(max_length=64, source='tax_id')
    contactPerson = text(max_length=255, source='contact_person')
    contactEmail = serializers.EmailField(required=False, allow_null=True, source='contact_email')
    contactPhone = text(max_length=32, source='contact_phone')
    industryId = ref('industry_id')
    status = enum(BASE_STATUS_CHOICES, allow_null=False)
    preferredContactMethod = enum(CONTACT_METHOD_CHOICES, source='preferred_contact_method')
    timezone = text(max_length=64)
    isVerified = serializers.BooleanField(required=False, source='is_verified')
    notes = text()

    def validate_name(self, v):
        if len(v) < 2:
            raise serializers.ValidationError('Name must be at least 2 characters')
        return v

    def validate_industryId(self, v):
        return self.ensure_exists(Industry, v, 'Industry')
