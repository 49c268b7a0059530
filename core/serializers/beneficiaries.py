from rest_framework import serializers

from core.models import BASE_STATUS_CHOICES, RELATION_CHOICES, Profile

from .common import enum, ref, text
from .staff import ProfileFieldsSerializer


class BeneficiarySerializer(ProfileFieldsSerializer):
    """Input for a staff dependant.

    Either ``profileId`` names an existing profile or the personal fields
    (``fullName`` at least) describe a new one.
    """
    profileId = ref('profile_id')
    guardianId = ref('guardian_id')
    relation = enum(RELATION_CHOICES, allow_null=False)
    relationshipDetails = text(source='relationship_details')
    dateOfBirth = serializers.DateField(required=False, allow_null=True, source='date_of_birth')
    isEmployed = serializers.BooleanField(required=False, allow_null=True, source='is_employed')
    isStudent = serializers.BooleanField(required=False, allow_null=True, source='is_student')
    vulnerabilityFlag = serializers.BooleanField(required=False, allow_null=True, source='vulnerability_flag')
    isStaffLink = serializers.BooleanField(required=False, source='is_staff_link')
    status = enum(BASE_STATUS_CHOICES, allow_null=False)
    lastServiceDate = serializers.DateTimeField(required=False, allow_null=True, source='last_service_date')
    notes = text()

    def validate_profileId(self, v):
        if v is not None and not Profile.objects.filter(pk=v).exists():
            raise serializers.ValidationError('Profile not found')
        return v

    def validate_guardianId(self, v):
        if v is not None and not Profile.objects.filter(pk=v).exists():
            raise serializers.ValidationError('Guardian not found')
        return v

    def validate(self, attrs):
        if not self.partial and 'relation' not in attrs:
            raise serializers.ValidationError({'relation': 'This field is required.'})
        if not attrs.get('profile_id'):
            self.require_full_name(attrs)
        return attrs
