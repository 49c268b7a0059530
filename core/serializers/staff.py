from rest_framework import serializers

from core.models import (
    CONTACT_METHOD_CHOICES,
    EDUCATION_LEVEL_CHOICES,
    EMPLOYMENT_TYPE_CHOICES,
    LANGUAGE_CHOICES,
    MANAGEMENT_LEVEL_CHOICES,
    MARITAL_STATUS_CHOICES,
    WORK_STATUS_CHOICES,
)

from .common import EntitySerializer, enum, string_list, text

# validated_data keys that belong on the Profile rather than the role row
PROFILE_FIELDS = (
    'full_name', 'preferred_name', 'email', 'phone', 'dob', 'gender', 'nationality', 'address',
    'emergency_contact_name', 'emergency_contact_phone', 'emergency_contact_email',
    'preferred_language', 'preferred_contact_method',
)


class ProfileFieldsSerializer(EntitySerializer):
    """Personal details written to the linked Profile."""
    fullName = text(max_length=255, source='full_name')
    preferredName = text(max_length=255, source='preferred_name')
    email = serializers.EmailField(required=False, allow_null=True)
    phone = text(max_length=32)
    dob = serializers.DateField(required=False, allow_null=True)
    gender = text(max_length=16)
    nationality = text(max_length=64)
    address = text()
    emergencyContactName = text(max_length=255, source='emergency_contact_name')
    emergencyContactPhone = text(max_length=32, source='emergency_contact_phone')
    emergencyContactEmail = serializers.EmailField(required=False, allow_null=True, source='emergency_contact_email')
    preferredLanguage = enum(LANGUAGE_CHOICES, source='preferred_language')
    preferredContactMethod = enum(CONTACT_METHOD_CHOICES, source='preferred_contact_method')

    def require_full_name(self, attrs):
        if self.partial:
            if 'full_name' in attrs and not attrs['full_name']:
                raise serializers.ValidationError({'fullName': 'This field may not be blank.'})
            return
        if not attrs.get('full_name'):
            raise serializers.ValidationError({'fullName': 'This field is required.'})


def split_profile(validated: dict) -> tuple[dict, dict]:
    """Split validated data into (profile fields, role fields)."""
    profile = {k: v for k, v in validated.items() if k in PROFILE_FIELDS}
    role = {k: v for k, v in validated.items() if k not in PROFILE_FIELDS}
    return profile, role


class StaffSerializer(ProfileFieldsSerializer):
    jobTitle = text(max_length=255, source='job_title', allow_null=False)
    companyStaffId = text(max_length=64, source='company_staff_id')
    managementLevel = enum(MANAGEMENT_LEVEL_CHOICES, source='management_level', allow_null=False)
    employmentType = enum(EMPLOYMENT_TYPE_CHOICES, source='employment_type')
    educationLevel = enum(EDUCATION_LEVEL_CHOICES, source='education_level')
    maritalStatus = enum(MARITAL_STATUS_CHOICES, source='marital_status')
    startDate = serializers.DateField(required=False, allow_null=True, source='start_date')
    endDate = serializers.DateField(required=False, allow_null=True, source='end_date')
    status = enum(WORK_STATUS_CHOICES, allow_null=False)
    qualifications = string_list()
    specializations = string_list()

    def validate(self, attrs):
        self.require_full_name(attrs)
        start, end = attrs.get('start_date'), attrs.get('end_date')
        if start and end and end < start:
            raise serializers.ValidationError({'endDate': 'End date cannot be before start date'})
        return attrs
