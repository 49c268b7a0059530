from rest_framework import serializers

from core.models import SESSION_STATUS_CHOICES

from .common import EntitySerializer, enum, ref, text

SESSION_TYPES = {
    'staff': ('individual', 'group', 'couple'),
    'organization': ('talk', 'comedy', 'training'),
}
ALL_SESSION_TYPES = frozenset(t for types in SESSION_TYPES.values() for t in types)


def resolve_session_type(session_for, session_type):
    """Return ``session_type`` if valid for the audience, else the audience's first type."""
    valid = SESSION_TYPES.get(session_for or 'staff', SESSION_TYPES['staff'])
    return session_type if session_type in valid else valid[0]


class SessionSerializer(EntitySerializer):
    serviceId = ref('service_id', required=True)
    providerId = ref('provider_id', required=True)
    scheduledAt = serializers.DateTimeField(source='scheduled_at')
    interventionId = ref('intervention_id')
    clientId = ref('client_id')
    beneficiaryId = ref('beneficiary_id')
    staffId = ref('staff_id')
    completedAt = serializers.DateTimeField(required=False, allow_null=True, source='completed_at')
    status = enum(SESSION_STATUS_CHOICES, allow_null=False)
    notes = text()
    feedback = text()
    duration = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    location = text(max_length=255)
    cancellationReason = text(source='cancellation_reason')
    isGroupSession = serializers.BooleanField(required=False, source='is_group_session')
    sessionType = text(max_length=32, source='session_type')
    sessionFor = serializers.ChoiceField(choices=tuple(SESSION_TYPES), required=False, write_only=True)

    def validate(self, attrs):
        beneficiary, staff = attrs.get('beneficiary_id'), attrs.get('staff_id')
        if beneficiary and staff:
            raise serializers.ValidationError('A session has either a beneficiary or a staff member, not both')
        if not self.partial and not (beneficiary or staff):
            raise serializers.ValidationError('A session needs a beneficiary or a staff member')
        # On partial updates a reason already stored on the session is checked by the view.
        reason_known = not self.partial or 'cancellation_reason' in attrs
        if attrs.get('status') == 'CANCELED' and reason_known and not attrs.get('cancellation_reason'):
            raise serializers.ValidationError({'cancellationReason': 'A reason is required to cancel a session'})
        session_for = attrs.pop('sessionFor', None)
        session_type = attrs.get('session_type')
        if self.partial and session_for is None:
            # No audience given: any known type is kept as sent.
            if session_type and session_type not in ALL_SESSION_TYPES:
                raise serializers.ValidationError({'sessionType': f"Unknown session type '{session_type}'"})
        else:
            attrs['session_type'] = resolve_session_type(session_for, session_type)
        return attrs
