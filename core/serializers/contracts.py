from rest_framework import serializers

from core.models import (
    ASSIGNMENT_STATUS_CHOICES,
    CONTRACT_STATUS_CHOICES,
    FREQUENCY_CHOICES,
    PAYMENT_STATUS_CHOICES,
    Client,
)

from .common import EntitySerializer, enum, ref, text


class ContractSerializer(EntitySerializer):
    clientId = ref('client_id', required=True)
    startDate = serializers.DateField(source='start_date')
    endDate = serializers.DateField(source='end_date')
    renewalDate = serializers.DateField(required=False, allow_null=True, source='renewal_date')
    billingRate = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, source='billing_rate'
    )
    currency = text(max_length=8, allow_null=False, allow_blank=False)
    isRenewable = serializers.BooleanField(required=False, source='is_renewable')
    isAutoRenew = serializers.BooleanField(required=False, source='is_auto_renew')
    paymentStatus = enum(PAYMENT_STATUS_CHOICES, source='payment_status', allow_null=False)
    paymentFrequency = text(max_length=32, source='payment_frequency')
    paymentTerms = text(source='payment_terms')
    documentUrl = serializers.URLField(required=False, allow_null=True, source='document_url')
    status = enum(CONTRACT_STATUS_CHOICES, allow_null=False)
    signedBy = text(max_length=255, source='signed_by')
    signedAt = serializers.DateTimeField(required=False, allow_null=True, source='signed_at')
    terminationReason = text(source='termination_reason')
    notes = text()

    def validate_clientId(self, v):
        return self.ensure_exists(Client, v, 'Client')

    def validate_currency(self, v):
        return v.upper()

    def validate(self, attrs):
        # On a partial update the stored dates fill the gaps.
        current = self.context.get('current') or {}
        start = attrs.get('start_date', current.get('startDate'))
        end = attrs.get('end_date', current.get('endDate'))
        renewal = attrs.get('renewal_date', current.get('renewalDate'))
        if start and end and end <= start:
            raise serializers.ValidationError({'endDate': 'End date must be after start date'})
        if renewal and end and renewal <= end:
            raise serializers.ValidationError({'renewalDate': 'Renewal date must be after end date'})
        if attrs.get('status') == 'TERMINATED' and not attrs.get(
            'termination_reason', current.get('terminationReason')
        ):
            raise serializers.ValidationError(
                {'terminationReason': 'A reason is required to terminate a contract'}
            )
        return attrs


class ClientContractSerializer(ContractSerializer):
    """Contracts written under ``/clients/<id>/``; the client comes from the URL."""
    clientId = None


class ServiceAssignmentSerializer(EntitySerializer):
    # Service and contract are checked by the service layer so missing ones answer 404.
    serviceId = ref('service_id', required=True)
    contractId = ref('contract_id', required=True)
    status = enum(ASSIGNMENT_STATUS_CHOICES, allow_null=False)
    startDate = serializers.DateField(source='start_date')
    endDate = serializers.DateField(required=False, allow_null=True, source='end_date')
    frequency = enum(FREQUENCY_CHOICES, required=True, allow_null=False)

    def validate(self, attrs):
        current = self.context.get('current') or {}
        start = attrs.get('start_date', current.get('startDate'))
        end = attrs.get('end_date', current.get('endDate'))
        if start and end and end < start:
            raise serializers.ValidationError({'endDate': 'End date cannot be before start date'})
        return attrs


class ClientServiceAssignmentSerializer(ServiceAssignmentSerializer):
    """Without a ``contractId`` the client's active contract is used."""
    contractId = ref('contract_id')
