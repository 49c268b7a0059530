"""
Session booking rules.

A session always has exactly one recipient.  When the recipient is
known the owning client is derived from it, so a session can never
point at one client while serving another client's staff.
"""
from typing import Optional

from django.db import transaction
from django.utils import timezone

from core import repositories as repo
from core import select_fields as sf
from core.exceptions import NotFoundError, ValidationError


def _require(client, pk, label: str, select=None) -> dict:
    row = client.find_unique({'id': pk}, select=select or {'id': True})
    if row is None:
        raise NotFoundError(f'{label} not found')
    return row


def _recipient_client(staff_id: Optional[int], beneficiary_id: Optional[int]) -> Optional[int]:
    if staff_id:
        return _require(repo.staff, staff_id, 'Staff', {'client_id': True})['clientId']
    if beneficiary_id:
        row = _require(repo.beneficiaries, beneficiary_id, 'Beneficiary', {'staff': {'select': {'client_id': True}}})
        return row['staff']['clientId']
    return None


def _check_references(data: dict, service_id: int) -> None:
    if 'service_id' in data:
        _require(repo.services, data['service_id'], 'Service')
    if 'provider_id' in data:
        _require(repo.providers, data['provider_id'], 'Provider')
    if data.get('intervention_id'):
        intervention = _require(repo.interventions, data['intervention_id'], 'Intervention', {'service_id': True})
        if intervention['serviceId'] != service_id:
            raise ValidationError('Intervention does not belong to the selected service')
    if data.get('client_id'):
        _require(repo.clients, data['client_id'], 'Client')


def _link_client(data: dict, staff_id, beneficiary_id, current_client=None) -> None:
    owner = _recipient_client(staff_id, beneficiary_id)
    requested = data.get('client_id', current_client)
    if owner is not None and requested is not None and requested != owner:
        raise ValidationError("The recipient does not belong to this client")
    if owner is not None:
        data['client_id'] = owner


def create_session(validated: dict) -> dict:
    data = dict(validated)
    _check_references(data, data['service_id'])
    _link_client(data, data.get('staff_id'), data.get('beneficiary_id'))
    if data.get('status') == 'COMPLETED' and not data.get('completed_at'):
        data['completed_at'] = timezone.now()
    return repo.sessions.create(data, select=sf.SESSION_WITH_RELATIONS)


def update_session(session_id: int, validated: dict) -> dict:
    data = dict(validated)
    with transaction.atomic():
        current = repo.sessions.find_unique({'id': session_id}, select=sf.fields(
            'service_id', 'client_id', 'staff_id', 'beneficiary_id', 'scheduled_at', 'status',
            'cancellation_reason', 'reschedule_count', 'completed_at',
        ), for_update=True)
        if current is None:
            raise NotFoundError('Session not found')

        if data.get('beneficiary_id'):
            data.setdefault('staff_id', None)
        if data.get('staff_id'):
            data.setdefault('beneficiary_id', None)
        staff_id = data.get('staff_id', current['staffId'])
        beneficiary_id = data.get('beneficiary_id', current['beneficiaryId'])
        if bool(staff_id) == bool(beneficiary_id):
            raise ValidationError('A session needs exactly one recipient: a beneficiary or a staff member')

        _check_references(data, data.get('service_id', current['serviceId']))
        if 'staff_id' in data or 'beneficiary_id' in data or 'client_id' in data:
            _link_client(data, staff_id, beneficiary_id, current['clientId'])

        status = data.get('status', current['status'])
        reason = data.get('cancellation_reason', current['cancellationReason'])
        if status == 'CANCELED' and not reason:
            raise ValidationError('A reason is required to cancel a session',
                                  {'cancellationReason': ['A reason is required to cancel a session']})
        if 'scheduled_at' in data and data['scheduled_at'] != current['scheduledAt']:
            data['reschedule_count'] = current['rescheduleCount'] + 1
        if data.get('status') == 'COMPLETED' and not (data.get('completed_at') or current['completedAt']):
            data['completed_at'] = timezone.now()

        return repo.sessions.update({'id': session_id}, data, select=sf.SESSION_WITH_RELATIONS)
