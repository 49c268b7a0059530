from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.urls import reverse

from core.models import AuditEvent, Client, Contract, Profile, Provider, Service, ServiceAssignment, Session, Staff

pytestmark = pytest.mark.django_db


@pytest.fixture
def acme():
    return Client.objects.create(name='Acme Corp')


@pytest.fixture
def globex():
    return Client.objects.create(name='Globex')


@pytest.fixture
def counselling():
    return Service.objects.create(name='Counselling', description='One-to-one support')


@pytest.fixture
def contract(acme):
    return Contract.objects.create(client=acme, start_date=date(2030, 1, 1), end_date=date(2030, 12, 31))


def contract_payload(**extra):
    return {'startDate': '2030-01-01', 'endDate': '2030-12-31', **extra}


def assign(contract, service, **kwargs):
    kwargs.setdefault('start_date', date(2030, 1, 1))
    return ServiceAssignment.objects.create(contract=contract, client=contract.client, service=service, **kwargs)


def test_create_contract(api, acme):
    r = api.post(reverse('contracts'), contract_payload(clientId=acme.id, billingRate='1500.00', currency='usd'),
                 format='json')
    assert r.status_code == 201
    assert r.data['client'] == {'id': acme.id, 'name': 'Acme Corp'}
    assert r.data['billingRate'] == Decimal('1500.00')
    assert r.data['currency'] == 'USD'
    assert r.data['status'] == 'ACTIVE'
    assert r.data['_count'] == {'serviceAssignments': 0}
    assert r.data['serviceAssignments'] == []
    assert AuditEvent.objects.filter(entity_type='contract', action='CREATE').exists()


def test_create_contract_validation(api, acme):
    r = api.post(reverse('contracts'), contract_payload(), format='json')
    assert r.status_code == 400
    assert 'clientId' in r.data['details']

    r = api.post(reverse('contracts'), contract_payload(clientId=9999), format='json')
    assert r.status_code == 400
    assert 'clientId' in r.data['details']

    r = api.post(reverse('contracts'), contract_payload(clientId=acme.id, endDate='2030-01-01'), format='json')
    assert r.status_code == 400
    assert 'endDate' in r.data['details']

    r = api.post(reverse('contracts'), contract_payload(clientId=acme.id, renewalDate='2030-06-01'), format='json')
    assert r.status_code == 400
    assert 'renewalDate' in r.data['details']


def test_partial_update_checks_stored_dates(api, contract):
    url = reverse('contract-detail', args=[contract.id])
    r = api.put(url, {'endDate': '2029-12-31'}, format='json')
    assert r.status_code == 400
    assert 'endDate' in r.data['details']

    r = api.put(url, {'endDate': '2031-06-30', 'paymentStatus': 'PAID'}, format='json')
    assert r.status_code == 200
    assert r.data['endDate'] == date(2031, 6, 30)
    assert r.data['startDate'] == date(2030, 1, 1)
    assert r.data['paymentStatus'] == 'PAID'


def test_terminating_needs_reason(api, contract):
    url = reverse('contract-detail', args=[contract.id])
    r = api.put(url, {'status': 'TERMINATED'}, format='json')
    assert r.status_code == 400
    assert 'terminationReason' in r.data['details']
    r = api.put(url, {'status': 'TERMINATED', 'terminationReason': 'Budget cut'}, format='json')
    assert r.status_code == 200


def test_list_contracts(api, acme, globex, contract):
    other = Contract.objects.create(
        client=globex, start_date=date(2031, 1, 1), end_date=date(2031, 12, 31), payment_status='OVERDUE'
    )
    r = api.get(reverse('contracts'))
    assert [c['id'] for c in r.data['data']] == [other.id, contract.id]
    r = api.get(reverse('contracts') + f'?clientId={globex.id}')
    assert [c['id'] for c in r.data['data']] == [other.id]
    r = api.get(reverse('contracts') + '?paymentStatus=OVERDUE')
    assert [c['id'] for c in r.data['data']] == [other.id]
    r = api.get(reverse('contracts') + '?search=acme')
    assert [c['id'] for c in r.data['data']] == [contract.id]
    r = api.get(reverse('contracts') + '?status=BOGUS')
    assert r.status_code == 400


def test_client_scoped_contracts(api, acme, globex, contract):
    r = api.post(reverse('client-contracts', args=[globex.id]), contract_payload(clientId=acme.id), format='json')
    assert r.status_code == 201
    assert r.data['clientId'] == globex.id

    r = api.get(reverse('client-contracts', args=[acme.id]))
    assert [c['id'] for c in r.data['data']] == [contract.id]

    r = api.get(reverse('client-contract-detail', args=[globex.id, contract.id]))
    assert r.status_code == 404
    assert r.data == {'error': 'Contract not found'}

    r = api.get(reverse('client-contracts', args=[9999]))
    assert r.status_code == 404


def test_contract_with_assignments_cannot_move_or_be_deleted(api, globex, contract, counselling):
    assignment = assign(contract, counselling, status='ACTIVE')
    url = reverse('contract-detail', args=[contract.id])

    r = api.put(url, {'clientId': globex.id}, format='json')
    assert r.status_code == 400
    assert r.data['error'] == 'Cannot move a contract with service assignments to another client'

    r = api.delete(url)
    assert r.status_code == 400
    assert r.data['error'] == 'Cannot delete contract with active service assignments'

    ServiceAssignment.objects.filter(pk=assignment.pk).update(status='COMPLETED')
    r = api.delete(url)
    assert r.status_code == 204
    assert api.get(url).status_code == 404
    contract.refresh_from_db()
    assert contract.deleted_at is not None


def test_assign_service_under_contract(api, acme, contract, counselling):
    r = api.post(
        reverse('assignments'),
        {'serviceId': counselling.id, 'contractId': contract.id, 'startDate': '2030-02-01', 'frequency': 'WEEKLY'},
        format='json',
    )
    assert r.status_code == 201
    assert r.data['clientId'] == acme.id
    assert r.data['service'] == {'id': counselling.id, 'name': 'Counselling', 'description': 'One-to-one support'}
    assert r.data['contract']['id'] == contract.id
    assert r.data['status'] == 'PENDING'

    detail = api.get(reverse('contract-detail', args=[contract.id]))
    assert detail.data['_count'] == {'serviceAssignments': 1}
    assert detail.data['serviceAssignments'][0]['service'] == {'id': counselling.id, 'name': 'Counselling'}


def test_assignment_requires_frequency_and_known_references(api, contract, counselling):
    body = {'serviceId': counselling.id, 'contractId': contract.id, 'startDate': '2030-02-01'}
    r = api.post(reverse('assignments'), body, format='json')
    assert r.status_code == 400
    assert 'frequency' in r.data['details']

    r = api.post(reverse('assignments'), {**body, 'frequency': 'MONTHLY', 'serviceId': 9999}, format='json')
    assert r.status_code == 404
    assert r.data == {'error': 'Service not found'}

    r = api.post(reverse('assignments'), {**body, 'frequency': 'MONTHLY', 'contractId': 9999}, format='json')
    assert r.status_code == 404
    assert r.data == {'error': 'Contract not found'}

    r = api.post(reverse('assignments'), {**body, 'frequency': 'MONTHLY', 'endDate': '2030-01-15'}, format='json')
    assert r.status_code == 400
    assert 'endDate' in r.data['details']


def test_duplicate_open_assignment_is_conflict(api, contract, counselling):
    assign(contract, counselling)
    body = {'serviceId': counselling.id, 'contractId': contract.id, 'startDate': '2030-02-01', 'frequency': 'WEEKLY'}
    r = api.post(reverse('assignments'), body, format='json')
    assert r.status_code == 409
    assert r.data == {'error': 'Service is already assigned under this contract'}

    r = api.post(reverse('assignments'), {**body, 'status': 'COMPLETED'}, format='json')
    assert r.status_code == 201


def test_client_service_uses_active_contract(api, acme, globex, contract, counselling):
    url = reverse('client-services', args=[acme.id])
    r = api.post(url, {'serviceId': counselling.id, 'startDate': '2030-03-01', 'frequency': 'MONTHLY'}, format='json')
    assert r.status_code == 201
    assert r.data['contractId'] == contract.id
    assert r.data['clientId'] == acme.id

    r = api.post(
        reverse('client-services', args=[globex.id]),
        {'serviceId': counselling.id, 'startDate': '2030-03-01', 'frequency': 'MONTHLY'},
        format='json',
    )
    assert r.status_code == 400
    assert r.data == {'error': 'No active contract found for this client'}

    # another client's contract is not reachable from this client
    r = api.post(
        reverse('client-services', args=[globex.id]),
        {'serviceId': counselling.id, 'contractId': contract.id, 'startDate': '2030-03-01', 'frequency': 'MONTHLY'},
        format='json',
    )
    assert r.status_code == 404

    r = api.get(url)
    assert [a['service']['name'] for a in r.data['data']] == ['Counselling']
    assert api.get(reverse('client-services', args=[globex.id])).data['data'] == []


def test_update_assignment(api, contract, counselling):
    assignment = assign(contract, counselling)
    url = reverse('assignment-detail', args=[assignment.id])
    r = api.put(url, {'status': 'ACTIVE', 'frequency': 'BIWEEKLY'}, format='json')
    assert r.status_code == 200
    assert r.data['status'] == 'ACTIVE'
    assert r.data['frequency'] == 'BIWEEKLY'
    assert r.data['startDate'] == date(2030, 1, 1)

    r = api.put(url, {'endDate': '2029-12-01'}, format='json')
    assert r.status_code == 400
    assert 'endDate' in r.data['details']

    r = api.put(reverse('assignment-detail', args=[9999]), {'status': 'ACTIVE'}, format='json')
    assert r.status_code == 404


def test_assignment_with_sessions_cannot_be_deleted(api, acme, contract, counselling):
    assignment = assign(contract, counselling)
    staff = Staff.objects.create(client=acme, profile=Profile.objects.create(full_name='Jane Doe'))
    provider = Provider.objects.create(name='Calm Minds', contact_email='hello@calmminds.test')
    session = Session.objects.create(
        service=counselling, client=acme, staff=staff, provider=provider,
        scheduled_at=datetime(2030, 1, 5, 10, tzinfo=dt_timezone.utc),
    )
    url = reverse('client-service-detail', args=[acme.id, assignment.id])
    r = api.delete(url)
    assert r.status_code == 400
    assert r.data == {'error': 'Cannot delete assignment with associated sessions'}

    Session.objects.filter(pk=session.pk).delete()
    r = api.delete(url)
    assert r.status_code == 200
    assert r.data['id'] == assignment.id
    assert api.get(url).status_code == 404
