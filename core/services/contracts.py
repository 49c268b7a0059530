"""
Contract and service-assignment rules.

An assignment always belongs to the client of its contract; the client
id stored on the assignment is derived from the contract and never
taken from the request.
"""
from typing import Optional

from django.db import transaction

from core import repositories as repo
from core import select_fields as sf
from core.exceptions import ConflictError, NotFoundError, ValidationError

OPEN_ASSIGNMENT_STATUSES = ('PENDING', 'ACTIVE', 'ON_HOLD')


def _contract_where(contract_id: int, client_id: Optional[int]) -> dict:
    where = {'id': contract_id}
    if client_id is not None:
        where['client_id'] = client_id
    return where


def create_contract(validated: dict, client_id: Optional[int] = None) -> dict:
    data = dict(validated)
    if client_id is not None:
        data['client_id'] = client_id
    return repo.contracts.create(data, select=sf.CONTRACT_WITH_RELATIONS)


def update_contract(contract_id: int, validated: dict, client_id: Optional[int] = None) -> dict:
    data = dict(validated)
    with transaction.atomic():
        current = repo.contracts.find_unique(
            _contract_where(contract_id, client_id), select={'client_id': True}, for_update=True
        )
        if current is None:
            raise NotFoundError('Contract not found')
        moving = 'client_id' in data and data['client_id'] != current['clientId']
        if moving and repo.assignments.exists({'contract_id': contract_id}):
            raise ValidationError('Cannot move a contract with service assignments to another client')
        return repo.contracts.update({'id': contract_id}, data, select=sf.CONTRACT_WITH_RELATIONS)


def delete_contract(contract_id: int, client_id: Optional[int] = None) -> dict:
    with transaction.atomic():
        where = _contract_where(contract_id, client_id)
        if not repo.contracts.exists(where):
            raise NotFoundError('Contract not found')
        if repo.assignments.exists({'contract_id': contract_id, 'status': {'in': list(OPEN_ASSIGNMENT_STATUSES)}}):
            raise ValidationError('Cannot delete contract with active service assignments')
        return repo.contracts.delete(where)


def _resolve_contract(contract_id: Optional[int], client_id: Optional[int]) -> dict:
    if contract_id is None:
        contract = repo.contracts.find_first(
            where={'client_id': client_id, 'status': 'ACTIVE'},
            order_by={'start_date': 'desc'},
            select={'id': True, 'client_id': True},
        )
        if contract is None:
            raise ValidationError('No active contract found for this client')
        return contract
    contract = repo.contracts.find_unique(
        _contract_where(contract_id, client_id), select={'id': True, 'client_id': True}
    )
    if contract is None:
        raise NotFoundError('Contract not found')
    return contract


def _check_duplicate(service_id: int, contract_id: int, exclude: Optional[int] = None) -> None:
    where = {
        'service_id': service_id,
        'contract_id': contract_id,
        'status': {'in': list(OPEN_ASSIGNMENT_STATUSES)},
    }
    if exclude is not None:
        where['NOT'] = {'id': exclude}
    if repo.assignments.exists(where):
        raise ConflictError('Service is already assigned under this contract')


def create_assignment(validated: dict, client_id: Optional[int] = None) -> dict:
    data = dict(validated)
    with transaction.atomic():
        contract = _resolve_contract(data.get('contract_id'), client_id)
        if not repo.services.exists({'id': data['service_id']}):
            raise NotFoundError('Service not found')
        data['contract_id'] = contract['id']
        data['client_id'] = contract['clientId']
        if data.get('status', 'PENDING') in OPEN_ASSIGNMENT_STATUSES:
            _check_duplicate(data['service_id'], contract['id'])
        return repo.assignments.create(data, select=sf.ASSIGNMENT_WITH_RELATIONS)


def update_assignment(assignment_id: int, validated: dict, client_id: Optional[int] = None) -> dict:
    data = dict(validated)
    where = {'id': assignment_id}
    if client_id is not None:
        where['client_id'] = client_id
    with transaction.atomic():
        current = repo.assignments.find_unique(
            where, select={'service_id': True, 'contract_id': True, 'status': True}, for_update=True
        )
        if current is None:
            raise NotFoundError('Service assignment not found')
        if 'service_id' in data and not repo.services.exists({'id': data['service_id']}):
            raise NotFoundError('Service not found')
        if data.get('contract_id'):
            contract = _resolve_contract(data['contract_id'], client_id)
            data['client_id'] = contract['clientId']
        else:
            data.pop('contract_id', None)
        if data.get('status', current['status']) in OPEN_ASSIGNMENT_STATUSES:
            _check_duplicate(
                data.get('service_id', current['serviceId']),
                data.get('contract_id', current['contractId']),
                exclude=assignment_id,
            )
        return repo.assignments.update({'id': assignment_id}, data, select=sf.ASSIGNMENT_WITH_RELATIONS)


def delete_assignment(assignment_id: int, client_id: Optional[int] = None) -> dict:
    where = {'id': assignment_id}
    if client_id is not None:
        where['client_id'] = client_id
    with transaction.atomic():
        current = repo.assignments.find_unique(where, select={'service_id': True, 'client_id': True})
        if current is None:
            raise NotFoundError('Service assignment not found')
        if repo.sessions.exists({'service_id': current['serviceId'], 'client_id': current['clientId']}):
            raise ValidationError('Cannot delete assignment with associated sessions')
        return repo.assignments.delete({'id': assignment_id})
