"""
Staff and beneficiary writes that span more than one table.
"""
from typing import Optional

from django.db import transaction

from core import repositories as repo
from core import select_fields as sf
from core.exceptions import NotFoundError, ValidationError
from core.serializers.staff import split_profile


def _upsert_profile(profile_data: dict, profile_id: Optional[int] = None) -> int:
    """Return the id of the profile to link, creating or refreshing it.

    An explicit ``profile_id`` wins; otherwise a profile with the same
    e-mail is reused and updated, and only then is a new one created.
    """
    if profile_id is None and profile_data.get('email'):
        existing = repo.profiles.find_first(
            where={'email': {'equals': profile_data['email'], 'mode': 'insensitive'}},
            order_by={'id': 'asc'},
            select={'id': True},
        )
        if existing:
            profile_id = existing['id']
    if profile_id is None:
        if not profile_data.get('full_name'):
            raise ValidationError('fullName is required for a new profile')
        return repo.profiles.create(profile_data, select={'id': True})['id']
    if profile_data:
        repo.profiles.update({'id': profile_id}, profile_data, select={'id': True})
    return profile_id


def create_staff(client_id: int, validated: dict) -> dict:
    profile_data, staff_data = split_profile(validated)
    with transaction.atomic():
        profile_id = _upsert_profile(profile_data)
        return repo.staff.create(
            {**staff_data, 'client_id': client_id, 'profile_id': profile_id},
            select=sf.STAFF_WITH_RELATIONS,
        )


def update_staff(client_id: int, staff_id: int, validated: dict) -> dict:
    profile_data, staff_data = split_profile(validated)
    with transaction.atomic():
        current = repo.staff.find_unique({'id': staff_id, 'client_id': client_id}, select={'profile_id': True})
        if current is None:
            raise NotFoundError('Staff not found')
        if profile_data:
            repo.profiles.update({'id': current['profileId']}, profile_data, select={'id': True})
        return repo.staff.update({'id': staff_id}, staff_data, select=sf.STAFF_WITH_RELATIONS)


def create_beneficiary(staff_id: int, validated: dict) -> dict:
    profile_data, data = split_profile(validated)
    profile_id = data.pop('profile_id', None)
    with transaction.atomic():
        profile_id = _upsert_profile(profile_data, profile_id)
        return repo.beneficiaries.create(
            {**data, 'staff_id': staff_id, 'profile_id': profile_id},
            select=sf.BENEFICIARY_WITH_RELATIONS,
        )


def update_beneficiary(staff_id: int, beneficiary_id: int, validated: dict) -> dict:
    profile_data, data = split_profile(validated)
    with transaction.atomic():
        current = repo.beneficiaries.find_unique(
            {'id': beneficiary_id, 'staff_id': staff_id}, select={'profile_id': True}
        )
        if current is None:
            raise NotFoundError('Beneficiary not found')
        if profile_data:
            target = data.get('profile_id') or current['profileId']
            repo.profiles.update({'id': target}, profile_data, select={'id': True})
        return repo.beneficiaries.update({'id': beneficiary_id}, data, select=sf.BENEFICIARY_WITH_RELATIONS)
