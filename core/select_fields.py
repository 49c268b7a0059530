"""
Field-selection profiles.

A profile is a declarative, read-only tree describing which columns and
related records an endpoint returns:

* ``True`` selects a scalar column (foreign keys by their ``*_id`` attname);
* ``{"select": {...}}`` selects a relation, and to-many relations may add
  ``"where"``, ``"order_by"`` and ``"take"``;
* ``"_count": {"select": {"relation": True}}`` adds related-row counts.

Every ``*_WITH_RELATIONS`` profile spreads its base profile, so it always
returns at least the base profile's fields.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from django.core.exceptions import FieldDoesNotExist, ImproperlyConfigured

COUNT_KEY = '_count'
RELATION_OPTIONS = ('where', 'order_by', 'take')


def freeze(tree: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return a read-only deep copy of ``tree``."""
    frozen = {}
    for key, value in tree.items():
        frozen[key] = freeze(value) if isinstance(value, Mapping) else value
    return MappingProxyType(frozen)


def fields(*names: str) -> dict:
    return {name: True for name in names}


def relation(select: Mapping[str, Any], **options: Any) -> dict:
    unknown = set(options) - set(RELATION_OPTIONS)
    if unknown:
        raise ImproperlyConfigured(f"unknown relation options: {sorted(unknown)}")
    return {'select': select, **{k: v for k, v in options.items() if v is not None}}


def counts(*relations: str) -> dict:
    return {COUNT_KEY: {'select': fields(*relations)}}


def validate_profile(model, profile: Mapping[str, Any]) -> None:
    """Check every key of ``profile`` against ``model``'s fields.

    Raises ``ImproperlyConfigured`` on an unknown field, a relation
    selected as a scalar, or a count over something that is not a
    to-many relation.
    """
    for key, spec in profile.items():
        if key == COUNT_KEY:
            for rel in spec['select']:
                field = _get_field(model, rel)
                if not (field.one_to_many or field.many_to_many):
                    raise ImproperlyConfigured(f"{model.__name__}.{rel} is not a to-many relation")
            continue
        field = _get_field(model, key)
        if spec is True:
            if field.is_relation and key != field.attname:
                raise ImproperlyConfigured(
                    f"{model.__name__}.{key} is a relation; select it with a nested select"
                )
            continue
        if not field.is_relation:
            raise ImproperlyConfigured(f"{model.__name__}.{key} is not a relation")
        validate_profile(field.related_model, spec['select'])


def _get_field(model, name):
    try:
        return model._meta.get_field(name)
    except FieldDoesNotExist as exc:
        raise ImproperlyConfigured(f"{model.__name__} has no field {name!r}") from exc


_TIMESTAMPS = fields('metadata', 'created_at', 'updated_at')
_NAMED = fields('id', 'name')

INDUSTRY = freeze({
    **fields('id', 'name', 'code', 'description', 'external_id', 'parent_id'),
    **_TIMESTAMPS,
    **counts('children', 'clients'),
})

INDUSTRY_WITH_RELATIONS = freeze({
    **INDUSTRY,
    'parent': relation(fields('id', 'name', 'code')),
    'children': relation(fields('id', 'name', 'code', 'description'), order_by={'name': 'asc'}),
})

CLIENT = freeze({
    **fields(
        'id', 'name', 'email', 'phone', 'website', 'address', 'billing_address', 'tax_id',
        'contact_person', 'contact_email', 'contact_phone', 'industry_id', 'status',
        'preferred_contact_method', 'timezone', 'is_verified', 'notes',
    ),
    'industry': relation(fields('id', 'name', 'code')),
    **_TIMESTAMPS,
    **counts('staff', 'sessions'),
})

PROFILE = freeze(fields(
    'id', 'full_name', 'preferred_name', 'email', 'phone', 'dob', 'gender', 'nationality',
    'address', 'emergency_contact_name', 'emergency_contact_phone', 'emergency_contact_email',
    'preferred_language', 'preferred_contact_method',
))

_SESSION_SUMMARY = {
    **fields('id', 'scheduled_at', 'status', 'session_type'),
    'service': relation(_NAMED),
}

STAFF = freeze({
    **fields(
        'id', 'client_id', 'job_title', 'company_staff_id', 'management_level', 'employment_type',
        'education_level', 'marital_status', 'start_date', 'end_date', 'status',
        'qualifications', 'specializations',
    ),
    'profile': relation(PROFILE),
    **_TIMESTAMPS,
    **counts('beneficiaries', 'sessions'),
})

STAFF_WITH_RELATIONS = freeze({
    **STAFF,
    'client': relation(_NAMED),
    'beneficiaries': relation(
        {**fields('id', 'relation', 'status'), 'profile': relation(fields('id', 'full_name'))},
        order_by={'created_at': 'asc'},
    ),
    'sessions': relation(_SESSION_SUMMARY, order_by={'scheduled_at': 'desc'}, take=10),
})

CLIENT_WITH_RELATIONS = freeze({
    **CLIENT,
    'staff': relation(
        {
            **fields('id', 'job_title', 'status'),
            'profile': relation(fields('id', 'full_name', 'email')),
        },
        order_by={'created_at': 'desc'},
        take=10,
    ),
    'sessions': relation(_SESSION_SUMMARY, order_by={'scheduled_at': 'desc'}, take=10),
    'contracts': relation(
        fields('id', 'start_date', 'end_date', 'status', 'payment_status'),
        order_by={'start_date': 'desc'},
    ),
})

BENEFICIARY = freeze({
    **fields(
        'id', 'staff_id', 'relation', 'relationship_details', 'date_of_birth', 'is_employed',
        'is_student', 'vulnerability_flag', 'is_staff_link', 'status', 'last_service_date',
        'preferred_language', 'notes',
    ),
    'profile': relation(PROFILE),
    'guardian': relation(fields('id', 'full_name', 'phone', 'email')),
    **_TIMESTAMPS,
})

BENEFICIARY_WITH_RELATIONS = freeze({
    **BENEFICIARY,
    'staff': relation({
        **fields('id', 'job_title', 'client_id'),
        'profile': relation(fields('id', 'full_name')),
    }),
    'sessions': relation(_SESSION_SUMMARY, order_by={'scheduled_at': 'desc'}, take=10),
    **counts('sessions'),
})

PROVIDER = freeze({
    **fields(
        'id', 'name', 'type', 'entity_type', 'contact_email', 'contact_phone', 'location',
        'qualifications', 'specializations', 'availability', 'rating', 'is_verified', 'status',
    ),
    **_TIMESTAMPS,
    **counts('interventions', 'sessions'),
})

PROVIDER_WITH_RELATIONS = freeze({
    **PROVIDER,
    'interventions': relation(
        {**fields('id', 'name', 'status'), 'service': relation(_NAMED)},
        order_by={'name': 'asc'},
    ),
    'sessions': relation(_SESSION_SUMMARY, order_by={'scheduled_at': 'desc'}, take=10),
})

CATEGORY = freeze({
    **fields('id', 'name', 'description'),
    **_TIMESTAMPS,
    **counts('services'),
})

CATEGORY_WITH_SERVICES = freeze({
    **CATEGORY,
    'services': relation(fields('id', 'name', 'status', 'price', 'is_public'), order_by={'name': 'asc'}),
})

_CATALOG_FIELDS = fields(
    'id', 'name', 'description', 'status', 'duration', 'capacity', 'prerequisites', 'is_public', 'price',
)

SERVICE = freeze({
    **_CATALOG_FIELDS,
    'category_id': True,
    'category': relation(_NAMED),
    **_TIMESTAMPS,
    **counts('interventions', 'sessions'),
})

SERVICE_WITH_RELATIONS = freeze({
    **SERVICE,
    'interventions': relation(
        {**fields('id', 'name', 'status', 'price'), 'provider': relation(_NAMED)},
        order_by={'name': 'asc'},
    ),
})

INTERVENTION = freeze({
    **_CATALOG_FIELDS,
    **fields('service_id', 'provider_id'),
    'service': relation(_NAMED),
    'provider': relation(_NAMED),
    **_TIMESTAMPS,
})

SESSION = freeze({
    **fields(
        'id', 'scheduled_at', 'completed_at', 'status', 'duration', 'location', 'session_type',
        'is_group_session', 'reschedule_count', 'notes', 'cancellation_reason',
        'service_id', 'provider_id', 'client_id', 'staff_id', 'beneficiary_id', 'intervention_id',
    ),
    'service': relation(_NAMED),
    'intervention': relation(_NAMED),
    'provider': relation(_NAMED),
    'client': relation(_NAMED),
    'staff': relation({**fields('id', 'job_title'), 'profile': relation(fields('id', 'full_name'))}),
    'beneficiary': relation({**fields('id', 'relation'), 'profile': relation(fields('id', 'full_name'))}),
    **fields('created_at', 'updated_at'),
})

SESSION_WITH_RELATIONS = freeze({
    **SESSION,
    **fields('feedback', 'metadata'),
    'feedback_entries': relation(fields('id', 'rating', 'comment', 'created_at'), order_by={'created_at': 'desc'}),
})

CONTRACT = freeze({
    **fields(
        'id', 'client_id', 'start_date', 'end_date', 'renewal_date', 'billing_rate', 'currency',
        'is_renewable', 'is_auto_renew', 'payment_status', 'payment_frequency', 'payment_terms',
        'document_url', 'status', 'signed_by', 'signed_at', 'termination_reason', 'notes',
    ),
    'client': relation(_NAMED),
    **_TIMESTAMPS,
    **counts('service_assignments'),
})

CONTRACT_WITH_RELATIONS = freeze({
    **CONTRACT,
    'service_assignments': relation(
        {**fields('id', 'status', 'start_date', 'end_date', 'frequency'), 'service': relation(_NAMED)},
        order_by={'start_date': 'asc'},
    ),
})

ASSIGNMENT = freeze({
    **fields('id', 'service_id', 'contract_id', 'client_id', 'status', 'start_date', 'end_date', 'frequency'),
    'service': relation(fields('id', 'name', 'description')),
    'client': relation(_NAMED),
    **_TIMESTAMPS,
})

ASSIGNMENT_WITH_RELATIONS = freeze({
    **ASSIGNMENT,
    'contract': relation(fields(
        'id', 'start_date', 'end_date', 'status', 'billing_rate', 'currency', 'payment_status',
    )),
})

FEEDBACK = freeze({
    **fields('id', 'session_id', 'rating', 'comment', 'created_at'),
    'session': relation({
        **fields('id', 'scheduled_at', 'status'),
        'service': relation(_NAMED),
        'provider': relation(_NAMED),
    }),
})

AUDIT_EVENT = freeze({
    **fields('id', 'user_id', 'action', 'entity_type', 'entity_id', 'detail', 'ip', 'created_at'),
    'user': relation(fields('id', 'username')),
})

BASE_PROFILES = {
    'INDUSTRY': INDUSTRY,
    'CLIENT': CLIENT,
    'STAFF': STAFF,
    'BENEFICIARY': BENEFICIARY,
    'PROVIDER': PROVIDER,
    'CATEGORY': CATEGORY,
    'SERVICE': SERVICE,
    'SESSION': SESSION,
    'CONTRACT': CONTRACT,
    'ASSIGNMENT': ASSIGNMENT,
}

EXTENDED_PROFILES = {
    'INDUSTRY': INDUSTRY_WITH_RELATIONS,
    'CLIENT': CLIENT_WITH_RELATIONS,
    'STAFF': STAFF_WITH_RELATIONS,
    'BENEFICIARY': BENEFICIARY_WITH_RELATIONS,
    'PROVIDER': PROVIDER_WITH_RELATIONS,
    'CATEGORY': CATEGORY_WITH_SERVICES,
    'SERVICE': SERVICE_WITH_RELATIONS,
    'SESSION': SESSION_WITH_RELATIONS,
    'CONTRACT': CONTRACT_WITH_RELATIONS,
    'ASSIGNMENT': ASSIGNMENT_WITH_RELATIONS,
}
