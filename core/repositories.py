"""
One data-access client per entity, each bound to its default profile.
"""
from __future__ import annotations

from . import select_fields as sf
from .db import ModelClient
from .models import (
    AuditEvent,
    Beneficiary,
    Client,
    Contract,
    Industry,
    Intervention,
    Profile,
    Provider,
    Service,
    ServiceAssignment,
    ServiceCategory,
    Session,
    SessionFeedback,
    Staff,
)

industries = ModelClient(Industry, sf.INDUSTRY)
clients = ModelClient(Client, sf.CLIENT)
profiles = ModelClient(Profile, sf.PROFILE)
staff = ModelClient(Staff, sf.STAFF)
beneficiaries = ModelClient(Beneficiary, sf.BENEFICIARY)
providers = ModelClient(Provider, sf.PROVIDER)
categories = ModelClient(ServiceCategory, sf.CATEGORY)
services = ModelClient(Service, sf.SERVICE)
interventions = ModelClient(Intervention, sf.INTERVENTION)
contracts = ModelClient(Contract, sf.CONTRACT)
assignments = ModelClient(ServiceAssignment, sf.ASSIGNMENT)
sessions = ModelClient(Session, sf.SESSION)
feedback = ModelClient(SessionFeedback, sf.FEEDBACK)
audit_events = ModelClient(AuditEvent, sf.AUDIT_EVENT)
