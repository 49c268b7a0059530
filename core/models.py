"""
Database models for the wellness admin backend.

These models capture the entities the admin dashboard manages: client
organisations and their staff, the beneficiaries attached to staff,
service providers, the service catalogue (categories, services and
interventions), the contracts that entitle clients to services and the
sessions booked against them.  Most entities are soft-deleted:
``deleted_at`` marks a row as logically absent while keeping it for
history and audit.
"""
from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.db.models.functions import Lower


def _choices(*values: str) -> list[tuple[str, str]]:
    return [(v, v.replace('_', ' ').title()) for v in values]


BASE_STATUS_CHOICES = _choices('ACTIVE', 'INACTIVE', 'PENDING', 'ARCHIVED', 'DELETED')
CONTACT_METHOD_CHOICES = _choices('EMAIL', 'PHONE', 'SMS', 'WHATSAPP', 'OTHER')
WORK_STATUS_CHOICES = _choices('ACTIVE', 'INACTIVE', 'ON_LEAVE', 'TERMINATED', 'SUSPENDED', 'RESIGNED')
PROVIDER_TYPE_CHOICES = _choices('COUNSELOR', 'CLINIC', 'HOTLINE', 'COACH', 'OTHER')
PROVIDER_ENTITY_TYPE_CHOICES = _choices('INDIVIDUAL', 'COMPANY')
RELATION_CHOICES = _choices(
    'CHILD', 'SPOUSE', 'PARENT', 'SIBLING', 'GRANDPARENT',
    'GUARDIAN', 'FRIEND', 'NEIGHBOR', 'COUSIN', 'OTHER',
)
MANAGEMENT_LEVEL_CHOICES = _choices('JUNIOR', 'MID', 'SENIOR', 'EXECUTIVE', 'OTHER')
EMPLOYMENT_TYPE_CHOICES = _choices('FULL_TIME', 'PART_TIME', 'CONTRACT', 'TEMPORARY', 'CONSULTANT')
EDUCATION_LEVEL_CHOICES = _choices('HIGH_SCHOOL', 'DIPLOMA', 'BACHELORS', 'MASTERS', 'PHD')
MARITAL_STATUS_CHOICES = _choices('SINGLE', 'MARRIED', 'DIVORCED', 'WIDOWED')
LANGUAGE_CHOICES = _choices('ENGLISH', 'SPANISH', 'FRENCH', 'GERMAN', 'OTHER')
SESSION_STATUS_CHOICES = _choices(
    'DRAFT', 'UNCONFIRMED', 'SCHEDULED', 'RESCHEDULED', 'COMPLETED', 'CANCELED', 'NO_SHOW',
)
CONTRACT_STATUS_CHOICES = _choices('ACTIVE', 'PENDING', 'EXPIRED', 'TERMINATED', 'RENEWED')
PAYMENT_STATUS_CHOICES = _choices('PENDING', 'PAID', 'PARTIAL', 'OVERDUE', 'CANCELED')
ASSIGNMENT_STATUS_CHOICES = _choices('PENDING', 'ACTIVE', 'ON_HOLD', 'COMPLETED', 'CANCELED')
FREQUENCY_CHOICES = _choices('ONE_TIME', 'WEEKLY', 'BIWEEKLY', 'MONTHLY', 'QUARTERLY', 'ANNUALLY')


def choice_values(choices: list[tuple[str, str]]) -> list[str]:
    return [value for value, _ in choices]


class TimestampedModel(models.Model):
    """Common bookkeeping columns shared by every entity."""
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class SoftDeleteModel(TimestampedModel):
    """An entity that is hidden rather than removed when deleted."""
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class Industry(SoftDeleteModel):
    """Hierarchical industry classification used to categorise clients.

    Top-level industries (e.g. ``AGR``) own child industries
    (e.g. ``AGR-CRP``) through the self-referential ``parent`` link.
    """
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=32, unique=True, null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    external_id = models.CharField(max_length=64, null=True, blank=True)
    parent = models.ForeignKey(
        'self', null=True, blank=True, on_delete=models.SET_NULL, related_name='children'
    )

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'industries'
        constraints = [
            models.UniqueConstraint(
                fields=['name'], condition=Q(deleted_at__isnull=True), name='uniq_live_industry_name'
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.code})" if self.code else self.name


class Client(SoftDeleteModel):
    """A client organisation whose staff receive wellness services."""
    name = models.CharField(max_length=255)
    email = models.EmailField(null=True, blank=True, db_index=True)
    phone = models.CharField(max_length=32, null=True, blank=True)
    website = models.URLField(null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    billing_address = models.TextField(null=True, blank=True)
    tax_id = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    contact_person = models.CharField(max_length=255, null=True, blank=True)
    contact_email = models.EmailField(null=True, blank=True)
    contact_phone = models.CharField(max_length=32, null=True, blank=True)
    industry = models.ForeignKey(
        Industry, null=True, blank=True, on_delete=models.SET_NULL, related_name='clients'
    )
    status = models.CharField(max_length=16, choices=BASE_STATUS_CHOICES, default='ACTIVE', db_index=True)
    preferred_contact_method = models.CharField(
        max_length=16, choices=CONTACT_METHOD_CHOICES, null=True, blank=True
    )
    timezone = models.CharField(max_length=64, null=True, blank=True)
    is_verified = models.BooleanField(default=False, db_index=True)
    notes = models.TextField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                Lower('email'),
                condition=Q(deleted_at__isnull=True) & ~Q(email=''),
                name='uniq_live_client_email',
            ),
            models.UniqueConstraint(
                fields=['tax_id'],
                condition=Q(deleted_at__isnull=True) & ~Q(tax_id=''),
                name='uniq_live_client_tax_id',
            ),
        ]

    def __str__(self) -> str:
        return self.name


class Profile(TimestampedModel):
    """Personal details shared by staff members, beneficiaries and guardians."""
    full_name = models.CharField(max_length=255)
    preferred_name = models.CharField(max_length=255, null=True, blank=True)
    email = models.EmailField(null=True, blank=True, db_index=True)
    phone = models.CharField(max_length=32, null=True, blank=True)
    dob = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=16, null=True, blank=True)
    nationality = models.CharField(max_length=64, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    emergency_contact_name = models.CharField(max_length=255, null=True, blank=True)
    emergency_contact_phone = models.CharField(max_length=32, null=True, blank=True)
    emergency_contact_email = models.EmailField(null=True, blank=True)
    preferred_language = models.CharField(max_length=16, choices=LANGUAGE_CHOICES, null=True, blank=True)
    preferred_contact_method = models.CharField(
        max_length=16, choices=CONTACT_METHOD_CHOICES, null=True, blank=True
    )

    def __str__(self) -> str:
        return self.full_name


class Staff(SoftDeleteModel):
    """An employee of a client organisation."""
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='staff')
    profile = models.ForeignKey(Profile, on_delete=models.PROTECT, related_name='staff_roles')
    job_title = models.CharField(max_length=255, blank=True, default='')
    company_staff_id = models.CharField(max_length=64, null=True, blank=True)
    management_level = models.CharField(max_length=16, choices=MANAGEMENT_LEVEL_CHOICES, default='OTHER')
    employment_type = models.CharField(max_length=16, choices=EMPLOYMENT_TYPE_CHOICES, null=True, blank=True)
    education_level = models.CharField(max_length=16, choices=EDUCATION_LEVEL_CHOICES, null=True, blank=True)
    marital_status = models.CharField(max_length=16, choices=MARITAL_STATUS_CHOICES, null=True, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=WORK_STATUS_CHOICES, default='ACTIVE', db_index=True)
    qualifications = models.JSONField(default=list, blank=True)
    specializations = models.JSONField(default=list, blank=True)

    class Meta:
        verbose_name_plural = 'staff'
        constraints = [
            models.UniqueConstraint(
                fields=['client', 'profile'],
                condition=Q(deleted_at__isnull=True),
                name='uniq_live_staff_per_client',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.profile} @ {self.client}"


class Beneficiary(SoftDeleteModel):
    """A dependant of a staff member who may receive services.

    A beneficiary is always attached to the staff member through whom
    they are eligible and may additionally name a guardian profile.
    """
    profile = models.ForeignKey(Profile, on_delete=models.PROTECT, related_name='beneficiary_records')
    staff = models.ForeignKey(Staff, on_delete=models.CASCADE, related_name='beneficiaries')
    guardian = models.ForeignKey(
        Profile, null=True, blank=True, on_delete=models.SET_NULL, related_name='guarded_beneficiaries'
    )
    relation = models.CharField(max_length=16, choices=RELATION_CHOICES)
    relationship_details = models.TextField(null=True, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    is_employed = models.BooleanField(null=True, blank=True)
    is_student = models.BooleanField(null=True, blank=True)
    vulnerability_flag = models.BooleanField(null=True, blank=True)
    is_staff_link = models.BooleanField(default=False)
    status = models.CharField(max_length=16, choices=BASE_STATUS_CHOICES, default='ACTIVE', db_index=True)
    last_service_date = models.DateTimeField(null=True, blank=True)
    preferred_language = models.CharField(max_length=16, choices=LANGUAGE_CHOICES, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name_plural = 'beneficiaries'

    def __str__(self) -> str:
        return f"{self.profile} ({self.relation} of {self.staff_id})"


class Provider(SoftDeleteModel):
    """An individual or company offering services and interventions."""
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=16, choices=PROVIDER_TYPE_CHOICES, null=True, blank=True)
    entity_type = models.CharField(max_length=16, choices=PROVIDER_ENTITY_TYPE_CHOICES, default='INDIVIDUAL')
    contact_email = models.EmailField()
    contact_phone = models.CharField(max_length=32, null=True, blank=True)
    location = models.CharField(max_length=255, null=True, blank=True)
    qualifications = models.JSONField(default=list, blank=True)
    specializations = models.JSONField(default=list, blank=True)
    availability = models.JSONField(null=True, blank=True)
    rating = models.FloatField(null=True, blank=True)
    is_verified = models.BooleanField(default=False, db_index=True)
    status = models.CharField(max_length=16, choices=WORK_STATUS_CHOICES, default='ACTIVE', db_index=True)

    def __str__(self) -> str:
        return self.name


class ServiceCategory(SoftDeleteModel):
    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name_plural = 'service categories'
        constraints = [
            models.UniqueConstraint(
                fields=['name'], condition=Q(deleted_at__isnull=True), name='uniq_live_category_name'
            ),
        ]

    def __str__(self) -> str:
        return self.name


class CatalogItem(SoftDeleteModel):
    """Attributes shared by services and the interventions nested under them."""
    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=BASE_STATUS_CHOICES, default='ACTIVE', db_index=True)
    duration = models.PositiveIntegerField(null=True, blank=True, help_text="Minutes")
    capacity = models.PositiveIntegerField(null=True, blank=True)
    prerequisites = models.TextField(null=True, blank=True)
    is_public = models.BooleanField(default=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    class Meta:
        abstract = True

    def __str__(self) -> str:
        return self.name


class Service(CatalogItem):
    category = models.ForeignKey(
        ServiceCategory, null=True, blank=True, on_delete=models.SET_NULL, related_name='services'
    )


class Intervention(CatalogItem):
    """A specific bookable offering nested under a service."""
    service = models.ForeignKey(Service, on_delete=models.CASCADE, related_name='interventions')
    provider = models.ForeignKey(
        Provider, null=True, blank=True, on_delete=models.SET_NULL, related_name='interventions'
    )


class Contract(SoftDeleteModel):
    """A service agreement with a client covering a period of time."""
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='contracts')
    start_date = models.DateField()
    end_date = models.DateField()
    renewal_date = models.DateField(null=True, blank=True)
    billing_rate = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    is_renewable = models.BooleanField(default=True)
    is_auto_renew = models.BooleanField(default=False)
    payment_status = models.CharField(max_length=16, choices=PAYMENT_STATUS_CHOICES, default='PENDING')
    payment_frequency = models.CharField(max_length=32, null=True, blank=True)
    payment_terms = models.TextField(null=True, blank=True)
    currency = models.CharField(max_length=8, default='UGX')
    document_url = models.URLField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=CONTRACT_STATUS_CHOICES, default='ACTIVE', db_index=True)
    signed_by = models.CharField(max_length=255, null=True, blank=True)
    signed_at = models.DateTimeField(null=True, blank=True)
    termination_reason = models.TextField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    class Meta:
        constraints = [
            models.CheckConstraint(condition=Q(end_date__gt=F('start_date')), name='contract_dates_ordered'),
        ]

    def __str__(self) -> str:
        return f"Contract {self.pk} for {self.client} ({self.start_date} to {self.end_date})"


class ServiceAssignment(SoftDeleteModel):
    """A service a client is entitled to under one of its contracts.

    ``client`` always mirrors ``contract.client`` so assignments can be
    listed per client without a join.
    """
    service = models.ForeignKey(Service, on_delete=models.PROTECT, related_name='assignments')
    contract = models.ForeignKey(Contract, on_delete=models.CASCADE, related_name='service_assignments')
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='service_assignments')
    status = models.CharField(max_length=16, choices=ASSIGNMENT_STATUS_CHOICES, default='PENDING', db_index=True)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    frequency = models.CharField(max_length=16, choices=FREQUENCY_CHOICES, default='MONTHLY')

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=Q(end_date__isnull=True) | Q(end_date__gte=F('start_date')),
                name='assignment_dates_ordered',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.service} for {self.client} ({self.frequency})"


class Session(SoftDeleteModel):
    """A booked session of a service delivered by a provider.

    Each session has exactly one recipient: either a beneficiary or a
    staff member.  The check constraint enforces this at the database
    level in addition to request validation.
    """
    service = models.ForeignKey(Service, on_delete=models.PROTECT, related_name='sessions')
    intervention = models.ForeignKey(
        Intervention, null=True, blank=True, on_delete=models.SET_NULL, related_name='sessions'
    )
    provider = models.ForeignKey(Provider, on_delete=models.PROTECT, related_name='sessions')
    client = models.ForeignKey(
        Client, null=True, blank=True, on_delete=models.SET_NULL, related_name='sessions'
    )
    beneficiary = models.ForeignKey(
        Beneficiary, null=True, blank=True, on_delete=models.CASCADE, related_name='sessions'
    )
    staff = models.ForeignKey(
        Staff, null=True, blank=True, on_delete=models.CASCADE, related_name='sessions'
    )
    scheduled_at = models.DateTimeField(db_index=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=SESSION_STATUS_CHOICES, default='SCHEDULED', db_index=True)
    notes = models.TextField(null=True, blank=True)
    feedback = models.TextField(null=True, blank=True)
    duration = models.PositiveIntegerField(null=True, blank=True, help_text="Minutes")
    location = models.CharField(max_length=255, null=True, blank=True)
    cancellation_reason = models.TextField(null=True, blank=True)
    reschedule_count = models.PositiveIntegerField(default=0)
    is_group_session = models.BooleanField(default=False)
    session_type = models.CharField(max_length=32, null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['provider', 'scheduled_at'], name='session_provider_time_idx'),
            models.Index(fields=['status', 'scheduled_at'], name='session_status_time_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(beneficiary__isnull=False, staff__isnull=True)
                    | Q(beneficiary__isnull=True, staff__isnull=False)
                ),
                name='session_single_recipient',
            ),
        ]

    def __str__(self) -> str:
        return f"Session {self.pk} {self.status} @ {self.scheduled_at:%F %H:%M}"


class SessionFeedback(TimestampedModel):
    session = models.ForeignKey(Session, on_delete=models.CASCADE, related_name='feedback_entries')
    rating = models.PositiveSmallIntegerField()
    comment = models.TextField(null=True, blank=True)

    class Meta:
        constraints = [
            models.CheckConstraint(condition=Q(rating__gte=1, rating__lte=5), name='feedback_rating_range'),
        ]

    def __str__(self) -> str:
        return f"Feedback {self.rating}/5 on session {self.session_id}"


class AuditEvent(models.Model):
    """Records who changed which entity and how."""
    ACTION_CHOICES = _choices('CREATE', 'UPDATE', 'DELETE')

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=16, choices=ACTION_CHOICES)
    entity_type = models.CharField(max_length=64)
    entity_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    ip = models.GenericIPAddressField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_time_idx'),
            models.Index(fields=['entity_type', 'entity_id', 'created_at'], name='audit_entity_time_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action} {self.entity_type}:{self.entity_id} by {self.user_id}"
