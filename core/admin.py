"""
Django admin registrations for the core models.

This module hooks the core models into Django's built-in admin
interface so that superusers can inspect and correct data via the
``/admin/`` URL.  Soft-deleted rows stay visible here; filter on
``deleted_at`` to find them.
"""

from django.contrib import admin

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


class SoftDeleteAdmin(admin.ModelAdmin):
    readonly_fields = ('created_at', 'updated_at')

    @admin.display(boolean=True, description='deleted')
    def is_deleted(self, obj):
        return obj.is_deleted


@admin.register(Industry)
class IndustryAdmin(SoftDeleteAdmin):
    list_display = ('id', 'code', 'name', 'parent', 'is_deleted')
    list_filter = ('parent',)
    search_fields = ('name', 'code')


@admin.register(Client)
class ClientAdmin(SoftDeleteAdmin):
    list_display = ('id', 'name', 'email', 'industry', 'status', 'is_verified', 'is_deleted')
    list_filter = ('status', 'is_verified')
    search_fields = ('name', 'email', 'tax_id', 'contact_person')
    raw_id_fields = ('industry',)


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('id', 'full_name', 'email', 'phone')
    search_fields = ('full_name', 'email', 'phone')


@admin.register(Staff)
class StaffAdmin(SoftDeleteAdmin):
    list_display = ('id', 'profile', 'client', 'job_title', 'status', 'is_deleted')
    list_filter = ('status', 'management_level')
    search_fields = ('profile__full_name', 'job_title', 'company_staff_id')
    raw_id_fields = ('client', 'profile')


@admin.register(Beneficiary)
class BeneficiaryAdmin(SoftDeleteAdmin):
    list_display = ('id', 'profile', 'staff', 'relation', 'status', 'is_deleted')
    list_filter = ('relation', 'status')
    raw_id_fields = ('profile', 'staff', 'guardian')


@admin.register(Provider)
class ProviderAdmin(SoftDeleteAdmin):
    list_display = ('id', 'name', 'type', 'entity_type', 'rating', 'is_verified', 'status', 'is_deleted')
    list_filter = ('type', 'entity_type', 'is_verified', 'status')
    search_fields = ('name', 'contact_email')


@admin.register(ServiceCategory)
class ServiceCategoryAdmin(SoftDeleteAdmin):
    list_display = ('id', 'name', 'is_deleted')
    search_fields = ('name',)


@admin.register(Service)
class ServiceAdmin(SoftDeleteAdmin):
    list_display = ('id', 'name', 'category', 'status', 'price', 'is_public', 'is_deleted')
    list_filter = ('status', 'is_public', 'category')
    search_fields = ('name',)


@admin.register(Intervention)
class InterventionAdmin(SoftDeleteAdmin):
    list_display = ('id', 'name', 'service', 'provider', 'status', 'is_deleted')
    list_filter = ('status',)
    search_fields = ('name',)
    raw_id_fields = ('service', 'provider')


@admin.register(Contract)
class ContractAdmin(SoftDeleteAdmin):
    list_display = ('id', 'client', 'start_date', 'end_date', 'status', 'payment_status', 'is_deleted')
    list_filter = ('status', 'payment_status', 'is_renewable')
    search_fields = ('client__name', 'signed_by')
    raw_id_fields = ('client',)


@admin.register(ServiceAssignment)
class ServiceAssignmentAdmin(SoftDeleteAdmin):
    list_display = ('id', 'service', 'client', 'contract', 'status', 'frequency', 'is_deleted')
    list_filter = ('status', 'frequency')
    raw_id_fields = ('service', 'contract', 'client')


@admin.register(Session)
class SessionAdmin(SoftDeleteAdmin):
    list_display = ('id', 'scheduled_at', 'status', 'service', 'provider', 'client', 'is_deleted')
    list_filter = ('status', 'is_group_session')
    date_hierarchy = 'scheduled_at'
    raw_id_fields = ('service', 'intervention', 'provider', 'client', 'beneficiary', 'staff')


@admin.register(SessionFeedback)
class SessionFeedbackAdmin(admin.ModelAdmin):
    list_display = ('id', 'session', 'rating', 'created_at')
    list_filter = ('rating',)
    raw_id_fields = ('session',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'action', 'entity_type', 'entity_id', 'user', 'ip')
    list_filter = ('action', 'entity_type')
    search_fields = ('entity_id',)
    readonly_fields = ('created_at',)
