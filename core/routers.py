"""
URL mappings for the wellness admin API.

This module registers all API endpoints with their corresponding view
functions.  Trailing slashes are deliberately omitted because the
dashboard calls the API without them.
"""
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .views import audit, health
from .views.assignments import assignment_detail, assignments, client_service_detail, client_services
from .views.beneficiaries import staff_beneficiaries, staff_beneficiary_detail
from .views.categories import categories, category_detail
from .views.clients import client_detail, clients, clients_stats
from .views.contracts import client_contract_detail, client_contracts, contract_detail, contracts
from .views.feedback import feedback, feedback_detail
from .views.industries import industries, industry_detail
from .views.interventions import intervention_detail, interventions
from .views.providers import provider_detail, providers, providers_stats
from .views.services import service_detail, services
from .views.sessions import session_detail, sessions, sessions_counts
from .views.staff import client_staff, client_staff_detail

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),

    # Token issuing only; sessions are handled by the dashboard
    path('api/auth/token', TokenObtainPairView.as_view(), name='token_obtain'),
    path('api/auth/token/refresh', TokenRefreshView.as_view(), name='token_refresh'),

    # Clients and their people
    path('api/clients', clients, name='clients'),
    path('api/clients/stats', clients_stats, name='clients-stats'),
    path('api/clients/<int:client_id>', client_detail, name='client-detail'),
    path('api/clients/<int:client_id>/staff', client_staff, name='client-staff'),
    path('api/clients/<int:client_id>/staff/<int:staff_id>', client_staff_detail, name='client-staff-detail'),
    path(
        'api/clients/<int:client_id>/staff/<int:staff_id>/beneficiaries',
        staff_beneficiaries,
        name='staff-beneficiaries',
    ),
    path(
        'api/clients/<int:client_id>/staff/<int:staff_id>/beneficiaries/<int:beneficiary_id>',
        staff_beneficiary_detail,
        name='staff-beneficiary-detail',
    ),
    path('api/clients/<int:client_id>/contracts', client_contracts, name='client-contracts'),
    path(
        'api/clients/<int:client_id>/contracts/<int:contract_id>',
        client_contract_detail,
        name='client-contract-detail',
    ),
    path('api/clients/<int:client_id>/services', client_services, name='client-services'),
    path(
        'api/clients/<int:client_id>/services/<int:assignment_id>',
        client_service_detail,
        name='client-service-detail',
    ),

    # Contracts
    path('api/contracts', contracts, name='contracts'),
    path('api/contracts/<int:contract_id>', contract_detail, name='contract-detail'),

    # Reference data
    path('api/industries', industries, name='industries'),
    path('api/industries/<int:industry_id>', industry_detail, name='industry-detail'),

    # Providers
    path('api/providers', providers, name='providers'),
    path('api/providers/stats', providers_stats, name='providers-stats'),
    path('api/providers/<int:provider_id>', provider_detail, name='provider-detail'),

    # Service catalogue and delivery
    path('api/services', services, name='services'),
    path('api/services/categories', categories, name='categories'),
    path('api/services/categories/<int:category_id>', category_detail, name='category-detail'),
    path('api/services/interventions', interventions, name='interventions'),
    path('api/services/interventions/<int:intervention_id>', intervention_detail, name='intervention-detail'),
    path('api/services/sessions', sessions, name='sessions'),
    path('api/services/sessions/counts', sessions_counts, name='sessions-counts'),
    path('api/services/sessions/<int:session_id>', session_detail, name='session-detail'),
    path('api/services/assignments', assignments, name='assignments'),
    path('api/services/assignments/<int:assignment_id>', assignment_detail, name='assignment-detail'),
    path('api/services/feedback', feedback, name='feedback'),
    path('api/services/feedback/<int:feedback_id>', feedback_detail, name='feedback-detail'),
    path('api/services/<int:service_id>', service_detail, name='service-detail'),

    path('api/audit-logs', audit.audit_logs, name='audit-logs'),
]
