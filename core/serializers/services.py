from rest_framework import serializers

from core.models import BASE_STATUS_CHOICES, Provider, ServiceCategory

from .common import EntitySerializer, enum, ref, text


class CategorySerializer(EntitySerializer):
    name = text(max_length=255, required=True)
    description = text()


class CatalogSerializer(EntitySerializer):
    """Fields shared by services and interventions."""
    name = text(max_length=255, required=True)
    description = text()
    status = enum(BASE_STATUS_CHOICES, allow_null=False)
    duration = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    capacity = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    prerequisites = text()
    isPublic = serializers.BooleanField(required=False, source='is_public')
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)


class ServiceSerializer(CatalogSerializer):
    categoryId = ref('category_id')

    def validate_categoryId(self, v):
        return self.ensure_exists(ServiceCategory, v, 'Category')


class InterventionSerializer(CatalogSerializer):
    # The service is checked in the view so that a missing one answers 404.
    serviceId = ref('service_id', required=True)
    providerId = ref('provider_id')

    def validate_providerId(self, v):
        return self.ensure_exists(Provider, v, 'Provider')
