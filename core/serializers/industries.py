from rest_framework import serializers

from core.models import Industry

from .common import EntitySerializer, ref, text


def ancestor_ids(industry_id):
    """Yield ``industry_id`` and the ids above it, stopping at a repeat."""
    seen = set()
    while industry_id is not None and industry_id not in seen:
        seen.add(industry_id)
        yield industry_id
        industry_id = Industry.objects.filter(pk=industry_id).values_list('parent_id', flat=True).first()


class IndustrySerializer(EntitySerializer):
    name = text(max_length=255, required=True)
    code = text(max_length=32)
    description = text()
    externalId = text(max_length=64, source='external_id')
    parentId = ref('parent_id')

    def validate_code(self, v):
        return v.upper() if v else None

    def validate_parentId(self, v):
        v = self.ensure_exists(Industry, v, 'Parent industry')
        current = self.context.get('industry_id')
        if v is None or current is None:
            return v
        if v == current:
            raise serializers.ValidationError('An industry cannot be its own parent')
        if current in ancestor_ids(v):
            raise serializers.ValidationError('An industry cannot be moved under one of its descendants')
        return v
