import bleach
from rest_framework import serializers

from core.models import choice_values
from core.utils.pagination import MAX_INT


def clean_text(value):
    if value is None:
        return None
    return bleach.clean(str(value), strip=True).strip()


class CleanCharField(serializers.CharField):
    """CharField that strips any markup from the submitted text."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return clean_text(value)


def text(max_length=None, required=False, **kwargs):
    kwargs.setdefault('allow_null', not required)
    kwargs.setdefault('allow_blank', not required)
    return CleanCharField(max_length=max_length, required=required, **kwargs)


def enum(choices, required=False, **kwargs):
    kwargs.setdefault('allow_null', not required)
    return serializers.ChoiceField(choices=choice_values(choices), required=required, **kwargs)


def ref(source, required=False, **kwargs):
    """An integer id referencing another row, written to ``source``."""
    kwargs.setdefault('allow_null', not required)
    return serializers.IntegerField(source=source, required=required, min_value=1, max_value=MAX_INT, **kwargs)


def string_list(**kwargs):
    return serializers.ListField(child=CleanCharField(max_length=255), required=False, **kwargs)


class EntitySerializer(serializers.Serializer):
    """Base input schema; ``validated_data`` keys are model field names."""
    metadata = serializers.DictField(required=False)

    def ensure_exists(self, model, pk, label):
        if pk is not None and not model.objects.filter(pk=pk, **live_filter(model)).exists():
            raise serializers.ValidationError(f'{label} not found')
        return pk


def live_filter(model):
    names = {f.name for f in model._meta.get_fields()}
    return {'deleted_at__isnull': True} if 'deleted_at' in names else {}
