from rest_framework import serializers

from .common import EntitySerializer, ref, text


class FeedbackSerializer(EntitySerializer):
    sessionId = ref('session_id', required=True)
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = text()
