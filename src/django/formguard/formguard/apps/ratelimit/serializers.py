"""
Rate Limit Serializers
"""

from rest_framework import serializers


class RateLimitStatusSerializer(serializers.Serializer):
    """Serializes a services.RateLimitStatus snapshot"""

    form_id = serializers.IntegerField()
    title = serializers.CharField()
    enabled = serializers.BooleanField(source='config.enabled')
    threshold = serializers.IntegerField(source='config.threshold')
    window = serializers.IntegerField(source='config.window')
    auto_reset = serializers.BooleanField(source='config.auto_reset')
    volume = serializers.IntegerField()
    rate_exceeded = serializers.BooleanField()
    disabled = serializers.BooleanField()
    rate_limit_reached_on = serializers.DateTimeField(allow_null=True)
    should_reset = serializers.BooleanField()
