from __future__ import annotations

from rest_framework import serializers

from security.models import SecurityEvent


class SecurityEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = SecurityEvent
        fields = (
            "id",
            "event_type",
            "alarm_status",
            "timestamp",
            "metadata",
        )
