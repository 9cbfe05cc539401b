from __future__ import annotations

from rest_framework import serializers

from security.domain import AlarmStatus, ArmingStatus


class SecurityStatusSerializer(serializers.Serializer):
    arming_status = serializers.ChoiceField(choices=ArmingStatus.choices, read_only=True)
    alarm_status = serializers.ChoiceField(choices=AlarmStatus.choices, read_only=True)
