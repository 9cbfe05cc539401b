from __future__ import annotations

from rest_framework import serializers

from security.domain import SensorType
from security.models import SensorRecord


class SensorSerializer(serializers.ModelSerializer):
    class Meta:
        model = SensorRecord
        fields = (
            "id",
            "name",
            "sensor_type",
            "active",
            "updated_at",
        )


class SensorCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    sensor_type = serializers.ChoiceField(choices=SensorType.choices)

    def validate_name(self, value: str) -> str:
        name = (value or "").strip()
        if not name:
            raise serializers.ValidationError("name is required.")
        return name

    def validate(self, attrs):
        if SensorRecord.objects.filter(name=attrs["name"], sensor_type=attrs["sensor_type"]).exists():
            raise serializers.ValidationError("A sensor with this name and type already exists.")
        return attrs


class SensorActivationSerializer(serializers.Serializer):
    active = serializers.BooleanField()
