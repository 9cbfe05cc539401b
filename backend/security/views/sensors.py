from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from security.models import SensorRecord
from security.serializers import SensorActivationSerializer, SensorCreateSerializer, SensorSerializer
from security.use_cases import sensors as sensors_uc


class SensorsView(APIView):
    def get(self, request):
        sensors = SensorRecord.objects.all()
        return Response(SensorSerializer(sensors, many=True).data)

    def post(self, request):
        serializer = SensorCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = sensors_uc.add_sensor(**serializer.validated_data)
        return Response(SensorSerializer(record).data, status=status.HTTP_201_CREATED)


class SensorDetailView(APIView):
    def get(self, request, sensor_id: int):
        record = sensors_uc.get_sensor_record(sensor_id=sensor_id)
        return Response(SensorSerializer(record).data)

    def patch(self, request, sensor_id: int):
        serializer = SensorActivationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = sensors_uc.change_sensor_activation(
            sensor_id=sensor_id,
            active=serializer.validated_data["active"],
        )
        return Response(SensorSerializer(record).data, status=status.HTTP_200_OK)

    def delete(self, request, sensor_id: int):
        sensors_uc.remove_sensor(sensor_id=sensor_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
