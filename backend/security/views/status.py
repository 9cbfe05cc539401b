from __future__ import annotations

from rest_framework.response import Response
from rest_framework.views import APIView

from security.serializers import SecurityStatusSerializer
from security.use_cases import status as status_uc


class SecurityStatusView(APIView):
    def get(self, request):
        return Response(SecurityStatusSerializer(status_uc.get_status()).data)


class ArmingStatusView(APIView):
    def post(self, request):
        result = status_uc.set_arming_status(arming_status=request.data.get("arming_status"))
        return Response(SecurityStatusSerializer(result).data)


class AlarmStatusView(APIView):
    def post(self, request):
        result = status_uc.set_alarm_status(alarm_status=request.data.get("alarm_status"))
        return Response(SecurityStatusSerializer(result).data)
