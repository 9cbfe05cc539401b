from __future__ import annotations

from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from security.serializers import SecurityStatusSerializer
from security.use_cases import camera as camera_uc


class CameraFrameView(APIView):
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        upload = request.FILES.get("image")
        if upload is None:
            return Response({"detail": "image is required."}, status=status.HTTP_400_BAD_REQUEST)
        submission = camera_uc.submit_camera_frame(image=upload.read())
        if submission.queued:
            return Response({"queued": True}, status=status.HTTP_202_ACCEPTED)
        return Response(SecurityStatusSerializer(submission.status).data)
