from __future__ import annotations

from django.core.paginator import Paginator
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework.response import Response
from rest_framework.views import APIView

from security.models import SecurityEvent, SecurityEventType
from security.serializers import SecurityEventSerializer


def _parse_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class SecurityEventsView(APIView):
    def get(self, request):
        page = max(1, _parse_int(request.query_params.get("page"), 1))
        page_size = min(max(1, _parse_int(request.query_params.get("page_size"), 20)), 200)
        ordering = request.query_params.get("ordering", "-timestamp")
        if ordering not in {"timestamp", "-timestamp"}:
            ordering = "-timestamp"

        event_type = request.query_params.get("event_type") or None
        start_date = request.query_params.get("start_date") or None
        end_date = request.query_params.get("end_date") or None

        queryset = SecurityEvent.objects.all()
        if event_type in set(SecurityEventType.values):
            queryset = queryset.filter(event_type=event_type)

        def parse_dt(value: str):
            parsed = parse_datetime(value)
            if not parsed:
                return None
            if timezone.is_naive(parsed):
                return timezone.make_aware(parsed, timezone.get_current_timezone())
            return parsed

        if start_date:
            parsed = parse_dt(start_date)
            if parsed:
                queryset = queryset.filter(timestamp__gte=parsed)
        if end_date:
            parsed = parse_dt(end_date)
            if parsed:
                queryset = queryset.filter(timestamp__lte=parsed)

        queryset = queryset.order_by(ordering, ordering.replace("timestamp", "id"))
        paginator = Paginator(queryset, page_size)
        page_obj = paginator.get_page(page)

        return Response(
            {
                "data": SecurityEventSerializer(page_obj.object_list, many=True).data,
                "total": paginator.count,
                "page": page_obj.number,
                "page_size": page_size,
                "total_pages": paginator.num_pages,
                "has_next": page_obj.has_next(),
                "has_previous": page_obj.has_previous(),
                "timestamp": timezone.now(),
            }
        )
