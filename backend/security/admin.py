from django.contrib import admin

from . import models


@admin.register(models.SecurityStateSnapshot)
class SecurityStateSnapshotAdmin(admin.ModelAdmin):
    list_display = ("arming_status", "alarm_status", "updated_at")


@admin.register(models.SensorRecord)
class SensorRecordAdmin(admin.ModelAdmin):
    list_display = ("name", "sensor_type", "active", "updated_at")
    list_filter = ("sensor_type", "active")
    search_fields = ("name",)


@admin.register(models.SecurityEvent)
class SecurityEventAdmin(admin.ModelAdmin):
    list_display = ("event_type", "alarm_status", "timestamp")
    list_filter = ("event_type", "alarm_status")
