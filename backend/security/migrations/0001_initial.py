from __future__ import annotations

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SecurityStateSnapshot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "arming_status",
                    models.CharField(
                        choices=[("disarmed", "Disarmed"), ("armed_home", "Armed home"), ("armed_away", "Armed away")],
                        default="disarmed",
                        max_length=32,
                    ),
                ),
                (
                    "alarm_status",
                    models.CharField(
                        choices=[("no_alarm", "No alarm"), ("pending_alarm", "Pending alarm"), ("alarm", "Alarm")],
                        default="no_alarm",
                        max_length=32,
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="SensorRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150)),
                (
                    "sensor_type",
                    models.CharField(
                        choices=[("door", "Door"), ("window", "Window"), ("motion", "Motion")],
                        max_length=16,
                    ),
                ),
                ("active", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name", "sensor_type"],
                "indexes": [models.Index(fields=["active"], name="security_se_active_2c1f0e_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("name", "sensor_type"), name="sensor_records_unique_name_type"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SecurityEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "event_type",
                    models.CharField(
                        choices=[
                            ("alarm_status_changed", "Alarm status changed"),
                            ("sensor_status_changed", "Sensor status changed"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "alarm_status",
                    models.CharField(
                        blank=True,
                        choices=[("no_alarm", "No alarm"), ("pending_alarm", "Pending alarm"), ("alarm", "Alarm")],
                        max_length=32,
                        null=True,
                    ),
                ),
                ("timestamp", models.DateTimeField()),
                ("metadata", models.JSONField(blank=True, default=dict)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["event_type", "timestamp"], name="security_se_event_t_8d3b41_idx"),
                    models.Index(fields=["timestamp"], name="security_se_timesta_5a7e92_idx"),
                ],
            },
        ),
    ]
