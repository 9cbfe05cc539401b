from __future__ import annotations

from dataclasses import dataclass


from config.domain_exceptions import ValidationError
from security.domain import AlarmStatus, ArmingStatus
from security.services import get_security_service


class InvalidArmingStatus(ValidationError):
    pass


class InvalidAlarmStatus(ValidationError):
    pass


@dataclass(frozen=True)
class SecurityStatus:
    arming_status: ArmingStatus
    alarm_status: AlarmStatus

    def as_dict(self) -> dict[str, str]:
        return {
            "arming_status": str(self.arming_status),
            "alarm_status": str(self.alarm_status),
        }


def get_status() -> SecurityStatus:
    with get_security_service().locked() as service:
        return SecurityStatus(
            arming_status=service.get_arming_status(),
            alarm_status=service.get_alarm_status(),
        )


def set_arming_status(*, arming_status) -> SecurityStatus:
    if arming_status not in ArmingStatus.values:
        raise InvalidArmingStatus("Invalid arming_status.")
    with get_security_service().locked() as service:
        service.set_arming_status(ArmingStatus(arming_status))
        return get_status()


def set_alarm_status(*, alarm_status) -> SecurityStatus:
    if alarm_status not in AlarmStatus.values:
        raise InvalidAlarmStatus("Invalid alarm_status.")
    with get_security_service().locked() as service:
        service.set_alarm_status(AlarmStatus(alarm_status))
        return get_status()
