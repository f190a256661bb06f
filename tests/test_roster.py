from datetime import date, datetime, timezone

from src.modules.appointments.models import Appointment
from src.modules.appointments.roster import build_patient_roster
from src.shared.enums import AppointmentStatus, Priority

TODAY = date(2025, 3, 10)
STAMP = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


def _visit(appointment_id, patient_id, name, on, status, slot_time="10:00"):
    return Appointment(
        appointment_id=appointment_id,
        patient_id=patient_id,
        patient_name=name,
        patient_email=f"{patient_id.lower()}@uni.example.edu",
        nurse_id="N1",
        nurse_name="Alice",
        date=on,
        time=slot_time,
        end_time="10:30" if slot_time == "10:00" else "11:30",
        status=status,
        type="general-checkup",
        priority=Priority.NORMAL,
        created_at=STAMP,
        updated_at=STAMP,
    )


def test_roster_groups_visits_per_patient():
    appointments = [
        _visit("A1", "S1", "Ben", date(2025, 2, 1), AppointmentStatus.COMPLETED),
        _visit("A2", "S1", "Ben", date(2025, 3, 1), AppointmentStatus.COMPLETED),
        _visit("A3", "S1", "Ben", date(2025, 3, 12), AppointmentStatus.CONFIRMED),
        _visit("A4", "S1", "Ben", date(2025, 3, 20), AppointmentStatus.PENDING),
        _visit("A5", "S2", "amy", date(2025, 3, 5), AppointmentStatus.NO_SHOW),
    ]

    roster = build_patient_roster(appointments, TODAY)

    assert [entry.patient_id for entry in roster] == ["S2", "S1"]
    ben = roster[1]
    assert ben.total_visits == 2
    assert ben.last_visit == date(2025, 3, 1)
    assert ben.next_appointment is not None
    assert ben.next_appointment.appointment_id == "A3"

    amy = roster[0]
    assert amy.total_visits == 0
    assert amy.last_visit is None
    assert amy.next_appointment is None


def test_roster_uses_latest_patient_details():
    appointments = [
        _visit("A1", "S1", "Old Name", date(2025, 1, 1), AppointmentStatus.COMPLETED),
        _visit("A2", "S1", "New Name", date(2025, 2, 1), AppointmentStatus.COMPLETED),
    ]

    (entry,) = build_patient_roster(appointments, TODAY)
    assert entry.patient_name == "New Name"


def test_cancelled_or_past_appointments_are_not_upcoming():
    appointments = [
        _visit("A1", "S1", "Ben", date(2025, 3, 9), AppointmentStatus.CONFIRMED),
        _visit("A2", "S1", "Ben", date(2025, 3, 11), AppointmentStatus.CANCELLED),
        _visit("A3", "S1", "Ben", TODAY, AppointmentStatus.PENDING, slot_time="11:00"),
    ]

    (entry,) = build_patient_roster(appointments, TODAY)
    assert entry.next_appointment.appointment_id == "A3"


def test_empty_history_gives_empty_roster():
    assert build_patient_roster([], TODAY) == []


def test_roster_serialises_in_camel_case():
    appointments = [_visit("A1", "S1", "Ben", date(2025, 3, 15), AppointmentStatus.PENDING)]

    (entry,) = build_patient_roster(appointments, TODAY)
    payload = entry.model_dump(by_alias=True, mode="json")

    assert payload["patientId"] == "S1"
    assert payload["totalVisits"] == 0
    assert payload["nextAppointment"]["id"] == "A1"
    assert payload["nextAppointment"]["endTime"] == "10:30"
