from pydantic import BaseModel
from typing import Optional
from datetime import date, time, datetime
import enum

class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class Appointment(BaseModel):
    id: str
    patient_id: str
    doctor_id: str

    # Appointment details
    appointment_date: date
    appointment_time: time
    status: Optional[AppointmentStatus] = AppointmentStatus.SCHEDULED
    reason: Optional[str] = None
    notes: Optional[str] = None

    # Visit confirmation code
    otp_code: Optional[str] = None
    otp_verified: Optional[bool] = False

    # Tracking
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __repr__(self):
        return f"<Appointment(id='{self.id}', patient_id='{self.patient_id}', doctor_id='{self.doctor_id}', date='{self.appointment_date}')>"
