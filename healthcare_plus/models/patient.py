from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime

class PatientDetail(BaseModel):
    id: str

    # Personal information
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None

    # Contact information
    address: Optional[str] = None
    emergency_contact: Optional[str] = None

    # Medical information
    health_conditions: Optional[List[str]] = None
    bmi: Optional[float] = None
    smoking_status: Optional[bool] = None
    drinking_status: Optional[bool] = None

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __repr__(self):
        return f"<PatientDetail(id='{self.id}')>"
