from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class DoctorDetail(BaseModel):
    id: str

    # Professional information
    medical_license: str
    specialization: str
    experience_years: Optional[int] = None
    qualifications: Optional[str] = None
    consultation_fee: Optional[float] = None
    bio: Optional[str] = None

    # Verification
    is_verified: Optional[bool] = False
    license_document_url: Optional[str] = None

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __repr__(self):
        return f"<DoctorDetail(id='{self.id}', specialization='{self.specialization}')>"
