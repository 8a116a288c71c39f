from typing import List, Optional
from pydantic import BaseModel

ALL_SPECIALIZATIONS = "All Specializations"

SPECIALIZATION_OPTIONS = [
    ALL_SPECIALIZATIONS,
    "Cardiology",
    "Dermatology",
    "Pediatrics",
    "Orthopedics",
    "Neurology",
    "Gynecology",
    "Psychiatry",
]

class DoctorListing(BaseModel):
    id: int
    name: str
    specialization: str
    experience: str
    rating: float
    location: str
    availability: str
    image: str = "/placeholder.svg"
    qualifications: List[str] = []
    consultation_fee: str

    @property
    def booking_url(self) -> str:
        return f"/book-appointment/{self.id}"

# Sample listings until the directory is backed by the data store
SAMPLE_DOCTORS = [
    DoctorListing(
        id=1,
        name="Dr. Sarah Johnson",
        specialization="Cardiology",
        experience="15 years",
        rating=4.9,
        location="New York",
        availability="Available Today",
        qualifications=["MD", "FACC"],
        consultation_fee="$150",
    ),
    DoctorListing(
        id=2,
        name="Dr. Michael Chen",
        specialization="Dermatology",
        experience="12 years",
        rating=4.8,
        location="Los Angeles",
        availability="Available Tomorrow",
        qualifications=["MD", "FAAD"],
        consultation_fee="$120",
    ),
    DoctorListing(
        id=3,
        name="Dr. Emily Rodriguez",
        specialization="Pediatrics",
        experience="10 years",
        rating=4.9,
        location="Chicago",
        availability="Available Today",
        qualifications=["MD", "FAAP"],
        consultation_fee="$100",
    ),
    DoctorListing(
        id=4,
        name="Dr. David Wilson",
        specialization="Orthopedics",
        experience="18 years",
        rating=4.7,
        location="Houston",
        availability="Available in 2 days",
        qualifications=["MD", "AAOS"],
        consultation_fee="$180",
    ),
]

def matches(doctor: DoctorListing, search_term: str = "", specialization: Optional[str] = "") -> bool:
    term = (search_term or "").lower()
    matches_search = term in doctor.name.lower() or term in doctor.specialization.lower()
    matches_specialization = (
        not specialization
        or specialization == ALL_SPECIALIZATIONS
        or doctor.specialization == specialization
    )
    return matches_search and matches_specialization

def filter_doctors(
    doctors: List[DoctorListing],
    search_term: str = "",
    specialization: Optional[str] = "",
) -> List[DoctorListing]:
    """Case-insensitive name/specialization search combined with an exact specialization filter."""
    return [doctor for doctor in doctors if matches(doctor, search_term, specialization)]

class DoctorCard(BaseModel):
    id: int
    name: str
    specialization: str
    experience: str
    rating: float
    location: str
    availability: str
    image: str
    qualifications: List[str]
    consultation_fee: str
    booking_url: str

class EmptyState(BaseModel):
    title: str = "No doctors found"
    message: str = "Try adjusting your search criteria or browse all doctors."

class DirectoryView(BaseModel):
    search: str
    specialization: str
    specializations: List[str]
    doctors: List[DoctorCard]
    empty_state: Optional[EmptyState] = None

def directory_view(search_term: str = "", specialization: str = "") -> DirectoryView:
    found = filter_doctors(SAMPLE_DOCTORS, search_term, specialization)
    return DirectoryView(
        search=search_term,
        specialization=specialization,
        specializations=SPECIALIZATION_OPTIONS,
        doctors=[DoctorCard(**doctor.model_dump(), booking_url=doctor.booking_url) for doctor in found],
        empty_state=None if found else EmptyState(),
    )
