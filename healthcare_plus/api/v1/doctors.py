from fastapi import APIRouter

from ...services.directory import DirectoryView, directory_view

router = APIRouter(tags=["Doctors"])

@router.get("/doctors", response_model=DirectoryView)
async def find_doctors(search: str = "", specialization: str = ""):
    """Search the doctor directory by name or specialization."""
    return directory_view(search, specialization)
