import pytest

from healthcare_plus.services.directory import (
    SAMPLE_DOCTORS, ALL_SPECIALIZATIONS, filter_doctors, directory_view
)

def names(doctors):
    return [doctor.name for doctor in doctors]

class TestDoctorFilter:

    def test_no_filters_returns_everyone(self):
        assert names(filter_doctors(SAMPLE_DOCTORS)) == names(SAMPLE_DOCTORS)

    def test_search_by_name(self):
        """Search is a case-insensitive substring match on the name."""
        assert names(filter_doctors(SAMPLE_DOCTORS, "Chen")) == ["Dr. Michael Chen"]
        assert names(filter_doctors(SAMPLE_DOCTORS, "chen")) == ["Dr. Michael Chen"]

    def test_search_by_specialization(self):
        assert names(filter_doctors(SAMPLE_DOCTORS, "pedia")) == ["Dr. Emily Rodriguez"]

    def test_specialization_filter(self):
        assert names(filter_doctors(SAMPLE_DOCTORS, "", "Cardiology")) == ["Dr. Sarah Johnson"]

    def test_all_specializations_sentinel(self):
        assert len(filter_doctors(SAMPLE_DOCTORS, "", ALL_SPECIALIZATIONS)) == len(SAMPLE_DOCTORS)

    def test_specialization_filter_is_exact(self):
        assert filter_doctors(SAMPLE_DOCTORS, "", "cardiology") == []

    def test_search_and_filter_combine(self):
        assert filter_doctors(SAMPLE_DOCTORS, "Chen", "Cardiology") == []
        assert names(filter_doctors(SAMPLE_DOCTORS, "dr.", "Orthopedics")) == ["Dr. David Wilson"]

    def test_no_match(self):
        assert filter_doctors(SAMPLE_DOCTORS, "zzz") == []

    @pytest.mark.parametrize("search,specialization", [
        ("", ""),
        ("Chen", ""),
        ("", "Pediatrics"),
        ("dr", ALL_SPECIALIZATIONS),
    ])
    def test_filtering_is_idempotent(self, search, specialization):
        once = filter_doctors(SAMPLE_DOCTORS, search, specialization)
        assert filter_doctors(once, search, specialization) == once

class TestDirectoryView:

    def test_cards_link_to_booking(self):
        view = directory_view()
        assert view.doctors[0].booking_url == "/book-appointment/1"
        assert view.empty_state is None
        assert view.specializations[0] == ALL_SPECIALIZATIONS

    def test_empty_state(self):
        view = directory_view("zzz")
        assert view.doctors == []
        assert view.empty_state.title == "No doctors found"

    def test_find_doctors_page(self, client):
        response = client.get("/find-doctors", params={"specialization": "Cardiology"})
        assert response.status_code == 200
        data = response.json()
        assert [doctor["name"] for doctor in data["doctors"]] == ["Dr. Sarah Johnson"]
        assert data["empty_state"] is None

    def test_find_doctors_page_without_results(self, client):
        response = client.get("/find-doctors", params={"search": "zzz"})
        data = response.json()
        assert data["doctors"] == []
        assert data["empty_state"]["message"] == "Try adjusting your search criteria or browse all doctors."

    def test_doctors_api(self, client):
        response = client.get("/api/v1/doctors", params={"search": "Chen"})
        assert response.status_code == 200
        assert [doctor["name"] for doctor in response.json()["doctors"]] == ["Dr. Michael Chen"]

    def test_booking_route_not_served(self, client):
        response = client.get("/book-appointment/1")
        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"
