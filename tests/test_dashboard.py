import pytest

from healthcare_plus.models.profile import Profile
from healthcare_plus.services.dashboard import DashboardKind, dispatch_dashboard

def make_profile(user_type, first_name="Jane", last_name="Doe"):
    return Profile(id="user-1", first_name=first_name, last_name=last_name, user_type=user_type)

def sign_in(client, hosted, user_type="patient", first_name="Jane", last_name="Doe"):
    hosted.add_user("jane@example.com", "secret123", user_type=user_type,
                    first_name=first_name, last_name=last_name)
    response = client.post("/api/v1/auth/login", json={"email": "jane@example.com", "password": "secret123"})
    return {"Authorization": f"Bearer {response.json()['access_token']}"}

class TestDashboardDispatch:

    def test_patient_dashboard(self):
        view = dispatch_dashboard(make_profile("patient"))
        assert view.kind == DashboardKind.PATIENT
        assert view.greeting == "Welcome back, Jane!"
        assert view.header.initials == "JD"
        assert [card.title for card in view.cards] == ["Find Doctors", "My Appointments", "My Profile"]

    def test_doctor_dashboard(self):
        view = dispatch_dashboard(make_profile("doctor", first_name="Gregory", last_name="House"))
        assert view.kind == DashboardKind.DOCTOR
        assert view.greeting == "Welcome, Dr. Gregory!"
        assert view.header.display_name == "Dr. Gregory House"
        assert all(card.value == "0" for card in view.cards if card.value is not None)

    @pytest.mark.parametrize("user_type", ["admin", "", None])
    def test_unknown_role(self, user_type):
        """Roles without a dashboard shell render the invalid-type message."""
        view = dispatch_dashboard(make_profile(user_type))
        assert view.kind == DashboardKind.INVALID_USER_TYPE
        assert view.message == "Invalid user type"

    def test_missing_profile(self):
        view = dispatch_dashboard(None)
        assert view.kind == DashboardKind.NO_PROFILE
        assert view.message == "No profile found"

class TestDashboardEndpoints:

    def test_requires_sign_in(self, client):
        response = client.get("/api/v1/dashboard")
        assert response.status_code == 401

    def test_doctor_dashboard(self, client, hosted):
        headers = sign_in(client, hosted, user_type="doctor")
        response = client.get("/api/v1/dashboard", headers=headers)
        assert response.status_code == 200
        assert response.json()["kind"] == "doctor"

    def test_profile_query_uses_session_user(self, client, hosted):
        headers = sign_in(client, hosted)
        client.get("/api/v1/dashboard", headers=headers)
        assert hosted.calls("/rest/v1/profiles") == ["/rest/v1/profiles"]

    def test_missing_profile_row(self, client, hosted):
        headers = sign_in(client, hosted)
        hosted.profiles.clear()

        response = client.get("/api/v1/dashboard", headers=headers)
        assert response.json()["kind"] == "no_profile"

    def test_profile_query_failure(self, client, hosted):
        headers = sign_in(client, hosted)
        hosted.fail_profiles = True

        response = client.get("/api/v1/dashboard", headers=headers)
        assert response.status_code == 200
        assert response.json()["kind"] == "no_profile"

class TestIndexPage:

    def test_landing_for_visitors(self, client):
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["page"] == "landing"
        assert data["dashboard"] is None
        assert data["landing"]["headline"] == "Your Health, Our Priority"
        assert len(data["landing"]["features"]) == 6

    def test_dashboard_for_signed_in_patient(self, client, hosted):
        headers = sign_in(client, hosted)
        data = client.get("/", headers=headers).json()
        assert data["page"] == "dashboard"
        assert data["dashboard"]["kind"] == "patient"
        assert data["dashboard"]["greeting"] == "Welcome back, Jane!"

    def test_stale_token_shows_landing(self, client):
        data = client.get("/", headers={"Authorization": "Bearer stale"}).json()
        assert data["page"] == "landing"

    def test_login_page_redirects_signed_in_user(self, client, hosted):
        headers = sign_in(client, hosted)
        response = client.get("/login", headers=headers, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["sessions"] == "ready"

    def test_login_page_for_visitors(self, client):
        response = client.get("/login")
        assert response.status_code == 200
        assert response.json()["title"] == "Welcome Back"
