"""
Tests for the staff and beneficiary endpoints nested under a client.
"""
from rest_framework import status

from ..models import Beneficiary, Profile, Staff
from .base import AdminAPITestCase


class StaffAPITests(AdminAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.acme = self.make_client("Acme Corp")
        self.globex = self.make_client("Globex")
        self.url = f"/api/clients/{self.acme.id}/staff"

    def test_create_staff_writes_profile(self):
        payload = {
            "fullName": "Jane Doe",
            "email": "jane@acme.test",
            "jobTitle": "Engineer",
            "managementLevel": "SENIOR",
            "qualifications": ["MSc"],
        }
        response = self.client.post(self.url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["jobTitle"], "Engineer")
        self.assertEqual(response.data["clientId"], self.acme.id)
        self.assertEqual(response.data["profile"]["fullName"], "Jane Doe")
        self.assertEqual(response.data["client"], {"id": self.acme.id, "name": "Acme Corp"})
        self.assertEqual(response.data["_count"], {"beneficiaries": 0, "sessions": 0})
        self.assertEqual(Profile.objects.count(), 1)

    def test_profile_is_reused_by_email(self):
        self.client.post(self.url, {"fullName": "Jane Doe", "email": "jane@acme.test"}, format="json")
        response = self.client.post(
            f"/api/clients/{self.globex.id}/staff",
            {"fullName": "Jane A. Doe", "email": "JANE@acme.test"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Profile.objects.count(), 1)
        self.assertEqual(Profile.objects.get().full_name, "Jane A. Doe")

    def test_same_person_twice_for_one_client_is_conflict(self):
        self.client.post(self.url, {"fullName": "Jane Doe", "email": "jane@acme.test"}, format="json")
        response = self.client.post(self.url, {"fullName": "Jane Doe", "email": "jane@acme.test"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(Staff.objects.count(), 1)

    def test_create_requires_full_name(self):
        response = self.client.post(self.url, {"jobTitle": "Engineer"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("fullName", response.data["details"])
        self.assertEqual(Profile.objects.count(), 0)

    def test_end_date_before_start_date(self):
        payload = {"fullName": "Jane Doe", "startDate": "2024-05-01", "endDate": "2024-04-01"}
        response = self.client.post(self.url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("endDate", response.data["details"])

    def test_unknown_client(self):
        response = self.client.get("/api/clients/9999/staff")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {"error": "Client not found"})

    def test_list_is_scoped_to_client_and_sortable(self):
        self.make_staff(self.acme, "Zoe Adams", job_title="Designer")
        self.make_staff(self.acme, "Adam Young", job_title="Engineer")
        self.make_staff(self.globex, "Other Person")
        response = self.client.get(f"{self.url}?sortBy=fullName&sortOrder=asc")
        self.assertEqual(response.data["metadata"]["total"], 2)
        self.assertEqual([s["profile"]["fullName"] for s in response.data["data"]], ["Adam Young", "Zoe Adams"])
        response = self.client.get(f"{self.url}?role=design")
        self.assertEqual([s["jobTitle"] for s in response.data["data"]], ["Designer"])
        response = self.client.get(f"{self.url}?search=young")
        self.assertEqual([s["profile"]["fullName"] for s in response.data["data"]], ["Adam Young"])

    def test_has_beneficiaries_filter(self):
        parent = self.make_staff(self.acme, "Pat Parent")
        self.make_staff(self.acme, "Solo Sam")
        Beneficiary.objects.create(staff=parent, profile=Profile.objects.create(full_name="Kid"), relation="CHILD")
        response = self.client.get(f"{self.url}?hasBeneficiaries=true")
        self.assertEqual([s["id"] for s in response.data["data"]], [parent.id])

    def test_staff_of_other_client_is_not_found(self):
        other = self.make_staff(self.globex)
        response = self.client.get(f"{self.url}/{other.id}")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {"error": "Staff not found"})

    def test_update_staff_and_profile(self):
        staff = self.make_staff(self.acme, "Jane Doe", job_title="Engineer")
        response = self.client.put(
            f"{self.url}/{staff.id}", {"jobTitle": "Lead", "fullName": "Jane Smith"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["jobTitle"], "Lead")
        self.assertEqual(response.data["profile"]["fullName"], "Jane Smith")
        staff.profile.refresh_from_db()
        self.assertEqual(staff.profile.full_name, "Jane Smith")

    def test_delete_staff(self):
        staff = self.make_staff(self.acme)
        response = self.client.delete(f"{self.url}/{staff.id}")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get(self.url).data["metadata"]["total"], 0)
        self.assertEqual(self.client.get(f"/api/clients/{self.acme.id}").data["_count"]["staff"], 0)


class BeneficiaryAPITests(AdminAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.acme = self.make_client("Acme Corp")
        self.staff = self.make_staff(self.acme, "Jane Doe")
        self.url = f"/api/clients/{self.acme.id}/staff/{self.staff.id}/beneficiaries"

    def test_create_beneficiary(self):
        payload = {"fullName": "Tom Doe", "relation": "CHILD", "isStudent": True}
        response = self.client.post(self.url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["relation"], "CHILD")
        self.assertTrue(response.data["isStudent"])
        self.assertEqual(response.data["profile"]["fullName"], "Tom Doe")
        self.assertEqual(response.data["staff"]["profile"]["fullName"], "Jane Doe")
        self.assertEqual(response.data["_count"], {"sessions": 0})

    def test_create_with_existing_profile(self):
        spouse = Profile.objects.create(full_name="Sam Doe")
        response = self.client.post(self.url, {"profileId": spouse.id, "relation": "SPOUSE"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["profile"]["id"], spouse.id)

    def test_create_validation(self):
        response = self.client.post(self.url, {"fullName": "Tom Doe"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("relation", response.data["details"])
        response = self.client.post(self.url, {"relation": "CHILD"}, format="json")
        self.assertIn("fullName", response.data["details"])
        response = self.client.post(self.url, {"profileId": 9999, "relation": "CHILD"}, format="json")
        self.assertIn("profileId", response.data["details"])

    def test_wrong_client_for_staff(self):
        other = self.make_client("Globex")
        response = self.client.get(f"/api/clients/{other.id}/staff/{self.staff.id}/beneficiaries")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_relation_filter(self):
        Beneficiary.objects.create(staff=self.staff, profile=Profile.objects.create(full_name="Kid"), relation="CHILD")
        Beneficiary.objects.create(staff=self.staff, profile=Profile.objects.create(full_name="Wife"), relation="SPOUSE")
        response = self.client.get(f"{self.url}?relation=SPOUSE")
        self.assertEqual([b["profile"]["fullName"] for b in response.data["data"]], ["Wife"])
        response = self.client.get(f"{self.url}?relation=PET")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_and_delete(self):
        kid = Beneficiary.objects.create(
            staff=self.staff, profile=Profile.objects.create(full_name="Kid"), relation="CHILD"
        )
        response = self.client.put(f"{self.url}/{kid.id}", {"notes": "Prefers mornings"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["notes"], "Prefers mornings")
        self.assertEqual(response.data["relation"], "CHILD")
        response = self.client.delete(f"{self.url}/{kid.id}")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get(f"{self.url}/{kid.id}").status_code, status.HTTP_404_NOT_FOUND)
