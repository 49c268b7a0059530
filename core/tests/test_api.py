"""
Integration tests for the wellness admin API.

These tests exercise the client, industry and provider endpoints
together with authentication, access control, the error envelope and
audit logging.  They use Django REST Framework's APIClient within the
APITestCase base class.

To run the tests:

```
pytest -q core/tests
```
"""

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from ..models import AuditEvent, Client, Industry
from .base import AdminAPITestCase

User = get_user_model()


class AccessControlTests(AdminAPITestCase):
    def test_anonymous_request_is_unauthorized(self):
        response = APIClient().get("/api/clients")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn("error", response.data)
        self.assertIn("Bearer", response["WWW-Authenticate"])

    def test_non_admin_is_forbidden(self):
        member = User.objects.create_user(username="member", password="memberpass")
        response = self.authenticate(member).get("/api/clients")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data, {"error": "Admin access required"})

    def test_token_login_returns_jwt_pair(self):
        response = APIClient().post(
            reverse("token_obtain"), {"username": "admin1", "password": "adminpass"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        token = response.data["access"]
        api = APIClient()
        api.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        self.assertEqual(api.get("/api/clients").status_code, status.HTTP_200_OK)

    def test_healthz_reports_database(self):
        response = APIClient().get("/healthz")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {"ok": True, "db": True})


class ClientAPITests(AdminAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.finance = Industry.objects.create(name="Finance", code="FIN")
        self.acme = self.make_client("Acme Corp", email="info@acme.test", industry=self.finance, is_verified=True)
        self.globex = self.make_client("Globex", status="INACTIVE")
        self.initech = self.make_client("Initech", tax_id="TX-1")

    def test_list_clamps_pagination(self):
        response = self.client.get("/api/clients?page=0&limit=500")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["metadata"], {"total": 3, "page": 1, "limit": 100, "totalPages": 1})
        self.assertEqual(len(response.data["data"]), 3)

    def test_list_bounds_huge_page(self):
        response = self.client.get("/api/clients?page=" + "9" * 5000)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"], [])
        self.assertEqual(response.data["metadata"]["total"], 3)

    def test_oversized_ids_are_bad_requests(self):
        response = self.client.get("/api/clients?industryId=99999999999999999999")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "Invalid industryId '99999999999999999999'"})
        response = self.client.post(
            "/api/clients", {"name": "Umbrella", "industryId": 99999999999999999999}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("industryId", response.data["details"])

    def test_list_pages_and_sorts(self):
        response = self.client.get("/api/clients?limit=2&page=2&sortBy=name&sortOrder=asc")
        self.assertEqual(response.data["metadata"]["totalPages"], 2)
        self.assertEqual([c["name"] for c in response.data["data"]], ["Initech"])

    def test_list_filters(self):
        response = self.client.get("/api/clients?search=ACME")
        self.assertEqual([c["id"] for c in response.data["data"]], [self.acme.id])
        response = self.client.get("/api/clients?status=INACTIVE")
        self.assertEqual([c["id"] for c in response.data["data"]], [self.globex.id])
        response = self.client.get(f"/api/clients?industryId={self.finance.id}&isVerified=true")
        self.assertEqual([c["id"] for c in response.data["data"]], [self.acme.id])
        response = self.client.get("/api/clients?status=all")
        self.assertEqual(response.data["metadata"]["total"], 3)

    def test_list_rejects_unknown_status(self):
        response = self.client.get("/api/clients?status=BOGUS")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "Invalid status 'BOGUS'"})

    def test_has_staff_filter(self):
        self.make_staff(self.acme)
        response = self.client.get("/api/clients?hasStaff=true")
        self.assertEqual([c["id"] for c in response.data["data"]], [self.acme.id])
        response = self.client.get("/api/clients?hasStaff=false")
        self.assertEqual(response.data["metadata"]["total"], 2)

    def test_create_client(self):
        payload = {
            "name": "Umbrella",
            "email": "hq@umbrella.test",
            "industryId": self.finance.id,
            "preferredContactMethod": "EMAIL",
            "notes": "<b>Key</b> account",
        }
        response = self.client.post("/api/clients", payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["name"], "Umbrella")
        self.assertEqual(response.data["notes"], "Key account")
        self.assertEqual(response.data["industry"], {"id": self.finance.id, "name": "Finance", "code": "FIN"})
        self.assertEqual(response.data["_count"], {"staff": 0, "sessions": 0})
        self.assertEqual(response.data["staff"], [])
        event = AuditEvent.objects.get(entity_type="client", action="CREATE")
        self.assertEqual(event.entity_id, str(response.data["id"]))
        self.assertEqual(event.user, self.admin_user)

    def test_create_requires_name(self):
        response = self.client.post("/api/clients", {"email": "x@y.test"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Validation failed")
        self.assertIn("name", response.data["details"])

    def test_create_with_unknown_industry(self):
        response = self.client.post("/api/clients", {"name": "Umbrella", "industryId": 999}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("industryId", response.data["details"])

    def test_duplicate_email_is_conflict(self):
        response = self.client.post("/api/clients", {"name": "Acme Two", "email": "INFO@acme.test"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data, {"error": "A client with this email or tax ID already exists"})

    def test_get_missing_client(self):
        response = self.client.get("/api/clients/9999")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {"error": "Client not found"})

    def test_update_client(self):
        response = self.client.put(f"/api/clients/{self.globex.id}", {"status": "ACTIVE"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "ACTIVE")
        self.assertEqual(response.data["name"], "Globex")

    def test_update_to_taken_tax_id_is_conflict(self):
        response = self.client.put(f"/api/clients/{self.acme.id}", {"taxId": "TX-1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        response = self.client.put(f"/api/clients/{self.initech.id}", {"taxId": "TX-1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_update_missing_client(self):
        response = self.client.put("/api/clients/9999", {"name": "Nobody"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_is_soft(self):
        response = self.client.delete(f"/api/clients/{self.globex.id}")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["name"], "Globex")
        self.assertEqual(self.client.get(f"/api/clients/{self.globex.id}").status_code, status.HTTP_404_NOT_FOUND)
        self.globex.refresh_from_db()
        self.assertIsNotNone(self.globex.deleted_at)
        self.assertEqual(self.client.get("/api/clients").data["metadata"]["total"], 2)

    def test_stats(self):
        Client.objects.create(name="Old Co", deleted_at=timezone.now())
        response = self.client.get("/api/clients/stats?timeRange=7d")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data
        self.assertEqual(data["total"], 3)
        self.assertEqual(data["active"], 2)
        self.assertEqual(data["verified"], 1)
        self.assertEqual(data["newInTimeRange"], 3)
        self.assertEqual(data["byStatus"], {"ACTIVE": 2, "INACTIVE": 1})
        self.assertEqual(data["byIndustry"], {str(self.finance.id): 1, "unknown": 2})
        self.assertEqual(data["byVerification"], {"verified": 1, "unverified": 2})

    def test_stats_rejects_unknown_range(self):
        response = self.client.get("/api/clients/stats?timeRange=5y")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class IndustryAPITests(AdminAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.finance = Industry.objects.create(name="Financial Services", code="FIN")
        self.banking = Industry.objects.create(name="Banking", code="FIN-BNK", parent=self.finance)

    def test_list_roots_and_children(self):
        response = self.client.get("/api/industries?parentId=root")
        self.assertEqual([i["code"] for i in response.data["data"]], ["FIN"])
        self.assertEqual(response.data["data"][0]["_count"], {"children": 1, "clients": 0})
        response = self.client.get(f"/api/industries?parentId={self.finance.id}")
        self.assertEqual([i["code"] for i in response.data["data"]], ["FIN-BNK"])

    def test_create_uppercases_code(self):
        response = self.client.post(
            "/api/industries", {"name": "Insurance", "code": "ins", "parentId": self.finance.id}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["code"], "INS")
        self.assertEqual(response.data["parent"]["id"], self.finance.id)

    def test_duplicate_name_is_bad_request(self):
        response = self.client.post("/api/industries", {"name": "banking"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "Industry with this name already exists"})

    def test_duplicate_code_is_conflict(self):
        response = self.client.post("/api/industries", {"name": "Lending", "code": "FIN-BNK"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data, {"error": "Industry conflicts with an existing record"})

    def test_industry_cannot_parent_itself(self):
        response = self.client.put(
            f"/api/industries/{self.finance.id}", {"parentId": self.finance.id}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("parentId", response.data["details"])

    def test_industry_cannot_move_under_its_descendant(self):
        response = self.client.put(
            f"/api/industries/{self.finance.id}", {"parentId": self.banking.id}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["details"]["parentId"], ["An industry cannot be moved under one of its descendants"]
        )
        self.finance.refresh_from_db()
        self.assertIsNone(self.finance.parent_id)

        retail = Industry.objects.create(name="Retail", code="RET")
        response = self.client.put(f"/api/industries/{self.banking.id}", {"parentId": retail.id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["parent"]["id"], retail.id)

    def test_delete_refused_while_referenced(self):
        response = self.client.delete(f"/api/industries/{self.finance.id}")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.make_client("Bank Co", industry=self.banking)
        response = self.client.delete(f"/api/industries/{self.banking.id}")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_leaf(self):
        response = self.client.delete(f"/api/industries/{self.banking.id}")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.get(f"/api/industries/{self.banking.id}").status_code, status.HTTP_404_NOT_FOUND)
        # the parent is free to go once its only child is gone
        response = self.client.delete(f"/api/industries/{self.finance.id}")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)


class ProviderAPITests(AdminAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.calm = self.make_provider("Calm Minds", type="COUNSELOR", rating=4.5, is_verified=True)
        self.path = self.make_provider("Bright Path", type="COACH", rating=3.0)
        self.line = self.make_provider("Help Line", type="HOTLINE", contact_email="line@x.test")

    def test_create_provider(self):
        payload = {
            "name": "Open Door Clinic",
            "type": "CLINIC",
            "entityType": "COMPANY",
            "contactEmail": "desk@opendoor.test",
            "specializations": ["Anxiety", "Grief"],
            "rating": 4,
        }
        response = self.client.post("/api/providers", payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["entityType"], "COMPANY")
        self.assertEqual(response.data["specializations"], ["Anxiety", "Grief"])
        self.assertEqual(response.data["interventions"], [])

    def test_create_validation(self):
        response = self.client.post("/api/providers", {"name": "No Email"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("contactEmail", response.data["details"])
        response = self.client.post(
            "/api/providers", {"name": "Too Good", "contactEmail": "a@b.test", "rating": 6}, format="json"
        )
        self.assertIn("rating", response.data["details"])

    def test_duplicate_name_is_bad_request(self):
        response = self.client.post(
            "/api/providers", {"name": "calm minds", "contactEmail": "a@b.test"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_rating_and_type_filters(self):
        response = self.client.get("/api/providers?minRating=4")
        self.assertEqual([p["id"] for p in response.data["data"]], [self.calm.id])
        response = self.client.get("/api/providers?maxRating=3.5&type=COACH")
        self.assertEqual([p["id"] for p in response.data["data"]], [self.path.id])
        response = self.client.get("/api/providers?isVerified=false")
        self.assertEqual(response.data["metadata"]["total"], 2)
        response = self.client.get("/api/providers?type=WIZARD")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_stats(self):
        response = self.client.get("/api/providers/stats")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total"], 3)
        self.assertEqual(response.data["verified"], 1)
        self.assertEqual(response.data["rating"], {"average": 3.75, "min": 3.0, "max": 4.5, "rated": 2})
        self.assertEqual(response.data["byType"], {"COACH": 1, "COUNSELOR": 1, "HOTLINE": 1})

    def test_delete_provider(self):
        response = self.client.delete(f"/api/providers/{self.line.id}")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get("/api/providers/stats").data["total"], 2)


class AuditLogAPITests(AdminAPITestCase):
    def test_mutations_are_listed_newest_first(self):
        created = self.client.post("/api/clients", {"name": "Umbrella"}, format="json").data
        self.client.put(f"/api/clients/{created['id']}", {"notes": "VIP"}, format="json")
        response = self.client.get(f"/api/audit-logs?entityType=client&entityId={created['id']}")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        actions = [e["action"] for e in response.data["data"]]
        self.assertEqual(actions, ["UPDATE", "CREATE"])
        self.assertEqual(response.data["data"][0]["user"]["username"], "admin1")
        self.assertEqual(response.data["data"][0]["detail"], {"fields": ["notes"]})

    def test_action_filter(self):
        self.client.post("/api/clients", {"name": "Umbrella"}, format="json")
        response = self.client.get("/api/audit-logs?action=DELETE")
        self.assertEqual(response.data["metadata"]["total"], 0)
        response = self.client.get("/api/audit-logs?action=EXPLODE")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
