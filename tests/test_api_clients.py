import pytest

from wellness import crud
from wellness.models.client import IntakeRecord

from tests.conftest import add_client, add_followup

NEWCLIENTS = "/api/newclients"
# 6 MiB once decoded
SIX_MB_BASE64 = "A" * (8 * 1024 * 1024)


def profile_url(company_id=1, client_id=1):
    return f"/api/companies/{company_id}/clients/{client_id}/profile"


@pytest.fixture
def onboarded(client, admin_headers):
    response = client.post(
        NEWCLIENTS,
        headers=admin_headers,
        json={
            "company_id": 1,
            "name": "  Ann Lee ",
            "contact_info": "ann@example.com",
            "age": "41",
            "assigned_nutritionist": "Priya Nair",
            "first_followup_at": "2031-05-01",
            "notes": "prefers mornings",
        },
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_intake_creates_master_intake_and_one_followup(client, admin_headers, onboarded):
    assert onboarded == {"ok": True, "company_id": 1, "client_id": 1}

    profile = client.get(profile_url(), headers=admin_headers).json()

    assert profile["company"] == {"company_id": 1, "name": "Acme Corp"}
    assert (profile["client"]["name"], profile["client"]["age"]) == ("Ann Lee", 41)
    assert profile["intake"]["status"] == "pending"
    assert profile["intake"]["created_by"] == "Admin"
    assert len(profile["followups"]) == 1
    followup = profile["followups"][0]
    assert followup["scheduled_at"] == "2031-05-01T00:00:00Z"
    assert (followup["status"], followup["overdue"], followup["notes"]) == ("pending", False, "prefers mornings")
    assert profile["counts"] == {"pending": 1, "done": 0, "reached_out": 0}
    assert profile["upcoming"]["id"] == followup["id"]
    assert profile["last_done"] is None


def test_intake_assigns_next_client_id(client, admin_headers, db):
    add_client(db, 2, 7, "Existing")

    response = client.post(NEWCLIENTS, headers=admin_headers, json={"company_name": "acme corp", "name": "Ben"})

    assert response.json()["client_id"] == 8
    assert response.json()["company_id"] == 1


def test_intake_rerun_appends_followup(client, admin_headers, onboarded):
    client.post(NEWCLIENTS, headers=admin_headers, json={"company_id": 1, "client_id": 1, "name": "Ann L."})

    profile = client.get(profile_url(), headers=admin_headers).json()

    assert profile["client"]["name"] == "Ann L."
    assert len(profile["followups"]) == 2


def test_intake_without_date_is_scheduled_now(client, nutritionist_headers, db):
    response = client.post(NEWCLIENTS, headers=nutritionist_headers, json={"company_id": 2, "name": "Dee"})

    followups = crud.followup.list_for_client(db, company_id=2, client_id=response.json()["client_id"])
    assert len(followups) == 1
    assert followups[0].scheduled_at is not None


def test_intake_stores_plan_file(client, admin_headers):
    client.post(
        NEWCLIENTS,
        headers=admin_headers,
        json={
            "company_id": 1,
            "name": "Ann",
            "given_plan_file": {"name": "plan.pdf", "type": "application/pdf", "base64": "JVBERi0xLjQK", "size": 999},
        },
    )

    plan = client.get(profile_url(), headers=admin_headers).json()["intake"]["given_plan_file"]

    assert (plan["name"], plan["type"], plan["size"]) == ("plan.pdf", "application/pdf", 9)
    assert plan["uploaded_at"].endswith("Z")


@pytest.mark.parametrize(
    "body, error",
    [
        ({"company_id": 1}, "name is required"),
        ({"company_id": 1, "name": "   "}, "name is required"),
        ({"name": "Ann"}, "company_id or company_name is required"),
        ({"company_name": "Initech", "name": "Ann"}, "Unknown company: Initech"),
        ({"company_id": 99, "name": "Ann"}, "Unknown company: 99"),
        ({"company_id": 1, "name": "Ann", "status": "cancelled"}, "status must be pending | done | reached_out"),
        (
            {"company_id": 1, "name": "Ann", "given_plan_file": {"name": "big.pdf", "base64": SIX_MB_BASE64, "size": 10}},
            "File too large. Max 5 MB.",
        ),
        (
            {"company_id": 1, "name": "Ann", "given_plan_file": {"name": "big.pdf", "base64": SIX_MB_BASE64}},
            "File too large. Max 5 MB.",
        ),
        (
            {"company_id": 1, "name": "Ann", "given_plan_file": {"name": "p.pdf", "base64": "JVBERi0xLjQK", "size": -1}},
            "Invalid file size",
        ),
        (
            {"company_id": 1, "name": "Ann", "given_plan_file": {"name": "p.pdf", "base64": "not base64!"}},
            "Invalid file encoding",
        ),
    ],
)
def test_intake_validation(client, admin_headers, db, body, error):
    response = client.post(NEWCLIENTS, headers=admin_headers, json=body)

    assert response.status_code == 400
    assert response.json()["error"] == error
    assert crud.client.list_all(db) == []


def test_intake_requires_json(client, admin_headers):
    response = client.post(
        NEWCLIENTS, headers={**admin_headers, "Content-Type": "text/plain"}, content="name=Ann"
    )

    assert response.status_code == 415


def test_intake_is_staff_only(client, client_headers):
    response = client.post(NEWCLIENTS, headers=client_headers, json={"company_id": 1, "name": "Ann"})

    assert response.status_code == 403


def test_profile_of_unknown_client(client, admin_headers):
    response = client.get(profile_url(1, 404), headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Client not found"}


def test_profile_orders_followups_newest_first(client, admin_headers, db):
    add_client(db, 1, 1, "Ann")
    old = add_followup(db, 1, 1, hours_from_now=-100, status="done")
    undated = add_followup(db, 1, 1)
    soon = add_followup(db, 1, 1, hours_from_now=5)

    profile = client.get(profile_url(), headers=admin_headers).json()

    assert [f["id"] for f in profile["followups"]] == [soon.id, old.id, undated.id]
    assert profile["upcoming"]["id"] == soon.id
    assert profile["last_done"]["id"] == old.id
    assert profile["counts"] == {"pending": 2, "done": 1, "reached_out": 0}


def test_intake_patch_mirrors_to_master(client, admin_headers, nutritionist_headers, onboarded):
    response = client.patch(
        "/api/companies/1/clients/1/intake",
        headers=nutritionist_headers,
        json={"name": "Ann Lee-Park", "age": "42", "requirements": "low sodium", "first_followup_at": ""},
    )

    assert response.status_code == 200
    profile = response.json()
    assert (profile["client"]["name"], profile["client"]["age"]) == ("Ann Lee-Park", 42)
    assert profile["client"]["requirements"] is None
    assert profile["intake"]["requirements"] == "low sodium"
    assert profile["intake"]["updated_by"] == "Priya Nair"
    assert profile["intake"]["first_followup_at"] == "2031-05-01T00:00:00Z"


def test_intake_patch_creates_missing_intake(client, admin_headers, db):
    add_client(db, 2, 4, "Dee")

    response = client.patch("/api/companies/2/clients/4/intake", headers=admin_headers, json={"notes": "walk-in"})

    intake = response.json()["intake"]
    assert (intake["company_name"], intake["notes"]) == ("Globex", "walk-in")


def test_intake_patch_for_unknown_client_writes_nothing(client, admin_headers, db):
    response = client.patch("/api/companies/1/clients/999/intake", headers=admin_headers, json={"notes": "x"})

    assert response.status_code == 404
    assert response.json() == {"error": "Client not found"}
    assert db.query(IntakeRecord).count() == 0


def test_intake_patch_normalizes_status(client, admin_headers, onboarded):
    response = client.patch("/api/companies/1/clients/1/intake", headers=admin_headers, json={"status": " DONE "})

    assert response.json()["intake"]["status"] == "done"


def test_intake_patch_rejects_unknown_status(client, admin_headers, onboarded, db):
    response = client.patch(
        "/api/companies/1/clients/1/intake", headers=admin_headers, json={"status": "High", "notes": "changed"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "status must be pending | done | reached_out"
    db.expire_all()
    intake = crud.intake.get(db, company_id=1, client_id=1)
    assert (intake.status, intake.notes) == ("pending", "prefers mornings")



def test_delete_intake_keeps_master(client, admin_headers, onboarded):
    response = client.delete("/api/companies/1/clients/1/intake", headers=admin_headers)

    assert response.json() == {"ok": True, "deleted_client_id": 1}
    profile = client.get(profile_url(), headers=admin_headers).json()
    assert profile["intake"] is None
    assert profile["client"]["name"] == "Ann Lee"
    assert len(profile["followups"]) == 1

    again = client.delete("/api/companies/1/clients/1/intake", headers=admin_headers)
    assert again.status_code == 404
    assert again.json() == {"error": "Intake record not found"}


def test_delete_client_keeps_intake(client, admin_headers, onboarded, db):
    response = client.delete("/api/companies/1/clients/1", headers=admin_headers)

    assert response.json() == {"ok": True, "deleted_client_id": 1}
    assert client.get(profile_url(), headers=admin_headers).status_code == 404
    assert crud.intake.get(db, company_id=1, client_id=1) is not None
    assert crud.followup.list_for_client(db, company_id=1, client_id=1) == []


def test_deletes_are_admin_only(client, nutritionist_headers, onboarded):
    assert client.delete("/api/companies/1/clients/1", headers=nutritionist_headers).status_code == 403
    assert client.delete("/api/companies/1/clients/1/intake", headers=nutritionist_headers).status_code == 403


def test_update_client(client, admin_headers, onboarded):
    response = client.put("/api/companies/1/clients/1", headers=admin_headers, json={"given_plan": "Plan B"})

    assert response.status_code == 200
    assert response.json()["client"]["given_plan"] == "Plan B"
    assert response.json()["client"]["name"] == "Ann Lee"


@pytest.mark.parametrize(
    "body, error",
    [({}, "No updatable fields provided"), ({"name": " "}, "name must not be empty")],
)
def test_update_client_validation(client, admin_headers, onboarded, body, error):
    response = client.put("/api/companies/1/clients/1", headers=admin_headers, json=body)

    assert response.status_code == 400
    assert response.json()["error"] == error


def test_list_companies_for_any_role(client, client_headers):
    response = client.get("/api/companies", headers=client_headers)

    assert response.json() == [{"company_id": 1, "name": "Acme Corp"}, {"company_id": 2, "name": "Globex"}]


def test_company_client_listing(client, nutritionist_headers, db):
    add_client(db, 1, 1, "Ann")
    add_client(db, 1, 2, "Ben")
    add_followup(db, 1, 1, hours_from_now=-60, assigned="Priya Nair")
    add_followup(db, 1, 2, hours_from_now=-60, assigned="Other")

    response = client.get("/api/companies/1/clients", headers=nutritionist_headers, params={"status": "overdue"})

    body = response.json()
    assert body["company"]["name"] == "Acme Corp"
    followups = {c["client_id"]: c["followups"] for c in body["clients"]}
    assert len(followups[1]) == 1 and followups[1][0]["overdue"] is True
    assert followups[2] == []


def test_company_client_listing_unknown_company(client, admin_headers):
    response = client.get("/api/companies/99/clients", headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Company not found"}


def test_client_home(client, client_headers, db):
    add_client(db, 1, 1, "Carol Client")

    body = client.get("/api/client/home", headers=client_headers).json()

    assert body["user"] == {"name": "Carol Client", "email": "carol@example.com", "client_id": 1, "company_id": 1}
    assert body["client"]["name"] == "Carol Client"


def test_client_home_is_client_only(client, admin_headers):
    assert client.get("/api/client/home", headers=admin_headers).status_code == 403
