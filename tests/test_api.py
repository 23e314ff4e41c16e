import pytest
from sqlalchemy.exc import SQLAlchemyError

from agency_crm.core.config import settings
from agency_crm.repositories.crm_repository import CRMRepository

API = settings.api_v1_str


def test_health(api_client):
    response = api_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_requests_without_user_are_rejected(api_client):
    assert api_client.get(f"{API}/leads").status_code == 401
    assert api_client.get(f"{API}/leads", headers={"X-User-Id": "999"}).status_code == 401


def test_create_lead_is_lazy_by_default(api_client, admin, auth, repository):
    response = api_client.post(
        f"{API}/leads",
        json={"first_name": "Jane", "last_name": "Doe", "email": "jane@example.com"},
        headers=auth(admin),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["lead"]["status"] == "new"
    assert body["client"] is None
    assert body["client_error"] is None
    assert repository.get_clients() == []


def test_create_lead_requires_names(api_client, admin, auth):
    response = api_client.post(
        f"{API}/leads", json={"first_name": " ", "last_name": "Doe"}, headers=auth(admin)
    )
    assert response.status_code == 422


def test_eager_create_reports_client_error(api_client, admin, auth, repository, monkeypatch):
    monkeypatch.setattr(settings.sync, "eager_conversion", True)

    def failing_create(self, data):
        raise SQLAlchemyError("insert failed")

    monkeypatch.setattr(CRMRepository, "create_client", failing_create)

    response = api_client.post(
        f"{API}/leads", json={"first_name": "Jane", "last_name": "Doe"}, headers=auth(admin)
    )

    assert response.status_code == 201
    body = response.json()
    assert body["client"] is None
    assert "could not be created" in body["client_error"]
    assert repository.get_lead(body["lead"]["id"]) is not None


def test_eager_create_returns_client(api_client, admin, auth, monkeypatch):
    monkeypatch.setattr(settings.sync, "eager_conversion", True)

    response = api_client.post(
        f"{API}/leads", json={"first_name": "jane", "last_name": "doe"}, headers=auth(admin)
    )

    body = response.json()
    assert body["client"]["name"] == "JANE DOE"
    assert body["client"]["lead_id"] == body["lead"]["id"]
    assert body["client"]["email"] == f"lead{body['lead']['id']}@placeholder.com"


@pytest.mark.parametrize("method", ["patch", "put"])
def test_lead_update_reaches_client(api_client, admin, auth, repository, make_lead, make_client, method):
    lead = make_lead()
    client = make_client(lead_id=lead.id)

    response = getattr(api_client, method)(
        f"{API}/leads/{lead.id}",
        json={"phone_number": "555-0199", "last_name": "Smith"},
        headers=auth(admin),
    )

    assert response.status_code == 200
    assert response.json()["phone_number"] == "555-0199"
    refreshed = repository.get_client(client.id)
    assert refreshed.phone == "555-0199"
    assert refreshed.name == "JANE SMITH"


def test_lead_update_succeeds_when_client_write_fails(
    api_client, admin, auth, repository, make_lead, make_client, monkeypatch
):
    lead = make_lead()
    client = make_client(lead_id=lead.id)

    def failing_update(self, client_id, data):
        raise SQLAlchemyError("client table locked")

    monkeypatch.setattr(CRMRepository, "update_client", failing_update)

    response = api_client.patch(f"{API}/leads/{lead.id}", json={"city": "Austin"}, headers=auth(admin))

    assert response.status_code == 200
    assert response.json()["city"] == "Austin"
    assert repository.get_client(client.id).city is None


def test_lead_name_cannot_be_cleared(api_client, admin, auth, make_lead):
    lead = make_lead()
    response = api_client.patch(f"{API}/leads/{lead.id}", json={"first_name": None}, headers=auth(admin))
    assert response.status_code == 422


def test_update_missing_lead_is_404(api_client, admin, auth):
    response = api_client.patch(f"{API}/leads/12345", json={"city": "Austin"}, headers=auth(admin))
    assert response.status_code == 404
    assert response.json()["detail"] == "Lead not found"


def test_convert_then_conflict(api_client, admin, auth, make_lead):
    lead = make_lead()

    first = api_client.post(f"{API}/leads/{lead.id}/convert", headers=auth(admin))
    second = api_client.post(f"{API}/leads/{lead.id}/convert", headers=auth(admin))

    assert first.status_code == 201
    assert first.json()["lead_id"] == lead.id
    assert second.status_code == 409


def test_create_client_for_converted_lead_conflicts(api_client, admin, auth, make_lead, make_client):
    lead = make_lead()
    make_client(lead_id=lead.id)

    response = api_client.post(
        f"{API}/clients",
        json={"name": "JANE DOE", "email": "jane@example.com", "lead_id": lead.id},
        headers=auth(admin),
    )

    assert response.status_code == 409


def test_delete_lead_cascades_to_policies(api_client, admin, auth, repository, make_lead, make_policy):
    lead = make_lead()
    policy = make_policy(lead_id=lead.id)

    response = api_client.delete(f"{API}/leads/{lead.id}", headers=auth(admin))

    assert response.status_code == 204
    assert repository.get_lead(lead.id) is None
    assert repository.get_policy(policy.id) is None


def test_policy_created_against_converted_lead_gets_client(
    api_client, admin, auth, make_lead, make_client, make_agent
):
    lead = make_lead()
    client = make_client(lead_id=lead.id)
    agent = make_agent()

    response = api_client.post(
        f"{API}/policies",
        json={"policy_number": "POL-100", "agent_id": agent.id, "lead_id": lead.id},
        headers=auth(admin),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["client_id"] == client.id
    assert body["status"] == "pending"


def test_policy_update_links_late_conversion(
    api_client, admin, auth, repository, make_lead, make_client, make_policy
):
    lead = make_lead()
    policy = make_policy(lead_id=lead.id)
    client = make_client(lead_id=lead.id)

    response = api_client.patch(
        f"{API}/policies/{policy.id}", json={"status": "active"}, headers=auth(admin)
    )

    assert response.status_code == 200
    assert response.json()["client_id"] == client.id
    assert repository.get_policy(policy.id).status == "active"


def test_agent_cannot_delete_policy(api_client, auth, make_user, make_policy):
    policy = make_policy()
    agent = make_user(role="agent")

    response = api_client.delete(f"{API}/policies/{policy.id}", headers=auth(agent))

    assert response.status_code == 403


def test_team_leader_can_delete_policy(api_client, auth, make_user, make_policy, repository):
    policy = make_policy()
    leader = make_user(role="team_leader")

    response = api_client.delete(f"{API}/policies/{policy.id}", headers=auth(leader))

    assert response.status_code == 204
    assert repository.get_policy(policy.id) is None


def test_policies_filtered_by_lead(api_client, admin, auth, make_lead, make_policy):
    lead = make_lead()
    mine = make_policy(lead_id=lead.id)
    make_policy(policy_number="POL-OTHER")

    response = api_client.get(f"{API}/policies", params={"lead_id": lead.id}, headers=auth(admin))

    assert [p["id"] for p in response.json()] == [mine.id]


def test_owner_updates_banking_info(api_client, auth, make_user, make_agent):
    owner = make_user(role="agent")
    agent = make_agent(user_id=owner.id, bank_payment_method="check")

    response = api_client.patch(
        f"{API}/agents/{agent.id}/banking-info",
        json={"bank_name": "First Bank", "bank_routing_number": "011000015"},
        headers=auth(owner),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["bank_name"] == "First Bank"
    assert body["bank_payment_method"] == "direct_deposit"


def test_admin_updates_banking_info(api_client, admin, auth, make_agent):
    agent = make_agent()

    response = api_client.patch(
        f"{API}/agents/{agent.id}/banking-info",
        json={"bank_account_number": "123456789"},
        headers=auth(admin),
    )

    assert response.status_code == 200


@pytest.mark.parametrize("role", ["agent", "team_leader"])
def test_other_users_cannot_update_banking_info(api_client, auth, make_user, make_agent, role):
    owner = make_user(role="agent")
    agent = make_agent(user_id=owner.id)
    other = make_user(role=role)

    response = api_client.patch(
        f"{API}/agents/{agent.id}/banking-info",
        json={"bank_name": "Elsewhere"},
        headers=auth(other),
    )

    assert response.status_code == 403


def test_empty_banking_update_is_rejected(api_client, admin, auth, make_agent):
    agent = make_agent()

    response = api_client.patch(f"{API}/agents/{agent.id}/banking-info", json={}, headers=auth(admin))

    assert response.status_code == 400


def test_admin_runs_backfill(api_client, admin, auth, repository, make_lead):
    leads = [make_lead(first_name=f"lead{i}") for i in range(2)]

    response = api_client.post(f"{API}/admin/backfill-lead-clients", headers=auth(admin))

    assert response.status_code == 200
    body = response.json()
    assert body["created"] == 2
    assert body["skipped"] == 0
    assert body["errors"] == 0
    for lead in leads:
        assert len(repository.get_clients_by_lead_id(lead.id)) == 1


def test_backfill_is_admin_only(api_client, auth, make_user):
    leader = make_user(role="team_leader")
    response = api_client.post(f"{API}/admin/backfill-lead-clients", headers=auth(leader))
    assert response.status_code == 403


def test_client_crud(api_client, admin, auth, repository, make_policy):
    created = api_client.post(
        f"{API}/clients",
        json={"name": "ACME HOLDINGS", "email": "ops@acme.test", "date_of_birth": ""},
        headers=auth(admin),
    )
    assert created.status_code == 201
    client_id = created.json()["id"]
    assert created.json()["date_of_birth"] is None

    updated = api_client.patch(f"{API}/clients/{client_id}", json={"city": "Reno"}, headers=auth(admin))
    assert updated.status_code == 200
    assert updated.json()["city"] == "Reno"

    policy = make_policy(client_id=client_id)
    deleted = api_client.delete(f"{API}/clients/{client_id}", headers=auth(admin))
    assert deleted.status_code == 204
    assert repository.get_client(client_id) is None
    assert repository.get_policy(policy.id) is None


def test_agent_cannot_delete_client(api_client, auth, make_user, make_client):
    client = make_client()
    response = api_client.delete(f"{API}/clients/{client.id}", headers=auth(make_user(role="agent")))
    assert response.status_code == 403


def test_client_email_cannot_be_cleared(api_client, admin, auth, make_client):
    client = make_client()
    response = api_client.patch(f"{API}/clients/{client.id}", json={"email": ""}, headers=auth(admin))
    assert response.status_code == 422


def test_deleted_lead_id_is_not_reused(api_client, admin, auth, repository):
    first = api_client.post(
        f"{API}/leads", json={"first_name": "Ann", "last_name": "Old"}, headers=auth(admin)
    ).json()["lead"]
    client = api_client.post(f"{API}/leads/{first['id']}/convert", headers=auth(admin)).json()
    assert api_client.delete(f"{API}/leads/{first['id']}", headers=auth(admin)).status_code == 204

    second = api_client.post(
        f"{API}/leads", json={"first_name": "Bob", "last_name": "New"}, headers=auth(admin)
    ).json()["lead"]
    assert second["id"] != first["id"]

    response = api_client.patch(f"{API}/leads/{second['id']}", json={"notes": "bob notes"}, headers=auth(admin))

    assert response.status_code == 200
    assert repository.get_client(client["id"]).notes is None
    assert repository.get_client(client["id"]).name == "ANN OLD"
    converted = api_client.post(f"{API}/leads/{second['id']}/convert", headers=auth(admin))
    assert converted.status_code == 201


def test_backfill_failure_hides_storage_details(api_client, admin, auth, monkeypatch):
    def failing_list(self):
        raise RuntimeError("disk I/O error at /var/lib/db")

    monkeypatch.setattr(CRMRepository, "get_leads", failing_list)

    response = api_client.post(f"{API}/admin/backfill-lead-clients", headers=auth(admin))

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to run backfill"
