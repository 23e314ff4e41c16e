from unittest import mock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from agency_crm.services.policy_client_sync import PolicyClientSyncService


@pytest.fixture
def sync(repository):
    return PolicyClientSyncService(repository)


def test_policy_created_for_converted_lead_gets_client(repository, sync, make_lead, make_client, make_policy):
    lead = make_lead()
    client = make_client(lead_id=lead.id)
    policy = make_policy(lead_id=lead.id)

    linked = sync.associate_policy_with_client(policy)

    assert linked.client_id == client.id
    assert repository.get_policy(policy.id).client_id == client.id


def test_existing_client_id_is_left_alone(repository, sync, make_lead, make_client, make_policy):
    lead = make_lead()
    make_client(lead_id=lead.id)
    other = make_client(name="OTHER", email="other@example.com")
    policy = make_policy(lead_id=lead.id, client_id=other.id)

    with mock.patch.object(repository, "update_policy") as update_policy:
        result = sync.associate_policy_with_client(policy)

    update_policy.assert_not_called()
    assert result.client_id == other.id


def test_policy_without_lead_is_left_alone(repository, sync, make_policy):
    policy = make_policy()

    with mock.patch.object(repository, "get_clients_by_lead_id") as lookup:
        result = sync.associate_policy_with_client(policy)

    lookup.assert_not_called()
    assert result is policy
    assert result.client_id is None


def test_unconverted_lead_leaves_client_empty(repository, sync, make_lead, make_policy):
    lead = make_lead()
    policy = make_policy(lead_id=lead.id)

    result = sync.associate_policy_with_client(policy)

    assert result.client_id is None
    assert repository.get_policy(policy.id).client_id is None


def test_association_picks_oldest_client(repository, sync, make_lead, make_client, make_policy):
    lead = make_lead()
    first = make_client(lead_id=lead.id)
    make_client(lead_id=lead.id, name="DUPLICATE")
    policy = make_policy(lead_id=lead.id)

    assert sync.associate_policy_with_client(policy).client_id == first.id


def test_association_failure_returns_input(repository, sync, make_lead, make_client, make_policy):
    lead = make_lead()
    make_client(lead_id=lead.id)
    policy = make_policy(lead_id=lead.id)

    with mock.patch.object(repository, "update_policy", side_effect=SQLAlchemyError("boom")):
        result = sync.associate_policy_with_client(policy)

    assert result is policy
    assert repository.get_policy(policy.id).client_id is None


def test_lead_converted_after_policy_links_on_next_sync(repository, sync, make_lead, make_client, make_policy):
    lead = make_lead()
    policy = make_policy(lead_id=lead.id)
    assert sync.associate_policy_with_client(policy).client_id is None

    client = make_client(lead_id=lead.id)
    sync.sync_policy_to_client(policy.id, repository.get_policy(policy.id), {"premium": 42.0})

    assert repository.get_policy(policy.id).client_id == client.id


def test_sync_never_modifies_client(repository, sync, make_lead, make_client, make_policy):
    lead = make_lead()
    client = make_client(lead_id=lead.id, notes="keep me")
    policy = make_policy(lead_id=lead.id, client_id=client.id, status="active")

    with mock.patch.object(repository, "update_client") as update_client:
        sync.sync_policy_to_client(policy.id, policy, {"status": "active"})

    update_client.assert_not_called()
    assert repository.get_client(client.id).notes == "keep me"


def test_sync_with_dangling_client_does_not_raise(repository, sync, make_policy):
    policy = make_policy(client_id=9999)

    assert sync.sync_policy_to_client(policy.id, policy) is None
    assert repository.get_policy(policy.id).client_id == 9999


def test_sync_without_client_or_lead_is_a_no_op(repository, sync, make_policy):
    policy = make_policy()

    with mock.patch.object(repository, "update_policy") as update_policy:
        sync.sync_policy_to_client(policy.id, policy)

    update_policy.assert_not_called()


def test_sync_failure_is_swallowed(repository, sync, make_lead, make_policy):
    lead = make_lead()
    policy = make_policy(lead_id=lead.id)

    with mock.patch.object(repository, "get_clients_by_lead_id", side_effect=SQLAlchemyError("down")):
        assert sync.sync_policy_to_client(policy.id, policy) is None


def test_association_twice_keeps_the_same_client(repository, sync, make_lead, make_client, make_policy):
    lead = make_lead()
    client = make_client(lead_id=lead.id)
    policy = make_policy(lead_id=lead.id)

    with mock.patch.object(repository, "update_policy", wraps=repository.update_policy) as update_policy:
        first = sync.associate_policy_with_client(policy)
        second = sync.associate_policy_with_client(first)

    assert first.client_id == client.id
    assert second.client_id == client.id
    update_policy.assert_called_once()
