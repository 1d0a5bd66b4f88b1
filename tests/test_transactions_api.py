# tests/test_transactions_api.py
from decimal import Decimal

from fastapi import status

from deebank_admin.main import app
from deebank_admin.models import Deposit
from deebank_admin.services.backend import get_backend
from deebank_admin.services.errors import BackendUnavailable
from tests.conftest import make_deposit, make_profile, make_withdrawal


def locate(client, direction, phone="923456789", raw_status="pendente", **extra):
    return client.post(
        f"/api/v1/transactions/{direction}/locate",
        json={"phone": phone, "status": raw_status, **extra},
    )


class TestSessionRequired:

    def test_missing_token(self, client):
        response = client.post("/api/v1/transactions/deposits/locate", json={"phone": "923456789"})
        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_invalid_token(self, client):
        response = client.post(
            "/api/v1/session/start", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_session_not_started(self, client, auth_headers):
        response = client.get("/api/v1/audit-logs", headers=auth_headers)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["notification"]["level"] == "error"

    def test_start_and_end(self, client, auth_headers):
        response = client.post("/api/v1/session/start", headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["admin_name"] == "Admin Master"
        assert response.json()["audit_entries"] == 0

        assert client.post("/api/v1/session/end", headers=auth_headers).status_code == status.HTTP_200_OK
        assert client.get("/api/v1/audit-logs", headers=auth_headers).status_code == status.HTTP_401_UNAUTHORIZED


class TestStatuses:

    def test_selectable_statuses(self, client):
        response = client.get("/api/v1/transactions/withdrawals/statuses")
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["direction"] == "WITHDRAWAL"
        assert body["selectable"] == ["pendente", "aprovado", "rejeitado"]
        assert "concluido" in body["recognized"]

    def test_unknown_direction(self, client):
        assert client.get("/api/v1/transactions/transfers/statuses").status_code == 422


class TestLocateAndSettle:

    def test_deposit_review_flow(self, admin_client, db_session):
        """Locate a pending deposit, credit it, and find it in the audit log"""
        profile = make_profile(db_session)
        deposit = make_deposit(db_session, profile, valor="5000")

        response = locate(admin_client, "deposits")
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["found"] is True
        assert body["stale"] is False
        assert body["message"] == "Pendente encontrado."
        txn = body["transaction"]
        assert txn["id"] == deposit.id
        assert txn["user_name"] == "Maria Joana"
        assert txn["status"] == "PENDING"

        response = admin_client.post("/api/v1/transactions/deposits/settle", json={
            "transaction_id": deposit.id,
            "new_status": "recarregado",
            "search_token": body["search_token"],
        })
        assert response.status_code == status.HTTP_200_OK
        ack = response.json()
        assert ack["previous_status"] == "pendente"
        assert ack["new_status"] == "recarregado"
        assert ack["status"] == "SETTLED"

        db_session.expire_all()
        assert db_session.get(Deposit, deposit.id).estado == "recarregado"

        logs = admin_client.get("/api/v1/audit-logs").json()
        assert len(logs) == 1
        assert logs[0]["id"] == ack["audit_entry_id"]
        assert logs[0]["admin_name"] == "Admin Master"
        assert logs[0]["action"] == "Aprovação de Depósito"
        assert deposit.id in logs[0]["details"]

    def test_withdrawal_shows_net_payout(self, admin_client, db_session):
        make_withdrawal(db_session, valor="2000")

        body = locate(admin_client, "withdrawals").json()

        assert body["found"] is True
        assert Decimal(str(body["transaction"]["net_payout"])) == Decimal("1800")
        assert body["transaction"]["iban"] == "AO06004000010123456789012"

    def test_invalid_phone_is_a_field_error(self, admin_client):
        response = locate(admin_client, "deposits", phone="12345")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["field"] == "phone"

    def test_invalid_phone_keeps_displayed_transaction(self, admin_client, db_session):
        profile = make_profile(db_session)
        deposit = make_deposit(db_session, profile)
        first = locate(admin_client, "deposits").json()
        assert first["found"] is True

        response = locate(admin_client, "deposits", phone="12")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

        response = admin_client.post("/api/v1/transactions/deposits/settle", json={
            "transaction_id": deposit.id,
            "new_status": "recarregado",
            "search_token": first["search_token"],
        })
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "SETTLED"

    def test_unknown_status_is_a_field_error(self, admin_client):
        response = locate(admin_client, "deposits", raw_status="paid")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["field"] == "new_status"

    def test_not_found_is_not_an_error(self, admin_client, db_session):
        make_profile(db_session)
        response = locate(admin_client, "deposits")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["found"] is False
        assert response.json()["transaction"] is None

    def test_date_filter(self, admin_client, db_session):
        profile = make_profile(db_session)
        make_deposit(db_session, profile)

        body = locate(admin_client, "deposits", on_date="2001-01-01").json()

        assert body["found"] is False

    def test_messages_follow_accept_language(self, admin_client, db_session):
        make_profile(db_session)
        response = admin_client.post(
            "/api/v1/transactions/deposits/locate",
            json={"phone": "923456789"},
            headers={"Accept-Language": "en-US,en;q=0.9"},
        )
        assert response.headers["content-language"] == "en"
        assert response.json()["message"] == "No operation found for this number."

    def test_settle_with_superseded_search(self, admin_client, db_session):
        profile = make_profile(db_session)
        deposit = make_deposit(db_session, profile)
        first = locate(admin_client, "deposits").json()
        locate(admin_client, "deposits")

        response = admin_client.post("/api/v1/transactions/deposits/settle", json={
            "transaction_id": deposit.id,
            "new_status": "recarregado",
            "search_token": first["search_token"],
        })

        assert response.status_code == status.HTTP_409_CONFLICT
        assert admin_client.get("/api/v1/audit-logs").json() == []

    def test_settle_conflict(self, admin_client, db_session):
        profile = make_profile(db_session)
        deposit = make_deposit(db_session, profile)
        body = locate(admin_client, "deposits").json()

        row = db_session.get(Deposit, deposit.id)
        row.estado = "rejeitado"
        db_session.commit()

        response = admin_client.post("/api/v1/transactions/deposits/settle", json={
            "transaction_id": deposit.id,
            "new_status": "recarregado",
            "search_token": body["search_token"],
        })

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "notification" in response.json()
        assert admin_client.get("/api/v1/audit-logs").json() == []

    def test_settle_invalid_status(self, admin_client, db_session):
        make_withdrawal(db_session)
        body = locate(admin_client, "withdrawals").json()

        response = admin_client.post("/api/v1/transactions/withdrawals/settle", json={
            "transaction_id": body["transaction"]["id"],
            "new_status": "recarregado",
            "search_token": body["search_token"],
        })

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["field"] == "new_status"


class TestRecentActivity:

    def test_feed_follows_settlement(self, admin_client, db_session):
        profile = make_profile(db_session)
        deposit = make_deposit(db_session, profile)

        rows = admin_client.get("/api/v1/transactions/deposits/recent").json()["transactions"]
        assert [r["status"] for r in rows] == ["PENDING"]

        body = locate(admin_client, "deposits").json()
        admin_client.post("/api/v1/transactions/deposits/settle", json={
            "transaction_id": deposit.id,
            "new_status": "recarregado",
            "search_token": body["search_token"],
        })

        rows = admin_client.get("/api/v1/transactions/deposits/recent").json()["transactions"]
        assert [r["status"] for r in rows] == ["SETTLED"]

    def test_status_filter_and_limit(self, admin_client, db_session):
        profile = make_profile(db_session)
        for _ in range(3):
            make_deposit(db_session, profile)
        make_deposit(db_session, profile, estado="rejeitado")

        response = admin_client.get(
            "/api/v1/transactions/deposits/recent", params={"status": "pendente", "limit": 2}
        )
        body = response.json()

        assert response.status_code == status.HTTP_200_OK
        assert body["status_filter"] == "pendente"
        assert body["limit"] == 2
        assert len(body["transactions"]) == 2
        assert all(r["raw_status"] == "pendente" for r in body["transactions"])

    def test_refresh(self, admin_client, db_session):
        make_withdrawal(db_session)
        response = admin_client.get("/api/v1/transactions/withdrawals/recent", params={"refresh": True})
        assert len(response.json()["transactions"]) == 1


class TestBackendFailure:

    def test_backend_unavailable_is_a_notification(self, admin_client):
        class DownBackend:
            def find_profile_by_phone(self, phone):
                raise BackendUnavailable("connection refused", operation="find_profile_by_phone")

        app.dependency_overrides[get_backend] = lambda: DownBackend()

        response = locate(admin_client, "deposits")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        notification = response.json()["notification"]
        assert notification["level"] == "error"
        assert notification["message"]
