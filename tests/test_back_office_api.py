# tests/test_back_office_api.py
from datetime import date, datetime, timedelta
from decimal import Decimal

from fastapi import status

from deebank_admin.models import Product
from tests.conftest import make_deposit, make_profile, make_withdrawal


def audit_actions(client):
    return [entry["action"] for entry in client.get("/api/v1/audit-logs").json()]


class TestCompanyBanks:

    def test_create_defaults(self, admin_client):
        response = admin_client.post("/api/v1/company-banks", json={
            "bank_name": "BAI",
            "iban": " AO06004000010123456789012 ",
        })

        assert response.status_code == status.HTTP_201_CREATED
        bank = response.json()["bank"]
        assert bank["beneficiary"] == "DEEPBANK LDA"
        assert bank["active"] is True
        assert bank["iban"] == "AO06004000010123456789012"
        assert audit_actions(admin_client) == ["Criação de Conta da Empresa"]

    def test_update_toggle_delete(self, admin_client):
        bank_id = admin_client.post("/api/v1/company-banks", json={
            "bank_name": "BAI", "iban": "AO06", "beneficiary": "Outra LDA",
        }).json()["bank"]["id"]

        response = admin_client.put(f"/api/v1/company-banks/{bank_id}", json={"bank_name": "BFA"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["bank"]["bank_name"] == "BFA"

        response = admin_client.post(f"/api/v1/company-banks/{bank_id}/toggle")
        assert response.json()["bank"]["active"] is False

        listed = admin_client.get("/api/v1/company-banks").json()
        assert [b["id"] for b in listed] == [bank_id]

        assert admin_client.delete(f"/api/v1/company-banks/{bank_id}").status_code == status.HTTP_200_OK
        assert admin_client.delete(f"/api/v1/company-banks/{bank_id}").status_code == status.HTTP_404_NOT_FOUND
        assert admin_client.get("/api/v1/company-banks").json() == []
        assert len(audit_actions(admin_client)) == 4

    def test_unchanged_update_is_not_audited(self, admin_client):
        bank_id = admin_client.post("/api/v1/company-banks", json={
            "bank_name": "BAI", "iban": "AO06",
        }).json()["bank"]["id"]

        admin_client.put(f"/api/v1/company-banks/{bank_id}", json={"bank_name": "BAI"})

        assert len(audit_actions(admin_client)) == 1


class TestBonusCodes:

    def test_create_and_delete(self, admin_client):
        response = admin_client.post("/api/v1/bonus-codes", json={
            "code": " bonus10 ",
            "value": "500",
            "expiry_date": (date.today() + timedelta(days=30)).isoformat(),
        })
        assert response.status_code == status.HTTP_201_CREATED
        bonus = response.json()["bonus"]
        assert bonus["code"] == "BONUS10"
        assert Decimal(str(bonus["value"])) == Decimal("500")

        assert [c["code"] for c in admin_client.get("/api/v1/bonus-codes").json()] == ["BONUS10"]

        response = admin_client.delete(f"/api/v1/bonus-codes/{bonus['id']}")
        assert response.status_code == status.HTTP_200_OK
        assert admin_client.get("/api/v1/bonus-codes").json() == []

    def test_duplicate_code(self, admin_client):
        payload = {"code": "VIP", "value": "100", "expiry_date": "2030-01-01"}
        assert admin_client.post("/api/v1/bonus-codes", json=payload).status_code == status.HTTP_201_CREATED

        response = admin_client.post("/api/v1/bonus-codes", json=dict(payload, code="vip"))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert len(audit_actions(admin_client)) == 1

    def test_value_must_be_positive(self, admin_client):
        response = admin_client.post("/api/v1/bonus-codes", json={
            "code": "ZERO", "value": "0", "expiry_date": "2030-01-01",
        })
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestProducts:

    def test_search_and_toggle(self, admin_client, db_session):
        plan = Product(nome="Plano Ouro", categoria="VIP", preco=Decimal("10000"))
        db_session.add_all([plan, Product(nome="Plano Prata", categoria="Basico", preco=Decimal("5000"))])
        db_session.commit()

        found = admin_client.get("/api/v1/products", params={"search": "vip"}).json()
        assert [p["name"] for p in found] == ["Plano Ouro"]

        response = admin_client.post(f"/api/v1/products/{plan.id}/toggle")
        assert response.json()["product"]["status"] == "INACTIVE"
        response = admin_client.post(f"/api/v1/products/{plan.id}/toggle")
        assert response.json()["product"]["status"] == "ACTIVE"
        assert audit_actions(admin_client) == ["Status de Produto", "Status de Produto"]

    def test_toggle_unknown_product(self, admin_client, db_session):
        response = admin_client.post("/api/v1/products/nope/toggle")
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestSupportLinks:

    def test_empty_then_saved(self, admin_client, db_session):
        empty = admin_client.get("/api/v1/support-links").json()
        assert empty["whatsapp_manager_url"] == ""

        response = admin_client.put("/api/v1/support-links", json={
            "whatsapp_manager_url": "https://wa.me/244923456789",
            "whatsapp_sales_group_url": "https://chat.whatsapp.com/abc",
            "telegram_channel_url": "https://t.me/deebank",
        })
        assert response.status_code == status.HTTP_200_OK

        admin_client.put("/api/v1/support-links", json={"telegram_channel_url": "https://t.me/deebank2"})

        links = admin_client.get("/api/v1/support-links").json()
        assert links["telegram_channel_url"] == "https://t.me/deebank2"
        assert links["whatsapp_manager_url"] == ""
        assert len(audit_actions(admin_client)) == 2


class TestUsers:

    def test_search_and_date(self, admin_client, db_session):
        make_profile(db_session, phone="923456789", full_name="Maria Joana")
        older = make_profile(db_session, phone="934567890", full_name="Pedro Silva")
        older.created_at = datetime(2024, 5, 9, 23, 30)
        db_session.commit()

        body = admin_client.get("/api/v1/users", params={"search": "maria"}).json()
        assert body["count"] == 1
        assert body["users"][0]["phone"] == "923456789"

        body = admin_client.get("/api/v1/users", params={"search": "9345"}).json()
        assert [u["full_name"] for u in body["users"]] == ["Pedro Silva"]

        body = admin_client.get("/api/v1/users", params={"date": "2024-05-10"}).json()
        assert [u["full_name"] for u in body["users"]] == ["Pedro Silva"]

    def test_detail_with_totals(self, admin_client, db_session):
        profile = make_profile(db_session)
        make_deposit(db_session, profile, valor="5000", estado="recarregado")
        make_deposit(db_session, profile, valor="3000", estado="aprovado")
        make_deposit(db_session, profile, valor="900", estado="pendente")
        make_withdrawal(db_session, profile=profile)

        body = admin_client.get(f"/api/v1/users/{profile.id}").json()

        assert body["user"]["phone"] == "923456789"
        assert body["user"]["can_withdraw"] is True
        assert Decimal(str(body["total_deposited"])) == Decimal("8000")
        assert body["deposits"] == 3
        assert body["withdrawals"] == 1

    def test_unknown_user(self, admin_client, db_session):
        assert admin_client.get("/api/v1/users/nope").status_code == status.HTTP_404_NOT_FOUND
        response = admin_client.put("/api/v1/users/nope/balance", json={"balance": "10"})
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert audit_actions(admin_client) == []

    def test_balance_adjustment(self, admin_client, db_session):
        profile = make_profile(db_session)

        response = admin_client.put(f"/api/v1/users/{profile.id}/balance", json={"balance": "1500.50"})

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(str(response.json()["user"]["balance"])) == Decimal("1500.50")
        db_session.refresh(profile)
        assert profile.saldo == Decimal("1500.50")
        logs = admin_client.get("/api/v1/audit-logs").json()
        assert [entry["action"] for entry in logs] == ["Ajuste de Saldo"]
        assert "923456789" in logs[0]["details"]

    def test_negative_balance_is_rejected(self, admin_client, db_session):
        profile = make_profile(db_session)

        response = admin_client.put(f"/api/v1/users/{profile.id}/balance", json={"balance": "-1"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        db_session.refresh(profile)
        assert profile.saldo == Decimal("0")
        assert audit_actions(admin_client) == []

    def test_withdrawal_permission_toggle(self, admin_client, db_session):
        profile = make_profile(db_session)

        response = admin_client.post(f"/api/v1/users/{profile.id}/withdrawals/toggle")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["can_withdraw"] is False

        response = admin_client.post(f"/api/v1/users/{profile.id}/withdrawals/toggle")
        assert response.json()["user"]["can_withdraw"] is True

        logs = admin_client.get("/api/v1/audit-logs").json()
        assert [entry["action"] for entry in logs] == ["Permissão de Saque", "Permissão de Saque"]
        assert "Habilitado" in logs[0]["details"]
        assert "Bloqueado" in logs[1]["details"]


class TestDashboard:

    def test_stats(self, admin_client, db_session):
        profile = make_profile(db_session)
        make_profile(db_session, phone="934567890", full_name="Pedro Silva")
        make_deposit(db_session, profile, valor="5000", estado="recarregado")
        make_deposit(db_session, profile, valor="2500", estado="Aprovado")
        make_deposit(db_session, profile, valor="900", estado="pendente")
        make_deposit(db_session, profile, valor="700", estado="rejeitado")
        make_withdrawal(db_session, valor="2000", created_at=datetime(2024, 5, 10, 12, 0))
        make_withdrawal(db_session, valor="300", status="aprovado", created_at=datetime(2024, 5, 9, 23, 30))
        make_withdrawal(db_session, valor="4000", created_at=datetime(2024, 5, 11, 12, 0))
        db_session.add_all([
            Product(nome="Plano Ouro", preco=Decimal("10000")),
            Product(nome="Plano Prata", preco=Decimal("5000"), estado="INACTIVE"),
        ])
        db_session.commit()

        body = admin_client.get("/api/v1/dashboard/stats", params={"date": "2024-05-10"}).json()

        assert body["total_users"] == 2
        assert Decimal(str(body["withdrawals_today"])) == Decimal("2300")
        assert Decimal(str(body["settled_deposits_total"])) == Decimal("7500")
        assert body["active_products"] == 1
        assert body["day"] == "2024-05-10"

    def test_empty_backend(self, admin_client):
        body = admin_client.get("/api/v1/dashboard/stats").json()

        assert body["total_users"] == 0
        assert Decimal(str(body["withdrawals_today"])) == Decimal("0")
        assert Decimal(str(body["settled_deposits_total"])) == Decimal("0")
        assert body["active_products"] == 0

    def test_requires_session(self, client, auth_headers):
        response = client.get("/api/v1/dashboard/stats", headers=auth_headers)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestAuditSearch:

    def test_search(self, admin_client):
        admin_client.post("/api/v1/company-banks", json={"bank_name": "BAI", "iban": "AO06"})
        admin_client.post("/api/v1/bonus-codes", json={
            "code": "NATAL", "value": "50", "expiry_date": "2030-12-25",
        })

        logs = admin_client.get("/api/v1/audit-logs", params={"search": "natal"}).json()

        assert len(logs) == 1
        assert "NATAL" in logs[0]["details"]


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["database"] == "connected"
