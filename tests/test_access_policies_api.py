from app.modules.access_policies.models import Effect

from conftest import ALICE, BOB, CAROL


def _grant(client, sales, user_id, effect, fields=None, table="orders_id"):
    return client.post("/api/access-policies", json={
        "userId": user_id,
        "schemaId": sales["schema_id"],
        "tableId": sales[table],
        "effect": effect,
        "fields": fields,
    })


class TestGrant:
    def test_admin_grants_policy(self, client, sales):
        response = _grant(client, sales, ALICE["id"], "allow", ["order_id", "status"])
        assert response.status_code == 201
        body = response.json()
        assert body["userId"] == ALICE["id"]
        assert body["tableId"] == sales["orders_id"]
        assert body["effect"] == "allow"
        assert body["fields"] == ["order_id", "status"]

    def test_conflicting_grant_is_refused(self, client, datastore, sales):
        assert _grant(client, sales, ALICE["id"], "allowAll").status_code == 201
        response = _grant(client, sales, ALICE["id"], "deny", ["total"])
        assert response.status_code == 409
        assert len(datastore.policies.get_policies_for_user(ALICE["id"])) == 1

    def test_same_effect_grant_is_accepted(self, client, sales):
        assert _grant(client, sales, ALICE["id"], "deny", ["total"]).status_code == 201
        assert _grant(client, sales, ALICE["id"], "deny", ["total"]).status_code == 201

    def test_grant_to_unknown_user(self, client, sales):
        assert _grant(client, sales, "ghost", "allowAll").status_code == 404

    def test_grant_with_table_outside_schema(self, client, datastore, sales):
        other = datastore.metadata.create_schema("Finance")
        response = client.post("/api/access-policies", json={
            "userId": ALICE["id"], "schemaId": other.id, "tableId": sales["orders_id"], "effect": "allowAll",
        })
        assert response.status_code == 400

    def test_invalid_effect_is_rejected(self, client, sales):
        assert _grant(client, sales, ALICE["id"], "read").status_code == 422

    def test_regular_user_cannot_grant(self, client, caller, sales):
        caller.act_as(ALICE)
        response = _grant(client, sales, ALICE["id"], "allowAll")
        assert response.status_code == 403
        assert "access_policies:create" in response.json()["detail"]


class TestList:
    def test_admin_lists_all_or_one_user(self, client, datastore, sales):
        datastore.policies.create_policy(ALICE["id"], sales["schema_id"], sales["orders_id"], Effect.ALLOW_ALL)
        datastore.policies.create_policy(BOB["id"], sales["schema_id"], sales["orders_id"], Effect.ALLOW_ALL)

        assert len(client.get("/api/access-policies").json()) == 2
        only_bob = client.get("/api/access-policies", params={"userId": BOB["id"]}).json()
        assert [p["userId"] for p in only_bob] == [BOB["id"]]

    def test_user_sees_only_own_policies(self, client, caller, datastore, sales):
        datastore.policies.create_policy(ALICE["id"], sales["schema_id"], sales["orders_id"], Effect.ALLOW_ALL)
        datastore.policies.create_policy(BOB["id"], sales["schema_id"], sales["orders_id"], Effect.ALLOW_ALL)
        caller.act_as(ALICE)

        own = client.get("/api/access-policies").json()
        assert [p["userId"] for p in own] == [ALICE["id"]]
        assert client.get("/api/access-policies", params={"userId": BOB["id"]}).status_code == 403


class TestCheck:
    def test_check_reports_conflicting_policies(self, client, caller, datastore, sales):
        existing = datastore.policies.create_policy(
            ALICE["id"], sales["schema_id"], sales["orders_id"], Effect.ALLOW, ["status"]
        )
        caller.act_as(ALICE)

        response = client.post("/api/access-policies/check", json={
            "tableId": sales["orders_id"], "effect": "deny", "fields": ["status"],
        })
        assert response.status_code == 200
        body = response.json()
        assert body["conflict"] is True
        assert [p["id"] for p in body["conflictingPolicies"]] == [existing.id]

        clear = client.post("/api/access-policies/check", json={
            "tableId": sales["orders_id"], "effect": "deny", "fields": ["total"],
        }).json()
        assert clear == {"conflict": False, "conflictingPolicies": []}

    def test_user_cannot_check_someone_else(self, client, caller, sales):
        caller.act_as(ALICE)
        response = client.post("/api/access-policies/check", json={
            "userId": BOB["id"], "tableId": sales["orders_id"], "effect": "allowAll",
        })
        assert response.status_code == 403


class TestCopy:
    def test_copy_without_replace(self, client, datastore, sales):
        datastore.policies.create_policy(BOB["id"], sales["schema_id"], sales["orders_id"], Effect.ALLOW, ["order_id"])
        datastore.policies.create_policy(BOB["id"], sales["schema_id"], sales["customers_id"], Effect.ALLOW_ALL)
        datastore.policies.create_policy(CAROL["id"], sales["schema_id"], sales["customers_id"], Effect.ALLOW_ALL)

        response = client.post("/api/access-policies/copy", json={
            "sourceUserId": BOB["id"], "targetUserId": CAROL["id"], "replaceExisting": False,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["copiedCount"] == 2
        assert body["removedCount"] == 0
        assert body["conflicts"] == []
        assert len(datastore.policies.get_policies_for_user(CAROL["id"])) == 3

    def test_copy_with_replace(self, client, datastore, sales):
        datastore.policies.create_policy(BOB["id"], sales["schema_id"], sales["orders_id"], Effect.DENY, ["total"])
        datastore.policies.create_policy(CAROL["id"], sales["schema_id"], sales["customers_id"], Effect.ALLOW_ALL)

        body = client.post("/api/access-policies/copy", json={
            "sourceUserId": BOB["id"], "targetUserId": CAROL["id"], "replaceExisting": True,
        }).json()

        assert body["removedCount"] == 1
        carol = datastore.policies.get_policies_for_user(CAROL["id"])
        assert [(p.table_id, p.effect, p.fields) for p in carol] == [(sales["orders_id"], Effect.DENY, ["total"])]

    def test_copy_reports_conflicts(self, client, datastore, sales):
        datastore.policies.create_policy(BOB["id"], sales["schema_id"], sales["orders_id"], Effect.DENY, ["total"])
        datastore.policies.create_policy(CAROL["id"], sales["schema_id"], sales["orders_id"], Effect.ALLOW_ALL)

        body = client.post("/api/access-policies/copy", json={
            "sourceUserId": BOB["id"], "targetUserId": CAROL["id"],
        }).json()

        assert body["copiedCount"] == 1
        assert len(body["conflicts"]) == 1
        assert body["conflicts"][0]["tableId"] == sales["orders_id"]

    def test_copy_onto_same_user(self, client):
        response = client.post("/api/access-policies/copy", json={
            "sourceUserId": BOB["id"], "targetUserId": BOB["id"],
        })
        assert response.status_code == 400

    def test_copy_unknown_target(self, client):
        response = client.post("/api/access-policies/copy", json={
            "sourceUserId": BOB["id"], "targetUserId": "ghost",
        })
        assert response.status_code == 404

    def test_regular_user_cannot_copy(self, client, caller):
        caller.act_as(ALICE)
        response = client.post("/api/access-policies/copy", json={
            "sourceUserId": BOB["id"], "targetUserId": ALICE["id"],
        })
        assert response.status_code == 403


class TestDelete:
    def test_delete_policy(self, client, datastore, sales):
        policy = datastore.policies.create_policy(ALICE["id"], sales["schema_id"], sales["orders_id"], Effect.ALLOW_ALL)
        assert client.delete(f"/api/access-policies/{policy.id}").status_code == 204
        assert datastore.policies.get_policy(policy.id) is None
        assert client.delete(f"/api/access-policies/{policy.id}").status_code == 404
