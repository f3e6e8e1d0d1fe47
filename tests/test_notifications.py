from app.modules.notifications.models import NotificationType

from conftest import ALICE, BOB


def _notify(datastore, user_id, message):
    return datastore.notifications.create_notification(user_id, NotificationType.REQUEST_APPROVED, message)


class TestNotifications:
    def test_list_newest_first(self, client, caller, datastore):
        first = _notify(datastore, ALICE["id"], "first")
        second = _notify(datastore, ALICE["id"], "second")
        _notify(datastore, BOB["id"], "not yours")
        caller.act_as(ALICE)

        notes = client.get("/api/notifications").json()
        assert [n["id"] for n in notes] == [second.id, first.id]
        assert notes[0]["read"] is False

    def test_mark_as_read_and_unread_filter(self, client, caller, datastore):
        first = _notify(datastore, ALICE["id"], "first")
        _notify(datastore, ALICE["id"], "second")
        caller.act_as(ALICE)

        assert client.get("/api/notifications/unread-count").json() == {"unread": 2}
        response = client.patch(f"/api/notifications/{first.id}/read")
        assert response.status_code == 200
        assert response.json() == {"success": True}

        unread = client.get("/api/notifications", params={"unreadOnly": True}).json()
        assert [n["message"] for n in unread] == ["second"]
        assert client.get("/api/notifications/unread-count").json() == {"unread": 1}

    def test_cannot_mark_someone_elses_notification(self, client, caller, datastore):
        note = _notify(datastore, BOB["id"], "bob only")
        caller.act_as(ALICE)
        assert client.patch(f"/api/notifications/{note.id}/read").status_code == 403
        assert datastore.notifications.get_notification(note.id).read is False

    def test_unknown_notification(self, client, caller):
        caller.act_as(ALICE)
        assert client.patch("/api/notifications/999/read").status_code == 404
