"""Tests for scheduled cleanup jobs and health endpoints."""

from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from app.models.todo import Todo
from app.utils.schedulers.orphan_subtask_cleaner import clean_orphaned_subtasks
from app.utils.schedulers.run_all_cleanups import run_all_cleanups


class TestOrphanSubtaskCleaner:
    def test_removes_only_orphans(self, db, make_user):
        user = make_user()
        parent = Todo(user_id=user.id, text="parent")
        gone = Todo(user_id=user.id, text="gone")
        db.add_all([parent, gone])
        db.commit()
        kept = Todo(user_id=user.id, text="kept child", parent_id=parent.id)
        orphan = Todo(user_id=user.id, text="orphan", parent_id=gone.id)
        db.add_all([kept, orphan])
        db.commit()

        # Parent removed behind the API's back
        db.query(Todo).filter(Todo.id == gone.id).delete(synchronize_session=False)
        db.commit()

        assert clean_orphaned_subtasks(db) == 1
        assert {t.text for t in db.query(Todo).all()} == {"parent", "kept child"}

    def test_nothing_to_do(self, db):
        assert clean_orphaned_subtasks(db) == 0

    def test_run_all_cleanups_survives_failing_job(self, caplog):
        with patch(
            "app.utils.schedulers.run_all_cleanups.clean_orphaned_subtasks",
            side_effect=RuntimeError("boom"),
        ):
            run_all_cleanups()
        assert "OrphanedSubtasks cleanup failed" in caplog.text


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_healthz_checks_db(self, client):
        body = client.get("/healthz").json()
        assert body["status"] == "ok"
        assert body["details"]["db_connection"] is True


class TestStoreFailureHandler:
    def test_database_error_becomes_500(self, client, auth_headers):
        headers = auth_headers()
        with patch(
            "app.routers.checkin_router.checkin_service.get_checkin_stats",
            side_effect=OperationalError("SELECT date FROM checkins", {}, Exception("database is locked")),
        ):
            resp = client.get("/checkins/stats", headers=headers)

        assert resp.status_code == 500
        assert resp.json() == {"detail": "Database error, please try again."}
        assert "locked" not in resp.text


class TestDatabaseSetup:
    def test_declarative_base_comes_from_orm(self):
        import sqlalchemy.orm
        from app.models import database

        assert database.declarative_base is sqlalchemy.orm.declarative_base
        assert isinstance(database.Base.registry, sqlalchemy.orm.registry)
