"""Tests for goal normalization and importing check-in goals as todos."""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException

from app.models.checkin import CheckIn, normalize_goals
from app.models.todo import Todo, GoalImport
from app.services import goal_importer


class TestNormalizeGoals:
    def test_list_is_trimmed_and_blanks_dropped(self):
        assert normalize_goals([" run ", "", None, "read"]) == ["run", "read"]

    def test_single_string(self):
        assert normalize_goals("meditate") == ["meditate"]

    def test_legacy_fields_used_when_no_list(self):
        assert normalize_goals(None, ["a", "", "c", None]) == ["a", "c"]

    def test_list_wins_over_legacy_fields(self):
        assert normalize_goals(["x"], ["a", "b"]) == ["x"]

    def test_nothing(self):
        assert normalize_goals(None) == []


def add_checkin(db, user_id, **fields):
    fields.setdefault("date", date(2026, 3, 15))
    fields.setdefault("intentions", "Be kind to myself")
    checkin = CheckIn(user_id=user_id, **fields)
    db.add(checkin)
    db.commit()
    db.refresh(checkin)
    return checkin


class TestImportGoals:
    def test_creates_one_todo_per_goal(self, db, make_user):
        user = make_user()
        checkin = add_checkin(db, user.id, goals=["Run 5k", "Call mum"])

        result = goal_importer.import_goals(db, user.id, checkin.id)

        assert result.created is True
        assert [t.text for t in result.todos] == ["Run 5k", "Call mum"]
        for t in result.todos:
            assert t.checkin_id == checkin.id
            assert t.parent_id is None
            assert t.completed is False

    def test_second_import_is_a_noop(self, db, make_user):
        user = make_user()
        checkin = add_checkin(db, user.id, goals=["Run 5k", "Call mum"])

        goal_importer.import_goals(db, user.id, checkin.id)
        again = goal_importer.import_goals(db, user.id, checkin.id)

        assert again.created is False
        assert again.todos == []
        assert db.query(Todo).filter(Todo.checkin_id == checkin.id).count() == 2

    def test_existing_todo_for_checkin_counts_as_imported(self, db, make_user):
        user = make_user()
        checkin = add_checkin(db, user.id, goals=["Run 5k"])
        db.add(Todo(user_id=user.id, text="Run 5k", checkin_id=checkin.id))
        db.commit()

        assert goal_importer.is_imported(db, user.id, checkin.id) is True
        assert goal_importer.import_goals(db, user.id, checkin.id).created is False

    def test_marker_keeps_import_once_after_todos_deleted(self, db, make_user):
        user = make_user()
        checkin = add_checkin(db, user.id, goals=["Run 5k"])
        goal_importer.import_goals(db, user.id, checkin.id)
        db.query(Todo).delete()
        db.commit()

        assert db.query(GoalImport).count() == 1
        assert goal_importer.import_goals(db, user.id, checkin.id).created is False

    def test_legacy_goal_fields(self, db, make_user):
        user = make_user()
        checkin = add_checkin(db, user.id, goal1="Stretch", goal2="  ", goal3="Journal", goal4=None)

        result = goal_importer.import_goals(db, user.id, checkin.id)
        assert [t.text for t in result.todos] == ["Stretch", "Journal"]

    def test_no_goals_is_a_validation_error(self, db, make_user):
        user = make_user()
        checkin = add_checkin(db, user.id, goals=["", "  "])

        with pytest.raises(HTTPException) as exc:
            goal_importer.import_goals(db, user.id, checkin.id)
        assert exc.value.status_code == 400
        assert db.query(Todo).count() == 0
        assert goal_importer.is_imported(db, user.id, checkin.id) is False

    def test_other_users_checkin_is_not_found(self, db, make_user):
        owner = make_user()
        other = make_user(email="sam@example.com")
        checkin = add_checkin(db, owner.id, goals=["Run"])

        with pytest.raises(HTTPException) as exc:
            goal_importer.import_goals(db, other.id, checkin.id)
        assert exc.value.status_code == 404

    def test_not_imported_initially(self, db, make_user):
        user = make_user()
        checkin = add_checkin(db, user.id, goals=["Run"])
        assert goal_importer.is_imported(db, user.id, checkin.id) is False

    def test_losing_a_concurrent_import_reports_already_imported(self, db, make_user, monkeypatch):
        user = make_user()
        checkin = add_checkin(db, user.id, goals=["Run 5k", "Call mum"])
        real_is_imported = goal_importer.is_imported
        calls = []

        def racing_is_imported(session, user_id, checkin_id):
            # The other request commits its import right after our check
            calls.append(checkin_id)
            if len(calls) == 1:
                session.add(GoalImport(user_id=user_id, checkin_id=checkin_id))
                session.commit()
                return False
            return real_is_imported(session, user_id, checkin_id)

        monkeypatch.setattr(goal_importer, "is_imported", racing_is_imported)

        result = goal_importer.import_goals(db, user.id, checkin.id)

        assert result.created is False
        assert result.todos == []
        assert db.query(Todo).count() == 0
        assert db.query(GoalImport).count() == 1

    def test_integrity_error_without_an_import_is_raised(self, db, make_user, monkeypatch):
        user = make_user()
        checkin = add_checkin(db, user.id, goals=["Run 5k"])
        monkeypatch.setattr(goal_importer, "is_imported", lambda *args: False)

        def failing_commit():
            raise IntegrityError("INSERT INTO todos", {}, Exception("foreign key violation"))

        monkeypatch.setattr(db, "commit", failing_commit)

        with pytest.raises(IntegrityError):
            goal_importer.import_goals(db, user.id, checkin.id)
