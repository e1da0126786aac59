# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy.orm import Session, aliased
from app.models.database import SessionLocal
from app.models.todo import Todo
import logging

logger = logging.getLogger("cleanup")


def clean_orphaned_subtasks(db: Session = None) -> int:
    """
    Deletes subtasks whose parent todo no longer exists. Deletes through the
    API cascade already; this catches rows left behind by manual DB edits.
    """
    owns_session = db is None
    if owns_session:
        db = SessionLocal()

    try:
        parent = aliased(Todo)
        orphan_ids = [
            row.id
            for row in (
                db.query(Todo.id)
                .outerjoin(parent, Todo.parent_id == parent.id)
                .filter(Todo.parent_id.isnot(None), parent.id.is_(None))
                .all()
            )
        ]

        count = 0
        if orphan_ids:
            count = (
                db.query(Todo)
                .filter(Todo.id.in_(orphan_ids))
                .delete(synchronize_session=False)
            )
        db.commit()

        logger.info(f"🗑️ Deleted {count} orphaned subtasks.")
        return count

    except Exception as e:
        db.rollback()
        logger.error(f"🛑 Orphaned subtask cleanup failed: {e}", exc_info=True)
        raise

    finally:
        if owns_session:
            db.close()
