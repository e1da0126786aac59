# reset_db.py
import sys

import app.models  # noqa: F401  registers every table on Base
from app.models import database
from app.models.database import engine

if __name__ == "__main__":
    if "--yes" not in sys.argv:
        answer = input(f"⚠️ This wipes all MindTrack data in {engine.url!r}. Type 'reset' to continue: ")
        if answer.strip() != "reset":
            print("❌ Aborted.")
            sys.exit(1)

    print("⚠️ Dropping all existing tables...")
    database.Base.metadata.drop_all(bind=engine)

    print("✅ Recreating tables: " + ", ".join(sorted(database.Base.metadata.tables)))
    database.Base.metadata.create_all(bind=engine)

    print("✅ Database reset complete.")
