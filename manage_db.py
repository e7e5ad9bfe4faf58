#!/usr/bin/env python3
"""
Database management script for the task tracker.
Creates and drops tables and normalizes stored status values.
"""

import sys
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from task_tracker.domain.models.base import ValidationError
from task_tracker.domain.models.task import TaskStatus
from task_tracker.infrastructure.db.database import SessionLocal, create_all_tables, drop_all_tables
from task_tracker.infrastructure.db.models import TaskModel


def init_database():
    """Create all tables."""
    print("Creating tables...")
    create_all_tables()
    print("Done.")


def drop_database():
    """Drop all tables - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        print("Dropping tables...")
        drop_all_tables()
        print("Done.")
    else:
        print("Drop cancelled.")


def reset_database():
    """Drop and recreate all tables."""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        print("Resetting database...")
        drop_all_tables()
        create_all_tables()
        print("Done.")
    else:
        print("Database reset cancelled.")


def normalize_statuses() -> int:
    """
    Rewrite legacy status strings (lowercase, spaced, empty) to their
    canonical tags. Returns the number of rows changed.
    """
    session = SessionLocal()
    changed = 0
    try:
        for model in session.query(TaskModel).all():
            try:
                canonical = TaskStatus.from_string(model.status).value
            except ValidationError:
                print(f"  task {model.id}: unknown status {model.status!r}, left unchanged")
                continue

            if canonical != model.status:
                print(f"  task {model.id}: {model.status!r} -> {canonical}")
                model.status = canonical
                changed += 1

        session.commit()
    finally:
        session.close()

    print(f"Normalized {changed} task(s).")
    return changed


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        print("  init                - Create all tables")
        print("  drop                - Drop all tables (WARNING: drops all data)")
        print("  reset               - Drop and recreate all tables")
        print("  normalize-statuses  - Rewrite legacy status values")
        return

    command_name = sys.argv[1]

    if command_name == "init":
        init_database()
    elif command_name == "drop":
        drop_database()
    elif command_name == "reset":
        reset_database()
    elif command_name == "normalize-statuses":
        normalize_statuses()
    else:
        print(f"Unknown command: {command_name}")
        sys.exit(1)


if __name__ == "__main__":
    main()
