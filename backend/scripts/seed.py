#!/usr/bin/env python3
"""
Seed script that loads demo data for local development.

Creates:
- Two users (john@example.com, jane@example.com, password "password123")
- Two projects owned by John
- Tasks across every status and priority, some assigned and some overdue
- A "created" activity entry for each task

Usage:
    python -m scripts.seed [--clear]

Options:
    --clear      Clear existing data before seeding
"""

import argparse
import asyncio
import time
from datetime import datetime, timezone

from sqlalchemy import delete

from app.auth import hash_password
from app.database import engine, get_session_context, init_db
from app.models import ActivityAction, ActivityLog, Project, Task, User

DEMO_PASSWORD = "password123"

DEMO_TASKS = [
    # (project index, title, description, status, priority, assignee index, due date)
    (0, "Design Homepage", "Create wireframes and mockups for homepage",
     "pending", "high", 1, datetime(2024, 2, 15, tzinfo=timezone.utc)),
    (0, "Implement User Authentication", "Set up login and registration functionality",
     "in_progress", "high", 0, datetime(2024, 2, 10, tzinfo=timezone.utc)),
    (1, "Create Database Schema", "Design and implement database structure",
     "completed", "medium", 0, datetime(2024, 1, 30, tzinfo=timezone.utc)),
    (1, "Setup CI/CD Pipeline", "Configure automated deployment pipeline",
     "pending", "low", None, datetime(2024, 3, 1, tzinfo=timezone.utc)),
]


async def clear_data():
    """Clear all existing data."""
    print("Clearing existing data...")
    async with get_session_context() as session:
        for model in (ActivityLog, Task, Project, User):
            await session.execute(delete(model))
    print("Data cleared.")


async def seed():
    """Insert the demo users, projects, tasks and activity."""
    password_hash = await hash_password(DEMO_PASSWORD)

    async with get_session_context() as session:
        john = User(name="John Doe", email="john@example.com", password_hash=password_hash)
        jane = User(name="Jane Smith", email="jane@example.com", password_hash=password_hash)
        users = [john, jane]
        session.add_all(users)
        await session.flush()
        print("Created sample users")

        projects = [
            Project(name="Website Redesign", description="Complete redesign of company website", owner_id=john.id),
            Project(name="Mobile App Development", description="Develop mobile app for iOS and Android", owner_id=john.id),
        ]
        session.add_all(projects)
        await session.flush()
        print("Created sample projects")

        for project_idx, title, description, status, priority, assignee_idx, due_date in DEMO_TASKS:
            task = Task(
                title=title,
                description=description,
                status=status,
                priority=priority,
                due_date=due_date,
                project_id=projects[project_idx].id,
                assignee_id=users[assignee_idx].id if assignee_idx is not None else None,
            )
            session.add(task)
            await session.flush()
            session.add(ActivityLog(user_id=john.id, task_id=task.id, action=ActivityAction.CREATED.value))

    print(f"Created {len(DEMO_TASKS)} sample tasks")


async def main(clear: bool = False):
    """Main seeding function."""
    start_time = time.time()

    await init_db()

    if clear:
        await clear_data()

    await seed()
    await engine.dispose()

    elapsed = time.time() - start_time
    print("\nSeeding completed!")
    print(f"  Time: {elapsed:.2f}s")
    print(f"  Login with john@example.com / {DEMO_PASSWORD}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the database with demo data")
    parser.add_argument("--clear", action="store_true", help="Clear existing data first")
    args = parser.parse_args()

    asyncio.run(main(clear=args.clear))
