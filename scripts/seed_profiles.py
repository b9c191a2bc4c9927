"""Seed a handful of demo profiles for local development.

Usage: python scripts/seed_profiles.py   (expects the schema from `alembic upgrade head`)
"""

import asyncio
import os
import sys

# Add parent directory to path so we can import app modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from app.core.errors import Conflict
from app.db.session import async_session_maker, engine
from app.services.profiles import create_profile

DEMO_PROFILES = [
    {"email": "alex@example.com", "display_name": "Alex", "fitness_goal": "lose-weight",
     "workout_type": "cardio", "availability": "morning", "location": "Austin"},
    {"email": "sam@example.com", "display_name": "Sam", "fitness_goal": "lose-weight",
     "workout_type": "cardio, hiit", "availability": "morning", "location": "Austin"},
    {"email": "jordan@example.com", "display_name": "Jordan", "fitness_goal": "build-muscle",
     "workout_type": "strength", "availability": "night", "location": "Denver"},
    {"email": "riley@example.com", "display_name": "Riley", "fitness_goal": "improve-endurance",
     "workout_type": "mixed", "availability": "evening"},
    {"email": "casey@example.com", "display_name": "Casey", "fitness_goal": "maintain",
     "workout_type": "yoga", "availability": "midday", "location": "Austin"},
]


async def main():
    for data in DEMO_PROFILES:
        async with async_session_maker() as session:
            try:
                profile = await create_profile(session, data)
                print(f"Created {profile.email}: {profile.id}")
            except Conflict:
                print(f"Skipped {data['email']} (already exists)")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
