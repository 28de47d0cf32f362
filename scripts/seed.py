"""
Seed script - populates the database with the skill catalog and dev users.

Usage:
    python -m scripts.seed

The catalog (categories, skills and their links) is read-only at runtime,
so this script is the only writer for it.

This script is IDEMPOTENT - running it twice won't create duplicates.
It checks for existing data before inserting.
"""
import asyncio
import sys
import os

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.database import async_session_maker, init_db
from app.core.security import hash_password
from app.models.skill import Category, Skill
from app.models.skill_assignment import SkillAssignment
from app.models.user import User
from app.repositories.match_repository import MatchRepository
from sqlalchemy import select
from sqlalchemy.orm import selectinload


# ─── Catalog ───────────────────────────────────────────────────
# category -> skills. A skill listed under two categories is linked to both.

CATALOG = {
    "Art": ["Drawing", "Painting", "Photography", "Pottery", "Sculpture"],
    "Cooking": ["Baking", "Fermentation", "Grilling", "Knife Skills", "Pastry"],
    "Fitness": ["Climbing", "Running", "Swimming", "Weightlifting", "Yoga"],
    "Languages": ["French", "German", "Japanese", "Spanish", "Sign Language"],
    "Music": ["Drums", "Guitar", "Music Production", "Piano", "Singing"],
    "Technology": ["Data Analysis", "Photography", "Python", "Video Editing", "Web Development"],
}


# ─── Dev Users ─────────────────────────────────────────────────

DEV_USERS = [
    {
        "username": "alice",
        "email": "alice@skillswap.dev",
        "password": "password123",
        "description": "Painter who wants to learn to code.",
        "learn": ["Python", "Spanish"],
        "teach": ["Painting", "Drawing"],
    },
    {
        "username": "bob",
        "email": "bob@skillswap.dev",
        "password": "password123",
        "description": "Backend developer and weekend cook.",
        "learn": ["Painting", "Baking"],
        "teach": ["Python", "Data Analysis"],
    },
]


async def seed():
    """Run the seed process."""
    print("Seeding database...")

    # Initialize tables
    await init_db()
    print("  Tables created")

    async with async_session_maker() as db:

        # ── Catalog ────────────────────────────────────────
        result = await db.execute(select(Skill))
        skills = {s.name: s for s in result.scalars().all()}
        result = await db.execute(select(Category).options(selectinload(Category.skills)))
        categories = {c.name: c for c in result.scalars().all()}

        created = 0
        for category_name, skill_names in CATALOG.items():
            category = categories.get(category_name)
            if category is None:
                category = Category(name=category_name, skills=[])
                db.add(category)
                categories[category_name] = category

            for skill_name in skill_names:
                skill = skills.get(skill_name)
                if skill is None:
                    skill = Skill(name=skill_name)
                    db.add(skill)
                    skills[skill_name] = skill
                    created += 1
                if skill not in category.skills:
                    category.skills.append(skill)

        await db.flush()
        print(f"  Catalog: {len(categories)} categories, {created} new skills")

        # ── Users & their skills ───────────────────────────
        users = {}
        for data in DEV_USERS:
            existing = await db.execute(select(User).where(User.username == data["username"]))
            user = existing.scalar_one_or_none()
            if user:
                print(f"  User {data['username']} already exists, skipping...")
                users[data["username"]] = user
                continue

            user = User(
                username=data["username"],
                email=data["email"],
                password_hash=hash_password(data["password"]),
                description=data["description"],
            )
            db.add(user)
            await db.flush()

            for to_learn, names in ((True, data["learn"]), (False, data["teach"])):
                for name in names:
                    db.add(SkillAssignment(
                        user_id=user.id,
                        skill_id=skills[name].id,
                        is_learning=to_learn,
                        is_teaching=not to_learn,
                    ))
            await db.flush()
            users[data["username"]] = user
            print(f"  Created user {data['username']}")

        # ── A confirmed match between the dev users ────────
        match_repo = MatchRepository()
        alice, bob = users["alice"], users["bob"]
        if await match_repo.exists(db, alice.id, bob.id):
            print("  Match already exists, skipping...")
        else:
            await match_repo.create_pair(db, alice.id, bob.id)
            print("  Matched alice <-> bob")

        # Commit everything
        await db.commit()
        print()
        print("Seed complete!")
        for data in DEV_USERS:
            print(f"  Sign in: {data['username']} / {data['password']}")


if __name__ == "__main__":
    asyncio.run(seed())
