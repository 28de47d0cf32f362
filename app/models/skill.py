"""
Skill catalog models - categories, skills and the join between them.

The catalog is read-only at runtime; scripts/seed.py populates it.
"""
from typing import List
from sqlalchemy import Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.base import BaseModel


# A skill may appear in several categories
categories_skills = Table(
    "categories_skills",
    Base.metadata,
    Column("category_id", Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", Uuid(as_uuid=True), ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)


class Category(BaseModel):
    """Skill category, e.g. 'Music' or 'Programming'."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    skills: Mapped[List["Skill"]] = relationship(
        "Skill",
        secondary=categories_skills,
        back_populates="categories",
    )

    def __repr__(self) -> str:
        return f"<Category {self.name}>"


class Skill(BaseModel):
    """A learnable / teachable skill."""

    __tablename__ = "skills"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)

    categories: Mapped[List[Category]] = relationship(
        Category,
        secondary=categories_skills,
        back_populates="skills",
    )

    def __repr__(self) -> str:
        return f"<Skill {self.name}>"
