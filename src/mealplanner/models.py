"""SQLAlchemy database models."""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum, IntEnum

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import TypeDecorator, TypeEngine

from mealplanner.database import Base
from mealplanner.units import MeasurementUnit


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class HouseholdRole(str, Enum):
    """Role of a user inside a household."""

    ADMIN = "admin"
    MEMBER = "member"


class MealType(str, Enum):
    """Slot of the day a planned meal occupies."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class DayOfWeek(IntEnum):
    """Day of the week, Sunday first."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class ExactDecimal(TypeDecorator):
    """Unconstrained decimal column that never rounds what it stores.

    SQLite has no exact numeric storage, so there the value is kept as text.
    """

    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine:
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String())
        return dialect.type_descriptor(Numeric(asdecimal=True))

    def process_bind_param(self, value: Decimal | None, dialect: Dialect) -> Decimal | str | None:
        if value is None or dialect.name != "sqlite":
            return value
        return str(value)

    def process_result_value(self, value: object, dialect: Dialect) -> Decimal | None:
        if value is None:
            return None
        return value if isinstance(value, Decimal) else Decimal(str(value))


MeasurementUnitType = SqlEnum(MeasurementUnit, native_enum=False, length=20)
QuantityType = ExactDecimal()


class Household(Base):
    """Tenant boundary owning recipes, meal plans, pantries and shopping lists."""

    __tablename__ = "households"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    members: Mapped[list["UserHousehold"]] = relationship(
        "UserHousehold",
        back_populates="household",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class UserHousehold(Base):
    """Membership of a user in a household."""

    __tablename__ = "user_households"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    household_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("households.id", ondelete="CASCADE"), primary_key=True
    )
    role: Mapped[HouseholdRole] = mapped_column(
        SqlEnum(HouseholdRole, native_enum=False, length=20), nullable=False
    )
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    household: Mapped["Household"] = relationship("Household", back_populates="members")

    __table_args__ = (Index("idx_user_households_user_id", "user_id"),)


class Ingredient(Base):
    """Catalog ingredient shared by every household."""

    __tablename__ = "ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)


class Recipe(Base):
    """Recipe whose ingredient quantities are calibrated to serving_size."""

    __tablename__ = "recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    household_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("households.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    prep_time_minutes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    cook_time_minutes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    serving_size: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    recipe_ingredients: Mapped[list["RecipeIngredient"]] = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_recipes_household_id", "household_id"),
        Index("idx_recipes_name", "name"),
    )


class RecipeIngredient(Base):
    """Quantity of one catalog ingredient used by a recipe."""

    __tablename__ = "recipe_ingredients"

    recipe_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True
    )
    ingredient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ingredients.id"), primary_key=True
    )
    quantity: Mapped[Decimal] = mapped_column(QuantityType, nullable=False)
    unit: Mapped[MeasurementUnit] = mapped_column(MeasurementUnitType, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="recipe_ingredients")
    ingredient: Mapped["Ingredient"] = relationship("Ingredient")


class MealPlan(Base):
    """A household's plan for the week starting on week_start_date."""

    __tablename__ = "meal_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    household_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("households.id", ondelete="CASCADE"), nullable=False
    )
    week_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    planned_meals: Mapped[list["PlannedMeal"]] = relationship(
        "PlannedMeal",
        back_populates="meal_plan",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PlannedMeal.id",
    )

    __table_args__ = (
        Index("idx_meal_plans_household_week", "household_id", "week_start_date", unique=True),
    )


class PlannedMeal(Base):
    """A recipe assigned to a day and meal slot, with its own servings count."""

    __tablename__ = "planned_meals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    meal_plan_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False
    )
    recipe_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("recipes.id", ondelete="RESTRICT"), nullable=False
    )
    day_of_week: Mapped[DayOfWeek] = mapped_column(
        SqlEnum(DayOfWeek, native_enum=False, length=20), nullable=False
    )
    meal_type: Mapped[MealType] = mapped_column(
        SqlEnum(MealType, native_enum=False, length=20), nullable=False
    )
    servings: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    meal_plan: Mapped["MealPlan"] = relationship("MealPlan", back_populates="planned_meals")
    recipe: Mapped["Recipe"] = relationship("Recipe")


class Pantry(Base):
    """Ingredient inventory of a household."""

    __tablename__ = "pantries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    household_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("households.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    items: Mapped[list["PantryItem"]] = relationship(
        "PantryItem",
        back_populates="pantry",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PantryItem.id",
    )


class PantryItem(Base):
    """Stocked quantity of an ingredient in a pantry."""

    __tablename__ = "pantry_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pantry_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("pantries.id", ondelete="CASCADE"), nullable=False
    )
    ingredient_id: Mapped[int] = mapped_column(Integer, ForeignKey("ingredients.id"), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(QuantityType, nullable=False)
    unit: Mapped[MeasurementUnit] = mapped_column(MeasurementUnitType, nullable=False)
    expiry_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    added_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    pantry: Mapped["Pantry"] = relationship("Pantry", back_populates="items")
    ingredient: Mapped["Ingredient"] = relationship("Ingredient")


class ShoppingList(Base):
    """Shopping list, hand-entered or generated from a meal plan."""

    __tablename__ = "shopping_lists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    household_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("households.id", ondelete="CASCADE"), nullable=False
    )
    meal_plan_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("meal_plans.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    items: Mapped[list["ShoppingListItem"]] = relationship(
        "ShoppingListItem",
        back_populates="shopping_list",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ShoppingListItem.id",
    )

    __table_args__ = (Index("idx_shopping_lists_household_id", "household_id"),)


class ShoppingListItem(Base):
    """Line of a shopping list."""

    __tablename__ = "shopping_list_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    shopping_list_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shopping_lists.id", ondelete="CASCADE"), nullable=False
    )
    ingredient_id: Mapped[int] = mapped_column(Integer, ForeignKey("ingredients.id"), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(QuantityType, nullable=False)
    unit: Mapped[MeasurementUnit] = mapped_column(MeasurementUnitType, nullable=False)
    is_checked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    shopping_list: Mapped["ShoppingList"] = relationship("ShoppingList", back_populates="items")
    ingredient: Mapped["Ingredient"] = relationship("Ingredient")
