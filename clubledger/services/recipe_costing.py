"""
Recipe Costing Engine.

Converts between the TOTAL (whole batch) quantity a cook enters for an
ingredient and the PER-UNIT quantity stored for it, and aggregates
ingredient costs into a recipe's batch cost and unit cost.

Quantity bases:
- TOTAL: amount of an ingredient needed for all `yield_quantity` units.
  This is what the editor holds and what the API accepts and returns.
- PER-UNIT: amount needed for exactly one yield unit. This is only ever
  written to / read from `recipe_ingredients.quantity_used`.

Cost formulas (always over TOTAL-basis lines):
    batch_cost = Σ (total_quantity × unit_cost)
    unit_cost  = batch_cost / yield_quantity = Σ (per_unit_quantity × unit_cost)

Total quantities have a fixed resolution of QUANTITY_PLACES. Per-unit values
are stored with enough extra places that multiplying back by any realistic
yield and rounding to QUANTITY_PLACES returns the entered total exactly.

Nothing in this module touches the database. Callers normalize on save and
denormalize on load.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Optional, Protocol
from uuid import UUID

logger = logging.getLogger(__name__)

ZERO = Decimal(0)
QUANTITY_PLACES = Decimal("0.000001")


class CatalogIngredient(Protocol):
    """Anything carrying the catalog fields the engine needs (ORM row or schema)."""
    id: UUID
    name: str
    unit_of_measure: str
    unit_cost: Decimal


@dataclass
class IngredientLine:
    """One ingredient of a recipe being edited, on the TOTAL basis."""
    ingredient_id: UUID
    name: str
    unit_of_measure: str
    unit_cost: Decimal
    total_quantity: Decimal = ZERO
    id: Optional[UUID] = None  # recipe_ingredients row id, None until persisted


@dataclass
class StoredLine:
    """A persisted recipe ingredient, on the PER-UNIT basis."""
    ingredient_id: UUID
    quantity_used: Decimal
    id: Optional[UUID] = None


def parse_quantity(raw_value) -> Decimal:
    """
    Parse user input as a decimal quantity.

    Unparseable, empty, non-finite, negative or absurdly large input becomes 0.
    The result is rounded to QUANTITY_PLACES. Never raises.
    """
    if raw_value is None:
        return ZERO
    if isinstance(raw_value, Decimal):
        value = raw_value
    else:
        text = str(raw_value).strip().replace(",", ".")
        try:
            value = Decimal(text)
        except (InvalidOperation, ValueError):
            logger.debug(f"Unparseable quantity {raw_value!r} coerced to 0")
            return ZERO
    if not value.is_finite() or value < 0:
        logger.debug(f"Out of range quantity {raw_value!r} coerced to 0")
        return ZERO
    try:
        return value.quantize(QUANTITY_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.debug(f"Quantity {raw_value!r} too large, coerced to 0")
        return ZERO


def compute_unit_quantity(line: IngredientLine, yield_quantity: int) -> Decimal:
    """Quantity of the ingredient per produced unit, for display. 0 if yield is not positive."""
    if yield_quantity > 0:
        return line.total_quantity / Decimal(yield_quantity)
    return ZERO


def compute_line_cost(line: IngredientLine) -> Decimal:
    """Cost of the whole batch's worth of one ingredient."""
    return line.total_quantity * Decimal(line.unit_cost)


def compute_batch_cost(lines: Iterable[IngredientLine]) -> Decimal:
    """Σ total_quantity × unit_cost over TOTAL-basis lines."""
    return sum((compute_line_cost(line) for line in lines), ZERO)


def compute_unit_cost(lines: Iterable[IngredientLine], yield_quantity: int) -> Decimal:
    """Cost of one yield unit. 0 if yield is not positive."""
    if yield_quantity <= 0:
        return ZERO
    return compute_batch_cost(lines) / Decimal(yield_quantity)


def normalize_for_persistence(lines: Iterable[IngredientLine], yield_quantity: int) -> list[StoredLine]:
    """
    Convert TOTAL-basis lines into PER-UNIT rows ready for storage.

    yield_quantity must be >= 1; request validation guarantees it.
    """
    if yield_quantity < 1:
        raise ValueError(f"yield_quantity must be >= 1, got {yield_quantity}")
    divisor = Decimal(yield_quantity)
    return [
        StoredLine(
            ingredient_id=line.ingredient_id,
            quantity_used=line.total_quantity / divisor,
            id=line.id,
        )
        for line in lines
    ]


def denormalize_for_editing(
    rows: Iterable[StoredLine],
    yield_quantity: int,
    catalog: dict[UUID, CatalogIngredient],
) -> list[IngredientLine]:
    """
    Convert stored PER-UNIT rows back into TOTAL-basis lines for the editor.

    `catalog` maps ingredient id to its current catalog entry; the line
    picks up the ingredient's current name, unit and cost from it.
    """
    if yield_quantity < 1:
        raise ValueError(f"yield_quantity must be >= 1, got {yield_quantity}")
    multiplier = Decimal(yield_quantity)
    lines = []
    for row in rows:
        ingredient = catalog[row.ingredient_id]
        lines.append(IngredientLine(
            ingredient_id=row.ingredient_id,
            name=ingredient.name,
            unit_of_measure=ingredient.unit_of_measure,
            unit_cost=Decimal(ingredient.unit_cost),
            total_quantity=(Decimal(row.quantity_used) * multiplier).quantize(
                QUANTITY_PLACES, rounding=ROUND_HALF_UP
            ),
            id=row.id,
        ))
    return lines


@dataclass
class RecipeEditor:
    """
    Editing state for one recipe: its TOTAL-basis lines and yield.

    Instances are created per request (or per form) and never shared.
    """
    yield_quantity: int = 1
    lines: list[IngredientLine] = field(default_factory=list)

    def index_of(self, ingredient_id: UUID) -> Optional[int]:
        for index, line in enumerate(self.lines):
            if line.ingredient_id == ingredient_id:
                return index
        return None

    def add_ingredient(self, selection: UUID, available: Iterable[CatalogIngredient]) -> Optional[int]:
        """
        Add the selected catalog ingredient with quantity 0.

        Returns the index of the new line (the quantity field to focus), or
        None when the selection is unknown or already in the recipe.
        """
        if self.index_of(selection) is not None:
            return None

        ingredient = next((ing for ing in available if ing.id == selection), None)
        if ingredient is None:
            return None

        self.lines.append(IngredientLine(
            ingredient_id=ingredient.id,
            name=ingredient.name,
            unit_of_measure=ingredient.unit_of_measure,
            unit_cost=Decimal(ingredient.unit_cost),
        ))
        return len(self.lines) - 1

    def set_quantity(self, index: int, raw_value) -> Decimal:
        """Set the TOTAL quantity of the line at `index`; bad input becomes 0."""
        quantity = parse_quantity(raw_value)
        self.lines[index].total_quantity = quantity
        return quantity

    def remove_ingredient(self, ingredient_id: UUID) -> bool:
        index = self.index_of(ingredient_id)
        if index is None:
            return False
        del self.lines[index]
        return True

    def unit_quantity(self, index: int) -> Decimal:
        return compute_unit_quantity(self.lines[index], self.yield_quantity)

    @property
    def batch_cost(self) -> Decimal:
        return compute_batch_cost(self.lines)

    @property
    def unit_cost(self) -> Decimal:
        return compute_unit_cost(self.lines, self.yield_quantity)

    def to_persistence(self) -> list[StoredLine]:
        return normalize_for_persistence(self.lines, self.yield_quantity)

    @classmethod
    def from_storage(
        cls,
        rows: Iterable[StoredLine],
        yield_quantity: int,
        catalog: dict[UUID, CatalogIngredient],
    ) -> "RecipeEditor":
        return cls(
            yield_quantity=yield_quantity,
            lines=denormalize_for_editing(rows, yield_quantity, catalog),
        )
