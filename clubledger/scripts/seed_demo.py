from datetime import date, timedelta
from decimal import Decimal
from types import SimpleNamespace

from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from clubledger.core.config import get_settings
from clubledger.core.security import hash_password
from clubledger.models.event import EventStatus
from clubledger.models.user import User
from clubledger.services.events import EventService
from clubledger.services.general_costs import GeneralCostService
from clubledger.services.ingredients import IngredientService
from clubledger.services.recipes import RecipeService


def seed():
    settings = get_settings()
    engine = create_engine(settings.DATABASE_URL)
    Session = sessionmaker(bind=engine)
    db = Session()

    print("Checking for demo user...")
    email = "demo@clubledger.org"
    user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()

    if user:
        print("Demo user already exists, nothing to seed.")
        return

    print("Creating demo user...")
    user = User(
        email=email,
        hashed_password=hash_password("clubdemo123"),
        full_name="Demo Treasurer",
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    print("Seeding ingredients...")
    ingredients = IngredientService(db, user)
    flour = ingredients.create_ingredient("Farinha de trigo", "kg", Decimal("5.50"))
    carrot = ingredients.create_ingredient("Cenoura", "kg", Decimal("4.20"))
    egg = ingredients.create_ingredient("Ovo", "unit", Decimal("0.80"))

    print("Seeding recipe...")
    # Quantities are for the whole batch of 40 slices
    RecipeService(db, user).create_recipe(
        name="Bolo de Cenoura",
        description="Sheet cake cut into 40 slices",
        yield_quantity=40,
        inputs=[
            SimpleNamespace(ingredient_id=flour.id, total_quantity="2"),
            SimpleNamespace(ingredient_id=carrot.id, total_quantity="1.5"),
            SimpleNamespace(ingredient_id=egg.id, total_quantity="12"),
        ],
    )

    print("Seeding events...")
    events = EventService(db, user)
    today = date.today()
    fair = events.create_event(
        title="Festa Junina",
        event_date=today - timedelta(days=14),
        description="Annual June fair",
        status=EventStatus.COMPLETED,
    )
    events.add_item(fair.id, "Cachorro-quente", "Alimentação", Decimal("5"), 10, Decimal("8"))
    events.add_item(fair.id, "Refrigerante", "Bebidas", Decimal("3"), 5, Decimal("6"))
    events.create_event(title="Bazar de Natal", event_date=today + timedelta(days=30))

    print("Seeding general costs...")
    costs = GeneralCostService(db, user)
    costs.create_cost("Aluguel do salão", Decimal("100"), "Aluguel", today - timedelta(days=20))
    costs.create_cost("Material de limpeza", Decimal("50"), "Limpeza", today - timedelta(days=3))

    db.close()
    print("Seeding complete!")
    print(f"Login with: {email} / clubdemo123")


if __name__ == "__main__":
    seed()
