"""
Seed Example Data for Marmoraria Control

This script seeds the database with a demo company:
1. Company "Marmoraria Exemplo" with an admin and an operator
2. Slabs of each common category, one of them already cut
3. A few consumables, one below its minimum

Run with: python -m scripts.seed_example_data  (from backend/)
"""
from dataclasses import dataclass
from typing import List, Tuple

from sqlalchemy.orm import Session

from marmoraria.db.session import SessionLocal, init_db
from marmoraria.models.user import User, UserRole
from marmoraria.services import account_service, supply_service
from marmoraria.services.identity import IdentityContext
from marmoraria.services.inventory_store import SqlInventoryStore
from marmoraria.services.slab_service import NewSlab, SlabService

DEMO_ADMIN_EMAIL = "admin@exemplo.com.br"
DEMO_OPERATOR_EMAIL = "operador@exemplo.com.br"
DEMO_PASSWORD = "exemplo123"

EXAMPLE_SLABS = [
    NewSlab(commercial_name="Preto São Gabriel", category="Granito", width=300, height=190,
            supplier="Pedreira Capixaba", location="Cavalete 1", purchase_value=1850.0),
    NewSlab(commercial_name="Branco Itaúnas", category="Granito", width=280, height=180,
            supplier="Pedreira Capixaba", location="Cavalete 1", quantity=3, min_quantity=2),
    NewSlab(commercial_name="Carrara", category="Mármore", width=270, height=160,
            supplier="Importadora Sul", location="Cavalete 2", purchase_value=4200.0),
    NewSlab(commercial_name="Branco Prime", category="Quartzo", width=320, height=160,
            thickness="3cm", supplier="Quartz Brasil", location="Cavalete 3"),
]

# (commercial name, remnant outline, client, project)
EXAMPLE_CUTS: List[Tuple[str, list, str, str]] = [
    (
        "Preto São Gabriel",
        [(0, 0), (300, 0), (300, 60), (120, 60), (120, 190), (0, 190)],
        "Maria Souza",
        "Bancada cozinha em L",
    ),
]

EXAMPLE_SUPPLIES = [
    {"name": "Disco diamantado 350mm", "category": "Discos", "quantity": 6, "min_quantity": 2},
    {"name": "Cola PU bicomponente", "category": "Colas", "unit": "kg", "quantity": 1, "min_quantity": 3},
    {"name": "Lixa d'água 220", "category": "Lixas", "quantity": 40, "min_quantity": 10},
]


@dataclass
class SeedSummary:
    company_created: bool = False
    slabs_created: int = 0
    cuts_registered: int = 0
    supplies_created: int = 0


def get_or_create_demo_admin(db: Session) -> Tuple[User, bool]:
    """Existing demo admin, or a new demo company and its admin"""
    admin = account_service.get_user_by_email(db, DEMO_ADMIN_EMAIL)
    if admin:
        return admin, False

    admin = account_service.register_company(
        db,
        admin_name="Administrador Exemplo",
        email=DEMO_ADMIN_EMAIL,
        company_name="Marmoraria Exemplo",
        password=DEMO_PASSWORD,
    )
    account_service.add_team_member(
        db, admin, "Operador Exemplo", DEMO_OPERATOR_EMAIL, UserRole.OPERATOR, DEMO_PASSWORD
    )
    return admin, True


def seed_demo_company(db: Session) -> SeedSummary:
    """
    Seed the demo company. Running it again leaves an already seeded
    company untouched.
    """
    summary = SeedSummary()
    admin, summary.company_created = get_or_create_demo_admin(db)
    if not summary.company_created:
        return summary

    tenant_id = admin.company_id
    identity = IdentityContext.for_user(admin)
    slabs = SlabService(SqlInventoryStore(db), identity)

    created = {}
    for data in EXAMPLE_SLABS:
        created[data.commercial_name] = slabs.create_slab(tenant_id, data)
        summary.slabs_created += 1

    for name, outline, client, project in EXAMPLE_CUTS:
        slabs.register_cut(tenant_id, created[name].id, outline, client, project)
        summary.cuts_registered += 1

    for data in EXAMPLE_SUPPLIES:
        supply_service.create_supply(db, tenant_id, identity, **data)
        summary.supplies_created += 1

    return summary


def main():
    """Main seed function"""
    print("=" * 60)
    print("Marmoraria Control Example Data Seeder")
    print("=" * 60)

    init_db()
    db: Session = SessionLocal()

    try:
        summary = seed_demo_company(db)

        if not summary.company_created:
            print(f"\nDemo company already exists ({DEMO_ADMIN_EMAIL}), nothing to do.")
            return

        print("\n" + "=" * 60)
        print("Seeding complete!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  Slabs: {summary.slabs_created} created, {summary.cuts_registered} cut")
        print(f"  Supplies: {summary.supplies_created} created")
        print(f"\nLogin: {DEMO_ADMIN_EMAIL} / {DEMO_PASSWORD}")

    except Exception as e:
        print(f"\nError: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
