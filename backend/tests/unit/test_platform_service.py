"""
Unit tests for the platform console service
"""
import pytest

from marmoraria.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from marmoraria.models.company import CompanyStatus
from marmoraria.services import account_service, platform_service
from marmoraria.services.identity import IdentityContext
from marmoraria.services.inventory_store import SqlInventoryStore
from marmoraria.services.slab_service import NewSlab, SlabService


@pytest.fixture
def root(db_session):
    return account_service.ensure_super_admin(db_session, "root@plataforma.com", "raiz123", "Root")


@pytest.fixture
def shop_admin(db_session):
    return account_service.register_company(
        db_session, "Rita", "rita@pedras.com", "Pedras Finas", "segredo123", monthly_fee=199.9
    )


class TestCompanies:

    def test_list_with_slab_counts(self, db_session, root, shop_admin):
        other = platform_service.create_company_account(
            db_session, root, "Beto", "beto@granitos.com", "Arte em Granito", "segredo123"
        )
        slabs = SlabService(SqlInventoryStore(db_session), IdentityContext.for_user(shop_admin))
        slabs.create_slab(shop_admin.company_id, NewSlab(commercial_name="X", width=100, height=100))
        slabs.create_slab(shop_admin.company_id, NewSlab(commercial_name="Y", width=100, height=100))

        listed = [(c.name, n) for c, n in platform_service.list_companies(db_session)]

        assert listed == [("Arte em Granito", 0), ("Pedras Finas", 2)]
        assert platform_service.count_slabs(db_session, other.id) == 0
        assert [c.name for c, _ in platform_service.list_companies(db_session, "pedras")] == ["Pedras Finas"]

    def test_only_super_admin_creates_companies(self, db_session, shop_admin):
        with pytest.raises(PermissionDeniedError):
            platform_service.create_company_account(
                db_session, shop_admin, "Beto", "beto@granitos.com", "Arte em Granito", "segredo123"
            )

    def test_toggle_status(self, db_session, root, shop_admin):
        company_id = shop_admin.company_id

        company = platform_service.toggle_company_status(db_session, root, company_id)
        assert company.status == CompanyStatus.SUSPENDED.value

        company = platform_service.toggle_company_status(db_session, root, company_id)
        assert company.status == CompanyStatus.ACTIVE.value

    def test_toggle_unknown_company(self, db_session, root):
        with pytest.raises(NotFoundError):
            platform_service.toggle_company_status(db_session, root, "COMP-NOPE")

    def test_update_fee(self, db_session, root, shop_admin):
        company = platform_service.update_monthly_fee(db_session, root, shop_admin.company_id, 249.0)

        assert company.monthly_fee == 249.0

    def test_negative_fee_rejected(self, db_session, root, shop_admin):
        with pytest.raises(ValidationError):
            platform_service.update_monthly_fee(db_session, root, shop_admin.company_id, -1)

    def test_company_admin_lookup(self, db_session, root, shop_admin):
        admin = platform_service.get_company_admin(db_session, root, shop_admin.company_id)

        assert admin.email == "rita@pedras.com"


class TestSummary:

    def test_summary(self, db_session, root, shop_admin):
        other = platform_service.create_company_account(
            db_session, root, "Beto", "beto@granitos.com", "Arte em Granito", "segredo123",
            monthly_fee=100.0,
        )
        platform_service.toggle_company_status(db_session, root, other.id)

        summary = platform_service.get_platform_summary(db_session)

        assert summary.company_count == 2
        assert summary.active_companies == 1
        assert summary.suspended_companies == 1
        assert summary.total_slabs == 0
        assert summary.monthly_revenue == 299.9
