"""
Unit tests for the slab service

Runs against InMemoryInventoryStore, so no database is involved
"""
import pytest

from marmoraria.exceptions import (
    AuthenticationError,
    InsufficientStockError,
    InsufficientVerticesError,
    MissingClientNameError,
    MissingProjectError,
    NotFoundError,
    SlabExhaustedError,
    ValidationError,
)
from marmoraria.geometry.records import MovementType, Point, SlabStatus
from marmoraria.services.identity import IdentityContext, OperatorIdentity
from marmoraria.services.inventory_store import InMemoryInventoryStore
from marmoraria.services.slab_service import NewSlab, SlabService


TENANT = "COMP-A"
OTHER_TENANT = "COMP-B"
HALF_SLAB = [(0, 0), (300, 0), (300, 100), (0, 100)]
L_SHAPE = [(0, 0), (300, 0), (300, 100), (100, 100), (100, 200), (0, 200)]
FULL_SLAB = [(0, 0), (300, 0), (300, 200), (0, 200)]


@pytest.fixture
def store():
    return InMemoryInventoryStore()


@pytest.fixture
def service(store):
    return SlabService(store, IdentityContext(OperatorIdentity(id="USR-1", name="Carlos")))


@pytest.fixture
def slab(service):
    return service.create_slab(TENANT, NewSlab(commercial_name="Preto São Gabriel", width=300, height=200))


class TestCreateSlab:
    """Test registering slabs arriving in stock"""

    def test_new_slab_is_whole_rectangle(self, slab):
        assert slab.status == SlabStatus.WHOLE
        assert slab.total_area == 6.0
        assert slab.available_area == 6.0
        assert slab.current_polygon == (Point(0, 0), Point(300, 0), Point(300, 200), Point(0, 200))
        assert slab.id.startswith("CHP-")
        assert slab.company_id == TENANT
        assert slab.category == "Granito"
        assert slab.quantity == 1

    def test_new_slab_has_entry_record(self, slab):
        assert len(slab.history) == 1
        entry = slab.history[0]
        assert entry.movement_type == MovementType.ENTRY
        assert entry.quantity_change == 1
        assert entry.area_used == 0.0
        assert entry.operator_name == "Carlos"

    def test_entry_index_counts_per_tenant(self, service):
        first = service.create_slab(TENANT, NewSlab(commercial_name="A", width=100, height=100))
        second = service.create_slab(TENANT, NewSlab(commercial_name="B", width=100, height=100))
        other = service.create_slab(OTHER_TENANT, NewSlab(commercial_name="C", width=100, height=100))

        assert (first.entry_index, second.entry_index) == (1, 2)
        assert other.entry_index == 1

    @pytest.mark.parametrize("data", [
        NewSlab(commercial_name="", width=100, height=100),
        NewSlab(commercial_name="X", width=0, height=100),
        NewSlab(commercial_name="X", width=100, height=-1),
        NewSlab(commercial_name="X", width=100, height=100, quantity=0),
    ])
    def test_invalid_entries_rejected(self, service, data):
        with pytest.raises(ValidationError):
            service.create_slab(TENANT, data)

    def test_requires_authenticated_operator(self, store):
        anonymous = SlabService(store, IdentityContext())

        with pytest.raises(AuthenticationError):
            anonymous.create_slab(TENANT, NewSlab(commercial_name="X", width=100, height=100))


class TestQueries:
    """Test tenant isolation and filters"""

    def test_get_slab_of_other_tenant_is_not_found(self, service, slab):
        with pytest.raises(NotFoundError):
            service.get_slab(OTHER_TENANT, slab.id)

    def test_list_newest_first(self, service):
        service.create_slab(TENANT, NewSlab(commercial_name="Old", width=100, height=100))
        service.create_slab(TENANT, NewSlab(commercial_name="New", width=100, height=100))

        names = [s.commercial_name for s in service.list_slabs(TENANT)]

        assert names == ["New", "Old"]

    def test_list_filters(self, service):
        service.create_slab(TENANT, NewSlab(commercial_name="Carrara", category="Mármore",
                                            width=100, height=100))
        cut = service.create_slab(TENANT, NewSlab(commercial_name="Verde Ubatuba", width=300, height=200))
        service.register_cut(TENANT, cut.id, HALF_SLAB, "Ana", "Pia")

        assert [s.commercial_name for s in service.list_slabs(TENANT, search="carr")] == ["Carrara"]
        assert [s.commercial_name for s in service.list_slabs(TENANT, category="mármore")] == ["Carrara"]
        assert [s.id for s in service.list_slabs(TENANT, status=SlabStatus.HAS_REMNANT)] == [cut.id]
        assert service.list_slabs(OTHER_TENANT) == []


class TestRegisterCut:
    """Test cuts going through the service"""

    def test_cut_is_saved(self, service, store, slab):
        updated, record = service.register_cut(TENANT, slab.id, HALF_SLAB, "Maria", "Bancada")

        stored = store.get_by_id(TENANT, slab.id)
        assert stored == updated
        assert stored.available_area == 3.0
        assert stored.status == SlabStatus.HAS_REMNANT
        assert stored.history[0] == record
        assert len(stored.history) == 2

    def test_points_are_clamped_to_slab(self, service, slab):
        updated, _ = service.register_cut(
            TENANT, slab.id, [(-10, -10), (400, 0), (400, 100), (0, 100)], "Maria", "Bancada"
        )

        assert updated.current_polygon[0] == Point(0, 0)
        assert updated.current_width == 300

    def test_preview_does_not_save(self, service, store, slab):
        new_area, area_used = service.preview_area(TENANT, slab.id, HALF_SLAB)

        assert (new_area, area_used) == (3.0, 3.0)
        assert store.get_by_id(TENANT, slab.id) == slab

    def test_invalid_cut_leaves_slab_unchanged(self, service, store, slab):
        with pytest.raises(InsufficientVerticesError):
            service.register_cut(TENANT, slab.id, [(0, 0), (10, 0)], "Maria", "Bancada")

        assert store.get_by_id(TENANT, slab.id) == slab

    def test_cut_requires_client_and_project(self, service, slab):
        with pytest.raises(MissingClientNameError):
            service.register_cut(TENANT, slab.id, HALF_SLAB, "", "Bancada")
        with pytest.raises(MissingProjectError):
            service.register_cut(TENANT, slab.id, HALF_SLAB, "Maria", " ")

    def test_exhausted_slab_cannot_be_cut(self, service, slab):
        tiny = [(0, 0), (10, 0), (10, 10), (0, 10)]
        updated, _ = service.register_cut(TENANT, slab.id, tiny, "Maria", "Bancada")
        assert updated.status == SlabStatus.EXHAUSTED

        with pytest.raises(SlabExhaustedError):
            service.register_cut(TENANT, slab.id, tiny, "Maria", "Bancada")

    def test_negative_area_used_is_recorded(self, service, slab):
        service.register_cut(TENANT, slab.id, HALF_SLAB, "Maria", "Bancada")
        full = [(0, 0), (300, 0), (300, 200), (0, 200)]

        updated, record = service.register_cut(TENANT, slab.id, full, "Maria", "Bancada")

        assert record.area_used == -3.0
        assert updated.available_area == 6.0

    def test_preview_clamps_to_current_remnant(self, service, slab):
        service.register_cut(TENANT, slab.id, HALF_SLAB, "Maria", "Bancada")

        new_area, area_used = service.preview_area(TENANT, slab.id, FULL_SLAB)

        assert (new_area, area_used) == (3.0, 0.0)


class TestWholeUnits:
    """Test withdrawals and restocks"""

    def test_withdraw_decrements_quantity(self, service):
        slab = service.create_slab(TENANT, NewSlab(commercial_name="X", width=300, height=200, quantity=3))

        updated, record = service.withdraw_unit(TENANT, slab.id, "João", "Escada")

        assert updated.quantity == 2
        assert updated.status == SlabStatus.WHOLE
        assert record.movement_type == MovementType.WITHDRAWAL
        assert record.quantity_change == -1
        assert record.area_used == 6.0

    def test_withdraw_last_unit_exhausts(self, service, slab):
        updated, _ = service.withdraw_unit(TENANT, slab.id, "João", "Escada")

        assert updated.quantity == 0
        assert updated.status == SlabStatus.EXHAUSTED

    def test_withdraw_without_stock_fails(self, service, slab):
        service.withdraw_unit(TENANT, slab.id, "João", "Escada")

        with pytest.raises(InsufficientStockError):
            service.withdraw_unit(TENANT, slab.id, "João", "Escada")

    def test_withdraw_requires_client(self, service, slab):
        with pytest.raises(MissingClientNameError):
            service.withdraw_unit(TENANT, slab.id, "", "Escada")

    def test_restock_revives_withdrawn_slab(self, service, slab):
        service.withdraw_unit(TENANT, slab.id, "João", "Escada")

        updated, record = service.restock(TENANT, slab.id, 2)

        assert updated.quantity == 2
        assert updated.status == SlabStatus.WHOLE
        assert record.movement_type == MovementType.RESTOCK
        assert record.quantity_change == 2
        assert [h.movement_type for h in updated.history] == [
            MovementType.RESTOCK, MovementType.WITHDRAWAL, MovementType.ENTRY,
        ]

    def test_withdraw_l_shaped_remnant_uses_polygon_area(self, service, slab):
        cut, _ = service.register_cut(TENANT, slab.id, L_SHAPE, "Maria", "Bancada")
        assert cut.available_area == 4.0

        _, record = service.withdraw_unit(TENANT, slab.id, "João", "Escada")

        assert record.area_used == 4.0

    def test_restock_keeps_cut_slab_as_remnant(self, service):
        slab = service.create_slab(TENANT, NewSlab(commercial_name="X", width=300, height=200, quantity=2))
        cut, _ = service.register_cut(TENANT, slab.id, FULL_SLAB, "Maria", "Bancada")
        assert cut.status == SlabStatus.HAS_REMNANT

        restocked, _ = service.restock(TENANT, slab.id, 1)
        withdrawn, _ = service.withdraw_unit(TENANT, slab.id, "João", "Escada")

        assert restocked.current_polygon == cut.current_polygon
        assert restocked.status == SlabStatus.HAS_REMNANT
        assert withdrawn.status == SlabStatus.HAS_REMNANT

    @pytest.mark.parametrize("amount", [0, -1])
    def test_restock_requires_positive_amount(self, service, slab, amount):
        with pytest.raises(ValidationError):
            service.restock(TENANT, slab.id, amount)


class TestDeleteSlab:

    def test_delete(self, service, store, slab):
        service.delete_slab(TENANT, slab.id)

        assert store.get_by_id(TENANT, slab.id) is None

    def test_delete_other_tenant_not_found(self, service, slab):
        with pytest.raises(NotFoundError):
            service.delete_slab(OTHER_TENANT, slab.id)
