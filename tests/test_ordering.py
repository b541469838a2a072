# =============================================================================
# tests/test_ordering.py - Ordered Collection Tests
# =============================================================================
# Tests for the experience/education display order:
# - list order (sort_order, then id)
# - append-on-create
# - strict full-permutation reorder, all-or-nothing
#
# Run with: pytest tests/test_ordering.py -v
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import Update

from app.exceptions import InvalidOrderSetError
from core.models.education import EducationCreate
from core.models.ordering import CollectionKind
from core.services.education_service import EducationService
from core.services.ordering_service import OrderingService
from core.tables import Education


def _education(db, name, sort_order=None):
    return EducationService.create_education(
        db, EducationCreate(name=name, category="Machine Learning", sort_order=sort_order)
    )


def _names(items):
    return [item.name for item in items]


class TestListOrder:
    """Tests for OrderingService.list_items and next_sort_order."""

    def test_sorted_by_sort_order(self, db):
        _education(db, "Third", sort_order=5)
        _education(db, "First", sort_order=0)
        _education(db, "Second", sort_order=2)

        assert _names(OrderingService.list_items(db, CollectionKind.EDUCATION)) == ["First", "Second", "Third"]

    def test_ties_broken_by_id(self, db):
        first = _education(db, "A", sort_order=1)
        second = _education(db, "B", sort_order=1)

        items = OrderingService.list_items(db, CollectionKind.EDUCATION)

        assert [item.id for item in items] == sorted([first.id, second.id])

    def test_create_without_sort_order_appends(self, db):
        _education(db, "A", sort_order=3)

        appended = _education(db, "B")

        assert appended.sort_order == 4
        assert _names(EducationService.list_education(db)) == ["A", "B"]

    def test_next_sort_order_empty(self, db):
        assert OrderingService.next_sort_order(db, CollectionKind.EXPERIENCES) == 0


class TestReorder:
    """Tests for OrderingService.reorder."""

    def test_two_entry_scenario(self, db):
        # Arrange
        ml = _education(db, "ML Specialization", sort_order=0)
        pm = _education(db, "PM Cert", sort_order=1)

        # Act
        OrderingService.reorder(db, CollectionKind.EDUCATION, [pm.id, ml.id])

        # Assert
        assert _names(EducationService.list_education(db)) == ["PM Cert", "ML Specialization"]

    def test_positions_are_rewritten_densely(self, db):
        a = _education(db, "A", sort_order=10)
        b = _education(db, "B", sort_order=20)
        c = _education(db, "C", sort_order=30)

        result = OrderingService.reorder(db, CollectionKind.EDUCATION, [c.id, a.id, b.id])

        assert [(item.name, item.sort_order) for item in result] == [("C", 0), ("A", 1), ("B", 2)]

    def test_reorder_is_persisted(self, db):
        a = _education(db, "A")
        b = _education(db, "B")

        OrderingService.reorder(db, CollectionKind.EDUCATION, [b.id, a.id])
        db.expire_all()

        assert db.get(Education, b.id).sort_order == 0
        assert db.get(Education, a.id).sort_order == 1

    def test_empty_collection_accepts_empty_list(self, db):
        assert OrderingService.reorder(db, CollectionKind.EXPERIENCES, []) == []

    @pytest.mark.parametrize("case", ["missing", "unknown", "duplicate"])
    def test_invalid_sets_change_nothing(self, db, case):
        # Arrange
        a = _education(db, "A")
        b = _education(db, "B")
        c = _education(db, "C")
        ids = {
            "missing": [c.id, a.id],
            "unknown": [c.id, b.id, a.id, 999],
            "duplicate": [c.id, c.id, b.id, a.id],
        }[case]

        # Act
        with pytest.raises(InvalidOrderSetError) as exc_info:
            OrderingService.reorder(db, CollectionKind.EDUCATION, ids)

        # Assert: Error says what is wrong, order untouched
        assert exc_info.value.status_code == 400
        assert _names(EducationService.list_education(db)) == ["A", "B", "C"]

    def test_entry_vanishing_mid_reorder_rolls_back(self, db):
        # Arrange: The second position update matches no row, as if the
        # entry was deleted after the id check
        a = _education(db, "A")
        b = _education(db, "B")
        c = _education(db, "C")
        real_execute = db.execute
        updates = []

        def execute(statement, *args, **kwargs):
            if isinstance(statement, Update):
                updates.append(statement)
                if len(updates) == 2:
                    return MagicMock(rowcount=0)
            return real_execute(statement, *args, **kwargs)

        # Act
        with patch.object(db, "execute", side_effect=execute):
            with pytest.raises(InvalidOrderSetError) as exc_info:
                OrderingService.reorder(db, CollectionKind.EDUCATION, [c.id, b.id, a.id])

        # Assert: The first write was undone too
        assert exc_info.value.details["missing_ids"] == [b.id]
        db.expire_all()
        items = OrderingService.list_items(db, CollectionKind.EDUCATION)
        assert [(item.name, item.sort_order) for item in items] == [("A", 0), ("B", 1), ("C", 2)]

    def test_error_details(self, db):
        a = _education(db, "A")
        _education(db, "B")

        with pytest.raises(InvalidOrderSetError) as exc_info:
            OrderingService.reorder(db, CollectionKind.EDUCATION, [a.id, a.id, 77])

        details = exc_info.value.details
        assert details["duplicate_ids"] == [a.id]
        assert details["unknown_ids"] == [77]
        assert len(details["missing_ids"]) == 1


class TestReorderApi:
    """Tests for PATCH /api/admin/{collection}/reorder."""

    def test_education_reorder_scenario(self, admin_client):
        # Arrange
        first = admin_client.post(
            "/api/admin/education",
            json={"name": "ML Specialization", "category": "Machine Learning", "sortOrder": 0},
        ).json()
        second = admin_client.post(
            "/api/admin/education",
            json={"name": "PM Cert", "category": "Product Management", "sortOrder": 1},
        ).json()

        # Act
        response = admin_client.patch(
            "/api/admin/education/reorder", json={"ids": [second["id"], first["id"]]}
        )

        # Assert: Both the admin answer and the public list agree
        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["PM Cert", "ML Specialization"]
        public = admin_client.get("/api/education").json()
        assert [item["name"] for item in public] == ["PM Cert", "ML Specialization"]

    def test_experience_reorder_partial_set_rejected(self, admin_client):
        body = {
            "jobTitle": "Engineer",
            "company": "Acme",
            "industry": "Software",
            "startDate": "2020-01",
            "description": "Built things",
            "accomplishments": "Shipped",
        }
        first = admin_client.post("/api/admin/experiences", json=body).json()
        admin_client.post("/api/admin/experiences", json={**body, "company": "Globex"})

        response = admin_client.patch("/api/admin/experiences/reorder", json={"ids": [first["id"]]})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ORDER_SET"
