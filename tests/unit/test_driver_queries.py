"""Unit tests for QueryDocumentsUseCase and ManageDriverUseCase."""

import pytest

from src.core.exceptions import NotFoundError, ValidationError


def test_driver_without_documents_gets_empty_list(register, container):
    register("drv-car", vehicle_type="car")

    result = container.queries.list_for_driver("drv-car")

    assert result.documents == []
    assert result.verification.document_status == "pending"
    assert result.verification.is_verified is False
    assert result.required_types == container.catalog.required_types("car")


def test_unknown_driver_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.queries.list_for_driver("ghost")


@pytest.mark.parametrize("driver_id", ["", "undefined", "null"])
def test_invalid_driver_id(container, driver_id):
    with pytest.raises(ValidationError):
        container.queries.list_for_driver(driver_id)


def test_list_includes_documents_of_other_vehicle_types(register, upload, container):
    register("drv-1", vehicle_type="bike")
    upload("drv-1", "pan", vehicle_type="bike")
    upload("drv-1", "permit", vehicle_type="car")

    docs = container.queries.list_for_driver("drv-1").documents

    assert sorted(d.doc_type for d in docs) == ["pan", "permit"]


def test_pending_queue_and_stats(register, upload, container):
    register("drv-1")
    register("drv-2", phone="+919000000002")
    a = upload("drv-1", "pan").document
    b = upload("drv-2", "rc").document
    upload("drv-2", "license")
    container.review.execute(a.id, "verified")
    container.review.execute(b.id, "rejected", "torn")

    pending = container.queries.list_pending()
    stats = container.queries.stats()

    assert [d.doc_type for d in pending] == ["license"]
    assert stats == {"pending": 1, "approved": 1, "rejected": 1, "unknown": 0, "total": 3}


def test_get_document(register, upload, container):
    register("drv-1")
    doc = upload("drv-1", "rc").document

    assert container.queries.get_document(doc.id).doc_type == "rc"
    with pytest.raises(NotFoundError):
        container.queries.get_document("missing")


def test_profile_recomputes_and_breaks_down_requirements(register, upload, container):
    register("drv-1")
    pan = upload("drv-1", "pan").document
    upload("drv-1", "rc")
    container.review.execute(pan.id, "approved")

    profile = container.manage.profile("drv-1")

    assert profile.document_count == 2
    assert profile.verification.document_status == "pending"
    assert profile.requirements == {
        "license": "missing",
        "rc": "pending",
        "pan": "approved",
        "aadhaar": "missing",
    }


def test_profile_unknown_driver(container):
    with pytest.raises(NotFoundError):
        container.manage.profile("ghost")


def test_register_validates_and_updates(container):
    with pytest.raises(ValidationError):
        container.manage.register("drv-x", vehicle_type="boat")
    with pytest.raises(ValidationError):
        container.manage.register("  ")

    created = container.manage.register("drv-x", name="Asha", phone="+919111111111", vehicle_type="Auto")
    assert created.vehicle_type == "auto"
    assert created.document_status == "pending"

    updated = container.manage.register("drv-x", name="Asha R")
    assert updated.name == "Asha R"
    assert updated.phone == "+919111111111"
    assert updated.vehicle_type == "auto"
