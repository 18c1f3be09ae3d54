"""HTTP tests for the driver and admin routes."""

import pytest

ADMIN_KEY = "test-admin-key"

API = "/api/v1"
ADMIN = {"X-API-Key": ADMIN_KEY}
BIKE = ("license", "rc", "pan", "aadhaar")


def _as(driver_id):
    return {"X-Driver-Id": driver_id}


def _post_doc(client, driver_id, doc_type, vehicle_type="bike", side=None, extracted=None):
    data = {"docType": doc_type, "vehicleType": vehicle_type}
    if side:
        data["docSide"] = side
    if extracted is not None:
        data["extractedData"] = extracted
    return client.post(
        f"{API}/drivers/me/documents",
        headers=_as(driver_id),
        data=data,
        files={"document": ("doc.jpg", b"\xff\xd8fake", "image/jpeg")},
    )


def _review(client, doc_id, status, remarks=""):
    return client.patch(
        f"{API}/admin/documents/{doc_id}/status",
        headers=ADMIN,
        json={"status": status, "remarks": remarks},
    )


def _driver_status(client, driver_id):
    body = client.get(f"{API}/drivers/{driver_id}/documents", headers=_as(driver_id)).json()
    return body["document_status"], body["is_verified"]


@pytest.fixture
def driver(client):
    resp = client.put(
        f"{API}/admin/drivers/drv-1",
        headers=ADMIN,
        json={"name": "Ravi Kumar", "phone": "+919876543210", "vehicleType": "bike"},
    )
    assert resp.status_code == 200
    return resp.json()


# --- health ---


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["vehicle_types"] == ["bike", "auto", "car"]


# --- upload ---


def test_upload_creates_document(client, driver):
    resp = _post_doc(client, "drv-1", "License", extracted='{"dlNumber": "KA01"}')

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "license front uploaded successfully"
    assert body["created"] is True
    assert body["document"]["status"] == "pending"
    assert body["document"]["extracted_data"] == {"dlNumber": "KA01"}
    assert body["document"]["image_url"].startswith("memory://drv-1/+919876543210.license.front.")
    assert body["document"]["image_url"].endswith(".jpg")
    assert body["driver"]["document_status"] == "pending"


def test_upload_with_bad_extracted_data_stores_empty_object(client, driver):
    resp = _post_doc(client, "drv-1", "pan", extracted="{not json")
    assert resp.status_code == 200
    assert resp.json()["document"]["extracted_data"] == {}

    resp = _post_doc(client, "drv-1", "rc", extracted="[1, 2]")
    assert resp.json()["document"]["extracted_data"] == {}


def test_upload_requires_identity(client, driver):
    resp = client.post(
        f"{API}/drivers/me/documents",
        data={"docType": "pan", "vehicleType": "bike"},
        files={"document": ("doc.jpg", b"x", "image/jpeg")},
    )
    assert resp.status_code == 401


def test_upload_invalid_doc_type(client, driver):
    resp = _post_doc(client, "drv-1", "permit", vehicle_type="bike")
    assert resp.status_code == 400
    assert "Allowed: license, rc, pan, aadhaar" in resp.json()["detail"]


def test_upload_unknown_driver(client):
    assert _post_doc(client, "ghost", "pan").status_code == 404


def test_upload_storage_outage(client, driver, storage):
    storage.fail = True
    assert _post_doc(client, "drv-1", "pan").status_code == 502


# --- listing ---


def test_list_documents_access_rules(client, driver):
    _post_doc(client, "drv-1", "pan")

    own = client.get(f"{API}/drivers/drv-1/documents", headers=_as("drv-1"))
    me = client.get(f"{API}/drivers/me/documents", headers=_as("drv-1"))
    admin = client.get(f"{API}/drivers/drv-1/documents", headers=ADMIN)
    other = client.get(f"{API}/drivers/drv-1/documents", headers=_as("drv-2"))
    anonymous = client.get(f"{API}/drivers/drv-1/documents")

    assert own.status_code == me.status_code == admin.status_code == 200
    assert own.json()["message"] == "Documents retrieved successfully"
    assert own.json()["required_documents"] == list(BIKE)
    assert len(me.json()["docs"]) == 1
    assert other.status_code == 403
    assert anonymous.status_code == 401


def test_list_documents_empty_and_unknown(client, driver):
    body = client.get(f"{API}/drivers/drv-1/documents", headers=_as("drv-1")).json()
    assert body["docs"] == []
    assert body["message"] == "No documents found for this driver."
    assert body["document_status"] == "pending"

    assert client.get(f"{API}/drivers/ghost/documents", headers=ADMIN).status_code == 404


# --- admin ---


def test_admin_routes_require_key(client, driver):
    assert client.get(f"{API}/admin/documents/pending").status_code == 401
    assert client.get(f"{API}/admin/documents/pending", headers={"X-API-Key": "wrong"}).status_code == 403


def test_review_validation_and_not_found(client, driver):
    doc_id = _post_doc(client, "drv-1", "pan").json()["document"]["id"]

    assert _review(client, doc_id, "maybe").status_code == 400
    assert _review(client, "missing", "approved").status_code == 404

    resp = _review(client, doc_id, "verified", "ok")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Document status updated successfully"
    assert resp.json()["document"]["status"] == "approved"


def test_pending_queue_stats_and_lookup(client, driver):
    a = _post_doc(client, "drv-1", "pan").json()["document"]["id"]
    _post_doc(client, "drv-1", "rc")
    _review(client, a, "approved")

    pending = client.get(f"{API}/admin/documents/pending", headers=ADMIN).json()
    stats = client.get(f"{API}/admin/documents/stats", headers=ADMIN).json()
    single = client.get(f"{API}/admin/documents/{a}", headers=ADMIN)

    assert pending["total"] == 1
    assert pending["documents"][0]["doc_type"] == "rc"
    assert stats["approved"] == 1 and stats["pending"] == 1 and stats["total"] == 2
    assert single.json()["status"] == "approved"
    assert client.get(f"{API}/admin/documents/nope", headers=ADMIN).status_code == 404


# --- resend ---


def test_resend_rules(client, driver):
    doc_id = _post_doc(client, "drv-1", "pan").json()["document"]["id"]

    assert client.post(f"{API}/documents/{doc_id}/resend").status_code == 401
    assert client.post(f"{API}/documents/{doc_id}/resend", headers=_as("drv-2")).status_code == 403
    assert client.post(f"{API}/documents/nope/resend", headers=_as("drv-1")).status_code == 404


# --- profile ---


def test_vehicle_type_change_and_profile(client, driver):
    for doc_type in BIKE:
        doc_id = _post_doc(client, "drv-1", doc_type).json()["document"]["id"]
        _review(client, doc_id, "approved")

    resp = client.put(f"{API}/drivers/me/vehicle-type", headers=_as("drv-1"), json={"vehicleType": "car"})
    assert resp.status_code == 200
    assert resp.json()["document_status"] == "pending"
    assert resp.json()["is_verified"] is False

    bad = client.put(f"{API}/drivers/me/vehicle-type", headers=_as("drv-1"), json={"vehicleType": "jet"})
    assert bad.status_code == 400

    profile = client.get(f"{API}/drivers/me", headers=_as("drv-1")).json()
    assert profile["driver"]["vehicle_type"] == "car"
    assert profile["document_count"] == 4
    assert profile["requirements"]["permit"] == "missing"


# --- full scenario ---


def test_bike_driver_lifecycle(client, driver):
    ids = {}
    for doc_type in BIKE:
        ids[doc_type] = _post_doc(client, "drv-1", doc_type).json()["document"]["id"]
    assert _driver_status(client, "drv-1") == ("pending", False)

    for doc_id in ids.values():
        _review(client, doc_id, "approved")
    assert _driver_status(client, "drv-1") == ("approved", True)

    rejected = _review(client, ids["pan"], "rejected", "blurry").json()
    assert rejected["driver"] == {
        "driver_id": "drv-1",
        "vehicle_type": "bike",
        "document_status": "rejected",
        "is_verified": False,
    }

    resend = client.post(f"{API}/documents/{ids['pan']}/resend", headers=_as("drv-1")).json()
    assert resend["message"] == "Document ready for re-upload"
    assert resend["document"]["status"] == "pending"
    assert resend["document"]["remarks"] == ""
    assert resend["driver"]["document_status"] == "pending"

    again = _post_doc(client, "drv-1", "pan").json()
    assert again["created"] is False
    assert again["document"]["id"] == ids["pan"]

    _review(client, ids["pan"], "approved")
    assert _driver_status(client, "drv-1") == ("approved", True)


# --- moderation and limits ---


def test_oversized_upload_is_rejected_before_storage(client, driver, storage):
    resp = client.post(
        f"{API}/drivers/me/documents",
        headers=_as("drv-1"),
        data={"docType": "pan", "vehicleType": "bike"},
        files={"document": ("big.jpg", b"x" * 5000, "image/jpeg")},
    )

    assert resp.status_code == 400
    assert storage.files == {}


def test_review_without_status_is_bad_request(client, driver):
    doc_id = _post_doc(client, "drv-1", "pan").json()["document"]["id"]

    resp = client.patch(f"{API}/admin/documents/{doc_id}/status", headers=ADMIN, json={"remarks": "?"})

    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Invalid status")


def test_admin_deletes_document_image(client, driver, storage):
    ids = {t: _post_doc(client, "drv-1", t).json()["document"]["id"] for t in BIKE}
    for doc_id in ids.values():
        _review(client, doc_id, "approved")
    extra = _post_doc(client, "drv-1", "pan", side="back").json()["document"]
    _review(client, extra["id"], "rejected", "glare")
    assert _driver_status(client, "drv-1") == ("rejected", False)

    assert client.delete(f"{API}/admin/documents/{extra['id']}/image").status_code == 401
    resp = client.delete(f"{API}/admin/documents/{extra['id']}/image", headers=ADMIN)

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Document image deleted successfully"
    assert body["document"]["deleted"] is True
    assert body["document"]["image_url"] is None
    assert body["driver"]["document_status"] == "approved"
    assert extra["storage_ref"] not in storage.files
    assert client.get(f"{API}/admin/documents/{extra['id']}", headers=ADMIN).status_code == 404
    assert client.delete(f"{API}/admin/documents/{extra['id']}/image", headers=ADMIN).status_code == 404
