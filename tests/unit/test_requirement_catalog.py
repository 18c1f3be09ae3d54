"""Unit tests for RequirementCatalog."""

from src.core.rules.requirement_catalog import RequirementCatalog


def test_default_table():
    catalog = RequirementCatalog()
    assert catalog.required_types("bike") == ("license", "rc", "pan", "aadhaar")
    assert catalog.required_types("auto")[-1] == "fitnesscertificate"
    assert set(catalog.required_types("car")) >= {"permit", "insurance"}
    assert catalog.vehicle_types() == ("bike", "auto", "car")


def test_lookup_is_case_insensitive():
    catalog = RequirementCatalog()
    assert catalog.required_types("  BIKE ") == catalog.required_types("bike")
    assert catalog.is_known_vehicle_type("Car")


def test_unknown_vehicle_type_is_empty():
    catalog = RequirementCatalog()
    assert catalog.required_types("truck") == ()
    assert catalog.required_types(None) == ()
    assert catalog.required_types("") == ()
    assert not catalog.is_known_vehicle_type("truck")


def test_custom_table_is_normalized_and_ordered():
    catalog = RequirementCatalog({"Van ": ["PAN", "License", "pan", " "], "": ["rc"]})
    assert catalog.vehicle_types() == ("van",)
    assert catalog.required_types("VAN") == ("pan", "license")
