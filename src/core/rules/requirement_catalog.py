"""
Requirement Catalog — which documents each vehicle category must supply.

Static lookup, no state. Keys and document types are normalized to
lowercase when the catalog is built.
"""

from collections.abc import Iterable, Mapping

from src.core.entities.document import normalize_tag


DEFAULT_REQUIREMENTS: dict[str, list[str]] = {
    "bike": ["license", "rc", "pan", "aadhaar"],
    "auto": ["license", "rc", "pan", "aadhaar", "fitnesscertificate"],
    "car": ["license", "rc", "pan", "aadhaar", "fitnesscertificate", "permit", "insurance"],
}


class RequirementCatalog:
    """
    Vehicle category → ordered set of required document types.

    An unknown category maps to the empty tuple, which callers must read
    as "aggregation not applicable", never as "all requirements satisfied".
    """

    def __init__(self, requirements: Mapping[str, Iterable[str]] | None = None):
        source = DEFAULT_REQUIREMENTS if requirements is None else requirements
        self._table: dict[str, tuple[str, ...]] = {}
        for vehicle_type, doc_types in source.items():
            key = normalize_tag(vehicle_type)
            if not key:
                continue
            ordered: list[str] = []
            for doc_type in doc_types:
                tag = normalize_tag(doc_type)
                if tag and tag not in ordered:
                    ordered.append(tag)
            self._table[key] = tuple(ordered)

    def required_types(self, vehicle_type: str | None) -> tuple[str, ...]:
        return self._table.get(normalize_tag(vehicle_type), ())

    def vehicle_types(self) -> tuple[str, ...]:
        return tuple(self._table)

    def is_known_vehicle_type(self, vehicle_type: str | None) -> bool:
        return normalize_tag(vehicle_type) in self._table
