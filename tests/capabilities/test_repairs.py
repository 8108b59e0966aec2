"""Tests for the repair catalog and suggestion synthesis."""

from src.capabilities.features import FEATURE_REGISTRY, features_requiring
from src.capabilities.registry import CAPABILITY_REGISTRY
from src.capabilities.repairs import (
    REPAIR_CATALOG,
    build_repair_suggestion,
    synthesize_repair_suggestions,
)
from src.models.common import RepairAction


class TestRepairCatalog:

    def test_every_capability_has_an_entry(self) -> None:
        assert set(REPAIR_CATALOG) == {c.key for c in CAPABILITY_REGISTRY}

    def test_ui_copy_and_columns_non_empty(self) -> None:
        for key, suggestion in REPAIR_CATALOG.items():
            assert suggestion.ui_copy.short_title, key
            assert suggestion.ui_copy.cta_label, key
            assert suggestion.required_columns, key
            assert suggestion.why_it_matters, key

    def test_catalog_entries_unlock_nothing_by_themselves(self) -> None:
        for suggestion in REPAIR_CATALOG.values():
            assert suggestion.what_it_unlocks == []

    def test_hm_entry(self) -> None:
        hm = REPAIR_CATALOG["cap_hm_assignment"]
        assert hm.required_columns == ["Hiring Manager", "Requisition ID"]
        assert hm.ui_copy.short_title == "Add HM Data"
        assert hm.ui_copy.cta_action == RepairAction.IMPORT_DATA


class TestBuildRepairSuggestion:

    def test_fills_unlocks_without_touching_catalog(self) -> None:
        suggestion = build_repair_suggestion("cap_source_data", ["src_volume_chart"])
        assert suggestion.what_it_unlocks == ["src_volume_chart"]
        assert REPAIR_CATALOG["cap_source_data"].what_it_unlocks == []

    def test_returned_lists_not_shared_with_catalog(self) -> None:
        suggestion = build_repair_suggestion("cap_hm_assignment", ["hm_kpi_tiles"])
        suggestion.required_columns.append("Extra Column")
        suggestion.column_aliases.append("extra")
        hm = REPAIR_CATALOG["cap_hm_assignment"]
        assert hm.required_columns == ["Hiring Manager", "Requisition ID"]
        assert "extra" not in hm.column_aliases

    def test_unknown_capability_gets_generic_copy(self) -> None:
        suggestion = build_repair_suggestion("cap_ghost", ["f"])
        assert suggestion.capability_key == "cap_ghost"
        assert suggestion.ui_copy.short_title
        assert suggestion.ui_copy.cta_label


class TestSynthesis:

    def test_sorted_by_unlock_count_descending(self) -> None:
        failing = [c.key for c in CAPABILITY_REGISTRY]
        suggestions = synthesize_repair_suggestions(failing, FEATURE_REGISTRY, CAPABILITY_REGISTRY)
        counts = [len(s.what_it_unlocks) for s in suggestions]
        assert counts == sorted(counts, reverse=True)
        assert len(suggestions) == len(CAPABILITY_REGISTRY)

    def test_ties_follow_registry_order(self) -> None:
        failing = [c.key for c in reversed(CAPABILITY_REGISTRY)]
        suggestions = synthesize_repair_suggestions(failing, FEATURE_REGISTRY, CAPABILITY_REGISTRY)
        order = [c.key for c in CAPABILITY_REGISTRY]
        for first, second in zip(suggestions, suggestions[1:]):
            if len(first.what_it_unlocks) == len(second.what_it_unlocks):
                assert order.index(first.capability_key) < order.index(second.capability_key)

    def test_unlocks_match_feature_registry(self) -> None:
        (suggestion,) = synthesize_repair_suggestions(
            ["cap_offers"], FEATURE_REGISTRY, CAPABILITY_REGISTRY
        )
        assert suggestion.what_it_unlocks == features_requiring("cap_offers")

    def test_deduplicated_by_capability(self) -> None:
        suggestions = synthesize_repair_suggestions(
            ["cap_offers", "cap_offers"], FEATURE_REGISTRY, CAPABILITY_REGISTRY
        )
        assert len(suggestions) == 1

    def test_capability_gating_nothing_is_skipped(self) -> None:
        suggestions = synthesize_repair_suggestions(["cap_offers"], (), CAPABILITY_REGISTRY)
        assert suggestions == []
