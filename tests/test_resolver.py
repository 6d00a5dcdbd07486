"""
GuildPilot Resolver Tests

Tests that verify:
1. Precedence: jurisdiction role > jurisdiction department > national
2. Overlaps always add organizations
3. The catch-all only fills an empty result
4. Aliasing, unknown jurisdictions and input normalization
5. Determinism and memoization
6. The module-level convenience API
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from guildpilot import (
    AuthorityResolver,
    Jurisdiction,
    ResolutionTier,
    get_default_resolver,
    get_organization,
    list_organizations,
    reset_default_resolver,
    resolve_authorities,
    resolve_primary_authority,
)
from guildpilot.config import DEFAULT_CACHE_SIZE, Settings
from guildpilot.engine import create_resolver
from tests.conftest import make_dataset, make_overlap, make_rule


# =============================================================================
# Reference Scenarios (compiled-in dataset)
# =============================================================================

class TestReferenceScenarios:
    """Known answers from the Canadian dataset."""

    def test_quebec_director_of_photography(self, resolver) -> None:
        result = resolver.resolve("Quebec", "Director of Photography", "Camera Department")
        assert "u-aqtis" in result.organization_ids
        assert result.organization_ids == ("u-aqtis",)
        assert result.tiers == (ResolutionTier.JURISDICTION_DEPARTMENT,)

    def test_ontario_grip_has_competing_authority(self, resolver) -> None:
        result = resolver.resolve("Ontario", "Grip", "Grip")
        assert result.organization_ids == ("u-873", "u-nabet")
        assert result.has_competing_authority
        assert result.tiers == (
            ResolutionTier.JURISDICTION_DEPARTMENT,
            ResolutionTier.OVERLAP,
        )

    def test_nunavut_gaffer_uses_national_department(self, resolver) -> None:
        result = resolver.resolve("Nunavut", "Gaffer", "Lighting/Electric")
        assert result.organization_ids == ("u-873",)
        assert result.tiers == (ResolutionTier.NATIONAL_DEPARTMENT,)
        assert result.matches[0].matched_key == "Lighting"

    def test_ontario_blank_inputs_get_catch_all_only(self, resolver) -> None:
        result = resolver.resolve("Ontario", "", "")
        assert result.organization_ids == ("u-873",)
        assert result.used_catch_all

    @pytest.mark.parametrize(
        "jurisdiction, role, department, expected",
        [
            ("British Columbia", "Picture Editor", "Post", ("u-dgc", "u-891")),
            ("Alberta", "Art Director", "Art", ("u-dgc", "u-212")),
            ("Ontario", "Driver", "Transportation", ("u-t938", "u-nabet")),
            ("Ontario", "Coordinator / Driver", "", ("u-411", "u-t938", "u-nabet")),
            ("British Columbia", "Actor", "Performer", ("u-ubcp",)),
            ("Ontario", "Actor", "Performer", ("u-actra",)),
            ("Manitoba", "Attendant", "Craft Service", ("u-856",)),
            ("Nova Scotia", "Key Grip", "Grip", ("u-849",)),
            ("Yukon", "Director of Photography", "", ("u-667",)),
            ("Yukon", "Second Unit Director", "", ("u-dgc",)),
            ("Yukon", "Writer", "Camera Department", ("u-wgc",)),
            ("Yukon", "", "Camera Department", ("u-667",)),
            ("Quebec", "Assistant Director", "Direction", ("u-dgc",)),
        ],
    )
    def test_scenario_grid(self, resolver, jurisdiction, role, department, expected) -> None:
        assert resolver.resolve_ids(jurisdiction, role, department) == expected


# =============================================================================
# Precedence (hand-built datasets)
# =============================================================================

class TestPrecedence:
    def test_all_matching_role_rules_accumulate_in_order(self) -> None:
        dataset = make_dataset(
            overrides={
                "Ontario": [
                    make_rule("o-b", roles=("Driver",)),
                    make_rule("o-c", roles=("Coordinator",)),
                    make_rule("o-a", roles=("Transport",)),
                ]
            }
        )
        result = AuthorityResolver(dataset).resolve("Ontario", "Transport Coordinator", "")
        assert result.organization_ids == ("o-c", "o-a")

    def test_department_rules_only_when_no_role_rule(self) -> None:
        dataset = make_dataset(
            overrides={
                "Ontario": [
                    make_rule("o-a", roles=("Grip",)),
                    make_rule("o-b", departments=("Grip",)),
                ]
            }
        )
        resolver = AuthorityResolver(dataset)
        assert resolver.resolve_ids("Ontario", "Key Grip", "Grip") == ("o-a",)
        assert resolver.resolve_ids("Ontario", "Swing", "Grip") == ("o-b",)

    def test_national_skipped_after_jurisdiction_match(self) -> None:
        dataset = make_dataset(
            national_roles={"Grip": "o-c"},
            overrides={"Ontario": [make_rule("o-a", departments=("Grip",))]},
        )
        resolver = AuthorityResolver(dataset)
        assert resolver.resolve_ids("Ontario", "Key Grip", "Grip") == ("o-a",)
        assert resolver.resolve_ids("Manitoba", "Key Grip", "Grip") == ("o-c",)

    def test_national_role_before_department(self) -> None:
        dataset = make_dataset(
            national_roles={"Grip": "o-a"},
            national_departments={"Camera": "o-b"},
        )
        resolver = AuthorityResolver(dataset)
        assert resolver.resolve_ids("Yukon", "Camera Grip", "Camera") == ("o-a",)
        assert resolver.resolve_ids("Yukon", "Trainee", "Camera") == ("o-b",)

    def test_national_yields_at_most_one(self) -> None:
        dataset = make_dataset(national_roles={"Grip": "o-a", "Key Grip": "o-b"})
        assert AuthorityResolver(dataset).resolve_ids("Yukon", "Key Grip", "") == ("o-b",)

    def test_overlap_adds_to_national_result(self) -> None:
        dataset = make_dataset(
            national_roles={"Grip": "o-a"},
            overlaps={"Yukon": [make_overlap(("o-b", "o-a"), roles=("Grip",))]},
        )
        result = AuthorityResolver(dataset).resolve("Yukon", "Grip", "")
        assert result.organization_ids == ("o-a", "o-b")
        assert [m.tier for m in result.matches] == [
            ResolutionTier.NATIONAL_ROLE,
            ResolutionTier.OVERLAP,
            ResolutionTier.OVERLAP,
        ]

    def test_overlap_alone_prevents_catch_all(self) -> None:
        dataset = make_dataset(
            overlaps={"Yukon": [make_overlap(("o-b",), departments=("Grip",))]},
        )
        result = AuthorityResolver(dataset).resolve("Yukon", "", "Grip")
        assert result.organization_ids == ("o-b",)
        assert not result.used_catch_all

    def test_overlap_label_in_trace(self) -> None:
        dataset = make_dataset(
            overlaps={"Yukon": [make_overlap(("o-b",), roles=("Grip",), label="rival")]},
        )
        match = AuthorityResolver(dataset).resolve("Yukon", "Grip", "").matches[-1]
        assert match.label == "rival"
        assert match.matched_key == "Grip"

    def test_catch_all_when_nothing_matches(self) -> None:
        result = AuthorityResolver(make_dataset()).resolve("Ontario", "Gaffer", "Lighting")
        assert result.organization_ids == ("o-catch",)
        assert result.tiers == (ResolutionTier.CATCH_ALL,)


# =============================================================================
# Jurisdictions and Input Handling
# =============================================================================

class TestJurisdictionHandling:
    @pytest.mark.parametrize("alias", [Jurisdiction.NB, Jurisdiction.PE, Jurisdiction.NL])
    @pytest.mark.parametrize(
        "role, department",
        [("Key Grip", "Grip"), ("DOP / Operator", "Camera"), ("Driver", ""), ("", "")],
    )
    def test_atlantic_alias_equals_nova_scotia(self, resolver, alias, role, department) -> None:
        assert resolver.resolve_ids(alias, role, department) == resolver.resolve_ids(
            Jurisdiction.NS, role, department
        )

    @pytest.mark.parametrize(
        "role, department",
        [("Director of Photography", ""), ("Gaffer", "Lighting/Electric"), ("", "")],
    )
    def test_unknown_jurisdiction_equals_one_without_rules(
        self, resolver, role, department
    ) -> None:
        assert resolver.resolve_ids("Atlantis", role, department) == resolver.resolve_ids(
            "Yukon", role, department
        )

    @pytest.mark.parametrize("jurisdiction", ["Ontario", "ontario", " ON ", Jurisdiction.ON])
    def test_jurisdiction_spellings(self, resolver, jurisdiction) -> None:
        assert resolver.resolve_ids(jurisdiction, "Grip", "Grip") == ("u-873", "u-nabet")

    def test_none_inputs(self, resolver) -> None:
        assert resolver.resolve_ids(None, None, None) == ("u-873",)

    def test_whitespace_only_role_and_department(self, resolver) -> None:
        assert resolver.resolve_ids("Ontario", "   ", "\t") == ("u-873",)

    def test_result_carries_normalized_inputs(self, resolver) -> None:
        result = resolver.resolve("on", "  Key GRIP ", "Grip")
        assert result.jurisdiction == "Ontario"
        assert result.role == "key grip"
        assert result.department == "grip"

    def test_unknown_jurisdiction_logged_at_debug(self, resolver, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="guildpilot.engine.resolver"):
            resolver.resolve("Nunavut", "Gaffer", "")
        assert any("No override rules" in r.getMessage() for r in caplog.records)


# =============================================================================
# Determinism and Caching
# =============================================================================

class TestDeterminismAndCache:
    def test_never_empty(self, resolver) -> None:
        for jurisdiction in list(Jurisdiction) + ["Atlantis"]:
            for role in ("", "Gaffer", "Key Grip", "Actor"):
                assert len(resolver.resolve(jurisdiction, role, "")) >= 1

    def test_uncached_results_equal(self, default_dataset) -> None:
        resolver = AuthorityResolver(default_dataset, cache_enabled=False)
        first = resolver.resolve("Ontario", "Grip", "Grip")
        second = resolver.resolve("Ontario", "Grip", "Grip")
        assert first == second
        assert first is not second
        assert resolver.cache_size == 0

    def test_cache_keyed_on_normalized_inputs(self, resolver) -> None:
        first = resolver.resolve("Ontario", "grip", "grip")
        second = resolver.resolve("ON", "  GRIP ", "Grip")
        assert first is second
        assert resolver.cache_size == 1

    def test_clear_cache(self, resolver) -> None:
        resolver.resolve("Ontario", "Grip", "Grip")
        resolver.clear_cache()
        assert resolver.cache_size == 0

    def test_cache_stops_growing_at_maxsize(self, default_dataset) -> None:
        resolver = AuthorityResolver(default_dataset, cache_maxsize=8)
        for i in range(50):
            resolver.resolve("Ontario", f"junk {i}", "")
        assert resolver.cache_size == 8

        recent = resolver.resolve("Ontario", "junk 49", "")
        assert resolver.resolve("Ontario", "junk 49", "") is recent
        assert resolver.cache_size == 8

    def test_least_recently_used_evicted(self, default_dataset) -> None:
        resolver = AuthorityResolver(default_dataset, cache_maxsize=2)
        first = resolver.resolve("Ontario", "Grip", "Grip")
        resolver.resolve("Ontario", "Driver", "")
        resolver.resolve("Ontario", "Paint", "")
        again = resolver.resolve("Ontario", "Grip", "Grip")
        assert again == first
        assert again is not first

    @pytest.mark.parametrize("maxsize", [0, -5])
    def test_cache_maxsize_must_be_positive(self, default_dataset, maxsize) -> None:
        with pytest.raises(ValueError):
            AuthorityResolver(default_dataset, cache_maxsize=maxsize)

    @pytest.mark.parametrize("maxsize", [DEFAULT_CACHE_SIZE, 4])
    def test_concurrent_calls_match_serial(self, default_dataset, maxsize) -> None:
        queries = [
            ("Ontario", "Grip", "Grip"),
            ("Quebec", "Director of Photography", "Camera Department"),
            ("Nunavut", "Gaffer", "Lighting/Electric"),
            ("NB", "Key Grip", "Grip"),
            ("Alberta", "Art Director", ""),
            ("Atlantis", "", ""),
        ] * 50
        serial = AuthorityResolver(default_dataset, cache_enabled=False)
        expected = [serial.resolve(*q) for q in queries]

        shared = AuthorityResolver(default_dataset, cache_maxsize=maxsize)
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda q: shared.resolve(*q), queries))

        assert results == expected
        assert shared.cache_size <= maxsize

    def test_primary_is_first_id(self, resolver) -> None:
        assert resolver.resolve_primary("Ontario", "Driver", "Transportation") == "u-t938"

    def test_resolve_organizations_returns_records(self, resolver) -> None:
        records = resolver.resolve_organizations("Ontario", "Grip", "Grip")
        assert [o.id for o in records] == ["u-873", "u-nabet"]


# =============================================================================
# Module-level API
# =============================================================================

class TestModuleApi:
    def test_default_resolver_is_shared(self) -> None:
        assert get_default_resolver() is get_default_resolver()

    def test_reset_rebuilds(self) -> None:
        first = get_default_resolver()
        reset_default_resolver()
        assert get_default_resolver() is not first

    def test_resolve_authorities(self) -> None:
        assert resolve_authorities("Ontario", "Grip", "Grip") == ("u-873", "u-nabet")

    def test_resolve_primary_authority(self) -> None:
        primary = resolve_primary_authority(
            "Quebec", "Director of Photography", "Camera Department"
        )
        assert primary == "u-aqtis"

    def test_get_organization(self) -> None:
        assert get_organization("u-aqtis").id == "u-aqtis"
        assert get_organization("u-missing") is None

    def test_list_organizations(self) -> None:
        organizations = list_organizations()
        assert len(organizations) == 17
        assert organizations[0].id == "u-actra"

    def test_dataset_path_from_environment(self, monkeypatch, sample_pack_path) -> None:
        monkeypatch.setenv("GP_DATASET_PATH", str(sample_pack_path))
        resolver = get_default_resolver()
        assert resolver.dataset.name == "northern-pilot"
        assert resolve_authorities("Yukon", "Camera Trainee", "") == ("n-camera", "n-crew")

    def test_cache_disabled_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("GP_CACHE_ENABLED", "false")
        assert get_default_resolver().cache_enabled is False

    def test_cache_size_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("GP_CACHE_SIZE", "16")
        resolver = get_default_resolver()
        assert resolver.cache_maxsize == 16
        for i in range(40):
            resolver.resolve("Yukon", f"role {i}", "")
        assert resolver.cache_size == 16

    def test_create_resolver_with_settings(self, sample_pack_path) -> None:
        resolver = create_resolver(Settings(dataset_path=str(sample_pack_path)))
        # Northwest Territories borrows Yukon's rules in the sample pack
        assert resolver.resolve_ids("NT", "Focus Puller", "") == ("n-camera",)
        # Nunavut has no rules there and nothing national matches
        assert resolver.resolve_ids("Nunavut", "Gaffer", "Lighting") == ("n-crew",)
