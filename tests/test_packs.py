"""
GuildPilot Dataset Pack Tests

Tests that verify:
1. The sample pack loads and resolves
2. Unreadable and malformed files fail with DatasetLoadError
3. Schema violations fail with DatasetValidationError
4. Schema version checks (strict and lenient)
5. Model and integrity errors carry the pack path
6. The compiled-in dataset survives export and reload
"""
from __future__ import annotations

import json
import logging
from decimal import Decimal

import pytest
import yaml

from guildpilot import (
    AuthorityResolver,
    DatasetLoadError,
    DatasetValidationError,
    DatasetVersionMismatch,
    ReferentialIntegrityError,
    RuleDefinitionError,
    TargetMetric,
)
from guildpilot.canon import compute_dataset_hash
from guildpilot.data import build_default_dataset
from guildpilot.packs import (
    SCHEMA_VERSION,
    DatasetPackLoader,
    check_schema_version,
    dataset_to_pack_dict,
    load_dataset_pack,
    load_dataset_pack_from_string,
)
from tests.conftest import pack_dict


def write_yaml(tmp_path, data, name="pack.yaml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


# =============================================================================
# Loading
# =============================================================================

class TestSamplePack:
    def test_loads(self, sample_pack_path) -> None:
        dataset = load_dataset_pack(sample_pack_path)
        assert dataset.name == "northern-pilot"
        assert dataset.version == "2025.1"
        assert dataset.catch_all_id == "n-crew"
        assert dataset.registry.ids == ("n-crew", "n-camera", "n-perform")
        assert dataset.source == str(sample_pack_path)

    def test_records_converted(self, sample_pack_path) -> None:
        crew = load_dataset_pack(sample_pack_path).registry.get("n-crew")
        assert crew.dues_rate == Decimal("0.03")
        assert crew.application_fee == Decimal("100")
        assert crew.membership_tiers[0].target_metric is TargetMetric.DAYS
        assert crew.membership_tiers[1].target_value == Decimal("90")
        assert crew.application_steps[0].startswith("Submit")

    def test_aliases_applied(self, sample_pack_path) -> None:
        dataset = load_dataset_pack(sample_pack_path)
        assert dataset.overrides.rules_for("NT") is dataset.overrides.rules_for("Yukon")
        assert dataset.overlaps.rules_for("NT") is dataset.overlaps.rules_for("Yukon")

    def test_national_order_kept(self, sample_pack_path) -> None:
        national = load_dataset_pack(sample_pack_path).national
        assert [e.key for e in national.role_entries] == [
            "Actor", "Stunt", "Camera", "Director of Photography",
        ]

    def test_logs_at_info(self, sample_pack_path, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="guildpilot.packs.loader"):
            load_dataset_pack(sample_pack_path)
        assert any("northern-pilot" in r.getMessage() for r in caplog.records)


class TestFileFormats:
    def test_json_file(self, tmp_path) -> None:
        path = tmp_path / "pack.json"
        path.write_text(json.dumps(pack_dict()), encoding="utf-8")
        assert load_dataset_pack(path).name == "test-pack"

    def test_unknown_suffix_tries_yaml(self, tmp_path) -> None:
        path = write_yaml(tmp_path, pack_dict(), name="pack.txt")
        assert load_dataset_pack(path).name == "test-pack"

    def test_from_string_yaml(self) -> None:
        dataset = load_dataset_pack_from_string(yaml.safe_dump(pack_dict()))
        assert AuthorityResolver(dataset).resolve_ids("ON", "Grip", "") == ("o-a",)

    def test_from_string_json(self) -> None:
        dataset = load_dataset_pack_from_string(json.dumps(pack_dict()), format="json")
        assert dataset.source == ""
        assert len(dataset.registry) == 2


class TestLoadErrors:
    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(DatasetLoadError) as exc_info:
            load_dataset_pack(tmp_path / "absent.yaml")
        assert exc_info.value.code == "GP_DATASET_LOAD_ERROR"

    def test_malformed_yaml(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("organizations: [unclosed", encoding="utf-8")
        with pytest.raises(DatasetLoadError):
            load_dataset_pack(path)

    def test_malformed_json_string(self) -> None:
        with pytest.raises(DatasetLoadError):
            load_dataset_pack_from_string("{not json", format="json")

    def test_root_must_be_mapping(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(DatasetLoadError):
            load_dataset_pack(path)


# =============================================================================
# Validation
# =============================================================================

class TestSchemaValidation:
    def test_unknown_field_rejected(self, tmp_path) -> None:
        path = write_yaml(tmp_path, pack_dict(owner="someone"))
        with pytest.raises(DatasetValidationError) as exc_info:
            load_dataset_pack(path)
        assert exc_info.value.details["path"] == str(path)
        assert exc_info.value.details["errors"]

    def test_rule_without_substrings(self) -> None:
        data = pack_dict(jurisdiction_overrides={"Ontario": [{"organization_id": "o-a"}]})
        with pytest.raises(DatasetValidationError):
            DatasetPackLoader().load_data(data)

    def test_blank_substring(self) -> None:
        data = pack_dict(
            jurisdiction_overrides={"Ontario": [{"organization_id": "o-a", "roles": [" "]}]}
        )
        with pytest.raises(DatasetValidationError):
            DatasetPackLoader().load_data(data)

    def test_dues_rate_out_of_range(self) -> None:
        data = pack_dict(
            organizations=[{"id": "o-catch", "name": "Catch All", "dues_rate": "1.5"}]
        )
        with pytest.raises(DatasetValidationError):
            DatasetPackLoader().load_data(data)

    def test_duplicate_organization_ids(self) -> None:
        data = pack_dict()
        data["organizations"].append({"id": "o-a", "name": "Again", "dues_rate": "0.01"})
        with pytest.raises(DatasetValidationError):
            DatasetPackLoader().load_data(data)

    def test_unknown_target_metric(self) -> None:
        data = pack_dict()
        data["organizations"][0]["membership_tiers"] = [
            {"name": "Full", "target_metric": "WEEKS", "target_value": "3"}
        ]
        with pytest.raises(DatasetValidationError):
            DatasetPackLoader().load_data(data)

    def test_catch_all_required(self) -> None:
        data = pack_dict()
        del data["catch_all_id"]
        with pytest.raises(DatasetValidationError):
            DatasetPackLoader().load_data(data)


class TestSchemaVersion:
    @pytest.mark.parametrize(
        "version, compatible",
        [("1.0.0", True), ("1.9.3", True), ("2.0.0", False), ("0.9", False)],
    )
    def test_major_version_must_match(self, version, compatible) -> None:
        assert check_schema_version({"schema_version": version}) is compatible

    def test_missing_version_is_current(self) -> None:
        assert check_schema_version({})

    def test_strict_mismatch_raises(self) -> None:
        with pytest.raises(DatasetVersionMismatch) as exc_info:
            DatasetPackLoader().load_data(pack_dict(schema_version="2.0.0"))
        assert exc_info.value.details == {
            "pack_version": "2.0.0",
            "expected_version": SCHEMA_VERSION,
        }

    def test_lenient_mismatch_warns(self, caplog) -> None:
        loader = DatasetPackLoader(strict_version=False)
        with caplog.at_level(logging.WARNING, logger="guildpilot.packs.loader"):
            dataset = loader.load_data(pack_dict(schema_version="2.0.0"))
        assert dataset.name == "test-pack"
        assert any("2.0.0" in r.getMessage() for r in caplog.records)


class TestModelErrors:
    def test_dangling_reference_carries_path(self, tmp_path) -> None:
        data = pack_dict(
            overlaps={"Ontario": [{"organization_ids": ["o-a", "o-ghost"], "roles": ["Grip"]}]}
        )
        path = write_yaml(tmp_path, data)
        with pytest.raises(ReferentialIntegrityError) as exc_info:
            load_dataset_pack(path)
        assert exc_info.value.source == str(path)
        assert "o-ghost" in exc_info.value.details["errors"][0]

    def test_alias_cycle(self, tmp_path) -> None:
        path = write_yaml(tmp_path, pack_dict(aliases={"Yukon": "Nunavut", "Nunavut": "Yukon"}))
        with pytest.raises(RuleDefinitionError) as exc_info:
            load_dataset_pack(path)
        assert exc_info.value.source == str(path)

    def test_code_and_name_for_same_jurisdiction(self, tmp_path) -> None:
        data = pack_dict(
            jurisdiction_overrides={
                "ON": [{"organization_id": "o-a", "roles": ["Grip"]}],
                "Ontario": [{"organization_id": "o-catch", "roles": ["Driver"]}],
            }
        )
        path = write_yaml(tmp_path, data)
        with pytest.raises(RuleDefinitionError) as exc_info:
            load_dataset_pack(path)
        assert exc_info.value.details["keys"] == ["ON", "Ontario"]
        assert exc_info.value.source == str(path)

    def test_alias_to_undeclared_jurisdiction(self) -> None:
        with pytest.raises(RuleDefinitionError):
            DatasetPackLoader().load_data(pack_dict(aliases={"Yukon": "Atlantis"}))


# =============================================================================
# Export
# =============================================================================

class TestExport:
    def test_default_dataset_reloads_equal(self) -> None:
        original = build_default_dataset()
        exported = dataset_to_pack_dict(original)
        reloaded = DatasetPackLoader().load_data(json.loads(json.dumps(exported)))

        assert reloaded == original
        assert compute_dataset_hash(reloaded) == compute_dataset_hash(original)

    def test_aliases_written_once(self) -> None:
        exported = dataset_to_pack_dict(build_default_dataset())
        assert "New Brunswick" not in exported["jurisdiction_overrides"]
        assert exported["aliases"]["New Brunswick"] == "Nova Scotia"
