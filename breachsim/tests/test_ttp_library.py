"""
Tests for the TTP library loader and registry.
"""

import pytest
from pydantic import ValidationError

from breachsim.data.ttp_library import (
    KillChainStage,
    TTPDefinition,
    TTPLibraryLoadError,
    TTPRegistry,
    load_definitions,
    load_ttp_library,
)


def make_ttp(ttp_id: str, stage: KillChainStage = KillChainStage.RECON, **overrides) -> TTPDefinition:
    defaults = dict(
        id=ttp_id,
        name=f"TTP {ttp_id}",
        stage=stage,
        noise=10,
        cost=0,
        base_success=0.5,
        mitre_id=f"T{ttp_id}",
    )
    defaults.update(overrides)
    return TTPDefinition(**defaults)


class TestLoader:
    """Tests for YAML loading and validation."""

    def test_packaged_catalogue(self):
        """Test the packaged catalogue loads in file order."""
        definitions = load_definitions()
        assert len(definitions) == 12
        assert [d.id for d in definitions[:3]] == ["t1", "t2", "t3"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(TTPLibraryLoadError, match="not found"):
            load_definitions(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("techniques: [\n  - id: t1\n", encoding="utf-8")
        with pytest.raises(TTPLibraryLoadError, match="Invalid YAML"):
            load_definitions(path)

    def test_validation_error_names_field(self, tmp_path):
        """Test schema violations report the offending location."""
        path = tmp_path / "bad.yaml"
        path.write_text(
            "techniques:\n"
            "  - id: t1\n"
            "    name: Bad\n"
            "    stage: Recon\n"
            "    noise: 150\n"
            "    cost: 0\n"
            "    base_success: 0.5\n"
            "    mitre_id: T0000\n",
            encoding="utf-8",
        )
        with pytest.raises(TTPLibraryLoadError, match="noise"):
            load_definitions(path)

    def test_unknown_stage_rejected(self, tmp_path):
        path = tmp_path / "stage.yaml"
        path.write_text(
            "techniques:\n"
            "  - id: t1\n"
            "    name: Odd\n"
            "    stage: Impact\n"
            "    noise: 10\n"
            "    cost: 0\n"
            "    base_success: 0.5\n"
            "    mitre_id: T0000\n",
            encoding="utf-8",
        )
        with pytest.raises(TTPLibraryLoadError, match="stage"):
            load_definitions(path)


class TestTTPRegistry:
    """Tests for the in-memory registry."""

    @pytest.fixture
    def registry(self):
        return load_ttp_library()

    def test_size_and_order(self, registry):
        assert len(registry) == 12
        assert registry.list_all()[0].id == "t1"
        assert isinstance(registry.list_all(), tuple)

    def test_get_by_id_and_name(self, registry):
        """Test lookup accepts either reference form."""
        by_id = registry.get("t5")
        by_name = registry.get("Execution: PowerShell")
        assert by_id is by_name
        assert by_id.requires == ("t3", "t4")
        assert "t5" in registry
        assert registry.get("t99") is None

    def test_by_stage(self, registry):
        recon = registry.by_stage(KillChainStage.RECON)
        assert [t.id for t in recon] == ["t1", "t2"]

    def test_ioc_label(self, registry):
        assert registry.get("t1").ioc_label == "T1566: Recon"

    def test_duplicate_id_rejected(self):
        with pytest.raises(TTPLibraryLoadError, match="Duplicate TTP id"):
            TTPRegistry([make_ttp("a"), make_ttp("a", name="Other")])

    def test_duplicate_name_rejected(self):
        with pytest.raises(TTPLibraryLoadError, match="Duplicate TTP name"):
            TTPRegistry([make_ttp("a", name="Same"), make_ttp("b", name="Same")])

    def test_dangling_reference_rejected(self):
        with pytest.raises(TTPLibraryLoadError, match="unknown TTP"):
            TTPRegistry([make_ttp("a", requires=("ghost",))])
        with pytest.raises(TTPLibraryLoadError, match="unknown TTP"):
            TTPRegistry([make_ttp("a", synergy=("ghost",))])

    def test_definitions_are_immutable(self, registry):
        with pytest.raises(ValidationError):
            registry.get("t1").noise = 0

    def test_cost_is_whole_units(self):
        assert make_ttp("a", cost=2500.0).cost == 2500
        with pytest.raises(ValidationError, match="cost"):
            make_ttp("a", cost=1.5)

    def test_custom_file(self, tmp_path):
        path = tmp_path / "mini.yaml"
        path.write_text(
            "techniques:\n"
            "  - id: r1\n"
            "    name: Recon\n"
            "    stage: Recon\n"
            "    noise: 5\n"
            "    cost: 1\n"
            "    base_success: 0.9\n"
            "    mitre_id: T1000\n",
            encoding="utf-8",
        )
        registry = load_ttp_library(path)
        assert len(registry) == 1
        assert registry.get("Recon").id == "r1"


class TestKillChainStage:
    """Tests for stage ordering."""

    def test_canonical_order(self):
        assert [s.value for s in KillChainStage.ordered()] == [
            "Recon", "Access", "Execution", "Persistence", "C2", "Exfil",
        ]

    def test_rank(self):
        assert KillChainStage.RECON.rank == 0
        assert KillChainStage.EXFIL.rank == 5
