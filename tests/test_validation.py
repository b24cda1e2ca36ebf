"""
Tests for scalp1020 Validation Module

Tests landmark, mesh buffer and config file validation.
"""

from __future__ import annotations

from pathlib import Path
import tempfile

import numpy as np
import pytest

from scalp1020.config import get_default_config, save_config
from scalp1020.placement import Landmarks
from scalp1020.simulation import generate_hemisphere_mesh, generate_sphere_mesh
from scalp1020.validation import (
    ConfigValidationResult,
    validate_all,
    validate_config_file,
    validate_landmarks,
    validate_mesh_buffer,
)


# =============================================================================
# Landmark Validation Tests
# =============================================================================


class TestLandmarkValidation:
    """Tests for landmark validation."""

    def test_reference_landmarks_valid(self):
        """Test that the reference fiducials pass without warnings."""
        result = validate_landmarks(Landmarks.default())

        assert result.is_valid is True
        assert result.n_landmarks == 4
        assert len(result.errors) == 0
        assert len(result.warnings) == 0
        assert result.nasion_inion_mm == pytest.approx(np.sqrt(205.0**2 + 10.0**2))

    def test_mapping_input(self):
        """Test landmarks given as a role mapping."""
        result = validate_landmarks(get_default_config()["landmarks"])

        assert result.is_valid is True

    def test_too_few_landmarks(self):
        """Test that fewer than four landmarks is an error."""
        result = validate_landmarks([[0, 85, -40], [-82, -16, -35]])

        assert result.is_valid is False
        assert result.n_landmarks == 2
        assert "TOO FEW LANDMARKS" in result.errors[0]
        assert len(result.recovery_suggestions) > 0

    def test_missing_role_in_mapping(self):
        """Test that a mapping without the inion is rejected."""
        result = validate_landmarks(
            {"nasion": [0, 85, -40], "tragus_left": [-82, -16, -35], "tragus_right": [80, -6, -35]}
        )

        assert result.is_valid is False
        assert "TOO FEW LANDMARKS" in result.errors[0]

    def test_malformed_landmark(self):
        """Test that a 2D point is reported as malformed."""
        result = validate_landmarks([[0, 85], [-82, -16], [80, -6], [0, -120]])

        assert result.is_valid is False
        assert "MALFORMED LANDMARK" in result.errors[0]

    def test_non_finite_landmark(self):
        """Test that NaN coordinates are rejected."""
        result = validate_landmarks(
            [[0, 85, -40], [np.nan, -16, -35], [80, -6, -35], [0, -120, -30]]
        )

        assert result.is_valid is False
        assert "NON-FINITE" in result.errors[0]

    def test_degenerate_landmarks(self):
        """Test that a tragus on the nasion-inion line is an error."""
        result = validate_landmarks(
            [[0, 100, 0], [0, 0, 0], [80, 0, 0], [0, -100, 0]]
        )

        assert result.is_valid is False
        assert "DEGENERATE LANDMARKS" in result.errors[0]

    def test_centimetre_units_warning(self):
        """Test that landmarks in cm trigger the head size warning."""
        points = Landmarks.default().as_array() / 10.0

        result = validate_landmarks(points)

        assert result.is_valid is True  # Not a hard failure
        assert any("IMPLAUSIBLE HEAD SIZE" in w for w in result.warnings)
        assert any("mm" in s for s in result.recovery_suggestions)

    def test_tragus_asymmetry_warning(self):
        """Test warning when one tragus is far closer to the centroid."""
        landmarks = Landmarks.default().with_moved("left", [-30.0, -16.0, -35.0])

        result = validate_landmarks(landmarks)

        assert result.is_valid is True
        assert any("TRAGUS ASYMMETRY" in w for w in result.warnings)


# =============================================================================
# Mesh Validation Tests
# =============================================================================


class TestMeshValidation:
    """Tests for scalp mesh buffer validation."""

    def test_valid_hemisphere(self):
        """Test that the synthetic scalp passes validation."""
        landmarks = Landmarks.default()
        mesh = generate_hemisphere_mesh(center=landmarks.centroid(), n_vertices=1000)

        result = validate_mesh_buffer(mesh, origin=landmarks.centroid())

        assert result.is_valid is True
        assert result.n_vertices == mesh.size // 3
        assert result.n_outside_radius == result.n_vertices
        assert len(result.warnings) == 0

    def test_without_origin_skips_coverage(self):
        """Test that coverage is not computed without an origin."""
        result = validate_mesh_buffer(np.ones((10, 3)))

        assert result.is_valid is True
        assert result.n_outside_radius is None

    def test_incomplete_triplet(self):
        """Test that trailing values are reported."""
        result = validate_mesh_buffer([0.0, 0.0, 90.0, 1.0])

        assert result.is_valid is False
        assert "MALFORMED BUFFER" in result.errors[0]
        assert "1 trailing" in result.errors[0]

    def test_wrong_shape(self):
        """Test that (N, 2) arrays are rejected."""
        result = validate_mesh_buffer(np.ones((6, 2)))

        assert result.is_valid is False
        assert "MALFORMED BUFFER" in result.errors[0]

    def test_empty_mesh(self):
        """Test that an empty buffer is an error."""
        result = validate_mesh_buffer([])

        assert result.is_valid is False
        assert "EMPTY MESH" in result.errors[0]

    def test_non_finite_vertices(self):
        """Test that NaN vertices are counted and rejected."""
        mesh = generate_sphere_mesh(n_vertices=100).reshape(-1, 3)
        mesh[3, 1] = np.nan
        mesh[7, 2] = np.inf

        result = validate_mesh_buffer(mesh)

        assert result.is_valid is False
        assert "2 vertices" in result.errors[0]

    def test_all_inside_exclusion_radius(self):
        """Test that a mesh entirely within 70mm of the origin is rejected."""
        mesh = generate_sphere_mesh(radius_mm=50.0, n_vertices=200)

        result = validate_mesh_buffer(mesh, origin=[0.0, 0.0, 0.0])

        assert result.is_valid is False
        assert result.n_outside_radius == 0
        assert "NO SCALP VERTICES" in result.errors[0]

    def test_sparse_coverage_warning(self):
        """Test warning when few vertices lie beyond the exclusion radius."""
        inner = generate_sphere_mesh(radius_mm=40.0, n_vertices=95).reshape(-1, 3)
        outer = generate_sphere_mesh(radius_mm=90.0, n_vertices=5).reshape(-1, 3)

        result = validate_mesh_buffer(np.vstack([inner, outer]), origin=[0.0, 0.0, 0.0])

        assert result.is_valid is True
        assert result.n_outside_radius == 5
        assert "SPARSE SCALP COVERAGE" in result.warnings[0]


# =============================================================================
# Config Validation Tests
# =============================================================================


class TestConfigValidation:
    """Tests for configuration file validation."""

    def test_valid_default_config(self):
        """Test loading the shipped default config."""
        result = validate_config_file()

        assert isinstance(result, ConfigValidationResult)
        assert result.is_valid is True
        assert result.config is not None
        assert "landmarks" in result.config
        assert "electrodes" in result.config

    def test_saved_defaults_have_no_warnings(self, tmp_path):
        """Test that the built-in defaults round-trip cleanly."""
        path = tmp_path / "placement.yaml"
        save_config(get_default_config(), path)

        result = validate_config_file(path, strict=True)

        assert result.is_valid is True
        assert result.warnings == []
        assert result.file_path == path

    def test_nonexistent_file_fallback(self):
        """Test fallback to defaults for nonexistent file."""
        result = validate_config_file("/nonexistent/path/config.yaml")

        assert result.is_valid is True  # Falls back gracefully
        assert result.config is not None
        assert result.file_path is None
        assert "not found" in result.warnings[0].lower()

    def test_malformed_yaml(self):
        """Test handling of malformed YAML."""
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", delete=False
        ) as f:
            f.write("invalid: yaml: content: [unclosed")
            temp_path = f.name

        try:
            result = validate_config_file(temp_path)

            assert result.config is not None  # Falls back to defaults
            assert len(result.errors) > 0
            assert "YAML" in result.errors[0].upper()
        finally:
            Path(temp_path).unlink()

    def test_empty_yaml_file(self, tmp_path):
        """Test handling of empty YAML file."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        result = validate_config_file(path)

        assert result.config is not None
        assert "EMPTY" in result.warnings[0]

    def test_missing_section_strict(self, tmp_path):
        """Test that strict mode turns a missing section into an error."""
        config = get_default_config()
        del config["electrodes"]
        path = tmp_path / "partial.yaml"
        save_config(config, path)

        lenient = validate_config_file(path)
        strict = validate_config_file(path, strict=True)

        assert lenient.is_valid is True
        assert any("electrodes" in w for w in lenient.warnings)
        assert strict.is_valid is False
        assert any("MISSING REQUIRED SECTION" in e for e in strict.errors)

    def test_invalid_policy_choice(self, tmp_path):
        """Test that an unknown unplaceable policy is rejected."""
        config = get_default_config()
        config["placement"]["on_unplaceable"] = "ignore"
        path = tmp_path / "bad_policy.yaml"
        save_config(config, path)

        result = validate_config_file(path)

        assert result.is_valid is False
        assert "INVALID CHOICE" in result.errors[0]

    def test_wrong_type(self, tmp_path):
        """Test that a string where a number is expected is an error."""
        config = get_default_config()
        config["placement"]["min_radius_mm"] = "seventy"
        path = tmp_path / "bad_type.yaml"
        save_config(config, path)

        result = validate_config_file(path)

        assert result.is_valid is False
        assert any("TYPE ERROR" in e for e in result.errors)

    def test_out_of_range_warning(self, tmp_path):
        config = get_default_config()
        config["mesh"]["radius_mm"] = 5000.0
        path = tmp_path / "huge.yaml"
        save_config(config, path)

        result = validate_config_file(path)

        assert result.is_valid is True
        assert any("RANGE WARNING" in w for w in result.warnings)

    def test_electrode_without_polar_data(self, tmp_path):
        """Test warning for a table entry that will be skipped."""
        config = get_default_config()
        config["electrodes"]["Fpz"] = {"color_value": 0.3}
        path = tmp_path / "fpz.yaml"
        save_config(config, path)

        result = validate_config_file(path)

        assert result.is_valid is True
        assert any("MISSING POLAR DATA" in w and "Fpz" in w for w in result.warnings)

    def test_non_numeric_angle_reported(self, tmp_path):
        """Test that a non-numeric angle is an error, not an exception."""
        path = tmp_path / "bad_angle.yaml"
        path.write_text("electrodes:\n  Cz:\n    theta_deg: abc\n    phi_deg: 0\n")

        result = validate_config_file(path)

        assert result.is_valid is False
        assert any("TYPE ERROR" in e and "electrodes.Cz" in e for e in result.errors)

    def test_non_mapping_electrode_reported(self, tmp_path):
        """Test that a list in place of an electrode mapping is an error."""
        path = tmp_path / "list_entry.yaml"
        path.write_text("electrodes:\n  Fz: [1, 2]\n  Cz:\n    theta_deg: 0\n    phi_deg: 0\n")

        result = validate_config_file(path)

        assert result.is_valid is False
        assert any("TYPE ERROR" in e and "electrodes.Fz" in e for e in result.errors)

    def test_degenerate_landmarks_in_config(self, tmp_path):
        config = get_default_config()
        config["landmarks"]["tragus_left"] = [0.0, -17.5, -35.0]
        config["landmarks"]["nasion"] = [0.0, 85.0, -35.0]
        config["landmarks"]["inion"] = [0.0, -120.0, -35.0]
        path = tmp_path / "degenerate.yaml"
        save_config(config, path)

        result = validate_config_file(path)

        assert result.is_valid is False
        assert any("DEGENERATE" in e for e in result.errors)


# =============================================================================
# Combined Validation Tests
# =============================================================================


class TestCombinedValidation:
    """Tests for validate_all convenience function."""

    def test_all_valid(self):
        """Test all validators pass for the reference setup."""
        landmarks = Landmarks.default()
        mesh = generate_hemisphere_mesh(center=landmarks.centroid(), n_vertices=1000)

        result = validate_all(landmarks, mesh)

        assert result["all_valid"] is True
        assert result["landmarks"].is_valid is True
        assert result["mesh"].n_outside_radius > 0

    def test_landmark_failure_propagates(self):
        """Test landmark failure makes all_valid False."""
        result = validate_all([[0, 85, -40]], generate_sphere_mesh(n_vertices=100))

        assert result["all_valid"] is False
        assert result["landmarks"].is_valid is False
        assert result["mesh"].n_outside_radius is None

    def test_mesh_failure_propagates(self):
        """Test mesh failure makes all_valid False."""
        landmarks = Landmarks.default()
        mesh = generate_sphere_mesh(center=landmarks.centroid(), radius_mm=30.0, n_vertices=100)

        result = validate_all(landmarks, mesh)

        assert result["all_valid"] is False
        assert result["mesh"].is_valid is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
