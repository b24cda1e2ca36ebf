"""
Geometry Module Unit Tests

Validates vector helpers, subject frame construction and polar projection.
"""

from __future__ import annotations

import numpy as np
import pytest

from scalp1020.errors import DegenerateGeometryError
from scalp1020.geometry.constants import (
    INION_MM,
    MIN_SCALP_RADIUS_MM,
    NASION_MM,
    TRAGUS_LEFT_MM,
    TRAGUS_RIGHT_MM,
)
from scalp1020.geometry.frame import SubjectFrame, build_frame, triangle_normal
from scalp1020.geometry.projection import polar_to_direction, polar_to_local
from scalp1020.geometry.vector_math import as_vec3, centroid, distance, length, normalize, transform

REFERENCE_LANDMARKS = (NASION_MM, TRAGUS_LEFT_MM, TRAGUS_RIGHT_MM, INION_MM)

# Coplanar, axis-aligned head: frame must be the identity
ALIGNED_LANDMARKS = (
    np.array([0.0, 100.0, 0.0]),
    np.array([-80.0, 0.0, 0.0]),
    np.array([80.0, 0.0, 0.0]),
    np.array([0.0, -100.0, 0.0]),
)


class TestGeometryConstants:
    """Test that geometric constants are correctly defined."""

    def test_exclusion_radius(self) -> None:
        """Exclusion radius is the 70mm adult skull heuristic."""
        assert MIN_SCALP_RADIUS_MM == 70.0

    def test_reference_landmarks(self) -> None:
        """Reference fiducials match the template head."""
        np.testing.assert_array_equal(NASION_MM, [0, 85, -40])
        np.testing.assert_array_equal(TRAGUS_LEFT_MM, [-82, -16, -35])
        np.testing.assert_array_equal(TRAGUS_RIGHT_MM, [80, -6, -35])
        np.testing.assert_array_equal(INION_MM, [0, -120, -30])


class TestVectorMath:
    """Test minimal vector helpers."""

    def test_normalize(self) -> None:
        np.testing.assert_allclose(normalize(np.array([3.0, 0.0, 4.0])), [0.6, 0.0, 0.8])

    def test_normalize_zero_vector_rejected(self) -> None:
        """Near-zero vectors must not be silently normalized."""
        with pytest.raises(DegenerateGeometryError):
            normalize(np.array([0.0, 0.0, 1e-15]))

    def test_length_and_distance(self) -> None:
        assert length(np.array([3.0, 4.0, 0.0])) == pytest.approx(5.0)
        assert distance([1, 1, 1], [4, 5, 1]) == pytest.approx(5.0)

    def test_transform(self) -> None:
        rot = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        np.testing.assert_allclose(transform(rot, [1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])

    def test_centroid(self) -> None:
        np.testing.assert_allclose(centroid(REFERENCE_LANDMARKS), [-0.5, -14.25, -35.0])

    def test_centroid_empty(self) -> None:
        with pytest.raises(ValueError):
            centroid([])

    def test_as_vec3_shape(self) -> None:
        with pytest.raises(ValueError):
            as_vec3([1.0, 2.0])


class TestSubjectFrame:
    """Test frame construction from four landmarks."""

    @pytest.mark.parametrize("method", ["normals", "svd"])
    def test_orthonormal(self, method: str) -> None:
        """Columns are unit length and mutually orthogonal."""
        frame = build_frame(*REFERENCE_LANDMARKS, method=method)

        np.testing.assert_allclose(frame.basis.T @ frame.basis, np.eye(3), atol=1e-12)

    @pytest.mark.parametrize("method", ["normals", "svd"])
    def test_right_handed(self, method: str) -> None:
        frame = build_frame(*REFERENCE_LANDMARKS, method=method)

        assert np.linalg.det(frame.basis) == pytest.approx(1.0)

    def test_orthonormal_for_non_coplanar_landmarks(self) -> None:
        """Raised/lowered tragus points still give an orthonormal basis."""
        frame = build_frame(
            [0.0, 90.0, -30.0],
            [-75.0, -10.0, -10.0],
            [85.0, 5.0, -55.0],
            [3.0, -110.0, -25.0],
        )

        np.testing.assert_allclose(frame.basis.T @ frame.basis, np.eye(3), atol=1e-12)

    @pytest.mark.parametrize("method", ["normals", "svd"])
    def test_aligned_head_gives_identity(self, method: str) -> None:
        frame = build_frame(*ALIGNED_LANDMARKS, method=method)

        np.testing.assert_allclose(frame.basis, np.eye(3), atol=1e-12)

    def test_axis_orientation(self) -> None:
        """X points right, Y anterior, Z superior for the reference head."""
        frame = build_frame(*REFERENCE_LANDMARKS)

        assert frame.x_axis[0] > 0.99
        assert frame.y_axis[1] > 0.99
        assert frame.z_axis[2] > 0.99

    def test_y_axis_on_nasion_inion_line(self) -> None:
        frame = build_frame(*REFERENCE_LANDMARKS)

        expected = (NASION_MM - INION_MM) / np.linalg.norm(NASION_MM - INION_MM)
        np.testing.assert_allclose(frame.y_axis, expected)

    def test_origin_is_centroid(self) -> None:
        frame = build_frame(*REFERENCE_LANDMARKS)

        np.testing.assert_allclose(frame.origin, [-0.5, -14.25, -35.0])

    def test_translation_moves_origin_only(self) -> None:
        shift = np.array([10.0, -20.0, 35.0])
        frame = build_frame(*REFERENCE_LANDMARKS)
        shifted = build_frame(*(p + shift for p in REFERENCE_LANDMARKS))

        np.testing.assert_allclose(shifted.basis, frame.basis, atol=1e-12)
        np.testing.assert_allclose(shifted.origin, frame.origin + shift)

    def test_superior_axis_points_up_regardless_of_winding(self) -> None:
        """Swapping left and right tragus must not flip the superior axis."""
        a, l, r, p = REFERENCE_LANDMARKS
        frame = build_frame(a, r, l, p)

        assert frame.z_axis[2] > 0.99

    def test_local_world_round_trip(self) -> None:
        frame = build_frame(*REFERENCE_LANDMARKS)
        vec = np.array([0.3, -0.2, 0.9])

        np.testing.assert_allclose(frame.to_local(frame.to_world(vec)), vec)

    def test_returns_subject_frame(self) -> None:
        assert isinstance(build_frame(*REFERENCE_LANDMARKS), SubjectFrame)


class TestDegenerateLandmarks:
    """Test rejection of landmarks that cannot define a frame."""

    def test_collinear_tragus(self) -> None:
        """A tragus on the nasion-inion line makes its triangle collinear."""
        a, _, r, p = ALIGNED_LANDMARKS
        with pytest.raises(DegenerateGeometryError):
            build_frame(a, np.array([0.0, 0.0, 0.0]), r, p)

    def test_all_collinear_svd(self) -> None:
        a, _, _, p = ALIGNED_LANDMARKS
        with pytest.raises(DegenerateGeometryError):
            build_frame(a, [0.0, 0.0, 0.0], [0.0, 50.0, 0.0], p, method="svd")

    def test_coincident_nasion_inion(self) -> None:
        a, l, r, _ = ALIGNED_LANDMARKS
        with pytest.raises(DegenerateGeometryError):
            build_frame(a, l, r, a)

    def test_degenerate_is_value_error(self) -> None:
        """Callers catching ValueError also catch degenerate geometry."""
        a, l, r, _ = ALIGNED_LANDMARKS
        with pytest.raises(ValueError):
            build_frame(a, l, r, a)

    def test_unknown_method(self) -> None:
        with pytest.raises(ValueError, match="method"):
            build_frame(*REFERENCE_LANDMARKS, method="pca")

    def test_triangle_normal_points_up(self) -> None:
        normal = triangle_normal(
            np.array([0.0, 0.0, 0.0]),
            np.array([0.0, 1.0, 0.0]),
            np.array([1.0, 0.0, 0.0]),
        )
        np.testing.assert_allclose(normal, [0.0, 0.0, 1.0])


class TestPolarProjection:
    """Test canonical polar coordinates to world directions."""

    @pytest.fixture
    def frame(self) -> SubjectFrame:
        return build_frame(*REFERENCE_LANDMARKS)

    @pytest.mark.parametrize("phi", [0.0, 45.0, 90.0, 180.0, 270.0, 359.9])
    def test_pole_is_superior_axis(self, frame: SubjectFrame, phi: float) -> None:
        """theta=0 is the vertex whatever the azimuth."""
        np.testing.assert_allclose(polar_to_direction(0.0, phi, frame), frame.z_axis, atol=1e-12)

    def test_anterior(self, frame: SubjectFrame) -> None:
        np.testing.assert_allclose(polar_to_direction(90.0, 0.0, frame), frame.y_axis, atol=1e-12)

    def test_right(self, frame: SubjectFrame) -> None:
        """phi is clockwise seen from above: 90 is right."""
        np.testing.assert_allclose(polar_to_direction(90.0, 90.0, frame), frame.x_axis, atol=1e-12)

    def test_posterior_and_left(self, frame: SubjectFrame) -> None:
        np.testing.assert_allclose(polar_to_direction(90.0, 180.0, frame), -frame.y_axis, atol=1e-12)
        np.testing.assert_allclose(polar_to_direction(90.0, 270.0, frame), -frame.x_axis, atol=1e-12)

    def test_unit_length(self, frame: SubjectFrame) -> None:
        np.random.seed(42)
        for theta, phi in np.random.uniform([0, 0], [90, 360], size=(50, 2)):
            assert np.linalg.norm(polar_to_direction(theta, phi, frame)) == pytest.approx(1.0)

    def test_accepts_basis_matrix(self, frame: SubjectFrame) -> None:
        np.testing.assert_allclose(
            polar_to_direction(54.0, 270.0, frame.basis),
            polar_to_direction(54.0, 270.0, frame),
        )

    def test_rejects_bad_basis(self) -> None:
        with pytest.raises(ValueError):
            polar_to_direction(10.0, 20.0, np.eye(2))

    def test_local_components(self) -> None:
        """theta=54, phi=270 lies left of the vertex with z = cos(54)."""
        local = polar_to_local(54.0, 270.0)
        np.testing.assert_allclose(local, [-np.sin(np.deg2rad(54)), 0.0, np.cos(np.deg2rad(54))], atol=1e-12)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
