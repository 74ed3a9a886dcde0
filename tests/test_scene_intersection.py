"""Unit tests for scene-level intersection.

Tests cover:
- Sphere storage and clearing
- Single sphere intersection with material copy
- Nearest-hit selection across multiple spheres
- Tie-break by insertion order
- Maximum view distance cutoff
"""

import pytest
import taichi as ti


def _query(origin=(0.0, 0.0, 0.0), direction=(0.0, 0.0, -1.0)):
    """Run intersect_scene in a kernel and return the record's fields as a dict."""
    from src.spheretrace.scene.intersection import intersect_scene, vec3

    hit = ti.field(dtype=ti.i32, shape=())
    dist = ti.field(dtype=ti.f32, shape=())
    material_id = ti.field(dtype=ti.i32, shape=())
    color = ti.field(dtype=ti.math.vec3, shape=())
    point = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32, oy: ti.f32, oz: ti.f32, dx: ti.f32, dy: ti.f32, dz: ti.f32
    ):
        rec = intersect_scene(vec3(ox, oy, oz), vec3(dx, dy, dz))
        hit[None] = rec.hit
        dist[None] = rec.distance
        material_id[None] = rec.material_id
        color[None] = rec.diffuse_color
        point[None] = rec.point

    test_kernel(*origin, *direction)
    c = color[None]
    p = point[None]
    return {
        "hit": hit[None],
        "distance": dist[None],
        "material_id": material_id[None],
        "diffuse_color": (c[0], c[1], c[2]),
        "point": (p[0], p[1], p[2]),
    }


class TestScenePrimitiveStorage:
    """Tests for scene sphere storage and management."""

    def test_add_sphere(self):
        """Test adding a sphere to the scene."""
        from src.spheretrace.scene.intersection import add_sphere, get_sphere_count, vec3

        assert get_sphere_count() == 0
        idx = add_sphere(vec3(1.0, 2.0, 3.0), 0.5, material_id=1)
        assert idx == 0
        assert get_sphere_count() == 1

    def test_clear_scene(self):
        """Test clearing all spheres from the scene."""
        from src.spheretrace.scene.intersection import (
            add_sphere,
            clear_scene,
            get_sphere_count,
            vec3,
        )

        add_sphere(vec3(0.0, 0.0, 0.0), 1.0, material_id=0)
        add_sphere(vec3(1.0, 0.0, 0.0), 0.5, material_id=1)
        assert get_sphere_count() == 2

        clear_scene()
        assert get_sphere_count() == 0

    def test_capacity_exceeded(self, monkeypatch):
        """Test adding beyond capacity raises RuntimeError."""
        from src.spheretrace.scene import intersection

        monkeypatch.setattr(intersection, "MAX_SPHERES", 2)
        intersection.add_sphere(intersection.vec3(0.0, 0.0, 0.0), 1.0)
        intersection.add_sphere(intersection.vec3(0.0, 0.0, 0.0), 1.0)
        with pytest.raises(RuntimeError):
            intersection.add_sphere(intersection.vec3(0.0, 0.0, 0.0), 1.0)


class TestSingleSphereIntersection:
    """Tests for scene intersection with zero or one sphere."""

    def test_empty_scene_misses(self):
        """Test an empty scene reports no hit."""
        rec = _query()
        assert rec["hit"] == 0
        assert rec["material_id"] == -1

    def test_hit_single_sphere_copies_material(self):
        """Test the hit record carries the sphere's material color."""
        from src.spheretrace.materials.diffuse import add_diffuse_material
        from src.spheretrace.scene.intersection import add_sphere, vec3

        mat = add_diffuse_material((0.5, 0.8, 0.3))
        add_sphere(vec3(0.0, 1.0, -16.0), 2.0, material_id=mat)

        rec = _query()
        assert rec["hit"] == 1
        assert rec["material_id"] == mat
        assert rec["distance"] == pytest.approx(1.0)
        assert rec["diffuse_color"] == pytest.approx((0.5, 0.8, 0.3))
        assert rec["point"] == pytest.approx((0.0, 0.0, -16.0))

    def test_miss_single_sphere(self):
        """Test a ray passing outside the radius misses."""
        from src.spheretrace.materials.diffuse import add_diffuse_material
        from src.spheretrace.scene.intersection import add_sphere, vec3

        mat = add_diffuse_material((0.5, 0.8, 0.3))
        add_sphere(vec3(0.0, 5.0, -16.0), 2.0, material_id=mat)

        assert _query()["hit"] == 0


class TestNearestHit:
    """Tests for nearest-hit selection among several spheres."""

    def _add_spheres_at_distances_5_and_10(self, near_first):
        from src.spheretrace.materials.diffuse import add_diffuse_material
        from src.spheretrace.scene.intersection import add_sphere, vec3

        near = add_diffuse_material((1.0, 0.0, 0.0))
        far = add_diffuse_material((0.0, 0.0, 1.0))
        spheres = [
            (vec3(0.0, 5.0, -20.0), 6.0, near),
            (vec3(0.0, 10.0, -20.0), 12.0, far),
        ]
        if not near_first:
            spheres.reverse()
        for center, radius, mat in spheres:
            add_sphere(center, radius, material_id=mat)
        return near, far

    @pytest.mark.parametrize("near_first", [True, False])
    def test_smaller_distance_wins(self, near_first):
        """Test the distance-5 sphere beats the distance-10 sphere in either order."""
        near, _ = self._add_spheres_at_distances_5_and_10(near_first)

        rec = _query()
        assert rec["hit"] == 1
        assert rec["material_id"] == near
        assert rec["distance"] == pytest.approx(5.0)
        assert rec["diffuse_color"] == pytest.approx((1.0, 0.0, 0.0))

    def test_every_sphere_is_tested(self):
        """Test a nearer sphere after a missed one is still found."""
        from src.spheretrace.materials.diffuse import add_diffuse_material
        from src.spheretrace.scene.intersection import add_sphere, vec3

        miss = add_diffuse_material((0.1, 0.1, 0.1))
        far = add_diffuse_material((0.2, 0.2, 0.2))
        near = add_diffuse_material((0.3, 0.3, 0.3))
        add_sphere(vec3(50.0, 0.0, -10.0), 1.0, material_id=miss)
        add_sphere(vec3(0.0, 3.0, -10.0), 4.0, material_id=far)
        add_sphere(vec3(0.0, 1.0, -30.0), 4.0, material_id=near)

        rec = _query()
        assert rec["material_id"] == near
        assert rec["distance"] == pytest.approx(1.0)

    def test_tie_keeps_first_added(self):
        """Test equally distant hits resolve to the first sphere added."""
        from src.spheretrace.materials.diffuse import add_diffuse_material
        from src.spheretrace.scene.intersection import add_sphere, vec3

        first = add_diffuse_material((1.0, 1.0, 1.0))
        second = add_diffuse_material((0.0, 0.0, 0.0))
        add_sphere(vec3(0.0, 0.0, -20.0), 1.0, material_id=first)
        add_sphere(vec3(0.0, 0.0, -10.0), 1.0, material_id=second)

        rec = _query()
        assert rec["material_id"] == first

    def test_nearest_is_by_miss_distance_not_depth(self):
        """Test a deeper sphere wins when its center is closer to the line."""
        from src.spheretrace.materials.diffuse import add_diffuse_material
        from src.spheretrace.scene.intersection import add_sphere, vec3

        shallow = add_diffuse_material((0.2, 0.2, 0.2))
        deep = add_diffuse_material((0.8, 0.8, 0.8))
        add_sphere(vec3(0.0, 1.5, -5.0), 2.0, material_id=shallow)
        add_sphere(vec3(0.0, 0.5, -50.0), 2.0, material_id=deep)

        assert _query()["material_id"] == deep


class TestViewDistanceCutoff:
    """Tests for the maximum view distance post-filter."""

    def test_distance_at_cutoff_is_miss(self):
        """Test a geometric hit at exactly MAX_VIEW_DISTANCE is reported as a miss."""
        from src.spheretrace.materials.diffuse import add_diffuse_material
        from src.spheretrace.scene.intersection import MAX_VIEW_DISTANCE, add_sphere, vec3

        assert MAX_VIEW_DISTANCE == 1000.0
        mat = add_diffuse_material((0.5, 0.5, 0.5))
        add_sphere(vec3(0.0, 1000.0, -5.0), 2000.0, material_id=mat)

        rec = _query()
        assert rec["hit"] == 0
        assert rec["material_id"] == -1

    def test_distance_beyond_cutoff_is_miss(self):
        """Test a geometric hit beyond MAX_VIEW_DISTANCE is reported as a miss."""
        from src.spheretrace.materials.diffuse import add_diffuse_material
        from src.spheretrace.scene.intersection import add_sphere, vec3

        mat = add_diffuse_material((0.5, 0.5, 0.5))
        add_sphere(vec3(0.0, 1500.0, -5.0), 2000.0, material_id=mat)

        assert _query()["hit"] == 0

    def test_distance_below_cutoff_is_hit(self):
        """Test a hit just inside the cutoff is kept."""
        from src.spheretrace.materials.diffuse import add_diffuse_material
        from src.spheretrace.scene.intersection import add_sphere, vec3

        mat = add_diffuse_material((0.5, 0.5, 0.5))
        add_sphere(vec3(0.0, 999.5, -5.0), 2000.0, material_id=mat)

        rec = _query()
        assert rec["hit"] == 1
        assert rec["distance"] == pytest.approx(999.5)
