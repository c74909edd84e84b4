"""Tests for the consumption engine walk.

The walk is a greedy heuristic: every cut takes the first acceptable source
in the order pair placeholder, pool offcut, new tile. The expectations
below describe that behavior and are not claims of minimal waste.
"""

from __future__ import annotations

import pytest

from tileplan.domain.services import (
    ConsumptionEngine,
    ConsumptionOptions,
    ConsumptionResult,
    OffcutInventory,
    compute_purchase_summary,
)
from tileplan.domain.value_objects import NominalTile, OffcutProvenance, PlacedTile, UsageSource


# =============================================================================
# Fixtures
# =============================================================================


def _rect(x: float, y: float, w: float, h: float) -> PlacedTile:
    return PlacedTile.cut(((x, y), (x + w, y), (x + w, y + h), (x, y + h)))


@pytest.fixture
def square_tile() -> NominalTile:
    """Create a 50 x 50 tile."""
    return NominalTile(50.0, 50.0)


@pytest.fixture
def long_tile() -> NominalTile:
    """Create a 60 x 30 tile."""
    return NominalTile(60.0, 30.0)


@pytest.fixture
def rotation_sensitive_cuts() -> list[PlacedTile]:
    """A 60 x 10 strip leaving a 20 x 60 remnant, then a 50 x 15 strip.

    The second cut only fits the remnant when turned by 90 degrees.
    """
    return [_rect(0, 0, 60, 10), _rect(0, 100, 50, 15)]


# =============================================================================
# Basic counting
# =============================================================================


class TestCounting:
    """Tests for full, cut and degenerate counts."""

    def test_full_tiles_only(self, square_tile: NominalTile) -> None:
        result = ConsumptionEngine(square_tile).run([PlacedTile.full()] * 4)

        assert result.full_tiles == 4
        assert result.cut_tiles == 0
        assert result.reused_cuts == 0
        assert all(r.source == UsageSource.NEW for r in result.usage)

    def test_degenerate_shapes_are_not_cuts(self, square_tile: NominalTile) -> None:
        tiles = [PlacedTile.full(), _rect(0, 0, 50, 0.01)]

        result = ConsumptionEngine(square_tile).run(tiles)

        assert result.cut_tiles == 0
        assert result.degenerate_tiles == 1
        assert result.usage[1].source == UsageSource.DEGENERATE

    def test_one_record_per_tile_in_input_order(self, square_tile: NominalTile) -> None:
        tiles = [_rect(0, 0, 50, 20), PlacedTile.full(), _rect(0, 0, 50, 20)]

        result = ConsumptionEngine(square_tile).run(tiles)

        assert [r.index for r in result.usage] == [0, 1, 2]
        assert [r.is_full for r in result.usage] == [False, True, False]

    def test_cut_need_area_sums_bboxes(self, square_tile: NominalTile) -> None:
        result = ConsumptionEngine(square_tile).run([_rect(0, 0, 50, 20), _rect(0, 0, 10, 10)])

        assert result.cut_need_area == pytest.approx(1100.0)

    def test_result_rejects_reuse_above_cuts(self) -> None:
        with pytest.raises(ValueError):
            ConsumptionResult(full_tiles=0, cut_tiles=1, reused_cuts=2)


# =============================================================================
# Offcut reuse
# =============================================================================


class TestOffcutReuse:
    """Tests for new tile remnants feeding later cuts."""

    def test_coarse_remnant_is_reused(self, square_tile: NominalTile) -> None:
        # 50 x 30 leaves 1000 cm² kept as a 20 x 50 remnant; 50 x 15 fits it turned
        tiles = [_rect(0, 0, 50, 30), _rect(0, 0, 50, 15)]

        result = ConsumptionEngine(square_tile).run(tiles)

        first, second = result.usage
        assert first.source == UsageSource.NEW
        assert [(o.width, o.height) for o in first.created_offcuts] == [(20.0, 50.0)]
        assert second.source == UsageSource.POOL_OFFCUT
        assert second.rotated is True
        assert result.reused_cuts == 1

    def test_optimize_uses_guillotine_remainders(self, square_tile: NominalTile) -> None:
        options = ConsumptionOptions(optimize_cuts=True, kerf=0.0)

        result = ConsumptionEngine(square_tile, options).run([_rect(0, 0, 30, 20)])

        created = result.usage[0].created_offcuts
        assert [(o.width, o.height) for o in created] == [(20.0, 50.0), (30.0, 30.0)]
        assert len(result.offcuts_remaining) == 2

    def test_kerf_ignored_without_optimize(self, square_tile: NominalTile) -> None:
        assert ConsumptionOptions(kerf=0.2).effective_kerf == 0.0
        assert ConsumptionOptions(optimize_cuts=True, kerf=0.2).effective_kerf == 0.2

    def test_triangular_cut_keeps_half_tile_remnant(self, square_tile: NominalTile) -> None:
        result = ConsumptionEngine(square_tile).run([PlacedTile.cut(((0, 0), (50, 0), (0, 50)))])

        (offcut,) = result.usage[0].created_offcuts
        assert offcut.half_tile is True
        assert offcut.provenance == OffcutProvenance.TILE

    def test_irregular_cut_request_is_shrunk(self, square_tile: NominalTile) -> None:
        ring = ((0, 0), (50, 0), (50, 10), (10, 10), (10, 50), (0, 50))

        result = ConsumptionEngine(square_tile).run([PlacedTile.cut(ring)])

        # ratio 0.36, so both sides scale by 0.6
        assert result.usage[0].request == pytest.approx((30.0, 30.0))

    def test_shared_inventory_is_used_and_mutated(self, square_tile: NominalTile) -> None:
        inventory = OffcutInventory()
        inventory.add(50.0, 20.0)

        result = ConsumptionEngine(square_tile).run([_rect(0, 0, 50, 20)], inventory)

        assert result.reused_cuts == 1
        assert len(inventory) == 0


# =============================================================================
# Complementary pairs
# =============================================================================


class TestComplementaryPairs:
    """Tests for two cut halves charged as one tile."""

    def test_pair_consumes_one_tile(self, square_tile: NominalTile) -> None:
        tiles = [
            PlacedTile.cut(((0, 0), (50, 0), (0, 50))),
            PlacedTile.full(),
            PlacedTile.cut(((150, 0), (150, 50), (100, 50))),
        ]

        result = ConsumptionEngine(square_tile).run(tiles)

        assert result.pairs == {0: 2, 2: 0}
        assert result.usage[0].source == UsageSource.NEW
        assert result.usage[2].source == UsageSource.PAIRED_OFFCUT
        assert result.usage[2].used_offcut == result.usage[0].created_offcuts[0]
        assert result.paired_count == 1
        assert result.cut_tiles == 2
        assert result.reused_cuts == 1
        assert result.new_tiles_for_cuts == 1

    def test_placeholder_not_left_in_pool(self, square_tile: NominalTile) -> None:
        tiles = [
            PlacedTile.cut(((0, 0), (50, 0), (0, 50))),
            PlacedTile.cut(((50, 0), (50, 50), (0, 50))),
        ]
        inventory = OffcutInventory()

        result = ConsumptionEngine(square_tile).run(tiles, inventory)

        assert result.offcuts_remaining == ()
        assert inventory.reserved_count == 0


# =============================================================================
# Rotation
# =============================================================================


class TestRotation:
    """Disabling rotation never increases reuse."""

    def test_rotation_enables_reuse(
        self, long_tile: NominalTile, rotation_sensitive_cuts: list[PlacedTile]
    ) -> None:
        rotated = ConsumptionEngine(long_tile, ConsumptionOptions(allow_rotate=True)).run(
            rotation_sensitive_cuts
        )
        upright = ConsumptionEngine(long_tile, ConsumptionOptions(allow_rotate=False)).run(
            rotation_sensitive_cuts
        )

        assert rotated.reused_cuts == 1
        assert upright.reused_cuts == 0
        assert upright.reused_cuts < rotated.reused_cuts

    def test_rotation_irrelevant_input(self, square_tile: NominalTile) -> None:
        tiles = [_rect(0, 0, 50, 30), _rect(0, 0, 20, 50)]

        with_rotation = ConsumptionEngine(square_tile, ConsumptionOptions(allow_rotate=True)).run(tiles)
        without = ConsumptionEngine(square_tile, ConsumptionOptions(allow_rotate=False)).run(tiles)

        assert without.reused_cuts <= with_rotation.reused_cuts


# =============================================================================
# Purchase invariant
# =============================================================================


class TestPurchaseInvariant:
    """purchased = full + max(0, cut - reused) for mixed inputs."""

    @pytest.mark.parametrize("optimize", [False, True])
    @pytest.mark.parametrize("allow_rotate", [False, True])
    def test_invariant(self, square_tile: NominalTile, optimize: bool, allow_rotate: bool) -> None:
        tiles = [
            PlacedTile.full(),
            _rect(0, 0, 50, 30),
            PlacedTile.cut(((0, 0), (50, 0), (0, 50))),
            _rect(0, 0, 50, 15),
            PlacedTile.cut(((50, 0), (50, 50), (0, 50))),
            _rect(0, 0, 12, 12),
            _rect(0, 0, 50, 0.001),
        ]
        options = ConsumptionOptions(allow_rotate=allow_rotate, optimize_cuts=optimize, kerf=0.2)

        result = ConsumptionEngine(square_tile, options).run(tiles)
        summary = compute_purchase_summary(
            full_tiles=result.full_tiles,
            cut_tiles=result.cut_tiles,
            reused_cuts=result.reused_cuts,
            tile_area_cm2=square_tile.area,
            installed_area_cm2=5000.0,
        )

        assert 0 <= result.reused_cuts <= result.cut_tiles
        assert summary.purchased_tiles == result.full_tiles + max(0, result.cut_tiles - result.reused_cuts)
