"""Output formatters and exporters for tile estimates."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from tileplan.application.dtos import EstimateOutput, FloorEstimateOutput
from tileplan.domain.services import UsageRecord
from tileplan.domain.value_objects import OffcutRect


class EstimateReportFormatter:
    """Formats a single surface estimate as a plain text report."""

    def format(self, output: EstimateOutput) -> str:
        """Format purchase, material and pricing figures."""
        if not output.is_valid or output.estimate is None:
            failure = output.failure
            reason = f"{failure.message} ({failure.kind.value})" if failure else "unknown error"
            return f"ESTIMATE FAILED: {reason}"

        est = output.estimate
        s = est.summary
        title = f"TILE ESTIMATE: {est.name or est.surface_id}"
        packs = str(s.packs) if s.packs is not None else "-"

        lines = [
            title,
            "=" * 60,
            f"Tile: {est.tile.width:g} x {est.tile.height:g} cm ({est.tile.shape.value})",
            f"Options: rotate={'on' if est.options.allow_rotate else 'off'}, "
            f"optimize={'on' if est.options.optimize_cuts else 'off'}, "
            f"kerf={est.options.kerf:g} cm",
            "",
            "TILES",
            "-" * 60,
            f"{'Full tiles':<32} {s.full_tiles:>10}",
            f"{'Cut tiles':<32} {s.cut_tiles:>10}",
            f"{'Cuts from offcuts':<32} {s.reused_cuts:>10}",
            f"{'Purchased tiles':<32} {s.purchased_tiles:>10}",
            f"{'Reserve tiles':<32} {s.reserve_tiles:>10}",
            f"{'Purchased incl. reserve':<32} {s.purchased_tiles_with_reserve:>10}",
            "",
            "MATERIAL",
            "-" * 60,
            f"{'Gross surface (m²)':<32} {est.gross_area_m2:>10.2f}",
            f"{'Installed area (m²)':<32} {s.installed_area_m2:>10.2f}",
            f"{'Purchased area (m²)':<32} {s.purchased_area_m2:>10.2f}",
            f"{'Waste (m²)':<32} {s.waste_area_m2:>10.2f}",
            f"{'Waste (%)':<32} {s.waste_pct:>10.1f}",
            f"{'Cut share of placed tiles (%)':<32} {s.cut_tiles_pct:>10.1f}",
            "",
            "PRICING",
            "-" * 60,
            f"{'Price per m²':<32} {s.price_per_m2:>10.2f}",
            f"{'Packs':<32} {packs:>10}",
            f"{'Price (installed area)':<32} {s.price_total:>10.2f}",
            f"{'Purchase cost':<32} {s.purchase_cost:>10.2f}",
        ]
        if output.from_cache:
            lines.append("")
            lines.append("(cached result)")
        return "\n".join(lines)


class UsageFormatter:
    """Formats the per-tile decisions of an estimate."""

    def format(self, records: tuple[UsageRecord, ...]) -> str:
        """One row per cut tile; full tiles are summarised in a count."""
        cuts = [r for r in records if not r.is_full]
        if not cuts:
            return f"No cut tiles ({len(records)} full)."

        lines = [
            "CUT TILES",
            "=" * 72,
            f"{'#':<6} {'Need (cm)':<18} {'Source':<15} {'Offcut used':<16} {'Pair'}",
            "-" * 72,
        ]
        for r in cuts:
            need = f"{r.need.width:.1f} x {r.need.height:.1f}" if r.need else "-"
            used = f"{r.used_offcut.id} {r.used_offcut.width:.0f}x{r.used_offcut.height:.0f}" if r.used_offcut else "-"
            pair = str(r.partner) if r.partner is not None else ""
            lines.append(f"{r.index:<6} {need:<18} {r.source.value:<15} {used:<16} {pair}")
        return "\n".join(lines)


class FloorReportFormatter:
    """Formats a floor estimate as a per-surface table with totals."""

    def format(self, output: FloorEstimateOutput) -> str:
        lines = [
            f"FLOOR ESTIMATE: {output.floor_id}"
            + (" (shared offcuts)" if output.shared_offcuts else ""),
            "=" * 76,
            f"{'Surface':<20} {'Full':>6} {'Cut':>6} {'Reused':>7} {'Buy':>6} {'+Res':>6} {'Waste %':>9}",
            "-" * 76,
        ]
        for surface in output.surfaces:
            if surface.estimate is None:
                kind = surface.failure.kind.value if surface.failure else "failed"
                lines.append(f"{surface.surface_id or '-':<20} FAILED: {kind}")
                continue
            s = surface.estimate.summary
            lines.append(
                f"{surface.surface_id:<20} {s.full_tiles:>6} {s.cut_tiles:>6} {s.reused_cuts:>7} "
                f"{s.purchased_tiles:>6} {s.purchased_tiles_with_reserve:>6} {s.waste_pct:>9.1f}"
            )
        t = output.totals
        lines.append("-" * 76)
        lines.append(
            f"{'TOTAL':<20} {t.full_tiles:>6} {t.cut_tiles:>6} {t.reused_cuts:>7} "
            f"{t.purchased_tiles:>6} {t.purchased_tiles_with_reserve:>6} {t.waste_pct:>9.1f}"
        )
        lines.append(f"{'Purchase cost':<20} {t.purchase_cost:>10.2f}")
        return "\n".join(lines)


def _offcut_dict(offcut: OffcutRect) -> dict[str, Any]:
    return {
        "id": offcut.id,
        "width": offcut.width,
        "height": offcut.height,
        "from": offcut.provenance.value,
        "half_tile": offcut.half_tile,
    }


class JsonExporter:
    """Exports estimates as JSON-compatible dictionaries or strings."""

    def __init__(self, include_usage: bool = True) -> None:
        self._include_usage = include_usage

    def estimate_to_dict(self, output: EstimateOutput) -> dict[str, Any]:
        """Dictionary form of a surface estimate or its failure."""
        if not output.is_valid or output.estimate is None:
            failure = output.failure
            return {
                "ok": False,
                "surface_id": output.surface_id,
                "error": failure.message if failure else None,
                "error_type": failure.kind.value if failure else None,
            }

        est = output.estimate
        s = est.summary
        data: dict[str, Any] = {
            "ok": True,
            "surface_id": est.surface_id,
            "name": est.name,
            "from_cache": output.from_cache,
            "tiles": {
                "full_tiles": s.full_tiles,
                "cut_tiles": s.cut_tiles,
                "reused_cuts": s.reused_cuts,
                "purchased_tiles": s.purchased_tiles,
                "reserve_tiles": s.reserve_tiles,
                "purchased_tiles_with_reserve": s.purchased_tiles_with_reserve,
            },
            "material": {
                "tile_area_cm2": s.tile_area_cm2,
                "installed_area_m2": s.installed_area_m2,
                "purchased_area_m2": s.purchased_area_m2,
                "waste_area_m2": s.waste_area_m2,
                "waste_pct": s.waste_pct,
                "waste_tiles_est": s.waste_tiles_est,
            },
            "labor": {
                "total_placed_tiles": s.total_placed_tiles,
                "cut_tiles": s.cut_tiles,
                "cut_tiles_pct": s.cut_tiles_pct,
                "cut_need_area_m2": s.cut_need_area_m2,
            },
            "waste": {
                "allow_rotate": est.options.allow_rotate,
                "optimize_cuts": est.options.optimize_cuts,
                "kerf": est.options.kerf,
            },
            "area": {
                "gross_area_m2": est.gross_area_m2,
                "net_area_m2": s.installed_area_m2,
            },
            "pricing": {
                "price_per_m2": s.price_per_m2,
                "pack_m2": s.pack_m2,
                "packs": s.packs,
                "price_total": s.price_total,
                "purchase_cost": s.purchase_cost,
            },
        }
        if self._include_usage:
            data["usage"] = [self._usage_dict(r) for r in est.consumption.usage]
            data["offcuts_remaining"] = [_offcut_dict(o) for o in est.consumption.offcuts_remaining]
        return data

    def floor_to_dict(self, output: FloorEstimateOutput) -> dict[str, Any]:
        """Dictionary form of a floor estimate."""
        return {
            "floor_id": output.floor_id,
            "shared_offcuts": output.shared_offcuts,
            "surfaces": [self.estimate_to_dict(s) for s in output.surfaces],
            "totals": asdict(output.totals),
        }

    def export(self, output: EstimateOutput) -> str:
        """Surface estimate as a JSON string."""
        return json.dumps(self.estimate_to_dict(output), indent=2)

    def export_floor(self, output: FloorEstimateOutput) -> str:
        """Floor estimate as a JSON string."""
        return json.dumps(self.floor_to_dict(output), indent=2)

    def _usage_dict(self, record: UsageRecord) -> dict[str, Any]:
        need = record.need
        return {
            "index": record.index,
            "is_full": record.is_full,
            "reused": record.reused,
            "source": record.source.value,
            "need": {"w": need.width, "h": need.height} if need else None,
            "request": list(record.request) if record.request else None,
            "used_offcut": _offcut_dict(record.used_offcut) if record.used_offcut else None,
            "created_offcuts": [_offcut_dict(o) for o in record.created_offcuts],
            "partner": record.partner,
            "rotated": record.rotated,
        }
