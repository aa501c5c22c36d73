"""
Inventory Movements — End-to-end analytics pipeline.

Runs the full pipeline from a movements workbook to dashboard-ready views
and prints smoke-test summaries. Without a workbook, simulated rows are used.

Usage:
    python main.py [path/to/movimientos.xlsx]
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from inventory_dashboard.config import MOVEMENTS_FILE
from inventory_dashboard.dashboard import build_export_rows
from inventory_dashboard.session import InventorySession
from inventory_dashboard.simulator import generate_movement_rows

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main(argv: list[str]) -> int:
    """Run the full analytics pipeline and print smoke-test outputs."""

    print("=" * 70)
    print("  INVENTORY MOVEMENTS — Stock Dashboard")
    print("  Analytics Pipeline Smoke Test")
    print("=" * 70)
    print()

    # ------------------------------------------------------------------
    # 1. Load source data
    # ------------------------------------------------------------------
    print("[ 1 ] LOADING SOURCE DATA")
    print("-" * 40)

    session = InventorySession()
    path = Path(argv[1]) if len(argv) > 1 else MOVEMENTS_FILE
    if path.exists():
        n = session.load(path)
        print(f"\nWorkbook {path.name}: {n} movements loaded")
    else:
        logger.warning("No workbook at %s, using simulated movements", path)
        n = session.load_rows(generate_movement_rows(), name="simulated")
        print(f"\nSimulated movements: {n} rows")

    options = session.filter_options()
    print(f"Periods available: {options['periods']}")
    print(f"Managers available: {len(options['managers'])}")

    # ------------------------------------------------------------------
    # 2. Dashboard outputs
    # ------------------------------------------------------------------
    print("\n")
    print("[ 2 ] DASHBOARD OUTPUTS")
    print("-" * 40)

    views = session.views()

    print("\nKPIs:")
    for key, value in views["kpis"].items():
        print(f"  {key:22s} | {value:,.0f}")

    print("\nStock distribution:")
    for segment in views["process_distribution"]:
        print(f"  {segment['name']:15s} | {segment['value']:,.0f}")

    print(f"\nMaterial summary: {len(views['material_summary'])} materials")
    if not views["material_summary"].empty:
        print(views["top_stock"].to_string(index=False))

    print("\nManager distribution:")
    if not views["manager_distribution"].empty:
        print(views["manager_distribution"].head(10).to_string(index=False))

    print(f"\nDaily breakdown: {len(views['daily_breakdown'])} days")
    if not views["daily_breakdown"].empty:
        print(views["daily_breakdown"].tail(7).to_string(index=False))

    print("\nData quality:")
    for key, value in views["quality"].items():
        print(f"  {key:15s} | {value}")

    print("\nPareto (top materials by volume):")
    if not views["pareto"].empty:
        print(views["pareto"].to_string(index=False))

    # ------------------------------------------------------------------
    # 3. Consistency checks
    # ------------------------------------------------------------------
    print("\n")
    print("[ 3 ] CONSISTENCY CHECKS")
    print("-" * 40)

    kpis = views["kpis"]
    summary = views["material_summary"]

    check1 = abs(
        kpis["Stock_Almacen"] + kpis["Material_Distribuido"]
        - kpis["Material_Recibido"] - kpis["Devoluciones"]
    ) < 1e-9
    print(f"\n  [{'PASS' if check1 else 'FAIL'}] Warehouse stock balances receipts, returns and deliveries")

    check2 = summary.empty or abs(summary["Ingresado"].sum() - kpis["Material_Recibido"]) < 1e-6
    print(f"  [{'PASS' if check2 else 'FAIL'}] Per-material receipts add up to Material_Recibido")

    pareto = views["pareto"]
    check3 = pareto.empty or pareto["cum_percentage"].is_monotonic_increasing
    print(f"  [{'PASS' if check3 else 'FAIL'}] Pareto cumulative share never decreases")

    check4 = views["filtered_rows"] == views["total_rows"]
    print(f"  [{'PASS' if check4 else 'FAIL'}] No filters: {views['filtered_rows']} of {views['total_rows']} rows")

    export = build_export_rows(summary, stock_only=True)
    print(f"  [INFO] {len(export)} materials with warehouse stock ready for export")

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)
    return 0 if all([check1, check2, check3, check4]) else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))
