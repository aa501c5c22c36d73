"""Tests for the data-quality audit and the Pareto ranking."""

from inventory_dashboard.audit import analyze_data_quality, calc_pareto


def test_quality_counters(make_records):
    """Counters inspect dates and the raw Cantidad cell."""
    records = make_records([
        {"Fecha": "01/01/2024", "Proceso": "Entrada", "Cantidad": 10},
        {"Fecha": "01/01/2024", "Proceso": "Salida", "Cantidad": "abc"},
        {"Fecha": "02/01/2024", "Proceso": "Salida", "Cantidad": None},
        {"Fecha": "not a date", "Proceso": "xyz", "Cantidad": 0},
        {"Proceso": "Entrada"},
    ])
    quality = analyze_data_quality(records)

    assert quality == {
        "total_rows": 5,
        "unique_dates": 2,
        "process_counts": {"Entrada": 2, "Salida": 2, "Sin Proceso": 1},
        "null_dates": 2,
        "null_cantidad": 2,
    }


def test_quality_empty(make_records):
    """No rows gives zeroed counters."""
    quality = analyze_data_quality(make_records([]))
    assert quality["total_rows"] == 0
    assert quality["process_counts"] == {}


def test_pareto_ranks_all_processes(make_records):
    """Every movement counts as volume, whatever its process."""
    records = make_records([
        {"Proceso": "Entrada", "Cantidad": 1, "Items": "Sello"},
        {"Proceso": "Salida", "Cantidad": 1, "Items": "Cable"},
        {"Proceso": "Legalizado", "Cantidad": 1, "Items": "Cable"},
        {"Proceso": "xyz", "Cantidad": 1, "Items": "Medidor"},
    ])
    pareto = calc_pareto(records)

    assert pareto["name"].tolist() == ["Cable", "Sello", "Medidor"]
    assert pareto["value"].tolist() == [2.0, 1.0, 1.0]
    assert pareto["cum_percentage"].tolist() == [50, 75, 100]


def test_pareto_rounds_to_whole_percent(make_records):
    """Thirds round to 33, 67, 100."""
    records = make_records([
        {"Proceso": "Entrada", "Cantidad": 1, "Items": name} for name in ("A", "B", "C")
    ])
    assert calc_pareto(records)["cum_percentage"].tolist() == [33, 67, 100]


def test_pareto_keeps_top_twenty(make_records):
    """With 25 materials the last share stays below 100."""
    records = make_records([
        {"Proceso": "Entrada", "Cantidad": i + 1, "Items": f"M{i:02d}"} for i in range(25)
    ])
    pareto = calc_pareto(records)

    assert len(pareto) == 20
    assert pareto["name"].iloc[0] == "M24"
    assert pareto["cum_percentage"].is_monotonic_increasing
    # top 20 hold 310 of 325
    assert pareto["cum_percentage"].iloc[-1] == 95


def test_pareto_zero_total(make_records):
    """All-zero quantities give 0 shares instead of dividing by zero."""
    records = make_records([{"Proceso": "Entrada", "Cantidad": 0, "Items": "A"}])
    assert calc_pareto(records)["cum_percentage"].tolist() == [0]


def test_pareto_empty(make_records):
    """No movements, no ranking."""
    assert calc_pareto(make_records([])).empty
