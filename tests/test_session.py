"""End-to-end tests for loading, filtering and view derivation."""

from datetime import datetime

import pytest

from inventory_dashboard import IngestionError, InventorySession, QueryState, load_movements

E2E_ROWS = [
    {"Proceso": "Entrada", "Cantidad": 10, "Fecha": "01/01/2024"},
    {"Proceso": "Salida", "Cantidad": 4, "Fecha": "02/01/2024", "Nombre Recibe": "Ana"},
]


def test_end_to_end_from_rows():
    """Two movements give the expected KPIs and manager ranking."""
    session = InventorySession()
    session.load_rows(E2E_ROWS)
    views = session.views()

    kpis = views["kpis"]
    assert kpis["Material_Recibido"] == 10
    assert kpis["Material_Distribuido"] == 4
    assert kpis["Stock_Almacen"] == 6
    assert kpis["Stock_Calle"] == 4
    assert views["manager_distribution"].to_dict(orient="records") == [
        {"Gestor": "Ana", "Entregado": 4.0, "Legalizado": 0.0},
    ]
    assert views["total_rows"] == views["filtered_rows"] == 2


def test_end_to_end_from_workbook(write_workbook):
    """The same scenario read from an .xlsx file."""
    path = write_workbook([
        ["Fecha", "Proceso", "Cantidad", "Codigo Material", "Items", "Nombre Recibe", "Nombre Entrega"],
        ["01/01/2024", "ENTRADA ALMACEN", 10, 10001, "Cable", None, None],
        [datetime(2024, 1, 2), "salida de almacen", 4, 10001, "Cable", "Ana", None],
        [45294, "Legalizacion", 1, 10001, "Cable", None, "Ana"],
    ])
    records = load_movements(path)

    assert records["process"].tolist() == ["Entrada", "Salida", "Legalizado"]
    assert records["period"].tolist() == ["202401", "202401", "202401"]
    assert records["material_code"].unique().tolist() == ["10001"]

    session = InventorySession()
    assert session.load(path) == 3
    views = session.views()
    assert views["kpis"]["Stock_Calle"] == 3
    assert views["daily_breakdown"]["date"].tolist() == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert session.source == str(path)


def test_filters_drive_views():
    """Views are recomputed for the active query."""
    session = InventorySession()
    session.load_rows(E2E_ROWS)
    session.set_query({"processes": ["Salida"]})

    views = session.views()
    assert views["filtered_rows"] == 1
    assert views["total_rows"] == 2
    assert views["kpis"]["Material_Recibido"] == 0
    assert views["kpis"]["Stock_Almacen"] == -4


def test_reload_resets_filters():
    """A new dataset starts with no filters."""
    session = InventorySession()
    session.load_rows(E2E_ROWS)
    session.set_query({"managers": ["Ana"], "periods": ["202401"]})

    session.load_rows([{"Proceso": "Entrada", "Cantidad": 1, "Fecha": "05/05/2025"}])

    assert session.query == QueryState()
    assert session.views()["filtered_rows"] == 1


def test_failed_load_keeps_previous_state():
    """A corrupt upload changes nothing."""
    session = InventorySession()
    session.load_rows(E2E_ROWS, name="first.xlsx")
    query = session.set_query({"processes": ["Entrada"]})
    records = session.records

    with pytest.raises(IngestionError):
        session.load(b"not an xlsx payload")

    assert session.records is records
    assert session.query == query
    assert session.source == "first.xlsx"


def test_filter_options_follow_dataset():
    """Picker options come from the loaded records."""
    session = InventorySession()
    assert session.filter_options()["periods"] == []
    session.load_rows(E2E_ROWS)
    assert session.filter_options()["managers"] == ["Ana"]
