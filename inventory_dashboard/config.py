"""
Configuration: source column names, process registry, constants.

PROCESS_RULES is the ordered list used to classify free-text process labels;
the first keyword contained in the label wins.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# File paths — adjust these if source files move
# ---------------------------------------------------------------------------
DATA_DIR = Path(__file__).resolve().parent.parent

MOVEMENTS_FILE = DATA_DIR / "movimientos.xlsx"

# ---------------------------------------------------------------------------
# Source columns (headers of the movements sheet, after trimming)
# ---------------------------------------------------------------------------
COL_DATE = "Fecha"
COL_PROCESS = "Proceso"
COL_QUANTITY = "Cantidad"
COL_ENTRY = "Entrada"
COL_EXIT = "Salida"
COL_MATERIAL_CODE = "Codigo Material"
COL_MATERIAL_NAME = "Items"
COL_RECEIVER = "Nombre Recibe"
COL_SENDER = "Nombre Entrega"

# Quantity-bearing source columns -> canonical column name
QUANTITY_COLUMNS: dict[str, str] = {
    COL_QUANTITY: "quantity",
    COL_ENTRY: "entry_quantity",
    COL_EXIT: "exit_quantity",
}

# ---------------------------------------------------------------------------
# Process registry
# ---------------------------------------------------------------------------
PROCESS_ENTRY = "Entrada"
PROCESS_EXIT = "Salida"
PROCESS_RETURN = "Devolucion"
PROCESS_LEGALIZED = "Legalizado"
PROCESS_UNKNOWN = "Sin Proceso"

# (keyword, process) evaluated in order against the upper-cased label
PROCESS_RULES: list[tuple[str, str]] = [
    ("ENTRADA", PROCESS_ENTRY),
    ("SALIDA", PROCESS_EXIT),
    ("DEVOLUC", PROCESS_RETURN),
    ("LEGALIZA", PROCESS_LEGALIZED),
]

PROCESS_KINDS = [
    PROCESS_ENTRY,
    PROCESS_EXIT,
    PROCESS_RETURN,
    PROCESS_LEGALIZED,
    PROCESS_UNKNOWN,
]

# ---------------------------------------------------------------------------
# Sentinels
# ---------------------------------------------------------------------------
MISSING_CODE = "N/A"
MISSING_NAME = "Unknown"
MISSING_PERIOD = "N/A"

# Canonical movements fact-table schema
MOVEMENT_COLUMNS = [
    "date",
    "process",
    "process_raw",
    "quantity",
    "quantity_missing",
    "entry_quantity",
    "exit_quantity",
    "material_code",
    "material_name",
    "receiver_name",
    "sender_name",
    "period",
]

# ---------------------------------------------------------------------------
# Dashboard outputs
# ---------------------------------------------------------------------------
PARETO_TOP_N = 20
TOP_STOCK_N = 10

# Stock distribution donut: segment label -> (KPI key, colour)
STOCK_DISTRIBUTION_SEGMENTS: dict[str, tuple[str, str]] = {
    "Stock Almacén": ("Stock_Almacen", "#1e3a8a"),
    "En Gestores": ("Stock_Calle", "#3b82f6"),
    "Legalizado": ("Legalizaciones", "#93c5fd"),
    "Devuelto": ("Devoluciones", "#cbd5e1"),
}

# Material summary field -> export column label (order is the sheet order)
EXPORT_COLUMNS: dict[str, str] = {
    "Codigo": "Código Material",
    "Material": "Descripción Material",
    "Ingresado": "Total Ingresado",
    "Entregado": "Total Entregado",
    "Devoluciones": "Total Devoluciones",
    "Stock_Almacen": "Stock en Almacén",
    "Stock_Calle": "Stock en Calle (Gestores)",
}

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
EXCEL_EPOCH_SERIAL = 25569  # serial of 1970-01-01
SECONDS_PER_DAY = 86400
MIDDAY_HOUR = 12
