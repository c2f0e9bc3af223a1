"""Warehouse/category catalog.

Static lookup tables for the four ToolLink warehouses. The backend has used two
naming schemes over time (long keys such as ``main_warehouse`` and short codes
such as ``WM``); only the short codes are canonical here and every legacy key or
display label is migrated through ``_ALIASES``.

Every lookup is total: unknown input falls back to the default warehouse.
"""

from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Mapping, NamedTuple


class Warehouse(str, enum.Enum):
    W1 = "W1"
    W2 = "W2"
    W3 = "W3"
    WM = "WM"
    # View-aggregation pseudo-warehouse, never a storage target
    ALL = "all"


DEFAULT_WAREHOUSE = Warehouse.WM
ALL_WAREHOUSES_LABEL = "All Warehouses"


class Category(NamedTuple):
    code: str
    name: str
    description: str


class QuickItem(NamedTuple):
    """One-click template used to pre-fill the inventory form."""
    name: str
    category: str
    unit: str
    warehouse: Warehouse


class WarehouseConfig(NamedTuple):
    code: Warehouse
    name: str
    description: str
    categories: tuple[Category, ...]


def _categories(code: str, *entries: tuple[str, str]) -> tuple[Category, ...]:
    return tuple(
        Category(f"{code}-{i:03d}", name, description)
        for i, (name, description) in enumerate(entries, start=1)
    )


_CATALOG: Mapping[Warehouse, WarehouseConfig] = MappingProxyType({
    Warehouse.W1: WarehouseConfig(
        code=Warehouse.W1,
        name="W1 - Sand & Aggregate Warehouse",
        description="Sand, aggregate, and construction base materials",
        categories=_categories(
            "W1",
            ("Sand & Aggregate", "General sand and aggregate category"),
            ("Fine Sand", "Fine construction sand"),
            ("Medium Sand", "Medium grain construction sand"),
            ("Coarse Sand", "Coarse grain construction sand"),
            ("River Sand", "Natural river sand"),
            ("Washed Sand", "Cleaned and washed sand"),
            ("M-Sand (Crushed Rock)", "Manufactured sand from crushed rock"),
            ("Aggregate", "Construction aggregate materials"),
            ("Gravel", "Gravel for construction and drainage"),
            ("Stone Chips", "Stone chips for concrete and road work"),
        ),
    ),
    Warehouse.W2: WarehouseConfig(
        code=Warehouse.W2,
        name="W2 - Bricks & Masonry Warehouse",
        description="Bricks, blocks, and masonry materials",
        categories=_categories(
            "W2",
            ("Bricks & Masonry", "General bricks and masonry category"),
            ("Solid Cement Blocks", "Solid concrete construction blocks"),
            ("Hollow Cement Blocks", "Hollow concrete blocks for walls"),
            ("Clay Bricks", "Traditional fired clay bricks"),
            ("4 Inch Blocks", "4 inch thick concrete blocks"),
            ("6 Inch Blocks", "6 inch thick concrete blocks"),
            ("8 Inch Blocks", "8 inch thick concrete blocks"),
            ("Masonry Blocks", "Specialized masonry blocks"),
            ("Interlocking Pavers", "Interlocking concrete pavers"),
            ("Granite Slabs", "Natural granite stone slabs"),
            ("Decorative Stones", "Decorative natural stones"),
        ),
    ),
    Warehouse.W3: WarehouseConfig(
        code=Warehouse.W3,
        name="W3 - Steel & Metal Warehouse",
        description="Steel reinforcement and metal products",
        categories=_categories(
            "W3",
            ("Steel & Reinforcement", "General steel and reinforcement category"),
            ("6mm Steel Rods", "6mm diameter steel reinforcement rods"),
            ("8mm Steel Rods", "8mm diameter steel reinforcement rods"),
            ("10mm Steel Rods", "10mm diameter steel reinforcement rods"),
            ("12mm Steel Rods", "12mm diameter steel reinforcement rods"),
            ("16mm Steel Rods", "16mm diameter steel reinforcement rods"),
            ("20mm Steel Rods", "20mm diameter steel reinforcement rods"),
            ("25mm Steel Rods", "25mm diameter steel reinforcement rods"),
            ("Steel Wire", "Steel binding and construction wire"),
            ("Steel Mesh", "Steel reinforcement mesh"),
            ("Steel Plates", "Steel plates for construction"),
            ("Angle Bars", "L-shaped steel angle bars"),
            ("Channel Bars", "C-shaped steel channel bars"),
        ),
    ),
    Warehouse.WM: WarehouseConfig(
        code=Warehouse.WM,
        name="WM - Main Warehouse (Tools & Equipment)",
        description="Tools, equipment, and miscellaneous construction materials",
        categories=_categories(
            "WM",
            ("Tools & Equipment", "General tools and equipment category"),
            ("Hand Tools", "Manual hand tools"),
            ("Power Tools", "Electric and battery powered tools"),
            ("Power Drills", "Electric and cordless drills"),
            ("Grinders", "Grinding tools and equipment"),
            ("Saws", "Cutting saws and blades"),
            ("Welding Equipment", "Welding machines and accessories"),
            ("Measuring Tools", "Measurement and leveling tools"),
            ("Safety Gear", "Personal protective equipment"),
            ("Cutting Tools", "Cutting and shaping tools"),
            ("Angle Grinders", "Angle grinding machines"),
            ("Cement", "Portland cement and specialty cements"),
            ("Paint & Chemicals", "Paints, solvents, and construction chemicals"),
            ("Electrical Items", "Electrical supplies and components"),
            ("Plumbing Supplies", "Pipes, fittings, and plumbing materials"),
            ("Tiles & Ceramics", "Floor and wall tiles"),
            ("Roofing Materials", "Roofing sheets and accessories"),
            ("Hardware & Fasteners", "Bolts, screws, and hardware items"),
            ("Materials", "Miscellaneous construction materials"),
        ),
    ),
})

STORAGE_WAREHOUSES: tuple[Warehouse, ...] = tuple(_CATALOG)

UNITS: tuple[str, ...] = (
    "pieces", "kg", "liters", "meters", "boxes", "sets",
    "cubic_ft", "bags", "sheets", "rolls", "feet", "packs",
)

QUICK_ITEMS: tuple[QuickItem, ...] = (
    QuickItem("Kelani River Sand - Fine", "Fine Sand", "cubic_ft", Warehouse.W1),
    QuickItem("Medium Sand for Masonry", "Medium Sand", "cubic_ft", Warehouse.W1),
    QuickItem("Aggregate 10mm", "Aggregate", "cubic_ft", Warehouse.W1),
    QuickItem("River Sand - Mixed", "Sand & Aggregate", "cubic_ft", Warehouse.W1),
    QuickItem('Cement Block 6"', "6 Inch Blocks", "pieces", Warehouse.W2),
    QuickItem('Hollow Block 4"', "4 Inch Blocks", "pieces", Warehouse.W2),
    QuickItem("Clay Brick - Solid", "Clay Bricks", "pieces", Warehouse.W2),
    QuickItem("Cement Blocks - Standard", "Bricks & Masonry", "pieces", Warehouse.W2),
    QuickItem("Lanwa Steel Rod 10mm", "10mm Steel Rods", "pieces", Warehouse.W3),
    QuickItem("Steel Rod 12mm", "12mm Steel Rods", "pieces", Warehouse.W3),
    QuickItem("Binding Wire 20kg", "Steel Wire", "kg", Warehouse.W3),
    QuickItem("Steel Rods - Mixed", "Steel & Reinforcement", "pieces", Warehouse.W3),
    QuickItem("Makita Electric Drill 750W", "Power Drills", "pieces", Warehouse.WM),
    QuickItem("Angle Grinder 900W", "Angle Grinders", "pieces", Warehouse.WM),
    QuickItem("Measuring Tape 5m", "Measuring Tools", "pieces", Warehouse.WM),
    QuickItem("Safety Helmet", "Safety Gear", "pieces", Warehouse.WM),
    QuickItem("Construction Tools - General", "Tools & Equipment", "pieces", Warehouse.WM),
)


def _build_aliases() -> Mapping[str, Warehouse]:
    aliases: dict[str, Warehouse] = {
        "all": Warehouse.ALL,
        ALL_WAREHOUSES_LABEL.lower(): Warehouse.ALL,
        # legacy long keys
        "warehouse1": Warehouse.W1,
        "warehouse2": Warehouse.W2,
        "warehouse3": Warehouse.W3,
        "main_warehouse": Warehouse.WM,
        "main warehouse": Warehouse.WM,
        # labels shipped by older form builds
        "w1 - river sand & soil": Warehouse.W1,
        "w1 - sand & aggregate": Warehouse.W1,
        "w2 - bricks & masonry": Warehouse.W2,
        "w3 - steel & metal": Warehouse.W3,
        "wm - tools & equipment": Warehouse.WM,
    }
    for config in _CATALOG.values():
        aliases[config.code.value.lower()] = config.code
        aliases[config.name.lower()] = config.code
    return MappingProxyType(aliases)


_ALIASES = _build_aliases()

_ALL_CATEGORIES: tuple[str, ...] = tuple(dict.fromkeys(
    category.name for config in _CATALOG.values() for category in config.categories
))


def find_warehouse(name: object) -> Warehouse | None:
    """Strict lookup of a code, legacy key or label; None when unrecognised."""
    if isinstance(name, Warehouse):
        return name
    if not isinstance(name, str):
        return None
    return _ALIASES.get(name.strip().lower())


def key_from_display_name(display_name: object) -> Warehouse:
    """Resolve a code, legacy key or display label to a canonical warehouse.

    Matching ignores case and surrounding whitespace. Anything unrecognised
    resolves to the default warehouse.
    """
    return find_warehouse(display_name) or DEFAULT_WAREHOUSE


def resolve_storage_warehouse(key: object) -> Warehouse:
    """Like key_from_display_name, but never returns the ``all`` sentinel."""
    warehouse = key_from_display_name(key)
    if warehouse is Warehouse.ALL:
        return DEFAULT_WAREHOUSE
    return warehouse


def display_name(warehouse_key: object) -> str:
    warehouse = key_from_display_name(warehouse_key)
    if warehouse is Warehouse.ALL:
        return ALL_WAREHOUSES_LABEL
    return _CATALOG[warehouse].name


def categories_for(warehouse_key: object) -> tuple[str, ...]:
    """Ordered category names for a warehouse; the first one is the default.

    ``all`` yields the union of every warehouse's categories, for filtering only.
    """
    warehouse = key_from_display_name(warehouse_key)
    if warehouse is Warehouse.ALL:
        return _ALL_CATEGORIES
    return tuple(category.name for category in _CATALOG[warehouse].categories)


def default_category(warehouse_key: object) -> str:
    return categories_for(resolve_storage_warehouse(warehouse_key))[0]


def is_valid_category(warehouse_key: object, category: str) -> bool:
    return category in categories_for(warehouse_key)


def warehouse_options() -> list[dict[str, str]]:
    return [
        {"key": config.code.value, "name": config.name, "description": config.description}
        for config in _CATALOG.values()
    ]


def quick_items(warehouse_key: object = None) -> tuple[QuickItem, ...]:
    if warehouse_key is None:
        return QUICK_ITEMS
    warehouse = key_from_display_name(warehouse_key)
    if warehouse is Warehouse.ALL:
        return QUICK_ITEMS
    return tuple(item for item in QUICK_ITEMS if item.warehouse is warehouse)


def find_category_code(name: str) -> str | None:
    """Catalog code (e.g. ``W3-001``) of a category name, or None."""
    for config in _CATALOG.values():
        for category in config.categories:
            if category.name == name:
                return category.code
    return None


def search_categories(term: str) -> list[Category]:
    needle = (term or "").strip().lower()
    return [
        category
        for config in _CATALOG.values()
        for category in config.categories
        if needle in category.name.lower() or needle in category.description.lower()
    ]
