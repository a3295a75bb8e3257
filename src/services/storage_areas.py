"""Catalog of rooms and the storage areas inside them.

Pantry items store the storage area *name* in ``location``. The catalog is
used for room filtering and to populate pickers; it is not enforced when
items are written.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StorageArea:
    id: str
    name: str
    room: str


STORAGE_AREAS: tuple[StorageArea, ...] = (
    # Kitchen
    StorageArea("kitchen-shelf-top-small", "Shelf Top Small", "Kitchen"),
    StorageArea("kitchen-shelf-top-right", "Shelf Top Right", "Kitchen"),
    StorageArea("kitchen-shelf-top-large", "Shelf Top Large", "Kitchen"),
    StorageArea("kitchen-shelf-bottom", "Shelf Bottom", "Kitchen"),
    StorageArea("kitchen-countertop", "Countertop", "Kitchen"),
    StorageArea("kitchen-box-coffee", "Box Coffee", "Kitchen"),
    StorageArea("kitchen-snack-cabinet", "Snack Cabinet", "Kitchen"),
    StorageArea("kitchen-medicine-cabinet", "Medicine Cabinet", "Kitchen"),
    StorageArea("kitchen-alcohol-cabinet", "Alcohol Cabinet", "Kitchen"),
    StorageArea("kitchen-fridge", "Fridge", "Kitchen"),
    StorageArea("kitchen-freezer", "Freezer", "Kitchen"),
    StorageArea("kitchen-cleaning-cupboard", "Cleaning Cupboard", "Kitchen"),
    StorageArea("kitchen-makeup-box", "Makeup Box", "Kitchen"),
    StorageArea("kitchen-unknown", "Unknown", "Kitchen"),
    # Living Room
    StorageArea("living-back-bookshelf", "Back Bookshelf", "Living Room"),
    StorageArea("living-front-bookshelf", "Front Bookshelf", "Living Room"),
    StorageArea("living-fireplace-box", "Fireplace Box", "Living Room"),
    StorageArea("living-tv-cabinet", "TV Cabinet", "Living Room"),
    StorageArea("living-beside-couch", "Beside Couch", "Living Room"),
    # Study Room
    StorageArea("study-wardrobe", "Study Room Wardrobe", "Study Room"),
    StorageArea("study-working-desk", "Working Desk Area", "Study Room"),
    StorageArea("study-underbed-1", "Underbed Storage 1", "Study Room"),
    StorageArea("study-underbed-2", "Underbed Storage 2", "Study Room"),
    # Bedroom
    StorageArea("bedroom-front-shelves", "Front shelves", "Bedroom"),
    StorageArea("bedroom-wardrobe-left", "Wardrobe Left", "Bedroom"),
    StorageArea("bedroom-wardrobe-right", "Wardrobe Right", "Bedroom"),
    StorageArea("bedroom-beside-table-left", "Bedside Table Left", "Bedroom"),
    StorageArea("bedroom-beside-table-right", "Bedside Table Right", "Bedroom"),
    # Bathroom
    StorageArea("bathroom-top-shelf", "Top Shelf", "Bathroom"),
    StorageArea("bathroom-middle-shelf", "Middle Shelf", "Bathroom"),
    StorageArea("bathroom-lower-shelf", "Lower Shelf (Cleaning Products)", "Bathroom"),
    StorageArea("bathroom-outside-cleaning", "Outside Cleaning Products", "Bathroom"),
    StorageArea("bathroom-bath-products", "Bath Products Area", "Bathroom"),
    # Stairs Cupboard
    StorageArea("stairs-shoes-cabinet", "Shoes Cabinet", "Stairs Cupboard"),
    StorageArea("stairs-cupboard", "Stairs Cupboard", "Stairs Cupboard"),
    # Outbuildings
    StorageArea("conservatory-general", "General Storage", "Conservatory"),
    StorageArea("garden-shed-general", "General Storage", "Garden Shed"),
)

DEFAULT_ROOM = "Kitchen"


def rooms() -> list[str]:
    """Get room names, Kitchen first and the rest alphabetically."""
    unique = {area.room for area in STORAGE_AREAS}
    others = sorted(room for room in unique if room != DEFAULT_ROOM)
    return [DEFAULT_ROOM, *others] if DEFAULT_ROOM in unique else others


def areas_for_room(room: str) -> list[StorageArea]:
    return [area for area in STORAGE_AREAS if area.room == room]


def area_names() -> list[str]:
    return [area.name for area in STORAGE_AREAS]


def find_by_id(area_id: str) -> StorageArea | None:
    return next((area for area in STORAGE_AREAS if area.id == area_id), None)


def find_by_name(name: str) -> StorageArea | None:
    return next((area for area in STORAGE_AREAS if area.name == name), None)
