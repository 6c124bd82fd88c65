"""
PNGSort — Sorter Registry
Every sorter is a function: (buffer, width, height, bytes_per_pixel, ...) -> bytes
"""

from effects.pixelsort import sort_tied, sort_untied

# Master registry: name -> (function, modes it serves, description)
SORTERS = {
    "tied": {
        "fn": sort_tied,
        "modes": ["TiedBySum", "TiedByOrder"],
        "description": "Move whole pixels, ranked by channel sum or by channel order",
    },
    "untied": {
        "fn": sort_untied,
        "modes": ["Untied"],
        "description": "Sort each selected channel on its own, breaking pixels apart",
    },
}


def get_sorter(name: str):
    """Get a sorter function by name.

    Raises ValueError if the sorter doesn't exist.
    """
    if name not in SORTERS:
        available = ", ".join(sorted(SORTERS.keys()))
        raise ValueError(f"Unknown sorter: {name}. Available: {available}")
    return SORTERS[name]["fn"]


def list_sorters() -> list[dict]:
    """List all available sorters with descriptions."""
    return [
        {"name": name, "modes": entry["modes"], "description": entry["description"]}
        for name, entry in SORTERS.items()
    ]
