from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'rooms_placed': 0,
        'side_rooms_attempted': 0,
        'side_rooms_skipped': 0,
        'side_rooms_rejected': 0,
        'triangulation_edges': 0,
        'tree_edges': 0,
        'extra_edges': 0,
        'paths_found': 0,
        'paths_failed': 0,
        'corridor_cells': 0,
        'stairs_cells': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
