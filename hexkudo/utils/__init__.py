"""
Hexkudo - Utilities Package
Axial coordinate helpers, symmetry transforms and offset conversions.
"""
from .axial import axial_neighbors, hex_distance, normalize_translation, symmetry_transform
from .coords import evenr_to_axial, axial_to_evenr

__all__ = [
    'axial_neighbors', 'hex_distance', 'normalize_translation', 'symmetry_transform',
    'evenr_to_axial', 'axial_to_evenr',
]
