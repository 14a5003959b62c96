'Dimensional algebra and derived unit resolution for QUDT style units'

__version__ = version = '1.0'

__all__ = [
    'assignment',
    'derived',
    'dimensionvector',
    'factor',
    'quantityvalue',
    'registry',
    'testing',
    'unit',
    'vocab',
    'warnings',
]
