"""
Weld inspection log backend: models, CSV import/export pipeline and REST routes.
"""
