"""Infrastructure layer: value sources and record type loading.

This layer depends on stdlib only. It never imports from services,
commands, or output.
"""
