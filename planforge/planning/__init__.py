# planforge/planning/__init__.py
"""Planning intelligence: research, derivation stages, assembly and quality scoring."""
