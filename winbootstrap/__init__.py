"""Windows machine bootstrap (Python-first, stage-driven).

Core design goals:
- Ordered, individually gated stages
- Config-file driven app catalogs with interactive refinement
- Validate before touching the machine
- Package-manager failures stop the run; network failures do not
- One transcript per run
"""

__all__ = []
