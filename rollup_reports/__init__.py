"""Campaign rollup reports service.

Ingests ad-delivery CSV logs per campaign and serves App, Genre and Content
rollups (with VCR) over HTTP, as JSON or CSV downloads.
"""

__all__: list[str] = []
