"""
Enrich — resolve stored orders into display-ready orders.

    from orderweave.enrich import Enricher

    enricher = Enricher(store, settings.enrichment)
    order = await enricher.enrich(order)
    orders = await enricher.enrich_many(orders)
"""

from orderweave.enrich._pipeline import ResolutionPass, Enricher

__all__ = ("ResolutionPass", "Enricher")
