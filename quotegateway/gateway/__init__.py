"""
Upstream quote API gateway.
"""

from .alpha_vantage import QuoteGateway

__all__ = ["QuoteGateway"]
