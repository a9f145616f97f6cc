"""EventHub storefront core: cart persistence, reconciliation and checkout."""

__version__ = "0.1.0"
