"""Account-to-account transfer service with ledger, commissions and summaries."""

__version__ = "1.0.0"
