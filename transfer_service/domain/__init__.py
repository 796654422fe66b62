"""Domain modules: accounts, the transaction ledger and shared abstractions."""
