"""Application layer: ports, the ledger sync engine and use cases."""
