"""Collection-level operations over parsed transactions."""

from samvid.services.ledger import LedgerService, add_transactions, confirm, summarize

__all__ = ["LedgerService", "add_transactions", "confirm", "summarize"]
