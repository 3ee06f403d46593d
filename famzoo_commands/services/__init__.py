"""Collaborators of the command core: ledger storage and message transport."""
