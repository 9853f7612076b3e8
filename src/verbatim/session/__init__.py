"""Session review state: word lifecycle, error ledger and word building."""
