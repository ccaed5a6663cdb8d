"""Software asset management ledger: license pools, allocations and imports."""

__version__ = "0.1.0"
