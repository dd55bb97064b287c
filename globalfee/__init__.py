"""Global minimum fee parameters, genesis handling, an in-memory store, queries and fee checks."""

__version__ = "0.1.0"