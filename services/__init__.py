"""Service layer for talking to the external valuation API."""
