"""Framework integrations for tabula-filtering."""
