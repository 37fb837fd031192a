"""Jenkins client, URL building, error classification and text formatting."""
