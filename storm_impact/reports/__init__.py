"""Report generators (Excel + JSON)."""
