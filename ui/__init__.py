"""Terminal output and out descriptions."""
