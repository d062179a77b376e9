"""Point of Sale backend."""
