"""Front ends translating external calls into entity service calls."""
