"""Schema-side models: constraint sets, extension slots and the schema graph."""
