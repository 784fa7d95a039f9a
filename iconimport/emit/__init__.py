"""Platform emitters. Each module registers its target type on import."""
