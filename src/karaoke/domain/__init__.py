"""Domain layer: entities, exceptions and ports. No framework imports in here."""
