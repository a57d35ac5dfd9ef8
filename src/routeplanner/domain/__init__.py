"""Domain layer: entities, matching, reconciliation, routing and import stages."""
