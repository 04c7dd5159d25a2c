"""Application layer: DTOs, repository ports, normalization, and search use cases."""
