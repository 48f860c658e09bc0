"""Runtime: REST transport, ordering and pagination."""
