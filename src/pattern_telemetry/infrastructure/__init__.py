"""Infrastructure layer - strategies, observers, handlers and backends."""
