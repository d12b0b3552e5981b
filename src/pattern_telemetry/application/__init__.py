"""Application layer - analytics and crash reporting services."""
