"""Domain layer - event and crash report models, exceptions and ports."""
