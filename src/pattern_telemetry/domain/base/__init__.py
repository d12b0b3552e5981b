"""Domain base - ports describing what the pipeline needs from the outside."""
