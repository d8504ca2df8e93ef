"""Core request pipeline: content lookup, rendering, page composition, caching."""
