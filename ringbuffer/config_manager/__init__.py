"""Configuration for ring buffers: model, resolution and factory."""
