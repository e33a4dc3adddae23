"""Resampling backends: CPU reference and batched GPU."""
