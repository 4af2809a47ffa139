"""pygame front-end for Falling Blocks."""
