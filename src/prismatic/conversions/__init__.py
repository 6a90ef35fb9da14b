"""
Direct conversion edges.

Each edge is a pure function ``(payload, target_flags) -> payload`` between
two neighbouring spaces. Only edges into YUV or YCbCr read the flags.
"""
