"""Record storage layer.

This module owns parsed record sets and renders them for output.
It powers every sort and merge-join stage of the pipeline.
"""
