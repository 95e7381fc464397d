"""
Price data handling module.

Validates raw fetch responses, reshapes them into ordered closing-price
series, and defines the immutable data model shared by the pipeline.
"""
