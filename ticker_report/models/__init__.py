"""
Report models module.

Computed metrics and their rendering into the outgoing report text.
"""
