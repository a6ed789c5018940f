"""Domain layer: task lifecycle, authorization and scrum notes.

No I/O happens here; aggregates return Ok/Err results.
"""
