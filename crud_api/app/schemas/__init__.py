"""
Pydantic schema definitions for API payloads.

Schemas describe the JSON representation only (camelCase keys, the
response envelope, pagination metadata).  Domain records live in
``models`` so that validation rules stay independent of the wire
format.
"""
